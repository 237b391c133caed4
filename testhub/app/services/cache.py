"""
Shared cache port.

The cache is an optimization only: writes invalidate keys instead of
updating them, failures degrade to misses, and access decisions never read
from it.
"""

from abc import ABC, abstractmethod
from typing import Any, List, Optional


class CacheKeys:
    @staticmethod
    def project(project_id: str) -> str:
        return f"project:{project_id}"

    @staticmethod
    def projects(user_id: str) -> str:
        return f"projects:user:{user_id}"

    @staticmethod
    def team_status(team_id: str) -> str:
        return f"team:status:{team_id}"


class CacheTTL:
    PROJECT = 300
    PROJECTS = 300
    TEAM_STATUS = 60


class ICache(ABC):
    @abstractmethod
    async def get(self, key: str) -> Optional[Any]:
        """Return the cached JSON-compatible value or None"""
        pass

    @abstractmethod
    async def set(self, key: str, value: Any, ttl: Optional[int] = None) -> bool:
        """Store a JSON-compatible value"""
        pass

    @abstractmethod
    async def delete(self, *keys: str) -> bool:
        """Invalidate keys"""
        pass


async def project_list_keys(uow, user_id: str, team_id: Optional[str]) -> List[str]:
    """
    Project-list keys affected when a project of ``team_id`` changes or a
    user moves in or out of that team.
    """
    keys = [CacheKeys.projects(user_id)]
    if team_id is not None:
        members = await uow.users.list_by_team_id(team_id)
        keys.extend(CacheKeys.projects(member.id) for member in members)
    return list(dict.fromkeys(keys))

from abc import ABC, abstractmethod
from typing import Optional

from testhub.domain.entities import Team


class ITeamRepository(ABC):
    """Team repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, team_id: str) -> Optional[Team]:
        """Get team by ID"""
        pass

    @abstractmethod
    async def get_by_id_for_update(self, team_id: str) -> Optional[Team]:
        """Get team by ID and lock its row until the transaction ends"""
        pass

    @abstractmethod
    async def create(self, team: Team) -> Team:
        """
        Insert a new team.

        Raises DuplicateKeyError on an id collision.
        """
        pass

    @abstractmethod
    async def update(self, team: Team) -> Team:
        """Update existing team"""
        pass

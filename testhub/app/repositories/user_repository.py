from abc import ABC, abstractmethod
from typing import List, Optional

from testhub.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_id_for_update(self, user_id: str) -> Optional[User]:
        """Get user by ID, locking the row until the transaction ends"""
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get user by email address"""
        pass

    @abstractmethod
    async def list_by_team_id(self, team_id: str) -> List[User]:
        """Get all current members of a team"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """
        Insert a new user.

        Raises DuplicateKeyError on a unique-constraint violation (id or email).
        """
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

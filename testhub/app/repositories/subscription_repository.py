from abc import ABC, abstractmethod
from typing import Optional

from testhub.domain.entities import Subscription


class ISubscriptionRepository(ABC):
    """Subscription repository interface - application layer"""

    @abstractmethod
    async def get_by_team_id(self, team_id: str) -> Optional[Subscription]:
        """Get the subscription of a team"""
        pass

    @abstractmethod
    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        pass

    @abstractmethod
    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        pass

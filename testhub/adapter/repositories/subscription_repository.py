from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from testhub.app.repositories.subscription_repository import ISubscriptionRepository
from testhub.domain.base import utcnow
from testhub.domain.entities import Subscription


class SubscriptionRepository(ISubscriptionRepository):
    """Subscription repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_team_id(self, team_id: str) -> Optional[Subscription]:
        """Get the subscription of a team"""
        stmt = (
            select(Subscription)
            .where(Subscription.team_id == team_id)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, subscription: Subscription) -> Subscription:
        """Create a new subscription"""
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

    async def update(self, subscription: Subscription) -> Subscription:
        """Update existing subscription"""
        subscription.updated_at = utcnow()
        self.session.add(subscription)
        await self.session.flush()
        await self.session.refresh(subscription)
        return subscription

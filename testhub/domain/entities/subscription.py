"""
Subscription Entity

Purchased seat capacity for one team.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import SubscriptionStatus


class Subscription(SQLModel, table=True):
    """
    Subscription entity.

    Business Rules:
    - One subscription per team
    - Created on checkout completion, updated on seat or status change
    - seats >= 1
    """

    __tablename__ = "subscriptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    team_id: str = Field(foreign_key="teams.id", unique=True, index=True)
    owner_id: Optional[str] = Field(default=None, foreign_key="users.id")

    stripe_customer_id: Optional[str] = Field(default=None, max_length=255)
    stripe_subscription_id: Optional[str] = Field(
        default=None, unique=True, index=True, max_length=255
    )
    stripe_price_id: Optional[str] = Field(default=None, max_length=255)

    status: SubscriptionStatus = Field(default=SubscriptionStatus.INCOMPLETE)
    seats: int = Field(default=1, ge=1)
    cancel_at_period_end: bool = Field(default=False)
    current_period_end: Optional[datetime] = Field(
        default=None, sa_column=Column(DateTime)
    )

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from testhub.domain.entities import SubscriptionStatus


class SyncSubscriptionCommand(BaseModel):
    """Subscription state as reported by the billing system"""

    team_id: str
    status: SubscriptionStatus
    seats: int
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_price_id: Optional[str] = None
    cancel_at_period_end: bool = False
    current_period_end: Optional[datetime] = None


class SyncSubscriptionResponse(BaseModel):
    team_id: str
    status: str
    seats: int
    member_count: int
    over_seat_limit: bool

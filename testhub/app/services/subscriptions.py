"""Subscription status helpers (no I/O)."""

from typing import Optional

from testhub.domain.entities import Subscription, SubscriptionStatus

CURRENT_STATUSES = frozenset({SubscriptionStatus.ACTIVE, SubscriptionStatus.PAST_DUE})

PAYMENT_REQUIRED_STATUSES = frozenset(
    {
        SubscriptionStatus.CANCELED,
        SubscriptionStatus.UNPAID,
        SubscriptionStatus.INCOMPLETE,
        SubscriptionStatus.INCOMPLETE_EXPIRED,
    }
)


def is_subscription_current(subscription: Optional[Subscription]) -> bool:
    """ACTIVE gives full access, PAST_DUE is a grace period."""
    if subscription is None:
        return False
    return subscription.status in CURRENT_STATUSES


def requires_payment(subscription: Optional[Subscription]) -> bool:
    if subscription is None:
        return False
    return subscription.status in PAYMENT_REQUIRED_STATUSES

"""
Billing Use Cases
"""

from .dtos import SyncSubscriptionCommand, SyncSubscriptionResponse
from .sync_subscription_use_case import SyncSubscriptionUseCase

__all__ = [
    "SyncSubscriptionUseCase",
    "SyncSubscriptionCommand",
    "SyncSubscriptionResponse",
]

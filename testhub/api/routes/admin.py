"""
Admin API Routes - System Administration Endpoints

These endpoints are for internal service integrations (the billing system).
Authentication is via Admin API Key, not user JWTs.
"""

from datetime import datetime
from typing import Optional

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from testhub.api.error import ClientError, ServerError
from testhub.api.utils.admin_auth import verify_admin_api_key
from testhub.app.services.cache import ICache
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.billing import (
    SyncSubscriptionCommand,
    SyncSubscriptionResponse,
    SyncSubscriptionUseCase,
)
from testhub.depends import get_cache, get_unit_of_work
from testhub.domain.entities import SubscriptionStatus

router = APIRouter(prefix="/admin", tags=["Admin"])


class SyncSubscriptionRequest(BaseModel):
    team_id: str
    status: SubscriptionStatus
    seats: int = Field(..., description="Purchased seats")
    stripe_customer_id: Optional[str] = None
    stripe_subscription_id: Optional[str] = None
    stripe_price_id: Optional[str] = None
    cancel_at_period_end: bool = False
    current_period_end: Optional[datetime] = None


@router.post(
    "/subscriptions/sync",
    status_code=status.HTTP_200_OK,
    response_model=SyncSubscriptionResponse,
    dependencies=[Depends(verify_admin_api_key)],
)
async def sync_subscription(
    request: SyncSubscriptionRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Sync Subscription

    Billing system endpoint called on checkout completion, seat changes and
    status transitions. Recomputes the team's seat-limit flag.

    Requires: X-Admin-API-Key header

    Raises:
        - 400 Bad Request: INVALID_SEATS
        - 401 Unauthorized: Missing or invalid admin API key
        - 404 Not Found: TEAM_NOT_FOUND
    """
    command = SyncSubscriptionCommand(**request.model_dump())

    use_case = SyncSubscriptionUseCase(uow, cache)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_SEATS":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TEAM_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value

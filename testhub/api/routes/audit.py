"""
Audit API Routes

Handles team audit event retrieval.
"""

from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query, status
from pydantic import BaseModel

from testhub.api.error import ClientError, ServerError
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.audit import GetTeamAuditEventsUseCase
from testhub.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/teams", tags=["Audit"])


class AuditEventResponse(BaseModel):
    """Single audit event in response"""

    action: str
    user_email: Optional[str]
    timestamp: str
    metadata: Dict[str, Any]


class AuditEventsResponse(BaseModel):
    """GET /teams/{team_id}/audit-events response payload"""

    events: List[AuditEventResponse]
    next_cursor: Optional[str]


@router.get(
    "/{team_id}/audit-events",
    status_code=status.HTTP_200_OK,
    response_model=AuditEventsResponse,
)
async def get_team_audit_events(
    team_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Team Audit Events

    Returns team administration events. Only accessible by OWNER and ADMIN.

    Query Parameters:
        - limit: Maximum number of events to return (1-100, default 50)
        - cursor: Pagination cursor for fetching next page

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 403 Forbidden: INSUFFICIENT_ROLE, NOT_A_MEMBER
        - 500 Internal Server Error: Server error
    """
    use_case = GetTeamAuditEventsUseCase(uow)
    result = await use_case.execute(
        user_id=current_user["user_id"],
        team_id=team_id,
        limit=limit,
        cursor=cursor,
    )

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("INSUFFICIENT_ROLE", "NOT_A_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value

from typing import List, Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field

from config import ApplicationConfig
from testhub.api.error import ClientError, ServerError
from testhub.api.utils.rate_limit import enforce_rate_limit
from testhub.app.services.cache import ICache
from testhub.app.services.rate_limiter import RateLimiter
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.invitations import (
    CancelInvitationResponse,
    CancelInvitationUseCase,
    InvitationListResponse,
    InviteMemberCommand,
    InviteMemberResponse,
    InviteMemberUseCase,
    ListInvitationsUseCase,
)
from testhub.app.use_cases.teams import (
    CreateTeamCommand,
    CreateTeamResponse,
    CreateTeamUseCase,
    GetTeamStatusUseCase,
    LeaveTeamResponse,
    LeaveTeamUseCase,
    ResolveSeatLimitCommand,
    ResolveSeatLimitResponse,
    ResolveSeatLimitUseCase,
    TeamStatusResponse,
    UpdateSeatsCommand,
    UpdateSeatsResponse,
    UpdateSeatsUseCase,
)
from testhub.depends import get_cache, get_current_user, get_rate_limiter, get_unit_of_work
from testhub.domain.entities import UserRole

router = APIRouter(prefix="/teams", tags=["Teams"])


class CreateTeamRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255, description="Team name")
    description: Optional[str] = Field(None, max_length=1000)


class InviteMemberRequest(BaseModel):
    """
    Invite member HTTP request payload

    Validates incoming request for inviting a user to a team.
    """

    email: EmailStr = Field(..., description="Email address to invite")
    role: UserRole = Field(UserRole.TESTER, description="Role granted on acceptance")


class UpdateSeatsRequest(BaseModel):
    seats: int = Field(..., description="New purchased seat count")


class ResolveSeatLimitRequest(BaseModel):
    member_ids: List[str] = Field(..., description="Exact list of member IDs to remove")


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateTeamResponse)
async def create_team(
    request: CreateTeamRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Create Team

    The caller becomes the team's ADMIN.

    Raises:
        - 400 Bad Request: ALREADY_IN_TEAM
        - 401 Unauthorized: Invalid or expired JWT
        - 500 Internal Server Error: ID_GENERATION_FAILED
    """
    command = CreateTeamCommand(name=request.name, description=request.description)

    use_case = CreateTeamUseCase(uow, cache, max_id_attempts=ApplicationConfig.MAX_ID_ATTEMPTS)
    result = await use_case.execute(current_user["user_id"], command)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "ALREADY_IN_TEAM":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        raise ServerError(error)

    return result.value


@router.post("/leave", status_code=status.HTTP_200_OK, response_model=LeaveTeamResponse)
async def leave_team(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Leave Team

    Raises:
        - 400 Bad Request: NOT_IN_TEAM
        - 404 Not Found: TEAM_NOT_FOUND
    """
    use_case = LeaveTeamUseCase(uow, cache)
    result = await use_case.execute(current_user["user_id"])

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "NOT_IN_TEAM":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "TEAM_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.get(
    "/{team_id}/status", status_code=status.HTTP_200_OK, response_model=TeamStatusResponse
)
async def get_team_status(
    team_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Team Seat Status

    Members, seats, over-limit flag and the number of members that must be
    removed to get back under the limit.

    Raises:
        - 403 Forbidden: NOT_A_MEMBER
        - 404 Not Found: TEAM_NOT_FOUND
    """
    use_case = GetTeamStatusUseCase(uow, cache)
    result = await use_case.execute(current_user["user_id"], team_id)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "NOT_A_MEMBER":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TEAM_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/{team_id}/invite",
    status_code=status.HTTP_201_CREATED,
    response_model=InviteMemberResponse,
)
async def invite_member(
    team_id: str,
    request: InviteMemberRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Invite Member

    Requires OWNER, ADMIN or MANAGER. Limited per team and caller (INVITE_RATE_LIMIT).

    Raises:
        - 400 Bad Request: NO_SEATS_AVAILABLE, INVALID_ROLE
        - 402 Payment Required: SUBSCRIPTION_INACTIVE
        - 403 Forbidden: INSUFFICIENT_ROLE, NOT_A_MEMBER, TEAM_OVER_SEAT_LIMIT
        - 404 Not Found: TEAM_NOT_FOUND
        - 409 Conflict: INVITE_ALREADY_EXISTS, ALREADY_MEMBER
        - 429 Too Many Requests: RATE_LIMITED
    """
    await enforce_rate_limit(
        limiter,
        f"invite:{team_id}:{current_user['user_id']}",
        ApplicationConfig.INVITE_RATE_LIMIT,
    )

    command = InviteMemberCommand(email=request.email, role=request.role)

    use_case = InviteMemberUseCase(uow, ttl_days=ApplicationConfig.INVITATION_TTL_DAYS)
    result = await use_case.execute(current_user["user_id"], team_id, command)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("NO_SEATS_AVAILABLE", "INVALID_ROLE"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "SUBSCRIPTION_INACTIVE":
            raise ClientError(error, status_code=status.HTTP_402_PAYMENT_REQUIRED)
        elif error.code in ("INSUFFICIENT_ROLE", "NOT_A_MEMBER", "TEAM_OVER_SEAT_LIMIT"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TEAM_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code in ("INVITE_ALREADY_EXISTS", "ALREADY_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.get(
    "/{team_id}/invitations",
    status_code=status.HTTP_200_OK,
    response_model=InvitationListResponse,
)
async def list_invitations(
    team_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Pending invitations of the team (OWNER, ADMIN or MANAGER)"""
    use_case = ListInvitationsUseCase(uow)
    result = await use_case.execute(current_user["user_id"], team_id)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("INSUFFICIENT_ROLE", "NOT_A_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        raise ServerError(error)

    return result.value


@router.delete(
    "/{team_id}/invitations/{invitation_id}",
    status_code=status.HTTP_200_OK,
    response_model=CancelInvitationResponse,
)
async def cancel_invitation(
    team_id: str,
    invitation_id: UUID,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Cancel Invitation

    Limited per caller (INVITATION_CANCEL_RATE_LIMIT).

    Raises:
        - 400 Bad Request: INVITATION_NOT_PENDING
        - 403 Forbidden: INSUFFICIENT_ROLE, NOT_A_MEMBER
        - 404 Not Found: INVITATION_NOT_FOUND
        - 429 Too Many Requests: RATE_LIMITED
    """
    user_id = current_user["user_id"]
    await enforce_rate_limit(
        limiter, f"invitation-cancel:{user_id}", ApplicationConfig.INVITATION_CANCEL_RATE_LIMIT
    )

    use_case = CancelInvitationUseCase(uow)
    result = await use_case.execute(user_id, team_id, invitation_id)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "INVITATION_NOT_PENDING":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INSUFFICIENT_ROLE", "NOT_A_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.put(
    "/{team_id}/seats", status_code=status.HTTP_200_OK, response_model=UpdateSeatsResponse
)
async def update_seats(
    team_id: str,
    request: UpdateSeatsRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Update Seats

    Requires OWNER or ADMIN.

    Raises:
        - 400 Bad Request: INVALID_SEATS, SEATS_BELOW_MEMBERS, NO_ACTIVE_SUBSCRIPTION
        - 403 Forbidden: INSUFFICIENT_ROLE, NOT_A_MEMBER
        - 404 Not Found: TEAM_NOT_FOUND
    """
    use_case = UpdateSeatsUseCase(uow, cache)
    result = await use_case.execute(
        current_user["user_id"], team_id, UpdateSeatsCommand(seats=request.seats)
    )

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("INVALID_SEATS", "SEATS_BELOW_MEMBERS", "NO_ACTIVE_SUBSCRIPTION"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INSUFFICIENT_ROLE", "NOT_A_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TEAM_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/{team_id}/resolve-seat-limit",
    status_code=status.HTTP_200_OK,
    response_model=ResolveSeatLimitResponse,
)
async def resolve_seat_limit(
    team_id: str,
    request: ResolveSeatLimitRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
    limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    Resolve Seat Limit

    Removes exactly (members - seats) members from an over-limit team.
    Requires ADMIN or MANAGER. Limited per team and caller (SEAT_RESOLUTION_RATE_LIMIT).

    Raises:
        - 400 Bad Request: REMOVAL_COUNT_MISMATCH (details.required_removals),
                           CANNOT_REMOVE_SELF, INVALID_MEMBER_IDS,
                           NOT_TEAM_MEMBERS, TEAM_NOT_OVER_LIMIT,
                           NO_ACTIVE_SUBSCRIPTION
        - 403 Forbidden: INSUFFICIENT_ROLE, NOT_A_MEMBER
        - 404 Not Found: TEAM_NOT_FOUND
        - 429 Too Many Requests: RATE_LIMITED
    """
    await enforce_rate_limit(
        limiter,
        f"seat-resolution:{team_id}:{current_user['user_id']}",
        ApplicationConfig.SEAT_RESOLUTION_RATE_LIMIT,
    )

    use_case = ResolveSeatLimitUseCase(
        uow, cache, max_removals=ApplicationConfig.MAX_FORCED_REMOVALS
    )
    result = await use_case.execute(
        current_user["user_id"], team_id, ResolveSeatLimitCommand(member_ids=request.member_ids)
    )

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in (
            "REMOVAL_COUNT_MISMATCH",
            "CANNOT_REMOVE_SELF",
            "INVALID_MEMBER_IDS",
            "NOT_TEAM_MEMBERS",
            "TEAM_NOT_OVER_LIMIT",
            "NO_ACTIVE_SUBSCRIPTION",
        ):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code in ("INSUFFICIENT_ROLE", "NOT_A_MEMBER"):
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TEAM_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value

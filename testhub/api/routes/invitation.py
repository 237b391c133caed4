from fastapi import APIRouter, Depends, status

from testhub.api.error import ClientError, ServerError
from testhub.app.services.cache import ICache
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.invitations import (
    AcceptInvitationResponse,
    AcceptInvitationUseCase,
    DeclineInvitationResponse,
    DeclineInvitationUseCase,
)
from testhub.depends import get_cache, get_current_user, get_unit_of_work

router = APIRouter(prefix="/invitations", tags=["Invitations"])


@router.post(
    "/{token}/accept",
    status_code=status.HTTP_200_OK,
    response_model=AcceptInvitationResponse,
)
async def accept_invitation(
    token: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Accept Invitation

    Raises:
        - 400 Bad Request: INVITATION_NOT_PENDING, ALREADY_IN_TEAM, NO_SEATS_AVAILABLE
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: INVITATION_NOT_FOUND, TEAM_NOT_FOUND
        - 410 Gone: INVITATION_EXPIRED
    """
    use_case = AcceptInvitationUseCase(uow, cache)
    result = await use_case.execute(current_user["user_id"], token)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code in ("INVITATION_NOT_PENDING", "ALREADY_IN_TEAM", "NO_SEATS_AVAILABLE"):
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "EMAIL_MISMATCH":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code in ("INVITATION_NOT_FOUND", "TEAM_NOT_FOUND"):
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        elif error.code == "INVITATION_EXPIRED":
            raise ClientError(error, status_code=status.HTTP_410_GONE)
        raise ServerError(error)

    return result.value


@router.post(
    "/{token}/decline",
    status_code=status.HTTP_200_OK,
    response_model=DeclineInvitationResponse,
)
async def decline_invitation(
    token: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Decline Invitation

    Raises:
        - 400 Bad Request: INVITATION_NOT_PENDING
        - 403 Forbidden: EMAIL_MISMATCH
        - 404 Not Found: INVITATION_NOT_FOUND
    """
    use_case = DeclineInvitationUseCase(uow)
    result = await use_case.execute(current_user["user_id"], token)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "INVITATION_NOT_PENDING":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "EMAIL_MISMATCH":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "INVITATION_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, EmailStr, Field
from typing import Optional

from config import ApplicationConfig
from testhub.api.error import ClientError, ServerError
from testhub.api.utils.rate_limit import enforce_rate_limit
from testhub.app.services.rate_limiter import RateLimiter
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.auth import (
    LoginResponse,
    LoginUseCase,
    SignupCommand,
    SignupResponse,
    SignupUseCase,
)
from testhub.depends import get_rate_limiter, get_unit_of_work

router = APIRouter(prefix="/auth", tags=["Authentication"])


class SignupRequest(BaseModel):
    """
    Signup HTTP request payload

    Validates incoming HTTP request before converting to SignupCommand.
    """

    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="User password (min 8 chars)")
    name: Optional[str] = Field(None, max_length=255, description="Display name")


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


@router.post(
    "/signup", status_code=status.HTTP_201_CREATED, response_model=SignupResponse
)
async def signup(request: SignupRequest, uow: UnitOfWork = Depends(get_unit_of_work)):
    """
    User Signup

    Creates a user without a team and returns a JWT access token.

    Raises:
        - 409 Conflict: EMAIL_ALREADY_EXISTS
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 500 Internal Server Error: ID_GENERATION_FAILED
    """
    command = SignupCommand(email=request.email, password=request.password, name=request.name)

    use_case = SignupUseCase(uow, max_id_attempts=ApplicationConfig.MAX_ID_ATTEMPTS)
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code == "EMAIL_ALREADY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        raise ServerError(error)

    return result.value


@router.post("/login", status_code=status.HTTP_200_OK, response_model=LoginResponse)
async def login(
    request: LoginRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    limiter: RateLimiter = Depends(get_rate_limiter),
):
    """
    User Login

    Attempts are limited per e-mail address (LOGIN_RATE_LIMIT), counted
    before the password is checked.

    Raises:
        - 401 Unauthorized: INVALID_CREDENTIALS
        - 429 Too Many Requests: RATE_LIMITED
    """
    await enforce_rate_limit(
        limiter, f"login:{request.email.lower()}", ApplicationConfig.LOGIN_RATE_LIMIT
    )

    use_case = LoginUseCase(uow)
    result = await use_case.execute(request.email, request.password)

    if result.is_err():
        error = result.error
        if error.code == "INVALID_CREDENTIALS":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        raise ServerError(error)

    return result.value

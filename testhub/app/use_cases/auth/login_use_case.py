"""
Login Use Case

Handles user authentication and returns a JWT access token.
"""

import bcrypt

from testhub.api.utils.jwt import generate_jwt
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Error, Result, Return

from .dtos import LoginResponse, UserInfo

# Compared against when the e-mail is unknown so both paths cost one bcrypt check
_DUMMY_HASH = bcrypt.hashpw(b"dummy_password", bcrypt.gensalt(12))


class LoginUseCase:
    """
    Use case for user login and JWT issuance.

    Business Rules:
    - Constant-time password comparison to prevent timing attacks
    - Unknown e-mail and wrong password are indistinguishable
    - Attempt throttling happens before this use case runs
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, email: str, password: str) -> Result[LoginResponse]:
        """
        Execute login use case.

        Args:
            email: User email
            password: Plain text password

        Returns:
            Result with LoginResponse, or Error(INVALID_CREDENTIALS)
        """
        async with self.uow:
            user = await self.uow.users.get_by_email(email.lower())

            if user is None:
                bcrypt.checkpw(password.encode(), _DUMMY_HASH)
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            if not bcrypt.checkpw(password.encode(), user.password_hash.encode()):
                return Return.err(Error("INVALID_CREDENTIALS", "Invalid email or password"))

            return Return.ok(
                LoginResponse(
                    user=UserInfo(
                        id=user.id,
                        email=user.email,
                        name=user.name,
                        role=user.role.value,
                        team_id=user.team_id,
                    ),
                    access_token=generate_jwt(user.id),
                )
            )

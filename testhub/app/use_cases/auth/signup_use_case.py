import logging

import bcrypt

from testhub.api.utils.jwt import generate_jwt
from testhub.app.repositories.errors import DuplicateKeyError
from testhub.app.services.unique_id import DEFAULT_MAX_ATTEMPTS, create_with_unique_id
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import DEFAULT_USER_ROLE, User
from testhub.domain.ids import generate_user_id
from testhub.libs.result import Error, Result, Return

from .dtos import SignupCommand, SignupResponse, UserInfo

logger = logging.getLogger(__name__)


class SignupUseCase:
    """
    Signup Use Case

    Business Logic:
    1. Reject an e-mail that is already registered
    2. Hash password with bcrypt cost factor 12
    3. Create the user without a team and with the default role
    4. Return an access token carrying only the user id
    """

    def __init__(self, uow: UnitOfWork, max_id_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.uow = uow
        self.max_id_attempts = max_id_attempts

    async def execute(self, command: SignupCommand) -> Result[SignupResponse]:
        email = command.email.lower()

        async with self.uow:
            existing_user = await self.uow.users.get_by_email(email)
            if existing_user:
                return Return.err(Error("EMAIL_ALREADY_EXISTS", "Email already registered"))

            password_hash = bcrypt.hashpw(
                command.password.encode("utf-8"), bcrypt.gensalt(12)
            ).decode("utf-8")

            async def create(user_id: str) -> User:
                return await self.uow.users.create(
                    User(
                        id=user_id,
                        email=email,
                        password_hash=password_hash,
                        name=command.name,
                        role=DEFAULT_USER_ROLE,
                    )
                )

            try:
                created = await create_with_unique_id(
                    create, generate_user_id, "user", self.max_id_attempts
                )
            except DuplicateKeyError as exc:
                # Lost a race against a concurrent signup with the same e-mail
                if exc.involves("email"):
                    return Return.err(
                        Error("EMAIL_ALREADY_EXISTS", "Email already registered")
                    )
                raise

            if created.is_err():
                return created

            user = created.value
            await self.uow.commit()
            logger.info(f"User {user.id} signed up")

            return Return.ok(
                SignupResponse(
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

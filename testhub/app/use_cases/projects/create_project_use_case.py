import logging
from typing import List

from testhub.app.repositories.errors import DuplicateKeyError
from testhub.app.services.authorization import load_principal
from testhub.app.services.cache import ICache, project_list_keys
from testhub.app.services.unique_id import DEFAULT_MAX_ATTEMPTS, create_with_unique_id
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import Project
from testhub.domain.ids import generate_project_id
from testhub.libs.result import Error, Result, Return

from .dtos import CreateProjectCommand, ProjectInfo, project_info

logger = logging.getLogger(__name__)


class CreateProjectUseCase:
    """
    Create a project owned by the caller and shared with the caller's
    current team.

    Business Rules:
    - Project id is generated; an id collision is retried with a fresh id
    - A duplicate project key is a conflict and is never retried
    - Project lists of the creator and of every team member are invalidated
    """

    def __init__(
        self,
        uow: UnitOfWork,
        cache: ICache,
        max_id_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.uow = uow
        self.cache = cache
        self.max_id_attempts = max_id_attempts

    async def execute(self, user_id: str, command: CreateProjectCommand) -> Result[ProjectInfo]:
        invalidate: List[str] = []

        async with self.uow:
            principal = await load_principal(self.uow, user_id)
            if principal.is_err():
                return principal
            user = principal.value

            async def create(project_id: str) -> Project:
                return await self.uow.projects.create(
                    Project(
                        id=project_id,
                        name=command.name,
                        description=command.description,
                        key=command.key.upper(),
                        created_by=user.id,
                        team_id=user.team_id,
                    )
                )

            try:
                created = await create_with_unique_id(
                    create, generate_project_id, "project", self.max_id_attempts
                )
            except DuplicateKeyError as exc:
                if exc.involves("key"):
                    return Return.err(
                        Error(
                            "PROJECT_KEY_EXISTS",
                            f"A project with key '{command.key.upper()}' already exists",
                        )
                    )
                raise

            if created.is_err():
                return created

            project = created.value
            invalidate = await project_list_keys(self.uow, user.id, user.team_id)
            await self.uow.commit()
            response = project_info(project)

        logger.info(f"Project {project.id} created by {user_id}")
        await self.cache.delete(*invalidate)
        return Return.ok(response)

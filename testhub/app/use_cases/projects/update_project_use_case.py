import logging

from testhub.app.repositories.errors import DuplicateKeyError
from testhub.app.services.authorization import require_project_access
from testhub.app.services.cache import CacheKeys, ICache, project_list_keys
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.base import utcnow
from testhub.libs.result import Error, Result, Return

from .dtos import ProjectInfo, UpdateProjectCommand, project_info

logger = logging.getLogger(__name__)


class UpdateProjectUseCase:
    """
    Update a project the caller can access.

    Business Rules:
    - Only fields present in the command are changed
    - The key is stored upper-case; a taken key is a conflict
    - Owner and team never change
    - The project detail and every affected project list are invalidated
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(
        self, user_id: str, project_id: str, command: UpdateProjectCommand
    ) -> Result[ProjectInfo]:
        changes = command.model_fields_set

        async with self.uow:
            access = await require_project_access(self.uow, user_id, project_id)
            if access.is_err():
                return access
            project, _ = access.value

            if command.name is not None:
                project.name = command.name
            if command.key is not None:
                project.key = command.key.upper()
            if "description" in changes:
                project.description = command.description
            project.updated_at = utcnow()

            try:
                project = await self.uow.projects.update(project)
            except DuplicateKeyError as exc:
                if exc.involves("key"):
                    return Return.err(
                        Error(
                            "PROJECT_KEY_EXISTS",
                            f"A project with key '{command.key.upper()}' already exists",
                        )
                    )
                raise

            invalidate = [CacheKeys.project(project.id)]
            invalidate += await project_list_keys(self.uow, project.created_by, project.team_id)

            await self.uow.commit()
            response = project_info(project)

        logger.info(f"Project {project_id} updated by {user_id}: {sorted(changes)}")
        await self.cache.delete(*invalidate)
        return Return.ok(response)

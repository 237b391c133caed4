import logging

from testhub.app.services.authorization import require_project_access
from testhub.app.services.cache import CacheKeys, ICache, project_list_keys
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Error, Result, Return

from .dtos import DeleteProjectResponse

logger = logging.getLogger(__name__)


class DeleteProjectUseCase:
    """
    Delete a project with its runs, cases and results.

    A caller without access gets PROJECT_NOT_FOUND, so the existence of
    other teams' projects is not revealed.
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(self, user_id: str, project_id: str) -> Result[DeleteProjectResponse]:
        async with self.uow:
            access = await require_project_access(self.uow, user_id, project_id)
            if access.is_err():
                if access.error.code == "PROJECT_ACCESS_DENIED":
                    return Return.err(Error("PROJECT_NOT_FOUND", "Project not found"))
                return access
            project, _ = access.value

            invalidate = [CacheKeys.project(project.id)]
            invalidate += await project_list_keys(self.uow, project.created_by, project.team_id)

            await self.uow.projects.delete(project)
            await self.uow.commit()

        logger.info(f"Project {project_id} deleted by {user_id}")
        await self.cache.delete(*invalidate)
        return Return.ok(DeleteProjectResponse(status="deleted"))

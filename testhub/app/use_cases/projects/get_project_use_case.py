from testhub.app.services.authorization import require_project_access
from testhub.app.services.cache import CacheKeys, CacheTTL, ICache
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Result, Return

from .dtos import ProjectDetailResponse, project_info


class GetProjectUseCase:
    """
    Project detail.

    Access is always decided on the stored project and principal; only the
    detail payload is served from cache.
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(self, user_id: str, project_id: str) -> Result[ProjectDetailResponse]:
        async with self.uow:
            access = await require_project_access(self.uow, user_id, project_id)
            if access.is_err():
                return access
            project, _ = access.value

            key = CacheKeys.project(project.id)
            cached = await self.cache.get(key)
            if cached is not None:
                return Return.ok(ProjectDetailResponse(**cached))

            runs = await self.uow.test_runs.list_by_project(project.id)
            response = ProjectDetailResponse(
                project=project_info(project), test_run_count=len(runs)
            )

        await self.cache.set(key, response.model_dump(), CacheTTL.PROJECT)
        return Return.ok(response)

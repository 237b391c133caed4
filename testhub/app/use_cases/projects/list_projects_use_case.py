from testhub.app.services.authorization import load_principal
from testhub.app.services.cache import CacheKeys, CacheTTL, ICache
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Result, Return

from .dtos import ProjectListResponse, project_info


class ListProjectsUseCase:
    """
    Projects the caller may access: their own plus those of their current team.

    Read-through cached per user. An entry recorded for a different team than
    the caller's current one is ignored.
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(self, user_id: str) -> Result[ProjectListResponse]:
        async with self.uow:
            principal = await load_principal(self.uow, user_id)
            if principal.is_err():
                return principal
            user = principal.value

            key = CacheKeys.projects(user.id)
            cached = await self.cache.get(key)
            if cached is not None and cached.get("team_id") == user.team_id:
                return Return.ok(ProjectListResponse(projects=cached["projects"]))

            projects = await self.uow.projects.list_accessible(user.id, user.team_id)
            response = ProjectListResponse(projects=[project_info(p) for p in projects])

        await self.cache.set(
            key,
            {"team_id": user.team_id, "projects": response.model_dump()["projects"]},
            CacheTTL.PROJECTS,
        )
        return Return.ok(response)

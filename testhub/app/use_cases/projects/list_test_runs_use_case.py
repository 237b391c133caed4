from testhub.app.services.authorization import require_project_access
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Result, Return

from .dtos import RunListResponse, run_info


class ListTestRunsUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, project_id: str) -> Result[RunListResponse]:
        async with self.uow:
            access = await require_project_access(self.uow, user_id, project_id)
            if access.is_err():
                return access
            project, _ = access.value

            runs = await self.uow.test_runs.list_by_project(project.id)
            return Return.ok(RunListResponse(test_runs=[run_info(run) for run in runs]))

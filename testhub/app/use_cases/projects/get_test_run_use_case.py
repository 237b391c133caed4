from testhub.app.services.authorization import require_test_run_access
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Result, Return

from .dtos import RunInfo, run_info


class GetTestRunUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, run_id: str) -> Result[RunInfo]:
        async with self.uow:
            access = await require_test_run_access(self.uow, user_id, run_id)
            if access.is_err():
                return access
            run, _, _ = access.value
            return Return.ok(run_info(run))

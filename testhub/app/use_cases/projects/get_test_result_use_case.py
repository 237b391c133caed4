from testhub.app.services.authorization import require_test_result_access
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Result, Return

from .dtos import ResultInfo, result_info


class GetTestResultUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, result_id: str) -> Result[ResultInfo]:
        async with self.uow:
            access = await require_test_result_access(self.uow, user_id, result_id)
            if access.is_err():
                return access
            result, _, _ = access.value
            return Return.ok(result_info(result))

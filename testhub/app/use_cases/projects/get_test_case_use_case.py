from testhub.app.services.authorization import require_test_case_access
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Result, Return

from .dtos import CaseInfo, case_info


class GetTestCaseUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, case_id: str) -> Result[CaseInfo]:
        async with self.uow:
            access = await require_test_case_access(self.uow, user_id, case_id)
            if access.is_err():
                return access
            case, _, _ = access.value
            return Return.ok(case_info(case))

from testhub.app.services.authorization import require_test_case_access
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Result, Return

from .dtos import CaseInfo, UpdateTestCaseCommand, case_info


class UpdateTestCaseUseCase:
    """Edit a test case; access goes through the case's project"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, case_id: str, command: UpdateTestCaseCommand
    ) -> Result[CaseInfo]:
        async with self.uow:
            access = await require_test_case_access(self.uow, user_id, case_id)
            if access.is_err():
                return access
            case, _, _ = access.value

            if command.title is not None:
                case.title = command.title
            if command.priority is not None:
                case.priority = command.priority
            if "description" in command.model_fields_set:
                case.description = command.description

            case = await self.uow.test_cases.update(case)
            await self.uow.commit()
            return Return.ok(case_info(case))

from testhub.app.services.authorization import require_test_run_access
from testhub.app.services.unique_id import DEFAULT_MAX_ATTEMPTS, create_with_unique_id
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import TestResult
from testhub.domain.ids import generate_test_result_id
from testhub.libs.result import Error, Result, Return

from .dtos import CreateTestResultCommand, ResultInfo, result_info


class CreateTestResultUseCase:
    """
    Record the outcome of a test case in a run.

    The case must belong to the same project as the run.
    """

    def __init__(self, uow: UnitOfWork, max_id_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.uow = uow
        self.max_id_attempts = max_id_attempts

    async def execute(
        self, user_id: str, run_id: str, command: CreateTestResultCommand
    ) -> Result[ResultInfo]:
        async with self.uow:
            access = await require_test_run_access(self.uow, user_id, run_id)
            if access.is_err():
                return access
            run, project, user = access.value

            case = await self.uow.test_cases.get_by_id(command.test_case_id)
            if case is None or case.project_id != project.id:
                return Return.err(
                    Error(
                        "TEST_CASE_NOT_IN_PROJECT",
                        "Test case does not belong to this run's project",
                    )
                )

            async def create(result_id: str) -> TestResult:
                return await self.uow.test_results.create(
                    TestResult(
                        id=result_id,
                        test_run_id=run.id,
                        test_case_id=case.id,
                        status=command.status,
                        comment=command.comment,
                        executed_by=user.id,
                    )
                )

            created = await create_with_unique_id(
                create, generate_test_result_id, "test result", self.max_id_attempts
            )
            if created.is_err():
                return created

            await self.uow.commit()
            return Return.ok(result_info(created.value))

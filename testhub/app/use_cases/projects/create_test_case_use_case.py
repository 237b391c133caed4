from testhub.app.services.authorization import require_project_access
from testhub.app.services.unique_id import DEFAULT_MAX_ATTEMPTS, create_with_unique_id
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import TestCase
from testhub.domain.ids import generate_test_case_id
from testhub.libs.result import Result, Return

from .dtos import CaseInfo, CreateTestCaseCommand, case_info


class CreateTestCaseUseCase:
    """Add a test case to a project the caller can access"""

    def __init__(self, uow: UnitOfWork, max_id_attempts: int = DEFAULT_MAX_ATTEMPTS):
        self.uow = uow
        self.max_id_attempts = max_id_attempts

    async def execute(
        self, user_id: str, project_id: str, command: CreateTestCaseCommand
    ) -> Result[CaseInfo]:
        async with self.uow:
            access = await require_project_access(self.uow, user_id, project_id)
            if access.is_err():
                return access
            project, user = access.value

            async def create(case_id: str) -> TestCase:
                return await self.uow.test_cases.create(
                    TestCase(
                        id=case_id,
                        project_id=project.id,
                        title=command.title,
                        description=command.description,
                        priority=command.priority,
                        created_by=user.id,
                    )
                )

            created = await create_with_unique_id(
                create, generate_test_case_id, "test case", self.max_id_attempts
            )
            if created.is_err():
                return created

            await self.uow.commit()
            return Return.ok(case_info(created.value))

from testhub.app.services.authorization import require_project_access
from testhub.app.services.cache import CacheKeys, ICache
from testhub.app.services.unique_id import DEFAULT_MAX_ATTEMPTS, create_with_unique_id
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.base import utcnow
from testhub.domain.entities import TestRun
from testhub.domain.ids import generate_test_run_id
from testhub.libs.result import Result, Return

from .dtos import CreateTestRunCommand, RunInfo, run_info


class CreateTestRunUseCase:
    """Start a test run inside a project the caller can access"""

    def __init__(
        self,
        uow: UnitOfWork,
        cache: ICache,
        max_id_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.uow = uow
        self.cache = cache
        self.max_id_attempts = max_id_attempts

    async def execute(
        self, user_id: str, project_id: str, command: CreateTestRunCommand
    ) -> Result[RunInfo]:
        async with self.uow:
            access = await require_project_access(self.uow, user_id, project_id)
            if access.is_err():
                return access
            project, user = access.value

            async def create(run_id: str) -> TestRun:
                return await self.uow.test_runs.create(
                    TestRun(
                        id=run_id,
                        project_id=project.id,
                        name=command.name,
                        description=command.description,
                        created_by=user.id,
                        started_at=utcnow(),
                    )
                )

            created = await create_with_unique_id(
                create, generate_test_run_id, "test run", self.max_id_attempts
            )
            if created.is_err():
                return created

            await self.uow.commit()
            response = run_info(created.value)

        await self.cache.delete(CacheKeys.project(project_id))
        return Return.ok(response)

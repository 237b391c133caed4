from typing import List, Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from testhub.app.repositories.test_run_repository import ITestRunRepository
from testhub.domain.entities import TestRun

from .base import save


class TestRunRepository(ITestRunRepository):
    """Test run repository implementation using SQLModel"""

    __test__ = False

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, run_id: str) -> Optional[TestRun]:
        """Get test run by ID"""
        stmt = select(TestRun).where(TestRun.id == run_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_project(self, project_id: str) -> List[TestRun]:
        """Get test runs of a project, newest first"""
        stmt = (
            select(TestRun)
            .where(TestRun.project_id == project_id)
            .order_by(TestRun.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, run: TestRun) -> TestRun:
        """Insert a new run"""
        return await save(self.session, run, "test run")

from typing import List, Optional

from sqlalchemy import delete, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from testhub.app.repositories.project_repository import IProjectRepository
from testhub.domain.entities import Project, TestCase, TestResult, TestRun

from .base import save


class ProjectRepository(IProjectRepository):
    """Project repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, project_id: str) -> Optional[Project]:
        """Get project by ID"""
        stmt = select(Project).where(Project.id == project_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_accessible(
        self, user_id: str, team_id: Optional[str]
    ) -> List[Project]:
        """Projects created by the user or belonging to the given team"""
        condition = Project.created_by == user_id
        if team_id is not None:
            condition = or_(condition, Project.team_id == team_id)

        stmt = select(Project).where(condition).order_by(Project.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, project: Project) -> Project:
        """Insert a new project"""
        return await save(self.session, project, "project")

    async def update(self, project: Project) -> Project:
        """Update an existing project"""
        return await save(self.session, project, "project")

    async def delete(self, project: Project) -> None:
        """Delete a project with its runs, cases and results"""
        run_ids = select(TestRun.id).where(TestRun.project_id == project.id)
        await self.session.execute(
            delete(TestResult).where(TestResult.test_run_id.in_(run_ids))
        )
        await self.session.execute(delete(TestRun).where(TestRun.project_id == project.id))
        await self.session.execute(
            delete(TestCase).where(TestCase.project_id == project.id)
        )
        await self.session.delete(project)
        await self.session.flush()

from typing import Optional

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from testhub.app.repositories.team_repository import ITeamRepository
from testhub.domain.entities import Team

from .base import save


class TeamRepository(ITeamRepository):
    """Team repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, team_id: str) -> Optional[Team]:
        """Get team by ID"""
        stmt = select(Team).where(Team.id == team_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id_for_update(self, team_id: str) -> Optional[Team]:
        """
        Get team by ID with SELECT ... FOR UPDATE.

        Concurrent transactions touching the same team serialize on this
        row lock. SQLite ignores FOR UPDATE; there every transaction opens
        with BEGIN IMMEDIATE (see testhub.depends.enable_sqlite_savepoints).
        """
        stmt = (
            select(Team)
            .where(Team.id == team_id)
            .with_for_update()
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create(self, team: Team) -> Team:
        """Insert a new team"""
        return await save(self.session, team, "team")

    async def update(self, team: Team) -> Team:
        """Update existing team"""
        self.session.add(team)
        await self.session.flush()
        await self.session.refresh(team)
        return team

from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from testhub.app.repositories.invitation_repository import IInvitationRepository
from testhub.domain.entities import InvitationStatus, TeamInvitation


class InvitationRepository(IInvitationRepository):
    """Team invitation repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invitation_id: UUID) -> Optional[TeamInvitation]:
        """Get invitation by ID"""
        stmt = select(TeamInvitation).where(TeamInvitation.id == invitation_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_token(self, token: str) -> Optional[TeamInvitation]:
        """Get invitation by token"""
        stmt = (
            select(TeamInvitation)
            .where(TeamInvitation.token == token)
            .execution_options(populate_existing=True)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_pending_by_team_and_email(
        self, team_id: str, email: str
    ) -> Optional[TeamInvitation]:
        """Get pending invitation by team and email"""
        stmt = select(TeamInvitation).where(
            TeamInvitation.team_id == team_id,
            TeamInvitation.email == email.lower(),
            TeamInvitation.status == InvitationStatus.PENDING,
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_pending_by_team(self, team_id: str) -> List[TeamInvitation]:
        """Get pending invitations of a team, newest first"""
        stmt = (
            select(TeamInvitation)
            .where(
                TeamInvitation.team_id == team_id,
                TeamInvitation.status == InvitationStatus.PENDING,
            )
            .order_by(TeamInvitation.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        """Create a new invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

    async def update(self, invitation: TeamInvitation) -> TeamInvitation:
        """Update existing invitation"""
        self.session.add(invitation)
        await self.session.flush()
        await self.session.refresh(invitation)
        return invitation

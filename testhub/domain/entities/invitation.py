"""
TeamInvitation Entity

Token-addressed, time-limited invitation to join a team.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from .enums import InvitationStatus, UserRole


class TeamInvitation(SQLModel, table=True):
    """
    TeamInvitation entity.

    Business Rules:
    - Created by OWNER/ADMIN/MANAGER of the team
    - Expires after 7 days
    - PENDING -> ACCEPTED | DECLINED | EXPIRED | CANCELED; terminal states are final
    """

    __tablename__ = "team_invitations"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    team_id: str = Field(foreign_key="teams.id", nullable=False, index=True)
    email: str = Field(max_length=255, nullable=False, index=True)
    role: UserRole = Field(nullable=False)
    invited_by: str = Field(foreign_key="users.id")

    token: str = Field(unique=True, index=True, max_length=64)
    status: InvitationStatus = Field(default=InvitationStatus.PENDING)

    expires_at: datetime = Field(sa_column=Column(DateTime))
    accepted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invitation_team_email", "team_id", "email"),
        Index("idx_invitation_status", "status"),
    )

    def is_pending(self) -> bool:
        return self.status == InvitationStatus.PENDING

    def is_expired(self, now: datetime) -> bool:
        return self.expires_at < now

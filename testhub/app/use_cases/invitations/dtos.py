"""
Invitation Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel

from testhub.domain.entities import UserRole


class InviteMemberCommand(BaseModel):
    email: str
    role: UserRole = UserRole.TESTER


class InvitationInfo(BaseModel):
    id: str
    team_id: str
    email: str
    role: str
    status: str
    invited_by: str
    expires_at: str
    created_at: str


class InviteMemberResponse(BaseModel):
    """The token is returned to the inviter, who forwards the invitation link"""

    invitation: InvitationInfo
    token: str


class InvitationListResponse(BaseModel):
    invitations: List[InvitationInfo]


class CancelInvitationResponse(BaseModel):
    status: str


class JoinedTeamInfo(BaseModel):
    id: str
    name: str
    role: str


class AcceptInvitationResponse(BaseModel):
    team: JoinedTeamInfo
    over_seat_limit: bool


class DeclineInvitationResponse(BaseModel):
    status: str
    message: Optional[str] = None


def invitation_info(invitation) -> InvitationInfo:
    return InvitationInfo(
        id=str(invitation.id),
        team_id=invitation.team_id,
        email=invitation.email,
        role=invitation.role.value,
        status=invitation.status.value,
        invited_by=invitation.invited_by,
        expires_at=invitation.expires_at.isoformat(),
        created_at=invitation.created_at.isoformat(),
    )

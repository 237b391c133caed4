"""
Invitation Use Cases
"""

from .accept_invitation_use_case import AcceptInvitationUseCase
from .cancel_invitation_use_case import CancelInvitationUseCase
from .decline_invitation_use_case import DeclineInvitationUseCase
from .dtos import (
    AcceptInvitationResponse,
    CancelInvitationResponse,
    DeclineInvitationResponse,
    InvitationInfo,
    InvitationListResponse,
    InviteMemberCommand,
    InviteMemberResponse,
    JoinedTeamInfo,
)
from .invite_member_use_case import InviteMemberUseCase
from .list_invitations_use_case import ListInvitationsUseCase

__all__ = [
    "InviteMemberUseCase",
    "ListInvitationsUseCase",
    "CancelInvitationUseCase",
    "AcceptInvitationUseCase",
    "DeclineInvitationUseCase",
    "InviteMemberCommand",
    "InviteMemberResponse",
    "InvitationInfo",
    "InvitationListResponse",
    "CancelInvitationResponse",
    "AcceptInvitationResponse",
    "DeclineInvitationResponse",
    "JoinedTeamInfo",
]

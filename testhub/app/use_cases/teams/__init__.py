"""
Team Use Cases

Team membership and seat management.
"""

from .create_team_use_case import CreateTeamUseCase
from .dtos import (
    CreateTeamCommand,
    CreateTeamResponse,
    LeaveTeamResponse,
    MemberInfo,
    ResolveSeatLimitCommand,
    ResolveSeatLimitResponse,
    TeamInfo,
    TeamStatusResponse,
    UpdateSeatsCommand,
    UpdateSeatsResponse,
)
from .get_team_status_use_case import GetTeamStatusUseCase
from .leave_team_use_case import LeaveTeamUseCase
from .resolve_seat_limit_use_case import ResolveSeatLimitUseCase
from .update_seats_use_case import UpdateSeatsUseCase

__all__ = [
    "CreateTeamUseCase",
    "GetTeamStatusUseCase",
    "LeaveTeamUseCase",
    "ResolveSeatLimitUseCase",
    "UpdateSeatsUseCase",
    "CreateTeamCommand",
    "CreateTeamResponse",
    "LeaveTeamResponse",
    "MemberInfo",
    "ResolveSeatLimitCommand",
    "ResolveSeatLimitResponse",
    "TeamInfo",
    "TeamStatusResponse",
    "UpdateSeatsCommand",
    "UpdateSeatsResponse",
]

"""
Team Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class CreateTeamCommand(BaseModel):
    name: str
    description: Optional[str] = None


class ResolveSeatLimitCommand(BaseModel):
    member_ids: List[str]


class UpdateSeatsCommand(BaseModel):
    seats: int


# ============================================================================
# Response DTOs
# ============================================================================


class TeamInfo(BaseModel):
    id: str
    name: str
    description: Optional[str] = None
    over_seat_limit: bool


class CreateTeamResponse(BaseModel):
    team: TeamInfo
    role: str


class MemberInfo(BaseModel):
    id: str
    email: str
    name: Optional[str] = None
    role: str


class TeamStatusResponse(BaseModel):
    team: TeamInfo
    members: List[MemberInfo]
    member_count: int
    seats: int
    subscription_status: Optional[str] = None
    over_seat_limit: bool
    required_removals: int


class LeaveTeamResponse(BaseModel):
    status: str
    message: str


class ResolveSeatLimitResponse(BaseModel):
    removed_count: int
    remaining_members: int
    over_seat_limit: bool
    message: str


class UpdateSeatsResponse(BaseModel):
    seats: int
    member_count: int
    over_seat_limit: bool


def team_info(team) -> TeamInfo:
    return TeamInfo(
        id=team.id,
        name=team.name,
        description=team.description,
        over_seat_limit=team.over_seat_limit,
    )

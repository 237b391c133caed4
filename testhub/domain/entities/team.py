"""
Team Entity

A group of users sharing projects under one subscription.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from ..ids import generate_team_id


class Team(SQLModel, table=True):
    """
    Team entity.

    Business Rules:
    - over_seat_limit mirrors (member count > purchased seats) and is
      recomputed after every membership or seat change
    - while over_seat_limit is set, new invitations are blocked
    """

    __tablename__ = "teams"

    id: str = Field(default_factory=generate_team_id, primary_key=True, max_length=64)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)

    over_seat_limit: bool = Field(default=False)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

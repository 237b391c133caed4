"""
User Entity

A principal. Belongs to at most one team at a time.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow
from ..ids import generate_user_id
from .enums import DEFAULT_USER_ROLE, UserRole


class User(SQLModel, table=True):
    """
    User entity.

    Business Rules:
    - Email is unique (stored lower-cased)
    - team_id is null when the user is not in a team
    - role only carries meaning inside the current team
    """

    __tablename__ = "users"

    id: str = Field(default_factory=generate_user_id, primary_key=True, max_length=64)
    email: str = Field(unique=True, index=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output
    name: Optional[str] = Field(default=None, max_length=255)

    role: UserRole = Field(default=DEFAULT_USER_ROLE)
    team_id: Optional[str] = Field(default=None, foreign_key="teams.id")

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_team_id", "team_id"),)

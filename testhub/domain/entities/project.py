"""
Project Entity

Top-level resource; everything else hangs off a project.
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from ..base import utcnow


class Project(SQLModel, table=True):
    """
    Project entity.

    Business Rules:
    - id is an 8-character generated identifier
    - key is human-chosen, upper-case and globally unique
    - created_by never changes; team_id is the creator's team at creation
    """

    __tablename__ = "projects"

    id: str = Field(primary_key=True, max_length=64)
    name: str = Field(max_length=255)
    description: Optional[str] = Field(default=None, max_length=2000)
    key: str = Field(unique=True, max_length=10)

    created_by: str = Field(foreign_key="users.id", index=True)
    team_id: Optional[str] = Field(default=None, foreign_key="teams.id", index=True)

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_project_created_at", "created_at"),)

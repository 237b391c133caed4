"""
TestCase Entity
"""

from datetime import datetime
from typing import Optional

from sqlmodel import Column, DateTime, Field, SQLModel

from ..base import utcnow
from .enums import Priority


class TestCase(SQLModel, table=True):
    __tablename__ = "test_cases"
    __test__ = False

    id: str = Field(primary_key=True, max_length=64)
    project_id: str = Field(foreign_key="projects.id", index=True)
    title: str = Field(max_length=500)
    description: Optional[str] = Field(default=None, max_length=5000)
    priority: Priority = Field(default=Priority.MEDIUM)
    created_by: str = Field(foreign_key="users.id")

    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))

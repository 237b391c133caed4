"""
Domain Entities

All domain entities organized by model.
"""

from .enums import (
    DEFAULT_USER_ROLE,
    InvitationStatus,
    Priority,
    RunStatus,
    SubscriptionStatus,
    TestStatus,
    UserRole,
)

from .user import User
from .team import Team
from .subscription import Subscription
from .invitation import TeamInvitation
from .project import Project
from .test_run import TestRun
from .test_case import TestCase
from .test_result import TestResult
from .audit_event import AuditEvent

__all__ = [
    # Enums
    "DEFAULT_USER_ROLE",
    "InvitationStatus",
    "Priority",
    "RunStatus",
    "SubscriptionStatus",
    "TestStatus",
    "UserRole",
    # Entities
    "User",
    "Team",
    "Subscription",
    "TeamInvitation",
    "Project",
    "TestRun",
    "TestCase",
    "TestResult",
    "AuditEvent",
]

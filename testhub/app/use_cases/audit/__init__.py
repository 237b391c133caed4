"""
Audit Use Cases
"""

from .get_audit_events_use_case import GetTeamAuditEventsUseCase

__all__ = [
    "GetTeamAuditEventsUseCase",
]

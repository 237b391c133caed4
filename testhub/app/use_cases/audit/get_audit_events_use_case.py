"""
Get Team Audit Events Use Case

Retrieves team administration audit events with pagination.
"""

from typing import Any, Dict, Optional

from testhub.app.services.authorization import require_team_role
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.permissions import VIEW_AUDIT_ROLES
from testhub.libs.result import Result, Return


class GetTeamAuditEventsUseCase:
    """
    Use case for retrieving audit events for a team.

    Business Rules:
    - Caller must be OWNER or ADMIN of the team
    - Results are team-scoped and ordered newest first
    - Supports cursor-based pagination
    - Each event includes action, user_email, timestamp, metadata
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self,
        user_id: str,
        team_id: str,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Result[Dict[str, Any]]:
        """
        Execute get audit events use case.

        Args:
            user_id: User ID from JWT
            team_id: Team ID from the path
            limit: Maximum number of events to return
            cursor: Pagination cursor (optional)

        Returns:
            Result with events list and next_cursor, or Error
        """
        async with self.uow:
            gate = await require_team_role(self.uow, user_id, team_id, VIEW_AUDIT_ROLES)
            if gate.is_err():
                return gate

            events, next_cursor = await self.uow.audit_events.get_by_team_paginated(
                team_id, limit=limit, cursor=cursor
            )

            events_list = []
            for event in events:
                user_email = None
                if event.user_id:
                    user = await self.uow.users.get_by_id(event.user_id)
                    if user:
                        user_email = user.email

                events_list.append(
                    {
                        "action": event.action,
                        "user_email": user_email,
                        "timestamp": event.created_at.isoformat() + "Z",
                        "metadata": event.event_metadata or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from testhub.domain.entities import AuditEvent


class IAuditEventRepository(ABC):
    """AuditEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        """Create a new audit event (immutable)"""
        pass

    @abstractmethod
    async def get_by_team_paginated(
        self, team_id: str, limit: int = 50, cursor: Optional[str] = None
    ) -> Tuple[List[AuditEvent], Optional[str]]:
        """Get audit events for a team, newest first, with a cursor for the next page"""
        pass

from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from testhub.domain.entities import TeamInvitation


class IInvitationRepository(ABC):
    """Team invitation repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invitation_id: UUID) -> Optional[TeamInvitation]:
        """Get invitation by ID"""
        pass

    @abstractmethod
    async def get_by_token(self, token: str) -> Optional[TeamInvitation]:
        """Get invitation by token"""
        pass

    @abstractmethod
    async def get_pending_by_team_and_email(
        self, team_id: str, email: str
    ) -> Optional[TeamInvitation]:
        """Get pending invitation by team and email"""
        pass

    @abstractmethod
    async def list_pending_by_team(self, team_id: str) -> List[TeamInvitation]:
        """Get pending invitations of a team, newest first"""
        pass

    @abstractmethod
    async def create(self, invitation: TeamInvitation) -> TeamInvitation:
        """Create a new invitation"""
        pass

    @abstractmethod
    async def update(self, invitation: TeamInvitation) -> TeamInvitation:
        """Update existing invitation"""
        pass

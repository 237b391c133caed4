from testhub.app.services.authorization import require_team_role
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.permissions import MANAGE_INVITATION_ROLES
from testhub.libs.result import Result, Return

from .dtos import InvitationListResponse, invitation_info


class ListInvitationsUseCase:
    """Pending invitations of a team, newest first"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, team_id: str) -> Result[InvitationListResponse]:
        async with self.uow:
            gate = await require_team_role(self.uow, user_id, team_id, MANAGE_INVITATION_ROLES)
            if gate.is_err():
                return gate

            invitations = await self.uow.invitations.list_pending_by_team(team_id)
            return Return.ok(
                InvitationListResponse(invitations=[invitation_info(i) for i in invitations])
            )

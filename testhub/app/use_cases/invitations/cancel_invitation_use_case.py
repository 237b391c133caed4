from uuid import UUID

from testhub.app.services.authorization import require_team_role
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import AuditEvent, InvitationStatus
from testhub.domain.permissions import MANAGE_INVITATION_ROLES
from testhub.libs.result import Error, Result, Return

from .dtos import CancelInvitationResponse


class CancelInvitationUseCase:
    """
    Cancel a pending invitation.

    Business Rules:
    - Only OWNER, ADMIN or MANAGER of the invitation's team
    - Only PENDING invitations can be cancelled
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(
        self, user_id: str, team_id: str, invitation_id: UUID
    ) -> Result[CancelInvitationResponse]:
        async with self.uow:
            gate = await require_team_role(self.uow, user_id, team_id, MANAGE_INVITATION_ROLES)
            if gate.is_err():
                return gate

            invitation = await self.uow.invitations.get_by_id(invitation_id)
            if invitation is None or invitation.team_id != team_id:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if not invitation.is_pending():
                return Return.err(
                    Error(
                        "INVITATION_NOT_PENDING",
                        f"Invitation has already been {invitation.status.value.lower()}",
                    )
                )

            invitation.status = InvitationStatus.CANCELED
            await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=team_id,
                    user_id=user_id,
                    action="invitation_cancelled",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": invitation.email,
                    },
                )
            )

            await self.uow.commit()
            return Return.ok(CancelInvitationResponse(status="canceled"))

from testhub.app.services.authorization import load_principal
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import AuditEvent, InvitationStatus
from testhub.libs.result import Error, Result, Return

from .dtos import DeclineInvitationResponse


class DeclineInvitationUseCase:
    """The invitee turns a pending invitation down"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def execute(self, user_id: str, token: str) -> Result[DeclineInvitationResponse]:
        async with self.uow:
            principal = await load_principal(self.uow, user_id)
            if principal.is_err():
                return principal
            user = principal.value

            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            if user.email.lower() != invitation.email.lower():
                return Return.err(
                    Error(
                        "EMAIL_MISMATCH",
                        "This invitation was sent to a different email address",
                    )
                )

            if not invitation.is_pending():
                return Return.err(
                    Error(
                        "INVITATION_NOT_PENDING",
                        f"This invitation has already been {invitation.status.value.lower()}",
                    )
                )

            invitation.status = InvitationStatus.DECLINED
            await self.uow.invitations.update(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=invitation.team_id,
                    user_id=user.id,
                    action="invitation_declined",
                    event_metadata={"invitation_id": str(invitation.id)},
                )
            )

            await self.uow.commit()
            return Return.ok(
                DeclineInvitationResponse(status="declined", message="Invitation declined")
            )

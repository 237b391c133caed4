"""
Accept Invitation Use Case

Joins the authenticated user to the inviting team.
"""

import logging

from testhub.app.services.authorization import load_principal
from testhub.app.services.cache import CacheKeys, ICache
from testhub.app.services.seat_limit import has_available_seat, reconcile_seat_limit
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.base import utcnow
from testhub.domain.entities import AuditEvent, InvitationStatus
from testhub.libs.result import Error, Result, Return

from .dtos import AcceptInvitationResponse, JoinedTeamInfo

logger = logging.getLogger(__name__)


class AcceptInvitationUseCase:
    """
    Use case for accepting team invitations.

    Business Rules:
    - The team row is locked before the invitation, the members and the
      subscription are (re-)read, so two acceptances racing for the last
      seat cannot both succeed
    - The user row is locked and re-read after the team row, so one user
      accepting two invitations at once joins at most one team
    - Only PENDING invitations are actionable
    - An expired invitation is moved to EXPIRED and rejected (410)
    - The invitation e-mail must match the user's e-mail, case-insensitively
    - The user must not already be in a team
    - The team must have a free seat
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(self, user_id: str, token: str) -> Result[AcceptInvitationResponse]:
        async with self.uow:
            principal = await load_principal(self.uow, user_id)
            if principal.is_err():
                return principal

            invitation = await self.uow.invitations.get_by_token(token)
            if invitation is None:
                return Return.err(Error("INVITATION_NOT_FOUND", "Invitation not found"))

            team = await self.uow.teams.get_by_id_for_update(invitation.team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            # Re-read the invitation and lock the principal under the team lock
            invitation = await self.uow.invitations.get_by_token(token)
            user = await self.uow.users.get_by_id_for_update(user_id)
            if user is None:
                return Return.err(Error("UNAUTHORIZED", "Authentication required"))

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

            now = utcnow()
            if invitation.is_expired(now):
                invitation.status = InvitationStatus.EXPIRED
                await self.uow.invitations.update(invitation)
                await self.uow.commit()
                return Return.err(Error("INVITATION_EXPIRED", "This invitation has expired"))

            if user.team_id is not None:
                return Return.err(
                    Error(
                        "ALREADY_IN_TEAM",
                        "You are already a member of a team. Please leave your current team first.",
                    )
                )

            members = await self.uow.users.list_by_team_id(team.id)
            subscription = await self.uow.subscriptions.get_by_team_id(team.id)
            if not has_available_seat(len(members), subscription):
                return Return.err(
                    Error(
                        "NO_SEATS_AVAILABLE",
                        "This team has reached its seat limit. Please ask the team admin to add more seats.",
                    )
                )

            user.team_id = team.id
            user.role = invitation.role
            await self.uow.users.update(user)

            invitation.status = InvitationStatus.ACCEPTED
            invitation.accepted_at = now
            await self.uow.invitations.update(invitation)

            over_limit = await reconcile_seat_limit(self.uow, team)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=team.id,
                    user_id=user.id,
                    action="invitation_accepted",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "role": invitation.role.value,
                    },
                )
            )

            await self.uow.commit()
            response = AcceptInvitationResponse(
                team=JoinedTeamInfo(id=team.id, name=team.name, role=user.role.value),
                over_seat_limit=over_limit,
            )

        logger.info(f"User {user_id} joined team {response.team.id}")
        await self.cache.delete(
            CacheKeys.projects(user_id), CacheKeys.team_status(response.team.id)
        )
        return Return.ok(response)

"""
Invite Member Use Case

Handles inviting a user to a team by e-mail.
"""

import logging
import secrets
from datetime import timedelta

from testhub.app.services.authorization import require_team_role
from testhub.app.services.seat_limit import has_available_seat
from testhub.app.services.subscriptions import requires_payment
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.base import utcnow
from testhub.domain.entities import AuditEvent, InvitationStatus, TeamInvitation
from testhub.domain.permissions import INVITABLE_ROLES, INVITE_MEMBER_ROLES
from testhub.libs.result import Error, Result, Return

from .dtos import InviteMemberCommand, InviteMemberResponse, invitation_info

logger = logging.getLogger(__name__)

DEFAULT_INVITATION_TTL_DAYS = 7


class InviteMemberUseCase:
    """
    Use case for inviting users to a team.

    Business Rules:
    - Only OWNER, ADMIN or MANAGER of the team can invite
    - OWNER cannot be granted through an invitation
    - Blocked while the subscription needs payment (SUBSCRIPTION_INACTIVE)
    - Blocked while the team is over its seat limit (TEAM_OVER_SEAT_LIMIT)
    - Requires a free seat; teams without a subscription have one seat
    - Existing members and duplicate pending invitations are rejected
    - Invitation expires after ``ttl_days`` days
    - Audit event invitation_sent
    """

    def __init__(self, uow: UnitOfWork, ttl_days: int = DEFAULT_INVITATION_TTL_DAYS):
        self.uow = uow
        self.ttl_days = ttl_days

    async def execute(
        self, user_id: str, team_id: str, command: InviteMemberCommand
    ) -> Result[InviteMemberResponse]:
        email = command.email.strip().lower()

        if command.role not in INVITABLE_ROLES:
            return Return.err(Error("INVALID_ROLE", f"Cannot invite with role {command.role.value}"))

        async with self.uow:
            gate = await require_team_role(self.uow, user_id, team_id, INVITE_MEMBER_ROLES)
            if gate.is_err():
                return gate
            inviter = gate.value

            team = await self.uow.teams.get_by_id(team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            subscription = await self.uow.subscriptions.get_by_team_id(team.id)
            if subscription is not None and requires_payment(subscription):
                return Return.err(
                    Error(
                        "SUBSCRIPTION_INACTIVE",
                        "Team subscription requires payment before inviting members",
                    )
                )

            if team.over_seat_limit:
                return Return.err(
                    Error(
                        "TEAM_OVER_SEAT_LIMIT",
                        "Team is over its seat limit. Remove members before inviting new ones.",
                    )
                )

            members = await self.uow.users.list_by_team_id(team.id)
            if not has_available_seat(len(members), subscription):
                return Return.err(
                    Error(
                        "NO_SEATS_AVAILABLE",
                        "No seats available. Add seats before inviting new members.",
                    )
                )

            if any(member.email.lower() == email for member in members):
                return Return.err(
                    Error("ALREADY_MEMBER", "User is already a member of this team")
                )

            existing = await self.uow.invitations.get_pending_by_team_and_email(team.id, email)
            if existing is not None:
                if not existing.is_expired(utcnow()):
                    return Return.err(
                        Error(
                            "INVITE_ALREADY_EXISTS",
                            "A pending invitation already exists for this email",
                        )
                    )
                existing.status = InvitationStatus.EXPIRED
                await self.uow.invitations.update(existing)

            invitation = TeamInvitation(
                team_id=team.id,
                email=email,
                role=command.role,
                invited_by=inviter.id,
                token=secrets.token_hex(32),
                expires_at=utcnow() + timedelta(days=self.ttl_days),
            )
            invitation = await self.uow.invitations.create(invitation)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=team.id,
                    user_id=inviter.id,
                    action="invitation_sent",
                    event_metadata={
                        "invitation_id": str(invitation.id),
                        "email": email,
                        "role": command.role.value,
                    },
                )
            )

            await self.uow.commit()
            logger.info(f"Invitation {invitation.id} sent to team {team.id}")

            return Return.ok(
                InviteMemberResponse(
                    invitation=invitation_info(invitation), token=invitation.token
                )
            )

"""
Resolve Seat Limit Use Case

Forced removal of members from a team that has more members than seats.
"""

import logging
from typing import List

from testhub.app.services.authorization import load_principal
from testhub.app.services.cache import CacheKeys, ICache
from testhub.app.services.seat_limit import is_over_seat_limit
from testhub.app.services.subscriptions import is_subscription_current
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import DEFAULT_USER_ROLE, AuditEvent
from testhub.domain.ids import is_well_formed_id
from testhub.domain.permissions import RESOLVE_SEAT_LIMIT_ROLES
from testhub.libs.result import Error, Result, Return

from .dtos import ResolveSeatLimitCommand, ResolveSeatLimitResponse

logger = logging.getLogger(__name__)

DEFAULT_MAX_REMOVALS = 50


def _plural(count: int) -> str:
    return "member" if count == 1 else "members"


class ResolveSeatLimitUseCase:
    """
    Remove an exact list of members so that the team fits its seats again.

    Business Rules:
    - Input shape is validated before any database access: non-empty list,
      at most ``max_removals`` ids, well-formed ids, no duplicates, and the
      caller's own id is never accepted
    - Everything else is decided inside one transaction that starts by
      locking the team row, so concurrent resolutions for the same team
      run one after the other and the second one sees the first one's
      removals
    - The list length must equal members - seats exactly
    - Removed members leave the team and fall back to the default role
    - Any failure leaves the team untouched
    """

    def __init__(
        self,
        uow: UnitOfWork,
        cache: ICache,
        max_removals: int = DEFAULT_MAX_REMOVALS,
    ):
        self.uow = uow
        self.cache = cache
        self.max_removals = max_removals

    def _validate_input(self, user_id: str, member_ids: List[str]) -> Result[None]:
        if not member_ids:
            return Return.err(
                Error("INVALID_MEMBER_IDS", "member_ids must be a non-empty list of user IDs")
            )

        if len(member_ids) > self.max_removals:
            return Return.err(
                Error(
                    "INVALID_MEMBER_IDS",
                    f"Cannot remove more than {self.max_removals} members at once",
                )
            )

        if not all(is_well_formed_id(member_id) for member_id in member_ids):
            return Return.err(Error("INVALID_MEMBER_IDS", "member_ids contains an invalid user ID"))

        if len(set(member_ids)) != len(member_ids):
            return Return.err(Error("INVALID_MEMBER_IDS", "member_ids contains duplicates"))

        if user_id in member_ids:
            return Return.err(
                Error("CANNOT_REMOVE_SELF", "You cannot remove yourself from the team")
            )

        return Return.ok()

    async def execute(
        self, user_id: str, team_id: str, command: ResolveSeatLimitCommand
    ) -> Result[ResolveSeatLimitResponse]:
        member_ids = list(command.member_ids)

        validation = self._validate_input(user_id, member_ids)
        if validation.is_err():
            return validation

        async with self.uow:
            principal = await load_principal(self.uow, user_id)
            if principal.is_err():
                return principal

            team = await self.uow.teams.get_by_id_for_update(team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            # Fresh reads under the team lock, the caller's own membership included
            members = await self.uow.users.list_by_team_id(team.id)
            members_by_id = {member.id: member for member in members}

            caller = members_by_id.get(user_id)
            if caller is None:
                return Return.err(Error("NOT_A_MEMBER", "You are not a member of this team"))

            if caller.role not in RESOLVE_SEAT_LIMIT_ROLES:
                return Return.err(
                    Error(
                        "INSUFFICIENT_ROLE",
                        "Only team admins and managers can remove members",
                    )
                )

            subscription = await self.uow.subscriptions.get_by_team_id(team.id)
            if subscription is None or not is_subscription_current(subscription):
                return Return.err(
                    Error("NO_ACTIVE_SUBSCRIPTION", "Team has no active subscription")
                )

            seats = subscription.seats
            removals_needed = len(members) - seats

            if removals_needed <= 0:
                return Return.err(
                    Error("TEAM_NOT_OVER_LIMIT", "Team is not over seat limit")
                )

            if len(member_ids) != removals_needed:
                return Return.err(
                    Error(
                        "REMOVAL_COUNT_MISMATCH",
                        f"You must remove exactly {removals_needed} "
                        f"{_plural(removals_needed)}",
                        details={"required_removals": removals_needed},
                    )
                )

            unknown = [member_id for member_id in member_ids if member_id not in members_by_id]
            if unknown:
                return Return.err(
                    Error(
                        "NOT_TEAM_MEMBERS",
                        "Some user IDs are not members of this team",
                        details={"invalid_ids": unknown},
                    )
                )

            for member_id in member_ids:
                member = members_by_id[member_id]
                member.team_id = None
                member.role = DEFAULT_USER_ROLE
                await self.uow.users.update(member)

            remaining = len(members) - len(member_ids)
            over_limit = is_over_seat_limit(remaining, seats)
            team.over_seat_limit = over_limit
            await self.uow.teams.update(team)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=team.id,
                    user_id=caller.id,
                    action="members_force_removed",
                    event_metadata={
                        "removed_user_ids": member_ids,
                        "remaining_members": remaining,
                        "seats": seats,
                    },
                )
            )

            await self.uow.commit()

        logger.info(
            f"Removed {len(member_ids)} {_plural(len(member_ids))} from team {team_id}, "
            f"{remaining} remaining"
        )
        await self.cache.delete(
            CacheKeys.team_status(team_id),
            *[CacheKeys.projects(member_id) for member_id in member_ids],
        )

        return Return.ok(
            ResolveSeatLimitResponse(
                removed_count=len(member_ids),
                remaining_members=remaining,
                over_seat_limit=over_limit,
                message=f"Successfully removed {len(member_ids)} {_plural(len(member_ids))}",
            )
        )

from testhub.app.services.authorization import require_team_role
from testhub.app.services.cache import CacheKeys, ICache
from testhub.app.services.seat_limit import reconcile_seat_limit
from testhub.app.services.subscriptions import is_subscription_current
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import AuditEvent
from testhub.domain.permissions import UPDATE_SEATS_ROLES
from testhub.libs.result import Error, Result, Return

from .dtos import UpdateSeatsCommand, UpdateSeatsResponse


class UpdateSeatsUseCase:
    """
    Change the purchased seat count of a team.

    Business Rules:
    - Only OWNER or ADMIN of the team
    - Requires a current subscription
    - seats >= 1 and never below the current member count
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(
        self, user_id: str, team_id: str, command: UpdateSeatsCommand
    ) -> Result[UpdateSeatsResponse]:
        if command.seats < 1:
            return Return.err(Error("INVALID_SEATS", "Seats must be at least 1"))

        async with self.uow:
            gate = await require_team_role(self.uow, user_id, team_id, UPDATE_SEATS_ROLES)
            if gate.is_err():
                return gate

            team = await self.uow.teams.get_by_id_for_update(team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            subscription = await self.uow.subscriptions.get_by_team_id(team.id)
            if subscription is None or not is_subscription_current(subscription):
                return Return.err(
                    Error("NO_ACTIVE_SUBSCRIPTION", "Team has no active subscription")
                )

            members = await self.uow.users.list_by_team_id(team.id)
            if command.seats < len(members):
                return Return.err(
                    Error(
                        "SEATS_BELOW_MEMBERS",
                        f"Cannot reduce seats below current member count ({len(members)})",
                        details={"member_count": len(members)},
                    )
                )

            previous_seats = subscription.seats
            subscription.seats = command.seats
            await self.uow.subscriptions.update(subscription)

            over_limit = await reconcile_seat_limit(self.uow, team)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=team.id,
                    user_id=user_id,
                    action="seats_updated",
                    event_metadata={
                        "previous_seats": previous_seats,
                        "seats": command.seats,
                    },
                )
            )

            await self.uow.commit()
            response = UpdateSeatsResponse(
                seats=command.seats,
                member_count=len(members),
                over_seat_limit=over_limit,
            )

        await self.cache.delete(CacheKeys.team_status(team_id))
        return Return.ok(response)

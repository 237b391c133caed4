"""
Sync Subscription Use Case

Mirrors billing-system subscription changes (checkout completed, seats
changed, status transitions) onto the team.
"""

import logging

from testhub.app.services.cache import CacheKeys, ICache
from testhub.app.services.seat_limit import reconcile_seat_limit
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import AuditEvent, Subscription
from testhub.libs.result import Error, Result, Return

from .dtos import SyncSubscriptionCommand, SyncSubscriptionResponse

logger = logging.getLogger(__name__)


class SyncSubscriptionUseCase:
    """
    Upsert a team's subscription and recompute its seat-limit flag.

    Seat reductions below the member count are accepted here: the billing
    system is authoritative, and the team becomes over-limit until members
    are removed.
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(self, command: SyncSubscriptionCommand) -> Result[SyncSubscriptionResponse]:
        if command.seats < 1:
            return Return.err(Error("INVALID_SEATS", "Seats must be at least 1"))

        async with self.uow:
            team = await self.uow.teams.get_by_id_for_update(command.team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            subscription = await self.uow.subscriptions.get_by_team_id(team.id)
            created = subscription is None
            if created:
                subscription = Subscription(team_id=team.id)

            subscription.status = command.status
            subscription.seats = command.seats
            subscription.cancel_at_period_end = command.cancel_at_period_end
            subscription.current_period_end = command.current_period_end
            if command.stripe_customer_id is not None:
                subscription.stripe_customer_id = command.stripe_customer_id
            if command.stripe_subscription_id is not None:
                subscription.stripe_subscription_id = command.stripe_subscription_id
            if command.stripe_price_id is not None:
                subscription.stripe_price_id = command.stripe_price_id

            if created:
                subscription = await self.uow.subscriptions.create(subscription)
            else:
                subscription = await self.uow.subscriptions.update(subscription)

            over_limit = await reconcile_seat_limit(self.uow, team)
            members = await self.uow.users.list_by_team_id(team.id)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=team.id,
                    action="subscription_synced",
                    event_metadata={
                        "status": command.status.value,
                        "seats": command.seats,
                        "created": created,
                    },
                )
            )

            await self.uow.commit()
            response = SyncSubscriptionResponse(
                team_id=team.id,
                status=subscription.status.value,
                seats=subscription.seats,
                member_count=len(members),
                over_seat_limit=over_limit,
            )

        logger.info(
            f"Subscription for team {command.team_id} synced: "
            f"{command.status.value}, {command.seats} seats"
        )
        await self.cache.delete(CacheKeys.team_status(command.team_id))
        return Return.ok(response)

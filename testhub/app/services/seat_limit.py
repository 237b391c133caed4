"""
Seat-limit reconciliation.

A team is over its seat limit while it has more members than purchased
seats. The flag on the team row is recomputed after every membership or
seat change; callers own the transaction and the commit.
"""

import logging
from typing import Optional

from testhub.domain.entities import Subscription, Team

from .unit_of_work import UnitOfWork

logger = logging.getLogger(__name__)

# Teams without a subscription get a single seat.
FREE_TIER_SEATS = 1


def effective_seats(subscription: Optional[Subscription]) -> int:
    if subscription is None:
        return FREE_TIER_SEATS
    return subscription.seats


def is_over_seat_limit(member_count: int, seats: int) -> bool:
    return member_count > seats


def required_removals(member_count: int, seats: int) -> int:
    return max(0, member_count - seats)


def has_available_seat(member_count: int, subscription: Optional[Subscription]) -> bool:
    return member_count < effective_seats(subscription)


async def reconcile_seat_limit(uow: UnitOfWork, team: Team) -> bool:
    """
    Recompute and persist ``team.over_seat_limit`` from current counts.

    Idempotent: with unchanged members and seats it writes nothing and
    returns the same value.
    """
    members = await uow.users.list_by_team_id(team.id)
    subscription = await uow.subscriptions.get_by_team_id(team.id)
    seats = effective_seats(subscription)
    over_limit = is_over_seat_limit(len(members), seats)

    if team.over_seat_limit != over_limit:
        team.over_seat_limit = over_limit
        await uow.teams.update(team)

        if over_limit:
            logger.warning(
                f"Team {team.id} is over seat limit: {len(members)} members, {seats} seats"
            )
        else:
            logger.info(f"Team {team.id} is now within seat limit")

    return over_limit

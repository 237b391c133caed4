
import pytest

from testhub.app.services.seat_limit import (
    FREE_TIER_SEATS,
    effective_seats,
    has_available_seat,
    is_over_seat_limit,
    reconcile_seat_limit,
    required_removals,
)
from testhub.domain.entities import Subscription, SubscriptionStatus, Team, User


def _members(count, team_id="T1"):
    return [
        User(id=f"U{i}", email=f"u{i}@example.com", password_hash="x", team_id=team_id)
        for i in range(count)
    ]


def test_effective_seats_without_subscription_is_free_tier():
    assert effective_seats(None) == FREE_TIER_SEATS == 1


def test_effective_seats_uses_subscription():
    subscription = Subscription(team_id="T1", seats=5, status=SubscriptionStatus.ACTIVE)
    assert effective_seats(subscription) == 5


def test_over_limit_and_required_removals():
    assert is_over_seat_limit(4, 3) is True
    assert is_over_seat_limit(3, 3) is False
    assert required_removals(5, 3) == 2
    assert required_removals(2, 3) == 0


def test_has_available_seat():
    subscription = Subscription(team_id="T1", seats=2, status=SubscriptionStatus.ACTIVE)
    assert has_available_seat(1, subscription) is True
    assert has_available_seat(2, subscription) is False
    assert has_available_seat(0, None) is True
    assert has_available_seat(1, None) is False


@pytest.mark.asyncio
async def test_reconcile_sets_flag_when_over_limit(mock_uow):
    team = Team(id="T1", name="QA", over_seat_limit=False)
    mock_uow.users.list_by_team_id.return_value = _members(3)
    mock_uow.subscriptions.get_by_team_id.return_value = Subscription(
        team_id="T1", seats=2, status=SubscriptionStatus.ACTIVE
    )

    over_limit = await reconcile_seat_limit(mock_uow, team)

    assert over_limit is True
    assert team.over_seat_limit is True
    mock_uow.teams.update.assert_called_once_with(team)


@pytest.mark.asyncio
async def test_reconcile_is_idempotent(mock_uow):
    """A second run with unchanged counts writes nothing"""
    team = Team(id="T1", name="QA", over_seat_limit=False)
    mock_uow.users.list_by_team_id.return_value = _members(3)
    mock_uow.subscriptions.get_by_team_id.return_value = Subscription(
        team_id="T1", seats=2, status=SubscriptionStatus.ACTIVE
    )

    first = await reconcile_seat_limit(mock_uow, team)
    second = await reconcile_seat_limit(mock_uow, team)

    assert first is second is True
    assert mock_uow.teams.update.call_count == 1


@pytest.mark.asyncio
async def test_reconcile_clears_flag(mock_uow):
    team = Team(id="T1", name="QA", over_seat_limit=True)
    mock_uow.users.list_by_team_id.return_value = _members(1)
    mock_uow.subscriptions.get_by_team_id.return_value = None

    over_limit = await reconcile_seat_limit(mock_uow, team)

    assert over_limit is False
    assert team.over_seat_limit is False
    mock_uow.teams.update.assert_called_once()

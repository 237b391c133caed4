import pytest

from testhub.app.use_cases.billing import SyncSubscriptionCommand, SyncSubscriptionUseCase
from testhub.domain.entities import Subscription, SubscriptionStatus, Team, User


def _members(count):
    return [
        User(id=f"U{i}", email=f"u{i}@example.com", password_hash="x", team_id="T1")
        for i in range(count)
    ]


@pytest.mark.asyncio
async def test_first_sync_creates_subscription(mock_uow, mock_cache):
    team = Team(id="T1", name="QA")
    mock_uow.teams.get_by_id_for_update.return_value = team
    stored = []
    mock_uow.subscriptions.get_by_team_id.side_effect = lambda team_id: stored[0] if stored else None
    mock_uow.subscriptions.create.side_effect = lambda s: stored.append(s) or s
    mock_uow.users.list_by_team_id.return_value = _members(2)

    result = await SyncSubscriptionUseCase(mock_uow, mock_cache).execute(
        SyncSubscriptionCommand(
            team_id="T1",
            status=SubscriptionStatus.ACTIVE,
            seats=5,
            stripe_subscription_id="sub_123",
        )
    )

    assert result.is_ok()
    created = mock_uow.subscriptions.create.call_args.args[0]
    assert created.team_id == "T1"
    assert created.seats == 5
    assert created.stripe_subscription_id == "sub_123"
    assert result.value.member_count == 2
    assert result.value.over_seat_limit is False
    mock_cache.delete.assert_called_once_with("team:status:T1")


@pytest.mark.asyncio
async def test_seat_reduction_flags_team_over_limit(mock_uow, mock_cache):
    team = Team(id="T1", name="QA", over_seat_limit=False)
    subscription = Subscription(team_id="T1", seats=5, status=SubscriptionStatus.ACTIVE)
    mock_uow.teams.get_by_id_for_update.return_value = team
    mock_uow.subscriptions.get_by_team_id.return_value = subscription
    mock_uow.subscriptions.update.side_effect = lambda s: s
    mock_uow.users.list_by_team_id.return_value = _members(3)

    result = await SyncSubscriptionUseCase(mock_uow, mock_cache).execute(
        SyncSubscriptionCommand(team_id="T1", status=SubscriptionStatus.ACTIVE, seats=2)
    )

    assert result.value.over_seat_limit is True
    assert team.over_seat_limit is True
    assert subscription.seats == 2
    mock_uow.subscriptions.create.assert_not_called()
    assert mock_uow.audit_events.create.call_args.args[0].action == "subscription_synced"


@pytest.mark.asyncio
async def test_unknown_team(mock_uow, mock_cache):
    mock_uow.teams.get_by_id_for_update.return_value = None

    result = await SyncSubscriptionUseCase(mock_uow, mock_cache).execute(
        SyncSubscriptionCommand(team_id="NOPE", status=SubscriptionStatus.ACTIVE, seats=2)
    )

    assert result.error.code == "TEAM_NOT_FOUND"

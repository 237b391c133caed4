import asyncio
from typing import Dict, List, Optional
from unittest.mock import AsyncMock, MagicMock

import pytest

from testhub.domain.entities import AuditEvent, Subscription, Team, User


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork with all repositories"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()

    uow.users = AsyncMock()
    uow.teams = AsyncMock()
    uow.subscriptions = AsyncMock()
    uow.invitations = AsyncMock()
    uow.projects = AsyncMock()
    uow.test_runs = AsyncMock()
    uow.test_cases = AsyncMock()
    uow.test_results = AsyncMock()
    uow.audit_events = AsyncMock()
    return uow


@pytest.fixture
def mock_cache():
    cache = AsyncMock()
    cache.get.return_value = None
    cache.set.return_value = True
    cache.delete.return_value = True
    return cache


# ============================================================================
# In-memory unit of work with real transaction semantics
# ============================================================================


def _clone_user(user: User) -> User:
    return User(
        id=user.id,
        email=user.email,
        password_hash=user.password_hash,
        name=user.name,
        role=user.role,
        team_id=user.team_id,
        created_at=user.created_at,
    )


def _clone_team(team: Team) -> Team:
    return Team(
        id=team.id,
        name=team.name,
        description=team.description,
        over_seat_limit=team.over_seat_limit,
        created_at=team.created_at,
    )


def _clone_subscription(subscription: Subscription) -> Subscription:
    return Subscription(
        id=subscription.id,
        team_id=subscription.team_id,
        status=subscription.status,
        seats=subscription.seats,
    )


class TeamStore:
    """Committed state shared by every FakeUnitOfWork"""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.teams: Dict[str, Team] = {}
        self.subscriptions: Dict[str, Subscription] = {}
        self.audit_events: List[AuditEvent] = []
        self.locks: Dict[str, asyncio.Lock] = {}

    def add_user(self, user: User) -> None:
        self.users[user.id] = _clone_user(user)

    def add_team(self, team: Team) -> None:
        self.teams[team.id] = _clone_team(team)

    def add_subscription(self, subscription: Subscription) -> None:
        self.subscriptions[subscription.team_id] = _clone_subscription(subscription)


class _Users:
    def __init__(self, uow: "FakeUnitOfWork"):
        self.uow = uow

    def _current(self) -> Dict[str, User]:
        return {**self.uow.store.users, **self.uow.pending_users}

    async def get_by_id(self, user_id: str) -> Optional[User]:
        await asyncio.sleep(0)
        user = self._current().get(user_id)
        return _clone_user(user) if user else None

    async def list_by_team_id(self, team_id: str) -> List[User]:
        await asyncio.sleep(0)
        return [_clone_user(u) for u in self._current().values() if u.team_id == team_id]

    async def update(self, user: User) -> User:
        self.uow.pending_users[user.id] = _clone_user(user)
        return user


class _Teams:
    def __init__(self, uow: "FakeUnitOfWork"):
        self.uow = uow

    async def get_by_id(self, team_id: str) -> Optional[Team]:
        team = self.uow.pending_teams.get(team_id) or self.uow.store.teams.get(team_id)
        return _clone_team(team) if team else None

    async def get_by_id_for_update(self, team_id: str) -> Optional[Team]:
        lock = self.uow.store.locks.setdefault(team_id, asyncio.Lock())
        await lock.acquire()
        self.uow.held_locks.append(lock)
        return await self.get_by_id(team_id)

    async def update(self, team: Team) -> Team:
        self.uow.pending_teams[team.id] = _clone_team(team)
        return team


class _Subscriptions:
    def __init__(self, uow: "FakeUnitOfWork"):
        self.uow = uow

    async def get_by_team_id(self, team_id: str) -> Optional[Subscription]:
        subscription = self.uow.store.subscriptions.get(team_id)
        return _clone_subscription(subscription) if subscription else None


class _AuditEvents:
    def __init__(self, uow: "FakeUnitOfWork"):
        self.uow = uow

    async def create(self, audit_event: AuditEvent) -> AuditEvent:
        self.uow.pending_audit_events.append(audit_event)
        return audit_event


class FakeUnitOfWork:
    """
    Buffers writes until commit and holds team row locks until the
    transaction ends, like the SQL unit of work does.
    """

    def __init__(self, store: TeamStore):
        self.store = store
        self.users = _Users(self)
        self.teams = _Teams(self)
        self.subscriptions = _Subscriptions(self)
        self.audit_events = _AuditEvents(self)
        self._reset()

    def _reset(self):
        self.pending_users: Dict[str, User] = {}
        self.pending_teams: Dict[str, Team] = {}
        self.pending_audit_events: List[AuditEvent] = []
        self.held_locks: List[asyncio.Lock] = []

    def _release(self):
        for lock in self.held_locks:
            lock.release()
        self.held_locks = []

    async def __aenter__(self):
        self._reset()
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        self.store.users.update(self.pending_users)
        self.store.teams.update(self.pending_teams)
        self.store.audit_events.extend(self.pending_audit_events)
        self._release()
        self._reset()

    async def rollback(self):
        self._release()
        self._reset()


@pytest.fixture
def team_store():
    return TeamStore()


@pytest.fixture
def make_uow(team_store):
    def factory() -> FakeUnitOfWork:
        return FakeUnitOfWork(team_store)

    return factory

from sqlmodel.ext.asyncio.session import AsyncSession

from testhub.adapter.repositories.audit_event_repository import AuditEventRepository
from testhub.adapter.repositories.invitation_repository import InvitationRepository
from testhub.adapter.repositories.project_repository import ProjectRepository
from testhub.adapter.repositories.subscription_repository import SubscriptionRepository
from testhub.adapter.repositories.team_repository import TeamRepository
from testhub.adapter.repositories.test_case_repository import TestCaseRepository
from testhub.adapter.repositories.test_result_repository import TestResultRepository
from testhub.adapter.repositories.test_run_repository import TestRunRepository
from testhub.adapter.repositories.user_repository import UserRepository
from testhub.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.teams = TeamRepository(self.session)
        self.subscriptions = SubscriptionRepository(self.session)
        self.invitations = InvitationRepository(self.session)
        self.projects = ProjectRepository(self.session)
        self.test_runs = TestRunRepository(self.session)
        self.test_cases = TestCaseRepository(self.session)
        self.test_results = TestResultRepository(self.session)
        self.audit_events = AuditEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Anything not committed by the use case is discarded
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

from abc import ABC, abstractmethod

from testhub.app.repositories.audit_event_repository import IAuditEventRepository
from testhub.app.repositories.invitation_repository import IInvitationRepository
from testhub.app.repositories.project_repository import IProjectRepository
from testhub.app.repositories.subscription_repository import ISubscriptionRepository
from testhub.app.repositories.team_repository import ITeamRepository
from testhub.app.repositories.test_case_repository import ITestCaseRepository
from testhub.app.repositories.test_result_repository import ITestResultRepository
from testhub.app.repositories.test_run_repository import ITestRunRepository
from testhub.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    teams: ITeamRepository
    subscriptions: ISubscriptionRepository
    invitations: IInvitationRepository
    projects: IProjectRepository
    test_runs: ITestRunRepository
    test_cases: ITestCaseRepository
    test_results: ITestResultRepository
    audit_events: IAuditEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

"""
Authorization guards shared by use cases.

Every guard re-reads the principal from the store, so a role or team change
takes effect on the next request regardless of what the access token says.
Guards never mutate state.
"""

from typing import Iterable, Optional, Tuple

from testhub.domain.access import has_project_access
from testhub.domain.entities import Project, TestCase, TestResult, TestRun, User, UserRole
from testhub.libs.result import Error, Result, Return

from .unit_of_work import UnitOfWork


async def load_principal(uow: UnitOfWork, user_id: Optional[str]) -> Result[User]:
    """Resolve the authenticated principal, failing with UNAUTHORIZED if absent."""
    if not user_id:
        return Return.err(Error("UNAUTHORIZED", "Authentication required"))

    user = await uow.users.get_by_id(user_id)
    if user is None:
        return Return.err(Error("UNAUTHORIZED", "Authentication required"))
    return Return.ok(user)


async def require_role(
    uow: UnitOfWork, user_id: Optional[str], allowed_roles: Iterable[UserRole]
) -> Result[User]:
    """
    Role gate.

    Fails with UNAUTHORIZED when there is no principal and with
    INSUFFICIENT_ROLE when the principal's current role is not in
    ``allowed_roles``.
    """
    principal = await load_principal(uow, user_id)
    if principal.is_err():
        return principal

    user = principal.value
    if user.role not in frozenset(allowed_roles):
        return Return.err(
            Error("INSUFFICIENT_ROLE", "Forbidden - Insufficient permissions")
        )
    return Return.ok(user)


async def require_team_role(
    uow: UnitOfWork,
    user_id: Optional[str],
    team_id: str,
    allowed_roles: Iterable[UserRole],
) -> Result[User]:
    """Role gate plus a check that the principal is currently in ``team_id``."""
    gate = await require_role(uow, user_id, allowed_roles)
    if gate.is_err():
        return gate

    user = gate.value
    if user.team_id is None or user.team_id != team_id:
        return Return.err(Error("NOT_A_MEMBER", "You are not a member of this team"))
    return Return.ok(user)


async def require_project_access(
    uow: UnitOfWork, user_id: Optional[str], project_id: str
) -> Result[Tuple[Project, User]]:
    principal = await load_principal(uow, user_id)
    if principal.is_err():
        return principal

    project = await uow.projects.get_by_id(project_id)
    if project is None:
        return Return.err(Error("PROJECT_NOT_FOUND", "Project not found"))

    if not has_project_access(project, principal.value):
        return Return.err(
            Error("PROJECT_ACCESS_DENIED", "You do not have access to this project")
        )
    return Return.ok((project, principal.value))


async def require_test_run_access(
    uow: UnitOfWork, user_id: Optional[str], run_id: str
) -> Result[Tuple[TestRun, Project, User]]:
    """Access to a run is granted through the run's project."""
    principal = await load_principal(uow, user_id)
    if principal.is_err():
        return principal

    run = await uow.test_runs.get_by_id(run_id)
    if run is None:
        return Return.err(Error("TEST_RUN_NOT_FOUND", "Test run not found"))

    project = await uow.projects.get_by_id(run.project_id)
    if not has_project_access(project, principal.value):
        return Return.err(
            Error("PROJECT_ACCESS_DENIED", "You do not have access to this test run")
        )
    return Return.ok((run, project, principal.value))


async def require_test_case_access(
    uow: UnitOfWork, user_id: Optional[str], case_id: str
) -> Result[Tuple[TestCase, Project, User]]:
    principal = await load_principal(uow, user_id)
    if principal.is_err():
        return principal

    case = await uow.test_cases.get_by_id(case_id)
    if case is None:
        return Return.err(Error("TEST_CASE_NOT_FOUND", "Test case not found"))

    project = await uow.projects.get_by_id(case.project_id)
    if not has_project_access(project, principal.value):
        return Return.err(
            Error("PROJECT_ACCESS_DENIED", "You do not have access to this test case")
        )
    return Return.ok((case, project, principal.value))


async def require_test_result_access(
    uow: UnitOfWork, user_id: Optional[str], result_id: str
) -> Result[Tuple[TestResult, Project, User]]:
    """Access to a result goes result -> run -> project."""
    principal = await load_principal(uow, user_id)
    if principal.is_err():
        return principal

    result = await uow.test_results.get_by_id(result_id)
    if result is None:
        return Return.err(Error("TEST_RESULT_NOT_FOUND", "Test result not found"))

    run = await uow.test_runs.get_by_id(result.test_run_id)
    project = await uow.projects.get_by_id(run.project_id) if run else None
    if not has_project_access(project, principal.value):
        return Return.err(
            Error("PROJECT_ACCESS_DENIED", "You do not have access to this test result")
        )
    return Return.ok((result, project, principal.value))

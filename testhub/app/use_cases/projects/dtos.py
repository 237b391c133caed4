"""
Project Use Case DTOs (Data Transfer Objects)

Commands and responses for projects and everything hanging off them.
"""

from typing import List, Optional

from pydantic import BaseModel

from testhub.domain.entities import Priority, RunStatus, TestStatus


# ============================================================================
# Command DTOs
# ============================================================================


class CreateProjectCommand(BaseModel):
    name: str
    key: str
    description: Optional[str] = None


class CreateTestRunCommand(BaseModel):
    name: str
    description: Optional[str] = None


class CreateTestCaseCommand(BaseModel):
    title: str
    description: Optional[str] = None
    priority: Priority = Priority.MEDIUM


class CreateTestResultCommand(BaseModel):
    test_case_id: str
    status: TestStatus
    comment: Optional[str] = None


class UpdateProjectCommand(BaseModel):
    """Only fields that were set are applied; description may be cleared"""

    name: Optional[str] = None
    key: Optional[str] = None
    description: Optional[str] = None


class UpdateTestCaseCommand(BaseModel):
    """Only fields that were set are applied; description may be cleared"""

    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[Priority] = None


# ============================================================================
# Response DTOs
# ============================================================================


class ProjectInfo(BaseModel):
    id: str
    name: str
    key: str
    description: Optional[str] = None
    created_by: str
    team_id: Optional[str] = None
    created_at: str


class ProjectListResponse(BaseModel):
    projects: List[ProjectInfo]


class ProjectDetailResponse(BaseModel):
    project: ProjectInfo
    test_run_count: int


class DeleteProjectResponse(BaseModel):
    status: str


class RunInfo(BaseModel):
    id: str
    project_id: str
    name: str
    description: Optional[str] = None
    status: RunStatus
    created_by: str
    created_at: str


class RunListResponse(BaseModel):
    test_runs: List[RunInfo]


class CaseInfo(BaseModel):
    id: str
    project_id: str
    title: str
    description: Optional[str] = None
    priority: Priority
    created_by: str
    created_at: str


class ResultInfo(BaseModel):
    id: str
    test_run_id: str
    test_case_id: str
    status: TestStatus
    comment: Optional[str] = None
    executed_by: str
    created_at: str


def project_info(project) -> ProjectInfo:
    return ProjectInfo(
        id=project.id,
        name=project.name,
        key=project.key,
        description=project.description,
        created_by=project.created_by,
        team_id=project.team_id,
        created_at=project.created_at.isoformat(),
    )


def run_info(run) -> RunInfo:
    return RunInfo(
        id=run.id,
        project_id=run.project_id,
        name=run.name,
        description=run.description,
        status=run.status,
        created_by=run.created_by,
        created_at=run.created_at.isoformat(),
    )


def case_info(case) -> CaseInfo:
    return CaseInfo(
        id=case.id,
        project_id=case.project_id,
        title=case.title,
        description=case.description,
        priority=case.priority,
        created_by=case.created_by,
        created_at=case.created_at.isoformat(),
    )


def result_info(result) -> ResultInfo:
    return ResultInfo(
        id=result.id,
        test_run_id=result.test_run_id,
        test_case_id=result.test_case_id,
        status=result.status,
        comment=result.comment,
        executed_by=result.executed_by,
        created_at=result.created_at.isoformat(),
    )

"""
Project Use Cases

Projects and the runs, cases and results that belong to them. Every
operation is gated by the project access predicate.
"""

from .create_project_use_case import CreateProjectUseCase
from .create_test_case_use_case import CreateTestCaseUseCase
from .create_test_result_use_case import CreateTestResultUseCase
from .create_test_run_use_case import CreateTestRunUseCase
from .delete_project_use_case import DeleteProjectUseCase
from .dtos import (
    CaseInfo,
    CreateProjectCommand,
    CreateTestCaseCommand,
    CreateTestResultCommand,
    CreateTestRunCommand,
    DeleteProjectResponse,
    ProjectDetailResponse,
    ProjectInfo,
    ProjectListResponse,
    ResultInfo,
    RunInfo,
    RunListResponse,
    UpdateProjectCommand,
    UpdateTestCaseCommand,
)
from .get_project_use_case import GetProjectUseCase
from .get_test_case_use_case import GetTestCaseUseCase
from .get_test_result_use_case import GetTestResultUseCase
from .get_test_run_use_case import GetTestRunUseCase
from .list_projects_use_case import ListProjectsUseCase
from .list_test_runs_use_case import ListTestRunsUseCase
from .update_project_use_case import UpdateProjectUseCase
from .update_test_case_use_case import UpdateTestCaseUseCase

__all__ = [
    # Use Cases
    "CreateProjectUseCase",
    "ListProjectsUseCase",
    "GetProjectUseCase",
    "UpdateProjectUseCase",
    "DeleteProjectUseCase",
    "CreateTestRunUseCase",
    "ListTestRunsUseCase",
    "GetTestRunUseCase",
    "CreateTestCaseUseCase",
    "GetTestCaseUseCase",
    "UpdateTestCaseUseCase",
    "CreateTestResultUseCase",
    "GetTestResultUseCase",
    # DTOs
    "CreateProjectCommand",
    "CreateTestRunCommand",
    "CreateTestCaseCommand",
    "CreateTestResultCommand",
    "UpdateProjectCommand",
    "UpdateTestCaseCommand",
    "ProjectInfo",
    "ProjectListResponse",
    "ProjectDetailResponse",
    "DeleteProjectResponse",
    "RunInfo",
    "RunListResponse",
    "CaseInfo",
    "ResultInfo",
]

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from typing import Optional

from config import ApplicationConfig
from testhub.api.error import ClientError, ServerError
from testhub.app.services.cache import ICache
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.projects import (
    CaseInfo,
    CreateProjectCommand,
    CreateProjectUseCase,
    CreateTestCaseCommand,
    CreateTestCaseUseCase,
    CreateTestRunCommand,
    CreateTestRunUseCase,
    DeleteProjectResponse,
    DeleteProjectUseCase,
    GetProjectUseCase,
    ListProjectsUseCase,
    ListTestRunsUseCase,
    ProjectDetailResponse,
    ProjectInfo,
    ProjectListResponse,
    RunInfo,
    RunListResponse,
    UpdateProjectCommand,
    UpdateProjectUseCase,
)
from testhub.depends import get_cache, get_current_user, get_unit_of_work
from testhub.domain.entities import Priority

router = APIRouter(prefix="/projects", tags=["Projects"])


class CreateProjectRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    key: str = Field(
        ...,
        min_length=2,
        max_length=10,
        pattern=r"^[A-Za-z][A-Za-z0-9]*$",
        description="Short project key, stored upper-case",
    )
    description: Optional[str] = Field(None, max_length=2000)


class UpdateProjectRequest(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    key: Optional[str] = Field(
        None,
        min_length=2,
        max_length=10,
        pattern=r"^[A-Za-z][A-Za-z0-9]*$",
        description="Short project key, stored upper-case",
    )
    description: Optional[str] = Field(None, max_length=2000)


class CreateTestRunRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    description: Optional[str] = Field(None, max_length=2000)


class CreateTestCaseRequest(BaseModel):
    title: str = Field(..., min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=5000)
    priority: Priority = Priority.MEDIUM


def _raise_project_error(error):
    if error.code == "UNAUTHORIZED":
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    elif error.code == "PROJECT_ACCESS_DENIED":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "PROJECT_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=ProjectInfo)
async def create_project(
    request: CreateProjectRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Create Project

    The project is owned by the caller and shared with the caller's
    current team.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
        - 409 Conflict: PROJECT_KEY_EXISTS
        - 500 Internal Server Error: ID_GENERATION_FAILED
    """
    command = CreateProjectCommand(
        name=request.name, key=request.key, description=request.description
    )

    use_case = CreateProjectUseCase(
        uow, cache, max_id_attempts=ApplicationConfig.MAX_ID_ATTEMPTS
    )
    result = await use_case.execute(current_user["user_id"], command)

    if result.is_err():
        error = result.error
        if error.code == "PROJECT_KEY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        _raise_project_error(error)

    return result.value


@router.get("", status_code=status.HTTP_200_OK, response_model=ProjectListResponse)
async def list_projects(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """Projects created by the caller or shared with the caller's team"""
    use_case = ListProjectsUseCase(uow, cache)
    result = await use_case.execute(current_user["user_id"])

    if result.is_err():
        _raise_project_error(result.error)

    return result.value


@router.get(
    "/{project_id}", status_code=status.HTTP_200_OK, response_model=ProjectDetailResponse
)
async def get_project(
    project_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Get Project

    Raises:
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: PROJECT_NOT_FOUND
    """
    use_case = GetProjectUseCase(uow, cache)
    result = await use_case.execute(current_user["user_id"], project_id)

    if result.is_err():
        _raise_project_error(result.error)

    return result.value


@router.patch("/{project_id}", status_code=status.HTTP_200_OK, response_model=ProjectInfo)
async def update_project(
    project_id: str,
    request: UpdateProjectRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Update Project

    Only the fields sent are changed. Sending description: null clears it.

    Raises:
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: PROJECT_NOT_FOUND
        - 409 Conflict: PROJECT_KEY_EXISTS
    """
    command = UpdateProjectCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateProjectUseCase(uow, cache)
    result = await use_case.execute(current_user["user_id"], project_id, command)

    if result.is_err():
        error = result.error
        if error.code == "PROJECT_KEY_EXISTS":
            raise ClientError(error, status_code=status.HTTP_409_CONFLICT)
        _raise_project_error(error)

    return result.value


@router.delete(
    "/{project_id}", status_code=status.HTTP_200_OK, response_model=DeleteProjectResponse
)
async def delete_project(
    project_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Delete Project

    Deletes the project with its runs, cases and results.

    Raises:
        - 404 Not Found: PROJECT_NOT_FOUND, also when the caller has no access
    """
    use_case = DeleteProjectUseCase(uow, cache)
    result = await use_case.execute(current_user["user_id"], project_id)

    if result.is_err():
        _raise_project_error(result.error)

    return result.value


@router.post(
    "/{project_id}/runs", status_code=status.HTTP_201_CREATED, response_model=RunInfo
)
async def create_test_run(
    project_id: str,
    request: CreateTestRunRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    cache: ICache = Depends(get_cache),
):
    """
    Create Test Run

    Raises:
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: PROJECT_NOT_FOUND
        - 500 Internal Server Error: ID_GENERATION_FAILED
    """
    command = CreateTestRunCommand(name=request.name, description=request.description)

    use_case = CreateTestRunUseCase(
        uow, cache, max_id_attempts=ApplicationConfig.MAX_ID_ATTEMPTS
    )
    result = await use_case.execute(current_user["user_id"], project_id, command)

    if result.is_err():
        _raise_project_error(result.error)

    return result.value


@router.get(
    "/{project_id}/runs", status_code=status.HTTP_200_OK, response_model=RunListResponse
)
async def list_test_runs(
    project_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    use_case = ListTestRunsUseCase(uow)
    result = await use_case.execute(current_user["user_id"], project_id)

    if result.is_err():
        _raise_project_error(result.error)

    return result.value


@router.post(
    "/{project_id}/cases", status_code=status.HTTP_201_CREATED, response_model=CaseInfo
)
async def create_test_case(
    project_id: str,
    request: CreateTestCaseRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Create Test Case

    Raises:
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: PROJECT_NOT_FOUND
        - 500 Internal Server Error: ID_GENERATION_FAILED
    """
    command = CreateTestCaseCommand(
        title=request.title, description=request.description, priority=request.priority
    )

    use_case = CreateTestCaseUseCase(uow, max_id_attempts=ApplicationConfig.MAX_ID_ATTEMPTS)
    result = await use_case.execute(current_user["user_id"], project_id, command)

    if result.is_err():
        _raise_project_error(result.error)

    return result.value

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from typing import Optional

from config import ApplicationConfig
from testhub.api.error import ClientError, ServerError
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.projects import (
    CreateTestResultCommand,
    CreateTestResultUseCase,
    GetTestRunUseCase,
    ResultInfo,
    RunInfo,
)
from testhub.depends import get_current_user, get_unit_of_work
from testhub.domain.entities import TestStatus

router = APIRouter(prefix="/runs", tags=["Test Runs"])


class CreateTestResultRequest(BaseModel):
    test_case_id: str = Field(..., min_length=1, max_length=64)
    status: TestStatus
    comment: Optional[str] = Field(None, max_length=5000)


@router.get("/{run_id}", status_code=status.HTTP_200_OK, response_model=RunInfo)
async def get_test_run(
    run_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Test Run

    Access is granted through the run's project.

    Raises:
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: TEST_RUN_NOT_FOUND
    """
    use_case = GetTestRunUseCase(uow)
    result = await use_case.execute(current_user["user_id"], run_id)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "PROJECT_ACCESS_DENIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TEST_RUN_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value


@router.post(
    "/{run_id}/results", status_code=status.HTTP_201_CREATED, response_model=ResultInfo
)
async def create_test_result(
    run_id: str,
    request: CreateTestResultRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Record Test Result

    Raises:
        - 400 Bad Request: TEST_CASE_NOT_IN_PROJECT
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: TEST_RUN_NOT_FOUND
        - 500 Internal Server Error: ID_GENERATION_FAILED
    """
    command = CreateTestResultCommand(
        test_case_id=request.test_case_id, status=request.status, comment=request.comment
    )

    use_case = CreateTestResultUseCase(uow, max_id_attempts=ApplicationConfig.MAX_ID_ATTEMPTS)
    result = await use_case.execute(current_user["user_id"], run_id, command)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "TEST_CASE_NOT_IN_PROJECT":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "PROJECT_ACCESS_DENIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TEST_RUN_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field
from typing import Optional

from testhub.api.error import ClientError, ServerError
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.projects import (
    CaseInfo,
    GetTestCaseUseCase,
    UpdateTestCaseCommand,
    UpdateTestCaseUseCase,
)
from testhub.depends import get_current_user, get_unit_of_work
from testhub.domain.entities import Priority

router = APIRouter(prefix="/cases", tags=["Test Cases"])


class UpdateTestCaseRequest(BaseModel):
    title: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = Field(None, max_length=5000)
    priority: Optional[Priority] = None


def _raise_case_error(error):
    if error.code == "UNAUTHORIZED":
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    elif error.code == "PROJECT_ACCESS_DENIED":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    elif error.code == "TEST_CASE_NOT_FOUND":
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    raise ServerError(error)


@router.get("/{case_id}", status_code=status.HTTP_200_OK, response_model=CaseInfo)
async def get_test_case(
    case_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Test Case

    Raises:
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: TEST_CASE_NOT_FOUND
    """
    use_case = GetTestCaseUseCase(uow)
    result = await use_case.execute(current_user["user_id"], case_id)

    if result.is_err():
        _raise_case_error(result.error)

    return result.value


@router.patch("/{case_id}", status_code=status.HTTP_200_OK, response_model=CaseInfo)
async def update_test_case(
    case_id: str,
    request: UpdateTestCaseRequest,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Update Test Case

    Only the fields sent are changed. Sending description: null clears it.

    Raises:
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: TEST_CASE_NOT_FOUND
    """
    command = UpdateTestCaseCommand(**request.model_dump(exclude_unset=True))

    use_case = UpdateTestCaseUseCase(uow)
    result = await use_case.execute(current_user["user_id"], case_id, command)

    if result.is_err():
        _raise_case_error(result.error)

    return result.value

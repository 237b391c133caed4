from fastapi import APIRouter, Depends, status

from testhub.api.error import ClientError, ServerError
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.app.use_cases.projects import GetTestResultUseCase, ResultInfo
from testhub.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/results", tags=["Test Results"])


@router.get("/{result_id}", status_code=status.HTTP_200_OK, response_model=ResultInfo)
async def get_test_result(
    result_id: str,
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Get Test Result

    Access goes result -> run -> project.

    Raises:
        - 403 Forbidden: PROJECT_ACCESS_DENIED
        - 404 Not Found: TEST_RESULT_NOT_FOUND
    """
    use_case = GetTestResultUseCase(uow)
    result = await use_case.execute(current_user["user_id"], result_id)

    if result.is_err():
        error = result.error
        if error.code == "UNAUTHORIZED":
            raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
        elif error.code == "PROJECT_ACCESS_DENIED":
            raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
        elif error.code == "TEST_RESULT_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from sqlalchemy import text
from sqlmodel.ext.asyncio.session import AsyncSession

from testhub.api.error import ServerError
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.depends import get_unit_of_work
from testhub.libs.result import Error

router = APIRouter(tags=["Health"])


class HealthResponse(BaseModel):
    status: str
    database: str


@router.get("/health", status_code=status.HTTP_200_OK, response_model=HealthResponse)
async def health_check(uow: UnitOfWork = Depends(get_unit_of_work)):
    """Liveness plus a round trip to the database"""
    session: AsyncSession = uow.session
    try:
        await session.execute(text("SELECT 1"))
    except Exception as e:
        raise ServerError(Error("DATABASE_UNAVAILABLE", str(e))) from e

    return HealthResponse(status="ok", database="ok")

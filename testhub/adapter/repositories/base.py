"""Write helper translating unique-constraint violations."""

import re
from typing import List, Optional, TypeVar

from sqlalchemy.exc import IntegrityError
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from testhub.app.repositories.errors import DuplicateKeyError

ModelT = TypeVar("ModelT", bound=SQLModel)

# SQLite: "UNIQUE constraint failed: projects.key"
_SQLITE_UNIQUE = re.compile(r"UNIQUE constraint failed: ([\w., ]+)")
# PostgreSQL: 'DETAIL:  Key (key)=(ABC) already exists.'
_POSTGRES_KEY = re.compile(r"Key \(([^)]+)\)=")
# PostgreSQL primary key constraint: '"projects_pkey"'
_POSTGRES_PKEY = re.compile(r'"\w+_pkey"')


def duplicate_key_fields(exc: IntegrityError) -> Optional[List[str]]:
    """
    Columns named by a unique-constraint violation, [] when the violation
    cannot be attributed, None when ``exc`` is some other integrity error.
    """
    message = str(exc.orig) if exc.orig is not None else str(exc)

    match = _SQLITE_UNIQUE.search(message)
    if match:
        return [part.strip().split(".")[-1] for part in match.group(1).split(",")]

    match = _POSTGRES_KEY.search(message)
    if match:
        return [part.strip() for part in match.group(1).split(",")]

    if _POSTGRES_PKEY.search(message):
        return ["id"]

    lowered = message.lower()
    if "duplicate" in lowered or "unique" in lowered:
        return []
    return None


async def save(session: AsyncSession, instance: ModelT, entity: str) -> ModelT:
    """
    Insert or update ``instance`` inside a savepoint.

    A failed write rolls back only the savepoint, so the surrounding
    transaction stays usable for a retry.
    """
    try:
        async with session.begin_nested():
            session.add(instance)
            await session.flush()
    except IntegrityError as exc:
        fields = duplicate_key_fields(exc)
        if fields is None:
            raise
        raise DuplicateKeyError(entity, fields) from exc

    await session.refresh(instance)
    return instance

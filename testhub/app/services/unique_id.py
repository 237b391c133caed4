"""
Create-with-unique-ID retry.

Primary keys are short client-generated strings, so an insert can collide
on ``id``. Such collisions are retried with a fresh ID a bounded number of
times; a collision on any other unique column is a real conflict and is
re-raised immediately.
"""

import logging
from typing import Awaitable, Callable, TypeVar

from testhub.app.repositories.errors import DuplicateKeyError
from testhub.libs.result import Error, Result, Return

logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_MAX_ATTEMPTS = 3


async def create_with_unique_id(
    create: Callable[[str], Awaitable[T]],
    generate_id: Callable[[], str],
    entity: str,
    max_attempts: int = DEFAULT_MAX_ATTEMPTS,
) -> Result[T]:
    """
    Call ``create(new_id)`` until it succeeds or ``max_attempts`` ID
    collisions have happened.

    ``create`` must insert a fresh row on every call. Returns
    ID_GENERATION_FAILED once the attempts are used up.
    """
    for attempt in range(1, max_attempts + 1):
        try:
            created = await create(generate_id())
        except DuplicateKeyError as exc:
            if not exc.involves("id"):
                raise
            if attempt < max_attempts:
                logger.warning(
                    f"{entity} ID collision detected - retrying (attempt {attempt + 1})"
                )
            continue
        return Return.ok(created)

    logger.error(f"{entity} ID collision after {max_attempts} attempts")
    return Return.err(
        Error("ID_GENERATION_FAILED", f"Failed to create {entity} - please try again")
    )

import logging

from testhub.app.services.authorization import load_principal
from testhub.app.services.cache import CacheKeys, ICache, project_list_keys
from testhub.app.services.seat_limit import reconcile_seat_limit
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import DEFAULT_USER_ROLE, AuditEvent
from testhub.libs.result import Error, Result, Return

from .dtos import LeaveTeamResponse

logger = logging.getLogger(__name__)


class LeaveTeamUseCase:
    """
    Leave the caller's current team.

    Business Rules:
    - The team row is locked, then the caller's row is locked and re-read
    - The caller's role resets to the default role
    - The seat-limit flag is recomputed from the remaining members
    - The team itself is kept, even when its last member leaves
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(self, user_id: str) -> Result[LeaveTeamResponse]:
        async with self.uow:
            principal = await load_principal(self.uow, user_id)
            if principal.is_err():
                return principal
            user = principal.value

            if user.team_id is None:
                return Return.err(Error("NOT_IN_TEAM", "You are not part of a team"))

            team = await self.uow.teams.get_by_id_for_update(user.team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            # Membership may have changed before the team lock was taken
            user = await self.uow.users.get_by_id_for_update(user_id)
            if user is None or user.team_id != team.id:
                return Return.err(Error("NOT_IN_TEAM", "You are not part of a team"))

            # Keys of everyone who saw the team's projects, the leaver included
            invalidate = [CacheKeys.team_status(team.id)]
            invalidate += await project_list_keys(self.uow, user.id, team.id)

            previous_role = user.role
            user.team_id = None
            user.role = DEFAULT_USER_ROLE
            await self.uow.users.update(user)

            over_limit = await reconcile_seat_limit(self.uow, team)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=team.id,
                    user_id=user.id,
                    action="member_left",
                    event_metadata={
                        "previous_role": previous_role.value,
                        "over_seat_limit": over_limit,
                    },
                )
            )

            await self.uow.commit()
            team_id = team.id

        logger.info(f"User {user_id} left team {team_id}")
        await self.cache.delete(*invalidate)
        return Return.ok(
            LeaveTeamResponse(status="left", message="Successfully left the team")
        )

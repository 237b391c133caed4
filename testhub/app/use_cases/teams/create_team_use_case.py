from testhub.app.services.authorization import load_principal
from testhub.app.services.cache import CacheKeys, ICache
from testhub.app.services.seat_limit import reconcile_seat_limit
from testhub.app.services.unique_id import DEFAULT_MAX_ATTEMPTS, create_with_unique_id
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.domain.entities import AuditEvent, Team, UserRole
from testhub.domain.ids import generate_team_id
from testhub.libs.result import Error, Result, Return

from .dtos import CreateTeamCommand, CreateTeamResponse, team_info


class CreateTeamUseCase:
    """
    Create a team with the caller as its first member.

    Business Rules:
    - A principal belongs to at most one team, so the caller must not be in one
    - The creator becomes ADMIN of the new team
    - New teams have no subscription and therefore one free seat
    """

    def __init__(
        self,
        uow: UnitOfWork,
        cache: ICache,
        max_id_attempts: int = DEFAULT_MAX_ATTEMPTS,
    ):
        self.uow = uow
        self.cache = cache
        self.max_id_attempts = max_id_attempts

    async def execute(self, user_id: str, command: CreateTeamCommand) -> Result[CreateTeamResponse]:
        async with self.uow:
            principal = await load_principal(self.uow, user_id)
            if principal.is_err():
                return principal
            user = principal.value

            if user.team_id is not None:
                return Return.err(
                    Error(
                        "ALREADY_IN_TEAM",
                        "You are already a member of a team. Leave your current team first.",
                    )
                )

            async def create(team_id: str) -> Team:
                return await self.uow.teams.create(
                    Team(id=team_id, name=command.name, description=command.description)
                )

            created = await create_with_unique_id(
                create, generate_team_id, "team", self.max_id_attempts
            )
            if created.is_err():
                return created
            team = created.value

            user.team_id = team.id
            user.role = UserRole.ADMIN
            await self.uow.users.update(user)

            await reconcile_seat_limit(self.uow, team)

            await self.uow.audit_events.create(
                AuditEvent(
                    team_id=team.id,
                    user_id=user.id,
                    action="team_created",
                    event_metadata={"team_name": team.name},
                )
            )

            await self.uow.commit()
            response = CreateTeamResponse(team=team_info(team), role=user.role.value)

        await self.cache.delete(CacheKeys.projects(user_id))
        return Return.ok(response)

from testhub.app.services.authorization import load_principal
from testhub.app.services.cache import CacheKeys, CacheTTL, ICache
from testhub.app.services.seat_limit import effective_seats, required_removals
from testhub.app.services.unit_of_work import UnitOfWork
from testhub.libs.result import Error, Result, Return

from .dtos import MemberInfo, TeamStatusResponse, team_info


class GetTeamStatusUseCase:
    """
    Seat usage of a team as seen by one of its members.

    Membership is checked against the database on every call; only the
    status payload is cached, and every membership or seat change
    invalidates it.
    """

    def __init__(self, uow: UnitOfWork, cache: ICache):
        self.uow = uow
        self.cache = cache

    async def execute(self, user_id: str, team_id: str) -> Result[TeamStatusResponse]:
        async with self.uow:
            principal = await load_principal(self.uow, user_id)
            if principal.is_err():
                return principal

            team = await self.uow.teams.get_by_id(team_id)
            if team is None:
                return Return.err(Error("TEAM_NOT_FOUND", "Team not found"))

            if principal.value.team_id != team.id:
                return Return.err(Error("NOT_A_MEMBER", "You are not a member of this team"))

            key = CacheKeys.team_status(team.id)
            cached = await self.cache.get(key)
            if cached is not None:
                return Return.ok(TeamStatusResponse(**cached))

            members = await self.uow.users.list_by_team_id(team.id)
            subscription = await self.uow.subscriptions.get_by_team_id(team.id)
            seats = effective_seats(subscription)

            response = TeamStatusResponse(
                team=team_info(team),
                members=[
                    MemberInfo(id=m.id, email=m.email, name=m.name, role=m.role.value)
                    for m in members
                ],
                member_count=len(members),
                seats=seats,
                subscription_status=subscription.status.value if subscription else None,
                over_seat_limit=team.over_seat_limit,
                required_removals=required_removals(len(members), seats),
            )

        await self.cache.set(key, response.model_dump(), CacheTTL.TEAM_STATUS)
        return Return.ok(response)

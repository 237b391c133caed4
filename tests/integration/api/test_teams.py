import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_create_team(client: AsyncClient, register):
    owner = await register("owner@example.com")

    response = await client.post(
        "/teams", json={"name": "QA Guild", "description": "Testers"}, headers=owner["headers"]
    )

    assert response.status_code == 201
    data = response.json()
    assert data["role"] == "ADMIN"
    assert data["team"]["name"] == "QA Guild"
    assert data["team"]["over_seat_limit"] is False
    assert len(data["team"]["id"]) == 6

    status_response = await client.get(
        f"/teams/{data['team']['id']}/status", headers=owner["headers"]
    )
    assert status_response.status_code == 200
    status_data = status_response.json()
    assert status_data["member_count"] == 1
    assert status_data["seats"] == 1
    assert status_data["subscription_status"] is None
    assert status_data["required_removals"] == 0


@pytest.mark.asyncio
async def test_cannot_create_second_team(client: AsyncClient, register, create_team):
    owner = await register("owner@example.com")
    await create_team(owner)

    response = await client.post("/teams", json={"name": "Another"}, headers=owner["headers"])

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "ALREADY_IN_TEAM"


@pytest.mark.asyncio
async def test_team_status_for_outsider(client: AsyncClient, register, create_team):
    owner = await register("owner@example.com")
    outsider = await register("outsider@example.com")
    team_id = await create_team(owner)

    response = await client.get(f"/teams/{team_id}/status", headers=outsider["headers"])
    missing = await client.get("/teams/NOPE00/status", headers=outsider["headers"])

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "NOT_A_MEMBER"
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_team_projects_shared_with_members(
    client: AsyncClient, register, create_team, sync_subscription, add_member
):
    owner = await register("owner@example.com")
    member = await register("member@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=3)
    await add_member(owner, team_id, member)

    created = await client.post(
        "/projects", json={"name": "Web", "key": "WEB"}, headers=owner["headers"]
    )
    project = created.json()
    assert project["team_id"] == team_id

    listed = await client.get("/projects", headers=member["headers"])
    assert [p["id"] for p in listed.json()["projects"]] == [project["id"]]

    # Leaving the team revokes the member's access but not the creator's
    leave = await client.post("/teams/leave", headers=member["headers"])
    assert leave.status_code == 200

    member_view = await client.get(f"/projects/{project['id']}", headers=member["headers"])
    assert member_view.status_code == 403
    assert (await client.get("/projects", headers=member["headers"])).json()["projects"] == []

    await client.post("/teams/leave", headers=owner["headers"])
    owner_view = await client.get(f"/projects/{project['id']}", headers=owner["headers"])
    assert owner_view.status_code == 200


@pytest.mark.asyncio
async def test_leave_team_without_team(client: AsyncClient, register):
    user = await register("solo@example.com")

    response = await client.post("/teams/leave", headers=user["headers"])

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NOT_IN_TEAM"


@pytest.mark.asyncio
async def test_update_seats(client: AsyncClient, register, create_team, sync_subscription, add_member):
    owner = await register("owner@example.com")
    member = await register("member@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=2)
    await add_member(owner, team_id, member)

    below = await client.put(f"/teams/{team_id}/seats", json={"seats": 1}, headers=owner["headers"])
    assert below.status_code == 400
    assert below.json()["error"]["code"] == "SEATS_BELOW_MEMBERS"
    assert below.json()["error"]["details"]["member_count"] == 2

    by_member = await client.put(
        f"/teams/{team_id}/seats", json={"seats": 5}, headers=member["headers"]
    )
    assert by_member.status_code == 403

    response = await client.put(f"/teams/{team_id}/seats", json={"seats": 5}, headers=owner["headers"])
    assert response.status_code == 200
    assert response.json() == {"seats": 5, "member_count": 2, "over_seat_limit": False}

    status_response = await client.get(f"/teams/{team_id}/status", headers=owner["headers"])
    assert status_response.json()["seats"] == 5


@pytest.mark.asyncio
async def test_update_seats_requires_subscription(client: AsyncClient, register, create_team):
    owner = await register("owner@example.com")
    team_id = await create_team(owner)

    response = await client.put(f"/teams/{team_id}/seats", json={"seats": 3}, headers=owner["headers"])

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NO_ACTIVE_SUBSCRIPTION"

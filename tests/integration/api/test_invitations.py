import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_invite_and_accept(client: AsyncClient, register, create_team, sync_subscription):
    owner = await register("owner@example.com")
    invitee = await register("invitee@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=3)

    invite = await client.post(
        f"/teams/{team_id}/invite",
        json={"email": "Invitee@Example.com", "role": "MANAGER"},
        headers=owner["headers"],
    )
    assert invite.status_code == 201
    data = invite.json()
    assert data["invitation"]["email"] == "invitee@example.com"
    assert data["invitation"]["status"] == "PENDING"
    assert len(data["token"]) == 64

    pending = await client.get(f"/teams/{team_id}/invitations", headers=owner["headers"])
    assert len(pending.json()["invitations"]) == 1

    accept = await client.post(f"/invitations/{data['token']}/accept", headers=invitee["headers"])
    assert accept.status_code == 200
    assert accept.json()["team"] == {"id": team_id, "name": "QA Guild", "role": "MANAGER"}
    assert accept.json()["over_seat_limit"] is False

    again = await client.post(f"/invitations/{data['token']}/accept", headers=invitee["headers"])
    assert again.status_code == 400
    assert again.json()["error"]["code"] == "INVITATION_NOT_PENDING"

    status_response = await client.get(f"/teams/{team_id}/status", headers=invitee["headers"])
    assert status_response.json()["member_count"] == 2


@pytest.mark.asyncio
async def test_free_tier_team_cannot_invite(client: AsyncClient, register, create_team):
    owner = await register("owner@example.com")
    team_id = await create_team(owner)

    response = await client.post(
        f"/teams/{team_id}/invite", json={"email": "new@example.com"}, headers=owner["headers"]
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "NO_SEATS_AVAILABLE"


@pytest.mark.asyncio
async def test_tester_cannot_invite(
    client: AsyncClient, register, create_team, sync_subscription, add_member
):
    owner = await register("owner@example.com")
    tester = await register("tester@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=5)
    await add_member(owner, team_id, tester, role="TESTER")

    response = await client.post(
        f"/teams/{team_id}/invite", json={"email": "new@example.com"}, headers=tester["headers"]
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "INSUFFICIENT_ROLE"


@pytest.mark.asyncio
async def test_duplicate_invitation(client: AsyncClient, register, create_team, sync_subscription):
    owner = await register("owner@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=3)

    first = await client.post(
        f"/teams/{team_id}/invite", json={"email": "new@example.com"}, headers=owner["headers"]
    )
    second = await client.post(
        f"/teams/{team_id}/invite", json={"email": "NEW@example.com"}, headers=owner["headers"]
    )

    assert first.status_code == 201
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "INVITE_ALREADY_EXISTS"


@pytest.mark.asyncio
async def test_inactive_subscription_blocks_invites(
    client: AsyncClient, register, create_team, sync_subscription
):
    owner = await register("owner@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=3, status="UNPAID")

    response = await client.post(
        f"/teams/{team_id}/invite", json={"email": "new@example.com"}, headers=owner["headers"]
    )

    assert response.status_code == 402
    assert response.json()["error"]["code"] == "SUBSCRIPTION_INACTIVE"


@pytest.mark.asyncio
async def test_accept_with_other_email(client: AsyncClient, register, create_team, sync_subscription):
    owner = await register("owner@example.com")
    other = await register("other@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=3)
    invite = await client.post(
        f"/teams/{team_id}/invite", json={"email": "new@example.com"}, headers=owner["headers"]
    )

    response = await client.post(
        f"/invitations/{invite.json()['token']}/accept", headers=other["headers"]
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "EMAIL_MISMATCH"


@pytest.mark.asyncio
async def test_unknown_token(client: AsyncClient, register):
    user = await register("user@example.com")

    response = await client.post(f"/invitations/{'0' * 64}/accept", headers=user["headers"])

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "INVITATION_NOT_FOUND"


@pytest.mark.asyncio
async def test_decline_invitation(client: AsyncClient, register, create_team, sync_subscription):
    owner = await register("owner@example.com")
    invitee = await register("invitee@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=3)
    invite = await client.post(
        f"/teams/{team_id}/invite", json={"email": "invitee@example.com"}, headers=owner["headers"]
    )
    token = invite.json()["token"]

    response = await client.post(f"/invitations/{token}/decline", headers=invitee["headers"])

    assert response.status_code == 200
    accept = await client.post(f"/invitations/{token}/accept", headers=invitee["headers"])
    assert accept.status_code == 400


@pytest.mark.asyncio
async def test_cancel_invitation(client: AsyncClient, register, create_team, sync_subscription):
    owner = await register("owner@example.com")
    invitee = await register("invitee@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=3)
    invite = await client.post(
        f"/teams/{team_id}/invite", json={"email": "invitee@example.com"}, headers=owner["headers"]
    )
    invitation_id = invite.json()["invitation"]["id"]

    response = await client.delete(
        f"/teams/{team_id}/invitations/{invitation_id}", headers=owner["headers"]
    )
    assert response.status_code == 200
    assert response.json()["status"] == "canceled"

    again = await client.delete(
        f"/teams/{team_id}/invitations/{invitation_id}", headers=owner["headers"]
    )
    assert again.status_code == 400

    accept = await client.post(
        f"/invitations/{invite.json()['token']}/accept", headers=invitee["headers"]
    )
    assert accept.status_code == 400
    assert accept.json()["error"]["code"] == "INVITATION_NOT_PENDING"


@pytest.mark.asyncio
async def test_outsider_does_not_use_up_team_invite_budget(
    client: AsyncClient, register, create_team, sync_subscription
):
    owner = await register("owner@example.com")
    outsider = await register("outsider@example.com")
    team_id = await create_team(owner)
    await sync_subscription(team_id, seats=3)

    for _ in range(20):
        response = await client.post(
            f"/teams/{team_id}/invite",
            json={"email": "new@example.com"},
            headers=outsider["headers"],
        )
        assert response.status_code == 403

    response = await client.post(
        f"/teams/{team_id}/invite", json={"email": "new@example.com"}, headers=owner["headers"]
    )

    assert response.status_code == 201

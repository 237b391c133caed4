import pytest
from httpx import AsyncClient


async def _create_project(client, user, key="WEB", name="Web App"):
    response = await client.post(
        "/projects", json={"name": name, "key": key}, headers=user["headers"]
    )
    assert response.status_code == 201, response.text
    return response.json()


@pytest.mark.asyncio
async def test_create_and_get_project(client: AsyncClient, register):
    user = await register("owner@example.com")

    project = await _create_project(client, user, key="web")

    assert project["key"] == "WEB"
    assert project["created_by"] == user["id"]
    assert project["team_id"] is None
    assert len(project["id"]) == 8

    response = await client.get(f"/projects/{project['id']}", headers=user["headers"])
    assert response.status_code == 200
    assert response.json()["project"]["id"] == project["id"]
    assert response.json()["test_run_count"] == 0


@pytest.mark.asyncio
async def test_duplicate_project_key(client: AsyncClient, register):
    first = await register("first@example.com")
    second = await register("second@example.com")
    await _create_project(client, first, key="WEB")

    response = await client.post(
        "/projects", json={"name": "Other", "key": "web"}, headers=second["headers"]
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "PROJECT_KEY_EXISTS"


@pytest.mark.asyncio
async def test_personal_project_is_private(client: AsyncClient, register):
    owner = await register("owner@example.com")
    stranger = await register("stranger@example.com")
    project = await _create_project(client, owner)

    get_response = await client.get(f"/projects/{project['id']}", headers=stranger["headers"])
    delete_response = await client.delete(
        f"/projects/{project['id']}", headers=stranger["headers"]
    )
    list_response = await client.get("/projects", headers=stranger["headers"])

    assert get_response.status_code == 403
    assert get_response.json()["error"]["code"] == "PROJECT_ACCESS_DENIED"
    assert delete_response.status_code == 404
    assert delete_response.json()["error"]["code"] == "PROJECT_NOT_FOUND"
    assert list_response.json()["projects"] == []


@pytest.mark.asyncio
async def test_unknown_project(client: AsyncClient, register):
    user = await register("owner@example.com")

    response = await client.get("/projects/missing1", headers=user["headers"])

    assert response.status_code == 404


@pytest.mark.asyncio
async def test_runs_cases_and_results(client: AsyncClient, register):
    user = await register("owner@example.com")
    project = await _create_project(client, user)

    run = await client.post(
        f"/projects/{project['id']}/runs", json={"name": "Smoke"}, headers=user["headers"]
    )
    case = await client.post(
        f"/projects/{project['id']}/cases",
        json={"title": "Login works", "priority": "HIGH"},
        headers=user["headers"],
    )
    assert run.status_code == 201
    assert case.status_code == 201
    run_id = run.json()["id"]
    case_id = case.json()["id"]
    assert len(run_id) == 4
    assert len(case_id) == 3

    result = await client.post(
        f"/runs/{run_id}/results",
        json={"test_case_id": case_id, "status": "PASSED", "comment": "ok"},
        headers=user["headers"],
    )
    assert result.status_code == 201
    result_id = result.json()["id"]

    runs = await client.get(f"/projects/{project['id']}/runs", headers=user["headers"])
    assert [r["id"] for r in runs.json()["test_runs"]] == [run_id]

    assert (await client.get(f"/runs/{run_id}", headers=user["headers"])).status_code == 200
    assert (await client.get(f"/cases/{case_id}", headers=user["headers"])).status_code == 200
    fetched = await client.get(f"/results/{result_id}", headers=user["headers"])
    assert fetched.status_code == 200
    assert fetched.json()["status"] == "PASSED"

    detail = await client.get(f"/projects/{project['id']}", headers=user["headers"])
    assert detail.json()["test_run_count"] == 1


@pytest.mark.asyncio
async def test_result_with_case_from_other_project(client: AsyncClient, register):
    user = await register("owner@example.com")
    web = await _create_project(client, user, key="WEB")
    api = await _create_project(client, user, key="API")

    run = await client.post(
        f"/projects/{web['id']}/runs", json={"name": "Smoke"}, headers=user["headers"]
    )
    case = await client.post(
        f"/projects/{api['id']}/cases", json={"title": "Ping"}, headers=user["headers"]
    )

    response = await client.post(
        f"/runs/{run.json()['id']}/results",
        json={"test_case_id": case.json()["id"], "status": "FAILED"},
        headers=user["headers"],
    )

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "TEST_CASE_NOT_IN_PROJECT"


@pytest.mark.asyncio
async def test_run_of_private_project_is_hidden(client: AsyncClient, register):
    owner = await register("owner@example.com")
    stranger = await register("stranger@example.com")
    project = await _create_project(client, owner)
    run = await client.post(
        f"/projects/{project['id']}/runs", json={"name": "Smoke"}, headers=owner["headers"]
    )

    response = await client.get(f"/runs/{run.json()['id']}", headers=stranger["headers"])

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_delete_project(client: AsyncClient, register):
    user = await register("owner@example.com")
    project = await _create_project(client, user)
    run = await client.post(
        f"/projects/{project['id']}/runs", json={"name": "Smoke"}, headers=user["headers"]
    )
    case = await client.post(
        f"/projects/{project['id']}/cases", json={"title": "Login"}, headers=user["headers"]
    )
    await client.post(
        f"/runs/{run.json()['id']}/results",
        json={"test_case_id": case.json()["id"], "status": "PASSED"},
        headers=user["headers"],
    )

    response = await client.delete(f"/projects/{project['id']}", headers=user["headers"])

    assert response.status_code == 200
    assert response.json()["status"] == "deleted"
    assert (await client.get(f"/projects/{project['id']}", headers=user["headers"])).status_code == 404
    assert (await client.get(f"/runs/{run.json()['id']}", headers=user["headers"])).status_code == 404
    assert (await client.get("/projects", headers=user["headers"])).json()["projects"] == []


@pytest.mark.asyncio
async def test_update_project(client: AsyncClient, register):
    user = await register("owner@example.com")
    project = await _create_project(client, user)
    await client.get(f"/projects/{project['id']}", headers=user["headers"])

    response = await client.patch(
        f"/projects/{project['id']}",
        json={"name": "Storefront", "key": "shop", "description": "Public site"},
        headers=user["headers"],
    )

    assert response.status_code == 200
    assert response.json()["name"] == "Storefront"
    assert response.json()["key"] == "SHOP"

    cleared = await client.patch(
        f"/projects/{project['id']}", json={"description": None}, headers=user["headers"]
    )
    assert cleared.json()["description"] is None
    assert cleared.json()["name"] == "Storefront"

    detail = await client.get(f"/projects/{project['id']}", headers=user["headers"])
    assert detail.json()["project"]["name"] == "Storefront"
    assert detail.json()["project"]["description"] is None


@pytest.mark.asyncio
async def test_update_project_to_taken_key(client: AsyncClient, register):
    user = await register("owner@example.com")
    await _create_project(client, user, key="WEB")
    project = await _create_project(client, user, key="API", name="Api")

    response = await client.patch(
        f"/projects/{project['id']}", json={"key": "web"}, headers=user["headers"]
    )

    assert response.status_code == 409
    assert response.json()["error"]["code"] == "PROJECT_KEY_EXISTS"
    detail = await client.get(f"/projects/{project['id']}", headers=user["headers"])
    assert detail.json()["project"]["key"] == "API"


@pytest.mark.asyncio
async def test_stranger_cannot_update_project_or_case(client: AsyncClient, register):
    owner = await register("owner@example.com")
    stranger = await register("stranger@example.com")
    project = await _create_project(client, owner)
    case = await client.post(
        f"/projects/{project['id']}/cases", json={"title": "Login"}, headers=owner["headers"]
    )

    project_response = await client.patch(
        f"/projects/{project['id']}", json={"name": "Mine"}, headers=stranger["headers"]
    )
    case_response = await client.patch(
        f"/cases/{case.json()['id']}", json={"title": "Mine"}, headers=stranger["headers"]
    )

    assert project_response.status_code == 403
    assert case_response.status_code == 403
    assert case_response.json()["error"]["code"] == "PROJECT_ACCESS_DENIED"


@pytest.mark.asyncio
async def test_update_test_case(client: AsyncClient, register):
    user = await register("owner@example.com")
    project = await _create_project(client, user)
    case = await client.post(
        f"/projects/{project['id']}/cases",
        json={"title": "Login", "description": "Happy path"},
        headers=user["headers"],
    )

    response = await client.patch(
        f"/cases/{case.json()['id']}",
        json={"title": "Login with SSO", "priority": "CRITICAL"},
        headers=user["headers"],
    )

    assert response.status_code == 200
    assert response.json()["title"] == "Login with SSO"
    assert response.json()["priority"] == "CRITICAL"
    assert response.json()["description"] == "Happy path"

    missing = await client.patch("/cases/ZZZ", json={"title": "x"}, headers=user["headers"])
    assert missing.status_code == 404

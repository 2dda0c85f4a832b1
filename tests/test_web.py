"""
Web Tests

Login gate, HTML pages and the JSON API, driven through the ASGI app.
"""

import asyncio

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.dependencies.database import get_db
from app.main import app


@pytest_asyncio.fixture
async def client(session_factory):
    """Anonymous client against the app, backed by the test database"""

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest_asyncio.fixture
async def user_client(client):
    """Client logged in as the default account"""
    response = await client.post("/login", data={"username": "user", "password": "123456"})
    assert response.status_code == 303
    return client


async def create_accident(client, name="Crash", type_id=1, rule_ids=(1, 2)):
    return await client.post(
        "/accidents/save",
        data={
            "name": name,
            "text": "Two cars collided",
            "address": "Lenina 10",
            "type_id": str(type_id),
            "rule_ids": [str(r) for r in rule_ids],
        },
    )


class TestLoginGate:
    """Unauthenticated access and login/logout redirects"""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("path", ["/", "/accidents/create", "/accidents/1", "/api/accidents"])
    async def test_protected_paths_redirect_to_login(self, client, path):
        response = await client.get(path)
        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    @pytest.mark.asyncio
    async def test_login_page_is_public(self, client):
        response = await client.get("/login")
        assert response.status_code == 200
        assert "<form" in response.text

    @pytest.mark.asyncio
    async def test_login_page_messages(self, client):
        assert "Invalid username or password" in (await client.get("/login?error=true")).text
        assert "logged out" in (await client.get("/login?logout=true")).text

    @pytest.mark.asyncio
    async def test_successful_login_redirects_to_root(self, client):
        response = await client.post("/login", data={"username": "user", "password": "123456"})
        assert response.status_code == 303
        assert response.headers["location"] == "/"

        response = await client.get("/")
        assert response.status_code == 200

    @pytest.mark.asyncio
    async def test_failed_login_redirects_with_error(self, client):
        response = await client.post("/login", data={"username": "user", "password": "nope"})
        assert response.status_code == 303
        assert response.headers["location"] == "/login?error=true"

        response = await client.get("/")
        assert response.status_code == 302

    @pytest.mark.asyncio
    async def test_logout_invalidates_session(self, user_client):
        response = await user_client.get("/logout")
        assert response.status_code == 303
        assert response.headers["location"] == "/login?logout=true"

        response = await user_client.get("/")
        assert response.status_code == 302
        assert response.headers["location"] == "/login"

    @pytest.mark.asyncio
    async def test_login_keeps_event_loop_responsive(self, client):
        """Password hashing must not stall other tasks on the loop"""
        loop = asyncio.get_running_loop()
        longest_gap = 0.0
        stop = asyncio.Event()

        async def ticker():
            nonlocal longest_gap
            last = loop.time()
            while not stop.is_set():
                await asyncio.sleep(0.005)
                now = loop.time()
                longest_gap = max(longest_gap, now - last)
                last = now

        task = asyncio.create_task(ticker())
        await asyncio.sleep(0.01)
        try:
            response = await client.post(
                "/login", data={"username": "user", "password": "123456"}
            )
        finally:
            stop.set()
            await task

        assert response.status_code == 303
        assert longest_gap < 0.1


class TestAccidentPages:
    @pytest.mark.asyncio
    async def test_create_form_lists_types_and_rules(self, user_client):
        response = await user_client.get("/accidents/create")
        assert response.status_code == 200
        assert "Car and bicycle" in response.text
        assert "Article 4" in response.text

    @pytest.mark.asyncio
    async def test_create_and_list(self, user_client):
        response = await create_accident(user_client, name="Crossing crash")
        assert response.status_code == 303
        assert response.headers["location"] == "/"

        page = await user_client.get("/")
        assert "Crossing crash" in page.text
        assert "Article 1, Article 2" in page.text

    @pytest.mark.asyncio
    async def test_create_with_unknown_type(self, user_client):
        response = await create_accident(user_client, type_id=99)
        assert response.status_code == 400
        assert "Accident type 99 not found" in response.text

        accidents = (await user_client.get("/api/accidents")).json()
        assert accidents == []

    @pytest.mark.asyncio
    async def test_edit_update_delete(self, user_client):
        await create_accident(user_client)
        accident_id = (await user_client.get("/api/accidents")).json()[0]["id"]

        form = await user_client.get(f"/accidents/{accident_id}")
        assert form.status_code == 200
        assert "Edit accident" in form.text

        response = await user_client.post(
            f"/accidents/{accident_id}/update",
            data={"name": "Renamed", "type_id": "2", "rule_ids": ["3"]},
        )
        assert response.status_code == 303

        accident = (await user_client.get(f"/api/accidents/{accident_id}")).json()
        assert accident["name"] == "Renamed"
        assert accident["type"]["id"] == 2
        assert [r["id"] for r in accident["rules"]] == [3]

        response = await user_client.post(f"/accidents/{accident_id}/delete")
        assert response.status_code == 303
        assert (await user_client.get(f"/api/accidents/{accident_id}")).status_code == 404

    @pytest.mark.asyncio
    async def test_missing_accident_pages(self, user_client):
        assert (await user_client.get("/accidents/404")).status_code == 404
        response = await user_client.post(
            "/accidents/404/update", data={"name": "Ghost", "type_id": "1"}
        )
        assert response.status_code == 404
        assert (await user_client.post("/accidents/404/delete")).status_code == 404


class TestApi:
    @pytest.mark.asyncio
    async def test_reference_data(self, user_client):
        types = (await user_client.get("/api/accident-types")).json()
        assert [t["name"] for t in types] == ["Two cars", "Car and pedestrian", "Car and bicycle"]

        rules = (await user_client.get("/api/rules")).json()
        assert [r["id"] for r in rules] == [1, 2, 3, 4]

    @pytest.mark.asyncio
    async def test_accident_json(self, user_client):
        await create_accident(user_client, rule_ids=(2, 4))

        accidents = (await user_client.get("/api/accidents")).json()
        assert len(accidents) == 1
        assert accidents[0]["type"] == {"id": 1, "name": "Two cars"}
        assert sorted(r["id"] for r in accidents[0]["rules"]) == [2, 4]

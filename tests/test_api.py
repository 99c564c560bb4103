"""Integration tests for the Athenaeum API."""

import asyncio

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.dependencies import get_recommender
from app.main import app
from app.ports.recommender import (
    RecommendationRequest,
    RecommendationResult,
    RecommenderPort,
)
from app.services.recommendation import RecommendationClient
from app.sessions import registry


# ── Auth Tests ─────────────────────────────────────


@pytest.mark.asyncio
async def test_student_login(client: AsyncClient):
    resp = await client.post("/auth/login", json={"role": "STUDENT", "username": "S1024"})
    assert resp.status_code == 200
    data = resp.json()
    assert data["access_token"]
    assert data["username"] == "S1024"
    assert data["view"] == "CATALOG"


@pytest.mark.asyncio
async def test_student_login_requires_id(client: AsyncClient):
    resp = await client.post("/auth/login", json={"role": "STUDENT", "username": "   "})
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_admin_login_defaults_username(client: AsyncClient, admin_password: str):
    resp = await client.post(
        "/auth/login", json={"role": "ADMIN", "password": admin_password}
    )
    assert resp.status_code == 200
    assert resp.json()["username"] == "Admin"
    assert resp.json()["view"] == "ADMIN_DASHBOARD"


@pytest.mark.asyncio
async def test_admin_login_wrong_password(client: AsyncClient):
    resp = await client.post(
        "/auth/login", json={"role": "ADMIN", "username": "root", "password": "admin"}
    )
    assert resp.status_code == 401


@pytest.mark.asyncio
async def test_profile(student_client: AsyncClient):
    resp = await student_client.get("/auth/profile")
    assert resp.status_code == 200
    data = resp.json()
    assert data["username"] == "S1024"
    assert data["total_seats"] == 120
    assert 0 <= data["available_seats"] <= 120


@pytest.mark.asyncio
async def test_logout_discards_session(student_client: AsyncClient):
    token = student_client.headers["Authorization"].removeprefix("Bearer ")
    entry = await registry.get(token)
    assert entry.simulator.running

    await student_client.post("/wishlist/1")
    resp = await student_client.post("/auth/logout")
    assert resp.status_code == 204
    assert len(registry) == 0
    # Token should now be invalid
    resp2 = await student_client.get("/auth/profile")
    assert resp2.status_code == 401
    assert not entry.simulator.running


@pytest.mark.asyncio
async def test_login_beyond_capacity_evicts_oldest(client: AsyncClient, monkeypatch):
    monkeypatch.setattr(registry, "max_sessions", 5)
    tokens = []
    for i in range(20):
        resp = await client.post("/auth/login", json={"role": "STUDENT", "username": f"S{i}"})
        tokens.append(resp.json()["access_token"])

    assert len(registry) == 5
    resp = await client.get(
        "/auth/profile", headers={"Authorization": f"Bearer {tokens[0]}"}
    )
    assert resp.status_code == 401
    resp = await client.get(
        "/auth/profile", headers={"Authorization": f"Bearer {tokens[-1]}"}
    )
    assert resp.json()["username"] == "S19"


@pytest.mark.asyncio
async def test_shutdown_closes_sessions():
    async with app.router.lifespan_context(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as c:
            resp = await c.post("/auth/login", json={"role": "STUDENT", "username": "S1"})
            entry = await registry.get(resp.json()["access_token"])
            assert entry.simulator.running

    assert len(registry) == 0
    assert not entry.simulator.running
    feeds = [
        t for t in asyncio.all_tasks()
        if t.get_coro().__qualname__ == "SeatSimulator._run"
    ]
    assert feeds == []


@pytest.mark.asyncio
async def test_unauthenticated_access(client: AsyncClient):
    resp = await client.get("/books")
    assert resp.status_code in (401, 403)


# ── Navigation Tests ───────────────────────────────


@pytest.mark.asyncio
async def test_navigate_clears_selection(student_client: AsyncClient):
    await student_client.get("/books/2")
    resp = await student_client.post("/session/navigate", json={"view": "SEAT_MAP"})
    assert resp.status_code == 200
    assert resp.json()["view"] == "SEAT_MAP"
    assert resp.json()["selected_book_id"] is None


@pytest.mark.asyncio
async def test_student_cannot_open_dashboard(student_client: AsyncClient):
    resp = await student_client.post("/session/navigate", json={"view": "ADMIN_DASHBOARD"})
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_home_depends_on_role(admin_client: AsyncClient):
    await admin_client.post("/session/navigate", json={"view": "WISHLIST"})
    resp = await admin_client.post("/session/home")
    assert resp.json()["view"] == "ADMIN_DASHBOARD"


# ── Catalog Tests ──────────────────────────────────


@pytest.mark.asyncio
async def test_list_and_search_books(student_client: AsyncClient):
    resp = await student_client.get("/books")
    assert resp.status_code == 200
    assert len(resp.json()) == 8

    resp = await student_client.get("/books", params={"q": "ORWELL"})
    assert [b["title"] for b in resp.json()] == ["1984"]

    resp = await student_client.get("/books", params={"q": "classic"})
    assert {b["id"] for b in resp.json()} == {"1", "3"}


@pytest.mark.asyncio
async def test_view_book_records_history(student_client: AsyncClient):
    await student_client.get("/books/1")
    await student_client.get("/books/1")
    resp = await student_client.get("/books/4")
    assert resp.status_code == 200
    assert resp.json()["in_wishlist"] is False

    session = (await student_client.get("/session")).json()
    assert session["view"] == "DETAILS"
    assert session["selected_book_id"] == "4"

    history = (await student_client.get("/history")).json()
    assert [b["id"] for b in history] == ["1", "4"]


@pytest.mark.asyncio
async def test_view_unknown_book(student_client: AsyncClient):
    resp = await student_client.get("/books/nope")
    assert resp.status_code == 404


@pytest.mark.asyncio
async def test_events_log_activity(student_client: AsyncClient):
    await student_client.get("/books/1")
    await student_client.get("/books/1")
    await student_client.get("/books/2")
    await student_client.post("/books/2/borrow")
    await student_client.post("/wishlist/2")
    await student_client.post("/session/navigate", json={"view": "SEAT_MAP"})

    resp = await student_client.get("/events")
    assert resp.status_code == 200
    assert [(e["kind"], e["book_id"]) for e in resp.json()] == [
        ("view", "1"),
        ("view", "2"),
        ("borrow", "2"),
        ("wishlist_add", "2"),
    ]

# ── Admin Inventory Tests ──────────────────────────


@pytest.mark.asyncio
async def test_add_book(admin_client: AsyncClient):
    resp = await admin_client.post(
        "/books", json={"title": "Neuromancer", "author": "William Gibson"}
    )
    assert resp.status_code == 201
    book = resp.json()
    assert book["genre"] == "General"
    assert book["status"] == "available"
    assert book["rating"] == 4.0
    assert book["description"] == "A newly added book to the collection."

    listed = (await admin_client.get("/books")).json()
    assert listed[0]["id"] == book["id"]


@pytest.mark.asyncio
async def test_add_book_requires_title(admin_client: AsyncClient):
    resp = await admin_client.post("/books", json={"title": "  ", "author": "Someone"})
    assert resp.status_code == 422


@pytest.mark.asyncio
async def test_student_cannot_edit_inventory(student_client: AsyncClient):
    resp = await student_client.post("/books", json={"title": "X", "author": "Y"})
    assert resp.status_code == 403
    resp = await student_client.delete("/books/1")
    assert resp.status_code == 403
    resp = await student_client.post("/books/1/toggle-stock")
    assert resp.status_code == 403


@pytest.mark.asyncio
async def test_toggle_stock(admin_client: AsyncClient):
    resp = await admin_client.post("/books/1/toggle-stock")
    assert resp.json()["status"] == "unavailable"
    resp = await admin_client.post("/books/1/toggle-stock")
    assert resp.json()["status"] == "available"


@pytest.mark.asyncio
async def test_delete_book_removes_everywhere(admin_client: AsyncClient):
    await admin_client.post("/wishlist/2")
    await admin_client.post("/books/2/borrow")

    resp = await admin_client.delete("/books/2")
    assert resp.status_code == 204

    assert (await admin_client.get("/books/2")).status_code == 404
    assert (await admin_client.get("/wishlist")).json() == []
    assert (await admin_client.get("/borrowed")).json() == []


# ── Borrow / Return Tests ─────────────────────────


@pytest.mark.asyncio
async def test_borrow_and_return(student_client: AsyncClient):
    resp = await student_client.post("/books/1/borrow")
    assert resp.status_code == 201
    assert resp.json()["status"] == "unavailable"
    assert resp.json()["borrowed_by_me"] is True

    # Double borrow should fail
    resp = await student_client.post("/books/1/borrow")
    assert resp.status_code == 409

    resp = await student_client.post("/books/1/return")
    assert resp.status_code == 200
    assert resp.json()["status"] == "available"
    assert (await student_client.get("/borrowed")).json() == []


@pytest.mark.asyncio
async def test_borrow_out_of_stock(student_client: AsyncClient):
    resp = await student_client.post("/books/3/borrow")
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_return_not_borrowed(student_client: AsyncClient):
    resp = await student_client.post("/books/1/return")
    assert resp.status_code == 409


# ── Wishlist Tests ─────────────────────────────────


@pytest.mark.asyncio
async def test_wishlist_toggle(student_client: AsyncClient):
    resp = await student_client.post("/wishlist/5")
    assert resp.json() == {"book_id": "5", "in_wishlist": True}
    assert [b["id"] for b in (await student_client.get("/wishlist")).json()] == ["5"]
    assert (await student_client.get("/session")).json()["wishlist_count"] == 1

    resp = await student_client.post("/wishlist/5")
    assert resp.json()["in_wishlist"] is False
    assert (await student_client.get("/wishlist")).json() == []


# ── Seats Tests ────────────────────────────────────


@pytest.mark.asyncio
async def test_seat_map(student_client: AsyncClient):
    resp = await student_client.get("/seats")
    assert resp.status_code == 200
    data = resp.json()
    assert data["total"] == 120
    assert [(z["zone"], z["total"]) for z in data["zones"]] == [
        ("Main Reading Hall", 60),
        ("Quiet Zone", 30),
        ("Media Center", 30),
    ]
    assert data["available"] == sum(z["available"] for z in data["zones"])


# ── Intelligence Tests ─────────────────────────────


@pytest.mark.asyncio
async def test_recommendations_require_selection(student_client: AsyncClient):
    resp = await student_client.get("/recommendations")
    assert resp.status_code == 409


@pytest.mark.asyncio
async def test_recommendations_fallback(student_client: AsyncClient):
    await student_client.get("/books/2")
    resp = await student_client.get("/recommendations")
    assert resp.status_code == 200
    data = resp.json()
    assert data["focal_book_id"] == "2"
    assert [b["id"] for b in data["books"]] == ["1", "3", "4"]
    assert "API key missing" in data["reasoning"]

    session = (await student_client.get("/session")).json()
    assert session["recommendations"]["focal_book_id"] == "2"
    assert [b["id"] for b in session["recommendations"]["books"]] == ["1", "3", "4"]

    await student_client.get("/books/5")
    assert (await student_client.get("/session")).json()["recommendations"] is None


class _FixedRecommender(RecommenderPort):
    def __init__(self, ids: list[str]) -> None:
        self._ids = ids

    async def recommend(self, request: RecommendationRequest) -> RecommendationResult:
        return RecommendationResult(recommended_book_ids=self._ids, reasoning="Because.")


@pytest.mark.asyncio
async def test_recommendations_drop_unknown_ids(student_client: AsyncClient):
    app.dependency_overrides[get_recommender] = lambda: _FixedRecommender(
        ["6", "ghost", "4"]
    )
    await student_client.get("/books/1")
    resp = await student_client.get("/recommendations")
    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()["books"]] == ["4", "6"]


class _GatedRecommender(RecommenderPort):
    """Holds every answer until released, so navigation can happen meanwhile."""

    def __init__(self) -> None:
        self.started = asyncio.Event()
        self.release = asyncio.Event()
        self._inner = RecommendationClient(None)

    async def recommend(self, request: RecommendationRequest) -> RecommendationResult:
        self.started.set()
        await self.release.wait()
        return await self._inner.recommend(request)


@pytest.mark.asyncio
async def test_stale_recommendations_are_discarded(student_client: AsyncClient):
    gated = _GatedRecommender()
    app.dependency_overrides[get_recommender] = lambda: gated

    await student_client.get("/books/1")
    pending = asyncio.create_task(student_client.get("/recommendations"))
    await gated.started.wait()

    await student_client.get("/books/2")
    gated.release.set()

    resp = await pending
    assert resp.status_code == 409
    session = (await student_client.get("/session")).json()
    assert session["selected_book_id"] == "2"


# ── Health Check ───────────────────────────────────


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    resp = await client.get("/health")
    assert resp.status_code == 200
    assert resp.json()["status"] == "healthy"

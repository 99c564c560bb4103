import pytest
from httpx import ASGITransport, AsyncClient

from app.adapters.covers.openlibrary import OpenLibraryCoverAdapter
from app.api.dependencies import (
    get_cover_adapter,
    get_credential_verifier,
    get_recommender,
)
from app.domain.catalog import initial_books
from app.main import app
from app.services.auth import DemoCredentialVerifier
from app.services.recommendation import RecommendationClient
from app.sessions import registry

BASE = "http://test"
ADMIN_PASSWORD = "test-admin-pass"


@pytest.fixture(autouse=True)
def override_dependencies():
    app.dependency_overrides[get_credential_verifier] = lambda: DemoCredentialVerifier(
        ADMIN_PASSWORD
    )
    app.dependency_overrides[get_recommender] = lambda: RecommendationClient(None)
    app.dependency_overrides[get_cover_adapter] = lambda: OpenLibraryCoverAdapter(
        base_url="https://openlibrary.invalid", enabled=False
    )
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def books():
    return initial_books()


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url=BASE) as c:
        yield c
    # stop the seat simulators of every session opened during the test
    await registry.close_all()


async def _login(client: AsyncClient, **payload) -> AsyncClient:
    resp = await client.post("/auth/login", json=payload)
    assert resp.status_code == 200, resp.text
    client.headers["Authorization"] = f"Bearer {resp.json()['access_token']}"
    return client


@pytest.fixture
async def student_client(client: AsyncClient):
    """A client logged in as a student."""
    return await _login(client, role="STUDENT", username="S1024")


@pytest.fixture
async def admin_client(client: AsyncClient):
    """A client logged in as an admin."""
    return await _login(client, role="ADMIN", username="", password=ADMIN_PASSWORD)


@pytest.fixture
def admin_password() -> str:
    return ADMIN_PASSWORD

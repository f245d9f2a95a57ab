"""
Fixtures for API endpoint tests.

The salon REST API is replaced by FakeSalonApi; the session registry is a
fresh instance per test.
"""

import pytest
from fastapi.testclient import TestClient

from auth.dependencies import get_salon_client, get_session_registry
from core.config import ACCESS_CODE
from main import app
from services.session_service import SessionRegistry
from tests.fakes import FakeSalonApi, api_collaborator, api_price, api_procedure, api_record


@pytest.fixture
def salon_api():
    fake = FakeSalonApi()
    fake.set("GET", "/collaborators", [
        api_collaborator("c1", "Ana"),
        api_collaborator("c2", "Bia", role="Cabeleireira"),
    ])
    fake.set("GET", "/procedures", [
        api_procedure("p1", "Mão"),
        api_procedure("p2", "Corte", category="Cabeleireira – Feminino"),
    ])
    fake.set("GET", "/prices", [api_price("pr1", "p1")])
    fake.set("GET", "/records", [
        api_record("r1", "2024-03-01", collaboratorId="c1", procedureId="p1", calculatedValue=50.0),
        api_record("r2", "2024-03-01", collaboratorId="c1", procedureId="p1", status="Não Fez",
                   calculatedValue=20.0, notes="Faltou"),
        api_record("r3", "2024-03-02", collaboratorId="c2", procedureId="p2", calculatedValue=80.5,
                   extras=["Toalhas"]),
    ])
    return fake


@pytest.fixture
def registry():
    return SessionRegistry()


@pytest.fixture
def client(salon_api, registry):
    """Create test client with the salon API and session registry overridden."""
    app.dependency_overrides[get_salon_client] = salon_api.client
    app.dependency_overrides[get_session_registry] = lambda: registry

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.pop(get_salon_client, None)
    app.dependency_overrides.pop(get_session_registry, None)


@pytest.fixture
def auth_headers(client):
    response = client.post("/api/auth/login", json={"access_code": ACCESS_CODE})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}

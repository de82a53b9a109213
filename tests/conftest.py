"""
Pytest configuration.

Every test gets an empty entity store: the process-wide store is
reset before and after each test.  HTTP tests use FastAPI's
``TestClient`` against the real application.
"""

import asyncio
from typing import Any, Dict, Tuple

import pytest
from fastapi.testclient import TestClient

from job_board_api.app.core.security import Actor
from job_board_api.app.core.store import EntityStore, get_store
from job_board_api.app.main import app


PASSWORD = "secret123"


def run(coro):
    """Drive an async service call to completion."""
    return asyncio.run(coro)


@pytest.fixture(autouse=True)
def store() -> EntityStore:
    entity_store = get_store()
    entity_store.reset()
    yield entity_store
    entity_store.reset()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def add_user(store: EntityStore, kind: str, email: str = None, **extra: Any) -> Tuple[Dict[str, Any], Actor]:
    """Insert a user straight into the store and return it with its actor."""
    email = email or f"{kind}{len(store.users.scan()) + 1}@example.com"
    user = store.create_user(
        {"email": email, "password": "not-a-real-hash", "name": kind.title(), "type": kind, **extra}
    )
    return user, Actor(id=user["id"], email=user["email"], kind=kind)


def job_payload(**overrides: Any) -> Dict[str, Any]:
    payload = {
        "title": "Senior Python Engineer",
        "company": "Acme Corp",
        "location": "Berlin, Germany",
        "type": "Full-time",
        "salary": "€80k",
        "description": "Build and run our backend services.",
        "requirements": "5+ years of Python.",
        "tags": ["python", "fastapi"],
    }
    payload.update(overrides)
    return payload


def register(client: TestClient, kind: str, email: str, **extra: Any) -> Tuple[Dict[str, str], Dict[str, Any]]:
    """Register through the API; return auth headers and the user JSON."""
    body = {
        "email": email,
        "password": PASSWORD,
        "confirmPassword": PASSWORD,
        "name": f"{kind.title()} User",
        "type": kind,
        **extra,
    }
    response = client.post("/api/v1/auth/register", json=body)
    assert response.status_code == 201, response.text
    data = response.json()
    return {"Authorization": f"Bearer {data['token']}"}, data["user"]


@pytest.fixture
def company(client):
    return register(client, "company", "hr@acme.example.com", company="Acme Corp")


@pytest.fixture
def other_company(client):
    return register(client, "company", "jobs@globex.example.com", company="Globex")


@pytest.fixture
def candidate(client):
    return register(client, "candidate", "jane@example.com")

from unittest.mock import MagicMock

import pytest
from fastapi.testclient import TestClient

from app.main import create_app
from code_modules.credential_store import InMemoryUserRepository
from code_modules.session_store import InMemorySessionStore
from config_loader import AppConfig, SessionConfig


@pytest.fixture
def app_config():
    """Fast hashing and no CSRF check"""
    return AppConfig(session=SessionConfig(bcrypt_rounds=4))


@pytest.fixture
def users():
    return InMemoryUserRepository()


@pytest.fixture
def sessions():
    return InMemorySessionStore()


@pytest.fixture
def llm_client():
    client = MagicMock()
    client.inference_simple.return_value = "Try Maplewood and Greenview."
    return client


@pytest.fixture
def app(app_config, users, sessions, llm_client):
    return create_app(app_config, users=users, sessions=sessions, llm_client=llm_client)


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def alice(client):
    """A registered and logged-in user"""
    response = client.post(
        "/register",
        json={"name": "Alice", "email": "alice@x.com", "password": "password1"},
    )
    assert response.status_code == 201
    return response.json()["user"]

"""Shared fixtures for web API tests."""

import pytest
from fastapi.testclient import TestClient

from core.config_models import MoodFlowConfig
from mood.identity import IdentityBackend
from mood.store import SQLiteRecordStore



@pytest.fixture
def web_config(tmp_path):
    return MoodFlowConfig.from_dict({
        "paths": {"data_dir": str(tmp_path / "data")},
        "auth": {"jwt_secret": "test-jwt-secret"},
    })


@pytest.fixture
def backend(web_config):
    return IdentityBackend(web_config.paths.db_path, "test-jwt-secret")


@pytest.fixture
def record_store(web_config):
    return SQLiteRecordStore(web_config.paths.db_path)


@pytest.fixture
def client(web_config, backend, record_store, today):
    """Test client with a temp database and a fixed "today"."""
    from web.app import app
    from web.deps import get_config, get_identity_backend, get_record_store, get_today

    app.dependency_overrides[get_config] = lambda: web_config
    app.dependency_overrides[get_identity_backend] = lambda: backend
    app.dependency_overrides[get_record_store] = lambda: record_store
    app.dependency_overrides[get_today] = lambda: today

    yield TestClient(app)

    app.dependency_overrides.clear()


def _sign_up(client, email):
    res = client.post("/api/auth/signup", json={"email": email, "password": "secret1"})
    assert res.status_code == 201
    return res.json()


@pytest.fixture
def account(client):
    return _sign_up(client, "ann@example.com")


@pytest.fixture
def auth_headers(account):
    return {"Authorization": f"Bearer {account['token']}"}


@pytest.fixture
def auth_headers_b(client):
    data = _sign_up(client, "bob@example.com")
    return {"Authorization": f"Bearer {data['token']}"}

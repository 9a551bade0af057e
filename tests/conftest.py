"""
Test infrastructure:
  - in-memory SQLite (StaticPool), tables recreated for every test
  - FastAPI TestClient
  - small factories that go through the public API
"""
import os

# must be set before app.* is imported: settings are read once
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENABLE_CREATE_ALL"] = "1"
os.environ["ENVIRONMENT"] = "test"
os.environ.setdefault("LOG_LEVEL", "WARNING")

import pytest
from fastapi.testclient import TestClient

from app.core.config import get_settings
from app.db.base import Base
from app.db.session import SessionLocal, engine
from app.main import app

API = "/api/v1"


@pytest.fixture(autouse=True)
def _fresh_schema():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield


@pytest.fixture
def settings_env(monkeypatch):
    """Set env vars for one test and re-read settings; restored afterwards."""

    def _set(**env):
        for k, v in env.items():
            monkeypatch.setenv(k, v)
        get_settings.cache_clear()

    yield _set
    monkeypatch.undo()
    get_settings.cache_clear()


@pytest.fixture
def client():
    with TestClient(app) as c:
        yield c


@pytest.fixture
def db():
    s = SessionLocal()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def make_category(client):
    counter = {"n": 0}

    def _make(**overrides):
        counter["n"] += 1
        body = {
            "name": f"Category {counter['n']}",
            "role": "Maintenance",
            "contactInfo": "x@x.com",
        }
        body.update(overrides)
        r = client.post(f"{API}/categories", json=body)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture
def make_responder(client):
    def _make(**overrides):
        body = {"name": "A. Lee", "role": "Security", "contactInfo": "a@x.com"}
        body.update(overrides)
        r = client.post(f"{API}/responders", json=body)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture
def make_report(client, make_category):
    def _make(category_id=None, **overrides):
        if category_id is None:
            category_id = make_category()["id"]
        body = {"categoryId": category_id, "description": "Broken light", "isAnonymous": True}
        body.update(overrides)
        r = client.post(f"{API}/reports", json=body)
        assert r.status_code == 201, r.text
        return r.json()["data"]

    return _make


@pytest.fixture
def log_action(client):
    def _log(report_id, responder_id, description="Checked the site", **extra):
        body = {"reportId": report_id, "responderId": responder_id, "description": description}
        body.update(extra)
        return client.post(f"{API}/actions", json=body)

    return _log


@pytest.fixture
def set_status(client):
    def _set(report_id, status, responder_id=None):
        body = {"status": status}
        if responder_id is not None:
            body["responderId"] = responder_id
        return client.put(f"{API}/reports/{report_id}", json=body)

    return _set

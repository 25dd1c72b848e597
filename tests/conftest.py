"""Shared fixtures — FastAPI client on a throwaway SQLite database."""
import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from site_cms.api.main import app
from site_cms.api.routes import editor
from site_cms.database import get_db, make_engine
from site_cms.models import Base

TOKEN = "test-token"


@pytest.fixture
def db_factory(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'test.db'}")
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, bind=engine)
    yield factory
    engine.dispose()


@pytest.fixture
def db(db_factory):
    s = db_factory()
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def client(db_factory, monkeypatch):
    monkeypatch.setenv("ADMIN_TOKEN", TOKEN)
    monkeypatch.setenv("ADMIN_PASSWORD", "secret")
    monkeypatch.setenv("IMAGEKIT_URL_ENDPOINT", "https://ik.imagekit.io/demo")
    monkeypatch.setenv("IMAGEKIT_PUBLIC_KEY", "public_test")
    monkeypatch.setenv("IMAGEKIT_PRIVATE_KEY", "private_test")

    def _get_db():
        s = db_factory()
        try:
            yield s
        finally:
            s.close()

    app.dependency_overrides[get_db] = _get_db
    yield TestClient(app)
    app.dependency_overrides.clear()
    editor._SESSIONS.clear()


@pytest.fixture
def auth():
    return {"X-Admin-Token": TOKEN}


@pytest.fixture
def new_page(client, auth):
    """Factory: create a page through the API and return its dict."""
    def _make(**kw) -> dict:
        body = {"title": "About", "slug": "about", **kw}
        r = client.post("/api/pages", json=body, headers=auth)
        assert r.status_code == 201, r.text
        return r.json()["page"]
    return _make

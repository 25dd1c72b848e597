"""
Tests site settings — defaults, upsert, unknown types, store errors.
"""
from unittest.mock import patch

from sqlalchemy.exc import OperationalError

from site_cms.api.routes.site_settings import DEFAULTS


def test_defaults_when_nothing_stored(client):
    r = client.get("/api/site-settings/header")
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is True
    assert body["setting_type"] == "header"
    assert body["data"] == DEFAULTS["header"]


def test_put_then_get(client, auth):
    footer = {"description": "Packed with care", "sections": []}
    r = client.put("/api/site-settings/footer", json=footer, headers=auth)
    assert r.status_code == 200
    assert r.json()["data"] == footer
    assert client.get("/api/site-settings/footer").json()["data"] == footer


def test_put_twice_upserts(client, auth):
    client.put("/api/site-settings/metadata", json={"title": "One"}, headers=auth)
    client.put("/api/site-settings/metadata", json={"title": "Two"}, headers=auth)
    assert client.get("/api/site-settings/metadata").json()["data"] == {"title": "Two"}


def test_put_requires_token(client):
    assert client.put("/api/site-settings/header", json={"logo": {}}).status_code == 401


def test_unknown_type_404(client, auth):
    assert client.get("/api/site-settings/sidebar").status_code == 404
    assert client.put("/api/site-settings/sidebar", json={}, headers=auth).status_code == 404


def test_defaults_on_store_error(client):
    err = OperationalError("SELECT", {}, Exception("db locked"))
    with patch("site_cms.api.routes.site_settings.db_get_setting", side_effect=err):
        r = client.get("/api/site-settings/footer")
    assert r.status_code == 200
    assert r.json()["data"] == DEFAULTS["footer"]


def test_defaults_not_mutated(client, auth):
    data = client.get("/api/site-settings/header").json()["data"]
    data["navigation"].clear()
    assert DEFAULTS["header"]["navigation"]

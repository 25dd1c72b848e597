"""
Tests admin screens — login flow, 401 redirect for browsers, page list, media, settings.
"""
from unittest.mock import patch

HTML = {"accept": "text/html"}


def test_admin_redirects_browser_to_login(client):
    r = client.get("/admin", headers=HTML, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/admin/login"


def test_admin_401_for_api_clients(client):
    assert client.get("/admin", follow_redirects=False).status_code == 401


def test_login_sets_cookie(client):
    r = client.post("/admin/login", data={"password": "secret"}, follow_redirects=False)
    assert r.status_code == 303
    assert r.headers["location"] == "/admin"
    assert "admin_token=test-token" in r.headers["set-cookie"]


def test_login_wrong_password(client):
    r = client.post("/admin/login", data={"password": "nope"}, follow_redirects=False)
    assert r.headers["location"] == "/admin/login?error=1"
    assert "Incorrect password" in client.get("/admin/login?error=1").text


def test_cookie_grants_access(client):
    client.cookies.set("admin_token", "test-token")
    assert client.get("/admin").status_code == 200


def test_logout_clears_cookie(client):
    r = client.get("/admin/logout", follow_redirects=False)
    assert r.status_code == 303
    assert 'admin_token=""' in r.headers["set-cookie"] or "admin_token=;" in r.headers["set-cookie"]


def test_auth_helpers(monkeypatch):
    from site_cms.api import auth
    monkeypatch.setenv("ADMIN_TOKEN", "test-token")
    monkeypatch.setenv("ADMIN_PASSWORD", "secret")
    assert auth.password_ok("secret")
    assert not auth.password_ok("Secret")
    monkeypatch.delenv("ADMIN_PASSWORD")
    assert auth.password_ok("changeme")
    resp = auth.sign_in()
    assert resp.headers["location"] == auth.HOME_PATH
    cookie = resp.headers["set-cookie"]
    assert "admin_token=test-token" in cookie
    assert "HttpOnly" in cookie and "Max-Age=604800" in cookie
    assert auth.to_login(error=True).headers["location"] == "/admin/login?error=1"
    assert auth.sign_out().headers["location"] == "/admin/login"


def test_login_screen_uses_admin_styles(client):
    body = client.get("/admin/login").text
    assert 'class="card"' in body
    assert 'action="/admin/login"' in body
    assert "Incorrect password" not in body


def test_page_list(client, new_page):
    new_page(title="Home", slug="home", is_homepage=True, status="published")
    new_page(title="Careers", slug="careers")
    r = client.get("/admin?token=test-token")
    assert r.status_code == 200
    assert "Pages (2)" in r.text
    assert "Careers" in r.text
    assert "homepage" in r.text
    # only the non-homepage row gets a delete button
    assert r.text.count("deletePage(") == 2  # one definition + one button


def test_page_list_empty(client):
    assert "No pages yet." in client.get("/admin?token=test-token").text


def test_media_library(client, auth):
    with patch("site_cms.media.imagekit.upload_file", return_value={
        "fileId": "fid", "name": "dock.png", "filePath": "/naturesforce/dock.png", "size": 2048,
    }):
        client.post("/api/media/upload", files={"file": ("dock.png", b"x" * 2048, "image/png")}, headers=auth)
    r = client.get("/admin/media?token=test-token")
    assert r.status_code == 200
    assert "dock.png" in r.text
    assert "https://ik.imagekit.io/demo/naturesforce/dock.png" in r.text


def test_settings_screen(client):
    r = client.get("/admin/settings?token=test-token")
    assert r.status_code == 200
    for st in ("header", "footer", "metadata"):
        assert f'id="setting-{st}"' in r.text
    assert "Get Started" in r.text

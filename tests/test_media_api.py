"""
Tests media library — upload validation, ImageKit failures, partial batches, best-effort delete.
"""
from unittest.mock import patch

import pytest

from site_cms import imagekit

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


def _blob(name="photo.png", **kw):
    return {"fileId": f"fid_{name}", "name": name, "filePath": f"/naturesforce/{name}",
            "url": f"https://ik.imagekit.io/demo/naturesforce/{name}",
            "size": len(PNG), "width": 800, "height": 600, **kw}


def _upload(client, auth, *files, alt=""):
    return client.post(
        "/api/media/upload",
        files=[("files", f) for f in files],
        data={"alt_text": alt},
        headers=auth,
    )


# ── Upload ────────────────────────────────────────────────────────────────

def test_upload_records_asset(client, auth):
    with patch("site_cms.media.imagekit.upload_file", return_value=_blob()) as up:
        r = _upload(client, auth, ("photo.png", PNG, "image/png"), alt="A photo")
    assert r.status_code == 200, r.text
    body = r.json()
    assert body["success"] is True
    assert body["errors"] == []
    asset = body["media"][0]
    assert asset["file_path"] == "https://ik.imagekit.io/demo/naturesforce/photo.png"
    assert asset["imagekit_file_id"] == "fid_photo.png"
    assert asset["alt_text"] == "A photo"
    assert asset["url"] == "https://ik.imagekit.io/demo/naturesforce/photo.png"
    up.assert_called_once()

    listed = client.get("/api/media", headers=auth).json()["media"]
    assert [m["id"] for m in listed] == [asset["id"]]


def test_upload_single_file_field(client, auth):
    with patch("site_cms.media.imagekit.upload_file", return_value=_blob()):
        r = client.post("/api/media/upload", files={"file": ("photo.png", PNG, "image/png")}, headers=auth)
    assert r.status_code == 200
    assert len(r.json()["media"]) == 1


def test_upload_rejects_type_without_calling_imagekit(client, auth):
    with patch("site_cms.media.imagekit.upload_file") as up:
        r = _upload(client, auth, ("notes.pdf", b"%PDF-1.4", "application/pdf"))
    assert r.status_code == 400
    assert "unsupported file type" in r.json()["detail"]
    up.assert_not_called()


def test_upload_rejects_oversize(client, auth, monkeypatch):
    monkeypatch.setenv("MEDIA_MAX_FILE_MB", "0.00001")
    with patch("site_cms.media.imagekit.upload_file") as up:
        r = _upload(client, auth, ("photo.png", PNG, "image/png"))
    assert r.status_code == 400
    up.assert_not_called()


def test_upload_no_file_400(client, auth):
    r = client.post("/api/media/upload", data={"alt_text": "x"}, headers=auth)
    assert r.status_code == 400


def test_upload_imagekit_failure_502(client, auth):
    with patch("site_cms.media.imagekit.upload_file", side_effect=imagekit.ImageKitError("boom")):
        r = _upload(client, auth, ("photo.png", PNG, "image/png"))
    assert r.status_code == 502
    assert client.get("/api/media", headers=auth).json()["media"] == []


def test_upload_batch_is_per_file(client, auth):
    with patch("site_cms.media.imagekit.upload_file", return_value=_blob()):
        r = _upload(client, auth,
                    ("photo.png", PNG, "image/png"),
                    ("notes.txt", b"hello", "text/plain"))
    assert r.status_code == 200
    body = r.json()
    assert body["success"] is False
    assert len(body["media"]) == 1
    assert body["errors"][0]["filename"] == "notes.txt"


def test_upload_requires_token(client):
    r = client.post("/api/media/upload", files={"file": ("photo.png", PNG, "image/png")})
    assert r.status_code == 401


# ── Register (browser-side upload) ────────────────────────────────────────

def test_register_absolute_url_kept(client, auth):
    r = client.post("/api/media", json={
        "filename": "hero.jpg", "file_path": "https://ik.imagekit.io/demo/naturesforce/hero.jpg",
        "mime_type": "image/jpeg", "imagekit_file_id": "fid_hero",
    }, headers=auth)
    assert r.status_code == 201
    assert r.json()["media"]["url"] == "https://ik.imagekit.io/demo/naturesforce/hero.jpg"
    listed = client.get("/api/media", headers=auth).json()["media"]
    assert listed[0]["url"] == "https://ik.imagekit.io/demo/naturesforce/hero.jpg"


def test_register_bare_path_resolves_under_endpoint(client, auth):
    r = client.post("/api/media", json={
        "filename": "hero.jpg", "file_path": "/naturesforce/hero.jpg", "mime_type": "image/jpeg",
        "file_size": 1234, "imagekit_file_id": "fid_hero",
    }, headers=auth)
    assert r.status_code == 201
    assert r.json()["media"]["url"] == "https://ik.imagekit.io/demo/naturesforce/hero.jpg"


def test_register_rejects_type(client, auth):
    r = client.post("/api/media", json={
        "filename": "a.svg", "file_path": "/a.svg", "mime_type": "image/svg+xml",
    }, headers=auth)
    assert r.status_code == 400


# ── Delete ────────────────────────────────────────────────────────────────

def _uploaded(client, auth) -> dict:
    with patch("site_cms.media.imagekit.upload_file", return_value=_blob()):
        return _upload(client, auth, ("photo.png", PNG, "image/png")).json()["media"][0]


def test_delete_removes_blob_and_row(client, auth):
    asset = _uploaded(client, auth)
    with patch("site_cms.media.imagekit.delete_file") as rm:
        r = client.delete(f"/api/media/{asset['id']}", headers=auth)
    assert r.status_code == 200
    rm.assert_called_once_with("fid_photo.png")
    assert client.get("/api/media", headers=auth).json()["media"] == []


def test_delete_row_even_if_blob_delete_fails(client, auth):
    asset = _uploaded(client, auth)
    with patch("site_cms.media.imagekit.delete_file", side_effect=imagekit.ImageKitError("down")):
        r = client.delete(f"/api/media/{asset['id']}", headers=auth)
    assert r.status_code == 200
    assert client.get("/api/media", headers=auth).json()["media"] == []


def test_delete_missing_404(client, auth):
    assert client.delete("/api/media/nope", headers=auth).status_code == 404


# ── ImageKit auth ─────────────────────────────────────────────────────────

def test_imagekit_auth_params(client, auth):
    r = client.get("/api/imagekit/auth", headers=auth)
    assert r.status_code == 200
    body = r.json()
    assert set(body) >= {"token", "expire", "signature", "publicKey", "urlEndpoint"}
    assert body["publicKey"] == "public_test"


def test_imagekit_auth_unconfigured_500(client, auth, monkeypatch):
    monkeypatch.delenv("IMAGEKIT_PRIVATE_KEY")
    assert client.get("/api/imagekit/auth", headers=auth).status_code == 500


# ── Dimensions ────────────────────────────────────────────────────────────

def _real_png(w=320, h=200) -> bytes:
    import io
    from PIL import Image
    buf = io.BytesIO()
    Image.new("RGB", (w, h), color=(22, 163, 74)).save(buf, "PNG")
    return buf.getvalue()


def test_dimensions_read_locally_when_imagekit_omits_them(client, auth):
    blob = {"fileId": "fid", "name": "green.png", "filePath": "/naturesforce/green.png"}
    with patch("site_cms.media.imagekit.upload_file", return_value=blob):
        r = _upload(client, auth, ("green.png", _real_png(), "image/png"))
    asset = r.json()["media"][0]
    assert (asset["width"], asset["height"]) == (320, 200)


def test_imagekit_dimensions_win(client, auth):
    with patch("site_cms.media.imagekit.upload_file", return_value=_blob("green.png")):
        r = _upload(client, auth, ("green.png", _real_png(), "image/png"))
    asset = r.json()["media"][0]
    assert (asset["width"], asset["height"]) == (800, 600)


def test_read_upload_is_bounded(monkeypatch):
    import io
    from site_cms import media
    monkeypatch.setenv("MEDIA_MAX_FILE_MB", "0.001")
    limit = media.max_file_bytes()
    content = media.read_upload(io.BytesIO(b"x" * (limit * 5)))
    assert len(content) == limit + 1
    with pytest.raises(media.MediaError):
        media.validate_upload("big.png", "image/png", len(content))

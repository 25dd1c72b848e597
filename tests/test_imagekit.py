"""
Tests ImageKit client — signatures, URLs, HTTP error mapping (requests mocked).
"""
import hashlib
import hmac
from unittest.mock import MagicMock, patch

import pytest
import requests

from site_cms import imagekit


@pytest.fixture(autouse=True)
def _env(monkeypatch):
    monkeypatch.setenv("IMAGEKIT_PRIVATE_KEY", "private_test")
    monkeypatch.setenv("IMAGEKIT_PUBLIC_KEY", "public_test")
    monkeypatch.setenv("IMAGEKIT_URL_ENDPOINT", "https://ik.imagekit.io/demo/")


def test_auth_signature():
    params = imagekit.auth_parameters(token="tok", expire=1700000000)
    expected = hmac.new(b"private_test", b"tok1700000000", hashlib.sha1).hexdigest()
    assert params == {"token": "tok", "expire": 1700000000, "signature": expected}


def test_auth_generates_token_and_expiry():
    params = imagekit.auth_parameters()
    assert params["token"]
    assert params["expire"] > 0


def test_auth_without_private_key(monkeypatch):
    monkeypatch.delenv("IMAGEKIT_PRIVATE_KEY")
    with pytest.raises(imagekit.ImageKitError):
        imagekit.auth_parameters()


def test_url():
    assert imagekit.url("/folder/a.jpg") == "https://ik.imagekit.io/demo/folder/a.jpg"
    assert imagekit.url("a.jpg", ["w-300", "h-200"]) == "https://ik.imagekit.io/demo/a.jpg?tr=w-300,h-200"


def test_optimized_url():
    assert imagekit.optimized_url("a.jpg", width=640) == "https://ik.imagekit.io/demo/a.jpg?tr=w-640,q-80"
    assert imagekit.optimized_url("a.jpg") == "https://ik.imagekit.io/demo/a.jpg?tr=q-80"


def test_is_configured(monkeypatch):
    assert imagekit.is_configured()
    monkeypatch.delenv("IMAGEKIT_URL_ENDPOINT")
    assert not imagekit.is_configured()


def test_upload_ok():
    resp = MagicMock(status_code=200)
    resp.json.return_value = {"fileId": "f1", "filePath": "/naturesforce/a.png"}
    with patch("site_cms.imagekit.http.post", return_value=resp) as post:
        out = imagekit.upload_file(b"data", "a.png", mime_type="image/png")
    assert out["fileId"] == "f1"
    kwargs = post.call_args.kwargs
    assert kwargs["auth"] == ("private_test", "")
    assert kwargs["data"]["folder"] == "/naturesforce"
    assert kwargs["timeout"] == 30


def test_upload_http_error():
    with patch("site_cms.imagekit.http.post", return_value=MagicMock(status_code=403, text="denied")):
        with pytest.raises(imagekit.ImageKitError):
            imagekit.upload_file(b"data", "a.png")


def test_upload_unreachable():
    with patch("site_cms.imagekit.http.post", side_effect=requests.ConnectionError("down")):
        with pytest.raises(imagekit.ImageKitError):
            imagekit.upload_file(b"data", "a.png")


def test_delete_tolerates_404():
    with patch("site_cms.imagekit.http.delete", return_value=MagicMock(status_code=404)):
        imagekit.delete_file("gone")


def test_delete_error():
    with patch("site_cms.imagekit.http.delete", return_value=MagicMock(status_code=500, text="oops")):
        with pytest.raises(imagekit.ImageKitError):
            imagekit.delete_file("f1")


def test_url_keeps_absolute_url():
    full = "https://ik.imagekit.io/demo/naturesforce/a.jpg"
    assert imagekit.url(full) == full
    assert imagekit.optimized_url(full, width=300) == full + "?tr=w-300,q-80"

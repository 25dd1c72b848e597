"""
ImageKit — blob storage for the media library (REST API over requests).

  upload_file(content, filename)  → {fileId, name, url, filePath, size, width, height, ...}
  delete_file(file_id)
  auth_parameters()               → {token, expire, signature} for browser-side uploads
  url(path, transformations) / optimized_url(path, width, height, quality)
"""
import hashlib
import hmac
import logging
import os
import time
import uuid
from typing import Any, Dict, List, Optional

import requests as http

log = logging.getLogger(__name__)

UPLOAD_URL = "https://upload.imagekit.io/api/v1/files/upload"
FILES_URL  = "https://api.imagekit.io/v1/files"

# Browser upload tokens are valid for at most one hour
AUTH_TTL_SECONDS = 40 * 60


class ImageKitError(RuntimeError):
    """ImageKit refused the request or could not be reached."""


def _public_key() -> str:
    return os.getenv("IMAGEKIT_PUBLIC_KEY", "")


def _private_key() -> str:
    key = os.getenv("IMAGEKIT_PRIVATE_KEY", "")
    if not key:
        raise ImageKitError("IMAGEKIT_PRIVATE_KEY not configured")
    return key


def _url_endpoint() -> str:
    return os.getenv("IMAGEKIT_URL_ENDPOINT", "").rstrip("/")


def is_configured() -> bool:
    return bool(os.getenv("IMAGEKIT_PRIVATE_KEY") and _url_endpoint())


def client_config() -> Dict[str, str]:
    """Values safe to expose to the browser uploader."""
    return {"publicKey": _public_key(), "urlEndpoint": _url_endpoint()}


def upload_file(content: bytes, filename: str, folder: Optional[str] = None,
                mime_type: str = "application/octet-stream", timeout: int = 30) -> Dict[str, Any]:
    folder = folder or os.getenv("MEDIA_FOLDER", "/naturesforce")
    try:
        resp = http.post(
            UPLOAD_URL,
            auth=(_private_key(), ""),
            files={"file": (filename, content, mime_type)},
            data={"fileName": filename, "folder": folder, "useUniqueFileName": "true"},
            timeout=timeout,
        )
    except http.RequestException as e:
        log.error("ImageKit upload %s: %s", filename, e)
        raise ImageKitError(f"ImageKit unreachable: {e}") from e

    if resp.status_code not in (200, 201):
        log.error("ImageKit upload error %s: %s", resp.status_code, resp.text)
        raise ImageKitError(f"ImageKit upload error {resp.status_code}")
    return resp.json()


def delete_file(file_id: str, timeout: int = 10) -> None:
    try:
        resp = http.delete(f"{FILES_URL}/{file_id}", auth=(_private_key(), ""), timeout=timeout)
    except http.RequestException as e:
        raise ImageKitError(f"ImageKit unreachable: {e}") from e
    # 404: already gone
    if resp.status_code not in (200, 204, 404):
        raise ImageKitError(f"ImageKit delete error {resp.status_code}: {resp.text}")


def auth_parameters(token: Optional[str] = None, expire: Optional[int] = None) -> Dict[str, Any]:
    token = token or str(uuid.uuid4())
    expire = expire or int(time.time()) + AUTH_TTL_SECONDS
    signature = hmac.new(
        _private_key().encode(), f"{token}{expire}".encode(), hashlib.sha1
    ).hexdigest()
    return {"token": token, "expire": expire, "signature": signature}


def url(file_path: str, transformations: Optional[List[str]] = None) -> str:
    """Delivery URL. file_path is either a full ImageKit URL (kept as is) or a path under the endpoint."""
    if file_path.startswith(("http://", "https://")):
        base = file_path
    else:
        base = f"{_url_endpoint()}/{file_path.lstrip('/')}"
    if transformations:
        sep = "&" if "?" in base else "?"
        return f"{base}{sep}tr={','.join(transformations)}"
    return base


def optimized_url(file_path: str, width: Optional[int] = None, height: Optional[int] = None,
                  quality: int = 80) -> str:
    tr = []
    if width:
        tr.append(f"w-{width}")
    if height:
        tr.append(f"h-{height}")
    tr.append(f"q-{quality}")
    return url(file_path, tr)

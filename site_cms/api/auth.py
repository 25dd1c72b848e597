"""
Admin auth — one shared token, checked on every admin route.

The token is read from the X-Admin-Token header, ?token= or the admin_token cookie.
The cookie is set by signing in with ADMIN_PASSWORD (see routes/login.py).
"""
import hmac
import os

from fastapi import HTTPException, Request
from fastapi.responses import RedirectResponse

ADMIN_COOKIE = "admin_token"
COOKIE_MAX_AGE = 60 * 60 * 24 * 7

LOGIN_PATH = "/admin/login"
HOME_PATH = "/admin"


def admin_token() -> str:
    return os.getenv("ADMIN_TOKEN", "changeme")


def admin_password() -> str:
    return os.getenv("ADMIN_PASSWORD", "changeme")


def check_token(request: Request) -> str:
    token = (request.headers.get("X-Admin-Token")
             or request.query_params.get("token")
             or request.cookies.get(ADMIN_COOKIE, ""))
    if token != admin_token():
        raise HTTPException(401, "Unauthorized")
    return token


def password_ok(password: str) -> bool:
    return hmac.compare_digest(password.encode(), admin_password().encode())


def sign_in() -> RedirectResponse:
    """Redirect to the admin home with the token cookie set."""
    resp = RedirectResponse(HOME_PATH, status_code=303)
    resp.set_cookie(key=ADMIN_COOKIE, value=admin_token(), httponly=True, samesite="lax",
                    max_age=COOKIE_MAX_AGE)
    return resp


def sign_out() -> RedirectResponse:
    resp = RedirectResponse(LOGIN_PATH, status_code=303)
    resp.delete_cookie(ADMIN_COOKIE)
    return resp


def to_login(error: bool = False) -> RedirectResponse:
    return RedirectResponse(f"{LOGIN_PATH}?error=1" if error else LOGIN_PATH, status_code=303)

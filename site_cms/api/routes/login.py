"""
Admin sign-in screen.

GET  /admin/login   → password form
POST /admin/login   → admin_token cookie + redirect to /admin
GET  /admin/logout
"""
import logging

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from .. import admin_shell
from ..auth import LOGIN_PATH, password_ok, sign_in, sign_out, to_login

log = logging.getLogger(__name__)
router = APIRouter(tags=["Auth"])

_FORM = """<form class="card" method="POST" action="{action}" style="max-width:360px;margin:80px auto;text-align:center">
  <h1 style="font-size:18px;margin-bottom:4px">🌿 NaturesForce CMS</h1>
  <p style="color:#6b7280;font-size:13px;margin-bottom:24px">Sign in to manage pages and media</p>
  <label for="password" style="text-align:left">Password</label>
  <input id="password" type="password" name="password" autofocus>
  <button class="btn btn-primary" type="submit" style="width:100%;margin-top:16px;padding:10px">Sign in</button>
  {error}
</form>"""


@router.get(LOGIN_PATH, response_class=HTMLResponse)
def login_page(error: str = ""):
    err = '<p style="color:#dc2626;font-size:13px;margin-top:12px">Incorrect password.</p>' if error else ""
    return HTMLResponse(admin_shell.standalone("Sign in", _FORM.format(action=LOGIN_PATH, error=err)))


@router.post(LOGIN_PATH)
async def login_submit(request: Request):
    form = await request.form()
    if not password_ok(str(form.get("password", ""))):
        log.warning("Admin sign-in refused from %s", request.client.host if request.client else "?")
        return to_login(error=True)
    return sign_in()


@router.get("/admin/logout")
def logout():
    return sign_out()

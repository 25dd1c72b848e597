"""
NaturesForce CMS — FastAPI app
Run: uvicorn site_cms.api.main:app --reload --port 8001
"""
import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import RedirectResponse

from .. import __version__

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s — %(message)s")
log = logging.getLogger(__name__)

app = FastAPI(title="NaturesForce CMS", version=__version__, docs_url="/docs")

app.add_middleware(CORSMiddleware, allow_origins=["*"], allow_methods=["*"], allow_headers=["*"])


@app.middleware("http")
async def redirect_401_to_login(request: Request, call_next):
    """Send browsers hitting an admin screen without a valid token to /admin/login."""
    response = await call_next(request)
    path = request.url.path
    is_browser = "text/html" in request.headers.get("accept", "")
    if (response.status_code == 401
            and path.startswith("/admin")
            and not path.startswith("/admin/login")
            and is_browser):
        return RedirectResponse("/admin/login", status_code=303)
    return response


@app.on_event("startup")
def startup():
    from ..database import init_db
    init_db()
    log.info("DB initialised")


@app.get("/health")
def health():
    return {"status": "ok", "service": "naturesforce_cms", "version": __version__}


# ── Routers ───────────────────────────────────────────────────────────────────
from .routes import admin, components, editor, login, media, pages, public, site_settings

app.include_router(login.router)
app.include_router(pages.router)
app.include_router(media.router)
app.include_router(site_settings.router)
app.include_router(components.router)
app.include_router(editor.router)
app.include_router(admin.router)
# catch-all /{slug}, must stay last
app.include_router(public.router)

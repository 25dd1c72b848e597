"""
Page editor — in-process EditSession store + JSON API + the admin editor screen.

POST   /api/editor/sessions                               {page_id?} → new session
GET    /api/editor/sessions/{sid}
DELETE /api/editor/sessions/{sid}                         editor closed (tab unload)
PATCH  /api/editor/sessions/{sid}/page                    page form fields
POST   /api/editor/sessions/{sid}/blocks                  {type}
DELETE /api/editor/sessions/{sid}/blocks/{bid}
POST   /api/editor/sessions/{sid}/blocks/{bid}/move       {direction}
POST   /api/editor/sessions/{sid}/blocks/{bid}/ops        EditOp
POST   /api/editor/sessions/{sid}/media-target            MediaTarget
DELETE /api/editor/sessions/{sid}/media-target
POST   /api/editor/sessions/{sid}/media-target/array-item {block_id, array_path}
POST   /api/editor/sessions/{sid}/media-select            {url} | {media_id}
POST   /api/editor/sessions/{sid}/save
GET    /admin/pages/new  /admin/pages/{page_id}/edit      → open a session, redirect to the editor
GET    /admin/editor/{sid}                                → editor screen
GET    /admin/editor/{sid}/blocks                         → blocks form fragment
"""
import logging
import os
import uuid
from collections import OrderedDict
from html import escape
from typing import Any, Dict, List, Literal, Optional

from fastapi import APIRouter, Depends, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse, RedirectResponse
from pydantic import BaseModel
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from page_builder.editor import (
    EditOp, EditSession, FieldPathError, MediaTarget, PageForm, SaveInProgress, SaveState,
    render_blocks_form, render_component_picker,
)
from page_builder.editor.operations import Segment

from ... import media
from ...database import db_get_media, get_db
from ...models import PageInput, PageUpdate
from .. import admin_shell
from ..auth import check_token
from .pages import create_page, get_page_or_404, update_page

log = logging.getLogger(__name__)
router = APIRouter(tags=["Editor"])

# One entry per open editor, least recently used first; dropped on restart
_SESSIONS: "OrderedDict[str, EditSession]" = OrderedDict()


def max_sessions() -> int:
    return int(os.getenv("EDITOR_MAX_SESSIONS", "50"))


class PageSaveError(Exception):
    def __init__(self, message: str, status: int = 500):
        super().__init__(message)
        self.status = status


# ── Schemas ────────────────────────────────────────────────────────────────────

class SessionCreate(BaseModel):
    page_id: Optional[str] = None


class PagePatch(BaseModel):
    title: Optional[str] = None
    slug: Optional[str] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    status: Optional[Literal["draft", "published"]] = None
    is_homepage: Optional[bool] = None


class BlockAdd(BaseModel):
    type: str


class BlockMove(BaseModel):
    direction: Literal["up", "down"]


class TargetEnvelope(BaseModel):
    target: MediaTarget


class ArrayItemFromMedia(BaseModel):
    block_id: str
    array_path: List[Segment]


class MediaSelect(BaseModel):
    url: Optional[str] = None
    media_id: Optional[str] = None


# ── Session store ──────────────────────────────────────────────────────────────

def open_session(db: Session, page_id: Optional[str] = None) -> str:
    if page_id:
        page = get_page_or_404(db, page_id)
        session = EditSession(
            page_id=page.id,
            page=PageForm(
                title=page.title, slug=page.slug,
                meta_title=page.meta_title or "", meta_description=page.meta_description or "",
                status=page.status, is_homepage=bool(page.is_homepage),
            ),
            blocks=page.content if isinstance(page.content, list) else [],
        )
    else:
        session = EditSession()
    sid = uuid.uuid4().hex
    _SESSIONS[sid] = session
    log.info("Editor session %s opened (page %s)", sid, page_id or "<new>")
    while len(_SESSIONS) > max_sessions():
        old, _ = _SESSIONS.popitem(last=False)
        log.info("Editor session %s evicted", old)
    return sid


def close_session(sid: str) -> bool:
    return _SESSIONS.pop(sid, None) is not None


def get_session_or_404(sid: str) -> EditSession:
    session = _SESSIONS.get(sid)
    if session is None:
        raise HTTPException(404, f"Editor session {sid} not found")
    _SESSIONS.move_to_end(sid)
    return session


def _state(sid: str, session: EditSession) -> Dict[str, Any]:
    return {"session_id": sid, **session.to_dict()}


def _persist_with(db: Session):
    """persist callback for EditSession.save: create or update the page record."""
    def persist(session: EditSession) -> str:
        form = session.page
        if not form.title.strip() or not form.slug.strip():
            raise PageSaveError("Title and slug are required", 400)
        try:
            if session.page_id:
                page = get_page_or_404(db, session.page_id)
                page = update_page(db, page, PageUpdate(**form.model_dump(), content=session.blocks))
            else:
                page = create_page(db, PageInput(**form.model_dump(), content=session.blocks))
        except HTTPException as e:
            raise PageSaveError(str(e.detail), e.status_code) from e
        except ValueError as e:
            raise PageSaveError(str(e), 400) from e
        except SQLAlchemyError as e:
            db.rollback()
            raise PageSaveError("Failed to save page", 500) from e
        return page.id
    return persist


# ── API ────────────────────────────────────────────────────────────────────────

@router.post("/api/editor/sessions", status_code=201)
def create_session(req: SessionCreate, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    sid = open_session(db, req.page_id)
    return _state(sid, _SESSIONS[sid])


@router.get("/api/editor/sessions/{sid}")
def get_session(sid: str, request: Request):
    check_token(request)
    return _state(sid, get_session_or_404(sid))


@router.delete("/api/editor/sessions/{sid}")
def delete_session(sid: str, request: Request):
    check_token(request)
    if not close_session(sid):
        raise HTTPException(404, f"Editor session {sid} not found")
    log.info("Editor session %s closed", sid)
    return {"success": True, "closed": sid}


@router.patch("/api/editor/sessions/{sid}/page")
def patch_page(sid: str, req: PagePatch, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    session.page = session.page.model_copy(update=req.model_dump(exclude_none=True))
    return _state(sid, session)


@router.post("/api/editor/sessions/{sid}/blocks", status_code=201)
def add_block(sid: str, req: BlockAdd, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    block = session.add_block(req.type)
    if block is None:
        raise HTTPException(400, f"Unknown component type '{req.type}'")
    return {"block": block.model_dump(), **_state(sid, session)}


@router.delete("/api/editor/sessions/{sid}/blocks/{bid}")
def remove_block(sid: str, bid: str, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    if not session.remove_block(bid):
        raise HTTPException(404, f"Block {bid} not found")
    return _state(sid, session)


@router.post("/api/editor/sessions/{sid}/blocks/{bid}/move")
def move_block(sid: str, bid: str, req: BlockMove, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    if session.block(bid) is None:
        raise HTTPException(404, f"Block {bid} not found")
    moved = session.move_block(bid, req.direction)
    return {"moved": moved, **_state(sid, session)}


@router.post("/api/editor/sessions/{sid}/blocks/{bid}/ops")
def apply_op(sid: str, bid: str, op: EditOp, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    if session.block(bid) is None:
        raise HTTPException(404, f"Block {bid} not found")
    try:
        block = session.apply(bid, op)
    except FieldPathError as e:
        raise HTTPException(400, str(e))
    return {"block": block.model_dump(), "save_state": session.save_state.value}


@router.post("/api/editor/sessions/{sid}/media-target")
def open_media_target(sid: str, req: TargetEnvelope, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    try:
        session.open_media_picker(req.target)
    except FieldPathError as e:
        raise HTTPException(400, str(e))
    except KeyError as e:
        raise HTTPException(404, str(e.args[0]) if e.args else "Block not found")
    return {"media_target": session.media_target.model_dump()}


@router.delete("/api/editor/sessions/{sid}/media-target")
def close_media_target(sid: str, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    session.close_media_picker()
    return {"media_target": session.media_target.model_dump()}


@router.post("/api/editor/sessions/{sid}/media-target/array-item")
def add_item_from_media(sid: str, req: ArrayItemFromMedia, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    try:
        target = session.add_item_from_media(req.block_id, req.array_path)
    except FieldPathError as e:
        raise HTTPException(400, str(e))
    except KeyError as e:
        raise HTTPException(404, str(e.args[0]) if e.args else "Block not found")
    if target is None:
        raise HTTPException(400, "Maximum number of items reached")
    return {"media_target": target.model_dump(), "block": session.block(req.block_id).model_dump()}


@router.post("/api/editor/sessions/{sid}/media-select")
def select_media(sid: str, req: MediaSelect, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    session = get_session_or_404(sid)
    url = req.url
    if req.media_id:
        asset = db_get_media(db, req.media_id)
        if not asset:
            raise HTTPException(404, f"Media {req.media_id} not found")
        url = media.public_url(asset)
    if not url:
        raise HTTPException(400, "url or media_id required")
    applied = session.select_media(url)
    return {"applied": applied, **_state(sid, session)}


@router.post("/api/editor/sessions/{sid}/save")
def save_session(sid: str, request: Request, db: Session = Depends(get_db)):
    check_token(request)
    session = get_session_or_404(sid)
    try:
        state = session.save(_persist_with(db))
    except SaveInProgress as e:
        raise HTTPException(409, str(e))
    body = {**_state(sid, session), "warnings": session.missing_required()}
    if state == SaveState.FAILED:
        status = getattr(session.last_error, "status", 500)
        return JSONResponse(status_code=status, content={**body, "success": False, "error": session.message})
    log.info("Editor session %s saved page %s", sid, session.page_id)
    return {**body, "success": True}


@router.post("/api/editor/sessions/{sid}/acknowledge")
def acknowledge(sid: str, request: Request):
    check_token(request)
    session = get_session_or_404(sid)
    session.acknowledge()
    return _state(sid, session)


# ── UI Admin ───────────────────────────────────────────────────────────────────

@router.get("/admin/pages/new")
def new_page(request: Request, db: Session = Depends(get_db)):
    token = check_token(request)
    sid = open_session(db)
    return RedirectResponse(f"/admin/editor/{sid}?token={token}", status_code=303)


@router.get("/admin/pages/{page_id}/edit")
def edit_page(page_id: str, request: Request, db: Session = Depends(get_db)):
    token = check_token(request)
    sid = open_session(db, page_id)
    return RedirectResponse(f"/admin/editor/{sid}?token={token}", status_code=303)


@router.get("/admin/editor/{sid}/blocks", response_class=HTMLResponse)
def blocks_fragment(sid: str, request: Request):
    check_token(request)
    return HTMLResponse(render_blocks_form(get_session_or_404(sid).blocks))


def _page_form(form: PageForm) -> str:
    def text(name: str, label: str, value: str, required: bool = False) -> str:
        req = " required" if required else ""
        return (f'<div><label for="pg-{name}">{label}{" *" if required else ""}</label>'
                f'<input id="pg-{name}" data-page-field="{name}" value="{escape(value)}"{req}></div>')

    published = " selected" if form.status == "published" else ""
    home = " checked" if form.is_homepage else ""
    return f"""<div class="card">
  <div style="display:grid;grid-template-columns:1fr 1fr;gap:12px">
    {text("title", "Title", form.title, True)}
    {text("slug", "Slug", form.slug, True)}
    {text("meta_title", "Meta title", form.meta_title)}
    <div><label for="pg-status">Status</label>
      <select id="pg-status" data-page-field="status">
        <option value="draft">Draft</option><option value="published"{published}>Published</option>
      </select></div>
    <div style="grid-column:1/3"><label for="pg-meta_description">Meta description</label>
      <textarea id="pg-meta_description" data-page-field="meta_description" rows="2">{escape(form.meta_description)}</textarea></div>
    <div><label><input type="checkbox" id="pg-is_homepage" data-page-field="is_homepage"{home}> Homepage</label></div>
  </div>
</div>"""


_EDITOR_CSS = """
.block-editor{background:#fff;border:1px solid #e5e7eb;border-radius:8px;padding:16px;margin-bottom:16px}
.block-editor__header{display:flex;justify-content:space-between;align-items:flex-start;margin-bottom:12px}
.block-editor__header h3{font-size:15px}.block-editor__header p{font-size:12px;color:#6b7280}
.block-editor__icon{font-size:20px;margin-right:6px}
.field{margin-bottom:12px}.field__help{font-size:11px;color:#9ca3af;margin-bottom:4px}
.req{color:#dc2626}
.field__image,.field__color{display:flex;gap:8px;align-items:center}
.field__preview img{max-height:80px;margin-top:6px;border-radius:4px}
.field--array,.field--object{border:1px dashed #d1d5db;border-radius:6px;padding:10px}
.array__header,.array__item-header{display:flex;justify-content:space-between;align-items:center;margin-bottom:8px}
.array__item{background:#f9fafb;border:1px solid #e5e7eb;border-radius:6px;padding:10px;margin-bottom:8px}
.array__num{display:inline-block;width:20px;height:20px;border-radius:10px;background:#16a34a;color:#fff;text-align:center;font-size:11px;margin-right:6px}
.array__empty,.blocks__empty{font-size:12px;color:#9ca3af;text-align:center;padding:16px}
.picker__filters{display:flex;gap:6px;flex-wrap:wrap;margin-bottom:12px}
.picker__filter{border:1px solid #e5e7eb;background:#fff;border-radius:14px;padding:4px 12px;font-size:12px;cursor:pointer}
.picker__filter--active{background:#16a34a;color:#fff}
.picker__grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(200px,1fr));gap:10px}
.picker__card{display:flex;flex-direction:column;gap:4px;text-align:left;border:1px solid #e5e7eb;background:#fff;border-radius:8px;padding:12px;cursor:pointer;font-size:12px}
.picker__icon{font-size:22px}
.modal{position:fixed;inset:0;background:rgba(0,0,0,.4);display:none;align-items:center;justify-content:center;z-index:100}
.modal__box{background:#fff;border-radius:8px;padding:20px;width:min(900px,95vw);max-height:85vh;overflow:auto}
.media-grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(120px,1fr));gap:10px}
.media-grid img{width:100%;height:100px;object-fit:cover;border-radius:4px;cursor:pointer;border:2px solid transparent}
.media-grid img:hover{border-color:#16a34a}
"""

_EDITOR_JS = """
const SID = document.getElementById('editor').dataset.sid;
const base = '/api/editor/sessions/' + SID;

window.addEventListener('pagehide', (ev) => {
  if (!ev.persisted) fetch(base, {method: 'DELETE', keepalive: true, headers: {'X-Admin-Token': TOKEN}});
});

async function refreshBlocks() {
  const r = await fetch('/admin/editor/' + SID + '/blocks', {headers: {'X-Admin-Token': TOKEN}});
  document.getElementById('blocks').innerHTML = await r.text();
}

function controlValue(el) {
  if (el.type === 'checkbox') return el.checked;
  return el.value;
}

document.addEventListener('change', async (ev) => {
  const el = ev.target;
  if (el.dataset.pageField) {
    await api('PATCH', base + '/page', {[el.dataset.pageField]: controlValue(el)}).catch(e => toast(e.message));
    return;
  }
  if (!el.dataset.path || !el.dataset.block || el.dataset.op) return;
  try {
    await api('POST', base + '/blocks/' + el.dataset.block + '/ops',
              {op: 'set', path: JSON.parse(el.dataset.path), value: controlValue(el)});
    if (el.dataset.type === 'image' || el.dataset.type === 'color') await refreshBlocks();
  } catch (e) { toast(e.message); }
});

async function openMedia(target) {
  await api('POST', base + '/media-target', {target});
  await openMediaList();
}

async function chooseMedia(mediaId) {
  try {
    await api('POST', base + '/media-select', {media_id: mediaId});
    closeMedia(false);
    await refreshBlocks();
  } catch (e) { toast(e.message); }
}

async function closeMedia(clearTarget) {
  document.getElementById('media-modal').style.display = 'none';
  if (clearTarget) await api('DELETE', base + '/media-target').catch(() => {});
}

document.addEventListener('click', async (ev) => {
  const el = ev.target.closest('button');
  if (!el) return;
  try {
    if (el.dataset.addBlock) {
      await api('POST', base + '/blocks', {type: el.dataset.addBlock});
      document.getElementById('component-picker').hidden = true;
      await refreshBlocks();
    } else if (el.dataset.blockRemove) {
      if (!confirm('Remove this component?')) return;
      await api('DELETE', base + '/blocks/' + el.dataset.blockRemove);
      await refreshBlocks();
    } else if (el.dataset.blockMove) {
      await api('POST', base + '/blocks/' + el.dataset.block + '/move', {direction: el.dataset.blockMove});
      await refreshBlocks();
    } else if (el.dataset.mediaTarget) {
      await openMedia(JSON.parse(el.dataset.mediaTarget));
    } else if (el.dataset.op === 'add-media') {
      await api('POST', base + '/media-target/array-item',
                {block_id: el.dataset.block, array_path: JSON.parse(el.dataset.path)});
      await refreshBlocks();
      await openMediaList();
    } else if (el.dataset.op) {
      const op = {op: el.dataset.op, path: JSON.parse(el.dataset.path)};
      if (el.dataset.index !== undefined) op.index = parseInt(el.dataset.index, 10);
      if (el.dataset.direction) op.direction = el.dataset.direction;
      await api('POST', base + '/blocks/' + el.dataset.block + '/ops', op);
      await refreshBlocks();
    } else if (el.dataset.category) {
      document.querySelectorAll('.picker__filter').forEach(b => b.classList.toggle('picker__filter--active', b === el));
      document.querySelectorAll('.picker__card').forEach(c => {
        c.style.display = (el.dataset.category === 'all' || c.dataset.category === el.dataset.category) ? '' : 'none';
      });
    }
  } catch (e) { toast(e.message); }
});

async function openMediaList() {
  const data = await api('GET', '/api/media');
  const grid = document.getElementById('media-grid');
  grid.innerHTML = '';
  for (const m of data.media) {
    const img = document.createElement('img');
    img.src = m.url; img.alt = m.alt_text || m.filename;
    img.onclick = () => chooseMedia(m.id);
    grid.appendChild(img);
  }
  if (!data.media.length) grid.textContent = 'No media yet. Upload images from the Media tab.';
  document.getElementById('media-modal').style.display = 'flex';
}

function togglePicker() {
  const p = document.getElementById('component-picker');
  p.hidden = !p.hidden;
}

async function savePage() {
  const btn = document.getElementById('save-btn');
  btn.disabled = true; btn.textContent = 'Saving...';
  try {
    const r = await fetch(base + '/save', {method: 'POST', headers: {'X-Admin-Token': TOKEN}});
    const data = await r.json();
    if (!r.ok) throw new Error(data.error || data.detail || 'Failed to save page');
    const warn = (data.warnings || []).length;
    toast(warn ? 'Page saved (' + warn + ' required field(s) empty)' : 'Page saved');
    await api('POST', base + '/acknowledge');
  } catch (e) {
    toast(e.message);
    await api('POST', base + '/acknowledge').catch(() => {});
  } finally {
    btn.disabled = false; btn.textContent = 'Save page';
  }
}
"""


@router.get("/admin/editor/{sid}", response_class=HTMLResponse)
def editor_page(sid: str, request: Request):
    token = check_token(request)
    session = get_session_or_404(sid)
    heading = "Edit page" if session.page_id else "New page"
    preview = ""
    if session.page_id and session.page.slug:
        preview = f'<a class="btn" href="/{escape(session.page.slug)}" target="_blank">View page</a>'
    body = f"""<div id="editor" data-sid="{escape(sid)}">
  <div style="display:flex;justify-content:space-between;align-items:center;margin-bottom:20px;gap:12px">
    <h1 style="font-size:18px">✏️ {heading}</h1>
    <div style="display:flex;gap:8px">{preview}
      <button class="btn" type="button" onclick="togglePicker()">+ Add Component</button>
      <button class="btn btn-primary" id="save-btn" type="button" onclick="savePage()">Save page</button>
    </div>
  </div>
  {_page_form(session.page)}
  {render_component_picker()}
  <div id="blocks">{render_blocks_form(session.blocks)}</div>
</div>
<div class="modal" id="media-modal">
  <div class="modal__box">
    <div style="display:flex;justify-content:space-between;margin-bottom:12px">
      <h3 style="font-size:15px">Select media</h3>
      <button class="btn" type="button" onclick="closeMedia(true)">Close</button>
    </div>
    <div class="media-grid" id="media-grid"></div>
  </div>
</div>"""
    return HTMLResponse(admin_shell.page(heading, "pages", token, body, _EDITOR_CSS, _EDITOR_JS))

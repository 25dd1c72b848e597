"""
Admin screens — page list, media library, site settings.

GET /admin            → pages (status, homepage flag, edit/delete)
GET /admin/media      → media library (upload, copy URL, delete)
GET /admin/settings   → header / footer / metadata JSON editors
"""
import json
import logging
from html import escape

from fastapi import APIRouter, Depends, Request
from fastapi.responses import HTMLResponse
from sqlalchemy.orm import Session

from ... import media
from ...database import db_list_media, db_list_pages, get_db
from ...models import PageStatus, SettingType
from .. import admin_shell
from ..auth import check_token
from .site_settings import load_setting

log = logging.getLogger(__name__)
router = APIRouter(tags=["Admin"])


# ── Pages ──────────────────────────────────────────────────────────────────────

_PAGES_JS = """
async function deletePage(id, title) {
  if (!confirm('Delete page "' + title + '"?')) return;
  try {
    await api('DELETE', '/api/pages/' + id);
    document.getElementById('row-' + id).remove();
    toast('Page deleted');
  } catch (e) { toast(e.message); }
}
"""


@router.get("/admin", response_class=HTMLResponse)
def admin_pages(request: Request, db: Session = Depends(get_db)):
    token = check_token(request)
    pages = db_list_pages(db)
    q = f"?token={escape(token)}"

    rows = ""
    for p in pages:
        badges = ""
        if p.status == PageStatus.PUBLISHED.value:
            badges += '<span class="badge badge--published">published</span> '
        else:
            badges += '<span class="badge">draft</span> '
        if p.is_homepage:
            badges += '<span class="badge badge--home">homepage</span>'
        # the homepage cannot be deleted
        delete = "" if p.is_homepage else (
            f'<button class="btn btn-remove" type="button" '
            f'onclick="deletePage({escape(json.dumps(p.id))}, {escape(json.dumps(p.title))})">Delete</button>'
        )
        updated = p.updated_at.strftime("%Y-%m-%d %H:%M") if p.updated_at else ""
        rows += f"""<tr id="row-{escape(p.id)}">
  <td><strong>{escape(p.title)}</strong><br><span style="color:#9ca3af;font-size:12px">/{escape(p.slug)}</span></td>
  <td>{badges}</td>
  <td style="color:#6b7280">{len(p.content or [])}</td>
  <td style="color:#6b7280">{updated}</td>
  <td style="white-space:nowrap">
    <a class="btn" href="/admin/pages/{escape(p.id)}/edit{q}">Edit</a>
    <a class="btn" href="/{escape(p.slug)}" target="_blank">View</a>
    {delete}
  </td>
</tr>"""
    if not rows:
        rows = '<tr><td colspan="5" style="text-align:center;color:#9ca3af;padding:32px">No pages yet.</td></tr>'

    body = f"""<div style="display:flex;justify-content:space-between;align-items:center;margin-bottom:24px">
  <h1 style="font-size:18px">📄 Pages ({len(pages)})</h1>
  <a class="btn btn-primary" href="/admin/pages/new{q}">+ New page</a>
</div>
<div class="card" style="padding:0;overflow:hidden">
  <table>
    <thead><tr><th>Page</th><th>Status</th><th>Blocks</th><th>Updated</th><th style="width:200px">Actions</th></tr></thead>
    <tbody>{rows}</tbody>
  </table>
</div>"""
    return HTMLResponse(admin_shell.page("Pages", "pages", token, body, script=_PAGES_JS))


# ── Media ──────────────────────────────────────────────────────────────────────

_MEDIA_CSS = """
.media-grid{display:grid;grid-template-columns:repeat(auto-fill,minmax(180px,1fr));gap:14px}
.media-card{background:#fff;border:1px solid #e5e7eb;border-radius:8px;overflow:hidden;font-size:12px}
.media-card img{width:100%;height:130px;object-fit:cover;display:block;background:#f3f4f6}
.media-card__body{padding:8px 10px}
.media-card__name{font-weight:600;white-space:nowrap;overflow:hidden;text-overflow:ellipsis}
"""

_MEDIA_JS = """
async function uploadFiles(ev) {
  ev.preventDefault();
  const input = document.getElementById('files');
  if (!input.files.length) return;
  const fd = new FormData();
  for (const f of input.files) fd.append('files', f);
  fd.append('alt_text', document.getElementById('alt').value);
  const btn = document.getElementById('upload-btn');
  btn.disabled = true; btn.textContent = 'Uploading...';
  try {
    const r = await fetch('/api/media/upload', {method: 'POST', headers: {'X-Admin-Token': TOKEN}, body: fd});
    const data = await r.json();
    if (!r.ok) throw new Error(data.detail || 'Upload failed');
    const failed = (data.errors || []).map(e => e.error).join('\\n');
    if (failed) alert(failed);
    location.reload();
  } catch (e) {
    toast(e.message);
  } finally {
    btn.disabled = false; btn.textContent = 'Upload';
  }
}

async function deleteMedia(id) {
  if (!confirm('Delete this file?')) return;
  try {
    await api('DELETE', '/api/media/' + id);
    document.getElementById('media-' + id).remove();
    toast('Deleted');
  } catch (e) { toast(e.message); }
}

function copyUrl(url) {
  navigator.clipboard.writeText(url).then(() => toast('URL copied'));
}
"""


@router.get("/admin/media", response_class=HTMLResponse)
def admin_media(request: Request, db: Session = Depends(get_db)):
    token = check_token(request)
    assets = db_list_media(db)
    max_mb = media.max_file_bytes() // (1024 * 1024)

    cards = ""
    for a in assets:
        url = media.public_url(a)
        size_kb = (a.file_size or 0) // 1024
        dims = f" · {a.width}×{a.height}" if a.width and a.height else ""
        cards += f"""<div class="media-card" id="media-{escape(a.id)}">
  <img src="{escape(url)}" alt="{escape(a.alt_text or a.filename)}" loading="lazy">
  <div class="media-card__body">
    <div class="media-card__name" title="{escape(a.filename)}">{escape(a.filename)}</div>
    <div style="color:#9ca3af">{size_kb} KB{dims}</div>
    <div style="display:flex;gap:6px;margin-top:6px">
      <button class="btn" type="button" onclick="copyUrl({escape(json.dumps(url))})">Copy URL</button>
      <button class="btn btn-remove" type="button" onclick="deleteMedia({escape(json.dumps(a.id))})">Delete</button>
    </div>
  </div>
</div>"""
    if not cards:
        cards = '<p style="color:#9ca3af">No media yet.</p>'

    body = f"""<h1 style="font-size:18px;margin-bottom:20px">🖼 Media library ({len(assets)})</h1>
<form class="card" onsubmit="uploadFiles(event)" style="display:flex;gap:12px;align-items:flex-end;flex-wrap:wrap">
  <div style="flex:2"><label for="files">Images (JPEG, PNG, GIF, WebP · max {max_mb}MB each)</label>
    <input id="files" type="file" accept="{",".join(media.ALLOWED_TYPES)}" multiple></div>
  <div style="flex:1"><label for="alt">Alt text</label><input id="alt" type="text"></div>
  <button class="btn btn-primary" id="upload-btn" type="submit">Upload</button>
</form>
<div class="media-grid">{cards}</div>"""
    return HTMLResponse(admin_shell.page("Media", "media", token, body, _MEDIA_CSS, _MEDIA_JS))


# ── Site settings ──────────────────────────────────────────────────────────────

_SETTINGS_JS = """
async function saveSetting(type) {
  let data;
  try { data = JSON.parse(document.getElementById('setting-' + type).value); }
  catch (e) { toast('Invalid JSON: ' + e.message); return; }
  try {
    await api('PUT', '/api/site-settings/' + type, data);
    toast(type + ' settings saved');
  } catch (e) { toast(e.message); }
}
"""


@router.get("/admin/settings", response_class=HTMLResponse)
def admin_settings(request: Request, db: Session = Depends(get_db)):
    token = check_token(request)
    sections = ""
    for st in SettingType:
        data = load_setting(db, st.value)
        sections += f"""<div class="card">
  <div style="display:flex;justify-content:space-between;align-items:center;margin-bottom:10px">
    <h3 style="font-size:15px;text-transform:capitalize">{st.value}</h3>
    <button class="btn btn-primary" type="button" onclick="saveSetting('{st.value}')">Save</button>
  </div>
  <textarea id="setting-{st.value}" rows="14" style="font-family:monospace;font-size:12px">{escape(json.dumps(data, indent=2, ensure_ascii=False))}</textarea>
</div>"""
    body = f'<h1 style="font-size:18px;margin-bottom:20px">⚙️ Site settings</h1>{sections}'
    return HTMLResponse(admin_shell.page("Site settings", "settings", token, body, script=_SETTINGS_JS))

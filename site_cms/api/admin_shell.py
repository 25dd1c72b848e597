"""Admin chrome shared by the HTML screens: nav bar + page skeleton + base CSS."""
import json
from html import escape

_TABS = [
    ("pages",    "/admin",          "📄 Pages"),
    ("media",    "/admin/media",    "🖼 Media"),
    ("settings", "/admin/settings", "⚙️ Site settings"),
]

CSS = """
*{box-sizing:border-box;margin:0;padding:0}
body{font-family:'Segoe UI',sans-serif;background:#f9fafb;color:#1f2937;line-height:1.5}
a{color:#15803d}
table{width:100%;border-collapse:collapse}
th{background:#f3f4f6;padding:10px 12px;text-align:left;font-size:12px;color:#6b7280;font-weight:600;border-bottom:1px solid #e5e7eb}
td{border-bottom:1px solid #f3f4f6;padding:10px 12px;font-size:13px;vertical-align:top}
tr:hover td{background:#f0fdf4}
.wrap{max-width:1100px;margin:0 auto;padding:24px}
.card{background:#fff;border:1px solid #e5e7eb;border-radius:8px;padding:20px;margin-bottom:20px;box-shadow:0 1px 3px rgba(0,0,0,.06)}
.btn{background:#fff;border:1px solid #d1d5db;color:#374151;padding:6px 14px;border-radius:6px;cursor:pointer;font-size:12px;text-decoration:none;display:inline-block}
.btn-primary{background:#16a34a;border-color:#16a34a;color:#fff;font-weight:bold}
.btn-remove{color:#dc2626;border-color:#fecaca}
.btn[disabled]{opacity:.4;cursor:default}
.badge{display:inline-block;padding:2px 8px;border-radius:10px;font-size:11px;background:#e5e7eb}
.badge--published{background:#dcfce7;color:#166534}
.badge--home{background:#dbeafe;color:#1e40af}
input,select,textarea{width:100%;border:1px solid #e5e7eb;border-radius:4px;padding:8px;font-size:13px;font-family:inherit}
input[type=checkbox]{width:auto}
input[type=color]{width:48px;padding:2px;height:36px}
label{font-size:11px;color:#6b7280;display:block;margin-bottom:4px}
.toast{position:fixed;bottom:24px;right:24px;background:#1f2937;color:#fff;padding:12px 20px;border-radius:8px;font-size:13px;display:none;z-index:999}
"""


def nav(active: str, token: str) -> str:
    q = f"?token={escape(token)}" if token else ""
    links = "".join(
        f'<a href="{href}{q}" style="padding:10px 18px;border-radius:6px;text-decoration:none;font-size:13px;'
        f'font-weight:{"bold" if key == active else "normal"};'
        f'background:{"#16a34a" if key == active else "#f9fafb"};color:{"#fff" if key == active else "#374151"}">{label}</a>'
        for key, href, label in _TABS
    )
    return (
        f'<div style="background:#fff;border-bottom:1px solid #e5e7eb;padding:0 20px;'
        f'display:flex;align-items:center;gap:8px;flex-wrap:wrap">'
        f'<a href="/admin{q}" style="color:#16a34a;font-weight:bold;font-size:15px;'
        f'padding:12px 16px 12px 0;text-decoration:none">🌿 NaturesForce CMS</a>'
        f'{links}<a href="/admin/logout" style="margin-left:auto;font-size:12px;color:#6b7280">Sign out</a></div>'
    )


def page(title: str, active: str, token: str, body: str, extra_css: str = "", script: str = "") -> str:
    return f"""<!DOCTYPE html><html lang="en"><head>
<meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>{escape(title)} — NaturesForce CMS</title>
<style>{CSS}{extra_css}</style>
</head><body>
{nav(active, token)}
<div class="wrap">
{body}
</div>
<div class="toast" id="toast"></div>
<script>
const TOKEN = {_js_str(token)};
function toast(msg) {{
  const t = document.getElementById('toast');
  t.textContent = msg; t.style.display = 'block';
  setTimeout(() => t.style.display = 'none', 2500);
}}
async function api(method, url, body) {{
  const r = await fetch(url, {{
    method, headers: {{'Content-Type': 'application/json', 'X-Admin-Token': TOKEN}},
    body: body === undefined ? undefined : JSON.stringify(body),
  }});
  const data = await r.json().catch(() => ({{}}));
  if (!r.ok) throw new Error(data.detail || data.error || ('HTTP ' + r.status));
  return data;
}}
{script}
</script>
</body></html>"""


def standalone(title: str, body: str) -> str:
    """Admin-styled document without the nav bar (sign-in screen)."""
    return f"""<!DOCTYPE html><html lang="en"><head>
<meta charset="UTF-8"><meta name="viewport" content="width=device-width,initial-scale=1">
<title>{escape(title)} — NaturesForce CMS</title>
<style>{CSS}</style>
</head><body>
{body}
</body></html>"""


def _js_str(s: str) -> str:
    return json.dumps(s).replace("</", "<\\/")

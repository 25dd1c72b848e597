"""
HTML renderer — projects stored ContentBlocks to public markup.

Dispatch: registry lookup first (unknown type → placeholder), then the
template table keyed by BlockType (no template → "not implemented").
Templates never raise on malformed data: every value goes through the
_text/_list/_dict readers and optional parts are omitted when blank.
"""
import logging
from html import escape
from typing import Any, Callable, Dict, List, Mapping, Optional

from pydantic import ValidationError

from ..core.schemas import BlockType, ContentBlock
from ..registry import REGISTRY, ComponentRegistry

log = logging.getLogger(__name__)

NO_CONTENT = '<div class="cms-empty">No content available</div>'


# ── Readers ─────────────────────────────────────────────────────────────────

def _text(data: Mapping[str, Any], key: str) -> str:
    """Stripped string value, "" when missing or not scalar."""
    v = data.get(key) if isinstance(data, Mapping) else None
    if isinstance(v, bool) or v is None:
        return ""
    if isinstance(v, (str, int, float)):
        return str(v).strip()
    return ""


def _list(data: Mapping[str, Any], key: str) -> List[Dict[str, Any]]:
    v = data.get(key) if isinstance(data, Mapping) else None
    if not isinstance(v, list):
        return []
    return [item for item in v if isinstance(item, dict)]


def _dict(data: Mapping[str, Any], key: str) -> Dict[str, Any]:
    v = data.get(key) if isinstance(data, Mapping) else None
    return v if isinstance(v, dict) else {}


def _flag(data: Mapping[str, Any], key: str, default: bool = False) -> bool:
    v = data.get(key) if isinstance(data, Mapping) else None
    return v if isinstance(v, bool) else default


def _int(data: Mapping[str, Any], key: str) -> int:
    v = data.get(key) if isinstance(data, Mapping) else None
    if isinstance(v, bool):
        return 0
    try:
        return int(float(v))
    except (TypeError, ValueError, OverflowError):
        return 0


def _e(value: str) -> str:
    return escape(value, quote=True)


_CSS_URL_CHARS = str.maketrans({'"': "%22", "'": "%27", "(": "%28", ")": "%29", "\\": "%5C"})


def _css_url(url: str) -> str:
    """url for a quoted CSS url(); quotes, parens and backslashes percent-encoded, control chars dropped."""
    return "".join(c for c in url if c >= " " and c != "\x7f").translate(_CSS_URL_CHARS)


# ── Shared fragments ────────────────────────────────────────────────────────

def _opt(tag: str, cls: str, value: str) -> str:
    return f'<{tag} class="{cls}">{_e(value)}</{tag}>' if value else ""


def _button(text: str, link: str, cls: str = "btn btn-primary") -> str:
    if not text or not link:
        return ""
    return f'<a href="{_e(link)}" class="{cls}">{_e(text)}</a>'


def _img(src: str, alt: str, cls: str) -> str:
    if not src:
        return ""
    return f'<img src="{_e(src)}" alt="{_e(alt)}" class="{cls}" loading="lazy">'


def _bg_style(data: Mapping[str, Any]) -> str:
    colour = _text(data, "backgroundColor")
    return f' style="background-color:{_e(colour)};"' if colour else ""


def _section_head(data: Mapping[str, Any], eyebrow_key: Optional[str] = None) -> str:
    """Optional eyebrow / h2 / subtitle / description; "" when all are blank."""
    parts = []
    if eyebrow_key:
        parts.append(_opt("p", "section__eyebrow", _text(data, eyebrow_key)))
    parts.append(_opt("h2", "section__title", _text(data, "title")))
    if eyebrow_key != "subtitle":
        parts.append(_opt("p", "section__subtitle", _text(data, "subtitle")))
    parts.append(_opt("p", "section__description", _text(data, "description")))
    inner = "".join(parts)
    return f'<div class="section__head">{inner}</div>' if inner else ""


# ── Templates ───────────────────────────────────────────────────────────────

def _hero_banner(d: Mapping[str, Any]) -> str:
    bg = _text(d, "backgroundImage")
    align = _text(d, "textAlign") or "center"
    style = f' style="background-image:url(&quot;{_e(_css_url(bg))}&quot;);"' if bg else ""
    overlay = ""
    if bg:
        opacity = d.get("overlayOpacity")
        opacity = opacity if isinstance(opacity, (int, float)) and not isinstance(opacity, bool) else 0.85
        opacity = min(max(float(opacity), 0.0), 1.0)
        overlay = f'<div class="hero__overlay" style="opacity:{opacity:g};"></div>'
    buttons = _button(_text(d, "ctaText"), _text(d, "ctaLink")) + \
        _button(_text(d, "secondaryCtaText"), _text(d, "secondaryCtaLink"), "btn btn-secondary")
    return f"""<section class="cms-block hero-banner hero-banner--{_e(align)}"{style}>
  {overlay}
  <div class="container">
    {_opt("span", "hero__badge", _text(d, "badge"))}
    {_opt("h1", "hero__title", _text(d, "title"))}
    {_opt("p", "hero__subtitle", _text(d, "subtitle"))}
    {_opt("p", "hero__description", _text(d, "description"))}
    {f'<div class="hero__actions">{buttons}</div>' if buttons else ""}
    {_opt("p", "hero__trust", _text(d, "trustText"))}
  </div>
</section>"""


def _hero_split(d: Mapping[str, Any]) -> str:
    position = "left" if _text(d, "imagePosition") == "left" else "right"
    image = _img(_text(d, "image"), _text(d, "title"), "hero-split__image")
    highlights = "".join(
        f'<li>{_e(_text(f, "title"))}</li>' for f in _list(d, "features")[:3] if _text(f, "title")
    )
    buttons = _button(_text(d, "ctaText"), _text(d, "ctaLink")) + \
        _button(_text(d, "secondaryCtaText"), _text(d, "secondaryCtaLink"), "btn btn-secondary")
    media = f'<div class="hero-split__media">{image}</div>' if image else ""
    return f"""<section class="cms-block hero-split hero-split--image-{position}"{_bg_style(d)}>
  <div class="container hero-split__grid">
    <div class="hero-split__content">
      {_opt("span", "hero__badge", _text(d, "badge"))}
      {_opt("h1", "hero__title", _text(d, "title"))}
      {_opt("p", "hero__description", _text(d, "description"))}
      {f'<div class="hero__actions">{buttons}</div>' if buttons else ""}
      {f'<ul class="hero-split__highlights">{highlights}</ul>' if highlights else ""}
    </div>
    {media}
  </div>
</section>"""


def _feature_grid(d: Mapping[str, Any]) -> str:
    cards = []
    for f in _list(d, "features"):
        image = _text(f, "image")
        icon = (_img(image, _text(f, "title"), "feature__image") if image
                else _opt("span", "feature__icon", _text(f, "icon")))
        title = _text(f, "title")
        link = _text(f, "link")
        heading = ""
        if title:
            heading = (f'<h3 class="feature__title"><a href="{_e(link)}">{_e(title)}</a></h3>' if link
                       else f'<h3 class="feature__title">{_e(title)}</h3>')
        body = icon + heading + _opt("p", "feature__description", _text(f, "description"))
        if body:
            cards.append(f'<div class="feature">{body}</div>')
    grid = f'<div class="feature-grid__items">{"".join(cards)}</div>' if cards else ""
    button = _button(_text(d, "ctaText"), _text(d, "ctaLink"))
    return f"""<section class="cms-block feature-grid"{_bg_style(d)}>
  <div class="container">
    {_section_head(d)}
    {grid}
    {f'<div class="section__actions">{button}</div>' if button else ""}
  </div>
</section>"""


def _testimonials(d: Mapping[str, Any]) -> str:
    cards = []
    for t in _list(d, "testimonials"):
        quote = _text(t, "text")
        if not quote:
            continue
        rating = min(max(_int(t, "rating"), 0), 5)
        stars = f'<div class="testimonial__rating" aria-label="{rating} out of 5">{"★" * rating}</div>' if rating else ""
        role = ", ".join(x for x in (_text(t, "position"), _text(t, "company")) if x)
        featured = " testimonial--featured" if _flag(t, "featured") else ""
        cards.append(f"""<figure class="testimonial{featured}">
  {stars}
  <blockquote>{_e(quote)}</blockquote>
  <figcaption>{_img(_text(t, "image"), _text(t, "name"), "testimonial__photo")}{_opt("strong", "testimonial__name", _text(t, "name"))}{_opt("span", "testimonial__role", role)}</figcaption>
</figure>""")
    grid = f'<div class="testimonials__items">{"".join(cards)}</div>' if cards else ""
    return f"""<section class="cms-block testimonials"{_bg_style(d)}>
  <div class="container">
    {_section_head(d, eyebrow_key="subtitle")}
    {grid}
  </div>
</section>"""


def _cta_section(d: Mapping[str, Any]) -> str:
    styles = []
    if _text(d, "backgroundColor"):
        styles.append(f"background-color:{_e(_text(d, 'backgroundColor'))};")
    if _text(d, "textColor"):
        styles.append(f"color:{_e(_text(d, 'textColor'))};")
    style = f' style="{"".join(styles)}"' if styles else ""
    return f"""<section class="cms-block cta-section"{style}>
  <div class="container">
    {_opt("h2", "cta__title", _text(d, "title"))}
    {_opt("p", "cta__description", _text(d, "description"))}
    {_button(_text(d, "ctaText"), _text(d, "ctaLink"), "btn btn-light")}
  </div>
</section>"""


def _stats_section(d: Mapping[str, Any]) -> str:
    stats = "".join(
        f'<div class="stat"><span class="stat__number">{_e(_text(s, "number"))}</span>'
        f'{_opt("span", "stat__label", _text(s, "label"))}</div>'
        for s in _list(d, "stats") if _text(s, "number")
    )
    return f"""<section class="cms-block stats-section"{_bg_style(d)}>
  <div class="container">
    {_opt("h2", "section__title", _text(d, "title"))}
    {f'<div class="stats__items">{stats}</div>' if stats else ""}
  </div>
</section>"""


def _image_gallery(d: Mapping[str, Any]) -> str:
    columns = _text(d, "columns")
    columns = columns if columns in ("2", "3", "4") else "3"
    spacing = _text(d, "spacing") or "normal"
    items = []
    for img in _list(d, "images"):
        src = _text(img, "src")
        if not src:
            continue
        caption = _opt("strong", "gallery__caption-title", _text(img, "title")) + _opt("span", "gallery__caption", _text(img, "description"))
        alt = _text(img, "alt") or _text(img, "title")
        items.append(
            f'<figure class="gallery__item">{_img(src, alt, "gallery__image")}'
            f'{f"<figcaption>{caption}</figcaption>" if caption else ""}</figure>'
        )
    grid = ""
    if items:
        grid = f'<div class="gallery__grid gallery__grid--cols-{columns} gallery__grid--{_e(spacing)}">{"".join(items)}</div>'
    return f"""<section class="cms-block image-gallery"{_bg_style(d)}>
  <div class="container">
    {_section_head(d)}
    {grid}
  </div>
</section>"""


def _team_profiles(d: Mapping[str, Any]) -> str:
    cards = []
    for m in _list(d, "members"):
        name = _text(m, "name")
        if not name:
            continue
        links = ""
        if _text(m, "linkedin"):
            links += f'<a href="{_e(_text(m, "linkedin"))}" class="member__link">LinkedIn</a>'
        if _text(m, "email"):
            links += f'<a href="mailto:{_e(_text(m, "email"))}" class="member__link">Email</a>'
        cards.append(f"""<div class="member">
  {_img(_text(m, "image"), name, "member__photo")}
  <h3 class="member__name">{_e(name)}</h3>
  {_opt("p", "member__position", _text(m, "position"))}
  {_opt("p", "member__bio", _text(m, "bio"))}
  {f'<div class="member__links">{links}</div>' if links else ""}
</div>""")
    grid = f'<div class="team__items">{"".join(cards)}</div>' if cards else ""
    return f"""<section class="cms-block team-profiles"{_bg_style(d)}>
  <div class="container">
    {_section_head(d)}
    {grid}
  </div>
</section>"""


def _contact_section(d: Mapping[str, Any]) -> str:
    # contactInfo, or the flat phone/email/address of blocks saved before it existed
    info = _dict(d, "contactInfo") or d
    phone, email, address = _text(info, "phone"), _text(info, "email"), _text(info, "address")
    details = ""
    if phone:
        details += f'<li class="contact__phone"><a href="tel:{_e(phone.replace(" ", ""))}">{_e(phone)}</a></li>'
    if email:
        details += f'<li class="contact__email"><a href="mailto:{_e(email)}">{_e(email)}</a></li>'
    if address:
        details += f'<li class="contact__address">{_e(address)}</li>'
    social = "".join(
        f'<a href="{_e(_text(s, "url"))}" class="social social--{_e(_text(s, "icon") or "link")}">'
        f'{_e((_text(s, "icon") or "link").title())}</a>'
        for s in _list(d, "socialLinks") if _text(s, "url")
    )
    form = ""
    if _flag(d, "showContactForm"):
        form = """<form class="contact__form" method="post" action="/contact">
      <input type="text" name="name" placeholder="Your name" required>
      <input type="email" name="email" placeholder="Your email" required>
      <textarea name="message" rows="4" placeholder="Your message" required></textarea>
      <button type="submit" class="btn btn-primary">Send Message</button>
    </form>"""
    map_ = ""
    if _flag(d, "showMap") and address:
        map_ = (f'<iframe class="contact__map" title="Map" loading="lazy" '
                f'src="https://maps.google.com/maps?q={_e(address)}&amp;output=embed"></iframe>')
    return f"""<section class="cms-block contact-section"{_bg_style(d)}>
  <div class="container contact__grid">
    <div class="contact__info">
      {_opt("h2", "section__title", _text(d, "title"))}
      {_opt("p", "section__description", _text(d, "description"))}
      {f'<ul class="contact__details">{details}</ul>' if details else ""}
      {f'<div class="contact__social">{social}</div>' if social else ""}
    </div>
    {form}
    {map_}
  </div>
</section>"""


def _faq_section(d: Mapping[str, Any]) -> str:
    faqs = "".join(
        f'<details class="faq"><summary>{_e(_text(q, "question"))}</summary>'
        f'{_opt("p", "faq__answer", _text(q, "answer"))}</details>'
        for q in _list(d, "faqs") if _text(q, "question")
    )
    return f"""<section class="cms-block faq-section"{_bg_style(d)}>
  <div class="container">
    {_section_head(d)}
    {f'<div class="faq__items">{faqs}</div>' if faqs else ""}
  </div>
</section>"""


_STEP_ICONS = {
    "consultation": "💬",
    "quote":        "📋",
    "production":   "🏭",
    "delivery":     "🚚",
    "support":      "🤝",
}


def _process_steps(d: Mapping[str, Any]) -> str:
    layout = _text(d, "layout")
    layout = layout if layout in ("vertical", "horizontal", "grid") else "vertical"
    show_numbers = _flag(d, "showNumbers", True)
    show_icons = _flag(d, "showIcons")
    steps = []
    for i, s in enumerate(_list(d, "steps"), start=1):
        title = _text(s, "title")
        if not title:
            continue
        marker = ""
        if show_icons and _text(s, "icon") in _STEP_ICONS:
            marker += f'<span class="step__icon">{_STEP_ICONS[_text(s, "icon")]}</span>'
        if show_numbers:
            marker += f'<span class="step__number">{i}</span>'
        steps.append(
            f'<li class="step">{marker}<h3 class="step__title">{_e(title)}</h3>'
            f'{_opt("p", "step__description", _text(s, "description"))}</li>'
        )
    return f"""<section class="cms-block process-steps process-steps--{layout}"{_bg_style(d)}>
  <div class="container">
    {_section_head(d)}
    {f'<ol class="steps">{"".join(steps)}</ol>' if steps else ""}
  </div>
</section>"""


def _what_we_offer_card(d: Mapping[str, Any]) -> str:
    style = _text(d, "cardStyle")
    style = style if style in ("default", "gradient", "bordered") else "default"
    layout = "stacked" if _text(d, "layout") == "stacked" else "split"
    items = "".join(
        f'<li><span class="offer__tick">✓</span>{_e(_text(i, "text"))}</li>'
        for i in _list(d, "items") if _text(i, "text")
    )
    button = _button(_text(d, "ctaText"), _text(d, "ctaLink")) if _flag(d, "showCTA") else ""
    image = _img(_text(d, "image"), _text(d, "title"), "offer__image")
    return f"""<section class="cms-block what-we-offer what-we-offer--{layout}">
  <div class="container">
    <div class="offer-card offer-card--{style}">
      <div class="offer__content">
        {_opt("h2", "offer__title", _text(d, "title"))}
        {_opt("p", "offer__subtitle", _text(d, "subtitle"))}
        {f'<ul class="offer__items">{items}</ul>' if items else ""}
        {button}
      </div>
      {f'<div class="offer__media">{image}</div>' if image else ""}
    </div>
  </div>
</section>"""


_TEMPLATES: Dict[str, Callable[[Mapping[str, Any]], str]] = {
    BlockType.HERO_BANNER.value:        _hero_banner,
    BlockType.HERO_SPLIT.value:         _hero_split,
    BlockType.FEATURE_GRID.value:       _feature_grid,
    BlockType.TESTIMONIALS.value:       _testimonials,
    BlockType.CTA_SECTION.value:        _cta_section,
    BlockType.STATS_SECTION.value:      _stats_section,
    BlockType.IMAGE_GALLERY.value:      _image_gallery,
    BlockType.TEAM_PROFILES.value:      _team_profiles,
    BlockType.CONTACT_SECTION.value:    _contact_section,
    BlockType.FAQ_SECTION.value:        _faq_section,
    BlockType.PROCESS_STEPS.value:      _process_steps,
    BlockType.WHAT_WE_OFFER_CARD.value: _what_we_offer_card,
}


# ── Dispatch ────────────────────────────────────────────────────────────────

def unknown_placeholder(type_: str) -> str:
    return f'<div class="cms-placeholder cms-placeholder--unknown">Unknown component: {_e(type_)}</div>'


def not_implemented_placeholder(type_: str) -> str:
    return f'<div class="cms-placeholder cms-placeholder--missing">Component not implemented: {_e(type_)}</div>'


def _as_block(item: Any) -> Optional[ContentBlock]:
    if isinstance(item, ContentBlock):
        return item
    if not isinstance(item, dict):
        return None
    try:
        return ContentBlock.model_validate(item)
    except ValidationError:
        return None


def render_block(block: ContentBlock, registry: ComponentRegistry = REGISTRY) -> str:
    if registry.lookup(block.type) is None:
        log.warning("render: unknown component type %r (block %s)", block.type, block.id)
        return unknown_placeholder(block.type)
    template = _TEMPLATES.get(block.type)
    if template is None:
        return not_implemented_placeholder(block.type)
    return template(block.data)


def render_blocks(blocks: List[Any], registry: ComponentRegistry = REGISTRY) -> List[str]:
    """One HTML fragment per stored block, in stored order."""
    out = []
    for item in blocks:
        block = _as_block(item)
        if block is None:
            raw_type = item.get("type") if isinstance(item, dict) else None
            out.append(unknown_placeholder(raw_type if isinstance(raw_type, str) else ""))
            continue
        out.append(render_block(block, registry))
    return out


def render_content(content: Any, registry: ComponentRegistry = REGISTRY) -> str:
    if not isinstance(content, list):
        return NO_CONTENT
    return "\n".join(render_blocks(content, registry))


# ── Full document ───────────────────────────────────────────────────────────

def _render_header(header: Mapping[str, Any]) -> str:
    logo = _dict(header, "logo")
    brand = _img(_text(logo, "src"), _text(logo, "alt") or "Logo", "site-header__logo") \
        or _e(_text(logo, "alt") or "Home")
    items = []
    for item in _list(header, "navigation"):
        label, href = _text(item, "label"), _text(item, "href")
        if not label or not href:
            continue
        children = "".join(
            f'<li><a href="{_e(_text(c, "href"))}">{_e(_text(c, "label"))}</a></li>'
            for c in _list(item, "children") if _text(c, "label") and _text(c, "href")
        )
        sub = f'<ul class="site-nav__children">{children}</ul>' if children else ""
        items.append(f'<li><a href="{_e(href)}">{_e(label)}</a>{sub}</li>')
    cta = _dict(header, "cta")
    return f"""<header class="site-header">
  <div class="container site-header__bar">
    <a href="/" class="site-header__brand">{brand}</a>
    {f'<nav class="site-nav"><ul>{"".join(items)}</ul></nav>' if items else ""}
    {_button(_text(cta, "label"), _text(cta, "href"))}
  </div>
</header>"""


def _render_footer(footer: Mapping[str, Any]) -> str:
    columns = []
    for section in _list(footer, "sections"):
        links = "".join(
            f'<li><a href="{_e(_text(link, "href"))}">{_e(_text(link, "label"))}</a></li>'
            for link in _list(section, "links") if _text(link, "label") and _text(link, "href")
        )
        title = _opt("h4", "site-footer__heading", _text(section, "title"))
        if title or links:
            columns.append(f'<div class="site-footer__col">{title}{f"<ul>{links}</ul>" if links else ""}</div>')
    social = "".join(
        f'<a href="{_e(_text(s, "url"))}" class="social social--{_e(_text(s, "platform") or "link")}">'
        f'{_e((_text(s, "platform") or "link").title())}</a>'
        for s in _list(footer, "socialLinks") if _text(s, "url")
    )
    return f"""<footer class="site-footer">
  <div class="container">
    {_opt("p", "site-footer__description", _text(footer, "description"))}
    {f'<div class="site-footer__grid">{"".join(columns)}</div>' if columns else ""}
    {f'<div class="site-footer__social">{social}</div>' if social else ""}
    {_opt("p", "site-footer__bottom", _text(footer, "bottomText"))}
    {_opt("p", "site-footer__copyright", _text(footer, "copyright"))}
  </div>
</footer>"""


def render_page(page: Mapping[str, Any], header: Optional[Mapping[str, Any]] = None,
                footer: Optional[Mapping[str, Any]] = None,
                metadata: Optional[Mapping[str, Any]] = None,
                registry: ComponentRegistry = REGISTRY) -> str:
    """Full public document for a page record ({title, meta_title, meta_description, content})."""
    metadata = metadata or {}
    title = _text(page, "meta_title") or _text(page, "title") or _text(metadata, "title")
    description = _text(page, "meta_description") or _text(metadata, "description")
    head = []
    if description:
        head.append(f'<meta name="description" content="{_e(description)}">')
    for name in ("keywords", "author", "robots"):
        if _text(metadata, name):
            head.append(f'<meta name="{name}" content="{_e(_text(metadata, name))}">')
    og = _dict(metadata, "openGraph")
    for key in ("title", "description", "type", "locale"):
        if _text(og, key):
            head.append(f'<meta property="og:{key}" content="{_e(_text(og, key))}">')

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
  <meta charset="UTF-8">
  <meta name="viewport" content="width=device-width, initial-scale=1.0">
  <title>{_e(title)}</title>
  {chr(10).join("  " + h for h in head).lstrip()}
</head>
<body>
{_render_header(header) if header else ""}
<main>
{render_content(page.get("content"), registry)}
</main>
{_render_footer(footer) if footer else ""}
</body>
</html>"""

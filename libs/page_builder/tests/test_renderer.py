"""Tests renderer — dispatch, placeholders, optional parts and full page document."""
from page_builder.core.schemas import ComponentDefinition, ComponentField, ContentBlock
from page_builder.registry import REGISTRY, ComponentRegistry
from page_builder.renderer.html import (
    NO_CONTENT, render_blocks, render_content, render_page,
)


def _block(type_, **data):
    return ContentBlock(id="b1", type=type_, data=data)


# ── Dispatch ─────────────────────────────────────────────────────────────────

def test_unknown_type_yields_one_placeholder():
    out = render_blocks([_block("legacy_block_type", title="x")])
    assert out == ['<div class="cms-placeholder cms-placeholder--unknown">Unknown component: legacy_block_type</div>']


def test_unknown_type_is_escaped():
    out = render_content([{"type": "<script>", "data": {}}])
    assert "<script>" not in out
    assert "Unknown component: &lt;script&gt;" in out


def test_resolved_without_template_is_not_implemented():
    custom = ComponentDefinition(type="newsletter", name="Newsletter",
                                 fields=[ComponentField(key="title", label="Title")])
    registry = ComponentRegistry(REGISTRY.list_all() + [custom])
    out = render_blocks([_block("newsletter", title="x")], registry)
    assert out == ['<div class="cms-placeholder cms-placeholder--missing">Component not implemented: newsletter</div>']


def test_non_list_content():
    assert render_content(None) == NO_CONTENT
    assert render_content({"type": "hero_banner"}) == NO_CONTENT
    assert render_content([]) == ""


def test_raw_dicts_and_garbage_items():
    out = render_blocks([
        {"id": "a", "type": "cta_section", "data": {"title": "Call us"}},
        {"data": {}},
        42,
    ])
    assert "Call us" in out[0]
    assert out[1] == out[2] == '<div class="cms-placeholder cms-placeholder--unknown">Unknown component: </div>'


def test_default_data_never_yields_placeholders():
    blocks = [ContentBlock(type=d.type, data=d.default_data) for d in REGISTRY]
    for html in render_blocks(blocks):
        assert "cms-placeholder" not in html
        assert html.startswith("<section")


def test_empty_data_renders_every_type():
    for html in render_blocks([ContentBlock(type=d.type) for d in REGISTRY]):
        assert "cms-placeholder" not in html
        assert "<img" not in html


def test_render_is_pure():
    blocks = [ContentBlock(type=d.type, data=d.default_data) for d in REGISTRY]
    assert render_content(blocks) == render_content(blocks)


# ── Templates ────────────────────────────────────────────────────────────────

def test_hero_without_background_image():
    html = render_content([_block("hero_banner", title="Welcome")])
    assert '<h1 class="hero__title">Welcome</h1>' in html
    assert "background-image" not in html
    assert "hero__overlay" not in html
    assert "<img" not in html


def test_hero_with_background_image():
    html = render_content([_block("hero_banner", title="W", backgroundImage="https://x/bg.jpg", overlayOpacity=0.5)])
    assert "background-image:url(&quot;https://x/bg.jpg&quot;)" in html
    assert "opacity:0.5" in html


def test_hero_background_cannot_break_out_of_url():
    html = render_content([_block("hero_banner", title="W", backgroundImage='x.jpg");color:red;("\n')])
    assert "url(&quot;x.jpg%22%29;color:red;%28%22&quot;);" in html
    assert html.count("&quot;)") == 1


def test_hero_background_keeps_plain_urls():
    html = render_content([_block("hero_banner", title="W", backgroundImage="https://x/a b.jpg?tr=w-300,q-80")])
    assert "url(&quot;https://x/a b.jpg?tr=w-300,q-80&quot;)" in html


def test_text_is_escaped():
    html = render_content([_block("cta_section", title="<img src=x onerror=alert(1)>", ctaText="Go", ctaLink="/c")])
    assert "<img" not in html
    assert "&lt;img src=x onerror=alert(1)&gt;" in html


def test_button_needs_text_and_link():
    assert "btn" not in render_content([_block("cta_section", title="T", ctaText="Go")])
    assert '<a href="/c" class="btn btn-light">Go</a>' in render_content(
        [_block("cta_section", title="T", ctaText="Go", ctaLink="/c")])


def test_stats_skip_blank_numbers():
    html = render_content([_block("stats_section", stats=[{"number": "500+", "label": "Clients"}, {"number": ""}])])
    assert html.count('class="stat"') == 1
    assert "500+" in html


def test_gallery_skips_images_without_src():
    html = render_content([_block("image_gallery", images=[{"src": ""}, {"src": "https://x/a.jpg", "alt": "A"}],
                                  columns=4)])
    assert html.count("<img") == 1
    assert "gallery__grid--cols-4" in html


def test_testimonial_rating_stars():
    html = render_content([_block("testimonials", testimonials=[{"name": "Jo", "text": "Great", "rating": 4}])])
    assert "★★★★" in html and "★★★★★" not in html


def test_contact_legacy_flat_fields():
    html = render_content([_block("contact_section", phone="0400 000 000", email="a@b.c")])
    assert 'href="tel:0400000000"' in html
    assert 'href="mailto:a@b.c"' in html


def test_contact_form_and_map_flags():
    data = {"contactInfo": {"address": "1 Main St"}, "showMap": True, "showContactForm": False}
    html = render_content([_block("contact_section", **data)])
    assert "contact__map" in html
    assert "<form" not in html


def test_process_steps_numbers_and_icons():
    steps = [{"title": "Plan", "icon": "quote"}, {"title": "Ship", "icon": "delivery"}]
    html = render_content([_block("process_steps", steps=steps, showIcons=True, layout="grid")])
    assert "process-steps--grid" in html
    assert '<span class="step__number">2</span>' in html
    assert "🚚" in html


def test_what_we_offer_cta_flag():
    data = {"items": [{"text": "Packing"}], "ctaText": "More", "ctaLink": "/x"}
    assert "More" not in render_content([_block("what_we_offer_card", **data)])
    assert "More" in render_content([_block("what_we_offer_card", showCTA=True, **data)])


def test_malformed_nested_values_are_skipped():
    html = render_content([_block("faq_section", faqs=["bad", {"question": "Q?", "answer": "A"}, None])])
    assert html.count("<details") == 1


# ── Full document ────────────────────────────────────────────────────────────

def test_render_page_document():
    page = {"title": "About", "meta_title": "About us", "meta_description": "Who we are",
            "content": [{"id": "h", "type": "hero_banner", "data": {"title": "Hi"}}]}
    header = {"navigation": [{"label": "Home", "href": "/"}], "cta": {"label": "Quote", "href": "/contact"}}
    footer = {"sections": [{"title": "Company", "links": [{"label": "About", "href": "/about"}]}],
              "copyright": "© NF"}
    html = render_page(page, header, footer, {"keywords": "packing"})
    assert html.startswith("<!DOCTYPE html>")
    assert "<title>About us</title>" in html
    assert '<meta name="description" content="Who we are">' in html
    assert '<meta name="keywords" content="packing">' in html
    assert '<a href="/">Home</a>' in html
    assert "© NF" in html
    assert '<h1 class="hero__title">Hi</h1>' in html


def test_render_page_falls_back_to_title():
    html = render_page({"title": "Plain", "content": "broken"})
    assert "<title>Plain</title>" in html
    assert NO_CONTENT in html
    assert "site-header" not in html

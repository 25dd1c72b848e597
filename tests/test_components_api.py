"""
Tests component catalog API.
"""


def test_list_components(client):
    body = client.get("/api/components").json()
    types = [c["type"] for c in body["components"]]
    assert len(types) == 12
    assert types[0] == "hero_banner"
    stats = next(c for c in body["components"] if c["type"] == "stats_section")
    assert "defaultData" in stats
    array = next(f for f in stats["fields"] if f["key"] == "stats")
    assert [f["key"] for f in array["arrayFields"]] == ["number", "label"]
    assert sum(c["count"] for c in body["categories"]) == 12


def test_filter_by_category(client):
    body = client.get("/api/components?category=media").json()
    assert [c["type"] for c in body["components"]] == ["image_gallery"]


def test_get_component(client):
    r = client.get("/api/components/faq_section")
    assert r.status_code == 200
    assert r.json()["name"] == "FAQ Accordion"


def test_unknown_component_404(client):
    assert client.get("/api/components/legacy_block_type").status_code == 404

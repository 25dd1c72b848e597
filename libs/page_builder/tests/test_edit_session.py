"""Tests EditSession — blocks, field edits, media picker target and save lifecycle."""
import pytest

from page_builder.core.schemas import ContentBlock
from page_builder.editor.operations import EditOp, FieldPathError
from page_builder.editor.session import (
    ArrayItemTarget, EditSession, FieldTarget, NoTarget, PageForm,
    SaveInProgress, SaveState, parse_media_target,
)
from page_builder.registry import REGISTRY


@pytest.fixture
def session():
    return EditSession(page=PageForm(title="About", slug="about"))


# ── Blocks ───────────────────────────────────────────────────────────────────

def test_add_block_seeds_default_data(session):
    block = session.add_block("stats_section")
    assert block.type == "stats_section"
    assert block.data == REGISTRY.lookup("stats_section").default_data
    assert session.blocks == [block]


def test_add_block_deep_copies_defaults(session):
    block = session.add_block("stats_section")
    block.data["stats"][0]["label"] = "changed"
    assert REGISTRY.lookup("stats_section").default_data["stats"][0]["label"] == "Happy Clients"


def test_add_unknown_block_returns_none(session):
    assert session.add_block("legacy_block_type") is None
    assert session.blocks == []


def test_block_ids_unique(session):
    ids = {session.add_block("faq_section").id for _ in range(20)}
    assert len(ids) == 20


def test_move_and_remove_block(session):
    a = session.add_block("hero_banner")
    b = session.add_block("cta_section")
    assert session.move_block(b.id, "up")
    assert [x.id for x in session.blocks] == [b.id, a.id]
    assert not session.move_block(b.id, "up")
    assert session.remove_block(a.id)
    assert not session.remove_block(a.id)
    assert [x.id for x in session.blocks] == [b.id]


def test_loads_raw_stored_blocks():
    s = EditSession(blocks=[
        {"id": 12, "type": "cta_section", "data": {"title": "Hi"}},
        {"type": "legacy_block_type", "data": "garbage"},
        "not a block",
    ])
    assert s.blocks[0].id == "12"
    assert s.blocks[1].data == {}
    assert s.blocks[1].id
    assert s.blocks[2].type == ""


def test_repeated_stored_ids_are_rekeyed():
    s = EditSession(blocks=[
        {"id": "x", "type": "cta_section", "data": {"title": "First"}},
        {"id": "x", "type": "cta_section", "data": {"title": "Second"}},
    ])
    assert s.blocks[0].id == "x"
    assert s.blocks[1].id != "x"
    assert s.blocks[1].data == {"title": "Second"}


def test_remove_block_removes_one_block():
    s = EditSession(blocks=[
        {"id": "x", "type": "cta_section", "data": {"title": "First"}},
        {"id": "x", "type": "cta_section", "data": {"title": "Second"}},
    ])
    assert s.remove_block("x")
    assert len(s.blocks) == 1
    assert s.blocks[0].data == {"title": "Second"}


# ── Fields ───────────────────────────────────────────────────────────────────

def test_update_field_nested(session):
    block = session.add_block("contact_section")
    session.update_field(block.id, ("contactInfo", "email"), "hello@example.com")
    info = session.block(block.id).data["contactInfo"]
    assert info["email"] == "hello@example.com"
    assert info["phone"] == "+1 (555) 123-4567"


def test_update_field_bad_path(session):
    block = session.add_block("contact_section")
    with pytest.raises(FieldPathError):
        session.update_field(block.id, ("contactInfo", "fax"), "x")


def test_update_field_unknown_block(session):
    with pytest.raises(KeyError):
        session.update_field("missing", ("title",), "x")


def test_stats_capped_at_six(session):
    block = session.add_block("stats_section")
    block.data["stats"] = []
    for _ in range(7):
        session.apply(block.id, EditOp(op="add", path=["stats"]))
    assert len(session.block(block.id).data["stats"]) == 6


def test_value_at_defaults_by_type(session):
    block = session.add_block("image_gallery")
    assert session.value_at(block.id, ("columns",)) == "3"
    assert session.value_at(block.id, ("backgroundColor",)) == ""


# ── Media picker ─────────────────────────────────────────────────────────────

def test_select_media_into_field(session):
    block = session.add_block("hero_banner")
    session.open_media_picker(FieldTarget(block_id=block.id, path=["backgroundImage"]))
    assert session.select_media("https://ik.imagekit.io/nf/bg.jpg")
    assert session.block(block.id).data["backgroundImage"] == "https://ik.imagekit.io/nf/bg.jpg"
    assert isinstance(session.media_target, NoTarget)


def test_select_media_without_target(session):
    session.add_block("hero_banner")
    assert not session.select_media("https://x/y.jpg")


def test_open_media_picker_rejects_non_image(session):
    block = session.add_block("hero_banner")
    with pytest.raises(FieldPathError):
        session.open_media_picker(FieldTarget(block_id=block.id, path=["title"]))
    with pytest.raises(FieldPathError):
        session.open_media_picker(ArrayItemTarget(block_id=block.id, array_path=["title"], index=0, field_key="src"))


def test_select_media_into_array_item(session):
    block = session.add_block("team_profiles")
    block.data["members"] = [{"name": "A"}, {"name": "B", "image": ""}]
    session.open_media_picker(ArrayItemTarget(block_id=block.id, array_path=["members"], index=1, field_key="image"))
    assert session.select_media("https://x/b.jpg")
    members = session.block(block.id).data["members"]
    assert members[1] == {"name": "B", "image": "https://x/b.jpg"}
    assert members[0] == {"name": "A"}


def test_add_item_from_media(session):
    block = session.add_block("image_gallery")
    target = session.add_item_from_media(block.id, ["images"])
    assert target == ArrayItemTarget(block_id=block.id, array_path=["images"], index=0, field_key="src")
    assert session.select_media("https://x/1.jpg")
    assert session.block(block.id).data["images"] == [
        {"src": "https://x/1.jpg", "alt": "", "title": "", "description": ""}
    ]


def test_add_item_from_media_needs_image_array(session):
    block = session.add_block("faq_section")
    with pytest.raises(FieldPathError):
        session.add_item_from_media(block.id, ["faqs"])


def test_removed_block_clears_target(session):
    block = session.add_block("hero_banner")
    session.open_media_picker(FieldTarget(block_id=block.id, path=["backgroundImage"]))
    session.remove_block(block.id)
    assert isinstance(session.media_target, NoTarget)


def test_parse_media_target_discriminates():
    t = parse_media_target({"kind": "array_item", "block_id": "b", "array_path": ["images"],
                            "index": 2, "field_key": "src"})
    assert isinstance(t, ArrayItemTarget)
    assert isinstance(parse_media_target({"kind": "none"}), NoTarget)
    assert isinstance(parse_media_target({"kind": "field", "block_id": "b", "path": ["image"]}), FieldTarget)


# ── Required fields ──────────────────────────────────────────────────────────

def test_missing_required_is_reported(session):
    block = session.add_block("stats_section")
    session.update_field(block.id, ("stats", 1, "label"), "")
    missing = session.missing_required()
    assert missing == [{"block_id": block.id, "path": ["stats", 1, "label"], "label": "Label"}]


def test_missing_required_skips_unknown_blocks():
    s = EditSession(blocks=[{"type": "legacy_block_type", "data": {}}])
    assert s.missing_required() == []


# ── Save lifecycle ───────────────────────────────────────────────────────────

def test_save_success(session):
    session.add_block("cta_section")
    seen = []

    def persist(s):
        seen.append(s.save_state)
        return "page-1"

    assert session.save(persist) == SaveState.SUCCESS
    assert seen == [SaveState.SUBMITTING]
    assert session.page_id == "page-1"
    assert session.message == "Page saved"
    session.acknowledge()
    assert session.save_state == SaveState.IDLE


def test_save_failure_keeps_edits(session):
    block = session.add_block("cta_section")
    session.update_field(block.id, ("title",), "Edited")

    def persist(s):
        raise RuntimeError("database unavailable")

    assert session.save(persist) == SaveState.FAILED
    assert session.message == "database unavailable"
    assert session.block(block.id).data["title"] == "Edited"
    assert session.page_id is None


def test_save_while_submitting_raises(session):
    def persist(s):
        with pytest.raises(SaveInProgress):
            s.save(lambda _: "other")
        return "page-1"

    assert session.save(persist) == SaveState.SUCCESS


def test_to_dict_round_trips_content(session):
    block = session.add_block("faq_section")
    d = session.to_dict()
    assert d["content"][0]["id"] == block.id
    assert d["media_target"] == {"kind": "none"}
    assert d["page"]["slug"] == "about"
    assert [ContentBlock(**c) for c in d["content"]] == session.blocks

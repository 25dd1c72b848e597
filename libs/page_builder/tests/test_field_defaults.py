"""Tests editor defaults — empty values by type, coercion and defensive reads."""
import math

import pytest

from page_builder.core.schemas import ComponentField
from page_builder.editor.defaults import coerce, empty_value, new_array_item, safe_value
from page_builder.registry import REGISTRY


def F(type_, **kw):
    return ComponentField(key=kw.pop("key", "f"), label="F", type=type_, **kw)


@pytest.mark.parametrize("type_,expected", [
    ("text", ""), ("textarea", ""), ("url", ""), ("select", ""), ("color", ""), ("image", ""),
    ("number", 0), ("boolean", False), ("array", []),
])
def test_empty_value_by_type(type_, expected):
    assert empty_value(F(type_)) == expected


def test_empty_object_has_child_keys():
    contact = REGISTRY.lookup("contact_section").field("contactInfo")
    assert empty_value(contact) == {"phone": "", "email": "", "address": ""}


def test_new_array_item_has_exactly_the_element_keys():
    testimonials = REGISTRY.lookup("testimonials").field("testimonials")
    item = new_array_item(testimonials)
    assert set(item) == {f.key for f in testimonials.array_fields}
    assert item["name"] == ""
    assert item["rating"] == 0
    assert item["featured"] is False


def test_new_array_item_every_catalog_array():
    for d in REGISTRY:
        for f in d.fields:
            if f.type == "array":
                item = new_array_item(f)
                for af in f.array_fields:
                    assert item[af.key] == empty_value(af)


# ── coerce ───────────────────────────────────────────────────────────────────

def test_coerce_number():
    n = F("number")
    assert coerce(n, "3") == 3
    assert coerce(n, "0.5") == 0.5
    assert coerce(n, "") == 0
    assert coerce(n, "abc") == 0
    assert coerce(n, "nan") == 0
    assert coerce(n, float("inf")) == 0
    assert coerce(n, 2) == 2


def test_coerce_number_keeps_out_of_range_values():
    rating = F("number", min=1, max=5)
    assert coerce(rating, "9") == 9
    assert coerce(rating, -2) == -2


def test_coerce_boolean():
    b = F("boolean")
    assert coerce(b, "on") is True
    assert coerce(b, "true") is True
    assert coerce(b, "false") is False
    assert coerce(b, "") is False
    assert coerce(b, 1) is True


def test_coerce_text():
    t = F("text")
    assert coerce(t, None) == ""
    assert coerce(t, 42) == "42"


def test_coerce_composites():
    assert coerce(F("array"), "x") == []
    assert coerce(F("array"), [{"a": 1}]) == [{"a": 1}]
    assert coerce(F("object"), None) == {}


# ── safe_value ───────────────────────────────────────────────────────────────

def test_safe_value_numbers_in_select():
    assert safe_value(F("select"), 3) == "3"
    assert safe_value(F("select"), True) == ""


def test_safe_value_malformed_falls_back():
    assert safe_value(F("text"), {"nested": 1}) == ""
    assert safe_value(F("array"), "not a list") == []
    assert safe_value(F("boolean"), "yes") is False
    assert safe_value(F("number"), None) == 0
    assert safe_value(F("number"), "7") == 7
    assert safe_value(F("object", object_fields=[F("text", key="a")]), []) == {"a": ""}


def test_safe_value_keeps_valid_values():
    assert safe_value(F("text"), "hello") == "hello"
    assert safe_value(F("number"), 0.85) == 0.85
    assert not math.isnan(safe_value(F("number"), float("nan")))
    assert safe_value(F("array"), [1, 2]) == [1, 2]

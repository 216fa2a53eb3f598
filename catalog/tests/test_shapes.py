"""Tests for layout classification and the first-of accessor combinator."""

import pytest

from catalog.shapes import (
    RawShape,
    classify,
    component,
    dig,
    first_of,
    flat,
    is_missing,
    mapped,
    top_level,
)


class TestClassify:
    def test_component(self, component_record):
        assert classify(component_record) is RawShape.COMPONENT

    def test_flat(self, flat_record):
        assert classify(flat_record) is RawShape.FLAT

    def test_mixed(self, component_record):
        component_record["information"] = {"warranty": "1 year"}
        assert classify(component_record) is RawShape.MIXED

    def test_unshaped(self, minimal_record):
        assert classify(minimal_record) is RawShape.UNSHAPED

    def test_non_dict_blocks_do_not_count(self):
        assert classify({"components": "oops", "media": []}) is RawShape.UNSHAPED

    @pytest.mark.parametrize(
        "shape,family,expected",
        [
            (RawShape.COMPONENT, RawShape.COMPONENT, True),
            (RawShape.COMPONENT, RawShape.FLAT, False),
            (RawShape.FLAT, RawShape.COMPONENT, False),
            (RawShape.MIXED, RawShape.FLAT, True),
            (RawShape.UNSHAPED, RawShape.FLAT, False),
            (RawShape.UNSHAPED, RawShape.ANY, True),
        ],
    )
    def test_includes(self, shape, family, expected):
        assert shape.includes(family) is expected


class TestDig:
    def test_nested_dicts_and_lists(self):
        data = {"a": {"b": [{"c": 1}]}}
        assert dig(data, "a", "b", 0, "c") == 1

    def test_missing_steps_return_none(self):
        data = {"a": {"b": []}}
        assert dig(data, "a", "b", 0, "c") is None
        assert dig(data, "x", "y") is None
        assert dig(data, "a", 0) is None
        assert dig("not a dict", "a") is None


class TestFirstOf:
    def test_first_present_value_wins(self):
        raw = {"components": {"warranty": {"text": "A"}}, "information": {"warranty": "B"}}
        chain = (component("warranty", "text"), flat("information", "warranty"))
        assert first_of(raw, chain) == "A"

    def test_falls_through_missing_and_blank(self):
        raw = {"components": {"warranty": {"text": ""}}, "information": {"warranty": "B"}}
        chain = (component("warranty", "text"), flat("information", "warranty"))
        assert first_of(raw, chain) == "B"

    def test_default_when_nothing_matches(self):
        assert first_of({}, (top_level("name"),), default="fallback") == "fallback"

    def test_accessors_of_absent_family_are_skipped(self):
        # 'information' holds a value but the caller says the record is component-only
        raw = {"information": {"warranty": "B"}}
        chain = (flat("information", "warranty"),)
        assert first_of(raw, chain, default="D", shape=RawShape.COMPONENT) == "D"

    def test_empty_containers_are_present(self):
        raw = {"components": {"productImages": {"images": []}}, "media": {"images": [1]}}
        chain = (component("productImages", "images"), flat("media", "images"))
        assert first_of(raw, chain) == []

    def test_mapped_converts_value(self):
        accessor = mapped(top_level("wattage"), int)
        assert accessor.get({"wattage": "600"}) == 600
        assert accessor.get({}) is None
        assert accessor.family is RawShape.ANY


@pytest.mark.parametrize(
    "value,expected",
    [(None, True), ("", True), ("  ", True), (0, False), ([], False), ({}, False), ("x", False)],
)
def test_is_missing(value, expected):
    assert is_missing(value) is expected

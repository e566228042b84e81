"""Tests for parody.services.rewriting.json_utils."""

import json

import pytest

from parody.services.rewriting import as_text_list, parse_json_object


class TestParseJsonObject:
    def test_fenced_block(self):
        assert parse_json_object('Sure!\n```json\n{"a": 1}\n```\nEnjoy') == {"a": 1}

    def test_bare_fence(self):
        assert parse_json_object('```\n{"a": 1}\n```') == {"a": 1}

    def test_object_inside_prose(self):
        assert parse_json_object('Here you go: {"title": "x"} hope that helps') == {"title": "x"}

    def test_array_rejected(self):
        with pytest.raises(ValueError):
            parse_json_object("[1, 2]")

    def test_garbage_raises(self):
        with pytest.raises(json.JSONDecodeError):
            parse_json_object("no json at all")


class TestAsTextList:
    def test_null_entries_keep_their_slot(self):
        assert as_text_list(["A", None, "C"], ["a", "b", "c"]) == ["A", "b", "C"]

    def test_non_text_entries_fall_back_to_original(self):
        assert as_text_list([["x"], {"href": "/"}, True], ["a", "b", "c"]) == ["a", "b", "c"]

    def test_numbers_are_stringified(self):
        assert as_text_list(["a", 3]) == ["a", "3"]

    def test_null_past_originals_is_empty(self):
        assert as_text_list(["A", None], ["a"]) == ["A", ""]

    def test_nav_objects_use_text(self):
        assert as_text_list([{"text": "Home", "href": "/"}]) == ["Home"]

    def test_scalar_and_missing(self):
        assert as_text_list("solo") == ["solo"]
        assert as_text_list(None) == []
        assert as_text_list({"not": "a list"}) == []

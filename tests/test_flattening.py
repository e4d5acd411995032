"""Tests for localedesk.core.flattening — nested ↔ dot-notated documents."""

import json

from localedesk.core.flattening import (
    dump_json,
    flatten,
    read_json_file,
    remove_nested_key,
    set_nested_value,
    sort_deep,
    sort_key,
    unflatten,
    write_json_file,
)


class TestFlatten:
    def test_flat_dict(self):
        assert flatten({"a": "1", "b": "2"}) == {"a": "1", "b": "2"}

    def test_nested_dict(self):
        doc = {"toolbar": {"file": "Dosya", "save": "Kaydet"}}
        assert flatten(doc) == {"toolbar.file": "Dosya", "toolbar.save": "Kaydet"}

    def test_deeply_nested(self):
        assert flatten({"a": {"b": {"c": "deep"}}}) == {"a.b.c": "deep"}

    def test_non_string_leaves_become_text(self):
        doc = {"n": 3, "f": 1.5, "t": True, "no": False, "none": None}
        assert flatten(doc) == {
            "n": "3", "f": "1.5", "t": "true", "no": "false", "none": "",
        }

    def test_lists_are_leaves(self):
        assert flatten({"items": ["a", "b"]}) == {"items": '["a", "b"]'}

    def test_empty_branch_contributes_nothing(self):
        assert flatten({"a": {}, "b": "x"}) == {"b": "x"}

    def test_non_dict_document(self):
        assert flatten(["a"]) == {}
        assert flatten(None) == {}


class TestUnflatten:
    def test_round_trip(self):
        doc = {"a": {"b": "1", "c": {"d": "2"}}, "e": "3"}
        assert unflatten(flatten(doc)) == doc

    def test_shared_prefixes_merge(self):
        flat = {"menu.file": "File", "menu.edit": "Edit"}
        assert unflatten(flat) == {"menu": {"edit": "Edit", "file": "File"}}


class TestSetNestedValue:
    def test_creates_intermediates(self):
        doc = {}
        set_nested_value(doc, "a.b.c", "x")
        assert doc == {"a": {"b": {"c": "x"}}}

    def test_keeps_siblings(self):
        doc = {"a": {"keep": "y"}}
        set_nested_value(doc, "a.new", "x")
        assert doc == {"a": {"keep": "y", "new": "x"}}

    def test_replaces_scalar_intermediate(self):
        doc = {"a": "scalar"}
        set_nested_value(doc, "a.b", "x")
        assert doc == {"a": {"b": "x"}}

    def test_overwrites_leaf(self):
        doc = {"a": "old"}
        set_nested_value(doc, "a", "new")
        assert doc == {"a": "new"}


class TestRemoveNestedKey:
    def test_prunes_all_empty_ancestors(self):
        doc = {"a": {"b": {"c": "x"}}}
        remove_nested_key(doc, "a.b.c")
        assert doc == {}

    def test_stops_at_ancestor_with_children(self):
        doc = {"a": {"b": {"c": "x"}, "d": "y"}}
        remove_nested_key(doc, "a.b.c")
        assert doc == {"a": {"d": "y"}}

    def test_missing_path_is_noop(self):
        doc = {"a": {"b": "x"}}
        remove_nested_key(doc, "a.z.q")
        assert doc == {"a": {"b": "x"}}

    def test_path_through_scalar_is_noop(self):
        doc = {"a": "x"}
        remove_nested_key(doc, "a.b")
        assert doc == {"a": "x"}

    def test_top_level_key(self):
        doc = {"a": "x", "b": "y"}
        remove_nested_key(doc, "a")
        assert doc == {"b": "y"}


class TestSorting:
    def test_sort_deep_orders_every_level(self):
        result = sort_deep({"b": 1, "a": {"z": 1, "y": 2}})
        assert list(result) == ["a", "b"]
        assert list(result["a"]) == ["y", "z"]

    def test_sort_key_ignores_case_and_accents(self):
        words = ["b", "É", "a", "e"]
        assert sorted(words, key=sort_key) == ["a", "b", "e", "É"]

    def test_sort_key_is_stable_for_equal_bases(self):
        assert sort_key("A") != sort_key("a")


class TestReadWrite:
    def test_write_sorted_with_two_space_indent(self, tmp_path):
        path = tmp_path / "common.json"
        assert write_json_file(path, {"b": 1, "a": 2}) is True
        text = path.read_text(encoding="utf-8")
        assert text == '{\n  "a": 2,\n  "b": 1\n}'
        assert list(json.loads(text)) == ["a", "b"]

    def test_write_keeps_non_ascii(self, tmp_path):
        path = tmp_path / "tr.json"
        write_json_file(path, {"save": "Kaydet ğüş"})
        assert "Kaydet ğüş" in path.read_text(encoding="utf-8")

    def test_write_failure_returns_false(self, tmp_path):
        path = tmp_path / "missing_dir" / "x.json"
        assert write_json_file(path, {}) is False

    def test_read_missing_file(self, tmp_path):
        assert read_json_file(tmp_path / "nope.json") == {}

    def test_read_malformed_file(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert read_json_file(path) == {}

    def test_read_non_object_document(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[1, 2]", encoding="utf-8")
        assert read_json_file(path) == {}

    def test_read_valid_file(self, tmp_path):
        path = tmp_path / "ok.json"
        path.write_text('{"a": {"b": "c"}}', encoding="utf-8")
        assert read_json_file(path) == {"a": {"b": "c"}}

    def test_dump_json_has_no_trailing_newline(self):
        assert not dump_json({"a": "b"}).endswith("\n")

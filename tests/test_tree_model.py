"""Tests for localedesk.core.tree_model — key tree and display rows."""

from localedesk.core.tree_model import (
    build_rows,
    build_tree,
    count_keys,
    filter_tree,
    get_sibling_keys,
    is_missing,
    namespace_row_id,
    sort_tree,
)
from localedesk.models.catalog import KeyEntry, NamespaceData, RowKind

LANGS = ["en-US", "fr-FR"]


# ── Helpers ──────────────────────────────────────────────────────────

def _entry(key, en="x", fr="x") -> KeyEntry:
    return KeyEntry(key=key, values={"en-US": en, "fr-FR": fr})


def _namespace() -> NamespaceData:
    return NamespaceData("common", [
        _entry("app.title"),
        _entry("menu.edit", fr=None),
        _entry("menu.file"),
        _entry("menu.file.open", fr=""),
        _entry("zeta"),
    ])


class TestIsMissing:
    def test_none_and_empty_are_missing(self):
        assert is_missing({"en-US": "a", "fr-FR": None}, LANGS)
        assert is_missing({"en-US": "a", "fr-FR": ""}, LANGS)

    def test_absent_language_is_missing(self):
        assert is_missing({"en-US": "a"}, LANGS)

    def test_complete(self):
        assert not is_missing({"en-US": "a", "fr-FR": "b"}, LANGS)


class TestBuildTree:
    def test_segments_and_full_keys(self):
        tree = sort_tree(build_tree(_namespace().keys))
        assert [n.segment for n in tree] == ["app", "menu", "zeta"]
        menu = tree[1]
        assert [c.full_key for c in menu.children] == ["menu.edit", "menu.file"]

    def test_key_that_is_also_prefix(self):
        tree = build_tree(_namespace().keys)
        file_node = next(c for c in tree[1].children if c.segment == "file")
        assert file_node.values is not None
        assert not file_node.is_leaf
        assert file_node.children[0].full_key == "menu.file.open"

    def test_leaf(self):
        tree = build_tree([_entry("solo")])
        assert tree[0].is_leaf


class TestCountKeys:
    def test_counts(self):
        tree = build_tree(_namespace().keys)
        counts = count_keys(tree, LANGS)
        # menu.file is both a key and a branch; only leaves are counted
        assert counts.completed == 2
        assert counts.missing == 2
        assert counts.total == 4


class TestFilterTree:
    def test_keeps_ancestors_of_match(self):
        tree = filter_tree(build_tree(_namespace().keys), "OPEN")
        assert [n.segment for n in tree] == ["menu"]
        assert [c.segment for c in tree[0].children] == ["file"]
        assert tree[0].children[0].children[0].full_key == "menu.file.open"

    def test_no_match(self):
        assert filter_tree(build_tree(_namespace().keys), "nothing") == []


class TestBuildRows:
    def test_collapsed_namespace(self):
        rows = build_rows([_namespace()], LANGS)
        assert len(rows) == 1
        row = rows[0]
        assert row.kind is RowKind.NAMESPACE
        assert row.full_key == ""
        assert row.has_missing
        assert not row.expanded

    def test_expanded_namespace_shows_top_level(self):
        rows = build_rows([_namespace()], LANGS, expanded={namespace_row_id("common")})
        assert [(r.kind, r.segment, r.depth) for r in rows] == [
            (RowKind.NAMESPACE, "common", 0),
            (RowKind.BRANCH, "app", 1),
            (RowKind.BRANCH, "menu", 1),
            (RowKind.LEAF, "zeta", 1),
        ]

    def test_expanded_branch(self):
        expanded = {namespace_row_id("common"), "common:menu"}
        rows = build_rows([_namespace()], LANGS, expanded=expanded)
        segments = [r.segment for r in rows]
        assert segments == ["common", "app", "menu", "edit", "file", "zeta"]
        edit = rows[3]
        assert edit.kind is RowKind.LEAF
        assert edit.depth == 2
        assert edit.has_missing

    def test_branch_counts(self):
        expanded = {namespace_row_id("common")}
        rows = build_rows([_namespace()], LANGS, expanded=expanded)
        menu = next(r for r in rows if r.segment == "menu")
        assert (menu.completed_count, menu.missing_count) == (0, 2)
        assert menu.has_missing

    def test_search_expands_everything(self):
        rows = build_rows([_namespace()], LANGS, search="open")
        assert [r.full_key for r in rows] == ["", "menu", "menu.file", "menu.file.open"]
        assert all(r.expanded for r in rows if r.kind is not RowKind.LEAF)

    def test_search_drops_namespaces_without_match(self):
        other = NamespaceData("errors", [_entry("e404")])
        rows = build_rows([_namespace(), other], LANGS, search="e404")
        assert [r.namespace for r in rows] == ["errors", "errors"]

    def test_search_matching_namespace_keeps_whole_tree(self):
        rows = build_rows([_namespace()], LANGS, search="comm")
        assert "zeta" in [r.segment for r in rows]
        assert "menu.file.open" in [r.full_key for r in rows]

    def test_blank_search_is_not_searching(self):
        assert len(build_rows([_namespace()], LANGS, search="   ")) == 1


class TestSiblingKeys:
    def test_nested_siblings(self):
        siblings = get_sibling_keys(_namespace(), "menu.edit")
        assert [k.key for k in siblings] == ["menu.edit", "menu.file"]

    def test_top_level_siblings(self):
        siblings = get_sibling_keys(_namespace(), "zeta")
        assert [k.key for k in siblings] == ["zeta"]

    def test_deeper_keys_excluded(self):
        siblings = get_sibling_keys(_namespace(), "menu.file.open")
        assert [k.key for k in siblings] == ["menu.file.open"]

"""Tests for localedesk.core.catalog_reader — per-namespace aggregate view."""

import json

from localedesk.core.catalog_reader import known_namespaces, read_all
from localedesk.core.file_resolver import FileLockRegistry
from localedesk.models.catalog import AppSettings, Language, TranslationFile


def _file(tmp_path, code, namespace, doc) -> TranslationFile:
    path = tmp_path / code / f"{namespace}.json"
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(doc), encoding="utf-8")
    return TranslationFile(str(path), namespace)


class TestKnownNamespaces:
    def test_union_sorted(self):
        settings = AppSettings(languages=[
            Language("en-US", [TranslationFile("/a", "errors"), TranslationFile("/b", "common")]),
            Language("fr-FR", [TranslationFile("/c", "Admin"), TranslationFile("/d", "common")]),
        ])
        assert known_namespaces(settings) == ["Admin", "common", "errors"]

    def test_no_languages(self):
        assert known_namespaces(AppSettings()) == []


class TestReadAll:
    def test_missing_file_yields_none(self, tmp_path):
        settings = AppSettings(languages=[
            Language("en-US", [_file(tmp_path, "en-US", "common", {"k": "hello"})]),
            Language("fr-FR"),
        ])
        data = read_all(settings)
        assert len(data) == 1
        assert data[0].namespace == "common"
        assert data[0].keys[0].key == "k"
        assert data[0].keys[0].values == {"en-US": "hello", "fr-FR": None}

    def test_missing_key_yields_none(self, tmp_path):
        settings = AppSettings(languages=[
            Language("en-US", [_file(tmp_path, "en-US", "common", {"a": "A", "b": "B"})]),
            Language("fr-FR", [_file(tmp_path, "fr-FR", "common", {"a": "A-fr"})]),
        ])
        keys = {e.key: e.values for e in read_all(settings)[0].keys}
        assert keys["b"] == {"en-US": "B", "fr-FR": None}
        assert keys["a"] == {"en-US": "A", "fr-FR": "A-fr"}

    def test_every_value_map_covers_every_language(self, tmp_path):
        settings = AppSettings(languages=[
            Language("en-US", [_file(tmp_path, "en-US", "common", {"x": {"y": "1"}})]),
            Language("fr-FR", [_file(tmp_path, "fr-FR", "errors", {"e": "E"})]),
            Language("tr-TR"),
        ])
        for ns in read_all(settings):
            for entry in ns.keys:
                assert set(entry.values) == {"en-US", "fr-FR", "tr-TR"}

    def test_sorted_namespaces_and_keys(self, tmp_path):
        settings = AppSettings(languages=[
            Language("en-US", [
                _file(tmp_path, "en-US", "zeta", {"b": "1", "A": "2", "a": {"c": "3"}}),
                _file(tmp_path, "en-US", "alpha", {}),
            ]),
        ])
        data = read_all(settings)
        assert [ns.namespace for ns in data] == ["alpha", "zeta"]
        assert [e.key for e in data[1].keys] == ["A", "a.c", "b"]

    def test_malformed_file_reads_as_empty(self, tmp_path):
        path = tmp_path / "en-US" / "common.json"
        path.parent.mkdir(parents=True)
        path.write_text("{oops", encoding="utf-8")
        settings = AppSettings(languages=[
            Language("en-US", [TranslationFile(str(path), "common")]),
        ])
        data = read_all(settings)
        assert data[0].namespace == "common"
        assert data[0].keys == []

    def test_reads_under_locks(self, tmp_path):
        locks = FileLockRegistry()
        f = _file(tmp_path, "en-US", "common", {"k": "v"})
        settings = AppSettings(languages=[Language("en-US", [f])])
        data = read_all(settings, locks)
        assert data[0].keys[0].values == {"en-US": "v"}
        assert len(locks) == 1

"""Tests for localedesk.core.statistics — completion figures."""

import pytest

from localedesk.core.statistics import (
    language_completion,
    missing_translations,
    namespace_completion,
    string_lengths,
    summarize,
)
from localedesk.models.catalog import KeyEntry, NamespaceData

LANGS = ["en-US", "fr-FR"]


def _data() -> list[NamespaceData]:
    return [
        NamespaceData("common", [
            KeyEntry("a", {"en-US": "Alpha", "fr-FR": "Alpha-fr"}),
            KeyEntry("b", {"en-US": "Be", "fr-FR": None}),
        ]),
        NamespaceData("errors", [
            KeyEntry("e", {"en-US": "A much longer error text", "fr-FR": "   "}),
        ]),
    ]


class TestSummarize:
    def test_counts(self):
        s = summarize(_data(), LANGS)
        assert s.total_keys == 3
        assert s.total_languages == 2
        assert s.total_namespaces == 2
        assert s.completion_percent == pytest.approx(66.7)

    def test_empty_catalog_is_complete(self):
        assert summarize([], LANGS).completion_percent == 100.0


class TestLanguageCompletion:
    def test_per_language(self):
        result = {c.language: c for c in language_completion(_data(), LANGS)}
        assert (result["en-US"].completed, result["en-US"].missing) == (3, 0)
        assert (result["fr-FR"].completed, result["fr-FR"].missing) == (1, 2)
        assert result["fr-FR"].percent == pytest.approx(33.3)


class TestNamespaceCompletion:
    def test_per_namespace(self):
        common, errors = namespace_completion(_data(), LANGS)
        assert common.filled == {"en-US": 2, "fr-FR": 1}
        assert common.percent("fr-FR") == 50.0
        assert errors.percent("fr-FR") == 0.0


class TestMissingTranslations:
    def test_blank_counts_as_missing(self):
        missing = missing_translations(_data(), LANGS)
        assert [(m.namespace, m.key, m.missing_languages) for m in missing] == [
            ("common", "b", ["fr-FR"]),
            ("errors", "e", ["fr-FR"]),
        ]


class TestStringLengths:
    def test_longest_and_shortest(self):
        longest, shortest = string_lengths(_data(), LANGS, top_n=2)
        assert longest[0].key == "errors.e"
        assert longest[0].length == len("A much longer error text")
        assert shortest[0].text == "Be"
        assert len(longest) == len(shortest) == 2

    def test_blank_values_excluded(self):
        longest, _ = string_lengths(_data(), LANGS)
        assert all(s.text.strip() for s in longest)
        assert len(longest) == 4

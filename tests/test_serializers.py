"""Tests for localedesk.core.serializers — settings document ↔ dataclasses."""

import pytest

from localedesk.constants import DEFAULT_SERVER_PORT
from localedesk.core.serializers import dict_to_settings, settings_to_dict
from localedesk.models.catalog import (
    AppSettings,
    FolderStructure,
    Language,
    TranslationFile,
)


# ── Helpers ──────────────────────────────────────────────────────────

def _make_settings() -> AppSettings:
    return AppSettings(
        root_folder="/work/locales",
        folder_structure=FolderStructure.FLAT,
        languages=[
            Language("en-US", [TranslationFile("/work/locales/en-US.json", "default")]),
        ],
        server_port=6000,
        server_auto_start=True,
        deepl_api_key="secret",
    )


class TestSettingsToDict:
    def test_camel_case_document(self):
        d = settings_to_dict(_make_settings())
        assert d == {
            "rootFolder": "/work/locales",
            "folderStructure": "flat",
            "languages": [{
                "code": "en-US",
                "files": [{"absolutePath": "/work/locales/en-US.json", "namespace": "default"}],
            }],
            "serverPort": 6000,
            "serverAutoStart": True,
            "deeplApiKey": "secret",
        }

    def test_round_trip(self):
        settings = _make_settings()
        assert dict_to_settings(settings_to_dict(settings)) == settings

    def test_unset_root_is_null(self):
        assert settings_to_dict(AppSettings())["rootFolder"] is None


class TestDictToSettings:
    def test_empty_document_gives_defaults(self):
        assert dict_to_settings({}) == AppSettings()

    def test_unknown_structure_falls_back(self):
        assert dict_to_settings({"folderStructure": "weird"}).folder_structure is \
            FolderStructure.NAMESPACED

    def test_malformed_languages_skipped(self):
        settings = dict_to_settings({"languages": [
            {"code": "en-US", "files": [{"absolutePath": "/a.json"}, "junk"]},
            {"files": []},
            "fr-FR",
        ]})
        assert settings.language_codes == ["en-US"]
        assert settings.languages[0].files == []

    def test_non_integer_port_falls_back(self):
        assert dict_to_settings({"serverPort": "80"}).server_port == DEFAULT_SERVER_PORT

    @pytest.mark.parametrize("port", [70000, -1, True])
    def test_out_of_range_port_falls_back(self, port):
        assert dict_to_settings({"serverPort": port}).server_port == DEFAULT_SERVER_PORT

    def test_port_zero_kept(self):
        assert dict_to_settings({"serverPort": 0}).server_port == 0


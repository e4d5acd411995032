"""Tests for localedesk.core.translator — DeepL client, cache and usage."""

import json
import threading
import time
from unittest.mock import MagicMock

import pytest
import requests

from localedesk.constants import (
    DEEPL_DEFAULT_CHARACTER_LIMIT,
    DEEPL_TRANSLATE_URL,
    DEEPL_USAGE_URL,
)
from localedesk.core.translator import (
    DeepLTranslator,
    TranslationServiceError,
    Usage,
    deepl_language,
)

DAY_MS = 24 * 60 * 60 * 1000


# ── Helpers ──────────────────────────────────────────────────────────

def _response(status=200, payload=None, text=""):
    resp = MagicMock()
    resp.status_code = status
    resp.text = text
    resp.json.return_value = payload
    return resp


def _translator(tmp_path, api_key="key-123", session=None) -> DeepLTranslator:
    return DeepLTranslator(
        api_key_provider=lambda: api_key,
        cache_path=tmp_path / "cache.json",
        usage_path=tmp_path / "usage.json",
        session=session or MagicMock(),
    )


class TestDeepLLanguage:
    def test_primary_subtag_upper(self):
        assert deepl_language("fr-FR") == "FR"
        assert deepl_language("pt-BR") == "PT"


class TestTranslate:
    def test_success(self, tmp_path):
        session = MagicMock()
        session.request.return_value = _response(
            payload={"translations": [{"text": "Bonjour"}]})
        tr = _translator(tmp_path, session=session)

        assert tr.translate("Hello", "en-US", "fr-FR", "common:greet") == "Bonjour"

        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        assert (method, url) == ("POST", DEEPL_TRANSLATE_URL)
        assert kwargs["headers"] == {"Authorization": "DeepL-Auth-Key key-123"}
        assert kwargs["json"] == {
            "text": ["Hello"], "source_lang": "EN", "target_lang": "FR",
        }

    def test_result_cached_with_source_text(self, tmp_path):
        session = MagicMock()
        session.request.return_value = _response(
            payload={"translations": [{"text": "Bonjour"}]})
        tr = _translator(tmp_path, session=session)
        tr.translate("Hello", "en-US", "fr-FR", "k")

        cache = json.loads((tmp_path / "cache.json").read_text(encoding="utf-8"))
        assert cache["k"]["translation"] == "Bonjour"
        assert cache["k"]["sourceText"] == "Hello"
        assert isinstance(cache["k"]["timestamp"], int)

        assert tr.translate("Hello", "en-US", "fr-FR", "k") == "Bonjour"
        assert session.request.call_count == 1

    def test_cache_ignored_when_source_changed(self, tmp_path):
        session = MagicMock()
        session.request.return_value = _response(
            payload={"translations": [{"text": "Salut"}]})
        (tmp_path / "cache.json").write_text(json.dumps({
            "k": {"translation": "Bonjour", "timestamp": 0, "sourceText": "Hello"},
        }), encoding="utf-8")
        tr = _translator(tmp_path, session=session)
        assert tr.translate("Hi", "en-US", "fr-FR", "k") == "Salut"

    def test_missing_api_key(self, tmp_path):
        session = MagicMock()
        tr = _translator(tmp_path, api_key="", session=session)
        with pytest.raises(TranslationServiceError):
            tr.translate("Hello", "en-US", "fr-FR", "k")
        session.request.assert_not_called()

    def test_non_200(self, tmp_path):
        session = MagicMock()
        session.request.return_value = _response(status=403, text="Forbidden")
        tr = _translator(tmp_path, session=session)
        with pytest.raises(TranslationServiceError) as exc_info:
            tr.translate("Hello", "en-US", "fr-FR", "k")
        assert exc_info.value.status_code == 403

    def test_network_error(self, tmp_path):
        session = MagicMock()
        session.request.side_effect = requests.ConnectionError("down")
        tr = _translator(tmp_path, session=session)
        with pytest.raises(TranslationServiceError):
            tr.translate("Hello", "en-US", "fr-FR", "k")

    def test_unexpected_payload(self, tmp_path):
        session = MagicMock()
        session.request.return_value = _response(payload={"translations": []})
        tr = _translator(tmp_path, session=session)
        with pytest.raises(TranslationServiceError):
            tr.translate("Hello", "en-US", "fr-FR", "k")
        assert not (tmp_path / "cache.json").exists()

    def test_usage_counter_grows(self, tmp_path):
        session = MagicMock()
        session.request.return_value = _response(
            payload={"translations": [{"text": "x"}]})
        tr = _translator(tmp_path, session=session)
        tr.translate("Hello", "en-US", "fr-FR", "a")
        tr.translate("World!", "en-US", "fr-FR", "b")
        assert tr.local_usage()["characterCount"] == 11

    def test_concurrent_translations_keep_every_entry(self, tmp_path):
        session = MagicMock()
        session.request.return_value = _response(
            payload={"translations": [{"text": "ok"}]})
        tr = _translator(tmp_path, session=session)

        threads = [
            threading.Thread(target=tr.translate, args=("abc", "en-US", "fr-FR", f"k{i}"))
            for i in range(8)
        ]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        cache = json.loads((tmp_path / "cache.json").read_text(encoding="utf-8"))
        assert sorted(cache) == sorted(f"k{i}" for i in range(8))
        assert tr.local_usage()["characterCount"] == 24


class TestUsage:
    def test_no_key(self, tmp_path):
        tr = _translator(tmp_path, api_key="")
        assert tr.get_usage() == Usage(0, DEEPL_DEFAULT_CHARACTER_LIMIT)

    def test_remote_usage(self, tmp_path):
        session = MagicMock()
        session.request.return_value = _response(
            payload={"character_count": 42, "character_limit": 1000})
        tr = _translator(tmp_path, session=session)
        assert tr.get_usage() == Usage(42, 1000)
        assert session.request.call_args.args == ("GET", DEEPL_USAGE_URL)

    def test_falls_back_to_local_counter(self, tmp_path):
        (tmp_path / "usage.json").write_text(json.dumps({
            "characterCount": 120, "lastReset": int(time.time() * 1000),
        }), encoding="utf-8")
        session = MagicMock()
        session.request.return_value = _response(status=500)
        tr = _translator(tmp_path, session=session)
        assert tr.get_usage() == Usage(120, DEEPL_DEFAULT_CHARACTER_LIMIT)

    def test_local_counter_resets_after_30_days(self, tmp_path):
        (tmp_path / "usage.json").write_text(json.dumps({
            "characterCount": 999,
            "lastReset": int(time.time() * 1000) - 31 * DAY_MS,
        }), encoding="utf-8")
        tr = _translator(tmp_path)
        assert tr.local_usage()["characterCount"] == 0

    def test_corrupt_usage_file(self, tmp_path):
        (tmp_path / "usage.json").write_text("{", encoding="utf-8")
        assert _translator(tmp_path).local_usage()["characterCount"] == 0

"""DeepL translator — machine-translation suggestions with a local cache.

Cache entries are keyed by an opaque caller-supplied key and only reused
while the cached source text still matches. Every remote call adds the
source length to a local character counter that resets after 30 days.
Cache and usage files are best effort: their I/O errors are logged.
"""

from __future__ import annotations

import json
import logging
import threading
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

import requests

from localedesk.constants import (
    DEEPL_DEFAULT_CHARACTER_LIMIT,
    DEEPL_TIMEOUT_S,
    DEEPL_TRANSLATE_URL,
    DEEPL_USAGE_URL,
    USAGE_RESET_DAYS,
)

logger = logging.getLogger(__name__)

_SECONDS_PER_DAY = 24 * 60 * 60


class TranslationServiceError(Exception):
    """Remote translation failed (missing key, network, bad response)."""

    def __init__(self, message: str, status_code: int | None = None):
        self.message = message
        self.status_code = status_code
        super().__init__(message)


@dataclass
class Usage:
    character_count: int
    character_limit: int


def deepl_language(code: str) -> str:
    """``fr-FR`` -> ``FR``."""
    return code.split("-")[0].upper()


def _load_json(path: Path) -> dict:
    try:
        if path.exists():
            data = json.loads(path.read_text(encoding="utf-8"))
            if isinstance(data, dict):
                return data
    except (OSError, ValueError):
        logger.exception("Failed to load %s", path)
    return {}


def _save_json(path: Path, data: dict) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError:
        logger.exception("Failed to save %s", path)


class DeepLTranslator:
    """DeepL API client used by the detail editor's suggestions.

    Args:
        api_key_provider: Returns the current API key (read at call time so
            a key changed in settings applies immediately).
        cache_path: JSON file holding cached translations.
        usage_path: JSON file holding the local character counter.
        session: Optional requests session (tests inject a mock).
    """

    def __init__(
        self,
        api_key_provider: Callable[[], str],
        cache_path: Path | str,
        usage_path: Path | str,
        session: requests.Session | None = None,
    ):
        self._api_key_provider = api_key_provider
        self._cache_path = Path(cache_path)
        self._usage_path = Path(usage_path)
        self._session = session or requests.Session()
        # guards read-modify-write of the cache and usage files
        self._files_lock = threading.Lock()

    # ------------------------------------------------------------------
    # Translation
    # ------------------------------------------------------------------

    def translate(self, text: str, from_lang: str, to_lang: str, cache_key: str) -> str:
        """Translate ``text``; a cached result for the same source is reused.

        Raises:
            TranslationServiceError: No API key or the remote call failed.
        """
        with self._files_lock:
            cached = _load_json(self._cache_path).get(cache_key)
        if isinstance(cached, dict) and cached.get("sourceText") == text:
            return cached["translation"]

        api_key = self._api_key_provider()
        if not api_key:
            raise TranslationServiceError("DeepL API key not configured")

        payload = self._post(DEEPL_TRANSLATE_URL, api_key, {
            "text": [text],
            "source_lang": deepl_language(from_lang),
            "target_lang": deepl_language(to_lang),
        })
        try:
            translation = payload["translations"][0]["text"]
        except (KeyError, IndexError, TypeError):
            raise TranslationServiceError("Unexpected response format from DeepL")

        with self._files_lock:
            self._increment_usage(len(text))
            cache = _load_json(self._cache_path)
            cache[cache_key] = {
                "translation": translation,
                "timestamp": int(time.time() * 1000),
                "sourceText": text,
            }
            _save_json(self._cache_path, cache)
        return translation

    def _post(self, url: str, api_key: str, body: dict) -> Any:
        return self._request("POST", url, api_key, json=body)

    def _request(self, method: str, url: str, api_key: str, **kwargs) -> Any:
        headers = {"Authorization": f"DeepL-Auth-Key {api_key}"}
        try:
            response = self._session.request(
                method, url, headers=headers, timeout=DEEPL_TIMEOUT_S, **kwargs
            )
        except requests.RequestException as e:
            raise TranslationServiceError(f"DeepL request failed: {e}") from e

        if response.status_code != 200:
            raise TranslationServiceError(
                f"DeepL API error: {response.status_code} - {response.text}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise TranslationServiceError("DeepL returned invalid JSON") from e

    # ------------------------------------------------------------------
    # Usage
    # ------------------------------------------------------------------

    def local_usage(self) -> dict:
        """Local counter ``{characterCount, lastReset}``, reset after 30 days."""
        now_ms = int(time.time() * 1000)
        data = _load_json(self._usage_path)
        cutoff = now_ms - USAGE_RESET_DAYS * _SECONDS_PER_DAY * 1000
        if not data or data.get("lastReset", 0) < cutoff:
            return {"characterCount": 0, "lastReset": now_ms}
        return data

    def _increment_usage(self, count: int) -> None:
        usage = self.local_usage()
        usage["characterCount"] = usage.get("characterCount", 0) + count
        _save_json(self._usage_path, usage)

    def get_usage(self) -> Usage:
        """Account usage from DeepL, falling back to the local counter."""
        api_key = self._api_key_provider()
        if not api_key:
            return Usage(0, DEEPL_DEFAULT_CHARACTER_LIMIT)
        try:
            data = self._request("GET", DEEPL_USAGE_URL, api_key)
            count, limit = data["character_count"], data["character_limit"]
            if not isinstance(count, int) or not isinstance(limit, int):
                raise TypeError("non-integer usage fields")
            return Usage(count, limit)
        except (TranslationServiceError, KeyError, TypeError) as e:
            logger.warning("Failed to fetch DeepL usage: %s", e)
            return Usage(self.local_usage().get("characterCount", 0),
                         DEEPL_DEFAULT_CHARACTER_LIMIT)

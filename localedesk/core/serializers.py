"""Serialization utilities — dataclass ↔ JSON-safe dict conversion.

The settings document uses camelCase field names on disk while the
dataclasses use snake_case; the generic helpers translate between the two.
"""

from __future__ import annotations

import dataclasses
from enum import Enum
from typing import Any

from localedesk.constants import DEFAULT_SERVER_PORT
from localedesk.models.catalog import (
    AppSettings,
    FolderStructure,
    Language,
    TranslationFile,
    is_valid_port,
)


# =====================================================================
# Generic helpers
# =====================================================================


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def _serialize_value(val: Any) -> Any:
    """Convert a value to a JSON-safe type."""
    if val is None:
        return None
    if isinstance(val, Enum):
        return val.value
    if dataclasses.is_dataclass(val) and not isinstance(val, type):
        return _dataclass_to_dict(val)
    if isinstance(val, list):
        return [_serialize_value(v) for v in val]
    if isinstance(val, dict):
        return {k: _serialize_value(v) for k, v in val.items()}
    if isinstance(val, (int, float, str, bool)):
        return val
    return str(val)


def _dataclass_to_dict(obj: Any) -> dict:
    """Recursively convert a dataclass to a camelCase JSON-safe dict."""
    result = {}
    for f in dataclasses.fields(obj):
        result[_camel(f.name)] = _serialize_value(getattr(obj, f.name))
    return result


# =====================================================================
# Settings
# =====================================================================


def settings_to_dict(settings: AppSettings) -> dict:
    """Serialize AppSettings to the on-disk settings document."""
    return _dataclass_to_dict(settings)


def dict_to_settings(data: dict) -> AppSettings:
    """Deserialize a settings document, filling defaults for missing fields.

    Unknown folder structures fall back to ``namespaced``, out-of-range
    ports to the default port; malformed language entries are skipped.
    """
    try:
        structure = FolderStructure(data.get("folderStructure", "namespaced"))
    except ValueError:
        structure = FolderStructure.NAMESPACED

    languages = [
        _dict_to_language(entry)
        for entry in data.get("languages") or []
        if isinstance(entry, dict) and entry.get("code")
    ]

    port = data.get("serverPort", DEFAULT_SERVER_PORT)
    return AppSettings(
        root_folder=data.get("rootFolder") or None,
        folder_structure=structure,
        languages=languages,
        server_port=port if is_valid_port(port) else DEFAULT_SERVER_PORT,
        server_auto_start=bool(data.get("serverAutoStart", False)),
        deepl_api_key=data.get("deeplApiKey") or "",
    )


def _dict_to_language(d: dict) -> Language:
    return Language(
        code=d["code"],
        files=[
            TranslationFile(
                absolute_path=f["absolutePath"],
                namespace=f["namespace"],
            )
            for f in d.get("files") or []
            if isinstance(f, dict) and "absolutePath" in f and "namespace" in f
        ],
    )


"""Flattening codec — nested JSON documents ↔ dot-notated key maps.

Translation files are arbitrary-depth objects with string leaves::

    {"toolbar": {"file": "Dosya"}}  <->  {"toolbar.file": "Dosya"}

Only dicts are descended into; lists and primitives are leaves. Every
write goes through ``sort_deep`` so files on disk are always in
canonical key order.
"""

from __future__ import annotations

import json
import logging
import unicodedata
from pathlib import Path
from typing import Any

from localedesk.constants import JSON_INDENT, KEY_SEPARATOR

logger = logging.getLogger(__name__)


def sort_key(text: str) -> tuple[str, str]:
    """Collation key: case- and accent-insensitive, ties broken by raw text."""
    decomposed = unicodedata.normalize("NFKD", text)
    base = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    return base.casefold(), text


def _to_text(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    # lists keep their JSON form so elements with commas stay intact
    if isinstance(value, list):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def flatten(doc: Any, prefix: str = "") -> dict[str, str]:
    """Flatten nested dicts to dot-notation keys.

    {"a": {"b": 1, "c": None}} -> {"a.b": "1", "a.c": ""}
    """
    result: dict[str, str] = {}
    if not isinstance(doc, dict):
        return result
    for k, v in doc.items():
        key = f"{prefix}{KEY_SEPARATOR}{k}" if prefix else k
        if isinstance(v, dict):
            result.update(flatten(v, key))
        else:
            result[key] = _to_text(v)
    return result


def set_nested_value(doc: dict, dotted_key: str, value: Any) -> None:
    """Set ``value`` at a dot path, creating intermediate dicts.

    A non-dict value sitting where an intermediate is needed is replaced
    by an empty dict.
    """
    parts = dotted_key.split(KEY_SEPARATOR)
    current = doc
    for part in parts[:-1]:
        child = current.get(part)
        if not isinstance(child, dict):
            child = {}
            current[part] = child
        current = child
    current[parts[-1]] = value


def remove_nested_key(doc: dict, dotted_key: str) -> None:
    """Delete the value at a dot path and prune ancestors left empty.

    Pruning stops at the first ancestor that still has children. A path
    that does not exist leaves the document untouched.
    """
    parts = dotted_key.split(KEY_SEPARATOR)
    stack: list[tuple[dict, str]] = []
    current = doc
    for part in parts[:-1]:
        child = current.get(part)
        if not isinstance(child, dict):
            return
        stack.append((current, part))
        current = child

    current.pop(parts[-1], None)

    for parent, key in reversed(stack):
        if parent[key]:
            break
        del parent[key]


def unflatten(flat: dict[str, Any]) -> dict:
    """Rebuild a nested document from a flat map."""
    doc: dict = {}
    for key in sorted(flat, key=sort_key):
        set_nested_value(doc, key, flat[key])
    return doc


def sort_deep(doc: dict) -> dict:
    """Return a copy with every dict's keys in canonical order."""
    result: dict = {}
    for key in sorted(doc, key=sort_key):
        value = doc[key]
        result[key] = sort_deep(value) if isinstance(value, dict) else value
    return result


def read_json_file(path: str | Path) -> dict:
    """Read a translation document; unreadable or malformed files yield {}."""
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        logger.warning("Translation file not found: %s", path)
        return {}
    except (OSError, UnicodeDecodeError, ValueError) as e:
        logger.warning("Unreadable translation file %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        logger.warning("Translation file %s is not a JSON object", path)
        return {}
    return data


def dump_json(doc: dict) -> str:
    """Serialize a document in canonical on-disk form."""
    return json.dumps(sort_deep(doc), indent=JSON_INDENT, ensure_ascii=False)


def write_json_file(path: str | Path, doc: dict) -> bool:
    """Write ``doc`` sorted with 2-space indentation.

    Returns:
        False if the file could not be written.
    """
    try:
        Path(path).write_text(dump_json(doc), encoding="utf-8")
    except OSError:
        logger.exception("Failed to write translation file %s", path)
        return False
    return True

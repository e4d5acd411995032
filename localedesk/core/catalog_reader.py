"""Catalog merge engine — per-namespace aggregate across all languages.

Reads every language's file for every known namespace and merges the
flattened maps into NamespaceData where each key carries one value slot
per configured language (None when absent).
"""

from __future__ import annotations

from localedesk.core.file_resolver import FileLockRegistry, find_file
from localedesk.core.flattening import flatten, read_json_file, sort_key
from localedesk.models.catalog import AppSettings, KeyEntry, NamespaceData


def known_namespaces(settings: AppSettings) -> list[str]:
    """Union of all languages' namespaces, in canonical order."""
    names = {f.namespace for lang in settings.languages for f in lang.files}
    return sorted(names, key=sort_key)


def _read_flat(path: str, locks: FileLockRegistry | None) -> dict[str, str]:
    if locks is None:
        return flatten(read_json_file(path))
    with locks.lock_for(path):
        return flatten(read_json_file(path))


def read_all(
    settings: AppSettings,
    locks: FileLockRegistry | None = None,
) -> list[NamespaceData]:
    """Build the aggregate view of every namespace.

    Args:
        settings: Language/file configuration to read.
        locks: Optional per-path locks held while each file is read.

    Returns:
        NamespaceData sorted by namespace, keys sorted within each.
    """
    lang_codes = settings.language_codes
    result: list[NamespaceData] = []

    for ns in known_namespaces(settings):
        lang_maps: dict[str, dict[str, str]] = {}
        all_keys: set[str] = set()
        for lang in settings.languages:
            f = find_file(lang, ns)
            flat = _read_flat(f.absolute_path, locks) if f is not None else {}
            lang_maps[lang.code] = flat
            all_keys.update(flat)

        keys = [
            KeyEntry(
                key=key,
                values={code: lang_maps[code].get(key) for code in lang_codes},
            )
            for key in sorted(all_keys, key=sort_key)
        ]
        result.append(NamespaceData(namespace=ns, keys=keys))

    return result

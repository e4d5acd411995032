"""File-set resolver — maps (language, namespace) pairs to files on disk.

Also detects the folder structure of a catalog root at import time and
owns the per-path locks that serialize read-modify-write sequences.
"""

from __future__ import annotations

import logging
import os
import threading
from pathlib import Path

from localedesk.constants import (
    DEFAULT_NAMESPACE,
    JSON_EXTENSION,
    LOCALE_JSON_PATTERN,
    LOCALE_PATTERN,
)
from localedesk.core.flattening import sort_key, write_json_file
from localedesk.core.settings_store import SettingsStore
from localedesk.models.catalog import FolderStructure, Language, TranslationFile

logger = logging.getLogger(__name__)


class FileLockRegistry:
    """One re-entrant lock per physical translation file."""

    def __init__(self):
        self._locks: dict[str, threading.RLock] = {}
        self._guard = threading.Lock()

    @staticmethod
    def _normalize(path: str | Path) -> str:
        return os.path.normcase(os.path.abspath(str(path)))

    def lock_for(self, path: str | Path) -> threading.RLock:
        key = self._normalize(path)
        with self._guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = threading.RLock()
                self._locks[key] = lock
            return lock

    def __len__(self) -> int:
        return len(self._locks)


def effective_namespace(structure: FolderStructure, namespace: str) -> str:
    """Flat catalogs have a single implicit namespace."""
    return DEFAULT_NAMESPACE if structure is FolderStructure.FLAT else namespace


def find_file(
    language: Language,
    namespace: str,
    structure: FolderStructure = FolderStructure.NAMESPACED,
) -> TranslationFile | None:
    """Return the language's file for ``namespace``, if it has one."""
    namespace = effective_namespace(structure, namespace)
    for f in language.files:
        if f.namespace == namespace:
            return f
    return None


def expected_path(
    root_folder: str | Path,
    structure: FolderStructure,
    lang_code: str,
    namespace: str,
) -> Path:
    root = Path(root_folder)
    if structure is FolderStructure.FLAT:
        return root / f"{lang_code}{JSON_EXTENSION}"
    return root / lang_code / f"{namespace}{JSON_EXTENSION}"


def create_empty_file(path: Path) -> None:
    """Create parent directories and an empty JSON object if ``path`` is absent."""
    path.parent.mkdir(parents=True, exist_ok=True)
    if not path.exists():
        write_json_file(path, {})


def ensure_file(
    store: SettingsStore,
    lang_code: str,
    namespace: str,
) -> TranslationFile | None:
    """Return the file for (lang_code, namespace), creating it if needed.

    Returns None when the language is not configured or no root folder is
    set. A newly created file is appended to the language's file list and
    the settings are persisted.
    """
    with store.lock:
        settings = store.settings
        lang = settings.find_language(lang_code)
        if lang is None:
            return None

        structure = settings.folder_structure
        existing = find_file(lang, namespace, structure)
        if existing is not None:
            return existing
        if not settings.root_folder:
            return None

        namespace = effective_namespace(structure, namespace)
        path = expected_path(settings.root_folder, structure, lang_code, namespace)
        try:
            create_empty_file(path)
        except OSError:
            logger.exception("Could not create translation file %s", path)
            return None

        new_file = TranslationFile(absolute_path=str(path), namespace=namespace)
        lang.files.append(new_file)
        store.save()
        logger.info("Created %s for %s/%s", path, lang_code, namespace)
        return new_file


# ----------------------------------------------------------------------
# Import scan
# ----------------------------------------------------------------------


def _sorted_entries(path: Path) -> list[os.DirEntry]:
    with os.scandir(path) as it:
        return sorted(it, key=lambda e: sort_key(e.name))


def scan_json_files(dir_path: Path) -> list[TranslationFile]:
    """List ``*.json`` files of a directory as namespace files."""
    return [
        TranslationFile(
            absolute_path=str(dir_path / entry.name),
            namespace=entry.name[: -len(JSON_EXTENSION)],
        )
        for entry in _sorted_entries(dir_path)
        if entry.is_file() and entry.name.endswith(JSON_EXTENSION)
    ]


def scan_root_folder(root: str | Path) -> tuple[FolderStructure, list[Language]]:
    """Detect the folder structure of ``root`` and the languages it holds.

    Namespaced detection comes first: locale-named subdirectories with at
    least one JSON file. Otherwise top-level ``<locale>.json`` files form a
    flat catalog. An empty scan defaults to namespaced with no languages.
    """
    root = Path(root)
    entries = _sorted_entries(root)

    languages: list[Language] = []
    for entry in entries:
        if not entry.is_dir() or not LOCALE_PATTERN.match(entry.name):
            continue
        files = scan_json_files(root / entry.name)
        if files:
            languages.append(Language(code=entry.name, files=files))
    if languages:
        return FolderStructure.NAMESPACED, languages

    for entry in entries:
        if not entry.is_file() or not LOCALE_JSON_PATTERN.match(entry.name):
            continue
        languages.append(Language(
            code=entry.name[: -len(JSON_EXTENSION)],
            files=[TranslationFile(
                absolute_path=str(root / entry.name),
                namespace=DEFAULT_NAMESPACE,
            )],
        ))
    if languages:
        return FolderStructure.FLAT, languages

    return FolderStructure.NAMESPACED, []

"""Mutation engine — structural edits applied to the on-disk catalog.

Every read-modify-write of a translation file runs under that file's
lock from the shared FileLockRegistry, so UI edits and key-intake
requests arriving on the server thread never interleave on one file.
Settings changes run under the store lock and are persisted at once.

Usage::

    editor = CatalogEditor(store)
    editor.add_key("common", "toolbar.save")
    editor.update_key("common", "toolbar.save", "fr-FR", "Enregistrer")
"""

from __future__ import annotations

import logging
from pathlib import Path

from localedesk.constants import DEFAULT_NAMESPACE
from localedesk.core.catalog_reader import known_namespaces, read_all
from localedesk.core.file_resolver import (
    FileLockRegistry,
    create_empty_file,
    ensure_file,
    expected_path,
    find_file,
    scan_root_folder,
)
from localedesk.core.flattening import (
    flatten,
    read_json_file,
    remove_nested_key,
    set_nested_value,
    write_json_file,
)
from localedesk.core.settings_store import SettingsStore
from localedesk.models.catalog import (
    AppSettings,
    FolderStructure,
    Language,
    NamespaceData,
    TranslationFile,
)

logger = logging.getLogger(__name__)


class CatalogEditor:
    """Applies key and language mutations to the files of a SettingsStore."""

    def __init__(self, store: SettingsStore, locks: FileLockRegistry | None = None):
        self._store = store
        self._locks = locks if locks is not None else FileLockRegistry()

    @property
    def store(self) -> SettingsStore:
        return self._store

    @property
    def locks(self) -> FileLockRegistry:
        return self._locks

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def read_all(self) -> list[NamespaceData]:
        return read_all(self._store.snapshot(), self._locks)

    # ------------------------------------------------------------------
    # Key mutations
    # ------------------------------------------------------------------

    def _set_value(self, file: TranslationFile, key: str, value: str) -> None:
        with self._locks.lock_for(file.absolute_path):
            doc = read_json_file(file.absolute_path)
            set_nested_value(doc, key, value)
            write_json_file(file.absolute_path, doc)

    def _insert_if_absent(self, file: TranslationFile, key: str) -> bool:
        with self._locks.lock_for(file.absolute_path):
            doc = read_json_file(file.absolute_path)
            if key in flatten(doc):
                return False
            set_nested_value(doc, key, "")
            return write_json_file(file.absolute_path, doc)

    def update_key(self, namespace: str, key: str, lang_code: str, value: str) -> None:
        """Set ``key`` for one language, creating its file if needed."""
        file = ensure_file(self._store, lang_code, namespace)
        if file is None:
            logger.debug("No file for %s/%s; update of %s skipped",
                         lang_code, namespace, key)
            return
        self._set_value(file, key, value)

    def add_key(self, namespace: str, key: str) -> bool:
        """Add ``key`` with an empty value wherever it is absent.

        Existing values are never overwritten.

        Returns:
            True if at least one file gained the key.
        """
        added = False
        for code in self._store.snapshot().language_codes:
            file = ensure_file(self._store, code, namespace)
            if file is None:
                continue
            if self._insert_if_absent(file, key):
                added = True
        return added

    def remove_key(self, namespace: str, key: str) -> None:
        """Remove ``key`` from every language that has a file for ``namespace``.

        Languages without such a file are skipped, never created.
        """
        settings = self._store.snapshot()
        for lang in settings.languages:
            file = find_file(lang, namespace, settings.folder_structure)
            if file is None:
                continue
            with self._locks.lock_for(file.absolute_path):
                doc = read_json_file(file.absolute_path)
                remove_nested_key(doc, key)
                write_json_file(file.absolute_path, doc)

    def register_key(
        self,
        namespace: str,
        key: str,
        lang_code: str,
        default_value: str | None = None,
    ) -> list[str]:
        """Register a key reported by a running client application.

        The key is inserted empty into every language lacking it; then a
        non-empty ``default_value`` is written to ``lang_code``'s file.

        Returns:
            ``[key]`` if any file gained the key, else ``[]``.
        """
        added_keys: list[str] = []
        if self.add_key(namespace, key):
            added_keys.append(key)

        if isinstance(default_value, str) and default_value:
            file = ensure_file(self._store, lang_code, namespace)
            if file is not None:
                self._set_value(file, key, default_value)

        return added_keys

    # ------------------------------------------------------------------
    # Language / file configuration
    # ------------------------------------------------------------------

    def add_language(self, code: str) -> AppSettings:
        """Add a language with one file per known namespace.

        No-op when the code is already configured or no root folder is set.
        Existing files on disk are reused, never overwritten.
        """
        with self._store.lock:
            settings = self._store.settings
            if not settings.root_folder or settings.find_language(code):
                return self._store.snapshot()

            structure = settings.folder_structure
            if structure is FolderStructure.FLAT:
                namespaces = [DEFAULT_NAMESPACE]
            else:
                namespaces = known_namespaces(settings)

            files: list[TranslationFile] = []
            for ns in namespaces:
                path = expected_path(settings.root_folder, structure, code, ns)
                try:
                    create_empty_file(path)
                except OSError:
                    logger.exception("Could not create %s", path)
                    continue
                files.append(TranslationFile(absolute_path=str(path), namespace=ns))
            if structure is FolderStructure.NAMESPACED:
                (Path(settings.root_folder) / code).mkdir(parents=True, exist_ok=True)

            settings.languages.append(Language(code=code, files=files))
            logger.info("Added language %s with %d file(s)", code, len(files))
            return self._store.save()

    def remove_language(self, code: str) -> AppSettings:
        """Drop the language record; its files stay on disk."""
        with self._store.lock:
            settings = self._store.settings
            settings.languages = [lang for lang in settings.languages if lang.code != code]
            return self._store.save()

    def remove_file(self, code: str, absolute_path: str) -> AppSettings:
        """Drop one file record; a language left without files is dropped too."""
        with self._store.lock:
            settings = self._store.settings
            lang = settings.find_language(code)
            if lang is not None:
                lang.files = [f for f in lang.files if f.absolute_path != absolute_path]
                if not lang.files:
                    settings.languages = [other for other in settings.languages if other.code != code]
            return self._store.save()

    def import_folder(self, path: str | Path) -> AppSettings | None:
        """Replace the language configuration with a scan of ``path``.

        Returns:
            The new settings, or None if ``path`` is not a directory.
        """
        root = Path(path)
        if not root.is_dir():
            logger.warning("Cannot import %s: not a directory", path)
            return None
        try:
            structure, languages = scan_root_folder(root)
        except OSError:
            logger.exception("Failed to scan %s", root)
            return None

        with self._store.lock:
            settings = self._store.settings
            settings.root_folder = str(root)
            settings.folder_structure = structure
            settings.languages = languages
            logger.info("Imported %s (%s, %d language(s))",
                        root, structure.value, len(languages))
            return self._store.save()

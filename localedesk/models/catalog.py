"""Catalog data models.

A catalog is a root folder holding one JSON document per
(language, namespace) pair. Languages and their files are configuration
records persisted in the settings document; the per-namespace aggregate
and the tree projection are recomputed on demand and never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from localedesk.constants import DEFAULT_SERVER_PORT, MAX_PORT, MIN_PORT


class FolderStructure(Enum):
    """On-disk layout of a catalog root.

    NAMESPACED: ``<root>/<code>/<namespace>.json``
    FLAT:       ``<root>/<code>.json`` with a single implicit namespace.
    """
    NAMESPACED = "namespaced"
    FLAT = "flat"


class RowKind(Enum):
    NAMESPACE = "namespace"
    BRANCH = "branch"
    LEAF = "leaf"


@dataclass
class TranslationFile:
    """One JSON document on disk for a (language, namespace) pair."""
    absolute_path: str
    namespace: str


@dataclass
class Language:
    """Configured locale and the files it owns.

    Attributes:
        code: Locale identifier (``xx-XX``).
        files: Translation files, at most one per namespace.
    """
    code: str
    files: list[TranslationFile] = field(default_factory=list)


@dataclass
class AppSettings:
    """Process-wide settings document."""
    root_folder: str | None = None
    folder_structure: FolderStructure = FolderStructure.NAMESPACED
    languages: list[Language] = field(default_factory=list)
    server_port: int = DEFAULT_SERVER_PORT
    server_auto_start: bool = False
    deepl_api_key: str = ""

    @property
    def language_codes(self) -> list[str]:
        return [lang.code for lang in self.languages]

    def find_language(self, code: str) -> Language | None:
        for lang in self.languages:
            if lang.code == code:
                return lang
        return None


@dataclass
class KeyEntry:
    """One flattened key with a value slot per configured language.

    ``values[code]`` is None when the language has no file for the
    namespace or its file lacks the key.
    """
    key: str
    values: dict[str, str | None] = field(default_factory=dict)


@dataclass
class NamespaceData:
    """Per-namespace aggregate across all configured languages."""
    namespace: str
    keys: list[KeyEntry] = field(default_factory=list)


@dataclass
class TreeNode:
    """Node of the dot-path key tree.

    A leaf carries ``values`` and has no children; a branch has children.
    A path that is both a key and a prefix of other keys carries both.
    """
    segment: str
    full_key: str
    children: list[TreeNode] = field(default_factory=list)
    values: dict[str, str | None] | None = None

    @property
    def is_leaf(self) -> bool:
        return not self.children and self.values is not None


@dataclass
class KeyCounts:
    completed: int = 0
    missing: int = 0

    @property
    def total(self) -> int:
        return self.completed + self.missing


@dataclass
class FlatRow:
    """Display row for the key tree view."""
    kind: RowKind
    depth: int
    segment: str
    full_key: str
    namespace: str
    values: dict[str, str | None] | None = None
    expanded: bool = False
    has_missing: bool = False
    completed_count: int = 0
    missing_count: int = 0


@dataclass
class ServerStatus:
    running: bool
    port: int


def is_valid_port(port) -> bool:
    """True for 0 (OS-assigned) or a port in MIN_PORT..MAX_PORT."""
    if not isinstance(port, int) or isinstance(port, bool):
        return False
    return port == 0 or MIN_PORT <= port <= MAX_PORT

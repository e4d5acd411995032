"""Catalog statistics — completion figures derived from the aggregate view.

A cell (key × language) counts as filled when its value is non-blank.
An empty catalog reports 100 % completion.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from localedesk.models.catalog import NamespaceData

TOP_N_STRINGS = 10


@dataclass
class CatalogSummary:
    total_keys: int
    total_languages: int
    total_namespaces: int
    completion_percent: float


@dataclass
class LanguageCompletion:
    language: str
    completed: int
    missing: int

    @property
    def percent(self) -> float:
        return _percent(self.completed, self.completed + self.missing)


@dataclass
class NamespaceCompletion:
    namespace: str
    total_keys: int
    filled: dict[str, int] = field(default_factory=dict)

    def percent(self, lang_code: str) -> float:
        return _percent(self.filled.get(lang_code, 0), self.total_keys)


@dataclass
class MissingTranslation:
    namespace: str
    key: str
    missing_languages: list[str]


@dataclass
class StringLength:
    key: str           # "<namespace>.<key>"
    language: str
    length: int
    text: str


def _percent(filled: int, total: int) -> float:
    return round(filled / total * 100.0, 1) if total > 0 else 100.0


def _filled(value: str | None) -> bool:
    return bool(value and value.strip())


def summarize(data: list[NamespaceData], lang_codes: list[str]) -> CatalogSummary:
    total_keys = sum(len(ns.keys) for ns in data)
    filled = sum(
        1
        for ns in data
        for entry in ns.keys
        for code in lang_codes
        if _filled(entry.values.get(code))
    )
    return CatalogSummary(
        total_keys=total_keys,
        total_languages=len(lang_codes),
        total_namespaces=len(data),
        completion_percent=_percent(filled, total_keys * len(lang_codes)),
    )


def language_completion(
    data: list[NamespaceData],
    lang_codes: list[str],
) -> list[LanguageCompletion]:
    total = sum(len(ns.keys) for ns in data)
    result = []
    for code in lang_codes:
        filled = sum(
            1 for ns in data for entry in ns.keys
            if _filled(entry.values.get(code))
        )
        result.append(LanguageCompletion(language=code, completed=filled,
                                         missing=total - filled))
    return result


def namespace_completion(
    data: list[NamespaceData],
    lang_codes: list[str],
) -> list[NamespaceCompletion]:
    return [
        NamespaceCompletion(
            namespace=ns.namespace,
            total_keys=len(ns.keys),
            filled={
                code: sum(1 for e in ns.keys if _filled(e.values.get(code)))
                for code in lang_codes
            },
        )
        for ns in data
    ]


def missing_translations(
    data: list[NamespaceData],
    lang_codes: list[str],
) -> list[MissingTranslation]:
    result = []
    for ns in data:
        for entry in ns.keys:
            missing = [c for c in lang_codes if not _filled(entry.values.get(c))]
            if missing:
                result.append(MissingTranslation(ns.namespace, entry.key, missing))
    return result


def string_lengths(
    data: list[NamespaceData],
    lang_codes: list[str],
    top_n: int = TOP_N_STRINGS,
) -> tuple[list[StringLength], list[StringLength]]:
    """Longest and shortest non-blank translations.

    Returns:
        (longest, shortest), each at most ``top_n`` long.
    """
    items = [
        StringLength(
            key=f"{ns.namespace}.{entry.key}",
            language=code,
            length=len(entry.values[code]),
            text=entry.values[code],
        )
        for ns in data
        for entry in ns.keys
        for code in lang_codes
        if _filled(entry.values.get(code))
    ]
    longest = sorted(items, key=lambda s: s.length, reverse=True)[:top_n]
    shortest = sorted(items, key=lambda s: s.length)[:top_n]
    return longest, shortest

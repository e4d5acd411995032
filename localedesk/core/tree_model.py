"""Key tree projection — pure transforms from NamespaceData to display rows.

No I/O. The tree view calls ``build_rows`` for its row list and
``get_sibling_keys`` for the detail editor.
"""

from __future__ import annotations

from collections.abc import Iterable

from localedesk.constants import KEY_SEPARATOR
from localedesk.core.flattening import sort_key
from localedesk.models.catalog import (
    FlatRow,
    KeyCounts,
    KeyEntry,
    NamespaceData,
    RowKind,
    TreeNode,
)


def is_missing(values: dict[str, str | None], lang_codes: Iterable[str]) -> bool:
    """True if any language has no value or an empty one."""
    return any(values.get(code) in (None, "") for code in lang_codes)


def build_tree(keys: list[KeyEntry]) -> list[TreeNode]:
    """Split keys on '.' and insert each path segment by segment."""
    root: list[TreeNode] = []
    for entry in keys:
        parts = entry.key.split(KEY_SEPARATOR)
        siblings = root
        path = ""
        for i, part in enumerate(parts):
            path = f"{path}{KEY_SEPARATOR}{part}" if path else part
            is_last = i == len(parts) - 1
            node = next((n for n in siblings if n.segment == part), None)
            if node is None:
                node = TreeNode(segment=part, full_key=path)
                siblings.append(node)
            if is_last:
                node.values = entry.values
            siblings = node.children
    return root


def sort_tree(nodes: list[TreeNode]) -> list[TreeNode]:
    """Sort children at every depth in place; returns ``nodes``."""
    nodes.sort(key=lambda n: sort_key(n.segment))
    for n in nodes:
        sort_tree(n.children)
    return nodes


def _matches(node: TreeNode, query: str) -> bool:
    if query in node.segment.lower() or query in node.full_key.lower():
        return True
    return any(_matches(child, query) for child in node.children)


def filter_tree(nodes: list[TreeNode], query: str) -> list[TreeNode]:
    """Keep nodes whose segment or full key contains ``query`` (case-insensitive).

    Ancestors of a match are kept with their children filtered the same way.
    """
    q = query.lower()
    return [
        TreeNode(
            segment=node.segment,
            full_key=node.full_key,
            children=filter_tree(node.children, q),
            values=node.values,
        )
        for node in nodes
        if _matches(node, q)
    ]


def tree_has_missing(node: TreeNode, lang_codes: list[str]) -> bool:
    if node.values is not None:
        return is_missing(node.values, lang_codes)
    return any(tree_has_missing(child, lang_codes) for child in node.children)


def count_keys(nodes: list[TreeNode], lang_codes: list[str]) -> KeyCounts:
    """Count completed and missing leaves under ``nodes``."""
    counts = KeyCounts()
    for n in nodes:
        if n.is_leaf:
            if is_missing(n.values, lang_codes):
                counts.missing += 1
            else:
                counts.completed += 1
        else:
            sub = count_keys(n.children, lang_codes)
            counts.completed += sub.completed
            counts.missing += sub.missing
    return counts


def flatten_tree(
    nodes: list[TreeNode],
    namespace: str,
    depth: int,
    expanded: set[str] | frozenset[str],
    lang_codes: list[str],
    force_expand: bool = False,
    rows: list[FlatRow] | None = None,
) -> list[FlatRow]:
    """Depth-first rows for the visible part of the tree.

    Branch ids in ``expanded`` are ``"<namespace>:<full_key>"``.
    """
    if rows is None:
        rows = []
    for node in nodes:
        node_id = f"{namespace}:{node.full_key}"
        if node.is_leaf:
            rows.append(FlatRow(
                kind=RowKind.LEAF,
                depth=depth,
                segment=node.segment,
                full_key=node.full_key,
                namespace=namespace,
                values=node.values,
                has_missing=is_missing(node.values, lang_codes),
            ))
            continue

        is_expanded = force_expand or node_id in expanded
        counts = count_keys([node], lang_codes)
        rows.append(FlatRow(
            kind=RowKind.BRANCH,
            depth=depth,
            segment=node.segment,
            full_key=node.full_key,
            namespace=namespace,
            values=node.values,
            expanded=is_expanded,
            has_missing=tree_has_missing(node, lang_codes),
            completed_count=counts.completed,
            missing_count=counts.missing,
        ))
        if is_expanded:
            flatten_tree(node.children, namespace, depth + 1, expanded,
                         lang_codes, force_expand, rows)
    return rows


def namespace_row_id(namespace: str) -> str:
    return f"ns:{namespace}"


def build_rows(
    namespaces: list[NamespaceData],
    lang_codes: list[str],
    search: str = "",
    expanded: Iterable[str] = (),
) -> list[FlatRow]:
    """Full row list for the tree view.

    One namespace row with completeness counts, followed by its subtree
    when expanded. While searching every node is expanded; a namespace
    whose name matches keeps its whole tree, others keep matching nodes
    and are dropped when nothing matches.
    """
    q = search.strip().lower()
    searching = bool(q)
    expanded = frozenset(expanded)
    rows: list[FlatRow] = []

    for ns in namespaces:
        tree = sort_tree(build_tree(ns.keys))
        if searching and q not in ns.namespace.lower():
            tree = filter_tree(tree, q)
            if not tree:
                continue
        ns_expanded = searching or namespace_row_id(ns.namespace) in expanded
        counts = count_keys(tree, lang_codes)
        rows.append(FlatRow(
            kind=RowKind.NAMESPACE,
            depth=0,
            segment=ns.namespace,
            full_key="",
            namespace=ns.namespace,
            expanded=ns_expanded,
            has_missing=counts.missing > 0,
            completed_count=counts.completed,
            missing_count=counts.missing,
        ))
        if ns_expanded:
            flatten_tree(tree, ns.namespace, 1, expanded, lang_codes,
                         force_expand=searching, rows=rows)
    return rows


def get_sibling_keys(ns_data: NamespaceData, selected_key: str) -> list[KeyEntry]:
    """Keys sharing the dot-path parent of ``selected_key``."""
    dot = selected_key.rfind(KEY_SEPARATOR)
    if dot == -1:
        return [k for k in ns_data.keys if KEY_SEPARATOR not in k.key]
    prefix = selected_key[: dot + 1]
    return [
        k for k in ns_data.keys
        if k.key.startswith(prefix) and KEY_SEPARATOR not in k.key[len(prefix):]
    ]

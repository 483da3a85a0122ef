# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Flatten projections of a tree into render-ready node lists.

Both projections walk the tree in pre-order, so the output reads like an
indented outline: every node comes after its ancestors and before its
following siblings.
"""

from __future__ import annotations

from typing import Any, Callable

from ..node import TreeNode

FlattenFilter = Callable[[TreeNode[Any]], bool]


def flatten_matching(root: TreeNode[Any], predicate: FlattenFilter) -> list[TreeNode[Any]]:
    """Return matching nodes, each preceded by its missing ancestors.

    Args:
        root: Node to start from.
        predicate: Called with each node; True selects it.

    Returns:
        Nodes in pre-order. Ancestors of a match up to ``root`` appear
        once, ``root`` first, even when they do not match themselves.
        Nodes above ``root`` are never included.
    """
    flattened: list[TreeNode[Any]] = []
    seen: set[int] = set()

    for node in root.iter_dfs():
        if not predicate(node):
            continue
        # A present ancestor implies its whole chain is present too.
        missing: list[TreeNode[Any]] = []
        for ancestor in node.iter_to_root():
            if ancestor.id in seen:
                break
            missing.append(ancestor)
            if ancestor is root:
                break
        for ancestor in reversed(missing):
            seen.add(ancestor.id)
            flattened.append(ancestor)

    return flattened


def flatten_expanded(root: TreeNode[Any], expanded_only: bool = True) -> list[TreeNode[Any]]:
    """Return nodes visible under the expand/collapse state.

    A node is included when ``expanded_only`` is False or when all its
    strict ancestors are expanded. A collapsed node is itself included;
    only its descendants are hidden.

    Args:
        root: Node to start from.
        expanded_only: If False, every node is returned.
    """
    flattened: list[TreeNode[Any]] = []
    stack: list[TreeNode[Any]] = [root]
    while stack:
        node = stack.pop()
        flattened.append(node)
        if expanded_only and not node.expanded:
            continue
        stack.extend(reversed(node.children))
    return flattened

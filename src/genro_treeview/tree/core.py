# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tree - An in-memory hierarchy of TreeNode instances for tree views.

This module provides the Tree class, the owner and sole mutator of a
TreeNode hierarchy. Tree keeps the derived structural metrics of its
nodes (``level`` and ``max_child_level``) consistent after every
mutation and offers the queries and projections a presentation layer
needs to render the hierarchy.

Key Features:
    - **Structural mutation**: add, add_all, remove, move, clear
    - **Derived metrics**: depth and subtree height maintained per node
    - **Traversal**: pre/post-order DFS, BFS and walk-to-root, either with
      a callback or as an iterator
    - **Positional paths**: lists of sibling indices ([0, 2, 1])
    - **Flatten**: linear projection filtered by expand state or predicate

Example:
    Basic usage::

        tree = Tree()
        root = tree.add('root')
        docs = tree.add('docs', root)
        tree.add('readme', docs)
        tree.add('src', root, expanded=False)

        docs.max_child_level     # 1
        root.max_child_level     # 2
        tree.find_in_path([0, 0]).data  # 'readme'

        [n.data for n in tree.flatten()]  # ['root', 'docs', 'readme', 'src']

    Flatten with a predicate keeps the ancestors of each match::

        tree.flatten(lambda n: n.data == 'readme')  # root, docs, readme
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterable, Iterator, Mapping, NoReturn, Sequence

from ..config import FlattenOptions, NodeOptions
from ..exceptions import InvalidOperationError, InvalidPathError
from ..node import FindCallback, T, TraverseCallback, TreeNode
from .flatten import FlattenFilter, flatten_expanded, flatten_matching

logger = logging.getLogger(__name__)


class Tree(Generic[T]):
    """A single-rooted hierarchy of TreeNode instances.

    Tree provides:
    - add(data, parent_node) / add_all(items, parent_node): Insert nodes
    - remove(node) / move(source, target) / clear(): Restructure
    - find_bfs(target) / find_in_path(path) / contains(data): Look up nodes
    - flatten(options): Render-ready list of nodes

    Node flags (``expanded``, ``highlighted``, ``collapsable``) may be
    changed directly on the nodes. Structure must only be changed
    through the Tree, which is not safe for concurrent mutation.

    Attributes:
        root: The parentless node of the tree, or None if the tree is empty.

    Example:
        >>> tree = Tree()
        >>> root = tree.add('A')
        >>> b = tree.add('B', root)
        >>> root.max_child_level
        1
    """

    __slots__ = ('root',)

    def __init__(self) -> None:
        """Initialize an empty Tree."""
        self.root: TreeNode[T] | None = None

    # ==================== Special Methods ====================

    def __repr__(self) -> str:
        if self.root is None:
            return "Tree(empty)"
        return f"Tree(root={self.root.data!r}, nodes={len(self)})"

    def __len__(self) -> int:
        """Return the number of nodes in the tree."""
        return sum(1 for _ in self)

    def __iter__(self) -> Iterator[TreeNode[T]]:
        """Iterate over all nodes in pre-order."""
        if self.root is None:
            return iter(())
        return self.root.iter_dfs()

    def __contains__(self, data: T | FindCallback) -> bool:
        """Check if any node holds ``data`` (see contains)."""
        return self.contains(data)

    # ==================== Derived Metrics ====================

    @staticmethod
    def _raise_max_child_level(node: TreeNode[T]) -> None:
        """Propagate a node's subtree height to its ancestors after insertion.

        Heights can only grow here, so the walk stops at the first
        ancestor that is already tall enough.
        """
        for current in node.iter_to_root():
            parent = current.parent
            if parent is None or current._max_child_level + 1 <= parent._max_child_level:
                break
            parent._max_child_level = current._max_child_level + 1

    @staticmethod
    def _recompute_max_child_level(node: TreeNode[T]) -> None:
        """Recompute subtree heights from ``node`` up to the root after removal."""
        for current in node.iter_to_root():
            current._max_child_level = max(
                (child._max_child_level + 1 for child in current.children),
                default=0,
            )

    @staticmethod
    def _relevel(node: TreeNode[T]) -> None:
        """Re-derive ``level`` for ``node`` and its whole subtree."""
        for current in node.iter_dfs():
            parent = current.parent
            current._level = parent._level + 1 if parent is not None else 0

    def _detach(self, node: TreeNode[T]) -> TreeNode[T]:
        """Unlink a non-root node from its parent and fix ancestor heights."""
        parent = node.parent
        if parent is None:
            raise InvalidOperationError(f"Node {node.id} is not attached to a parent")
        parent.children.remove(node)
        node.parent = None
        self._recompute_max_child_level(parent)
        return parent

    # ==================== Mutation ====================

    def add(
        self,
        data: T,
        parent_node: TreeNode[T] | None = None,
        options: NodeOptions | Mapping[str, Any] | None = None,
        **kwargs: Any,
    ) -> TreeNode[T]:
        """Create a node holding ``data`` and link it into the tree.

        Args:
            data: The node's payload.
            parent_node: Parent of the new node. If None, the node becomes
                the root.
            options: NodeOptions or mapping with ``expanded``,
                ``highlighted``, ``collapsable`` and ``position``.
            **kwargs: The same options as keyword arguments, taking
                precedence over ``options``.

        Returns:
            The new TreeNode.

        Raises:
            InvalidOperationError: If ``parent_node`` is None and the tree
                already has a root.

        Example:
            >>> root = tree.add('root')
            >>> tree.add('first', root, position=0)
            >>> tree.add('closed', root, {'expanded': False})
        """
        if parent_node is None and self.root is not None:
            raise InvalidOperationError("Root node is already assigned")

        node = TreeNode(data, parent_node, NodeOptions.merge(options, **kwargs))
        if parent_node is None:
            self.root = node
        else:
            self._raise_max_child_level(node)

        logger.debug("Added node %d at level %d", node.id, node.level)
        return node

    def add_all(
        self,
        data_items: Iterable[T],
        parent_node: TreeNode[T],
        options: NodeOptions | Mapping[str, Any] | None = None,
        prepend: bool = False,
        **kwargs: Any,
    ) -> list[TreeNode[T]]:
        """Add several children to ``parent_node`` keeping input order.

        Args:
            data_items: Payloads of the new nodes.
            parent_node: Parent of all the new nodes.
            options: Options applied to every new node.
            prepend: If True, the new nodes are placed before the
                existing children instead of after them.
            **kwargs: Options as keyword arguments. A ``position`` places
                the first new node there and the others right after it.

        Returns:
            The new nodes, in input order.
        """
        opts = NodeOptions.merge(options, **kwargs)
        start = 0 if prepend else opts.position
        if start is not None and start < 0:
            start = max(len(parent_node.children) + start, 0)

        added = []
        for offset, data in enumerate(data_items):
            if start is not None:
                opts = NodeOptions.merge(opts, position=start + offset)
            added.append(self.add(data, parent_node, opts))
        return added

    def remove(self, node: TreeNode[T]) -> TreeNode[T]:
        """Detach ``node`` and its subtree from the tree.

        Removing the root empties the tree. Otherwise the subtree heights
        of the former ancestors are recomputed. The removed node keeps its
        children and becomes the level 0 root of its own detached subtree.

        Args:
            node: The node to remove.

        Returns:
            The removed node.
        """
        if node.parent is None:
            if node is self.root:
                self.root = None
                logger.debug("Removed root node %d, tree is now empty", node.id)
            return node

        self._detach(node)
        self._relevel(node)
        logger.debug("Removed node %d", node.id)
        return node

    def move(self, source_node: TreeNode[T], target_node: TreeNode[T]) -> None:
        """Relocate ``source_node`` as the first child of ``target_node``.

        Levels are re-derived for the moved subtree and subtree heights are
        updated along both the old and the new ancestor chains. Moving
        the same node onto itself or moving the root does nothing.

        Args:
            source_node: The node to relocate, with its subtree.
            target_node: The new parent.

        Raises:
            InvalidOperationError: If ``target_node`` is a descendant of
                ``source_node``.
        """
        if source_node is target_node or source_node.parent is None:
            return
        if any(ancestor is source_node for ancestor in target_node.iter_to_root()):
            raise InvalidOperationError(
                f"Cannot move node {source_node.id} under its own descendant "
                f"{target_node.id}"
            )

        self._detach(source_node)
        source_node.parent = target_node
        target_node.children.insert(0, source_node)
        self._relevel(source_node)
        self._raise_max_child_level(source_node)
        logger.debug("Moved node %d under node %d", source_node.id, target_node.id)

    def clear(self) -> None:
        """Remove all nodes from the tree."""
        self.root = None
        logger.debug("Tree cleared")

    # ==================== Queries ====================

    def contains(self, data: T | FindCallback) -> bool:
        """True if some node matches ``data`` (value or predicate)."""
        return self.find_bfs(data) is not None

    def find_in_path(self, path: Sequence[int]) -> TreeNode[T]:
        """Get the node at a positional path.

        Args:
            path: Sibling indices from the root, as returned by
                ``TreeNode.path()``. An empty path is the root.

        Returns:
            The TreeNode at the path.

        Raises:
            InvalidPathError: If the tree is empty, an index is not an int,
                or an index does not exist at its level.

        Example:
            >>> tree.find_in_path([])        # root
            >>> tree.find_in_path([0, 2])    # third child of first child
        """
        if self.root is None:
            self._invalid_path(path, "tree is empty")

        node = self.root
        for depth, index in enumerate(path):
            if isinstance(index, bool) or not isinstance(index, int):
                self._invalid_path(
                    path, f"index {index!r} at level {depth} is not an int"
                )
            if not 0 <= index < len(node.children):
                self._invalid_path(
                    path,
                    f"no child #{index} at level {depth} "
                    f"(node has {len(node.children)} children)",
                )
            node = node.children[index]
        return node

    @staticmethod
    def _invalid_path(path: Sequence[int], reason: str) -> NoReturn:
        logger.warning("Invalid path %s: %s", list(path), reason)
        raise InvalidPathError(path, reason)

    def find_bfs(self, target: T | FindCallback) -> TreeNode[T] | None:
        """Return the shallowest node matching ``target``, or None.

        See TreeNode.find_bfs.
        """
        if self.root is None:
            return None
        return self.root.find_bfs(target)

    def is_all_expanded(self) -> bool:
        """True if the tree is non-empty and every node is expanded."""
        if self.root is None:
            return False
        return self.root.is_all_expanded()

    # ==================== Traversal ====================

    def traverse_dfs(
        self,
        visit: TraverseCallback | None = None,
        start_node: TreeNode[T] | None = None,
        post_order: bool = False,
    ) -> Iterator[TreeNode[T]] | None:
        """Walk depth-first from ``start_node`` (default: root).

        Args:
            visit: Function called on each node. If None, an iterator is
                returned instead.
            start_node: Node to start from.
            post_order: If True, children come before their parent.

        Returns:
            An iterator over the nodes if no callback is provided.
        """
        start = start_node if start_node is not None else self.root
        if start is None:
            return iter(()) if visit is None else None
        return start.traverse_dfs(visit, post_order)

    def traverse_to_root(
        self,
        node: TreeNode[T] | None,
        visit: TraverseCallback | None = None,
    ) -> Iterator[TreeNode[T]] | None:
        """Walk from ``node`` up to the root.

        Returns:
            An iterator over the nodes if no callback is provided.
        """
        if node is None:
            return iter(()) if visit is None else None
        return node.traverse_to_root(visit)

    # ==================== Projection ====================

    def flatten(
        self,
        options: FlattenFilter | FlattenOptions | Mapping[str, Any] | None = None,
    ) -> list[TreeNode[T]]:
        """Project the tree into a flat, pre-ordered list of nodes.

        Args:
            options: Either
                - a predicate called with each node: matching nodes are
                  included together with all their ancestors, each node
                  at most once;
                - FlattenOptions or a mapping such as
                  ``{'expanded_only': False}``: with ``expanded_only``
                  (the default) nodes under a collapsed ancestor are left
                  out, otherwise every node is included.

        Returns:
            List of TreeNode, empty if the tree is empty.

        Example:
            >>> tree.flatten()                          # visible nodes
            >>> tree.flatten({'expanded_only': False})  # all nodes
            >>> tree.flatten(lambda n: n.highlighted)   # matches + ancestors
        """
        if self.root is None:
            return []
        if callable(options):
            return flatten_matching(self.root, options)
        opts = FlattenOptions.merge(options)
        return flatten_expanded(self.root, opts.expanded_only)

    def expand_all(self) -> None:
        """Expand every node."""
        if self.root is not None:
            self.root.expand_all()

    def collapse_all(self, min_level_to_collapse: int = 0) -> None:
        """Collapse collapsable nodes at or below ``min_level_to_collapse``.

        Shallower collapsable nodes are expanded. See TreeNode.collapse_all.
        """
        if self.root is not None:
            self.root.collapse_all(min_level_to_collapse)

    # ==================== Output ====================

    def dump(self, output: Any = None, indent: str = '  ') -> Any:
        """Render the tree as indented text for debugging.

        One line per node in pre-order, formatted as
        ``<data>:<max_child_level>:<dash-joined path>`` and prefixed with
        ``indent`` repeated by level.

        Args:
            output: Optional callable receiving the text, e.g. ``print``
                or ``logger.debug``.
            indent: Indentation unit.

        Returns:
            The text, or the result of ``output`` if given.

        Example:
            >>> print(tree.dump())
            A:2:
              B:1:0
                D:0:0-0
              C:0:1
        """
        if self.root is None:
            text = "No root node found"
        else:
            text = '\n'.join(
                f"{indent * node.level}{node.data}:{node.max_child_level}:"
                f"{'-'.join(str(i) for i in node.path())}"
                for node in self.root.iter_dfs()
            )
        if output is None:
            return text
        return output(text)

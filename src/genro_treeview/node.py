# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeView node class."""

from __future__ import annotations

import itertools
from collections import deque
from typing import Any, Callable, Generic, Iterator, Mapping, TypeVar

from .config import NodeOptions

T = TypeVar('T')

TraverseCallback = Callable[['TreeNode[Any]'], Any]
FindCallback = Callable[[Any], bool]


class TreeNode(Generic[T]):
    """A node in a Tree hierarchy.

    Each node has:
    - id: Process-unique integer, assigned at construction
    - data: The caller's payload, opaque to the tree
    - parent: The owning node, or None for a root
    - children: Child nodes in sibling order
    - level: Depth from the root (root=0)
    - max_child_level: Height of the subtree below this node (leaf=0)
    - expanded, highlighted, collapsable: View-state flags

    ``level`` and ``max_child_level`` are derived values maintained by
    the Tree that owns the node; they have no public setter.

    Example:
        >>> root = TreeNode('root')
        >>> child = TreeNode('child', root)
        >>> child.level
        1
        >>> root.children == [child]
        True
    """

    __slots__ = (
        '_id', 'data', 'parent', 'children',
        'expanded', 'highlighted', 'collapsable',
        '_level', '_max_child_level',
    )

    _ids = itertools.count()

    def __init__(
        self,
        data: T,
        parent: TreeNode[T] | None = None,
        options: NodeOptions | Mapping[str, Any] | None = None,
    ) -> None:
        """Initialize a TreeNode, linking it under ``parent`` if given.

        Args:
            data: The node's payload.
            parent: Node to attach to. The new node is inserted into
                ``parent.children`` at ``options.position`` (before the
                element currently at that index) or appended.
            options: NodeOptions or mapping of view-state flags and
                position. Missing keys take their defaults.
        """
        opts = NodeOptions.merge(options)

        self._id = next(TreeNode._ids)
        self.data = data
        self.children: list[TreeNode[T]] = []
        self.expanded = opts.expanded
        self.highlighted = opts.highlighted
        self.collapsable = opts.collapsable
        self._max_child_level = 0

        self.parent = parent
        if parent is not None:
            self._level = parent.level + 1
            if opts.position is not None:
                parent.children.insert(opts.position, self)
            else:
                parent.children.append(self)
        else:
            self._level = 0

    def __repr__(self) -> str:
        return (
            f"TreeNode(id={self._id}, data={self.data!r}, level={self._level}, "
            f"children={len(self.children)})"
        )

    def __str__(self) -> str:
        return f"{self._id}:{str(self.expanded).lower()}"

    # ==================== Structure ====================

    @property
    def id(self) -> int:
        """Unique node identifier, never reused within the process."""
        return self._id

    @property
    def level(self) -> int:
        """Depth of this node (root=0)."""
        return self._level

    @property
    def max_child_level(self) -> int:
        """Number of descendant levels below this node (0 for a leaf)."""
        return self._max_child_level

    @property
    def is_root(self) -> bool:
        """True if this node has no parent."""
        return self.parent is None

    @property
    def is_leaf(self) -> bool:
        """True if this node has no children."""
        return not self.children

    def have_children(self) -> bool:
        """Return True if this node has at least one child."""
        return len(self.children) > 0

    def path(self) -> list[int]:
        """Return sibling indices from the root down to this node.

        The root's path is empty. Each level looks up the node's index in
        its parent's children, so the cost grows with depth and fan-out.

        Example:
            >>> root = TreeNode('a')
            >>> b = TreeNode('b', root)
            >>> c = TreeNode('c', root)
            >>> c.path()
            [1]
        """
        if self.parent is None:
            return []
        return [*self.parent.path(), self.parent.children.index(self)]

    # ==================== Traversal ====================

    @staticmethod
    def _pre_order(node: TreeNode[T], visit: TraverseCallback) -> None:
        visit(node)
        for child in node.children:
            TreeNode._pre_order(child, visit)

    @staticmethod
    def _post_order(node: TreeNode[T], visit: TraverseCallback) -> None:
        for child in node.children:
            TreeNode._post_order(child, visit)
        visit(node)

    def iter_dfs(self, post_order: bool = False) -> Iterator[TreeNode[T]]:
        """Yield the subtree depth-first using an explicit stack.

        Produces the same order as ``traverse_dfs`` without recursion,
        so it is safe on arbitrarily deep trees.

        Args:
            post_order: If True, children are yielded before their parent.
        """
        if not post_order:
            stack: list[TreeNode[T]] = [self]
            while stack:
                node = stack.pop()
                yield node
                stack.extend(reversed(node.children))
            return

        pending: list[tuple[TreeNode[T], bool]] = [(self, False)]
        while pending:
            node, expanded = pending.pop()
            if expanded:
                yield node
                continue
            pending.append((node, True))
            pending.extend((child, False) for child in reversed(node.children))

    def iter_bfs(self) -> Iterator[TreeNode[T]]:
        """Yield the subtree level by level, siblings in order."""
        queue: deque[TreeNode[T]] = deque([self])
        while queue:
            node = queue.popleft()
            yield node
            queue.extend(node.children)

    def iter_to_root(self) -> Iterator[TreeNode[T]]:
        """Yield this node, then each ancestor up to the root."""
        current: TreeNode[T] | None = self
        while current is not None:
            yield current
            current = current.parent

    def traverse_dfs(
        self,
        visit: TraverseCallback | None = None,
        post_order: bool = False,
    ) -> Iterator[TreeNode[T]] | None:
        """Walk the subtree depth-first, optionally calling ``visit`` on each node.

        Args:
            visit: Function called with each node. If provided, the walk
                recurses and returns None; recursion depth follows tree
                depth.
            post_order: If True, children are visited before their parent.

        Returns:
            An iterator over the nodes if no callback is provided.

        Example:
            >>> for node in root.traverse_dfs():
            ...     print(node.data)

            >>> root.traverse_dfs(lambda n: print(n.data), post_order=True)
        """
        if visit is None:
            return self.iter_dfs(post_order)
        if post_order:
            self._post_order(self, visit)
        else:
            self._pre_order(self, visit)
        return None

    def traverse_bfs(
        self, visit: TraverseCallback | None = None
    ) -> Iterator[TreeNode[T]] | None:
        """Walk the subtree breadth-first, optionally calling ``visit``.

        Returns:
            An iterator over the nodes if no callback is provided.
        """
        if visit is None:
            return self.iter_bfs()
        for node in self.iter_bfs():
            visit(node)
        return None

    def traverse_to_root(
        self, visit: TraverseCallback | None = None
    ) -> Iterator[TreeNode[T]] | None:
        """Walk from this node up to the root, optionally calling ``visit``.

        Returns:
            An iterator over the nodes if no callback is provided.
        """
        if visit is None:
            return self.iter_to_root()
        for node in self.iter_to_root():
            visit(node)
        return None

    # ==================== Queries ====================

    def find_bfs(self, target: T | FindCallback) -> TreeNode[T] | None:
        """Return the shallowest node matching ``target``, or None.

        Args:
            target: A predicate called with each node's data, or a value
                compared with ``==`` against each node's data.

        Example:
            >>> root.find_bfs('child')
            >>> root.find_bfs(lambda data: data.startswith('ch'))
        """
        matches: FindCallback = (
            target if callable(target) else lambda data: data == target
        )

        for node in self.iter_bfs():
            if matches(node.data):
                return node
        return None

    def is_all_expanded(self) -> bool:
        """True if this node and every descendant are expanded."""
        for node in self.iter_bfs():
            if not node.expanded:
                return False
        return True

    # ==================== View state ====================

    def expand_all(self) -> None:
        """Expand this node and all its descendants."""
        for node in self.iter_bfs():
            node.expanded = True

    def collapse_all(self, min_level_to_collapse: int = 0) -> None:
        """Collapse the subtree from a given depth downward.

        Collapsable nodes shallower than ``min_level_to_collapse`` are
        expanded, the others collapsed. Non-collapsable nodes keep their
        current state.

        Args:
            min_level_to_collapse: First level whose nodes are closed.
        """
        for node in self.iter_bfs():
            if node.collapsable:
                node.expanded = node.level < min_level_to_collapse

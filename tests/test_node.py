# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tests for TreeNode."""

import pytest

from genro_treeview import NodeOptions, TreeNode


def build_sample():
    """Build A -> (B -> D, C) directly with TreeNode links."""
    a = TreeNode('A')
    b = TreeNode('B', a)
    c = TreeNode('C', a)
    d = TreeNode('D', b)
    return a, b, c, d


class TestTreeNodeCreate:
    """Tests for TreeNode construction."""

    def test_create_root_node(self):
        """Test a node without parent is a level 0 root."""
        node = TreeNode('root')
        assert node.data == 'root'
        assert node.parent is None
        assert node.children == []
        assert node.level == 0
        assert node.max_child_level == 0
        assert node.is_root is True
        assert node.is_leaf is True

    def test_default_flags(self):
        """Test default view-state flags."""
        node = TreeNode('x')
        assert node.expanded is True
        assert node.highlighted is False
        assert node.collapsable is True

    def test_explicit_false_flags_are_kept(self):
        """Test falsy option values are not replaced by defaults."""
        node = TreeNode('x', options={'expanded': False, 'collapsable': False})
        assert node.expanded is False
        assert node.collapsable is False

    def test_options_dataclass(self):
        """Test NodeOptions instance as options."""
        node = TreeNode('x', options=NodeOptions(highlighted=True))
        assert node.highlighted is True
        assert node.expanded is True

    def test_ids_are_unique_and_increasing(self):
        """Test every node gets a new, larger id."""
        first = TreeNode('a')
        second = TreeNode('b')
        third = TreeNode('c', first)
        assert first.id < second.id < third.id

    def test_id_is_read_only(self):
        """Test id has no setter."""
        node = TreeNode('a')
        with pytest.raises(AttributeError):
            node.id = 42

    def test_derived_metrics_are_read_only(self):
        """Test level and max_child_level have no setter."""
        node = TreeNode('a')
        with pytest.raises(AttributeError):
            node.level = 3
        with pytest.raises(AttributeError):
            node.max_child_level = 3

    def test_child_is_appended(self):
        """Test a child is linked at the end of parent's children."""
        root = TreeNode('root')
        first = TreeNode('first', root)
        second = TreeNode('second', root)
        assert root.children == [first, second]
        assert second.parent is root
        assert second.level == 1

    def test_child_inserted_at_position(self):
        """Test position inserts before the element at that index."""
        root = TreeNode('root')
        a = TreeNode('a', root)
        b = TreeNode('b', root)
        c = TreeNode('c', root, {'position': 1})
        z = TreeNode('z', root, {'position': 0})
        assert root.children == [z, a, c, b]

    def test_str(self):
        """Test str shows id and expanded flag."""
        node = TreeNode('x', options={'expanded': False})
        assert str(node) == f"{node.id}:false"

    def test_repr(self):
        """Test string representation."""
        node = TreeNode('name')
        repr_str = repr(node)
        assert 'TreeNode' in repr_str
        assert "'name'" in repr_str


class TestTreeNodeStructure:
    """Tests for structural queries."""

    def test_have_children(self):
        """Test have_children on branch and leaf."""
        a, b, c, d = build_sample()
        assert a.have_children() is True
        assert b.have_children() is True
        assert c.have_children() is False
        assert d.have_children() is False

    def test_path(self):
        """Test path lists sibling indices from the root."""
        a, b, c, d = build_sample()
        assert a.path() == []
        assert b.path() == [0]
        assert c.path() == [1]
        assert d.path() == [0, 0]

    def test_path_follows_position(self):
        """Test path reflects positional insertion."""
        root = TreeNode('root')
        late = TreeNode('late', root)
        early = TreeNode('early', root, {'position': 0})
        assert early.path() == [0]
        assert late.path() == [1]


class TestTreeNodeTraversal:
    """Tests for traversal orders."""

    def test_dfs_pre_order_callback(self):
        """Test pre-order visits node before children."""
        a, b, c, d = build_sample()
        visited = []
        result = a.traverse_dfs(lambda n: visited.append(n.data))
        assert result is None
        assert visited == ['A', 'B', 'D', 'C']

    def test_dfs_post_order_callback(self):
        """Test post-order visits children before node."""
        a, b, c, d = build_sample()
        visited = []
        a.traverse_dfs(lambda n: visited.append(n.data), post_order=True)
        assert visited == ['D', 'B', 'C', 'A']

    def test_dfs_iterator_matches_callback(self):
        """Test iterator mode yields the same order as callback mode."""
        a, b, c, d = build_sample()
        TreeNode('E', d)
        TreeNode('F', c)
        for post_order in (False, True):
            visited = []
            a.traverse_dfs(visited.append, post_order=post_order)
            assert list(a.traverse_dfs(post_order=post_order)) == visited

    def test_dfs_on_subtree(self):
        """Test traversal is limited to the subtree."""
        a, b, c, d = build_sample()
        assert [n.data for n in b.traverse_dfs()] == ['B', 'D']

    def test_iter_dfs_deep_tree(self):
        """Test iterative DFS handles trees deeper than the recursion limit."""
        root = TreeNode(0)
        node = root
        for i in range(1, 5000):
            node = TreeNode(i, node)
        assert sum(1 for _ in root.iter_dfs()) == 5000
        assert next(root.iter_dfs(post_order=True)).data == 4999

    def test_bfs(self):
        """Test BFS visits level by level."""
        a, b, c, d = build_sample()
        visited = []
        a.traverse_bfs(lambda n: visited.append(n.data))
        assert visited == ['A', 'B', 'C', 'D']
        assert [n.data for n in a.traverse_bfs()] == ['A', 'B', 'C', 'D']

    def test_traverse_to_root(self):
        """Test walk up stops after the root."""
        a, b, c, d = build_sample()
        visited = []
        d.traverse_to_root(lambda n: visited.append(n.data))
        assert visited == ['D', 'B', 'A']
        assert [n.data for n in a.traverse_to_root()] == ['A']


class TestTreeNodeQueries:
    """Tests for find_bfs and is_all_expanded."""

    def test_find_by_value(self):
        """Test find_bfs with a data value."""
        a, b, c, d = build_sample()
        assert a.find_bfs('D') is d
        assert a.find_bfs('missing') is None

    def test_find_by_predicate(self):
        """Test find_bfs with a predicate over data."""
        a, b, c, d = build_sample()
        assert a.find_bfs(lambda data: data in ('C', 'D')) is c

    def test_find_returns_shallowest(self):
        """Test BFS order makes the shallowest match win."""
        root = TreeNode('root')
        branch = TreeNode('branch', root)
        TreeNode('x', branch)
        shallow = TreeNode('x', root)
        assert root.find_bfs('x') is shallow

    def test_find_uses_equality(self):
        """Test find_bfs compares with == rather than identity."""
        root = TreeNode({'id': 1})
        child = TreeNode({'id': 2}, root)
        assert root.find_bfs({'id': 2}) is child

    def test_find_limited_to_subtree(self):
        """Test find_bfs only searches below the node."""
        a, b, c, d = build_sample()
        assert b.find_bfs('C') is None

    def test_is_all_expanded(self):
        """Test is_all_expanded detects any collapsed node."""
        a, b, c, d = build_sample()
        assert a.is_all_expanded() is True
        d.expanded = False
        assert a.is_all_expanded() is False
        assert c.is_all_expanded() is True

    def test_is_all_expanded_checks_self(self):
        """Test the starting node itself is checked."""
        a, b, c, d = build_sample()
        a.expanded = False
        assert a.is_all_expanded() is False


class TestTreeNodeViewState:
    """Tests for expand_all and collapse_all."""

    def test_expand_all(self):
        """Test expand_all opens every node in the subtree."""
        a, b, c, d = build_sample()
        for node in (a, b, c, d):
            node.expanded = False
        b.expand_all()
        assert b.expanded and d.expanded
        assert not a.expanded and not c.expanded

    def test_collapse_all_default(self):
        """Test collapse_all with default threshold closes everything."""
        a, b, c, d = build_sample()
        a.collapse_all()
        assert [n.expanded for n in (a, b, c, d)] == [False] * 4

    def test_collapse_all_threshold(self):
        """Test nodes shallower than the threshold are forced open."""
        a, b, c, d = build_sample()
        a.expanded = False
        a.collapse_all(1)
        assert a.expanded is True
        assert b.expanded is False
        assert c.expanded is False
        assert d.expanded is False
        assert a.is_all_expanded() is False

    def test_collapse_all_skips_non_collapsable(self):
        """Test non-collapsable nodes keep their state."""
        a, b, c, d = build_sample()
        b.collapsable = False
        d.collapsable = False
        d.expanded = False
        a.collapse_all(2)
        assert a.expanded is True
        assert b.expanded is True
        assert c.expanded is True
        assert d.expanded is False

# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Tree package - Owner and mutator of a TreeNode hierarchy.

The package is organized into:
- core: Main Tree class with mutation, queries, traversal and dump
- flatten: Projections of the hierarchy into flat node lists

Example:
    >>> from genro_treeview import Tree
    >>> tree = Tree()
    >>> root = tree.add('root')
    >>> tree.add('child', root).path()
    [0]
"""

from .core import Tree
from .flatten import FlattenFilter, flatten_expanded, flatten_matching

__all__ = ["Tree", "FlattenFilter", "flatten_expanded", "flatten_matching"]

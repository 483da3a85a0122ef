# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Genro-TreeView - In-memory trees with expand/collapse view state.

A lightweight, zero-dependency library providing a generic tree model
for tree-view widgets: structural mutation, traversal, positional paths
and a flatten projection for linear rendering.
"""

__version__ = "0.1.0"

from .config import FlattenOptions, NodeOptions
from .exceptions import (
    InvalidOperationError,
    InvalidPathError,
    TreeViewError,
)
from .node import FindCallback, TraverseCallback, TreeNode
from .tree import FlattenFilter, Tree

__all__ = [
    # Core classes
    "Tree",
    "TreeNode",
    # Options
    "NodeOptions",
    "FlattenOptions",
    # Callback types
    "TraverseCallback",
    "FindCallback",
    "FlattenFilter",
    # Exceptions
    "TreeViewError",
    "InvalidOperationError",
    "InvalidPathError",
]

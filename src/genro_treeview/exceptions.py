# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""TreeView exceptions."""

from __future__ import annotations

from typing import Sequence


class TreeViewError(Exception):
    """Base exception for TreeView errors."""

    pass


class InvalidOperationError(TreeViewError):
    """Raised when a structural mutation would break the tree.

    Adding a second root, or moving a node beneath itself or one of
    its own descendants.
    """

    pass


class InvalidPathError(TreeViewError, LookupError):
    """Raised when a positional path does not resolve to a node."""

    def __init__(self, path: Sequence[int], reason: str | None = None) -> None:
        self.path = list(path)
        message = f"Invalid path {self.path}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)

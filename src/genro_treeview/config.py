# Copyright 2025 Softwell S.r.l. - Genropy Team
# SPDX-License-Identifier: Apache-2.0

"""Option sets for node creation and tree flattening.

Options can be given as a dataclass instance, as a plain mapping, or as
keyword arguments. Whatever the form, they are merged over the defaults
by key presence, so an explicit ``expanded=False`` or ``position=0`` is
kept rather than replaced by the default.

Example:
    >>> NodeOptions.merge({'expanded': False}, position=0)
    NodeOptions(expanded=False, highlighted=False, collapsable=True, position=0)
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Mapping, TypeVar

_OptionsT = TypeVar('_OptionsT', bound='_MergeableOptions')


class _MergeableOptions:
    """Mixin providing ``merge`` for option dataclasses."""

    @classmethod
    def merge(
        cls: type[_OptionsT],
        options: _OptionsT | Mapping[str, Any] | None = None,
        **overrides: Any,
    ) -> _OptionsT:
        """Build a complete option set from partial sources.

        Args:
            options: An instance of this class, a mapping of option names
                to values, or None for the defaults.
            **overrides: Options that take precedence over ``options``.

        Returns:
            A new instance with every field set.

        Raises:
            TypeError: If ``options`` has an unsupported type or an
                option name is unknown.
        """
        names = {f.name for f in fields(cls)}  # type: ignore[arg-type]
        if options is None:
            values: dict[str, Any] = {}
        elif isinstance(options, cls):
            values = {name: getattr(options, name) for name in names}
        elif isinstance(options, Mapping):
            values = dict(options)
        else:
            raise TypeError(
                f"options must be {cls.__name__}, a mapping or None, "
                f"not {type(options).__name__}"
            )
        values.update(overrides)

        unknown = set(values) - names
        if unknown:
            raise TypeError(
                f"Unknown {cls.__name__} option(s): {', '.join(sorted(unknown))}"
            )
        return cls(**values)


@dataclass
class NodeOptions(_MergeableOptions):
    """View-state flags and sibling position for a new node.

    Attributes:
        expanded: Whether the node's descendants are visible.
        highlighted: Presentation hint, no structural meaning.
        collapsable: Whether ``collapse_all`` may close the node.
        position: Index in the parent's children to insert before.
            None appends.
    """

    expanded: bool = True
    highlighted: bool = False
    collapsable: bool = True
    position: int | None = None

    def __post_init__(self) -> None:
        if self.position is not None and (
            isinstance(self.position, bool) or not isinstance(self.position, int)
        ):
            raise TypeError(
                f"position must be int or None, not {type(self.position).__name__}"
            )


@dataclass
class FlattenOptions(_MergeableOptions):
    """Configuration for the expanded-state flatten mode.

    Attributes:
        expanded_only: If True, nodes below a collapsed ancestor are left
            out of the projection.
    """

    expanded_only: bool = True

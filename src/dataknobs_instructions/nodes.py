"""Canonical validation instruction tree.

Loose instructions (strings, lists, dicts, ...) are normalized into a small,
closed tree of immutable nodes:

- :class:`CheckNode`: a single named check with arguments, optionally negated
- :class:`AllNode`: conjunction (AND) over child instructions
- :class:`AnyNode`: disjunction (OR) over child instructions

The evaluator and describer only ever see these three types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple, Union


@dataclass(frozen=True)
class CheckNode:
    """A leaf instruction that runs one check from the registry."""

    name: str | None
    args: Tuple[Any, ...] = ()
    negate: bool = False


@dataclass(frozen=True)
class AllNode:
    """All child instructions must pass. An empty node passes."""

    children: Tuple[ValidationInstruction, ...] = ()
    normalized: bool = field(default=False, compare=False, repr=False)


@dataclass(frozen=True)
class AnyNode:
    """At least one child instruction must pass. An empty node fails."""

    children: Tuple[ValidationInstruction, ...] = ()
    normalized: bool = field(default=False, compare=False, repr=False)


CollectionNode = Union[AllNode, AnyNode]
ValidationInstruction = Union[CheckNode, AllNode, AnyNode]


def count_check_nodes(node: ValidationInstruction) -> int:
    """Count the CheckNode leaves of a canonical tree."""
    if isinstance(node, CheckNode):
        return 1
    return sum(count_check_nodes(child) for child in node.children)


__all__ = [
    "CheckNode",
    "AllNode",
    "AnyNode",
    "CollectionNode",
    "ValidationInstruction",
    "count_check_nodes",
]

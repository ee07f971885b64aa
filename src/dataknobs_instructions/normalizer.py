"""Normalization of loose validation instructions into canonical trees.

Accepted loose forms:

- ``"isString"``: a single check by name (``"!isString"``, ``"notString"`` and
  ``"nonString"`` negate it)
- ``5``, ``1.5``, ``True``: an ``equals`` check against the literal
- ``["isString", "isInteger"]``: any of the listed instructions
- ``{"check": "isInstanceOf", "args": [Path]}``: explicit check shorthand
- ``{"all": [...], "any": [...], "and": [...], "or": [...]}``: collections
- ``{"isString": True, "minLength": 3}``: implicit checks, one per key; a
  lone boolean argument selects the positive (True) or negated (False) form

Normalizing always produces an :class:`~dataknobs_instructions.nodes.AllNode`
or :class:`~dataknobs_instructions.nodes.AnyNode` at the root, with
redundant nesting flattened away.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from numbers import Number
from typing import Any, List, Tuple

from .exceptions import InvalidInstructionError
from .nodes import (
    AllNode,
    AnyNode,
    CheckNode,
    ValidationInstruction,
    count_check_nodes,
)
from .options import OPTION_KEYS, extract_options

CHECK_KEY = "check"
ARGS_KEY = "args"
NEGATE_KEY = "negate"

ALL_KEY = "all"
ANY_KEY = "any"
AND_KEY = "and"
OR_KEY = "or"

RESERVED_KEYS = frozenset(["mixin", AND_KEY, OR_KEY, ALL_KEY, ANY_KEY, ARGS_KEY]) | OPTION_KEYS
"""Keys that are never turned into implicit checks."""

NEGATION_PREFIXES = ("non", "not")


def normalize(instructions: Any, depth: int = 1) -> ValidationInstruction:
    """Convert a loose instruction into its canonical form.

    Args:
        instructions: Any accepted loose instruction, or a canonical node
        depth: Nesting depth (1 for the root); only the root is guaranteed
            to be a collection

    Returns:
        Canonical instruction; at depth 1 always a normalized AllNode/AnyNode

    Raises:
        InvalidInstructionError: If the instruction is structurally malformed
    """
    if isinstance(instructions, (AllNode, AnyNode)):
        if depth == 1 and instructions.normalized:
            return instructions
        key = ALL_KEY if isinstance(instructions, AllNode) else ANY_KEY
        return normalize({key: list(instructions.children)}, depth)

    if isinstance(instructions, CheckNode):
        return _wrap_check(instructions, depth)

    if isinstance(instructions, str):
        return normalize({CHECK_KEY: instructions, ARGS_KEY: []}, depth)

    if isinstance(instructions, Number):
        # Built directly so a boolean literal is compared, not read as negation
        return _wrap_check(CheckNode("equals", (instructions,)), depth)

    if isinstance(instructions, (list, tuple)):
        return normalize({ANY_KEY: list(instructions)}, depth)

    if not isinstance(instructions, Mapping):
        raise InvalidInstructionError(
            f"Cannot normalize validation instructions of type {type(instructions).__name__}; "
            "expected a string, number, boolean, list, or dict",
            context={"instructions": instructions, "depth": depth},
        )

    if CHECK_KEY in instructions or ARGS_KEY in instructions:
        return _wrap_check(normalize_check(instructions), depth)

    loose = dict(instructions)
    all_items = _take_collection(loose, ALL_KEY)
    any_items = _take_collection(loose, ANY_KEY)
    all_items.extend(_take_collection(loose, AND_KEY))
    any_items.extend(_take_collection(loose, OR_KEY))

    for key, value in loose.items():
        if key not in RESERVED_KEYS:
            all_items.append({CHECK_KEY: key, ARGS_KEY: [value]})

    all_nodes = tuple(normalize(item, depth + 1) for item in all_items)
    any_nodes = tuple(normalize(item, depth + 1) for item in any_items)

    node: ValidationInstruction
    if all_nodes and any_nodes:
        node = AllNode(all_nodes + (AnyNode(any_nodes),))
    elif any_nodes:
        node = AnyNode(any_nodes)
    else:
        node = AllNode(all_nodes)

    node = flatten(node, depth)
    if depth == 1:
        node = dataclasses.replace(node, normalized=True)
    return node


def normalize_check(instruction: Mapping[str, Any]) -> CheckNode:
    """Build a CheckNode from a ``{"check": ..., "args": ..., "negate": ...}`` mapping.

    A single boolean argument is read as the negation flag (``True`` keeps
    the check positive, ``False`` negates it). Leading ``!``, ``non`` and
    ``not`` prefixes on the check name each flip the negation and are
    stripped.

    Args:
        instruction: Check shorthand mapping

    Returns:
        CheckNode

    Raises:
        InvalidInstructionError: If the check name is not a string
    """
    name = instruction.get(CHECK_KEY)
    args = _as_args(instruction.get(ARGS_KEY))
    negate = bool(instruction.get(NEGATE_KEY, False))

    if name is not None and not isinstance(name, str):
        raise InvalidInstructionError(
            f"Check names must be strings, got {type(name).__name__}",
            context={"check": name},
        )

    if len(args) == 1 and isinstance(args[0], bool):
        negate = not args[0]
        args = ()

    while name is not None:
        if name.startswith("!"):
            negate = not negate
            name = name[1:]
        elif name.startswith(NEGATION_PREFIXES):
            negate = not negate
            name = name[3:]
        else:
            break

    return CheckNode(name=name, args=args, negate=negate)


def flatten(node: ValidationInstruction, depth: int = 1) -> ValidationInstruction:
    """Remove redundant nesting from a collection node.

    Below the root, a collection with a single child is replaced by that
    child. Children that are collections of the same kind as the parent are
    merged into it: the result lists the parent's other children first,
    followed by the merged grandchildren in their original order.

    Args:
        node: Node whose children are already normalized
        depth: Nesting depth of ``node``

    Returns:
        Flattened node
    """
    if isinstance(node, CheckNode):
        return node

    if len(node.children) == 1 and depth > 1:
        return node.children[0]

    kind = type(node)
    kept: List[ValidationInstruction] = []
    merged: List[ValidationInstruction] = []
    for child in node.children:
        if isinstance(child, kind):
            merged.extend(child.children)
        else:
            kept.append(child)

    return kind(tuple(kept + merged))


def count_checks(instructions: Any) -> int:
    """Count the checks a loose instruction resolves to, ignoring options."""
    _, stripped = extract_options(instructions)
    return count_check_nodes(normalize(stripped))


def has_checks(instructions: Any) -> bool:
    """Whether a loose instruction contains at least one check."""
    return count_checks(instructions) > 0


def _wrap_check(check: CheckNode, depth: int) -> ValidationInstruction:
    if depth == 1:
        return AllNode((check,), normalized=True)
    return check


def _take_collection(loose: dict, key: str) -> List[Any]:
    items = loose.pop(key, None)
    if items is None:
        return []
    if not isinstance(items, (list, tuple)):
        raise InvalidInstructionError(
            f"Invalid '{key}' instruction: a list was expected but "
            f"{type(items).__name__} was provided",
            context={"key": key, "value": items},
        )
    return list(items)


def _as_args(args: Any) -> Tuple[Any, ...]:
    if args is None:
        return ()
    if isinstance(args, (list, tuple)):
        return tuple(args)
    return (args,)


DEFAULT_INSTRUCTION: AllNode = normalize({"absent": False})  # type: ignore[assignment]
"""Used whenever instructions are missing or contain no checks: the value must not be None."""


__all__ = [
    "DEFAULT_INSTRUCTION",
    "RESERVED_KEYS",
    "normalize",
    "normalize_check",
    "flatten",
    "count_checks",
    "has_checks",
]

"""Natural-language descriptions of what an instruction expects.

Example:
    ```python
    describe_expectations({"isString": True, "minLength": 3}, registry)
    # '( a string && a value with a length of at least 3 )'
    describe_expectations(["isString", "isInteger", "isNone"], registry)
    # 'a string, an integer, or a None value'
    ```
"""

from __future__ import annotations

from typing import Any, List

from .checks.registry import CheckRegistry
from .nodes import AnyNode, CheckNode, ValidationInstruction
from .normalizer import normalize


def describe_expectations(instructions: Any, registry: CheckRegistry, depth: int = 1) -> str:
    """Describe the values an instruction accepts.

    Args:
        instructions: Loose or canonical instruction (normalized first)
        registry: Registry used to look up each check's description
        depth: Nesting depth of the instruction (1 for the root)

    Returns:
        Description text; empty collections describe as ``""``

    Raises:
        CheckNotFoundError: If the instruction references an unknown check
    """
    return _describe_node(normalize(instructions, depth), registry, depth)


def _describe_node(node: ValidationInstruction, registry: CheckRegistry, depth: int) -> str:
    if isinstance(node, CheckNode):
        return registry.get(node.name).describe(node.negate, node.args)

    if not node.children:
        return ""

    parts = [_describe_node(child, registry, depth + 1) for child in node.children]

    if isinstance(node, AnyNode):
        joined = _join_any(parts, depth)
        if depth == 1:
            return joined
        return _parenthesize(joined)

    joined = _join_all(parts)
    if depth == 1 and len(node.children) < 2:
        return joined
    return _parenthesize(joined)

    joined = _join_all(parts)
    if depth == 1 and len(node.children) < 2:
        return joined
    return _parenthesize(joined)


def _join_any(parts: List[str], depth: int) -> str:
    if len(parts) == 1:
        return parts[0]
    if len(parts) == 2:
        return f"{parts[0]} or {parts[1]}"
    if depth == 1:
        return f"{', '.join(parts[:-1])}, or {parts[-1]}"
    return " || ".join(parts)


def _join_all(parts: List[str]) -> str:
    return " && ".join(parts)


def _parenthesize(text: str) -> str:
    return f"( {text} )"


__all__ = ["describe_expectations"]

"""Combining several instructions into one conjunctive instruction."""

from __future__ import annotations

from typing import Any, Dict

from .normalizer import AND_KEY
from .options import extract_options


def merge(*instructions: Any) -> Dict[str, Any]:
    """Merge instructions so that a value must satisfy all of them.

    Options found at the root of the inputs are carried over to the merged
    instruction. When inputs disagree on an option, the earlier input wins.

    Args:
        *instructions: Loose (or canonical) instructions; none are modified

    Returns:
        Loose instruction of the form ``{<options>, "and": [...]}``

    Example:
        ```python
        merge("isString", {"minLength": 3, "throw_on_failure": False})
        # {'throw_on_failure': False, 'and': ['isString', {'minLength': 3}]}
        ```
    """
    options: Dict[str, Any] = {}
    stripped_items = []
    for instruction in instructions:
        overrides, stripped = extract_options(instruction, apply_defaults=False)
        for key, value in overrides.items():  # type: ignore[union-attr]
            options.setdefault(key, value)
        stripped_items.append(stripped)

    merged: Dict[str, Any] = dict(options)
    merged[AND_KEY] = stripped_items
    return merged


__all__ = ["merge"]

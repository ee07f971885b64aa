"""Cross-cutting validation options and their extraction from instructions.

Options live at the root of a loose instruction dictionary, next to the
checks themselves::

    {"isInteger": True, "throw_on_failure": False, "default_value": 0}

They are pulled out before normalization and never appear in the canonical
tree. Extraction always works on a private copy; the caller's dictionary is
left untouched so one instruction literal can safely be reused.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple, Union


class Sentinel:
    """Named singleton marker with a readable repr."""

    def __init__(self, name: str, description: str):
        self._name = name
        self.description = description

    def __repr__(self) -> str:
        return self._name

    def __reduce__(self) -> str:
        return self._name


NO_DEFAULT = Sentinel("NO_DEFAULT", "No default value was supplied")
"""Marks the absence of a ``default_value`` option."""

BYPASSED = Sentinel(
    "BYPASSED", "Validation skipped; the value was absent and allow_absent=True"
)
"""Stands in for the instructions and failure of a bypassed validation."""

THROW_ON_FAILURE = "throw_on_failure"
ALLOW_ABSENT = "allow_absent"
DEFAULT_VALUE = "default_value"
RETURN_FULL_RESULT = "return_full_result"
DEBUG = "debug"

OPTION_KEYS = frozenset(
    [THROW_ON_FAILURE, ALLOW_ABSENT, DEFAULT_VALUE, RETURN_FULL_RESULT, DEBUG]
)


@dataclass(frozen=True)
class ValidationOptions:
    """Behavior flags for a single ``validate()`` call.

    Attributes:
        throw_on_failure: Raise a ValidationError when validation fails
        allow_absent: Accept ``None`` without evaluating any check
        default_value: Value (or callable producing it) returned on failure
            when not throwing
        return_full_result: Return the ValidationResult instead of the value
        debug: Log the normalized instructions and the verdict
    """

    throw_on_failure: bool = True
    allow_absent: bool = False
    default_value: Any = NO_DEFAULT
    return_full_result: bool = False
    debug: bool = False

    @property
    def has_default(self) -> bool:
        """Whether a default value was supplied."""
        return self.default_value is not NO_DEFAULT


def extract_options(
    instructions: Any, apply_defaults: bool = True
) -> Tuple[Union[ValidationOptions, Dict[str, Any]], Any]:
    """Separate validation options from a loose instruction.

    Only dictionaries can carry options; any other instruction is returned
    as-is alongside default options.

    Args:
        instructions: Loose instruction to inspect (never modified)
        apply_defaults: When True, return a complete ValidationOptions.
            When False, return a dict holding only the options that were
            explicitly set, keyed by option name.

    Returns:
        Tuple of (options, instructions without option keys)
    """
    overrides: Dict[str, Any] = {}
    if isinstance(instructions, dict):
        stripped = dict(instructions)

        if THROW_ON_FAILURE in stripped:
            if stripped.pop(THROW_ON_FAILURE) is False:
                overrides[THROW_ON_FAILURE] = False

        if ALLOW_ABSENT in stripped:
            if stripped.pop(ALLOW_ABSENT) is True:
                overrides[ALLOW_ABSENT] = True

        if DEFAULT_VALUE in stripped:
            default_value = stripped.pop(DEFAULT_VALUE)
            if default_value is not NO_DEFAULT:
                overrides[DEFAULT_VALUE] = default_value
                overrides[THROW_ON_FAILURE] = False

        if RETURN_FULL_RESULT in stripped:
            overrides[RETURN_FULL_RESULT] = bool(stripped.pop(RETURN_FULL_RESULT))

        if DEBUG in stripped:
            if stripped.pop(DEBUG) is True:
                overrides[DEBUG] = True
    else:
        stripped = instructions

    if apply_defaults:
        return ValidationOptions(**overrides), stripped
    return overrides, stripped


__all__ = [
    "NO_DEFAULT",
    "BYPASSED",
    "OPTION_KEYS",
    "Sentinel",
    "ValidationOptions",
    "extract_options",
]

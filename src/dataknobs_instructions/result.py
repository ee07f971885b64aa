"""Validation result types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union

from .nodes import ValidationInstruction
from .options import BYPASSED, Sentinel, ValidationOptions


@dataclass(frozen=True)
class ValidationFailure:
    """Human-readable account of why a value failed validation."""

    expected_text: str
    provided_text: str
    message: str

    @classmethod
    def build(cls, expected_text: str, provided_text: str) -> ValidationFailure:
        """Create a failure with the standard message format.

        Args:
            expected_text: Description of the instructions
            provided_text: Description of the value, with an article

        Returns:
            ValidationFailure
        """
        return cls(
            expected_text=expected_text,
            provided_text=provided_text,
            message=f"expected {expected_text} but {provided_text} was provided.",
        )


@dataclass(frozen=True)
class ValidationResult:
    """Everything known about one ``validate()`` call.

    Only returned to callers that ask for it with ``return_full_result``;
    it is also attached to raised ValidationErrors and passed to callable
    default values.
    """

    success: bool
    options: ValidationOptions
    instructions: Union[ValidationInstruction, Sentinel]
    initial_value: Any
    failure: Union[ValidationFailure, Sentinel, None] = None
    final_value: Any = None

    def __bool__(self) -> bool:
        """Allow 'if result:' usage to check success."""
        return self.success

    @property
    def bypassed(self) -> bool:
        """Whether validation was skipped because the value was absent."""
        return self.failure is BYPASSED

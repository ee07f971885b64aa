"""Exception hierarchy for the validation-instruction engine.

Every error raised by this package derives from :class:`InstructionsError`,
which carries an optional context dictionary with structured details about
the failure (check names, offending values, the full validation result, ...).

The hierarchy separates three kinds of problems:

- Programmer errors: malformed instructions (:class:`InvalidInstructionError`),
  unknown checks (:class:`CheckNotFoundError`), bad check arguments
  (:class:`InvalidCheckArgumentError`) and duplicate registrations
  (:class:`CheckRegistrationError`)
- Data errors: a value failing its instructions (:class:`ValidationError`)
- Setup errors: invalid validator configuration (:class:`ConfigurationError`)

Example:
    ```python
    from dataknobs_instructions import ValidationError, validate

    try:
        validate("x", {"isInteger": True})
    except ValidationError as e:
        print(e)
        # expected an integer but a string ("x") was provided.
        print(e.result.failure.expected_text)
        # an integer
    ```
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from dataknobs_common import (
    ConfigurationError as BaseConfigurationError,
    DataknobsError,
    NotFoundError,
    OperationError,
    ValidationError as BaseValidationError,
)

if TYPE_CHECKING:
    from .result import ValidationResult


class InstructionsError(DataknobsError):
    """Base exception for the instructions package.

    Inherits ``context`` and its ``details`` alias from
    :class:`dataknobs_common.DataknobsError`, so these errors can be caught
    alongside those of the other dataknobs packages.
    """

    pass


class InvalidInstructionError(InstructionsError, TypeError):
    """Raised when a loose instruction is structurally malformed.

    This is raised at normalization time (before any value is evaluated),
    e.g. when an ``all``/``any``/``and``/``or`` entry is not a list.
    """

    pass


class CheckNotFoundError(InstructionsError, NotFoundError, LookupError):
    """Raised when an instruction references a check that is not registered."""

    pass


class CheckRegistrationError(InstructionsError, OperationError):
    """Raised when a check cannot be registered (e.g. duplicate name)."""

    pass


class InvalidCheckArgumentError(InstructionsError, ValueError):
    """Raised when a check receives arguments it cannot work with."""

    pass


class ConfigurationError(InstructionsError, BaseConfigurationError):
    """Raised when validator configuration is invalid or cannot be loaded."""

    pass


class ValidationError(InstructionsError, BaseValidationError):
    """Raised when a value fails its validation instructions.

    The full :class:`~dataknobs_instructions.result.ValidationResult` is
    available as ``error.result`` (and ``error.context["result"]``).

    Example:
        ```python
        raise ValidationError.from_result(result)
        ```
    """

    @property
    def result(self) -> ValidationResult | None:
        """The validation result that triggered this error, if any."""
        return self.context.get("result")

    @classmethod
    def from_result(cls, result: ValidationResult) -> ValidationError:
        """Build an error from a failed validation result.

        Args:
            result: The failed result; its failure message becomes the
                error message

        Returns:
            A ValidationError carrying the result as context
        """
        failure = result.failure
        return cls(
            failure.message,
            context={
                "result": result,
                "expected": failure.expected_text,
                "provided": failure.provided_text,
            },
        )


__all__ = [
    "InstructionsError",
    "InvalidInstructionError",
    "CheckNotFoundError",
    "CheckRegistrationError",
    "InvalidCheckArgumentError",
    "ConfigurationError",
    "ValidationError",
]

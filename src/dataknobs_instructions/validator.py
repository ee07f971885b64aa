"""Validation of values against loose instructions.

The :class:`Validator` ties the pieces together: options are extracted, the
instructions are normalized, the canonical tree is evaluated against the
value with short-circuiting, and failures are turned into a readable message.

Example:
    ```python
    from dataknobs_instructions import validate

    validate(5, {"isInteger": True})
    # 5

    validate("x", {"isInteger": True, "default_value": 0})
    # 0

    validate(None, {"isInteger": True, "allow_absent": True})
    # None

    validate("x", "isInteger")
    # ValidationError: expected an integer but a string ("x") was provided.
    ```

Module-level functions (``validate``, ``describe``, ``merge``, ...) use a
default validator with every built-in check, created at import time.
"""

from __future__ import annotations

import dataclasses
import logging
from typing import Any, Dict, List, Sequence

from . import merge as merge_module
from . import normalizer
from .checks.base import with_article
from .checks.registry import CheckRegistry, create_default_registry
from .describer import describe_expectations
from .exceptions import ConfigurationError, ValidationError
from .nodes import AllNode, AnyNode, CheckNode, ValidationInstruction, count_check_nodes
from .options import BYPASSED, extract_options
from .result import ValidationFailure, ValidationResult

logger = logging.getLogger(__name__)


class Validator:
    """Validates values against loose validation instructions.

    Attributes:
        registry: Registry used to resolve check names

    Args:
        registry: Check registry; a registry with every built-in check is
            created when omitted
        instruction_sets: Named instructions, usable with
            :meth:`validate_named`
    """

    def __init__(
        self,
        registry: CheckRegistry | None = None,
        instruction_sets: Dict[str, Any] | None = None,
    ):
        self.registry = registry if registry is not None else create_default_registry()
        self._instruction_sets: Dict[str, Any] = dict(instruction_sets or {})

    def validate(self, value: Any, instructions: Any = None) -> Any:
        """Validate a value.

        Args:
            value: Value to validate (never modified)
            instructions: Loose or canonical instructions, optionally carrying
                options; when omitted the value only has to be non-absent

        Returns:
            The value itself on success. On failure without throwing, the
            default value (``None`` when none was given). The full
            ValidationResult instead when ``return_full_result`` is set.

        Raises:
            ValidationError: If the value fails and ``throw_on_failure`` is on
            InvalidInstructionError: If the instructions are malformed
            CheckNotFoundError: If the instructions reference an unknown check
        """
        if instructions is None:
            instructions = normalizer.DEFAULT_INSTRUCTION

        options, stripped = extract_options(instructions)

        if options.allow_absent and value is None:
            result = ValidationResult(
                success=True,
                options=options,
                instructions=BYPASSED,
                initial_value=value,
                failure=BYPASSED,
                final_value=None,
            )
            if options.debug:
                logger.info("Validation bypassed: value is absent and allow_absent=True")
            return result if options.return_full_result else None

        node = normalizer.normalize(stripped)
        if count_check_nodes(node) == 0:
            node = normalizer.DEFAULT_INSTRUCTION

        success = self.evaluate(value, node)
        if options.debug:
            logger.info(f"Validating {value!r} against {node}")
            logger.info(f"Validation {'passed' if success else 'failed'}")

        if success:
            result = ValidationResult(
                success=True,
                options=options,
                instructions=node,
                initial_value=value,
                final_value=value,
            )
            return result if options.return_full_result else value

        failure = ValidationFailure.build(
            self.describe(node), self.describe_value(value, indefinite_article=True)
        )
        result = ValidationResult(
            success=False,
            options=options,
            instructions=node,
            initial_value=value,
            failure=failure,
        )

        if options.throw_on_failure:
            raise ValidationError.from_result(result)

        if options.has_default:
            default_value = options.default_value
            if callable(default_value):
                final_value = default_value(result, self)
            else:
                final_value = default_value
            result = dataclasses.replace(result, final_value=final_value)

        return result if options.return_full_result else result.final_value

    def evaluate(self, value: Any, instructions: Any) -> bool:
        """Evaluate a value against instructions without building a result.

        Args:
            value: Value to test
            instructions: Loose or canonical instructions (options ignored)

        Returns:
            True if the value satisfies the instructions
        """
        if not isinstance(instructions, (CheckNode, AllNode, AnyNode)):
            _, instructions = extract_options(instructions)
            instructions = normalizer.normalize(instructions)
        return self._evaluate_node(value, instructions)

    def _evaluate_node(self, value: Any, node: ValidationInstruction) -> bool:
        if isinstance(node, CheckNode):
            return self.execute_check(value, node.name, node.args, node.negate)
        if isinstance(node, AllNode):
            return all(self._evaluate_node(value, child) for child in node.children)
        return any(self._evaluate_node(value, child) for child in node.children)

    def execute_check(
        self,
        value: Any,
        check_name: str | None,
        args: Sequence[Any] = (),
        negate: bool = False,
    ) -> bool:
        """Run a single registered check.

        Args:
            value: Value to test
            check_name: Name of the check (case-insensitive, ``is`` optional)
            args: Arguments for the check
            negate: Invert the outcome

        Returns:
            Outcome of the check, inverted when negate is True

        Raises:
            CheckNotFoundError: If the check is not registered
        """
        passed = bool(self.registry.get(check_name).evaluate(value, tuple(args)))
        return not passed if negate else passed

    def describe(self, instructions: Any) -> str:
        """Describe what the instructions expect, in plain English."""
        _, stripped = extract_options(instructions)
        return describe_expectations(stripped, self.registry)

    def describe_value(
        self, value: Any, indefinite_article: bool = False, simple: bool = False
    ) -> str:
        """Describe a value using the first descriptive check it passes.

        Args:
            value: Value to describe
            indefinite_article: Prefix the description with "a"/"an"
            simple: Leave out details such as the value itself or its length

        Returns:
            Description such as ``'string ("hello world")'`` or
            ``'an integer (5)'``
        """
        check = self.registry.first_descriptive_match(value)
        if check is None:
            text = f"{type(value).__qualname__} value"
            return with_article(text) if indefinite_article else text
        if simple:
            return check.simple_description(value, indefinite_article)
        return check.describe_target(value, indefinite_article)

    def describe_a(self, value: Any) -> str:
        """Describe a value with an indefinite article."""
        return self.describe_value(value, indefinite_article=True)

    def normalize(self, instructions: Any) -> ValidationInstruction:
        """Normalize instructions into their canonical form."""
        return normalizer.normalize(instructions)

    def has_checks(self, instructions: Any) -> bool:
        """Whether the instructions contain at least one check."""
        return normalizer.has_checks(instructions)

    def count_checks(self, instructions: Any) -> int:
        """Count the checks in the instructions, ignoring options."""
        return normalizer.count_checks(instructions)

    def merge(self, *instructions: Any) -> Dict[str, Any]:
        """Merge instructions so that a value must satisfy all of them."""
        return merge_module.merge(*instructions)

    def add_instructions(self, name: str, instructions: Any) -> None:
        """Store instructions under a name for :meth:`validate_named`."""
        self._instruction_sets[name] = instructions
        logger.debug(f"Added instruction set '{name}'")

    def get_instructions(self, name: str) -> Any:
        """Get a named instruction set.

        Raises:
            ConfigurationError: If no instructions are stored under the name
        """
        if name not in self._instruction_sets:
            raise ConfigurationError(
                f"Unknown instruction set '{name}'",
                context={"name": name, "available": self.list_instruction_sets()},
            )
        return self._instruction_sets[name]

    def list_instruction_sets(self) -> List[str]:
        """List the names of stored instruction sets."""
        return list(self._instruction_sets.keys())

    def validate_named(self, value: Any, name: str) -> Any:
        """Validate a value against a named instruction set."""
        return self.validate(value, self.get_instructions(name))


_default_validator = Validator()


def get_default_validator() -> Validator:
    """Get the validator used by the module-level functions."""
    return _default_validator


def validate(value: Any, instructions: Any = None) -> Any:
    """Validate a value with the default validator. See :meth:`Validator.validate`."""
    return _default_validator.validate(value, instructions)


def describe(instructions: Any) -> str:
    """Describe what the instructions expect."""
    return _default_validator.describe(instructions)


def describe_value(value: Any, indefinite_article: bool = False, simple: bool = False) -> str:
    """Describe a value using the default validator's descriptive checks."""
    return _default_validator.describe_value(value, indefinite_article, simple)


def describe_a(value: Any) -> str:
    """Describe a value with an indefinite article."""
    return _default_validator.describe_a(value)


def execute_check(
    value: Any, check_name: str, args: Sequence[Any] = (), negate: bool = False
) -> bool:
    """Run a single built-in check."""
    return _default_validator.execute_check(value, check_name, args, negate)


normalize = normalizer.normalize
has_checks = normalizer.has_checks
count_checks = normalizer.count_checks
merge = merge_module.merge


__all__ = [
    "Validator",
    "get_default_validator",
    "validate",
    "describe",
    "describe_value",
    "describe_a",
    "execute_check",
    "normalize",
    "has_checks",
    "count_checks",
    "merge",
]

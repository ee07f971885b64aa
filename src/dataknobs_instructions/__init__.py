"""Declarative validation instructions for Python values.

This package turns loose, human-friendly validation instructions into a
canonical tree of checks, evaluates values against them, and explains
failures in plain English:

- **Validation**: ``validate``, with options such as ``throw_on_failure``,
  ``allow_absent`` and ``default_value``
- **Normalization**: ``normalize`` into ``AllNode``/``AnyNode``/``CheckNode``
- **Descriptions**: ``describe`` for instructions, ``describe_value`` and
  ``describe_a`` for values
- **Checks**: a registry of named checks, extensible with custom ``Check``
  subclasses
- **Configuration**: validators built from YAML/JSON via ``validator_factory``

Example:
    ```python
    from dataknobs_instructions import ValidationError, describe, merge, validate

    validate("abc", {"isString": True, "minLength": 3})
    # 'abc'

    describe(["isString", "isInteger", "isNone"])
    # 'a string, an integer, or a None value'

    validate("x", merge("isString", {"minLength": 3, "default_value": ""}))
    # ''
    ```
"""

from dataknobs_instructions.checks import Check, CheckRegistry, create_default_registry
from dataknobs_instructions.config import CheckReference, ConfigLoader, ValidatorConfig
from dataknobs_instructions.describer import describe_expectations
from dataknobs_instructions.exceptions import (
    CheckNotFoundError,
    CheckRegistrationError,
    ConfigurationError,
    InstructionsError,
    InvalidCheckArgumentError,
    InvalidInstructionError,
    ValidationError,
)
from dataknobs_instructions.factory import ValidatorFactory, validator_factory
from dataknobs_instructions.nodes import AllNode, AnyNode, CheckNode, ValidationInstruction
from dataknobs_instructions.normalizer import DEFAULT_INSTRUCTION, flatten, normalize_check
from dataknobs_instructions.options import (
    BYPASSED,
    NO_DEFAULT,
    ValidationOptions,
    extract_options,
)
from dataknobs_instructions.result import ValidationFailure, ValidationResult
from dataknobs_instructions.validator import (
    Validator,
    count_checks,
    describe,
    describe_a,
    describe_value,
    execute_check,
    get_default_validator,
    has_checks,
    merge,
    normalize,
    validate,
)

__version__ = "1.0.0"

__all__ = [
    # Version
    "__version__",
    # Public functions
    "validate",
    "describe",
    "describe_value",
    "describe_a",
    "execute_check",
    "normalize",
    "has_checks",
    "count_checks",
    "merge",
    "get_default_validator",
    # Core
    "Validator",
    "describe_expectations",
    "extract_options",
    "normalize_check",
    "flatten",
    "DEFAULT_INSTRUCTION",
    # Tree
    "AllNode",
    "AnyNode",
    "CheckNode",
    "ValidationInstruction",
    # Options and results
    "ValidationOptions",
    "ValidationResult",
    "ValidationFailure",
    "NO_DEFAULT",
    "BYPASSED",
    # Checks
    "Check",
    "CheckRegistry",
    "create_default_registry",
    # Configuration
    "CheckReference",
    "ValidatorConfig",
    "ConfigLoader",
    "ValidatorFactory",
    "validator_factory",
    # Exceptions
    "InstructionsError",
    "InvalidInstructionError",
    "CheckNotFoundError",
    "CheckRegistrationError",
    "InvalidCheckArgumentError",
    "ConfigurationError",
    "ValidationError",
]

"""Configuration for building validators from YAML, JSON or dictionaries.

Example configuration (YAML):

    name: user_checks
    include_builtin_checks: true
    checks:
      - class_path: myapp.checks.IsSlug
      - class_path: myapp.checks.HasPrefix
        name: hasOrderPrefix
        params:
          prefix: "ORD-"
    instructions:
      username:
        isString: true
        minLength: ${MIN_USERNAME_LENGTH:3}
      order_id: [isInteger, hasOrderPrefix]

Environment variables may be referenced in any string value as ``${VAR}``,
``${VAR:default}`` or ``${VAR:-default}``.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Union

import yaml
from dataknobs_config import VariableSubstitution as BaseVariableSubstitution
from pydantic import BaseModel, Field, ValidationError as PydanticValidationError, field_validator

from .exceptions import ConfigurationError

logger = logging.getLogger(__name__)


class CheckReference(BaseModel):
    """Reference to a custom Check class to register."""

    class_path: str
    name: str | None = None
    params: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("class_path")
    @classmethod
    def validate_class_path(cls, v: str) -> str:
        """Require a dotted ``module.ClassName`` path."""
        module_path, _, class_name = v.rpartition(".")
        if not module_path or not class_name:
            raise ValueError(f"class_path must look like 'module.ClassName', got '{v}'")
        return v


class ValidatorConfig(BaseModel):
    """Configuration of a Validator.

    Attributes:
        name: Name of the check registry
        include_builtin_checks: Register every built-in check
        checks: Custom checks to register
        instructions: Named instruction sets
    """

    name: str = "checks"
    include_builtin_checks: bool = True
    checks: List[CheckReference] = Field(default_factory=list)
    instructions: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("instructions")
    @classmethod
    def validate_instructions(cls, v: Dict[str, Any]) -> Dict[str, Any]:
        """Reject empty instruction set names."""
        for key in v:
            if not key:
                raise ValueError("Instruction set names cannot be empty")
        return v


class VariableSubstitution(BaseVariableSubstitution):
    """Substitutes environment variables in configuration values.

    Extends :class:`dataknobs_config.VariableSubstitution` (``${VAR}``,
    ``${VAR:default}`` and ``${VAR:-default}``) in two ways:

    - "1" and "0" convert to integers rather than booleans, so a reference
      used as a check argument cannot turn into the negation shorthand
    - a missing variable raises :class:`ConfigurationError` with the
      variable name in its context instead of a bare ``ValueError``
    """

    def substitute(self, value: Any) -> Any:
        """Recursively substitute environment variables in a value.

        Raises:
            ConfigurationError: If a variable without default is not set
        """
        try:
            return super().substitute(value)
        except ValueError as e:
            raise ConfigurationError(
                str(e),
                context={"variable": self._missing_variable(value)},
            ) from e

    def _missing_variable(self, text: str) -> str | None:
        for match in self.VAR_PATTERN.finditer(text):
            has_default = match.group(2) is not None or match.group(3) is not None
            if match.group(1) not in os.environ and not has_default:
                return match.group(1)
        return None

    def _convert_type(self, value: str) -> Union[str, int, float, bool]:
        if value in ("1", "0"):
            return int(value)
        return super()._convert_type(value)


class ConfigLoader:
    """Load and validate validator configurations."""

    def __init__(self) -> None:
        self._substitution = VariableSubstitution()

    def load_from_file(self, file_path: Union[str, Path], resolve_env: bool = True) -> ValidatorConfig:
        """Load configuration from a JSON or YAML file.

        Args:
            file_path: Path to the configuration file
            resolve_env: Whether to substitute environment variables

        Returns:
            Validated ValidatorConfig

        Raises:
            ConfigurationError: If the file is missing, unreadable, has an
                unsupported format, or does not match the schema
        """
        file_path = Path(file_path)
        if not file_path.exists():
            raise ConfigurationError(
                f"Configuration file not found: {file_path}",
                context={"path": str(file_path)},
            )

        logger.info(f"Loading validator configuration from {file_path}")
        raw_config = self._load_file(file_path)
        if raw_config is None:
            raw_config = {}
        if not isinstance(raw_config, dict):
            raise ConfigurationError(
                f"Configuration file must contain a mapping: {file_path}",
                context={"path": str(file_path), "type": type(raw_config).__name__},
            )
        return self.load_from_dict(raw_config, resolve_env=resolve_env)

    def load_from_dict(self, config_dict: Dict[str, Any], resolve_env: bool = True) -> ValidatorConfig:
        """Load configuration from a dictionary.

        Args:
            config_dict: Configuration dictionary (not modified)
            resolve_env: Whether to substitute environment variables

        Returns:
            Validated ValidatorConfig

        Raises:
            ConfigurationError: If the configuration does not match the schema
        """
        processed_config = dict(config_dict)
        if resolve_env:
            processed_config = self._substitution.substitute(processed_config)

        try:
            return ValidatorConfig.model_validate(processed_config)
        except PydanticValidationError as e:
            raise ConfigurationError(
                f"Invalid validator configuration: {e}",
                context={"errors": e.errors()},
            ) from e

    def _load_file(self, file_path: Path) -> Any:
        suffix = file_path.suffix.lower()
        try:
            with open(file_path) as f:
                if suffix == ".json":
                    return json.load(f)
                elif suffix in [".yaml", ".yml"]:
                    return yaml.safe_load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Cannot parse configuration file {file_path}: {e}",
                context={"path": str(file_path)},
            ) from e
        raise ConfigurationError(
            f"Unsupported file format: {suffix}",
            context={"path": str(file_path), "suffix": suffix},
        )


__all__ = [
    "CheckReference",
    "ValidatorConfig",
    "VariableSubstitution",
    "ConfigLoader",
]

"""Factory for building validators from configuration."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Union

from dataknobs_config import FactoryBase

from .checks.base import Check
from .checks.extended import load_class
from .checks.registry import CheckRegistry, create_default_registry
from .config import CheckReference, ConfigLoader, ValidatorConfig
from .exceptions import (
    CheckRegistrationError,
    ConfigurationError,
    InvalidCheckArgumentError,
)
from .validator import Validator

logger = logging.getLogger(__name__)


class ValidatorFactory(FactoryBase):
    """Builds validators from configuration mappings or files.

    Each validator gets its own check registry and named instruction sets.

    The accepted keys are the fields of
    :class:`~dataknobs_instructions.config.ValidatorConfig`. Custom checks
    are imported from their ``class_path`` and registered after the
    built-in ones, so a clashing name is reported rather than silently
    shadowing a built-in check.

    Because it implements ``dataknobs_config.FactoryBase.create``, the
    factory can be named in a dataknobs ``Config`` object definition:

        validators:
          - name: order_checks
            factory: dataknobs_instructions.factory.ValidatorFactory
            checks:
              - class_path: myapp.checks.IsOrderId
            instructions:
              quantity: {isInteger: true, atLeast: 1}
    """

    def __init__(self, loader: ConfigLoader | None = None):
        self._loader = loader or ConfigLoader()

    def create(self, **config: Any) -> Validator:
        """Create a Validator from configuration.

        Args:
            **config: Validator configuration; environment references are
                substituted before validation

        Returns:
            Validator instance

        Raises:
            ConfigurationError: If the configuration is invalid or a custom
                check cannot be loaded or registered
        """
        return self._build(self._loader.load_from_dict(config))

    def from_file(self, file_path: Union[str, Path]) -> Validator:
        """Create a Validator from a JSON or YAML configuration file."""
        return self._build(self._loader.load_from_file(file_path))

    def _build(self, validator_config: ValidatorConfig) -> Validator:
        name = validator_config.name

        logger.info(f"Creating validator: {name}")
        if validator_config.include_builtin_checks:
            registry = create_default_registry(name)
        else:
            registry = CheckRegistry(name)

        for reference in validator_config.checks:
            check = self._create_check(reference)
            try:
                registry.register(check)
            except CheckRegistrationError as e:
                raise ConfigurationError(str(e), context=e.context) from e

        return Validator(registry=registry, instruction_sets=validator_config.instructions)

    def _create_check(self, reference: CheckReference) -> Check:
        try:
            cls = load_class(reference.class_path)
        except InvalidCheckArgumentError as e:
            raise ConfigurationError(str(e), context=e.context) from e

        if not issubclass(cls, Check):
            raise ConfigurationError(
                f"'{reference.class_path}' is not a Check subclass",
                context={"class_path": reference.class_path},
            )

        if hasattr(cls, "from_config"):
            check = cls.from_config(reference.params)
        else:
            try:
                check = cls(**reference.params)
            except TypeError as e:
                raise ConfigurationError(
                    f"Failed to instantiate {reference.class_path}: {e}",
                    context={"class_path": reference.class_path, "params": reference.params},
                ) from e

        if reference.name:
            check.name = reference.name
        logger.debug(f"Loaded custom check '{check.name}' from {reference.class_path}")
        return check


# Create singleton instance for registration
validator_factory = ValidatorFactory()


__all__ = ["ValidatorFactory", "validator_factory"]

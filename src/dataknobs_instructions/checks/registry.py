"""Thread-safe registry of named checks.

Check names are case-insensitive and the ``is`` prefix is optional when
looking a check up, so ``"absent"``, ``"Absent"`` and ``"isAbsent"`` all
resolve to the same check.

Example:
    ```python
    from dataknobs_instructions.checks import CheckRegistry, IsString

    registry = CheckRegistry("my_checks")
    registry.register(IsString())
    registry.get("string")
    # IsString(name='isString')
    ```
"""

from __future__ import annotations

import logging
from typing import Any, List, Tuple

from dataknobs_common import OperationError, Registry

from ..exceptions import CheckNotFoundError, CheckRegistrationError
from .base import Check
from .extended import EXTENDED_CHECKS
from .simple import SIMPLE_CHECKS

logger = logging.getLogger(__name__)

IS_PREFIX = "is"


class CheckRegistry(Registry[Check]):
    """Registry of checks keyed by case-insensitive name.

    Built on :class:`dataknobs_common.Registry`. Items are stored under the
    lower-cased check name; lookups accept any case and an omitted ``is``
    prefix.

    Args:
        name: Name for this registry instance
    """

    def __init__(self, name: str = "checks"):
        super().__init__(name)
        self._descriptive: Tuple[Check, ...] | None = None

    def _resolve_key(self, name: str | None) -> str | None:
        if not isinstance(name, str):
            return None
        key = name.lower()
        if key in self._items:
            return key
        prefixed = IS_PREFIX + key
        if prefixed in self._items:
            return prefixed
        return None

    def register(self, check: Check, allow_overwrite: bool = False) -> None:  # type: ignore[override]
        """Register a check under its name.

        Args:
            check: Check instance to register
            allow_overwrite: Whether to replace a check with the same name

        Raises:
            CheckRegistrationError: If the object is not a Check, has no name,
                or the name is taken and allow_overwrite is False
        """
        if not isinstance(check, Check):
            raise CheckRegistrationError(
                f"Only Check instances can be registered, got {type(check).__name__}",
                context={"registry": self._name},
            )
        if not check.name:
            raise CheckRegistrationError(
                f"Cannot register a check without a name in {self._name}",
                context={"registry": self._name, "check": repr(check)},
            )

        with self._lock:
            try:
                super().register(check.name.lower(), check, allow_overwrite=allow_overwrite)
            except OperationError as e:
                raise CheckRegistrationError(
                    f"Check '{check.name}' already registered in {self._name}",
                    context={"key": check.name, "registry": self._name},
                ) from e
            self._descriptive = None
        logger.debug(f"Registered check '{check.name}' in {self._name}")

    def register_all(self, checks: Any, allow_overwrite: bool = False) -> None:
        """Register several checks at once."""
        for check in checks:
            self.register(check, allow_overwrite=allow_overwrite)

    def unregister(self, name: str) -> Check:
        """Unregister and return a check.

        Raises:
            CheckNotFoundError: If no check matches the name
        """
        with self._lock:
            key = self._resolve_key(name)
            if key is None:
                raise CheckNotFoundError(
                    f"Check not found: {name}",
                    context={"key": name, "registry": self._name},
                )
            self._descriptive = None
            return super().unregister(key)

    def get(self, name: str | None) -> Check:  # type: ignore[override]
        """Get a check by name.

        Args:
            name: Check name, in any case, with or without the ``is`` prefix

        Returns:
            The registered check

        Raises:
            CheckNotFoundError: If no check matches the name
        """
        with self._lock:
            key = self._resolve_key(name)
            if key is None:
                raise CheckNotFoundError(
                    f"Unknown check '{name}': no such check is registered in {self._name}",
                    context={
                        "key": name,
                        "registry": self._name,
                        "available_keys": self.list_keys(),
                    },
                )
            return self._items[key]

    def get_optional(self, name: str | None) -> Check | None:  # type: ignore[override]
        """Get a check by name, returning None if not found."""
        with self._lock:
            key = self._resolve_key(name)
            return None if key is None else self._items[key]

    def has(self, name: str | None) -> bool:  # type: ignore[override]
        """Check if a check with this name exists."""
        with self._lock:
            return self._resolve_key(name) is not None

    def list_keys(self) -> List[str]:
        """List the names of all registered checks, as registered."""
        with self._lock:
            return [check.name for check in self._items.values()]

    def clear(self) -> None:
        """Remove all checks."""
        with self._lock:
            super().clear()
            self._descriptive = None

    def descriptive_checks(self) -> Tuple[Check, ...]:
        """Checks that can describe values, in the order they are tried.

        Sorted by ascending ``describe_priority``, then by name.
        """
        with self._lock:
            if self._descriptive is None:
                self._descriptive = tuple(
                    sorted(
                        (check for check in self._items.values() if check.descriptive),
                        key=lambda check: (check.describe_priority, check.name),
                    )
                )
            return self._descriptive

    def first_descriptive_match(self, value: Any) -> Check | None:
        """Find the first descriptive check that the value passes."""
        for check in self.descriptive_checks():
            if check.evaluate(value):
                return check
        return None

    def __repr__(self) -> str:
        return f"CheckRegistry(name={self._name!r}, count={self.count()})"


def create_default_registry(name: str = "checks") -> CheckRegistry:
    """Create a registry holding every built-in check."""
    registry = CheckRegistry(name)
    registry.register_all(check_class() for check_class in SIMPLE_CHECKS + EXTENDED_CHECKS)
    logger.debug(f"Created registry {name} with {registry.count()} built-in checks")
    return registry


__all__ = ["CheckRegistry", "create_default_registry"]

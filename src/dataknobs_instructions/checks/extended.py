"""Built-in checks that take arguments from the instruction.

These are referenced with the explicit check shorthand or as implicit checks
whose value is the argument:

    {"check": "isInstanceOf", "args": [Path]}
    {"minLength": 3, "maxLength": 10}
    {"oneOf": ["red", "green", "blue"]}
"""

from __future__ import annotations

import importlib
import re
from collections.abc import Sized
from typing import Any, Sequence, Tuple

from ..exceptions import InvalidCheckArgumentError
from .base import Check
from .simple import _is_integer, _is_real


class ArgumentCheck(Check):
    """Base for checks that require a fixed number of arguments."""

    arg_count = 1

    def _arguments(self, args: Sequence[Any]) -> Tuple[Any, ...]:
        args = tuple(args)
        if len(args) != self.arg_count:
            raise InvalidCheckArgumentError(
                f"The '{self.name}' check expects {self.arg_count} argument(s) "
                f"but {len(args)} were provided",
                context={"check": self.name, "args": args},
            )
        return args

    def _argument(self, args: Sequence[Any]) -> Any:
        return self._arguments(args)[0]


def _join_choices(items: Sequence[str], conjunction: str = "or") -> str:
    if len(items) < 3:
        return f" {conjunction} ".join(items)
    return f"{', '.join(items[:-1])}, {conjunction} {items[-1]}"


class Equals(ArgumentCheck):
    """Passes when the value equals the argument.

    Booleans only ever equal booleans, so ``1`` does not equal ``True``.
    """

    checks_for = "value equal to the expected value"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        expected = self._argument(args)
        if isinstance(value, bool) != isinstance(expected, bool):
            return False
        return value == expected

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        expected = self._argument(args)
        if negate:
            return f"a value not equal to {expected!r}"
        return f"a value equal to {expected!r}"


def load_class(path: str) -> type:
    """Import a class from a dotted path such as ``"pathlib.Path"``.

    Names without a module part are looked up in :mod:`builtins`.

    Raises:
        InvalidCheckArgumentError: If the module or attribute cannot be found,
            or the attribute is not a class
    """
    module_path, _, class_name = path.rpartition(".")
    module_path = module_path or "builtins"
    try:
        module = importlib.import_module(module_path)
        cls = getattr(module, class_name)
    except (ImportError, AttributeError) as e:
        raise InvalidCheckArgumentError(
            f"Cannot load class '{path}': {e}",
            context={"class_path": path},
        ) from e
    if not isinstance(cls, type):
        raise InvalidCheckArgumentError(
            f"'{path}' does not refer to a class",
            context={"class_path": path},
        )
    return cls


class IsInstanceOf(ArgumentCheck):
    """Passes when the value is an instance of the given class.

    The argument may be a class, a tuple of classes, or a dotted import path.
    """

    checks_for = "instance of the expected class"

    def _classes(self, args: Sequence[Any]) -> Tuple[type, ...]:
        target = self._argument(args)
        if isinstance(target, (tuple, list)):
            targets = tuple(target)
        else:
            targets = (target,)
        if not targets:
            raise InvalidCheckArgumentError(
                f"The '{self.name}' check needs at least one class",
                context={"check": self.name},
            )
        classes = []
        for item in targets:
            if isinstance(item, str):
                item = load_class(item)
            if not isinstance(item, type):
                raise InvalidCheckArgumentError(
                    f"The '{self.name}' check expects classes, got {type(item).__name__}",
                    context={"check": self.name, "argument": item},
                )
            classes.append(item)
        return tuple(classes)

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, self._classes(args))

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        names = _join_choices([f"'{cls.__qualname__}'" for cls in self._classes(args)])
        if negate:
            return f"a value that is not an instance of {names}"
        return f"an instance of {names}"


class OneOf(Check):
    """Passes when the value equals one of the choices.

    Choices are either the arguments themselves or a single list, tuple or
    set argument: ``{"oneOf": ["a", "b"]}`` and
    ``{"check": "oneOf", "args": ["a", "b"]}`` are equivalent.
    """

    checks_for = "value from the allowed choices"

    def _choices(self, args: Sequence[Any]) -> Tuple[Any, ...]:
        args = tuple(args)
        if len(args) == 1 and isinstance(args[0], (list, tuple, set, frozenset)):
            args = tuple(args[0])
        if not args:
            raise InvalidCheckArgumentError(
                f"The '{self.name}' check needs at least one choice",
                context={"check": self.name},
            )
        return args

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        for choice in self._choices(args):
            if isinstance(value, bool) == isinstance(choice, bool) and value == choice:
                return True
        return False

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        choices = _join_choices([repr(choice) for choice in self._choices(args)])
        if negate:
            return f"a value that is not one of {choices}"
        return f"one of {choices}"


class Matches(ArgumentCheck):
    """Passes when the value is a string containing a match for the pattern."""

    checks_for = "string matching the expected pattern"

    def _pattern(self, args: Sequence[Any]) -> re.Pattern:
        pattern = self._argument(args)
        if isinstance(pattern, re.Pattern):
            return pattern
        if not isinstance(pattern, str):
            raise InvalidCheckArgumentError(
                f"The '{self.name}' check expects a pattern string, got {type(pattern).__name__}",
                context={"check": self.name, "argument": pattern},
            )
        try:
            return re.compile(pattern)
        except re.error as e:
            raise InvalidCheckArgumentError(
                f"Invalid regular expression for '{self.name}': {e}",
                context={"check": self.name, "pattern": pattern},
            ) from e

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        pattern = self._pattern(args)
        return isinstance(value, str) and pattern.search(value) is not None

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        pattern = self._pattern(args).pattern
        if negate:
            return f"a value not matching /{pattern}/"
        return f"a string matching /{pattern}/"


class _LengthCheck(ArgumentCheck):
    def _limit(self, args: Sequence[Any]) -> int:
        limit = self._argument(args)
        if not _is_integer(limit) or limit < 0:
            raise InvalidCheckArgumentError(
                f"The '{self.name}' check expects a non-negative integer, got {limit!r}",
                context={"check": self.name, "argument": limit},
            )
        return limit


class MinLength(_LengthCheck):
    checks_for = "value with a minimum length"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        limit = self._limit(args)
        return isinstance(value, Sized) and len(value) >= limit

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        limit = self._limit(args)
        if negate:
            return f"a value with a length less than {limit}"
        return f"a value with a length of at least {limit}"


class MaxLength(_LengthCheck):
    checks_for = "value with a maximum length"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        limit = self._limit(args)
        return isinstance(value, Sized) and len(value) <= limit

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        limit = self._limit(args)
        if negate:
            return f"a value with a length greater than {limit}"
        return f"a value with a length of at most {limit}"


class _BoundCheck(ArgumentCheck):
    def _bound(self, args: Sequence[Any]) -> Any:
        bound = self._argument(args)
        if not _is_real(bound):
            raise InvalidCheckArgumentError(
                f"The '{self.name}' check expects a real number, got {bound!r}",
                context={"check": self.name, "argument": bound},
            )
        return bound


class AtLeast(_BoundCheck):
    checks_for = "number no smaller than the bound"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        bound = self._bound(args)
        return _is_real(value) and value >= bound

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        bound = self._bound(args)
        if negate:
            return f"a value that is not a number of at least {bound}"
        return f"a number of at least {bound}"


class AtMost(_BoundCheck):
    checks_for = "number no larger than the bound"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        bound = self._bound(args)
        return _is_real(value) and value <= bound

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        bound = self._bound(args)
        if negate:
            return f"a value that is not a number of at most {bound}"
        return f"a number of at most {bound}"


EXTENDED_CHECKS = (
    Equals,
    IsInstanceOf,
    OneOf,
    Matches,
    MinLength,
    MaxLength,
    AtLeast,
    AtMost,
)

__all__ = [
    "EXTENDED_CHECKS",
    "ArgumentCheck",
    "Equals",
    "IsInstanceOf",
    "OneOf",
    "Matches",
    "MinLength",
    "MaxLength",
    "AtLeast",
    "AtMost",
    "load_class",
]

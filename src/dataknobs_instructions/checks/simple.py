"""Built-in checks that take no arguments.

Descriptive checks are also used to describe arbitrary values in failure
messages; the registry tries them in ascending ``describe_priority`` order and
uses the first one that matches, so more specific checks (``isBoolean``) must
sort before more general ones (``isInteger``, ``isNumber``, ``isObject``).
"""

from __future__ import annotations

import inspect
import math
import re
import sys
from collections.abc import Iterable, Mapping, Sequence, Sized
from datetime import date, datetime
from decimal import Decimal
from numbers import Number, Real
from typing import Any

from .base import Check

MAX_SAFE_INTEGER = 2**53 - 1


def _is_integer(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_real(value: Any) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


def _truncate(text: str, limit: int, keep: int) -> str:
    if len(text) <= limit:
        return text
    return f"{text[:keep]}..."


class IsAbsent(Check):
    checks_for = "absent value"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return value is None


class IsNone(Check):
    checks_for = "None value"
    descriptive = True
    describe_priority = 95

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return value is None


class IsBoolean(Check):
    checks_for = "boolean"
    descriptive = True
    describe_priority = 80

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, bool)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f"{base} ({value})"


class IsInteger(Check):
    checks_for = "integer"
    descriptive = True
    describe_priority = 90

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return _is_integer(value)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f"{base} ({value})"


class IsFloat(Check):
    checks_for = "float"
    descriptive = True
    describe_priority = 95

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, float)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f"{base} ({value!r})"


class IsNumber(Check):
    checks_for = "number"
    description = "Checks if a value is numeric (int, float, Decimal, Fraction, complex); booleans are excluded."
    descriptive = True
    describe_priority = 100

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, Number) and not isinstance(value, bool)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f"{base} (value={value}; type={type(value).__name__})"


class IsFinite(Check):
    checks_for = "finite number"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        if isinstance(value, Decimal):
            return value.is_finite()
        return _is_real(value) and math.isfinite(value)


class IsNaN(Check):
    checks_for = "NaN value"
    fails_for = "value other than NaN"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        if isinstance(value, Decimal):
            return value.is_nan()
        return isinstance(value, float) and math.isnan(value)


class IsSafeInteger(Check):
    checks_for = "safe integer"
    description = "Checks if a value is an integer that survives a round trip through a 64-bit float."

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return _is_integer(value) and abs(value) <= MAX_SAFE_INTEGER


class IsLength(Check):
    checks_for = "valid length"
    description = "Checks if a value is a non-negative integer no larger than sys.maxsize."

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return _is_integer(value) and 0 <= value <= sys.maxsize


class IsString(Check):
    checks_for = "string"
    descriptive = True
    describe_priority = 100

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, str)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        if len(value) == 0:
            return self._empty_description(indefinite_article)
        if len(value) <= 20:
            return f'{base} ("{value}")'
        return f'{base} ("{value[:10]}...", length={len(value)})'


class IsBytes(Check):
    checks_for = "bytes object"
    descriptive = True
    describe_priority = 100

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, (bytes, bytearray))

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        if len(value) == 0:
            return self._empty_description(indefinite_article)
        return f"{base} (length={len(value)})"


class _SizedCheck(Check):
    """Describes containers by their size."""

    size_label = "length"

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        if len(value) == 0:
            return self._empty_description(indefinite_article)
        return f"{base} ({self.size_label}={len(value)})"


class IsList(_SizedCheck):
    checks_for = "list"
    descriptive = True
    describe_priority = 100

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, list)


class IsTuple(_SizedCheck):
    checks_for = "tuple"
    descriptive = True
    describe_priority = 100

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, tuple)


class IsSet(_SizedCheck):
    checks_for = "set"
    descriptive = True
    describe_priority = 100
    size_label = "size"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, (set, frozenset))


class IsDict(Check):
    checks_for = "dict"
    descriptive = True
    describe_priority = 100

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, dict)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        keys = [str(key) for key in value]
        if not keys:
            return self._empty_description(indefinite_article)
        if len(keys) < 5:
            listed = '","'.join(keys)
            return f'{base} (keys="{listed}")'
        listed = '","'.join(keys[:3])
        return f'{base} (keys="{listed}"...; total={len(keys)})'


class IsMapping(_SizedCheck):
    checks_for = "mapping"
    descriptive = True
    describe_priority = 150
    size_label = "size"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, Mapping)


class IsSequence(Check):
    checks_for = "sequence"
    description = "Checks if a value is a sequence other than a string or bytes object."

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, Sequence) and not isinstance(value, (str, bytes, bytearray))


class IsIterable(Check):
    checks_for = "iterable"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, Iterable)


class IsEmpty(Check):
    checks_for = "empty value"
    description = "Checks if a value is None or a sized value (string, collection, mapping) of length 0."

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        if value is None:
            return True
        return isinstance(value, Sized) and len(value) == 0


class IsCallable(Check):
    checks_for = "callable"
    descriptive = True
    describe_priority = 150

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return callable(value)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f"{base} (type={type(value).__name__})"


class IsFunction(Check):
    checks_for = "function"
    descriptive = True
    describe_priority = 100

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return inspect.isfunction(value) or inspect.ismethod(value) or inspect.isbuiltin(value)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        extra = []
        if inspect.ismethod(value):
            extra.append("bound")
        if inspect.iscoroutinefunction(value):
            extra.append("async")
        name = getattr(value, "__name__", "")
        if name == "<lambda>":
            extra.append("lambda")
        elif name:
            extra.append(f"name={name}")
        if not extra:
            return base
        return f"{base} ({'; '.join(extra)})"


class IsAsyncFunction(Check):
    checks_for = "async function"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return inspect.iscoroutinefunction(value)


class IsLambda(Check):
    checks_for = "lambda function"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return inspect.isfunction(value) and value.__name__ == "<lambda>"


class IsBoundMethod(Check):
    checks_for = "bound method"

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return inspect.ismethod(value)


class IsClass(Check):
    checks_for = "class"
    descriptive = True
    describe_priority = 90

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return inspect.isclass(value)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f"{base} (name={value.__qualname__})"


class IsDatetime(Check):
    checks_for = "datetime"
    descriptive = True
    describe_priority = 101

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, datetime)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f'{base} ("{value.isoformat()}")'


class IsDate(Check):
    checks_for = "date"
    description = "Checks if a value is a date (datetimes included)."
    descriptive = True
    describe_priority = 102

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, date)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f'{base} ("{value.isoformat()}")'


class IsException(Check):
    checks_for = "exception"
    descriptive = True
    describe_priority = 102

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, BaseException)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        message = str(value)
        if not message:
            return f"{base} ({type(value).__name__} with an empty message)"
        return f'{base} ({type(value).__name__}: "{_truncate(message, 40, 35)}")'


class IsRegex(Check):
    checks_for = "compiled regular expression"
    descriptive = True
    describe_priority = 102

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return isinstance(value, re.Pattern)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f"{base} (/{_truncate(str(value.pattern), 40, 35)}/)"


class IsObject(Check):
    checks_for = "object"
    description = "Matches every value; used as the last resort when describing values."
    descriptive = True
    describe_priority = 1000

    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        return True

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        base = super().describe_target(value, indefinite_article)
        return f"{base} (type={type(value).__qualname__})"


SIMPLE_CHECKS = (
    IsAbsent,
    IsNone,
    IsBoolean,
    IsInteger,
    IsFloat,
    IsNumber,
    IsFinite,
    IsNaN,
    IsSafeInteger,
    IsLength,
    IsString,
    IsBytes,
    IsList,
    IsTuple,
    IsSet,
    IsDict,
    IsMapping,
    IsSequence,
    IsIterable,
    IsEmpty,
    IsCallable,
    IsFunction,
    IsAsyncFunction,
    IsLambda,
    IsBoundMethod,
    IsClass,
    IsDatetime,
    IsDate,
    IsException,
    IsRegex,
    IsObject,
)

__all__ = [
    "SIMPLE_CHECKS",
    "IsAbsent",
    "IsNone",
    "IsBoolean",
    "IsInteger",
    "IsFloat",
    "IsNumber",
    "IsFinite",
    "IsNaN",
    "IsSafeInteger",
    "IsLength",
    "IsString",
    "IsBytes",
    "IsList",
    "IsTuple",
    "IsSet",
    "IsDict",
    "IsMapping",
    "IsSequence",
    "IsIterable",
    "IsEmpty",
    "IsCallable",
    "IsFunction",
    "IsAsyncFunction",
    "IsLambda",
    "IsBoundMethod",
    "IsClass",
    "IsDatetime",
    "IsDate",
    "IsException",
    "IsRegex",
    "IsObject",
]

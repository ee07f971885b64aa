"""Checks: named predicates referenced by validation instructions."""

from .base import Check, with_article
from .extended import (
    EXTENDED_CHECKS,
    ArgumentCheck,
    AtLeast,
    AtMost,
    Equals,
    IsInstanceOf,
    Matches,
    MaxLength,
    MinLength,
    OneOf,
    load_class,
)
from .registry import CheckRegistry, create_default_registry
from .simple import (
    SIMPLE_CHECKS,
    IsAbsent,
    IsAsyncFunction,
    IsBoolean,
    IsBoundMethod,
    IsBytes,
    IsCallable,
    IsClass,
    IsDate,
    IsDatetime,
    IsDict,
    IsEmpty,
    IsException,
    IsFinite,
    IsFloat,
    IsFunction,
    IsInteger,
    IsIterable,
    IsLambda,
    IsLength,
    IsList,
    IsMapping,
    IsNaN,
    IsNone,
    IsNumber,
    IsObject,
    IsRegex,
    IsSafeInteger,
    IsSequence,
    IsSet,
    IsString,
    IsTuple,
)

__all__ = [
    # Base
    "Check",
    "ArgumentCheck",
    "with_article",
    "load_class",
    # Registry
    "CheckRegistry",
    "create_default_registry",
    # Simple checks
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
    # Checks with arguments
    "EXTENDED_CHECKS",
    "Equals",
    "IsInstanceOf",
    "OneOf",
    "Matches",
    "MinLength",
    "MaxLength",
    "AtLeast",
    "AtMost",
]

"""Base class for checks.

A check is a named predicate that knows how to describe itself. Checks are
registered in a :class:`~dataknobs_instructions.checks.registry.CheckRegistry`
and referenced by name from validation instructions.

Example:
    ```python
    class IsPositive(Check):
        checks_for = "positive number"

        def evaluate(self, value, args=()):
            return isinstance(value, (int, float)) and value > 0

    registry.register(IsPositive())
    validate(5, "isPositive")
    validate(5, "positive")  # the "is" prefix is optional
    ```
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Sequence

from ..exceptions import InvalidCheckArgumentError

VOWELS = "aeiou"


def with_article(phrase: str) -> str:
    """Prefix a noun phrase with "a" or "an"."""
    if not phrase:
        return phrase
    article = "an" if phrase[0].lower() in VOWELS else "a"
    return f"{article} {phrase}"


class Check(ABC):
    """Base class for all checks.

    Class attributes:
        name: Registry key; defaults to the class name with a lower-case
            first letter (``IsString`` -> ``isString``)
        checks_for: Noun phrase for values that pass (e.g. "string")
        fails_for: Noun phrase for values that fail; defaults to
            ``"non-" + checks_for``
        description: One-line summary of the check
        descriptive: Whether the check may be used to describe values
        describe_priority: Order in which descriptive checks are tried
            (lower first)
    """

    name: str = ""
    checks_for: str = ""
    fails_for: str = ""
    description: str = ""
    descriptive: bool = False
    describe_priority: int = 500

    def __init_subclass__(cls, **kwargs: Any) -> None:
        super().__init_subclass__(**kwargs)
        if "name" not in cls.__dict__:
            cls.name = cls.__name__[:1].lower() + cls.__name__[1:]
        if "fails_for" not in cls.__dict__ and cls.checks_for:
            cls.fails_for = f"non-{cls.checks_for}"
        if "description" not in cls.__dict__ and cls.checks_for:
            cls.description = f"Checks if a value is {with_article(cls.checks_for)}."

    def __init__(self, name: str | None = None):
        """Initialize the check.

        Args:
            name: Optional registry key overriding the class default
        """
        if name:
            self.name = name

    @abstractmethod
    def evaluate(self, value: Any, args: Sequence[Any] = ()) -> bool:
        """Test a value.

        Args:
            value: Value to test
            args: Additional check arguments from the instruction

        Returns:
            True if the value passes the check
        """

    def describe(self, negate: bool = False, args: Sequence[Any] = ()) -> str:
        """Describe what this check expects, for failure messages.

        Args:
            negate: Describe the negated form
            args: Check arguments from the instruction

        Returns:
            Noun phrase with an indefinite article (e.g. "an integer")
        """
        return with_article(self.fails_for if negate else self.checks_for)

    def describe_target(self, value: Any, indefinite_article: bool = False) -> str:
        """Describe a value that passes this check, with extra detail.

        Descriptive checks override this to add details such as the value
        itself or its length.
        """
        return self.simple_description(value, indefinite_article)

    def simple_description(self, value: Any, indefinite_article: bool = False) -> str:
        """Describe a value that passes this check, without detail.

        Raises:
            InvalidCheckArgumentError: If the value does not pass the check
        """
        if not self.evaluate(value):
            raise InvalidCheckArgumentError(
                f"The '{self.name}' check can only describe values that pass it",
                context={"check": self.name, "value_type": type(value).__name__},
            )
        if indefinite_article:
            return with_article(self.checks_for)
        return self.checks_for

    def _empty_description(self, indefinite_article: bool) -> str:
        if indefinite_article:
            return f"an empty {self.checks_for}"
        return f"empty {self.checks_for}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


__all__ = ["Check", "with_article"]

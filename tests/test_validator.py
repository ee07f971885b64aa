"""Tests for the validator."""

import logging

import pytest

import dataknobs_instructions
from dataknobs_instructions import (
    BYPASSED,
    Check,
    CheckNotFoundError,
    ConfigurationError,
    InvalidInstructionError,
    ValidationError,
    ValidationResult,
    Validator,
    get_default_validator,
    merge,
    validate,
)
from dataknobs_instructions.nodes import AllNode, AnyNode, CheckNode
from dataknobs_instructions.normalizer import DEFAULT_INSTRUCTION


class IsSpy(Check):
    """Records every value it evaluates."""

    checks_for = "spied value"

    def __init__(self, name=None):
        super().__init__(name)
        self.calls = []

    def evaluate(self, value, args=()):
        self.calls.append(value)
        return True


@pytest.fixture
def spy(registry):
    """A spy check registered as 'isSpy'."""
    check = IsSpy()
    registry.register(check)
    return check


class TestValidateSuccess:
    """Test values that satisfy their instructions."""

    def test_returns_same_object(self, validator):
        """Test success returns the original value."""
        value = [1, 2, 3]
        assert validator.validate(value, "isList") is value
        assert validator.validate(5, {"isInteger": True}) == 5

    def test_alternatives(self, validator):
        """Test any matching alternative is enough."""
        assert validator.validate("x", ["isInteger", "isString"]) == "x"

    def test_literal_instructions(self, validator):
        """Test literal numbers and booleans compare by equality."""
        assert validator.validate(5, 5) == 5
        assert validator.validate(False, False) is False
        assert validator.validate(True, [True, False]) is True

    def test_check_arguments(self, validator):
        """Test checks receive their arguments."""
        assert validator.validate("abc", {"isString": True, "minLength": 3}) == "abc"
        assert validator.validate(7, {"check": "oneOf", "args": [5, 6, 7]}) == 7

    def test_case_insensitive_check_names(self, validator):
        """Test check names ignore case and the 'is' prefix."""
        assert validator.validate("x", {"STRING": True}) == "x"
        assert validator.validate(5, "notString") == 5

    def test_full_result(self, validator):
        """Test the full result on success."""
        result = validator.validate(5, {"isInteger": True, "return_full_result": True})

        assert isinstance(result, ValidationResult)
        assert result.success
        assert result
        assert result.initial_value == 5
        assert result.final_value == 5
        assert result.failure is None
        assert result.instructions == AllNode((CheckNode("isInteger"),))

    def test_instructions_not_modified(self, validator):
        """Test validation leaves the instructions untouched."""
        instructions = {"isInteger": True, "default_value": 0, "or": ["isString"]}
        validator.validate("x", instructions)
        validator.validate(1.5, instructions)

        assert instructions == {"isInteger": True, "default_value": 0, "or": ["isString"]}


class TestValidateFailure:
    """Test values that fail their instructions."""

    def test_throws_by_default(self, validator):
        """Test failures raise a ValidationError."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate("x", {"isInteger": True})

        assert str(exc_info.value) == 'expected an integer but a string ("x") was provided.'

    def test_error_carries_result(self, validator):
        """Test the error exposes the failed result."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate(1.5, ["isString", "isInteger"])

        error = exc_info.value
        assert error.result is error.context["result"]
        assert not error.result.success
        assert error.result.failure.expected_text == "a string or an integer"
        assert error.result.failure.provided_text == "a float (1.5)"
        assert error.context["expected"] == "a string or an integer"

    def test_no_throw_returns_none(self, validator):
        """Test disabling throwing returns None."""
        assert validator.validate("x", {"isInteger": True, "throw_on_failure": False}) is None

    def test_default_value(self, validator):
        """Test a default value is returned instead of throwing."""
        assert validator.validate("x", {"isInteger": True, "default_value": 0}) == 0

    def test_default_value_wins_over_throw(self, validator):
        """Test a default value disables throwing even when asked to throw."""
        instructions = {"isInteger": True, "default_value": 0, "throw_on_failure": True}
        assert validator.validate("x", instructions) == 0

    def test_callable_default_value(self, validator):
        """Test callable defaults receive the result and the validator."""
        seen = {}

        def fallback(result, current_validator):
            seen["validator"] = current_validator
            return result.failure.expected_text

        assert validator.validate("x", {"isInteger": True, "default_value": fallback}) == (
            "an integer"
        )
        assert seen["validator"] is validator

    def test_callable_default_errors_propagate(self, validator):
        """Test errors from callable defaults are not wrapped."""

        def fallback(result, current_validator):
            raise RuntimeError("boom")

        with pytest.raises(RuntimeError, match="boom"):
            validator.validate("x", {"isInteger": True, "default_value": fallback})

    def test_full_result_on_failure(self, validator):
        """Test the full result on failure."""
        result = validator.validate(
            "x", {"isInteger": True, "default_value": 0, "return_full_result": True}
        )

        assert not result
        assert result.initial_value == "x"
        assert result.final_value == 0
        assert result.failure.message == 'expected an integer but a string ("x") was provided.'

    def test_conjunction_message(self, validator):
        """Test messages for several checks."""
        with pytest.raises(ValidationError) as exc_info:
            validator.validate("ab", {"isString": True, "minLength": 3})

        assert str(exc_info.value) == (
            "expected ( a string && a value with a length of at least 3 ) "
            'but a string ("ab") was provided.'
        )


class TestDefaultInstructions:
    """Test missing or empty instructions."""

    def test_none_instructions(self, validator):
        """Test missing instructions only require a non-absent value."""
        assert validator.validate(0) == 0

        with pytest.raises(ValidationError) as exc_info:
            validator.validate(None)

        assert str(exc_info.value) == "expected a non-absent value but a None value was provided."

    @pytest.mark.parametrize("instructions", [{}, [], {"all": []}, {"throw_on_failure": True}])
    def test_empty_instructions_use_default(self, validator, instructions):
        """Test instructions without checks behave like the default."""
        assert validator.validate("x", instructions) == "x"
        with pytest.raises(ValidationError, match="non-absent value"):
            validator.validate(None, instructions)

    def test_empty_dict_matches_explicit_default(self, validator):
        """Test {} behaves like {'absent': False}."""
        for value in (None, 0, "", []):
            empty = validator.validate(value, {"throw_on_failure": False, "return_full_result": True})
            explicit = validator.validate(
                value, {"absent": False, "throw_on_failure": False, "return_full_result": True}
            )
            assert empty.success == explicit.success
            assert empty.instructions == DEFAULT_INSTRUCTION


class TestAllowAbsent:
    """Test the allow_absent short circuit."""

    def test_absent_value_bypasses_checks(self, validator, spy):
        """Test no check runs for an absent value."""
        assert validator.validate(None, {"allow_absent": True, "isSpy": True}) is None
        assert spy.calls == []

    def test_bypassed_result(self, validator):
        """Test the bypassed result uses the BYPASSED sentinel."""
        result = validator.validate(
            None, {"allow_absent": True, "isInteger": True, "return_full_result": True}
        )

        assert result.success
        assert result.bypassed
        assert result.instructions is BYPASSED
        assert result.failure is BYPASSED
        assert result.final_value is None

    def test_present_value_still_checked(self, validator):
        """Test allow_absent does not affect present values."""
        with pytest.raises(ValidationError):
            validator.validate("x", {"allow_absent": True, "isInteger": True})


class TestEvaluation:
    """Test tree evaluation."""

    def test_empty_collections(self, validator):
        """Test vacuous truth and falsity of empty collections."""
        assert validator.evaluate(5, AllNode(())) is True
        assert validator.evaluate(5, AnyNode(())) is False

    def test_all_short_circuits(self, validator, spy):
        """Test a conjunction stops at the first failing child."""
        validator.validate("x", {"isInteger": True, "isSpy": True, "throw_on_failure": False})
        assert spy.calls == []

    def test_any_short_circuits(self, validator, spy):
        """Test a disjunction stops at the first passing child."""
        validator.validate("x", ["isString", "isSpy"])
        assert spy.calls == []

    def test_unknown_check(self, validator):
        """Test unknown checks raise."""
        with pytest.raises(CheckNotFoundError):
            validator.validate(5, "isMissing")

    def test_malformed_instructions(self, validator):
        """Test malformed instructions raise before evaluation."""
        with pytest.raises(InvalidInstructionError):
            validator.validate(5, {"any": "isInteger"})

    def test_execute_check(self, validator):
        """Test running a single check."""
        assert validator.execute_check(5, "integer")
        assert not validator.execute_check(5, "integer", negate=True)
        assert validator.execute_check("abc", "minLength", [2])


class TestMergeValidation:
    """Test validating against merged instructions."""

    def test_merged_conjunction(self, validator):
        """Test a value must satisfy every merged instruction."""
        merged = merge("isString", {"minLength": 3})

        assert validator.validate("abc", merged) == "abc"
        with pytest.raises(ValidationError):
            validator.validate("ab", merged)
        with pytest.raises(ValidationError):
            validator.validate(123, merged)

    def test_merged_options_apply(self, validator):
        """Test options from merged inputs take effect."""
        merged = merge("isString", {"default_value": "fallback"})
        assert validator.validate(5, merged) == "fallback"


class TestDescribeValue:
    """Test value descriptions."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("hello world", 'a string ("hello world")'),
            (5, "an integer (5)"),
            (None, "a None value"),
            ([], "an empty list"),
            ([1, 2], "a list (length=2)"),
            ({"a": 1}, 'a dict (keys="a")'),
            (True, "a boolean (True)"),
        ],
    )
    def test_describe_a(self, validator, value, expected):
        """Test descriptions with an article."""
        assert validator.describe_a(value) == expected

    def test_describe_value_without_article(self, validator):
        """Test descriptions without an article."""
        assert validator.describe_value("hello world") == 'string ("hello world")'

    def test_simple(self, validator):
        """Test descriptions without details."""
        assert validator.describe_value([1, 2], simple=True) == "list"
        assert validator.describe_value(5, indefinite_article=True, simple=True) == "an integer"

    def test_large_dict(self, validator):
        """Test large dicts only list their first keys."""
        value = {key: 0 for key in "abcdef"}
        assert validator.describe_value(value) == 'dict (keys="a","b","c"...; total=6)'


class TestNamedInstructions:
    """Test named instruction sets."""

    def test_validate_named(self):
        """Test validating against stored instructions."""
        validator = Validator(instruction_sets={"age": {"isInteger": True, "atLeast": 0}})

        assert validator.validate_named(30, "age") == 30
        with pytest.raises(ValidationError):
            validator.validate_named(-1, "age")

    def test_add_instructions(self, validator):
        """Test adding instruction sets later."""
        validator.add_instructions("name", "isString")

        assert validator.list_instruction_sets() == ["name"]
        assert validator.get_instructions("name") == "isString"

    def test_unknown_instruction_set(self, validator):
        """Test unknown names raise a ConfigurationError."""
        with pytest.raises(ConfigurationError) as exc_info:
            validator.get_instructions("missing")

        assert exc_info.value.context["name"] == "missing"


class TestDebugLogging:
    """Test the debug option."""

    def test_debug_logs_instructions_and_verdict(self, validator, caplog):
        """Test debug mode logs at INFO level."""
        with caplog.at_level(logging.INFO, logger="dataknobs_instructions.validator"):
            validator.validate(5, {"isInteger": True, "debug": True})

        assert "Validation passed" in caplog.text
        assert "isInteger" in caplog.text

    def test_no_logging_without_debug(self, validator, caplog):
        """Test nothing is logged at INFO level by default."""
        with caplog.at_level(logging.INFO, logger="dataknobs_instructions.validator"):
            validator.validate(5, {"isInteger": True})

        assert caplog.text == ""


class TestModuleFunctions:
    """Test the module-level API."""

    def test_validate(self):
        """Test the module-level validate."""
        assert validate(5, {"isInteger": True}) == 5
        assert validate("x", {"isInteger": True, "default_value": 0}) == 0

    def test_describe_functions(self):
        """Test the module-level describe helpers."""
        assert dataknobs_instructions.describe(["isString", "isInteger"]) == (
            "a string or an integer"
        )
        assert dataknobs_instructions.describe({"isString": True, "debug": True}) == "a string"
        assert dataknobs_instructions.describe_value("hello world") == 'string ("hello world")'
        assert dataknobs_instructions.describe_a(5) == "an integer (5)"

    def test_counting_functions(self):
        """Test the module-level check counting."""
        assert dataknobs_instructions.count_checks([1, 2, 3]) == 3
        assert not dataknobs_instructions.has_checks({"debug": True})

    def test_execute_check(self):
        """Test the module-level execute_check."""
        assert dataknobs_instructions.execute_check("x", "isString")

    def test_default_validator(self):
        """Test the default validator is shared."""
        assert get_default_validator() is get_default_validator()
        assert get_default_validator().registry.has("isString")

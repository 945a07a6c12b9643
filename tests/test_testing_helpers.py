"""Tests for wren.testing: assertion helpers."""

import pytest

from wren.testing import assert_field_error, assert_field_valid, assert_valid
from wren.validation.result import Invalid, Valid, ValidationResult


class TestAssertValid:
    def test_passes(self) -> None:
        assert_valid(ValidationResult(data={"a": 1}), {"a": 1})

    def test_fails_on_errors(self) -> None:
        with pytest.raises(AssertionError, match="Expected a valid result"):
            assert_valid(ValidationResult(errors={"a": "bad"}))

    def test_fails_on_data_mismatch(self) -> None:
        with pytest.raises(AssertionError, match="Expected data"):
            assert_valid(ValidationResult(data={"a": 1}), {"a": 2})


class TestAssertFieldError:
    result = ValidationResult(errors={"age": "Minimum value is 18"})

    def test_passes(self) -> None:
        assert_field_error(self.result, "age")
        assert_field_error(self.result, "age", "Minimum value is 18")

    def test_missing_field(self) -> None:
        with pytest.raises(AssertionError, match="Expected an error for 'name'"):
            assert_field_error(self.result, "name")

    def test_wrong_message(self) -> None:
        with pytest.raises(AssertionError, match="Expected 'x'"):
            assert_field_error(self.result, "age", "x")


class TestAssertFieldValid:
    def test_passes(self) -> None:
        assert_field_valid(Valid(3), 3)
        assert_field_valid(Valid(None))

    def test_invalid_outcome(self) -> None:
        with pytest.raises(AssertionError, match="Must be a number"):
            assert_field_valid(Invalid("Must be a number", "shape"))

    def test_wrong_value(self) -> None:
        with pytest.raises(AssertionError, match="Expected value"):
            assert_field_valid(Valid(3), 4)

"""Assertion helpers for tests that validate answers against wren forms.

Each assertion produces a clear error message on failure.
"""

from typing import Any

from wren.validation.result import FieldOutcome, Invalid, Valid, ValidationResult


def assert_valid(result: ValidationResult, data: dict[str, Any] | None = None) -> None:
    """Assert the answer set passed, optionally with exact normalized *data*."""
    assert result.is_valid, f"Expected a valid result, got errors: {result.errors!r}"
    if data is not None:
        assert result.data == data, f"Expected data {data!r}, got {result.data!r}"


def assert_field_error(result: ValidationResult, field_id: str, message: str | None = None) -> None:
    """Assert *field_id* failed, optionally with exactly *message*."""
    assert field_id in result.errors, (
        f"Expected an error for {field_id!r}.\nErrors: {result.errors!r}"
    )
    if message is not None:
        actual = result.errors[field_id]
        assert actual == message, f"Expected {message!r} for {field_id!r}, got {actual!r}"


def assert_field_valid(outcome: FieldOutcome, value: Any = ...) -> None:
    """Assert a single-field outcome is ``Valid``, optionally holding *value*."""
    assert isinstance(outcome, Valid), (
        f"Expected a valid outcome, got {outcome.message!r}"
        if isinstance(outcome, Invalid)
        else f"Expected a valid outcome, got {outcome!r}"
    )
    if value is not ...:
        assert outcome.value == value, f"Expected value {value!r}, got {outcome.value!r}"

"""Validation outcomes: immutable containers for normalized values or errors."""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True, slots=True)
class Valid:
    """A field passed every active rule. ``value`` is the normalized answer."""

    value: Any

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Invalid:
    """A field failed. ``rule`` names the first rule that rejected it."""

    message: str
    rule: str = ""

    @property
    def ok(self) -> bool:
        return False


type FieldOutcome = Valid | Invalid


@dataclass(frozen=True, slots=True)
class ValidationResult:
    """The outcome of validating an answer set against a compiled form.

    ``is_valid`` is True when there are no errors.
    The result is falsy when invalid, so you can write::

        result = validator.validate(answers)
        if not result:
            show(result.errors)

    ``data`` holds the normalized answers for every field, and is only
    populated when there are no errors.

    ``errors`` maps field ids to a single message each::

        {"name": "Name is required",
         "email": "Invalid email address"}
    """

    data: dict[str, Any] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        """True if validation passed with no errors."""
        return not self.errors

    def __bool__(self) -> bool:
        """Falsy when invalid, so ``if not result:`` reads naturally."""
        return self.is_valid

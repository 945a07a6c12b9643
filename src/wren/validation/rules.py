"""Built-in field rules.

Each rule is a named callable with the signature::

    def check(value: Any) -> str | None:
        '''Return error message, or None if valid.'''

Rules run on *normalized* values (see ``wren.validation.normalize``), so
a number rule sees ``int | float | None`` and a checkbox rule sees a
``list``. Parameterized rules are factory functions that return a rule::

    def max_length(n: int) -> Rule:
        def check(value: str) -> str | None:
            if len(value) > n:
                return f"Must be at most {n} characters"
            return None
        return Rule("max_length", check)

Rules are total: they never raise, whatever they are handed. Rules for
numbers, dates and single choices let an absent value (``None``) pass;
only the matching ``required_*`` rule rejects it.
"""

import re
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date
from typing import Any

# Type alias for a rule's check function
type Check = Callable[[Any], str | None]


@dataclass(frozen=True, slots=True)
class Rule:
    """A single named validity check."""

    name: str
    check: Check

    def __call__(self, value: Any) -> str | None:
        return self.check(value)


def format_number(n: int | float) -> str:
    """Render a bound for a message: ``10.0`` reads as ``10``."""
    if isinstance(n, float) and n.is_integer():
        return str(int(n))
    return str(n)


def _length(value: Any) -> int:
    return len(value) if isinstance(value, str) else 0


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


# ---------------------------------------------------------------------------
# Presence
# ---------------------------------------------------------------------------


def required_text(label: str) -> Rule:
    """Text must be at least one character long."""
    message = f"{label} is required"

    def check(value: Any) -> str | None:
        if _length(value) < 1:
            return message
        return None

    return Rule("required", check)


def required_value(label: str) -> Rule:
    """A scalar answer (number, date, single choice) must be present."""
    message = f"{label} is required"

    def check(value: Any) -> str | None:
        if value is None:
            return message
        return None

    return Rule("required", check)


def required_selection() -> Rule:
    """A list answer must hold at least one selection."""

    def check(value: Any) -> str | None:
        if not isinstance(value, list) or not value:
            return "At least one answer is required"
        return None

    return Rule("required", check)


# ---------------------------------------------------------------------------
# Length
# ---------------------------------------------------------------------------


def min_length(n: int) -> Rule:
    """String must be at least *n* characters."""

    def check(value: Any) -> str | None:
        if _length(value) < n:
            return f"Must be at least {n} characters"
        return None

    return Rule("min_length", check)


def max_length(n: int) -> Rule:
    """String must be at most *n* characters."""

    def check(value: Any) -> str | None:
        if _length(value) > n:
            return f"Must be at most {n} characters"
        return None

    return Rule("max_length", check)


# ---------------------------------------------------------------------------
# Format
# ---------------------------------------------------------------------------

# Basic email pattern: structure only, not deliverability
_EMAIL_RE = re.compile(r"[a-zA-Z0-9._%+\-]+@[a-zA-Z0-9.\-]+\.[a-zA-Z]{2,}")


def _email(value: Any) -> str | None:
    if not isinstance(value, str) or not _EMAIL_RE.fullmatch(value):
        return "Invalid email address"
    return None


email = Rule("email", _email)


def _includes(name: str, pattern: str, message: str) -> Rule:
    compiled = re.compile(pattern)

    def check(value: Any) -> str | None:
        if not isinstance(value, str) or not compiled.search(value):
            return message
        return None

    return Rule(name, check)


includes_number = _includes("include_number", r"[0-9]", "Must include a number")
includes_lowercase = _includes("include_lowercase", r"[a-z]", "Must include a lowercase letter")
includes_uppercase = _includes("include_uppercase", r"[A-Z]", "Must include an uppercase letter")
includes_special_char = _includes(
    "include_special_char", r"[^a-zA-Z0-9]", "Must include a special character"
)

DATE_FORMAT_MESSAGE = "Date must be in YYYY-MM-DD format"
_DATE_RE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def is_iso_date(value: Any) -> bool:
    """True for a real calendar date written as ``YYYY-MM-DD``."""
    if not isinstance(value, str) or not _DATE_RE.fullmatch(value):
        return False
    try:
        date.fromisoformat(value)
    except ValueError:
        return False
    return True


def _date_format(value: Any) -> str | None:
    if value is not None and not is_iso_date(value):
        return DATE_FORMAT_MESSAGE
    return None


date_format = Rule("date_format", _date_format)


# ---------------------------------------------------------------------------
# Range
# ---------------------------------------------------------------------------


def min_value(n: int | float) -> Rule:
    """Number must be at least *n*."""
    message = f"Minimum value is {format_number(n)}"

    def check(value: Any) -> str | None:
        if _is_number(value) and value < n:
            return message
        return None

    return Rule("min", check)


def max_value(n: int | float) -> Rule:
    """Number must be at most *n*."""
    message = f"Maximum value is {format_number(n)}"

    def check(value: Any) -> str | None:
        if _is_number(value) and value > n:
            return message
        return None

    return Rule("max", check)


def _integer(value: Any) -> str | None:
    if isinstance(value, float) and not value.is_integer():
        return "Must be an integer"
    return None


integer = Rule("integer", _integer)


# ISO dates sort lexicographically in chronological order
def min_date(bound: str) -> Rule:
    """Date must be on or after *bound*."""
    message = f"Minimum date is {bound}"

    def check(value: Any) -> str | None:
        if isinstance(value, str) and value < bound:
            return message
        return None

    return Rule("min_date", check)


def max_date(bound: str) -> Rule:
    """Date must be on or before *bound*."""
    message = f"Maximum date is {bound}"

    def check(value: Any) -> str | None:
        if isinstance(value, str) and value > bound:
            return message
        return None

    return Rule("max_date", check)


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------

INVALID_OPTION_MESSAGE = "Must select a valid option"


def one_of(options: Sequence[Any]) -> Rule:
    """A single selection must be one of *options* (absent passes)."""
    allowed = tuple(options)

    def check(value: Any) -> str | None:
        if value is not None and value not in allowed:
            return INVALID_OPTION_MESSAGE
        return None

    return Rule("one_of", check)


def all_of(options: Sequence[Any]) -> Rule:
    """Every selection in a list must be one of *options*."""
    allowed = tuple(options)

    def check(value: Any) -> str | None:
        if not isinstance(value, list) or any(v not in allowed for v in value):
            return INVALID_OPTION_MESSAGE
        return None

    return Rule("all_of", check)

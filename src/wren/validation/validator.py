"""Compiled validators: the immutable output of the form compiler.

A ``FieldValidator`` is one field's normalizer plus its ordered rule
chain. A ``FormValidator`` is the set of field validators for one form
definition, keyed by field id. Neither holds mutable state, so one
instance can be shared by any number of concurrent callers.
"""

from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any

from wren.validation.result import FieldOutcome, Invalid, ValidationResult
from wren.validation.rules import Rule


def _is_empty(value: Any) -> bool:
    return value is None or value == "" or value == []


@dataclass(frozen=True, slots=True)
class FieldValidator:
    """One field's compiled rule chain.

    Calling it normalizes the raw value, then runs the rules in order
    and stops at the first failure. An optional field with an empty
    answer is valid before any rule runs; for a required field the
    ``required`` rule is last in ``rules``.
    """

    field_id: str
    kind: str
    required: bool
    normalize: Callable[[Any], FieldOutcome]
    rules: tuple[Rule, ...] = ()

    @property
    def rule_names(self) -> tuple[str, ...]:
        return tuple(rule.name for rule in self.rules)

    def __call__(self, raw: Any) -> FieldOutcome:
        outcome = self.normalize(raw)
        if isinstance(outcome, Invalid):
            return outcome

        value = outcome.value
        if not self.required and _is_empty(value):
            return outcome

        for rule in self.rules:
            message = rule(value)
            if message is not None:
                return Invalid(message, rule.name)
        return outcome


class FormValidator:
    """Validates answer sets for one compiled form definition.

    Usage::

        validator = compile_form(definition)
        result = validator.validate({"email": "a@b.com", "age": "42"})
        if not result:
            ...  # result.errors == {"age": "Maximum value is 10"}
    """

    __slots__ = ("_fields", "form_id")

    def __init__(self, form_id: str, fields: Mapping[str, FieldValidator]) -> None:
        self.form_id = form_id
        self._fields: Mapping[str, FieldValidator] = MappingProxyType(dict(fields))

    @property
    def fields(self) -> Mapping[str, FieldValidator]:
        """Read-only mapping of field id to its compiled validator."""
        return self._fields

    @property
    def field_ids(self) -> tuple[str, ...]:
        return tuple(self._fields)

    def __contains__(self, field_id: object) -> bool:
        return field_id in self._fields

    def __iter__(self) -> Iterator[str]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields)

    def __repr__(self) -> str:
        return f"FormValidator({self.form_id!r}, {len(self._fields)} fields)"

    def validate_field(self, field_id: str, raw_value: Any) -> FieldOutcome:
        """Validate a single answer, exactly as ``validate`` would.

        Raises:
            KeyError: If the form has no field with *field_id*.
        """
        return self._fields[field_id](raw_value)

    def validate(self, raw_answers: Mapping[str, Any]) -> ValidationResult:
        """Validate a full answer set.

        Every field is checked; a missing key counts as no answer and
        keys the form does not define are ignored. ``data`` is only
        populated when every field passed.
        """
        if not isinstance(raw_answers, Mapping):
            raw_answers = {}

        errors: dict[str, str] = {}
        cleaned: dict[str, Any] = {}

        for field_id, check in self._fields.items():
            outcome = check(raw_answers.get(field_id))
            if isinstance(outcome, Invalid):
                errors[field_id] = outcome.message
            else:
                cleaned[field_id] = outcome.value

        if errors:
            return ValidationResult(errors=errors)
        return ValidationResult(data=cleaned)

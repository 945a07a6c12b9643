"""Field patches: the closed set of edits the form builder can make.

Each patch is a frozen dataclass that knows which field kinds it applies
to and checks its own value on construction, so an ill-typed edit is
rejected at the boundary instead of being written into a descriptor::

    field = SetMaxLength(120).apply(field)
    field = SetPassword(True).apply(field)   # also clears is_email

The builder UI speaks in persisted keys (``"minLength"``, ``"isEmail"``);
``parse_patch`` turns one of those ``(key, value)`` pairs into a patch
for a given field kind.
"""

import math
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Any, ClassVar

from wren.errors import PatchError
from wren.fields import (
    FIELD_TYPES,
    CheckboxField,
    DateField,
    FieldDescriptor,
    NumberField,
    OptionValue,
    RadioField,
    SelectField,
    TextAreaField,
    TextField,
)
from wren.validation.rules import is_iso_date

_ALL_KINDS: tuple[type[FieldDescriptor], ...] = tuple(FIELD_TYPES.values())
_CHOICE_KINDS = (CheckboxField, RadioField, SelectField)
_LENGTH_KINDS = (TextField, TextAreaField)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _require(ok: bool, message: str) -> None:
    if not ok:
        raise PatchError(message)


@dataclass(frozen=True, slots=True)
class Patch:
    """Base for all field patches."""

    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = ()

    def changes(self) -> dict[str, Any]:
        raise NotImplementedError

    def apply[F: FieldDescriptor](self, field: F) -> F:
        """Return a copy of *field* with this patch applied.

        Raises:
            PatchError: If the patch does not apply to the field's kind.
        """
        if not isinstance(field, self.applies_to):
            kind = field.kind or "unknown"
            msg = f"{type(self).__name__} does not apply to {kind} field {field.id!r}"
            raise PatchError(msg)
        return replace(field, **self.changes())


# ---------------------------------------------------------------------------
# Common
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SetLabel(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = _ALL_KINDS

    value: str

    def __post_init__(self) -> None:
        _require(isinstance(self.value, str), "label must be a string")

    def changes(self) -> dict[str, Any]:
        return {"label": self.value}


@dataclass(frozen=True, slots=True)
class SetRequired(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = _ALL_KINDS

    value: bool

    def __post_init__(self) -> None:
        _require(isinstance(self.value, bool), "required must be a boolean")

    def changes(self) -> dict[str, Any]:
        return {"required": self.value}


@dataclass(frozen=True, slots=True)
class SetPlaceholder(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (
        TextField,
        TextAreaField,
        NumberField,
    )

    value: str

    def __post_init__(self) -> None:
        _require(isinstance(self.value, str), "placeholder must be a string")

    def changes(self) -> dict[str, Any]:
        return {"placeholder": self.value}


# ---------------------------------------------------------------------------
# Text and text area
# ---------------------------------------------------------------------------


def _check_length(name: str, value: Any) -> None:
    ok = value is None or (isinstance(value, int) and not isinstance(value, bool) and value >= 0)
    _require(ok, f"{name} must be a non-negative integer or unset")


@dataclass(frozen=True, slots=True)
class SetMinLength(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = _LENGTH_KINDS

    value: int | None

    def __post_init__(self) -> None:
        _check_length("minLength", self.value)

    def changes(self) -> dict[str, Any]:
        return {"min_length": self.value}


@dataclass(frozen=True, slots=True)
class SetMaxLength(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = _LENGTH_KINDS

    value: int | None

    def __post_init__(self) -> None:
        _check_length("maxLength", self.value)

    def changes(self) -> dict[str, Any]:
        return {"max_length": self.value}


@dataclass(frozen=True, slots=True)
class SetEmail(Patch):
    """Toggle email format. Enabling it turns password mode off."""

    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (TextField,)

    value: bool

    def __post_init__(self) -> None:
        _require(isinstance(self.value, bool), "isEmail must be a boolean")

    def changes(self) -> dict[str, Any]:
        if self.value:
            return {"is_email": True, "is_password": False}
        return {"is_email": False}


@dataclass(frozen=True, slots=True)
class SetPassword(Patch):
    """Toggle password mode. Enabling it turns email format off."""

    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (TextField,)

    value: bool

    def __post_init__(self) -> None:
        _require(isinstance(self.value, bool), "isPassword must be a boolean")

    def changes(self) -> dict[str, Any]:
        if self.value:
            return {"is_password": True, "is_email": False}
        return {"is_password": False}


class PasswordRule(StrEnum):
    """Password composition flags, named by descriptor attribute."""

    NUMBER = "include_number"
    LOWERCASE = "include_lowercase"
    UPPERCASE = "include_uppercase"
    SPECIAL_CHAR = "include_special_char"


@dataclass(frozen=True, slots=True)
class SetPasswordRule(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (TextField,)

    rule: PasswordRule
    value: bool

    def __post_init__(self) -> None:
        _require(isinstance(self.rule, PasswordRule), "unknown password rule")
        _require(isinstance(self.value, bool), f"{self.rule} must be a boolean")

    def changes(self) -> dict[str, Any]:
        return {str(self.rule): self.value}


# ---------------------------------------------------------------------------
# Choice
# ---------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class SetOptions(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = _CHOICE_KINDS

    value: tuple[OptionValue, ...]

    def __post_init__(self) -> None:
        ok = isinstance(self.value, tuple) and all(
            isinstance(v, str) or _is_number(v) for v in self.value
        )
        _require(ok, "options must be a list of strings or numbers")

    def changes(self) -> dict[str, Any]:
        return {"options": self.value}


@dataclass(frozen=True, slots=True)
class SetMultiple(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (SelectField,)

    value: bool

    def __post_init__(self) -> None:
        _require(isinstance(self.value, bool), "isMultipleSelectAllowed must be a boolean")

    def changes(self) -> dict[str, Any]:
        return {"multiple": self.value}


# ---------------------------------------------------------------------------
# Number
# ---------------------------------------------------------------------------


def _check_bound(name: str, value: Any) -> None:
    ok = value is None or (_is_number(value) and math.isfinite(value))
    _require(ok, f"{name} must be a finite number or unset")


@dataclass(frozen=True, slots=True)
class SetMin(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (NumberField,)

    value: int | float | None

    def __post_init__(self) -> None:
        _check_bound("minValue", self.value)

    def changes(self) -> dict[str, Any]:
        return {"min": self.value}


@dataclass(frozen=True, slots=True)
class SetMax(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (NumberField,)

    value: int | float | None

    def __post_init__(self) -> None:
        _check_bound("maxValue", self.value)

    def changes(self) -> dict[str, Any]:
        return {"max": self.value}


@dataclass(frozen=True, slots=True)
class SetDecimalAllowed(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (NumberField,)

    value: bool

    def __post_init__(self) -> None:
        _require(isinstance(self.value, bool), "isDecimalAllowed must be a boolean")

    def changes(self) -> dict[str, Any]:
        return {"is_decimal_allowed": self.value}


# ---------------------------------------------------------------------------
# Date
# ---------------------------------------------------------------------------


def _check_date(name: str, value: Any) -> None:
    _require(value is None or is_iso_date(value), f"{name} must be a YYYY-MM-DD date or unset")


@dataclass(frozen=True, slots=True)
class SetMinDate(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (DateField,)

    value: str | None

    def __post_init__(self) -> None:
        _check_date("minDate", self.value)

    def changes(self) -> dict[str, Any]:
        return {"min_date": self.value}


@dataclass(frozen=True, slots=True)
class SetMaxDate(Patch):
    applies_to: ClassVar[tuple[type[FieldDescriptor], ...]] = (DateField,)

    value: str | None

    def __post_init__(self) -> None:
        _check_date("maxDate", self.value)

    def changes(self) -> dict[str, Any]:
        return {"max_date": self.value}


# ---------------------------------------------------------------------------
# Parsing from persisted keys
# ---------------------------------------------------------------------------


def _options(value: Any) -> Any:
    return tuple(value) if isinstance(value, list) else value


def _blank_to_none(value: Any) -> Any:
    # The builder writes "" when a bound or date is cleared
    return None if value == "" else value


_KEY_PARSERS: dict[str, Any] = {
    "label": SetLabel,
    "required": SetRequired,
    "placeholder": SetPlaceholder,
    "minLength": lambda v: SetMinLength(_blank_to_none(v)),
    "maxLength": lambda v: SetMaxLength(_blank_to_none(v)),
    "isEmail": SetEmail,
    "isPassword": SetPassword,
    "includeNumber": lambda v: SetPasswordRule(PasswordRule.NUMBER, v),
    "includeLowercase": lambda v: SetPasswordRule(PasswordRule.LOWERCASE, v),
    "includeUppercase": lambda v: SetPasswordRule(PasswordRule.UPPERCASE, v),
    "includeSpecialChar": lambda v: SetPasswordRule(PasswordRule.SPECIAL_CHAR, v),
    "options": lambda v: SetOptions(_options(v)),
    "isMultipleSelectAllowed": SetMultiple,
    "multiple": SetMultiple,
    "minValue": lambda v: SetMin(_blank_to_none(v)),
    "min": lambda v: SetMin(_blank_to_none(v)),
    "maxValue": lambda v: SetMax(_blank_to_none(v)),
    "max": lambda v: SetMax(_blank_to_none(v)),
    "isDecimalAllowed": SetDecimalAllowed,
    "minDate": lambda v: SetMinDate(_blank_to_none(v)),
    "maxDate": lambda v: SetMaxDate(_blank_to_none(v)),
}


def parse_patch(kind: str, key: str, value: Any) -> Patch:
    """Build the typed patch for a persisted ``(key, value)`` edit.

    Args:
        kind: The target field's kind (``"text"``, ``"number"``, ...).
        key: A persisted parameter key such as ``"minLength"``.
        value: The new, JSON-compatible value.

    Raises:
        PatchError: If the key is unknown, does not belong to *kind*, or
            the value has the wrong type.
    """
    factory = _KEY_PARSERS.get(key)
    if factory is None:
        msg = f"Unknown field key {key!r}"
        raise PatchError(msg)
    patch = factory(value)
    target = FIELD_TYPES.get(kind)
    if target is None or target not in patch.applies_to:
        msg = f"Key {key!r} does not apply to {kind} fields"
        raise PatchError(msg)
    return patch

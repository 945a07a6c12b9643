"""Field descriptors: one form question's kind plus its constraint parameters.

Descriptors are frozen dataclasses. The editor replaces them instead of
mutating them, and the compiler only ever reads them::

    from wren.fields import TextField

    email = TextField(id="email", label="Email", required=True, is_email=True)

The ``error`` slot holds the last message shown next to the control. It
is excluded from equality and from the compiled identity of a field.
"""

import json
import uuid
from dataclasses import dataclass, field, fields
from enum import StrEnum
from typing import Any, ClassVar

from wren.errors import UnknownFieldKindError

type OptionValue = str | int | float


class FieldKind(StrEnum):
    """The closed set of field kinds a form may contain."""

    TEXT = "text"
    CHECKBOX = "checkbox"
    RADIO = "radio"
    SELECT = "select"
    TEXTAREA = "textarea"
    NUMBER = "number"
    DATE = "date"


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldDescriptor:
    """Attributes shared by every field kind."""

    kind: ClassVar[str] = ""

    id: str
    label: str = ""
    required: bool = False
    error: str | None = field(default=None, compare=False)

    @property
    def list_shaped(self) -> bool:
        """True when the answer is a list of selections rather than a scalar."""
        return False

    def identity(self) -> tuple[Any, ...]:
        """Hashable identity: kind plus every parameter except ``error``."""
        params = tuple((f.name, getattr(self, f.name)) for f in fields(self) if f.name != "error")
        return (self.kind, params)


@dataclass(frozen=True, slots=True, kw_only=True)
class TextField(FieldDescriptor):
    kind: ClassVar[str] = FieldKind.TEXT

    placeholder: str = ""
    min_length: int | None = None
    max_length: int | None = None
    is_email: bool = False
    is_password: bool = False
    include_number: bool = False
    include_lowercase: bool = False
    include_uppercase: bool = False
    include_special_char: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class CheckboxField(FieldDescriptor):
    kind: ClassVar[str] = FieldKind.CHECKBOX

    options: tuple[OptionValue, ...] = ()

    @property
    def list_shaped(self) -> bool:
        return True


@dataclass(frozen=True, slots=True, kw_only=True)
class RadioField(FieldDescriptor):
    kind: ClassVar[str] = FieldKind.RADIO

    options: tuple[OptionValue, ...] = ()


@dataclass(frozen=True, slots=True, kw_only=True)
class SelectField(FieldDescriptor):
    kind: ClassVar[str] = FieldKind.SELECT

    options: tuple[OptionValue, ...] = ()
    multiple: bool = False

    @property
    def list_shaped(self) -> bool:
        return self.multiple


@dataclass(frozen=True, slots=True, kw_only=True)
class TextAreaField(FieldDescriptor):
    kind: ClassVar[str] = FieldKind.TEXTAREA

    placeholder: str = ""
    min_length: int | None = None
    max_length: int | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class NumberField(FieldDescriptor):
    kind: ClassVar[str] = FieldKind.NUMBER

    placeholder: str = ""
    min: int | float | None = None
    max: int | float | None = None
    is_decimal_allowed: bool = False


@dataclass(frozen=True, slots=True, kw_only=True)
class DateField(FieldDescriptor):
    kind: ClassVar[str] = FieldKind.DATE

    min_date: str | None = None  # YYYY-MM-DD
    max_date: str | None = None  # YYYY-MM-DD


@dataclass(frozen=True, slots=True, kw_only=True)
class UnknownField(FieldDescriptor):
    """A persisted field whose kind tag is not recognized.

    Keeps the raw tag and parameters so the definition round-trips
    without loss. Compiling it raises ``UnknownFieldKindError``.
    """

    kind_tag: str = ""
    params: dict[str, Any] = field(default_factory=dict)

    def identity(self) -> tuple[Any, ...]:
        return (
            self.kind_tag,
            (("id", self.id), ("label", self.label), ("required", self.required)),
            json.dumps(self.params, sort_keys=True, default=str),
        )


FIELD_TYPES: dict[str, type[FieldDescriptor]] = {
    FieldKind.TEXT: TextField,
    FieldKind.CHECKBOX: CheckboxField,
    FieldKind.RADIO: RadioField,
    FieldKind.SELECT: SelectField,
    FieldKind.TEXTAREA: TextAreaField,
    FieldKind.NUMBER: NumberField,
    FieldKind.DATE: DateField,
}

# Defaults the form builder gives a freshly added field
_NEW_FIELD_DEFAULTS: dict[str, dict[str, Any]] = {
    FieldKind.TEXT: {"min_length": 0, "max_length": 3000, "include_number": True},
    FieldKind.TEXTAREA: {"min_length": 0, "max_length": 3000},
    FieldKind.NUMBER: {"min": 0, "max": 10000},
}


def new_field(kind: str, field_id: str | None = None) -> FieldDescriptor:
    """Create a blank descriptor of *kind* with the builder's defaults.

    Args:
        kind: One of the ``FieldKind`` values.
        field_id: Explicit id; a fresh uuid4 string when omitted.

    Raises:
        UnknownFieldKindError: If *kind* is not a known field kind.
    """
    fid = field_id or str(uuid.uuid4())
    cls = FIELD_TYPES.get(kind)
    if cls is None:
        raise UnknownFieldKindError(fid, kind)
    return cls(id=fid, **_NEW_FIELD_DEFAULTS.get(kind, {}))

"""Form definition encoding: JSON-compatible dicts in the store's key format.

A stored form looks like::

    {
        "id": "f1",
        "name": "Signup",
        "formFields": [
            {"id": "email", "label": "Email", "type": "text",
             "required": true, "isEmail": true}
        ]
    }

Keys are camelCase, as the form builder writes them. Unset parameters
are omitted. A field whose ``type`` is not recognized is kept as an
``UnknownField`` so loading and dumping never loses data.
"""

import json
import math
from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Any

from wren.definition import DEFAULT_FORM_NAME, FormDefinition
from wren.errors import DefinitionError
from wren.fields import (
    FIELD_TYPES,
    CheckboxField,
    DateField,
    FieldDescriptor,
    NumberField,
    RadioField,
    SelectField,
    TextAreaField,
    TextField,
    UnknownField,
)

_COMMON_KEYS = frozenset({"id", "label", "type", "required", "error"})

# Short spellings accepted on load
_ALIASES = {
    "min": "minValue",
    "max": "maxValue",
    "multiple": "isMultipleSelectAllowed",
}


def _fail(field_id: str, key: str, expected: str) -> DefinitionError:
    return DefinitionError(f"Field {field_id!r}: {key!r} must be {expected}")


def _string(fid: str, key: str, value: Any) -> str:
    if not isinstance(value, str):
        raise _fail(fid, key, "a string")
    return value


def _boolean(fid: str, key: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise _fail(fid, key, "a boolean")
    return value


def _length(fid: str, key: str, value: Any) -> int:
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise _fail(fid, key, "a non-negative integer")
    return value


def _number(fid: str, key: str, value: Any) -> int | float:
    if isinstance(value, bool) or not isinstance(value, (int, float)) or not math.isfinite(value):
        raise _fail(fid, key, "a finite number")
    return value


def _option_list(fid: str, key: str, value: Any) -> tuple[Any, ...]:
    if not isinstance(value, list) or not all(
        isinstance(v, (str, int, float)) and not isinstance(v, bool) for v in value
    ):
        raise _fail(fid, key, "a list of strings or numbers")
    return tuple(value)


type _Converter = Callable[[str, str, Any], Any]

# A cleared bound is stored as ""
_BLANK_UNSETS: tuple[_Converter, ...] = (_length, _number)

# (attribute, persisted key, converter) per field type
_PARAMS: dict[type[FieldDescriptor], tuple[tuple[str, str, _Converter], ...]] = {
    TextField: (
        ("placeholder", "placeholder", _string),
        ("min_length", "minLength", _length),
        ("max_length", "maxLength", _length),
        ("is_email", "isEmail", _boolean),
        ("is_password", "isPassword", _boolean),
        ("include_number", "includeNumber", _boolean),
        ("include_lowercase", "includeLowercase", _boolean),
        ("include_uppercase", "includeUppercase", _boolean),
        ("include_special_char", "includeSpecialChar", _boolean),
    ),
    CheckboxField: (("options", "options", _option_list),),
    RadioField: (("options", "options", _option_list),),
    SelectField: (
        ("options", "options", _option_list),
        ("multiple", "isMultipleSelectAllowed", _boolean),
    ),
    TextAreaField: (
        ("placeholder", "placeholder", _string),
        ("min_length", "minLength", _length),
        ("max_length", "maxLength", _length),
    ),
    NumberField: (
        ("placeholder", "placeholder", _string),
        ("min", "minValue", _number),
        ("max", "maxValue", _number),
        ("is_decimal_allowed", "isDecimalAllowed", _boolean),
    ),
    DateField: (
        ("min_date", "minDate", _string),
        ("max_date", "maxDate", _string),
    ),
}


# ---------------------------------------------------------------------------
# Fields
# ---------------------------------------------------------------------------


def field_from_dict(data: Mapping[str, Any]) -> FieldDescriptor:
    """Decode one stored field.

    Raises:
        DefinitionError: If the field is not an object, has no string id,
            or a known parameter has the wrong type.
    """
    if not isinstance(data, Mapping):
        msg = f"Field must be an object, got {type(data).__name__}"
        raise DefinitionError(msg)
    fid = data.get("id")
    if not isinstance(fid, str) or not fid:
        msg = "Field is missing a string 'id'"
        raise DefinitionError(msg)

    kind = data.get("type")
    if not isinstance(kind, str):
        raise _fail(fid, "type", "a string")

    common: dict[str, Any] = {
        "id": fid,
        "label": _string(fid, "label", data.get("label", "")),
        "required": _boolean(fid, "required", data.get("required", False)),
    }
    error = data.get("error")
    if error is not None:
        common["error"] = _string(fid, "error", error)

    cls = FIELD_TYPES.get(kind)
    if cls is None:
        params = {k: v for k, v in data.items() if k not in _COMMON_KEYS}
        return UnknownField(kind_tag=kind, params=params, **common)

    values = {_ALIASES.get(k, k): v for k, v in data.items()}
    for attr, key, convert in _PARAMS[cls]:
        value = values.get(key)
        if value is None or (value == "" and convert in _BLANK_UNSETS):
            continue
        common[attr] = convert(fid, key, value)
    return cls(**common)


def field_to_dict(field: FieldDescriptor) -> dict[str, Any]:
    """Encode one field in the store's key format."""
    out: dict[str, Any] = {"id": field.id, "label": field.label}
    if isinstance(field, UnknownField):
        out["type"] = field.kind_tag
        out["required"] = field.required
        out.update(field.params)
    else:
        out["type"] = str(field.kind)
        out["required"] = field.required
        for attr, key, _ in _PARAMS[type(field)]:
            value = getattr(field, attr)
            if value is None:
                continue
            out[key] = list(value) if isinstance(value, tuple) else value
    if field.error is not None:
        out["error"] = field.error
    return out


# ---------------------------------------------------------------------------
# Forms
# ---------------------------------------------------------------------------


def form_from_dict(data: Mapping[str, Any]) -> FormDefinition:
    """Decode a stored form definition.

    Raises:
        DefinitionError: If the data is not a well-formed definition.
    """
    if not isinstance(data, Mapping):
        msg = f"Form definition must be an object, got {type(data).__name__}"
        raise DefinitionError(msg)
    form_id = data.get("id")
    if not isinstance(form_id, str):
        msg = "Form definition is missing a string 'id'"
        raise DefinitionError(msg)
    name = data.get("name", DEFAULT_FORM_NAME)
    if not isinstance(name, str):
        msg = f"Form {form_id!r}: 'name' must be a string"
        raise DefinitionError(msg)

    raw_fields = data.get("formFields", data.get("fields", []))
    if not isinstance(raw_fields, list):
        msg = f"Form {form_id!r}: 'formFields' must be a list"
        raise DefinitionError(msg)
    return FormDefinition(
        id=form_id,
        name=name,
        fields=tuple(field_from_dict(f) for f in raw_fields),
    )


def form_to_dict(definition: FormDefinition) -> dict[str, Any]:
    """Encode a form definition in the store's key format."""
    return {
        "id": definition.id,
        "name": definition.name,
        "formFields": [field_to_dict(f) for f in definition.fields],
    }


def loads(text: str | bytes) -> FormDefinition:
    """Parse a JSON document into a ``FormDefinition``."""
    try:
        data = json.loads(text)
    except ValueError as exc:
        msg = f"Form definition is not valid JSON: {exc}"
        raise DefinitionError(msg) from exc
    return form_from_dict(data)


def dumps(definition: FormDefinition, *, indent: int | None = 2) -> str:
    """Serialize a ``FormDefinition`` to JSON."""
    return json.dumps(form_to_dict(definition), indent=indent)


def load_path(path: str | Path) -> FormDefinition:
    """Read and parse a JSON form definition file."""
    return loads(Path(path).read_text(encoding="utf-8"))

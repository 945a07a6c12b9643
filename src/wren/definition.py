"""Form definitions: ordered field descriptors plus form-level metadata."""

from collections.abc import Iterator
from dataclasses import dataclass, replace
from typing import Any

from wren.fields import CheckboxField, FieldDescriptor, RadioField, SelectField

DEFAULT_FORM_NAME = "Untitled Form"


@dataclass(frozen=True, slots=True)
class FormDefinition:
    """An ordered collection of field descriptors. Immutable.

    Field order matters for display and for cache identity, never for
    validation outcomes. Field ids are expected to be unique; the
    compiler rejects duplicates.
    """

    id: str
    name: str = DEFAULT_FORM_NAME
    fields: tuple[FieldDescriptor, ...] = ()

    def __iter__(self) -> Iterator[FieldDescriptor]:
        return iter(self.fields)

    def __len__(self) -> int:
        return len(self.fields)

    @property
    def field_ids(self) -> tuple[str, ...]:
        return tuple(f.id for f in self.fields)

    def get(self, field_id: str) -> FieldDescriptor | None:
        """Return the first descriptor with *field_id*, or None."""
        for f in self.fields:
            if f.id == field_id:
                return f
        return None

    def index_of(self, field_id: str) -> int:
        """Position of *field_id* in the field sequence.

        Raises:
            KeyError: If no field has that id.
        """
        for i, f in enumerate(self.fields):
            if f.id == field_id:
                return i
        raise KeyError(field_id)

    def with_fields(self, fields: tuple[FieldDescriptor, ...]) -> "FormDefinition":
        return replace(self, fields=fields)

    def structural_key(self) -> tuple[Any, ...]:
        """Hashable identity used by the compilation cache.

        The ordered field ids with every constraint parameter. Excludes
        the form name and each field's ``error`` slot.
        """
        return tuple(f.identity() for f in self.fields)


_CHOICE_TYPES = (CheckboxField, RadioField, SelectField)


def lint_definition(definition: FormDefinition) -> dict[str, str]:
    """Save-time checks on a definition being edited.

    Returns a mapping of field id to message for every field that is
    not ready to be published: a blank label, or a choice field with no
    options. When both apply the options message is reported.
    """
    problems: dict[str, str] = {}
    for f in definition.fields:
        if not f.label.strip():
            problems[f.id] = "Label is required"
        if isinstance(f, _CHOICE_TYPES) and not f.options:
            problems[f.id] = "At least one option is required"
    return problems

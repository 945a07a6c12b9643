"""Form editor: applies builder operations to a definition.

The editor owns the current ``FormDefinition``. Every operation builds a
new definition and swaps it in; descriptors themselves are never
mutated. Structural edits drop the previous definition's compiled
validator from the cache so the next validation recompiles lazily.

Usage::

    editor = FormEditor(FormDefinition(id="signup"))
    editor.add_field(new_field("text", "email"))
    editor.patch_field_key("email", "isEmail", True)
    editor.patch_field_key("email", "required", True)

    result = editor.validate({"email": "not-an-email"})
    editor.apply_errors(result.errors)
"""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import replace
from typing import Any

from wren.config import CompilerConfig
from wren.definition import FormDefinition, lint_definition
from wren.errors import PatchError
from wren.fields import FieldDescriptor
from wren.patches import Patch, parse_patch
from wren.validation.cache import CompilationCache
from wren.validation.result import ValidationResult
from wren.validation.validator import FormValidator

logger = logging.getLogger("wren.editor")


class FormEditor:
    """Mutable holder of one definition being edited."""

    __slots__ = ("_cache", "_definition")

    def __init__(
        self,
        definition: FormDefinition,
        *,
        cache: CompilationCache | None = None,
        config: CompilerConfig | None = None,
    ) -> None:
        self._definition = definition
        self._cache = cache if cache is not None else CompilationCache(config)

    @property
    def definition(self) -> FormDefinition:
        return self._definition

    @property
    def cache(self) -> CompilationCache:
        return self._cache

    def _swap(self, definition: FormDefinition, operation: str) -> FormDefinition:
        previous = self._definition
        self._definition = definition
        if self._cache.discard(previous):
            logger.debug("%s on form %r invalidated its compiled validator", operation, previous.id)
        return definition

    def _position(self, field_id: str) -> int:
        try:
            return self._definition.index_of(field_id)
        except KeyError:
            msg = f"No field with id {field_id!r}"
            raise PatchError(msg) from None

    # -- Builder operations ------------------------------------------------

    def add_field(self, descriptor: FieldDescriptor) -> FormDefinition:
        """Append *descriptor*. Its id must not already be in use."""
        if descriptor.id in self._definition.field_ids:
            msg = f"Field id {descriptor.id!r} is already in use"
            raise PatchError(msg)
        fields = (*self._definition.fields, descriptor)
        return self._swap(self._definition.with_fields(fields), "addField")

    def patch_field(self, field_id: str, patch: Patch) -> FormDefinition:
        """Apply a typed patch to one field."""
        position = self._position(field_id)
        fields = list(self._definition.fields)
        fields[position] = patch.apply(fields[position])
        return self._swap(self._definition.with_fields(tuple(fields)), "patchField")

    def patch_field_key(self, field_id: str, key: str, value: Any) -> FormDefinition:
        """Apply an untyped ``(key, value)`` edit from the builder UI.

        Raises:
            PatchError: If the field is missing or the edit is invalid
                for the field's kind.
        """
        target = self._definition.fields[self._position(field_id)]
        return self.patch_field(field_id, parse_patch(target.kind, key, value))

    def remove_field(self, field_id: str) -> FormDefinition:
        position = self._position(field_id)
        fields = self._definition.fields[:position] + self._definition.fields[position + 1 :]
        return self._swap(self._definition.with_fields(fields), "removeField")

    def reorder_fields(self, new_order: Iterable[str]) -> FormDefinition:
        """Rearrange fields to match *new_order*, a permutation of the current ids."""
        order = list(new_order)
        current = self._definition.field_ids
        if len(order) != len(current) or sorted(order) != sorted(current):
            msg = "New order must list every current field id exactly once"
            raise PatchError(msg)
        by_id = {f.id: f for f in self._definition.fields}
        fields = tuple(by_id[fid] for fid in order)
        return self._swap(self._definition.with_fields(fields), "reorderFields")

    def rename_form(self, name: str) -> FormDefinition:
        if not isinstance(name, str):
            msg = "Form name must be a string"
            raise PatchError(msg)
        return self._swap(replace(self._definition, name=name), "renameForm")

    # -- Validation ----------------------------------------------------------

    def validator(self) -> FormValidator:
        """The compiled validator for the current definition (cached)."""
        return self._cache.get(self._definition)

    def validate(self, answers: Mapping[str, Any]) -> ValidationResult:
        return self.validator().validate(answers)

    def lint(self) -> dict[str, str]:
        """Save-time problems with the current definition, by field id."""
        return lint_definition(self._definition)

    def apply_errors(self, errors: Mapping[str, str | None]) -> FormDefinition:
        """Write an error map into the fields' ``error`` slots.

        Fields not in *errors* have their slot cleared. The compiled
        identity of the form does not change, so the cache is kept.
        """
        fields = tuple(replace(f, error=errors.get(f.id)) for f in self._definition.fields)
        self._definition = self._definition.with_fields(fields)
        return self._definition

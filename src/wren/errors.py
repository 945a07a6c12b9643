"""Wren exception hierarchy.

Shared across the codec, editor, and compiler so every module raises
and catches the same types. Validation failures are *not* exceptions:
they come back as ``Invalid`` outcomes inside a ``ValidationResult``.
"""


class WrenError(Exception):
    """Base for all wren-specific errors."""


class ConfigurationError(WrenError):
    """Raised when compiler configuration is invalid.

    Also raised when an optional extra (e.g. ``python-multipart``) is
    needed but not installed.
    """


class DefinitionError(WrenError):
    """Raised when a persisted form definition is malformed."""


class PatchError(WrenError):
    """Raised when an editor operation is rejected at the boundary."""


class CompilationError(WrenError):
    """A form definition cannot be compiled.

    Configuration-level defect, never shown to a person filling in
    the form.

    Attributes:
        field_ids: The offending field id(s).
    """

    def __init__(self, message: str, field_ids: tuple[str, ...] = ()) -> None:
        self.field_ids = field_ids
        super().__init__(message)


class DuplicateFieldIdError(CompilationError):
    """Two descriptors in one definition share an id."""

    def __init__(self, field_id: str, first: int, second: int) -> None:
        self.field_id = field_id
        self.positions = (first, second)
        super().__init__(
            f"Duplicate field id {field_id!r} at positions {first} and {second}",
            (field_id,),
        )


class UnknownFieldKindError(CompilationError):
    """A descriptor's kind is not one of the known field kinds."""

    def __init__(self, field_id: str, kind: str) -> None:
        self.field_id = field_id
        self.kind = kind
        super().__init__(f"Unknown field kind {kind!r} for field {field_id!r}", (field_id,))

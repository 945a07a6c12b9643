"""Compiler configuration.

Rule ordering, message fallbacks and the compilation cache bound live
on one frozen dataclass shared by the compiler, cache and editor.
"""

from dataclasses import dataclass

from wren.errors import ConfigurationError


@dataclass(frozen=True, slots=True)
class CompilerConfig:
    """Compiler configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CompilerConfig(text_format_first=False, cache_max_entries=None)
    """

    # Rule order
    text_format_first: bool = True  # Email check before the length bounds
    number_integer_first: bool = False  # Integer check before min/max

    # Text
    password_min_length: int = 6

    # Messages
    fallback_label: str = "This field"  # Used in "<label> is required" when the label is blank

    # Cache (None = unbounded)
    cache_max_entries: int | None = 1

    def __post_init__(self) -> None:
        if self.password_min_length < 0:
            msg = f"password_min_length must be >= 0, got {self.password_min_length}"
            raise ConfigurationError(msg)
        if self.cache_max_entries is not None and self.cache_max_entries < 1:
            msg = f"cache_max_entries must be >= 1 or None, got {self.cache_max_entries}"
            raise ConfigurationError(msg)

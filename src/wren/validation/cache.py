"""Compilation cache: reuse a compiled validator while its definition is unchanged.

Validating on every keystroke should not recompile rules each time.
The cache keys compiled validators by ``FormDefinition.structural_key()``
so any edit to a field (including a reorder) produces a miss, while a
rename of the form or a change to a field's ``error`` slot does not.

Entries live in an immutable tuple that writers rebuild and swap in
under a lock. Readers never lock: they see either the old tuple or the
new one, never a half-updated cache.
"""

import logging
import threading
from typing import Any

from wren.config import CompilerConfig
from wren.definition import FormDefinition
from wren.validation.compiler import compile_form
from wren.validation.validator import FormValidator

logger = logging.getLogger("wren.cache")

type _Entry = tuple[tuple[Any, ...], FormValidator]


class CompilationCache:
    """Memoizes ``compile_form`` per definition.

    Holds at most ``config.cache_max_entries`` compiled definitions
    (the most recently compiled ones); ``None`` means unbounded, which
    suits a handful of live definitions.
    """

    __slots__ = ("_config", "_entries", "_lock", "_max_entries")

    def __init__(self, config: CompilerConfig | None = None) -> None:
        self._config = config or CompilerConfig()
        self._max_entries = self._config.cache_max_entries
        self._lock = threading.Lock()
        self._entries: tuple[_Entry, ...] = ()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, definition: object) -> bool:
        if not isinstance(definition, FormDefinition):
            return False
        return self._lookup(definition.structural_key()) is not None

    def _lookup(self, key: tuple[Any, ...]) -> FormValidator | None:
        for entry_key, validator in self._entries:
            if entry_key == key:
                return validator
        return None

    def get(self, definition: FormDefinition) -> FormValidator:
        """Return the compiled validator for *definition*, compiling on a miss.

        Raises:
            CompilationError: If the definition cannot be compiled. Nothing
                is cached in that case.
        """
        key = definition.structural_key()
        validator = self._lookup(key)
        if validator is not None:
            logger.debug("Cache hit for form %r", definition.id)
            return validator

        logger.debug("Cache miss for form %r", definition.id)
        validator = compile_form(definition, self._config)

        with self._lock:
            kept = tuple(e for e in self._entries if e[0] != key)
            entries = (*kept, (key, validator))
            if self._max_entries is not None and len(entries) > self._max_entries:
                evicted = len(entries) - self._max_entries
                entries = entries[evicted:]
                logger.debug("Evicted %d compiled form(s)", evicted)
            self._entries = entries
        return validator

    def discard(self, definition: FormDefinition) -> bool:
        """Drop the entry for *definition*. Returns True if one was dropped."""
        key = definition.structural_key()
        with self._lock:
            kept = tuple(e for e in self._entries if e[0] != key)
            dropped = len(kept) != len(self._entries)
            self._entries = kept
        return dropped

    def clear(self) -> None:
        with self._lock:
            self._entries = ()

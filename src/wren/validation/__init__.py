"""Answer validation: compile a form definition once, validate many times.

Usage::

    from wren.validation import CompilationCache

    cache = CompilationCache()

    def on_submit(definition, answers):
        result = cache.get(definition).validate(answers)
        if not result:
            return render(definition, errors=result.errors)
        # result.data has the normalized answers
"""

from wren.validation.cache import CompilationCache
from wren.validation.compiler import compile_field, compile_form
from wren.validation.result import FieldOutcome, Invalid, Valid, ValidationResult
from wren.validation.rules import Rule
from wren.validation.validator import FieldValidator, FormValidator

__all__ = [
    "CompilationCache",
    "FieldOutcome",
    "FieldValidator",
    "FormValidator",
    "Invalid",
    "Rule",
    "Valid",
    "ValidationResult",
    "compile_field",
    "compile_form",
]

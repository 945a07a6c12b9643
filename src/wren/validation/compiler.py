"""Field and form compilers.

``compile_field`` turns one descriptor into a ``FieldValidator``: the
normalizer for its kind plus the ordered list of rules its parameters
activate. A rule whose parameter is unset is left out entirely rather
than compiled into an always-passing check, so ``rule_names`` shows
exactly what will run::

    >>> compile_field(TextField(id="pw", is_password=True, include_number=True)).rule_names
    ('min_length', 'include_number')

``compile_form`` folds ``compile_field`` over a definition.
"""

import logging
from collections.abc import Callable
from functools import partial

from wren.config import CompilerConfig
from wren.definition import FormDefinition
from wren.errors import DuplicateFieldIdError, UnknownFieldKindError
from wren.fields import (
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
from wren.validation import normalize, rules
from wren.validation.rules import Rule
from wren.validation.validator import FieldValidator, FormValidator

logger = logging.getLogger("wren.compiler")

_DEFAULT_CONFIG = CompilerConfig()


def _label(f: FieldDescriptor, config: CompilerConfig) -> str:
    return f.label.strip() or config.fallback_label


def _length_rules(lower: int | None, upper: int | None) -> list[Rule]:
    built: list[Rule] = []
    if lower:
        built.append(rules.min_length(lower))
    if upper is not None:
        built.append(rules.max_length(upper))
    return built


# ---------------------------------------------------------------------------
# Per-kind builders
# ---------------------------------------------------------------------------


def _text(f: TextField, config: CompilerConfig) -> FieldValidator:
    lower = f.min_length
    if f.is_password:
        lower = max(lower or 0, config.password_min_length)

    fmt = [rules.email] if f.is_email else []
    # A text field treats max_length 0 as unset; a textarea enforces it
    bounds = _length_rules(lower, f.max_length or None)
    chain = fmt + bounds if config.text_format_first else bounds + fmt

    if f.is_password:
        for enabled, rule in (
            (f.include_number, rules.includes_number),
            (f.include_lowercase, rules.includes_lowercase),
            (f.include_uppercase, rules.includes_uppercase),
            (f.include_special_char, rules.includes_special_char),
        ):
            if enabled:
                chain.append(rule)

    if f.required:
        chain.append(rules.required_text(_label(f, config)))
    return FieldValidator(f.id, f.kind, f.required, normalize.normalize_text, tuple(chain))


def _textarea(f: TextAreaField, config: CompilerConfig) -> FieldValidator:
    chain = _length_rules(f.min_length, f.max_length)
    if f.required:
        chain.append(rules.required_text(_label(f, config)))
    return FieldValidator(f.id, f.kind, f.required, normalize.normalize_text, tuple(chain))


def _number(f: NumberField, config: CompilerConfig) -> FieldValidator:
    bounds: list[Rule] = []
    if f.min is not None:
        bounds.append(rules.min_value(f.min))
    if f.max is not None:
        bounds.append(rules.max_value(f.max))

    whole = [] if f.is_decimal_allowed else [rules.integer]
    chain = whole + bounds if config.number_integer_first else bounds + whole

    if f.required:
        chain.append(rules.required_value(_label(f, config)))
    normalizer = partial(normalize.normalize_number, integral=not f.is_decimal_allowed)
    return FieldValidator(f.id, f.kind, f.required, normalizer, tuple(chain))


def _date(f: DateField, config: CompilerConfig) -> FieldValidator:
    chain = [rules.date_format]
    if f.min_date:
        chain.append(rules.min_date(f.min_date))
    if f.max_date:
        chain.append(rules.max_date(f.max_date))
    if f.required:
        chain.append(rules.required_value(_label(f, config)))
    return FieldValidator(f.id, f.kind, f.required, normalize.normalize_date, tuple(chain))


def _selections(f: CheckboxField | SelectField, config: CompilerConfig) -> FieldValidator:
    chain = [rules.all_of(f.options)]
    if f.required:
        chain.append(rules.required_selection())
    normalizer = partial(normalize.normalize_selections, options=f.options)
    return FieldValidator(f.id, f.kind, f.required, normalizer, tuple(chain))


def _choice(f: RadioField | SelectField, config: CompilerConfig) -> FieldValidator:
    chain = [rules.one_of(f.options)]
    if f.required:
        chain.append(rules.required_value(_label(f, config)))
    normalizer = partial(normalize.normalize_choice, options=f.options)
    return FieldValidator(f.id, f.kind, f.required, normalizer, tuple(chain))


def _select(f: SelectField, config: CompilerConfig) -> FieldValidator:
    if f.multiple:
        return _selections(f, config)
    return _choice(f, config)


_BUILDERS: dict[type[FieldDescriptor], Callable[..., FieldValidator]] = {
    TextField: _text,
    CheckboxField: _selections,
    RadioField: _choice,
    SelectField: _select,
    TextAreaField: _textarea,
    NumberField: _number,
    DateField: _date,
}


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def compile_field(
    descriptor: FieldDescriptor,
    config: CompilerConfig | None = None,
) -> FieldValidator:
    """Compile one descriptor into its rule chain.

    Args:
        descriptor: The field to compile. Never mutated.
        config: Rule-order and message settings; defaults apply when omitted.

    Raises:
        UnknownFieldKindError: If the descriptor is not one of the seven
            known field kinds.
    """
    builder = _BUILDERS.get(type(descriptor))
    if builder is None:
        if isinstance(descriptor, UnknownField):
            kind = descriptor.kind_tag
        else:
            kind = type(descriptor).__name__
        raise UnknownFieldKindError(descriptor.id, kind)
    return builder(descriptor, config or _DEFAULT_CONFIG)


def compile_form(
    definition: FormDefinition,
    config: CompilerConfig | None = None,
) -> FormValidator:
    """Compile a whole definition into a ``FormValidator``.

    Raises:
        DuplicateFieldIdError: If two fields share an id.
        UnknownFieldKindError: If any field has an unknown kind.
    """
    cfg = config or _DEFAULT_CONFIG
    compiled: dict[str, FieldValidator] = {}
    positions: dict[str, int] = {}

    for position, descriptor in enumerate(definition.fields):
        first = positions.get(descriptor.id)
        if first is not None:
            raise DuplicateFieldIdError(descriptor.id, first, position)
        positions[descriptor.id] = position
        compiled[descriptor.id] = compile_field(descriptor, cfg)

    logger.debug("Compiled form %r (%d fields)", definition.id, len(compiled))
    return FormValidator(definition.id, compiled)

"""Normalization: canonicalize a raw submitted value before rules run.

Submitted answers arrive in whatever shape the client produced: a
checkbox group nobody touched comes in as ``None`` or ``False``, a
number typed into an ``<input>`` arrives as a string, an empty select
posts ``""``. Each normalizer maps those to one canonical shape per
kind, or to an ``Invalid`` "wrong shape" outcome. Normalizers never
raise.
"""

import math
import re
from collections.abc import Sequence
from typing import Any

from wren.validation.result import FieldOutcome, Invalid, Valid
from wren.validation.rules import DATE_FORMAT_MESSAGE, INVALID_OPTION_MESSAGE, format_number

_INT_RE = re.compile(r"[+-]?[0-9]+")


def _is_scalar(value: Any) -> bool:
    return isinstance(value, (str, int, float)) and not isinstance(value, bool)


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value == "")


def match_option(value: Any, options: Sequence[Any]) -> Any:
    """Return the declared option *value* stands for.

    Form encodings only carry strings, so ``"2"`` stands for a numeric
    option ``2``. Returns *value* unchanged when nothing matches.
    """
    if value in options:
        return value
    if isinstance(value, str):
        for option in options:
            if not isinstance(option, str) and format_number(option) == value:
                return option
    return value


def normalize_text(raw: Any) -> FieldOutcome:
    """``None`` becomes ``""``; strings pass through untouched."""
    if raw is None:
        return Valid("")
    if isinstance(raw, str):
        return Valid(raw)
    return Invalid("Must be text", "shape")


def normalize_selections(raw: Any, options: Sequence[Any] = ()) -> FieldOutcome:
    """An untouched multi-select (``None`` or ``False``) becomes ``[]``."""
    if raw is None or raw is False:
        return Valid([])
    if isinstance(raw, (list, tuple)) and all(_is_scalar(v) for v in raw):
        return Valid([match_option(v, options) for v in raw])
    return Invalid("Expected a list of selections", "shape")


def normalize_choice(raw: Any, options: Sequence[Any] = ()) -> FieldOutcome:
    """``""`` and ``None`` mean no selection; anything else must be a scalar."""
    if _is_blank(raw):
        return Valid(None)
    if _is_scalar(raw):
        return Valid(match_option(raw, options))
    return Invalid(INVALID_OPTION_MESSAGE, "shape")


def normalize_number(raw: Any, *, integral: bool = False) -> FieldOutcome:
    """Coerce to ``int`` or ``float``; blank means absent.

    Numeric strings are parsed. With *integral* set, a whole float such
    as ``4.0`` is returned as ``4``.
    """
    if _is_blank(raw):
        return Valid(None)
    if isinstance(raw, bool) or not isinstance(raw, (str, int, float)):
        return Invalid("Must be a number", "shape")

    value: int | float
    if isinstance(raw, str):
        text = raw.strip()
        if "_" in text:
            return Invalid("Must be a number", "shape")
        try:
            value = int(text) if _INT_RE.fullmatch(text) else float(text)
        except ValueError:
            return Invalid("Must be a number", "shape")
    else:
        value = raw

    if isinstance(value, float):
        if not math.isfinite(value):
            return Invalid("Must be a number", "shape")
        if integral and value.is_integer():
            value = int(value)
    return Valid(value)


def normalize_date(raw: Any) -> FieldOutcome:
    """Blank means absent; the format itself is checked by a rule."""
    if _is_blank(raw):
        return Valid(None)
    if isinstance(raw, str):
        return Valid(raw)
    return Invalid(DATE_FORMAT_MESSAGE, "shape")

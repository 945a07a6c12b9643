"""Tests for wren.validation.compiler: rule activation, ordering and compile errors."""

import logging

import pytest

from wren.config import CompilerConfig
from wren.definition import FormDefinition
from wren.errors import CompilationError, DuplicateFieldIdError, UnknownFieldKindError
from wren.fields import (
    CheckboxField,
    DateField,
    NumberField,
    RadioField,
    SelectField,
    TextAreaField,
    TextField,
    UnknownField,
)
from wren.validation.compiler import compile_field, compile_form
from wren.validation.result import Invalid, Valid

# ---------------------------------------------------------------------------
# Rule activation and order
# ---------------------------------------------------------------------------


class TestTextRules:
    def test_plain_optional_text_has_no_rules(self) -> None:
        assert compile_field(TextField(id="t")).rule_names == ()

    def test_unset_bounds_are_omitted(self) -> None:
        compiled = compile_field(TextField(id="t", required=True))
        assert compiled.rule_names == ("required",)

    def test_zero_min_length_is_omitted(self) -> None:
        compiled = compile_field(TextField(id="t", min_length=0, max_length=10))
        assert compiled.rule_names == ("max_length",)

    def test_zero_max_length_is_omitted(self) -> None:
        compiled = compile_field(TextField(id="t", max_length=0))
        assert compiled.rule_names == ()
        assert compiled("hello") == Valid("hello")

    def test_full_order(self) -> None:
        compiled = compile_field(
            TextField(
                id="t",
                required=True,
                is_email=True,
                min_length=3,
                max_length=50,
            )
        )
        assert compiled.rule_names == ("email", "min_length", "max_length", "required")

    def test_password_composition_order(self) -> None:
        compiled = compile_field(
            TextField(
                id="pw",
                required=True,
                is_password=True,
                include_special_char=True,
                include_number=True,
                include_uppercase=True,
                include_lowercase=True,
            )
        )
        assert compiled.rule_names == (
            "min_length",
            "include_number",
            "include_lowercase",
            "include_uppercase",
            "include_special_char",
            "required",
        )

    def test_composition_flags_ignored_without_password(self) -> None:
        compiled = compile_field(TextField(id="t", include_number=True))
        assert compiled.rule_names == ()

    def test_password_implicit_min_length(self) -> None:
        compiled = compile_field(TextField(id="pw", is_password=True, min_length=2))
        assert compiled("abc") == Invalid("Must be at least 6 characters", "min_length")

    def test_password_keeps_larger_min_length(self) -> None:
        compiled = compile_field(TextField(id="pw", is_password=True, min_length=10))
        assert compiled("abcdefg") == Invalid("Must be at least 10 characters", "min_length")

    def test_bounds_first_when_configured(self) -> None:
        config = CompilerConfig(text_format_first=False)
        compiled = compile_field(TextField(id="t", is_email=True, min_length=3), config)
        assert compiled.rule_names == ("min_length", "email")
        assert compiled("ab").message == "Must be at least 3 characters"


class TestTextAreaRules:
    def test_order(self) -> None:
        compiled = compile_field(
            TextAreaField(id="bio", required=True, min_length=10, max_length=500)
        )
        assert compiled.rule_names == ("min_length", "max_length", "required")

    def test_max_length(self) -> None:
        compiled = compile_field(TextAreaField(id="bio", max_length=3))
        assert compiled("abcd") == Invalid("Must be at most 3 characters", "max_length")

    def test_zero_max_length_is_enforced(self) -> None:
        compiled = compile_field(TextAreaField(id="bio", max_length=0))
        assert compiled("a") == Invalid("Must be at most 0 characters", "max_length")


class TestNumberRules:
    def test_order(self) -> None:
        compiled = compile_field(NumberField(id="n", required=True, min=0, max=10))
        assert compiled.rule_names == ("min", "max", "integer", "required")

    def test_decimal_allowed_drops_integer_rule(self) -> None:
        compiled = compile_field(NumberField(id="n", is_decimal_allowed=True))
        assert compiled.rule_names == ()
        assert compiled(3.5) == Valid(3.5)

    def test_integer_first_when_configured(self) -> None:
        config = CompilerConfig(number_integer_first=True)
        compiled = compile_field(NumberField(id="n", min=0, max=10), config)
        assert compiled.rule_names == ("integer", "min", "max")
        assert compiled(15.5).message == "Must be an integer"

    def test_bounds_before_integer_by_default(self) -> None:
        compiled = compile_field(NumberField(id="n", min=0, max=10))
        assert compiled(15.5).message == "Maximum value is 10"


class TestDateRules:
    def test_order(self) -> None:
        compiled = compile_field(
            DateField(id="d", required=True, min_date="2024-01-01", max_date="2024-12-31")
        )
        assert compiled.rule_names == ("date_format", "min_date", "max_date", "required")

    def test_empty_bounds_are_omitted(self) -> None:
        compiled = compile_field(DateField(id="d", min_date="", max_date=None))
        assert compiled.rule_names == ("date_format",)

    def test_malformed_date_skips_bounds(self) -> None:
        compiled = compile_field(DateField(id="d", min_date="2024-01-01"))
        assert compiled("0000") == Invalid("Date must be in YYYY-MM-DD format", "date_format")


class TestChoiceRules:
    def test_checkbox(self) -> None:
        compiled = compile_field(CheckboxField(id="c", required=True, options=("a", "b")))
        assert compiled.rule_names == ("all_of", "required")

    def test_radio(self) -> None:
        compiled = compile_field(RadioField(id="r", required=True, options=("a",)))
        assert compiled.rule_names == ("one_of", "required")

    def test_single_select_is_radio_shaped(self) -> None:
        compiled = compile_field(SelectField(id="s", options=("a",)))
        assert compiled.rule_names == ("one_of",)
        assert compiled("a") == Valid("a")

    def test_multiple_select_is_checkbox_shaped(self) -> None:
        compiled = compile_field(SelectField(id="s", multiple=True, options=("a", "b")))
        assert compiled.rule_names == ("all_of",)
        assert compiled(["a", "b"]) == Valid(["a", "b"])


class TestLabels:
    def test_label_in_required_message(self) -> None:
        compiled = compile_field(NumberField(id="n", label="Age", required=True))
        assert compiled(None) == Invalid("Age is required", "required")

    def test_blank_label_falls_back(self) -> None:
        compiled = compile_field(NumberField(id="n", label="  ", required=True))
        assert compiled(None).message == "This field is required"

    def test_configured_fallback_label(self) -> None:
        config = CompilerConfig(fallback_label="Answer")
        compiled = compile_field(NumberField(id="n", required=True), config)
        assert compiled(None).message == "Answer is required"


class TestCompileFieldPurity:
    def test_descriptor_unchanged(self) -> None:
        descriptor = TextField(id="t", label="T", required=True, min_length=2, error="old")
        compiled = compile_field(descriptor)
        compiled("")
        assert descriptor == TextField(id="t", label="T", required=True, min_length=2)
        assert descriptor.error == "old"

    def test_unknown_kind(self) -> None:
        with pytest.raises(UnknownFieldKindError) as exc_info:
            compile_field(UnknownField(id="x", kind_tag="signature"))
        assert exc_info.value.field_id == "x"
        assert exc_info.value.kind == "signature"
        assert "x" in str(exc_info.value)


# ---------------------------------------------------------------------------
# Form compilation
# ---------------------------------------------------------------------------


class TestCompileForm:
    def test_keyed_by_id(self) -> None:
        form = FormDefinition(
            id="f",
            fields=(TextField(id="a"), NumberField(id="b"), DateField(id="c")),
        )
        validator = compile_form(form)
        assert validator.field_ids == ("a", "b", "c")
        assert validator.form_id == "f"

    def test_empty_form(self) -> None:
        validator = compile_form(FormDefinition(id="f"))
        assert len(validator) == 0
        assert validator.validate({}).is_valid

    def test_duplicate_ids(self) -> None:
        form = FormDefinition(
            id="f",
            fields=(TextField(id="a"), NumberField(id="b"), DateField(id="a")),
        )
        with pytest.raises(DuplicateFieldIdError) as exc_info:
            compile_form(form)
        err = exc_info.value
        assert err.field_id == "a"
        assert err.positions == (0, 2)
        assert err.field_ids == ("a",)
        assert "'a'" in str(err)
        assert "0" in str(err) and "2" in str(err)

    def test_unknown_kind_aborts_compilation(self) -> None:
        form = FormDefinition(
            id="f",
            fields=(TextField(id="a"), UnknownField(id="sig", kind_tag="signature")),
        )
        with pytest.raises(CompilationError) as exc_info:
            compile_form(form)
        assert exc_info.value.field_ids == ("sig",)

    def test_logs_compilation(self, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.DEBUG, logger="wren.compiler"):
            compile_form(FormDefinition(id="f", fields=(TextField(id="a"),)))
        assert "Compiled form 'f' (1 fields)" in caplog.text

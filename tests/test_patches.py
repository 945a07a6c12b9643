"""Tests for wren.patches: typed field edits and key parsing."""

import pytest

from wren.errors import PatchError
from wren.fields import (
    CheckboxField,
    DateField,
    NumberField,
    RadioField,
    SelectField,
    TextAreaField,
    TextField,
)
from wren.patches import (
    PasswordRule,
    SetDecimalAllowed,
    SetEmail,
    SetLabel,
    SetMax,
    SetMaxDate,
    SetMaxLength,
    SetMin,
    SetMinDate,
    SetMinLength,
    SetMultiple,
    SetOptions,
    SetPassword,
    SetPasswordRule,
    SetPlaceholder,
    SetRequired,
    parse_patch,
)


class TestApply:
    def test_label_on_any_kind(self) -> None:
        for field in (TextField(id="a"), DateField(id="b"), CheckboxField(id="c")):
            assert SetLabel("Hi").apply(field).label == "Hi"

    def test_returns_new_descriptor(self) -> None:
        original = TextField(id="a")
        patched = SetRequired(True).apply(original)
        assert patched.required is True
        assert original.required is False

    def test_keeps_type(self) -> None:
        assert isinstance(SetMaxLength(5).apply(TextAreaField(id="a")), TextAreaField)

    def test_wrong_kind(self) -> None:
        with pytest.raises(PatchError, match="SetMin does not apply to text"):
            SetMin(1).apply(TextField(id="a"))

    def test_number_patches(self) -> None:
        f = NumberField(id="n")
        f = SetMin(1).apply(f)
        f = SetMax(9.5).apply(f)
        f = SetDecimalAllowed(True).apply(f)
        f = SetPlaceholder("qty").apply(f)
        assert (f.min, f.max, f.is_decimal_allowed, f.placeholder) == (1, 9.5, True, "qty")

    def test_date_patches(self) -> None:
        f = SetMaxDate("2024-12-31").apply(SetMinDate("2024-01-01").apply(DateField(id="d")))
        assert (f.min_date, f.max_date) == ("2024-01-01", "2024-12-31")

    def test_options(self) -> None:
        f = SetOptions(("a", 2)).apply(RadioField(id="r"))
        assert f.options == ("a", 2)

    def test_multiple_only_on_select(self) -> None:
        assert SetMultiple(True).apply(SelectField(id="s")).multiple is True
        with pytest.raises(PatchError):
            SetMultiple(True).apply(CheckboxField(id="c"))


class TestEmailPasswordExclusion:
    def test_email_clears_password(self) -> None:
        f = SetEmail(True).apply(TextField(id="t", is_password=True))
        assert (f.is_email, f.is_password) == (True, False)

    def test_password_clears_email(self) -> None:
        f = SetPassword(True).apply(TextField(id="t", is_email=True))
        assert (f.is_email, f.is_password) == (False, True)

    def test_disabling_leaves_other_flag(self) -> None:
        f = SetEmail(False).apply(TextField(id="t", is_password=True))
        assert (f.is_email, f.is_password) == (False, True)

    def test_password_rule(self) -> None:
        f = SetPasswordRule(PasswordRule.UPPERCASE, True).apply(TextField(id="t"))
        assert f.include_uppercase is True


class TestValueChecks:
    @pytest.mark.parametrize(
        "build",
        [
            lambda: SetLabel(3),
            lambda: SetRequired("yes"),
            lambda: SetMinLength(-1),
            lambda: SetMaxLength(True),
            lambda: SetMaxLength(2.5),
            lambda: SetOptions(["a"]),
            lambda: SetOptions(({"a": 1},)),
            lambda: SetMin("1"),
            lambda: SetMax(float("inf")),
            lambda: SetMinDate("2024-13-01"),
            lambda: SetMaxDate("31/12/2024"),
            lambda: SetPasswordRule("include_number", True),
            lambda: SetEmail(1),
        ],
    )
    def test_rejected(self, build: object) -> None:
        with pytest.raises(PatchError):
            build()  # type: ignore[operator]

    def test_unset_allowed(self) -> None:
        assert SetMinLength(None).value is None
        assert SetMin(None).value is None
        assert SetMinDate(None).value is None


class TestParsePatch:
    def test_known_keys(self) -> None:
        assert parse_patch("text", "minLength", 3) == SetMinLength(3)
        assert parse_patch("text", "isEmail", True) == SetEmail(True)
        assert parse_patch("text", "includeNumber", True) == SetPasswordRule(PasswordRule.NUMBER, True)
        assert parse_patch("number", "minValue", 0) == SetMin(0)
        assert parse_patch("number", "max", 10) == SetMax(10)
        assert parse_patch("select", "isMultipleSelectAllowed", True) == SetMultiple(True)

    def test_options_list_becomes_tuple(self) -> None:
        assert parse_patch("checkbox", "options", ["a", "b"]) == SetOptions(("a", "b"))

    def test_blank_date_unsets(self) -> None:
        assert parse_patch("date", "minDate", "") == SetMinDate(None)

    def test_blank_bound_unsets(self) -> None:
        assert parse_patch("number", "max", "") == SetMax(None)
        assert parse_patch("number", "minValue", "") == SetMin(None)
        assert parse_patch("text", "maxLength", "") == SetMaxLength(None)
        assert parse_patch("textarea", "minLength", "") == SetMinLength(None)

    def test_cleared_bound_removes_limit(self) -> None:
        field = NumberField(id="n", max=10)
        assert parse_patch("number", "max", "").apply(field).max is None

    def test_unknown_key(self) -> None:
        with pytest.raises(PatchError, match="Unknown field key"):
            parse_patch("text", "colour", "red")

    def test_key_for_other_kind(self) -> None:
        with pytest.raises(PatchError, match="does not apply to radio"):
            parse_patch("radio", "minLength", 3)

    def test_unknown_kind(self) -> None:
        with pytest.raises(PatchError):
            parse_patch("signature", "label", "x")

    def test_bad_value(self) -> None:
        with pytest.raises(PatchError):
            parse_patch("text", "maxLength", "long")

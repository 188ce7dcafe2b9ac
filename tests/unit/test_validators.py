"""Tests for text field validation."""

import pytest

from screenspec.runtime.validators import (
    INVALID_EMAIL_MESSAGE,
    PASSWORD_LENGTH_MESSAGE,
    REQUIRED_MESSAGE,
    validate_field,
)
from screenspec.schemas.document import TextFieldComponent


def _field(**kwargs) -> TextFieldComponent:
    return TextFieldComponent(id="f", **kwargs)


class TestRequired:
    def test_empty_required_field_fails(self):
        assert validate_field(_field(required=True), "") == "Este campo es requerido"

    def test_whitespace_only_counts_as_empty(self):
        assert validate_field(_field(required=True), "   ") == REQUIRED_MESSAGE

    def test_none_is_treated_as_empty(self):
        assert validate_field(_field(required=True), None) == REQUIRED_MESSAGE

    def test_optional_empty_field_is_valid(self):
        assert validate_field(_field(), "") is None


class TestMinLength:
    def test_short_value_fails(self):
        field = _field(validations={"min_length": 5})
        assert validate_field(field, "abc") == "Debe tener al menos 5 caracteres"

    def test_exact_length_passes(self):
        field = _field(validations={"min_length": 3})
        assert validate_field(field, "abc") is None

    def test_not_applied_to_empty_optional_value(self):
        field = _field(validations={"min_length": 5})
        assert validate_field(field, "") is None

    def test_null_validations_mean_no_constraints(self):
        field = _field(validations=None)
        assert validate_field(field, "a") is None


class TestEmail:
    @pytest.mark.parametrize("value", ["ana@example.com", "a.b+c@sub.domain.org"])
    def test_valid_addresses(self, value):
        assert validate_field(_field(data_type="email"), value) is None

    @pytest.mark.parametrize("value", ["ana", "ana@example", "@example"])
    def test_invalid_addresses(self, value):
        assert validate_field(_field(data_type="email"), value) == "Correo electrónico inválido"

    def test_pattern_is_searched_not_anchored(self):
        assert validate_field(_field(data_type="email"), "contact: ana@example.com") is None


class TestPassword:
    def test_short_password_fails(self):
        assert validate_field(_field(data_type="password"), "1234567") == PASSWORD_LENGTH_MESSAGE

    def test_eight_characters_pass(self):
        assert validate_field(_field(data_type="password"), "12345678") is None

    def test_message_text(self):
        assert PASSWORD_LENGTH_MESSAGE == "La contraseña debe tener al menos 8 caracteres"


class TestCheckOrder:
    def test_required_wins_over_everything(self):
        field = _field(required=True, data_type="email", validations={"min_length": 3})
        assert validate_field(field, "") == REQUIRED_MESSAGE

    def test_min_length_wins_over_email(self):
        field = _field(data_type="email", validations={"min_length": 10})
        assert validate_field(field, "a@b") == "Debe tener al menos 10 caracteres"

    def test_email_checked_after_min_length_passes(self):
        field = _field(data_type="email", validations={"min_length": 2})
        assert validate_field(field, "not-an-email") == INVALID_EMAIL_MESSAGE

"""
Field validation for text fields.

Checks run in a fixed order and the first failure wins:
- Required field checking
- Minimum length
- Email format (data_type == "email")
- Password length (data_type == "password")

Messages are user-facing and match the locale of the specification
documents this interpreter renders.
"""

import re
from typing import Optional

from screenspec.schemas.document import TextFieldComponent

REQUIRED_MESSAGE = "Este campo es requerido"
MIN_LENGTH_MESSAGE = "Debe tener al menos {min_length} caracteres"
INVALID_EMAIL_MESSAGE = "Correo electrónico inválido"
PASSWORD_LENGTH_MESSAGE = "La contraseña debe tener al menos 8 caracteres"

PASSWORD_MIN_LENGTH = 8

EMAIL_PATTERN = re.compile(r"\S+@\S+\.\S+")


def validate_field(component: TextFieldComponent, value: Optional[str]) -> Optional[str]:
    """
    Validate a raw value against a text field's constraints.

    Args:
        component: Text field definition (required flag, validations, data_type)
        value: Raw string value; None is treated as empty

    Returns:
        Error message for the first failing check, or None if the value is valid
    """
    value = value or ""

    if component.required and not value.strip():
        return REQUIRED_MESSAGE

    # Length, email and password checks only apply to non-empty values
    min_length = component.validations.min_length
    if min_length is not None and value and len(value) < min_length:
        return MIN_LENGTH_MESSAGE.format(min_length=min_length)

    if component.data_type == "email" and value and not EMAIL_PATTERN.search(value):
        return INVALID_EMAIL_MESSAGE

    if component.data_type == "password" and value and len(value) < PASSWORD_MIN_LENGTH:
        return PASSWORD_LENGTH_MESSAGE

    return None

"""
Field rules shared by the request schemas and the session service.

Each ``*_error`` function returns the message for the first rule the value
breaks, or ``None`` when the value is acceptable.
"""
from typing import Dict, List, Optional

from email_validator import EmailNotValidError, validate_email

from app.exceptions.auth_exceptions import ValidationError
from code_modules.password_hasher import MAX_PASSWORD_BYTES

MAX_FIELD_LENGTH = 255
MIN_PASSWORD_LENGTH = 8


def required_error(field: str, value: Optional[str]) -> Optional[str]:
    if value is None or not value.strip():
        return f"The {field} field is required."
    return None


def name_error(value: Optional[str]) -> Optional[str]:
    error = required_error("name", value)
    if error:
        return error
    if len(value.strip()) > MAX_FIELD_LENGTH:
        return f"The name field must not be greater than {MAX_FIELD_LENGTH} characters."
    return None


def email_error(value: Optional[str]) -> Optional[str]:
    error = required_error("email", value)
    if error:
        return error
    value = value.strip()
    if len(value) > MAX_FIELD_LENGTH:
        return f"The email field must not be greater than {MAX_FIELD_LENGTH} characters."
    try:
        validate_email(value, check_deliverability=False)
    except EmailNotValidError:
        return "The email field must be a valid email address."
    return None


def password_error(value: Optional[str]) -> Optional[str]:
    if not value:
        return "The password field is required."
    if len(value) < MIN_PASSWORD_LENGTH:
        return f"The password field must be at least {MIN_PASSWORD_LENGTH} characters."
    if len(value.encode("utf-8")) > MAX_PASSWORD_BYTES:
        return f"The password field must not be greater than {MAX_PASSWORD_BYTES} bytes."
    return None


def validate_registration(name: Optional[str], email: Optional[str], password: Optional[str]) -> None:
    """
    Raise ``ValidationError`` with every broken rule, keyed by field.
    """
    errors: Dict[str, List[str]] = {}
    for field, error in (
        ("name", name_error(name)),
        ("email", email_error(email)),
        ("password", password_error(password)),
    ):
        if error:
            errors[field] = [error]
    if errors:
        raise ValidationError(errors)


def validate_login(email: Optional[str], password: Optional[str]) -> None:
    errors: Dict[str, List[str]] = {}
    error = email_error(email)
    if error:
        errors["email"] = [error]
    if not password:
        errors["password"] = ["The password field is required."]
    if errors:
        raise ValidationError(errors)

"""
Schemas for the authentication endpoints.

Field rules live in ``app.services.validation`` so that the HTTP layer and
the session service reject exactly the same input.
"""
from typing import Optional

from pydantic import BaseModel, field_validator

from app.services.validation import email_error, name_error, password_error


def _check(error: Optional[str], value):
    if error:
        raise ValueError(error)
    return value


class RegisterRequest(BaseModel):
    """
    Register Request requires name, email and password.
    """
    name: str
    email: str
    password: str

    @field_validator("name")
    @classmethod
    def check_name(cls, value: str) -> str:
        return _check(name_error(value), value.strip())

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check(email_error(value), value.strip())

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        return _check(password_error(value), value)


class LoginRequest(BaseModel):
    """
    Login Request requires email and password.
    """
    email: str
    password: str

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _check(email_error(value), value.strip())

    @field_validator("password")
    @classmethod
    def check_password(cls, value: str) -> str:
        if not value:
            raise ValueError("The password field is required.")
        return value

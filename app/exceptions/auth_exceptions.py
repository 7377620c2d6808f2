"""
Errors raised by the session service and the HTTP auth surface.

Each one maps to a single HTTP status in ``app.main``.
"""
from typing import Dict, List


class ValidationError(Exception):
    """Client input is malformed. Carries a field-level error map."""

    def __init__(self, errors: Dict[str, List[str]], message: str = "Validation failed"):
        super().__init__(message)
        self.message = message
        self.errors = errors


class ConflictError(ValidationError):
    """The email is already on file."""

    def __init__(self):
        super().__init__({"email": ["The email has already been taken."]})


class AuthError(Exception):
    """Bad credentials or no valid session. The message is kept generic."""

    def __init__(self, message: str = "Unauthorized."):
        super().__init__(message)
        self.message = message


class CsrfMismatchError(Exception):
    """The anti-forgery header does not match the session's token."""

    def __init__(self, message: str = "CSRF token mismatch."):
        super().__init__(message)
        self.message = message

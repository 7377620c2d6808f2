"""
Request dependencies shared by the API routes.

The caller's identity is resolved here from the session cookie and handed to
each handler as an explicit parameter.
"""
import secrets
from typing import Optional

from fastapi import Depends, Request

from app.exceptions.auth_exceptions import AuthError, CsrfMismatchError
from app.services.session_service import Identity, SessionService

CSRF_COOKIE_NAME = "XSRF-TOKEN"
CSRF_HEADER_NAME = "X-XSRF-TOKEN"
SAFE_METHODS = ("GET", "HEAD", "OPTIONS")


def get_session_service(request: Request) -> SessionService:
    return request.app.state.session_service


def get_session_id(request: Request) -> Optional[str]:
    return request.cookies.get(request.app.state.config.session.cookie_name)


def require_identity(
    request: Request,
    session_service: SessionService = Depends(get_session_service),
) -> Identity:
    """
    Resolve the authenticated caller or fail with 401.

    When CSRF protection is enabled, state-changing requests must also echo
    the session's anti-forgery token in the ``X-XSRF-TOKEN`` header.
    """
    identity = session_service.current_user(get_session_id(request))
    if identity is None:
        raise AuthError("Unauthorized.")

    if request.app.state.config.csrf_protection and request.method not in SAFE_METHODS:
        token = request.headers.get(CSRF_HEADER_NAME, "")
        if not secrets.compare_digest(token.encode(), identity.session.csrf_token.encode()):
            raise CsrfMismatchError()
    return identity

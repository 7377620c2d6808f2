"""
Authentication API routes.

This module defines the register, login, logout and current-user endpoints.
It acts as a thin controller layer that validates input schemas, delegates
to the SessionService and translates the result into JSON plus cookies.
"""
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from app.api.dependencies import (
    CSRF_COOKIE_NAME,
    get_session_id,
    get_session_service,
    require_identity,
)
from app.schemas.auth import LoginRequest, RegisterRequest
from app.services.session_service import Identity, SessionService, new_csrf_token
from code_modules.session_store import SessionRecord

router = APIRouter()


def _set_csrf_cookie(request: Request, response: Response, token: str) -> None:
    # readable by the frontend so it can echo it back in X-XSRF-TOKEN
    response.set_cookie(
        CSRF_COOKIE_NAME,
        token,
        secure=request.app.state.config.session.cookie_secure,
        samesite="lax",
    )


def _set_session_cookies(request: Request, response: Response, record: SessionRecord) -> None:
    session_config = request.app.state.config.session
    response.set_cookie(
        session_config.cookie_name,
        record.session_id,
        max_age=session_config.lifetime_minutes * 60,
        httponly=True,
        secure=session_config.cookie_secure,
        samesite="lax",
    )
    _set_csrf_cookie(request, response, record.csrf_token)


@router.get("/csrf-cookie", status_code=204)
def csrf_cookie(
    request: Request,
    session_service: SessionService = Depends(get_session_service),
):
    """
    Hand out the anti-forgery token for the current session, or a fresh one
    for anonymous callers.
    """
    identity = session_service.current_user(get_session_id(request))
    token = identity.session.csrf_token if identity else new_csrf_token()
    response = Response(status_code=204)
    _set_csrf_cookie(request, response, token)
    return response


@router.post("/register", status_code=201)
def register(
    body: RegisterRequest,
    request: Request,
    session_service: SessionService = Depends(get_session_service),
):
    """
    Register a new user and log them in.

    Returns:
        201 with the user projection and a session cookie, or 422 with a
        field-level error map.
    """
    user, record = session_service.register(body.name, body.email, body.password)
    response = JSONResponse(
        status_code=201,
        content={"message": "User registered successfully", "user": user.projection()},
    )
    _set_session_cookies(request, response, record)
    return response


@router.post("/login")
def login(
    body: LoginRequest,
    request: Request,
    session_service: SessionService = Depends(get_session_service),
):
    """
    Authenticate a user.

    Unknown email and wrong password both answer 401 with the same message
    and set no cookie.
    """
    user, record = session_service.login(body.email, body.password, get_session_id(request))
    response = JSONResponse(content={"message": "Logged in successfully.", "user": user.projection()})
    _set_session_cookies(request, response, record)
    return response


@router.post("/logout")
def logout(
    request: Request,
    identity: Identity = Depends(require_identity),
    session_service: SessionService = Depends(get_session_service),
):
    """
    Invalidate the session and rotate the anti-forgery token.
    """
    token = session_service.logout(identity.session.session_id)
    response = JSONResponse(content={"message": "Logged out successfully."})
    response.delete_cookie(request.app.state.config.session.cookie_name)
    _set_csrf_cookie(request, response, token)
    return response


@router.get("/user")
def current_user(identity: Identity = Depends(require_identity)):
    """
    Return the authenticated user's projection.
    """
    return {"user": identity.user.projection()}

"""
Application entry point for the RealEstateConnect API.

This module initializes the FastAPI application, configures global
middleware such as CORS, wires the session, dashboard and AI services onto
the application state, maps domain errors to HTTP responses and registers
all API route modules.
"""
import logging
from datetime import timedelta
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.api.routes import assistant, auth, dashboard
from app.exceptions.auth_exceptions import AuthError, CsrfMismatchError, ValidationError
from app.services.assistant_service import AssistantService
from app.services.session_service import SessionService
from code_modules.chat_completion_client import (
    LLMInferenceError,
    LLMTimeoutError,
    create_llm_client,
)
from code_modules.credential_store import InMemoryUserRepository, OracleUserRepository
from code_modules.oracle_adb_handler import OracleADBClient
from code_modules.password_hasher import PasswordHasher
from code_modules.session_store import InMemorySessionStore, OracleSessionStore
from config_loader import AppConfig, load_app_config

logger = logging.getLogger(__name__)


def _request_validation_errors(exc: RequestValidationError) -> dict:
    """
    Turn pydantic errors into a ``{field: [message, ...]}`` map.
    """
    errors = {}
    for err in exc.errors():
        loc = err.get("loc") or ("body",)
        field = str(loc[-1])
        if err.get("type") == "missing":
            message = f"The {field} field is required."
        elif err.get("type") == "value_error" and "error" in err.get("ctx", {}):
            message = str(err["ctx"]["error"])
        else:
            message = err.get("msg", "Invalid value.")
        errors.setdefault(field, []).append(message)
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """
    Map domain errors to JSON responses. None of them is fatal.
    """

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=422,
            content={"message": "Validation failed", "errors": _request_validation_errors(exc)},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(status_code=422, content={"message": exc.message, "errors": exc.errors})

    @app.exception_handler(AuthError)
    async def auth_handler(request: Request, exc: AuthError):
        return JSONResponse(status_code=401, content={"message": exc.message})

    @app.exception_handler(CsrfMismatchError)
    async def csrf_handler(request: Request, exc: CsrfMismatchError):
        return JSONResponse(status_code=419, content={"message": exc.message})

    @app.exception_handler(LLMTimeoutError)
    async def llm_timeout_handler(request: Request, exc: LLMTimeoutError):
        return JSONResponse(status_code=504, content={"message": str(exc), "error": "timeout"})

    @app.exception_handler(LLMInferenceError)
    async def llm_error_handler(request: Request, exc: LLMInferenceError):
        return JSONResponse(status_code=502, content={"message": str(exc), "error": "upstream"})


def build_stores(config: AppConfig):
    """
    Pick the credential and session stores for the configuration.

    Returns:
        tuple: (user repository, session store)
    """
    if config.adw is None:
        logger.warning("No [ADW] section configured, users and sessions are kept in memory")
        return InMemoryUserRepository(), InMemorySessionStore()
    adb_client = OracleADBClient(config.adw)
    return OracleUserRepository(adb_client), OracleSessionStore(adb_client)


def create_app(
    config: Optional[AppConfig] = None,
    users=None,
    sessions=None,
    llm_client=None,
) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        config (AppConfig, optional): Resolved configuration. Loaded from
            ``config.ini`` and the environment when omitted.
        users: Credential store override.
        sessions: Session store override.
        llm_client: Chat-completion client override.
    """
    config = config or load_app_config()
    logging.basicConfig(
        level=config.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if users is None or sessions is None:
        default_users, default_sessions = build_stores(config)
        users = users if users is not None else default_users
        sessions = sessions if sessions is not None else default_sessions

    # ---------------------------------------------------------
    # Create FastAPI application instance
    # ---------------------------------------------------------
    app = FastAPI(title="RealEstateConnect API")

    # ---------------------------------------------------------
    # Configure CORS middleware
    # Credentials are required for the session cookie, so origins are explicit
    # ---------------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.state.config = config
    app.state.session_service = SessionService(
        users,
        sessions,
        PasswordHasher(rounds=config.session.bcrypt_rounds),
        lifetime=timedelta(minutes=config.session.lifetime_minutes),
    )
    app.state.assistant_service = AssistantService(llm_client or create_llm_client(config.llm))

    register_exception_handlers(app)

    # ---------------------------------------------------------
    # Register API routers
    # ---------------------------------------------------------
    app.include_router(auth.router, tags=["Auth"])
    app.include_router(dashboard.router, tags=["Dashboards"])
    app.include_router(assistant.router, prefix="/ai", tags=["AI"])

    return app


app = create_app()

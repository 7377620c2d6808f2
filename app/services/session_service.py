"""
Session service for the RealEstateConnect application.

This module verifies credentials, issues and destroys server-side sessions
and answers "who is the current caller". It knows nothing about HTTP: the
session id is passed in explicitly by the caller and the resulting identity
is returned explicitly.

Lifecycle of a caller:

    Anonymous --register/login--> Authenticated --logout/expiry--> Anonymous
"""
import logging
import secrets
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional, Tuple

from app.exceptions.auth_exceptions import AuthError, ConflictError
from app.services.validation import validate_login, validate_registration
from code_modules.credential_store import DuplicateEmailError, User
from code_modules.password_hasher import PasswordHasher
from code_modules.session_store import SessionRecord

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS = "Invalid login credentials."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_csrf_token() -> str:
    return secrets.token_urlsafe(32)


@dataclass(frozen=True)
class Identity:
    """
    The authenticated caller bound to a valid session.
    """
    user: User
    session: SessionRecord


class SessionService:
    """
    Service layer responsible for authentication and session lifetime.

    Args:
        users: Credential store (``InMemoryUserRepository`` or ``OracleUserRepository``).
        sessions: Session store (``InMemorySessionStore`` or ``OracleSessionStore``).
        hasher (PasswordHasher): Password hashing strategy.
        lifetime (timedelta): How long an issued session stays valid.
        clock: Returns the current UTC time; replaceable in tests.
    """

    def __init__(
        self,
        users,
        sessions,
        hasher: PasswordHasher,
        lifetime: timedelta = timedelta(minutes=120),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.users = users
        self.sessions = sessions
        self.hasher = hasher
        self.lifetime = lifetime
        self.clock = clock

    def _issue_session(self, user: User) -> SessionRecord:
        now = self.clock()
        record = SessionRecord(
            session_id=secrets.token_urlsafe(32),
            user_id=user.id,
            csrf_token=new_csrf_token(),
            created_at=now,
            expires_at=now + self.lifetime,
        )
        self.sessions.save(record)
        return record

    def register(self, name: str, email: str, password: str) -> Tuple[User, SessionRecord]:
        """
        Create a user and log them in.

        Raises:
            ValidationError: A field breaks a rule.
            ConflictError: The email is already on file.
        """
        validate_registration(name, email, password)

        if self.users.get_by_email(email) is not None:
            raise ConflictError()

        try:
            user = self.users.create(name.strip(), email, self.hasher.hash(password))
        except DuplicateEmailError as e:
            # lost a race with a concurrent registration
            raise ConflictError() from e

        logger.info("Registered user %s", user.id)
        return user, self._issue_session(user)

    def login(
        self,
        email: str,
        password: str,
        previous_session_id: Optional[str] = None,
    ) -> Tuple[User, SessionRecord]:
        """
        Verify credentials and issue a fresh session.

        Any session id the caller already held is destroyed first.

        Raises:
            ValidationError: Email or password missing or malformed.
            AuthError: Unknown email or wrong password (same message for both).
        """
        validate_login(email, password)

        user = self.users.get_by_email(email)
        if user is None:
            self.hasher.burn(password)
            logger.info("Failed login attempt")
            raise AuthError(INVALID_CREDENTIALS)
        if not self.hasher.verify(password, user.password_hash):
            logger.info("Failed login attempt")
            raise AuthError(INVALID_CREDENTIALS)

        if previous_session_id:
            self.sessions.delete(previous_session_id)

        logger.info("User %s logged in", user.id)
        return user, self._issue_session(user)

    def logout(self, session_id: Optional[str]) -> str:
        """
        Destroy the session if it exists and return a new anti-forgery token.

        Logging out an unknown or already destroyed session is not an error.
        """
        if session_id:
            record = self.sessions.get(session_id)
            self.sessions.delete(session_id)
            if record is not None:
                logger.info("User %s logged out", record.user_id)
        return new_csrf_token()

    def current_user(self, session_id: Optional[str]) -> Optional[Identity]:
        """
        Resolve the identity bound to ``session_id``.

        Returns ``None`` for a missing, unknown or expired session, or one
        whose user no longer exists. Expired and orphaned sessions are
        removed from the store.
        """
        if not session_id:
            return None
        record = self.sessions.get(session_id)
        if record is None:
            return None
        if record.is_expired(self.clock()):
            self.sessions.delete(session_id)
            return None
        user = self.users.get_by_id(record.user_id)
        if user is None:
            self.sessions.delete(session_id)
            return None
        return Identity(user=user, session=record)

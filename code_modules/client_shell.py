"""
Client shell for the RealEstateConnect API.

Plays the part of the single-page frontend: on boot it asks the API once
"am I logged in", keeps the answer, and decides which dashboard view may be
shown. While that first check is pending the shell is in a loading state and
renders nothing else.

Failure semantics:
- any failure of the boot identity check leaves the shell anonymous; it
  never grants access and never shows an error screen
- form actions (login, register, logout, dashboard calls) set a dismissible
  message on failure and return False; nothing is retried
- AI suggestions raise ``AssistantTimeoutError`` when they time out and
  ``AssistantError`` for any other failure
- a 401 from any call drops the cached user, so protected views close

Dependencies:
- httpx
"""
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx

logger = logging.getLogger(__name__)

HOME_VIEW = "home"
LOGIN_VIEW = "login"
LOADING_VIEW = "loading"
DASHBOARD_VIEWS = ("buyer", "investor", "agent", "vendor", "developer")
VIEWS = (HOME_VIEW,) + DASHBOARD_VIEWS

CSRF_COOKIE_NAME = "XSRF-TOKEN"
CSRF_HEADER_NAME = "X-XSRF-TOKEN"

TIMEOUT_MESSAGE = "The AI request timed out. Please try again."


class AssistantError(Exception):
    """An AI suggestion could not be produced."""


class AssistantTimeoutError(AssistantError):
    """An AI suggestion did not arrive before the timeout."""


@dataclass
class ShellState:
    view: str = HOME_VIEW
    user: Optional[Dict[str, Any]] = None
    loading: bool = False
    message: str = ""
    message_type: str = ""


class ClientShell:
    """
    Args:
        base_url (str): Root URL of the API.
        http_client (httpx.Client, optional): Client carrying the session
            cookie. Built from ``base_url`` when omitted.
        timeout (float): Timeout for ordinary requests.
        assistant_timeout (float): Timeout for AI suggestion requests.
    """

    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        http_client: Optional[httpx.Client] = None,
        timeout: float = 10.0,
        assistant_timeout: float = 15.0,
    ):
        self.http = http_client or httpx.Client(base_url=base_url, timeout=timeout)
        self.assistant_timeout = assistant_timeout
        self.state = ShellState()

    # ------------------------------------------------------------
    # Identity and routing
    # ------------------------------------------------------------
    @property
    def is_authenticated(self) -> bool:
        return self.state.user is not None

    def boot(self) -> Optional[Dict[str, Any]]:
        """
        Perform the single identity check and leave the loading state.
        """
        self.state.loading = True
        try:
            response = self.http.get("/user")
            body = response.json() if response.status_code == 200 else None
            self.state.user = body.get("user") if isinstance(body, dict) else None
        except (httpx.HTTPError, ValueError) as e:
            logger.warning("Identity check failed, continuing as anonymous: %s", e)
            self.state.user = None
        finally:
            self.state.loading = False
        return self.state.user

    def navigate(self, view: str) -> str:
        if view not in VIEWS:
            raise ValueError(f"Unknown view '{view}'")
        self.state.view = view
        return self.current_view()

    def current_view(self) -> str:
        """
        The view that should be rendered right now.
        """
        if self.state.loading:
            return LOADING_VIEW
        if self.state.view in DASHBOARD_VIEWS and not self.is_authenticated:
            return LOGIN_VIEW
        return self.state.view

    # ------------------------------------------------------------
    # Messages
    # ------------------------------------------------------------
    def _succeed(self, message: str) -> None:
        self.state.message = message
        self.state.message_type = "success"

    def _fail(self, message: str) -> None:
        self.state.message = message
        self.state.message_type = "error"

    def dismiss_message(self) -> None:
        self.state.message = ""
        self.state.message_type = ""

    @staticmethod
    def _error_message(response: httpx.Response, default: str) -> str:
        try:
            body = response.json()
        except ValueError:
            return default
        if not isinstance(body, dict):
            return default
        errors = body.get("errors")
        if isinstance(errors, dict) and errors:
            return " ".join(msg for messages in errors.values() for msg in messages)
        return body.get("message") or default

    def _csrf_headers(self) -> Dict[str, str]:
        # echo the anti-forgery cookie the way browser HTTP libraries do
        token = self.http.cookies.get(CSRF_COOKIE_NAME)
        return {CSRF_HEADER_NAME: token} if token else {}

    def _send(self, method: str, url: str, default_error: str, **kwargs) -> Optional[httpx.Response]:
        """
        One request, no retry. Returns the response on 2xx, else records
        the error message and returns None.
        """
        try:
            response = self.http.request(method, url, headers=self._csrf_headers(), **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            self._fail(default_error)
            return None
        if response.status_code == 401:
            # the server no longer knows this session
            self.state.user = None
        if not response.is_success:
            self._fail(self._error_message(response, default_error))
            return None
        return response

    # ------------------------------------------------------------
    # Auth forms
    # ------------------------------------------------------------
    def register(self, name: str, email: str, password: str) -> bool:
        response = self._send(
            "POST",
            "/register",
            "Registration failed.",
            json={"name": name, "email": email, "password": password},
        )
        if response is None:
            return False
        body = response.json()
        self.state.user = body.get("user")
        self._succeed(body.get("message", "Registered."))
        return True

    def login(self, email: str, password: str) -> bool:
        response = self._send("POST", "/login", "Login failed.", json={"email": email, "password": password})
        if response is None:
            return False
        body = response.json()
        self.state.user = body.get("user")
        self._succeed(body.get("message", "Logged in."))
        return True

    def logout(self) -> bool:
        response = self._send("POST", "/logout", "Logout failed.")
        if response is None:
            return False
        self.state.user = None
        self.state.view = HOME_VIEW
        self._succeed(response.json().get("message", "Logged out."))
        return True

    # ------------------------------------------------------------
    # Dashboards
    # ------------------------------------------------------------
    def load_preferences(self) -> Optional[Dict[str, Any]]:
        response = self._send("GET", "/user/preferences", "Failed to load preferences.")
        return response.json().get("preferences") if response is not None else None

    def save_preferences(self, preferences: Dict[str, Any]) -> bool:
        response = self._send("POST", "/user/preferences", "Failed to save preferences.", json=preferences)
        if response is None:
            return False
        self._succeed(response.json().get("message", "Preferences saved."))
        return True

    def load_listings(self) -> List[Dict[str, Any]]:
        response = self._send("GET", "/user/listings", "Failed to load listings.")
        return response.json().get("listings", []) if response is not None else []

    def add_listing(self, listing: Dict[str, Any]) -> Optional[Dict[str, Any]]:
        response = self._send("POST", "/user/listings", "Failed to add listing.", json=listing)
        if response is None:
            return None
        body = response.json()
        self._succeed(body.get("message", "Listing added."))
        return body.get("listing")

    def delete_listing(self, listing_id: int) -> bool:
        response = self._send("DELETE", f"/user/listings/{listing_id}", "Failed to delete listing.")
        if response is None:
            return False
        self._succeed(response.json().get("message", "Listing deleted."))
        return True

    def load_heatmap(self, audience: str) -> Optional[Dict[str, Any]]:
        response = self._send("GET", f"/user/heatmaps/{audience}", "Failed to load heatmap.")
        return response.json() if response is not None else None

    def request_report(self, fields: Dict[str, Any]) -> bool:
        response = self._send("POST", "/reports/requests", "Failed to submit report request.", json=fields)
        if response is None:
            return False
        self._succeed(response.json().get("message", "Report requested."))
        return True

    # ------------------------------------------------------------
    # AI suggestions
    # ------------------------------------------------------------
    def _ask_assistant(self, url: str, payload: Dict[str, Any], default_error: str) -> str:
        try:
            response = self.http.post(
                url, json=payload, headers=self._csrf_headers(), timeout=self.assistant_timeout
            )
        except httpx.TimeoutException as e:
            self._fail(TIMEOUT_MESSAGE)
            raise AssistantTimeoutError(TIMEOUT_MESSAGE) from e
        except httpx.HTTPError as e:
            self._fail(default_error)
            raise AssistantError(default_error) from e

        if response.status_code == 401:
            self.state.user = None
        if response.status_code == 504:
            message = self._error_message(response, TIMEOUT_MESSAGE)
            self._fail(message)
            raise AssistantTimeoutError(message)
        if not response.is_success:
            message = self._error_message(response, default_error)
            self._fail(message)
            raise AssistantError(message)

        body = response.json()
        self._succeed(body.get("message", ""))
        return body.get("response", "")

    def request_recommendation(self, prompt: str, preferences: Optional[Dict[str, Any]] = None) -> str:
        return self._ask_assistant(
            "/ai/recommendation",
            {"prompt": prompt, "preferences": preferences},
            "Failed to get AI recommendation. Please try again.",
        )

    def request_strategy(self, investment_goal: str) -> str:
        return self._ask_assistant(
            "/ai/strategy",
            {"investment_goal": investment_goal},
            "Failed to get strategy suggestion. Please try again.",
        )

"""
Application Configuration Loader Module.

This module loads every setting the RealEstateConnect backend needs from a
single INI file and exposes them as strongly typed dataclasses.

Values are resolved once at startup with the following precedence
(highest first):

1. Environment variable ``REALESTATE_<SECTION>_<KEY>`` (e.g. ``REALESTATE_LLM_API_KEY``)
2. The INI file (``config.ini`` by default)
3. The dataclass defaults below

The ``[ADW]`` section is optional and may also be given entirely through
the environment. When neither is present the application falls
back to in-memory stores.
"""
import os
from dataclasses import dataclass, field
from configparser import ConfigParser, NoOptionError
from typing import List, Optional

ENV_PREFIX = "REALESTATE"

# ADWConfig attribute -> INI key
ADW_KEYS = (
    ("config_dir", "config_dir"),
    ("wallet_loc", "wallet_loc"),
    ("wallet_pw", "wallet_pw"),
    ("dsn", "dsn"),
    ("username", "USERNAME"),
    ("password", "PASSWORD"),
)


@dataclass
class ADWConfig:
    """
    Dataclass representing ADW connection configuration.

    Attributes:
        config_dir (str): Directory containing Oracle network configuration files.
        wallet_loc (str): Location of the ADW wallet.
        wallet_pw (str): Password for the ADW wallet.
        dsn (str): Database service name (TNS alias).
        username (str): Database username.
        password (str): Database password.
    """
    config_dir: str
    wallet_loc: str
    wallet_pw: str
    dsn: str
    username: str
    password: str


@dataclass
class SessionConfig:
    """
    Session cookie and password hashing settings.

    Attributes:
        cookie_name (str): Name of the cookie carrying the session id.
        cookie_secure (bool): Send the session cookie over HTTPS only.
        lifetime_minutes (int): Minutes before an idle session expires.
        bcrypt_rounds (int): bcrypt cost factor used for new hashes.
    """
    cookie_name: str = "realestate_session"
    cookie_secure: bool = False
    lifetime_minutes: int = 120
    bcrypt_rounds: int = 12


@dataclass
class LLMConfig:
    """
    Chat-completion endpoint settings.

    Attributes:
        endpoint (str): Full URL of the chat-completion endpoint.
        api_key (str): Bearer token sent to the endpoint.
        model (str): Model name placed in the request body.
        temperature (float): Sampling temperature.
        max_tokens (int): Upper bound on generated tokens.
        timeout_seconds (float): Client-side timeout for one call.
    """
    endpoint: str = "https://api.openai.com/v1/chat/completions"
    api_key: str = ""
    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1024
    timeout_seconds: float = 15.0


@dataclass
class AppConfig:
    """
    Top-level configuration resolved once when the app is created.
    """
    cors_origins: List[str] = field(default_factory=lambda: ["http://localhost:3000"])
    log_level: str = "INFO"
    csrf_protection: bool = False
    session: SessionConfig = field(default_factory=SessionConfig)
    llm: LLMConfig = field(default_factory=LLMConfig)
    adw: Optional[ADWConfig] = None


def _lookup(parser: ConfigParser, section: str, key: str) -> Optional[str]:
    """
    Return the raw value for section/key, honouring the environment override.
    """
    env_name = f"{ENV_PREFIX}_{section}_{key}".upper()
    if env_name in os.environ:
        return os.environ[env_name]
    if parser.has_option(section, key):
        return parser.get(section, key)
    return None


def _as_bool(value: str) -> bool:
    return value.strip().lower() in ("1", "true", "yes", "on")


def _has_adw_settings(parser: ConfigParser) -> bool:
    if parser.has_section("ADW"):
        return True
    return any(f"{ENV_PREFIX}_ADW_{key}".upper() in os.environ for _, key in ADW_KEYS)


def _adw_from_parser(parser: ConfigParser) -> ADWConfig:
    values = {}
    for attr, key in ADW_KEYS:
        value = _lookup(parser, "ADW", key)
        if value is None:
            raise NoOptionError(key, "ADW")
        values[attr] = value
    return ADWConfig(**values)


def load_adw_config(path: str = "config.ini") -> ADWConfig:
    """
    Loads ADW configutration from a file. ``REALESTATE_ADW_*`` variables
    take precedence over the file.
    """
    parser = ConfigParser()
    parser.read(path)
    return _adw_from_parser(parser)


def load_app_config(path: str = "config.ini") -> AppConfig:
    """
    Load the full application configuration.

    Args:
        path (str): INI file to read. A missing file is not an error; the
            environment and the defaults still apply.

    Returns:
        AppConfig: The resolved configuration.
    """
    parser = ConfigParser()
    parser.read(path)
    config = AppConfig()

    origins = _lookup(parser, "APP", "cors_origins")
    if origins is not None:
        config.cors_origins = [o.strip() for o in origins.split(",") if o.strip()]
    log_level = _lookup(parser, "APP", "log_level")
    if log_level is not None:
        config.log_level = log_level.upper()
    csrf = _lookup(parser, "APP", "csrf_protection")
    if csrf is not None:
        config.csrf_protection = _as_bool(csrf)

    session = config.session
    value = _lookup(parser, "SESSION", "cookie_name")
    if value is not None:
        session.cookie_name = value
    value = _lookup(parser, "SESSION", "cookie_secure")
    if value is not None:
        session.cookie_secure = _as_bool(value)
    value = _lookup(parser, "SESSION", "lifetime_minutes")
    if value is not None:
        session.lifetime_minutes = int(value)
    value = _lookup(parser, "SESSION", "bcrypt_rounds")
    if value is not None:
        session.bcrypt_rounds = int(value)

    llm = config.llm
    for key in ("endpoint", "api_key", "model"):
        value = _lookup(parser, "LLM", key)
        if value is not None:
            setattr(llm, key, value)
    value = _lookup(parser, "LLM", "temperature")
    if value is not None:
        llm.temperature = float(value)
    value = _lookup(parser, "LLM", "max_tokens")
    if value is not None:
        llm.max_tokens = int(value)
    value = _lookup(parser, "LLM", "timeout_seconds")
    if value is not None:
        llm.timeout_seconds = float(value)

    if _has_adw_settings(parser):
        config.adw = _adw_from_parser(parser)

    return config

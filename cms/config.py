# =============================================================================
# cms/config.py  —  Environment configuration & startup connection
# =============================================================================
#
# ENVIRONMENT VARIABLES (read after load_dotenv() in main.py):
#   DIRECTUS_URL        Base URL of the Directus instance
#                       (default: http://localhost:8055)
#   DIRECTUS_TOKEN      Static access token.  The only supported auth mode.
#   DIRECTUS_EMAIL      Recognized, but email/password auth is not
#   DIRECTUS_PASSWORD   implemented: supplying these instead of a token
#                       stops startup with a clear message.
#   DIRECTUS_TIMEOUT    Optional HTTP timeout in seconds.  Unset means the
#                       client waits indefinitely.
#   LOG_LEVEL           Logging level for the stderr log (default: INFO)
#
# STARTUP IS ALL-OR-NOTHING:
#   connect() performs one read-only probe (list collections).  If the
#   token is missing, rejected, or the server cannot be reached, a
#   ConfigurationError is raised and the process must not serve tools.
# =============================================================================

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

import httpx

from cms.directus import DirectusClient
from cms.errors import AuthNotImplementedError, ConfigurationError, RemoteAPIError

logger = logging.getLogger(__name__)

DEFAULT_DIRECTUS_URL = "http://localhost:8055"

AUTH_TOKEN = "token"

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


@dataclass(frozen=True)
class Settings:
    directus_url: str = DEFAULT_DIRECTUS_URL
    token: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = None
    timeout: Optional[float] = None
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ

        timeout = env.get("DIRECTUS_TIMEOUT") or None
        if timeout is not None:
            try:
                timeout = float(timeout)
            except ValueError:
                raise ConfigurationError(f"DIRECTUS_TIMEOUT must be a number of seconds, got {timeout!r}") from None

        log_level = (env.get("LOG_LEVEL") or "INFO").upper()
        if log_level not in _LOG_LEVELS:
            raise ConfigurationError(f"LOG_LEVEL must be one of {', '.join(_LOG_LEVELS)}, got {log_level!r}")

        return cls(
            directus_url=env.get("DIRECTUS_URL") or DEFAULT_DIRECTUS_URL,
            token=env.get("DIRECTUS_TOKEN") or None,
            email=env.get("DIRECTUS_EMAIL") or None,
            password=env.get("DIRECTUS_PASSWORD") or None,
            timeout=timeout,
            log_level=log_level,
        )

    def auth_mode(self) -> str:
        """Pick the authentication mode; a token always wins."""
        if self.token:
            return AUTH_TOKEN
        if self.email and self.password:
            raise AuthNotImplementedError(
                "Email/password authentication not implemented yet. Please use DIRECTUS_TOKEN"
            )
        raise ConfigurationError(
            "No authentication method provided. Set DIRECTUS_TOKEN or DIRECTUS_EMAIL/DIRECTUS_PASSWORD"
        )


def connect(settings: Settings, transport: Optional[httpx.BaseTransport] = None) -> DirectusClient:
    """Build an authenticated client and confirm it can list collections."""
    logger.info("Connecting to Directus at: %s", settings.directus_url)
    settings.auth_mode()
    logger.info("Using static token authentication")

    try:
        client = DirectusClient(
            settings.directus_url,
            settings.token,
            transport=transport,
            timeout=settings.timeout,
        )
    except httpx.InvalidURL as e:
        raise ConfigurationError(f"DIRECTUS_URL is not a valid URL ({settings.directus_url!r}): {e}") from e

    try:
        collections = client.read_collections()
    except RemoteAPIError as e:
        client.close()
        raise ConfigurationError(f"Failed to authenticate with Directus: {e}") from e

    logger.info("Successfully connected to Directus. Found %d collections.", len(collections or []))
    return client

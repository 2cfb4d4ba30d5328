# =============================================================================
# cms/errors.py  —  Exception taxonomy
# =============================================================================
#
# Two tiers:
#   - Startup-fatal:     ConfigurationError, AuthNotImplementedError.
#                        Raised while building settings or probing the
#                        remote API.  Only main.py catches them.
#   - Per-invocation:    UnknownToolError, InvalidArgumentError,
#                        RemoteAPIError (and NotFoundError).
#                        Caught at the Dispatcher boundary and rendered as
#                        "Error: ..." text.
# =============================================================================

from typing import Optional


class CMSError(Exception):
    """Base class for every error raised by this project."""


# -----------------------------------------------------------------------------
# Startup-fatal
# -----------------------------------------------------------------------------
class ConfigurationError(CMSError):
    """Missing or invalid configuration, or the connectivity probe failed."""


class AuthNotImplementedError(ConfigurationError):
    """Email/password authentication was requested but is not supported."""


# -----------------------------------------------------------------------------
# Per-invocation
# -----------------------------------------------------------------------------
class UnknownToolError(CMSError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown tool: {name}")


class InvalidArgumentError(CMSError):
    def __init__(self, tool_name: str, argument: str, message: str):
        self.tool_name = tool_name
        self.argument = argument
        super().__init__(f"Invalid argument '{argument}' for {tool_name}: {message}")


class RemoteAPIError(CMSError):
    """The remote content API answered with an error, or could not be reached.

    Attributes:
        status_code: HTTP status of the failed response (None for transport
            failures such as connection refused).
        code: The Directus error code from ``errors[0].extensions.code``,
            e.g. "FORBIDDEN" or "INVALID_QUERY", when the body carried one.
    """

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[str] = None):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)


class NotFoundError(RemoteAPIError):
    """The remote API reported that the collection or item does not exist."""

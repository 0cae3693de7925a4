"""
Exceptions raised by the OHA client.

Every layer raises one of these; the CLI entry point is the only place that
turns them into a printed message and an exit status.
"""
from typing import Optional


class OhaError(Exception):
    """Base exception for all client errors."""

    def __init__(self, message: str, exit_code: int = 1) -> None:
        self.exit_code = exit_code
        super().__init__(message)


class ConfigError(OhaError):
    """Configuration was found but failed validation."""


class NotConfiguredError(ConfigError):
    """Neither a config file nor the full set of environment variables exists."""


class AuthError(OhaError):
    """Login was rejected by the server."""


class ValidationError(OhaError):
    """A command-line argument failed validation."""


class TransportError(OhaError):
    """The HTTP request could not be completed."""

    def __init__(self, message: str, url: Optional[str] = None) -> None:
        self.url = url
        super().__init__(message)


class ResponseError(OhaError):
    """The server answered with a body the client could not parse."""

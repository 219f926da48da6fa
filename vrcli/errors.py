"""Exception hierarchy for vrcli."""

from __future__ import annotations


class VRCliError(Exception):
    """Base class for every error vrcli reports to the user."""


class ConfigError(VRCliError):
    """The persisted configuration could not be read."""


class FetchError(VRCliError):
    """A request against the remote API failed."""

    def __init__(self, message: str, *, path: str = "", status_code: int | None = None) -> None:
        super().__init__(message)
        self.path = path
        self.status_code = status_code


class TransportError(FetchError):
    """Network failure or a non-success HTTP response."""


class AuthorizationError(TransportError):
    """The server rejected our credentials (HTTP 401/403)."""

    def __str__(self) -> str:
        base = super().__str__()
        return f"{base} (credentials invalid or expired, log in again)"

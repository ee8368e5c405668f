# central source for exceptions thrown by fluxclient

from dataclasses import dataclass


class FluxClientError(Exception):
    """Base exception for fluxclient."""


@dataclass
class ApiError(FluxClientError):
    """
    Raised when the server answers with an error envelope.

    Transport failures (connection refused, timeouts, TLS problems) are not
    wrapped; they surface as the original `requests` exceptions.
    """

    method: str
    url: str
    status_code: int | None = None
    code: str | None = None
    message: str | None = None
    response_text: str | None = None
    retry_after: int | None = None

    def __str__(self) -> str:
        parts = [f"{self.method} {self.url}"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.code:
            parts.append(f"code={self.code}")
        if self.message:
            parts.append(self.message)
        return " | ".join(parts)


class InvalidAddressError(FluxClientError, ValueError):
    """Raised when a provided server URL cannot be normalized."""


class ValidationError(FluxClientError, ValueError):
    """Raised when user input is invalid (e.g. empty username for setup)."""


class ClientClosedError(FluxClientError, RuntimeError):
    """Raised when writing through a write client that was already closed."""

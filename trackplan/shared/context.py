"""Request context management using contextvars.

Holds the request id for the current request so log records emitted
anywhere during that request can carry it (see telemetry.logging).

Usage:
    token = set_request_id("abc123")
    request_id = get_request_id()
    reset_request_id(token)
"""

from contextvars import ContextVar, Token

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def set_request_id(request_id: str | None) -> Token[str | None]:
    """Set the request id for this async task; returns a token for reset."""
    return _request_id.set(request_id)


def get_request_id() -> str | None:
    return _request_id.get()


def reset_request_id(token: Token[str | None]) -> None:
    """Restore the request id that was current before set_request_id()."""
    _request_id.reset(token)

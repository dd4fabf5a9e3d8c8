"""Error taxonomy for the Kachy Valkey client.

Every failure surfaces as a :class:`KachyError` subclass. HTTP statuses and
transport faults are translated by :func:`map_http_error` and
:func:`map_transport_error`, which the client applies after every request.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx


class KachyError(Exception):
    kind = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class KachyConfigurationError(KachyError):
    kind = "configuration"


class KachyConnectionError(KachyError):
    kind = "connection"


class KachyAuthenticationError(KachyError):
    kind = "authentication"


class KachyResponseError(KachyError):
    kind = "response"

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class KachyNotInitializedError(KachyError):
    kind = "not_initialized"


def map_http_error(status_code: int, reason: str, body: Any = None) -> KachyError:
    """Translate an HTTP error status into the matching :class:`KachyError`."""
    if status_code == 401:
        return KachyAuthenticationError("Authentication failed")
    detail = None
    if isinstance(body, dict):
        detail = body.get("message")
    return KachyResponseError(f"API error {status_code}: {detail or reason}", status_code=status_code)


def map_transport_error(exc: Exception) -> KachyConnectionError:
    if isinstance(exc, httpx.TimeoutException):
        return KachyConnectionError("Request timeout")
    if isinstance(exc, httpx.ConnectError):
        return KachyConnectionError("Connection failed")
    return KachyConnectionError(f"Request failed: {exc}")


__all__ = [
    "KachyError",
    "KachyConfigurationError",
    "KachyConnectionError",
    "KachyAuthenticationError",
    "KachyResponseError",
    "KachyNotInitializedError",
    "map_http_error",
    "map_transport_error",
]

"""Maps raw exceptions and HTTP status codes onto ErrorKind."""

import asyncio
import json
from collections.abc import Mapping

from pydantic import ValidationError

from blueboxy.remote.domain.error_kind import ErrorKind
from blueboxy.remote.domain.errors import RemoteCallError


def retry_after_from_headers(headers: Mapping[str, str] | None) -> float | None:
    """Seconds from a numeric Retry-After header, or None when absent or unparsable."""
    if not headers:
        return None
    raw = headers.get("retry-after")
    if raw is None:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


def classify_status(
    status_code: int,
    reason: str,
    retry_after_seconds: float | None = None,
) -> RemoteCallError:
    """Build a RemoteCallError from an HTTP status code."""
    if status_code == 400:
        kind = ErrorKind.BAD_REQUEST
    elif status_code == 401:
        kind = ErrorKind.UNAUTHORIZED
    elif status_code == 403:
        kind = ErrorKind.FORBIDDEN
    elif status_code == 404:
        kind = ErrorKind.NOT_FOUND
    elif status_code == 429:
        kind = ErrorKind.RATE_LIMITED
    elif 500 <= status_code <= 599:
        kind = ErrorKind.SERVER_ERROR
    else:
        kind = ErrorKind.UNKNOWN
    return RemoteCallError(
        kind=kind,
        reason=reason,
        status_code=status_code,
        retry_after_seconds=retry_after_seconds if kind is ErrorKind.RATE_LIMITED else None,
    )


def classify(exc: BaseException) -> RemoteCallError:
    """Return the RemoteCallError describing exc.

    An operation's own classification (a raised RemoteCallError) is returned
    unchanged. Everything else gets a best-effort kind with the original
    exception attached as ``__cause__``.
    """
    if isinstance(exc, RemoteCallError):
        return exc

    if isinstance(exc, asyncio.CancelledError):
        kind = ErrorKind.CANCELLED
    elif isinstance(exc, (json.JSONDecodeError, ValidationError)):
        kind = ErrorKind.DECODING
    elif isinstance(exc, (TimeoutError, ConnectionError, OSError)):
        kind = ErrorKind.CONNECTIVITY
    else:
        kind = ErrorKind.UNKNOWN

    reason = str(exc) or type(exc).__name__
    error = RemoteCallError(kind=kind, reason=reason)
    error.__cause__ = exc
    return error

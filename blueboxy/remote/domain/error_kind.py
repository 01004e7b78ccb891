"""ErrorKind — classification of every failure a remote call can surface."""

from enum import StrEnum


class ErrorKind(StrEnum):
    CONNECTIVITY = "connectivity"
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    NOT_FOUND = "not_found"
    BAD_REQUEST = "bad_request"
    RATE_LIMITED = "rate_limited"
    SERVER_ERROR = "server_error"
    DECODING = "decoding"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"

    @property
    def inherently_retryable(self) -> bool:
        """Whether a retry could ever succeed without caller intervention.

        UNKNOWN counts as retryable; policies that want to be conservative
        simply leave it out of their retryable set.
        """
        return self in _RETRYABLE

    @property
    def title(self) -> str:
        """Short label suitable for an alert heading."""
        return _TITLES[self]


_RETRYABLE = frozenset(
    {
        ErrorKind.CONNECTIVITY,
        ErrorKind.RATE_LIMITED,
        ErrorKind.SERVER_ERROR,
        ErrorKind.UNKNOWN,
    }
)

_TITLES: dict[ErrorKind, str] = {
    ErrorKind.CONNECTIVITY: "Connection Error",
    ErrorKind.UNAUTHORIZED: "Sign In Required",
    ErrorKind.FORBIDDEN: "Access Denied",
    ErrorKind.NOT_FOUND: "Not Found",
    ErrorKind.BAD_REQUEST: "Invalid Request",
    ErrorKind.RATE_LIMITED: "Too Many Requests",
    ErrorKind.SERVER_ERROR: "Server Error",
    ErrorKind.DECODING: "Data Error",
    ErrorKind.CANCELLED: "Cancelled",
    ErrorKind.UNKNOWN: "Error",
}

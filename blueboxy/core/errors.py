"""Base exception class for all BlueBoxy-specific errors."""


class BlueBoxyError(Exception):
    """Base class for all BlueBoxy errors."""

    def __init__(self, message: str, retriable: bool = False) -> None:
        super().__init__(message)
        self.retriable = retriable

"""Custom exception hierarchy for inventory-client."""

from enum import Enum


class ErrorKind(str, Enum):
    TRANSPORT = "TRANSPORT"
    STATUS = "STATUS"
    VALIDATION = "VALIDATION"
    COMPOSITE = "COMPOSITE"


class InventoryClientError(Exception):
    """Base exception for all inventory-client errors.

    Every failure the client surfaces to a user carries a readable
    ``message`` and an :class:`ErrorKind`.
    """

    kind: ErrorKind = ErrorKind.TRANSPORT

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class RequestError(InventoryClientError):
    """Raised by the request client on transport, parse or status failures."""

    def __init__(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.STATUS,
        status: int | None = None,
    ) -> None:
        super().__init__(message)
        self.kind = kind
        self.status = status

    def __str__(self) -> str:
        if self.status:
            return f"{self.message} (status: {self.status})"
        return self.message


class ValidationError(InventoryClientError):
    """Raised when a draft violates a local rule; no request is issued."""

    kind = ErrorKind.VALIDATION


class CompositeError(InventoryClientError):
    """Raised when a later step of a multi-step submission fails.

    The earlier step is not rolled back; ``completed`` holds its result.
    """

    kind = ErrorKind.COMPOSITE

    def __init__(self, message: str, completed: object = None) -> None:
        super().__init__(message)
        self.completed = completed


class ConfigurationError(InventoryClientError):
    """Raised when configuration is invalid or missing."""


class StorageError(InventoryClientError):
    """Raised when the durable key-value store cannot be read or written."""

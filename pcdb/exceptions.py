"""Client exception hierarchy.

All custom exceptions inherit from PCDBError.
Each exception has an error code for structured error handling.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Error codes for structured error handling."""

    # General errors (1xxx)
    INTERNAL_ERROR = "PCDB-1000"
    CONFIGURATION_ERROR = "PCDB-1001"

    # Input and payload errors (2xxx)
    VALIDATION_FAILED = "PCDB-2000"
    INVALID_ARGUMENT = "PCDB-2001"
    INVALID_SPECIFICATION = "PCDB-2002"

    # Schema store errors (3xxx)
    SCHEMA_NOT_FOUND = "PCDB-3000"
    SCHEMA_INVALID = "PCDB-3001"

    # Remote service errors (4xxx)
    TRANSPORT_ERROR = "PCDB-4000"
    INVALID_SERVER_RESPONSE = "PCDB-4001"


class PCDBError(Exception):
    """Base exception for all client errors.

    Attributes:
        message: Human-readable error message.
        code: Structured error code.
        details: Additional error context.
    """

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.INTERNAL_ERROR,
        details: dict[str, Any] | None = None,
    ) -> None:
        self.message = message
        self.code = code
        self.details = details or {}
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """Convert exception to a plain dictionary."""
        return {
            "error": {
                "code": self.code.value,
                "message": self.message,
                "details": self.details,
            }
        }


class ConfigurationError(PCDBError):
    """Configuration or environment error."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.CONFIGURATION_ERROR, details)


class ValidationFailedError(PCDBError):
    """A payload or response does not satisfy its schema."""

    def __init__(
        self,
        message: str,
        code: ErrorCode = ErrorCode.VALIDATION_FAILED,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code, details)


class InvalidArgumentError(ValidationFailedError):
    """A required identifier was empty."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.INVALID_ARGUMENT, details)


class InvalidSpecificationError(PCDBError):
    """An index spec resolves to neither or both of pod and serverless."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.INVALID_SPECIFICATION, details)


class SchemaNotFoundError(PCDBError):
    """Schema file does not exist in the schema store."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.SCHEMA_NOT_FOUND, details)


class SchemaInvalidError(PCDBError):
    """Schema file is not a usable JSON-Schema object."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.SCHEMA_INVALID, details)


class TransportError(PCDBError):
    """Network failure or undecodable response."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.TRANSPORT_ERROR, details)


class InvalidServerResponseError(PCDBError):
    """Server returned a shape a composite operation cannot act on."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, ErrorCode.INVALID_SERVER_RESPONSE, details)

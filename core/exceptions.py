"""
Custom exceptions for the snapshot pipeline with structured error context.

This module provides the exception hierarchy used to decide whether a
failure aborts a run or only removes one item from it. Each exception
includes context information for debugging and log output.

Exception Hierarchy:
    ETLException (base)
    ├── ExtractionError
    │   └── APIExtractionError
    │       ├── NetworkError
    │       ├── RateLimitError
    │       ├── AuthenticationError
    │       └── ResourceNotFoundError
    ├── TransformationError
    │   ├── RecordValidationError
    │   └── DataFormatError
    └── LoadError
        └── DatabaseError
            └── DatabaseConnectionError

Run policy:
    - Raised while fetching the list, or by the sink: fatal for the run.
    - Raised while resolving or shaping a single item: the item is skipped.
"""

from typing import Optional, Dict, Any
from datetime import datetime, timezone


class ETLException(Exception):
    """
    Base exception for all ETL-related errors.

    Attributes:
        message: Human-readable error message
        context: Additional context information (source, url, etc.)
        original_exception: The original exception that was caught (if any)
    """

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None
    ):
        self.message = message
        self.context = context or {}
        self.original_exception = original_exception
        self.timestamp = datetime.now(timezone.utc)

        # Add timestamp to context
        self.context["error_timestamp"] = self.timestamp.isoformat()

        # Chain original exception if provided
        super().__init__(message)
        if original_exception:
            self.__cause__ = original_exception

    def __str__(self) -> str:
        """Format error message with context."""
        base_msg = f"{self.__class__.__name__}: {self.message}"

        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            base_msg += f" | Context: {context_str}"

        if self.original_exception:
            base_msg += f" | Caused by: {type(self.original_exception).__name__}: {str(self.original_exception)}"

        return base_msg

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "context": self.context,
            "timestamp": self.timestamp.isoformat(),
            "original_error": str(self.original_exception) if self.original_exception else None
        }


# ============================================================================
# Extraction Errors
# ============================================================================

class ExtractionError(ETLException):
    """Base exception for data extraction failures."""
    pass


class APIExtractionError(ExtractionError):
    """
    Exception raised when an upstream API call fails.

    Context should include:
        - api_url: The API endpoint that failed
        - status_code: HTTP status code (if applicable)
        - response_body: Response body (truncated if large)
    """
    pass


class NetworkError(APIExtractionError):
    """Timeouts, connection failures and upstream 5xx responses."""
    pass


class RateLimitError(APIExtractionError):
    """Rate limiting errors (HTTP 429). Not retried; the item is dropped."""

    def __init__(
        self,
        message: str,
        context: Optional[Dict[str, Any]] = None,
        original_exception: Optional[Exception] = None,
        retry_after: Optional[int] = None
    ):
        super().__init__(message, context, original_exception)
        self.retry_after = retry_after  # Seconds the upstream asked us to wait
        if retry_after:
            self.context["retry_after"] = retry_after


class AuthenticationError(APIExtractionError):
    """Authentication failures (HTTP 401, 403)."""
    pass


class ResourceNotFoundError(APIExtractionError):
    """Resource not found errors (HTTP 404)."""
    pass


# ============================================================================
# Transformation Errors
# ============================================================================

class TransformationError(ETLException):
    """Base exception for data transformation failures."""
    pass


class RecordValidationError(TransformationError):
    """
    Exception raised when a list entry or row cannot be built.

    Context should include:
        - source_name: Name of the data source
        - item: Label of the offending item
        - field_errors: Field-level errors reported by the schema
    """
    pass


class DataFormatError(TransformationError):
    """
    Exception raised when a payload cannot be decoded into the expected shape.

    Context should include:
        - api_url: URL the payload came from
        - response_body: Response body (truncated if large)
    """
    pass


# ============================================================================
# Load Errors
# ============================================================================

class LoadError(ETLException):
    """Base exception for data loading failures."""
    pass


class DatabaseError(LoadError):
    """
    Exception raised when database operations fail.

    Context should include:
        - operation: Type of database operation (INSERT)
        - table_name: Name of the table
    """
    pass


class DatabaseConnectionError(DatabaseError):
    """The store could not be reached at run start."""
    pass

"""
Structured error types for rundeck-spine.

Every failure raised by the codec, the retrieval client and the HTTP fetcher
is a RundeckSpineError subclass carrying a category, a retryable flag, a
structured context and an optional chained cause.

Manifesto:
    - **Typed Error Hierarchy:** Transport, document and lookup failures are
      distinct types so callers can branch on them
    - **Locate the fault:** Decode errors name the element, attribute or
      field path that broke the document
    - **Error Chaining:** Wrapped exceptions are kept as ``cause``
    - **No partial results:** A raised decode error means nothing was built

Architecture:
    ::

        ┌──────────────────────────────────────────────────────────────┐
        │                     RundeckSpineError                        │
        │       (category, retryable, context, cause)                  │
        ├──────────────────────────────────────────────────────────────┤
        │                                                              │
        │  TransportError         DecodeError          JobNotFoundError│
        │  (TRANSPORT)            (PARSE)              (NOT_FOUND)     │
        │       │                     │                                │
        │  AuthenticationError   MalformedDocumentError                │
        │  TransportTimeoutError SchemaViolationError (VALIDATION)     │
        │                                                              │
        │  ConfigError (CONFIG)                                        │
        └──────────────────────────────────────────────────────────────┘

Examples:
    >>> err = SchemaViolationError("configuration entry missing key")
    >>> err.with_context(element="entry").context.element
    'entry'
    >>> err.category.value
    'VALIDATION'

Tags:
    error-handling, exception-hierarchy, codec, transport, rundeck-spine

Doc-Types:
    - API Reference
    - Error Handling Guide
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(str, Enum):
    """Standard error categories for classification and routing."""

    TRANSPORT = "TRANSPORT"
    AUTH = "AUTH"
    PARSE = "PARSE"
    VALIDATION = "VALIDATION"
    NOT_FOUND = "NOT_FOUND"
    CONFIG = "CONFIG"
    INTERNAL = "INTERNAL"


@dataclass
class ErrorContext:
    """
    Structured metadata attached to an error.

    Attributes:
        project: Project being listed when the error occurred
        job_id: Job identifier being fetched
        element: Offending element tag
        attribute: Offending attribute name
        field_path: Slash-separated document path of the failing field
        url: URL that was being requested
        http_status: HTTP status code if applicable
        metadata: Additional key-value pairs
    """

    # Retrieval context
    project: str | None = None
    job_id: str | None = None

    # Document context
    element: str | None = None
    attribute: str | None = None
    field_path: str | None = None

    # Request context
    url: str | None = None
    http_status: int | None = None

    metadata: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging."""
        result = {}
        for key in ["project", "job_id", "element", "attribute", "field_path",
                    "url", "http_status"]:
            value = getattr(self, key)
            if value is not None:
                result[key] = value
        if self.metadata:
            result.update(self.metadata)
        return result


class RundeckSpineError(Exception):
    """
    Base exception for all rundeck-spine errors.

    Subclasses set ``default_category`` and ``default_retryable`` so that
    raising sites only pass the message and whatever context they have.
    """

    default_category: ErrorCategory = ErrorCategory.INTERNAL
    default_retryable: bool = False

    def __init__(
        self,
        message: str,
        *,
        category: ErrorCategory | None = None,
        retryable: bool | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.category = category or self.default_category
        self.retryable = retryable if retryable is not None else self.default_retryable
        self.context = context or ErrorContext()
        self.cause = cause

        if cause is not None:
            self.__cause__ = cause

    def with_context(self, **kwargs: Any) -> RundeckSpineError:
        """
        Add context to this error (fluent API).

        Usage:
            raise SchemaViolationError("bad tag").with_context(element="foo")
        """
        for key, value in kwargs.items():
            if hasattr(self.context, key):
                setattr(self.context, key, value)
            else:
                self.context.metadata[key] = value
        return self

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        result = {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "category": self.category.value,
            "retryable": self.retryable,
        }
        context_dict = self.context.to_dict()
        if context_dict:
            result["context"] = context_dict
        if self.cause is not None:
            result["cause"] = str(self.cause)
        return result

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r}, category={self.category.value})"


# =============================================================================
# TRANSPORT ERRORS (raised by fetchers, propagated unchanged)
# =============================================================================


class TransportError(RundeckSpineError):
    """The fetch collaborator failed (network, HTTP status)."""

    default_category = ErrorCategory.TRANSPORT
    default_retryable = True


class TransportTimeoutError(TransportError):
    """The request did not complete in time."""


class AuthenticationError(TransportError):
    """The scheduling service rejected the credentials."""

    default_category = ErrorCategory.AUTH
    default_retryable = False


# =============================================================================
# DOCUMENT ERRORS (never retryable)
# =============================================================================


class DecodeError(RundeckSpineError):
    """Base class for failures while turning a document into entities."""

    default_category = ErrorCategory.PARSE
    default_retryable = False


class MalformedDocumentError(DecodeError):
    """The raw bytes are not well-formed markup."""


class SchemaViolationError(DecodeError):
    """
    Well-formed markup that does not fit the job schema.

    Raised for unexpected tags, missing required keys and values that do
    not coerce to the field's type.
    """

    default_category = ErrorCategory.VALIDATION


# =============================================================================
# LOOKUP / CONFIG ERRORS
# =============================================================================


class JobNotFoundError(RundeckSpineError):
    """A job lookup returned an empty collection."""

    default_category = ErrorCategory.NOT_FOUND
    default_retryable = False


class ConfigError(RundeckSpineError):
    """Invalid client configuration."""

    default_category = ErrorCategory.CONFIG
    default_retryable = False


def is_retryable(error: Exception) -> bool:
    """Check if an error is retryable."""
    if isinstance(error, RundeckSpineError):
        return error.retryable
    return isinstance(error, (ConnectionError, TimeoutError))


__all__ = [
    "ErrorCategory",
    "ErrorContext",
    "RundeckSpineError",
    # Transport
    "TransportError",
    "TransportTimeoutError",
    "AuthenticationError",
    # Document
    "DecodeError",
    "MalformedDocumentError",
    "SchemaViolationError",
    # Lookup / config
    "JobNotFoundError",
    "ConfigError",
    "is_retryable",
]

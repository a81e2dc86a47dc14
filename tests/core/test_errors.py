"""Tests for rundeck_spine.core.errors module."""

import pytest

from rundeck_spine.core.errors import (
    AuthenticationError,
    ConfigError,
    DecodeError,
    ErrorCategory,
    ErrorContext,
    JobNotFoundError,
    MalformedDocumentError,
    RundeckSpineError,
    SchemaViolationError,
    TransportError,
    TransportTimeoutError,
    is_retryable,
)


class TestErrorContext:
    """Test ErrorContext dataclass."""

    def test_create_empty_context(self):
        ctx = ErrorContext()
        assert ctx.job_id is None
        assert ctx.metadata == {}

    def test_to_dict_includes_set_fields(self):
        ctx = ErrorContext(element="entry", field_path="job/x", metadata={"k": "v"})
        d = ctx.to_dict()
        assert d == {"element": "entry", "field_path": "job/x", "k": "v"}


class TestRundeckSpineError:
    """Test the base error class."""

    def test_create_minimal_error(self):
        err = RundeckSpineError("Something failed")
        assert err.message == "Something failed"
        assert err.category == ErrorCategory.INTERNAL
        assert err.retryable is False

    def test_create_with_cause(self):
        cause = ValueError("bad")
        err = RundeckSpineError("wrapped", cause=cause)
        assert err.cause is cause
        assert err.__cause__ is cause

    def test_with_context_fluent_api(self):
        err = RundeckSpineError("Failed").with_context(job_id="j-1", extra="x")
        assert err.context.job_id == "j-1"
        assert err.context.metadata["extra"] == "x"

    def test_to_dict(self):
        err = SchemaViolationError("bad").with_context(element="entry")
        d = err.to_dict()
        assert d["error_type"] == "SchemaViolationError"
        assert d["category"] == "VALIDATION"
        assert d["retryable"] is False
        assert d["context"] == {"element": "entry"}

    def test_repr(self):
        assert repr(JobNotFoundError("gone")) == "JobNotFoundError('gone', category=NOT_FOUND)"


class TestHierarchy:
    @pytest.mark.parametrize(
        "cls,category,retryable",
        [
            (TransportError, ErrorCategory.TRANSPORT, True),
            (TransportTimeoutError, ErrorCategory.TRANSPORT, True),
            (AuthenticationError, ErrorCategory.AUTH, False),
            (MalformedDocumentError, ErrorCategory.PARSE, False),
            (SchemaViolationError, ErrorCategory.VALIDATION, False),
            (JobNotFoundError, ErrorCategory.NOT_FOUND, False),
            (ConfigError, ErrorCategory.CONFIG, False),
        ],
    )
    def test_defaults(self, cls, category, retryable):
        err = cls("x")
        assert err.category == category
        assert err.retryable is retryable

    def test_decode_errors_share_base(self):
        assert issubclass(MalformedDocumentError, DecodeError)
        assert issubclass(SchemaViolationError, DecodeError)
        assert not issubclass(TransportError, DecodeError)

    def test_auth_is_transport(self):
        assert issubclass(AuthenticationError, TransportError)


class TestIsRetryable:
    def test_spine_errors_use_flag(self):
        assert is_retryable(TransportError("x")) is True
        assert is_retryable(TransportError("x", retryable=False)) is False
        assert is_retryable(SchemaViolationError("x")) is False

    def test_builtin_connection_errors(self):
        assert is_retryable(ConnectionResetError()) is True
        assert is_retryable(ValueError()) is False

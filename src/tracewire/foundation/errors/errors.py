"""Propagation error taxonomy.

Inject and Extract are the only operations in tracewire that fail. Failures
are described by a structured, immutable ``PropagationError`` record and
raised through a small exception hierarchy keyed by ``ErrorCode``:

- UNSUPPORTED_FORMAT: the tracer does not recognize the format identifier
- INVALID_CARRIER: the carrier does not satisfy the reader/writer contract,
  or the carrier itself failed
- TRACE_NOT_FOUND: the carrier was readable but held no trace identity
- TRACE_CORRUPTED: identity keys were present but malformed
- INVALID_SPAN_CONTEXT: a context from a different tracer implementation
"""

from __future__ import annotations

from enum import StrEnum
from typing import Annotated, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator


class ErrorCode(StrEnum):
    """Machine-readable classification of propagation failures."""
    UNSUPPORTED_FORMAT = "UNSUPPORTED_FORMAT"
    INVALID_CARRIER = "INVALID_CARRIER"
    TRACE_NOT_FOUND = "TRACE_NOT_FOUND"
    TRACE_CORRUPTED = "TRACE_CORRUPTED"
    INVALID_SPAN_CONTEXT = "INVALID_SPAN_CONTEXT"


# Codes that callers handle by starting a root span rather than reporting
_ROUTINE_CODES: frozenset[ErrorCode] = frozenset({ErrorCode.TRACE_NOT_FOUND})


class PropagationError(BaseModel):
    """Structured description of an Inject/Extract failure.

    Attributes:
        operation: "inject" or "extract"
        message: Human-readable error message
        code: Machine-readable error code
        format: Name of the format involved (informational only)
        details: Optional detail, e.g. the offending carrier key
    """

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        validate_default=True,
        json_schema_extra={
            "title": "Propagation Error",
            "examples": [{
                "operation": "extract",
                "message": "malformed identity field 'spanid'",
                "code": "TRACE_CORRUPTED",
                "format": "text_map",
            }],
        },
    )

    operation: Annotated[str, Field(min_length=1)]
    message: Annotated[str, Field(min_length=1)]
    code: ErrorCode
    format: str | None = None
    details: str | None = Field(default=None, repr=False)

    @field_validator("message", mode="before")
    @classmethod
    def _ensure_message(cls, v: str | Exception) -> str:
        """Accept Exception objects and extract message."""
        return str(v) if isinstance(v, Exception) else v

    @computed_field
    @property
    def is_routine(self) -> bool:
        """Whether the failure is an expected "no incoming trace" outcome."""
        return self.code in _ROUTINE_CODES

    def render(self) -> str:
        fmt = f" ({self.format})" if self.format else ""
        out = f"{self.operation}{fmt} failed [{self.code}]: {self.message}"
        return f"{out}\n{self.details}" if self.details else out

    __str__ = render


class PropagationException(Exception):
    """Exception wrapping a PropagationError for raising.

    Subclasses pin the error code, so callers can catch the specific failure
    they care about (usually SpanContextNotFoundError).
    """

    __slots__ = ("error",)
    code: ClassVar[ErrorCode]

    def __init__(self, error: PropagationError) -> None:
        self.error = error
        super().__init__(error.message)

    @classmethod
    def create(cls, operation: str, message: str, *, format: object = None, details: str | None = None) -> Self:  # noqa: A002
        """Create an exception of this class's error code."""
        return cls(PropagationError(
            operation=operation,
            message=message,
            code=cls.code,
            format=format_name(format) if format is not None else None,
            details=details,
        ))

    @property
    def is_routine(self) -> bool:
        return self.error.is_routine


class UnsupportedFormatError(PropagationException):
    code = ErrorCode.UNSUPPORTED_FORMAT


class InvalidCarrierError(PropagationException):
    code = ErrorCode.INVALID_CARRIER


class SpanContextNotFoundError(PropagationException):
    code = ErrorCode.TRACE_NOT_FOUND


class SpanContextCorruptedError(PropagationException):
    code = ErrorCode.TRACE_CORRUPTED


class InvalidSpanContextError(PropagationException):
    code = ErrorCode.INVALID_SPAN_CONTEXT


_EXCEPTIONS: dict[ErrorCode, type[PropagationException]] = {
    ErrorCode.UNSUPPORTED_FORMAT: UnsupportedFormatError,
    ErrorCode.INVALID_CARRIER: InvalidCarrierError,
    ErrorCode.TRACE_NOT_FOUND: SpanContextNotFoundError,
    ErrorCode.TRACE_CORRUPTED: SpanContextCorruptedError,
    ErrorCode.INVALID_SPAN_CONTEXT: InvalidSpanContextError,
}


def exception_for(error: PropagationError) -> PropagationException:
    """Build the exception subclass matching ``error.code``."""
    return _EXCEPTIONS[error.code](error)


def format_name(fmt: object) -> str:
    """Best-effort display name for a format identifier."""
    return str(getattr(fmt, "name", None) or fmt).lower()

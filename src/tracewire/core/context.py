"""SpanContext: the portable, carrier-independent state of a span.

A SpanContext carries two things across process boundaries:
- identity (trace id, span id, ...), immutable and implementation-defined
- baggage, a mutable string -> string mapping shared down the trace

Concrete tracers subclass SpanContext and describe their identity through
three hooks (``IDENTITY_FIELDS``, ``identity()``, ``from_identity()``) so the
generic propagators can encode any tracer's context without knowing its
fields.
"""

from __future__ import annotations

import threading
from collections.abc import Mapping
from typing import ClassVar, Self

from tracewire.foundation.errors import BaggageDict


def normalize_baggage_key(key: str) -> str:
    """Baggage keys are case-insensitive; the canonical form is lowercase."""
    return key.lower()


class SpanContext:
    """Base span context with a thread-safe baggage store.

    Baggage writes and reads on one context may race freely; the lock keeps
    the mapping consistent. Identity lives in subclass slots and is never
    reassigned after construction.

    Example:
        >>> ctx = SpanContext()
        >>> ctx.set_baggage_item("User-Id", "42").baggage_item("user-id")
        '42'
    """

    __slots__ = ("_baggage", "_lock")

    # Names of the identity fields, in the order they are written to carriers
    IDENTITY_FIELDS: ClassVar[tuple[str, ...]] = ()

    def __init__(self, baggage: Mapping[str, str] | None = None) -> None:
        self._baggage: BaggageDict = {normalize_baggage_key(k): v for k, v in (baggage or {}).items()}
        self._lock = threading.Lock()

    # ─────────────────────────────────────────────────────────────────
    # Baggage
    # ─────────────────────────────────────────────────────────────────

    def set_baggage_item(self, key: str, value: str) -> Self:
        """Set a baggage item, returns self for chaining."""
        with self._lock:
            self._baggage[normalize_baggage_key(key)] = value
        return self

    def baggage_item(self, key: str) -> str | None:
        """Get a baggage item, or None when absent."""
        with self._lock:
            return self._baggage.get(normalize_baggage_key(key))

    @property
    def baggage(self) -> BaggageDict:
        """Snapshot copy of all baggage items."""
        with self._lock:
            return dict(self._baggage)

    # ─────────────────────────────────────────────────────────────────
    # Identity hooks (used by propagators)
    # ─────────────────────────────────────────────────────────────────

    def identity(self) -> dict[str, str]:
        """Identity fields as strings, keyed by IDENTITY_FIELDS names."""
        return {}

    @classmethod
    def parse_identity_field(cls, name: str, value: str) -> object:
        """Parse one identity field read from a carrier.

        Raises:
            ValueError: if the value is malformed
        """
        return value

    @classmethod
    def from_identity(cls, fields: Mapping[str, object], baggage: Mapping[str, str]) -> Self:
        """Rebuild a context from parsed identity fields and baggage.

        Raises:
            ValueError: if required identity fields are missing
        """
        raise NotImplementedError(f"{cls.__name__} does not support propagation")

    def __repr__(self) -> str:
        ids = " ".join(f"{k}={v}" for k, v in self.identity().items())
        return f"<{type(self).__name__} {ids} baggage={len(self.baggage)}>"

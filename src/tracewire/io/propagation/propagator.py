"""Propagators: per-format encode/decode of a SpanContext.

A Tracer maps each supported format to one Propagator. Propagators are
generic over the tracer's SpanContext type; they only use its identity hooks
(IDENTITY_FIELDS, identity(), parse_identity_field(), from_identity()).

Key layout for TEXT_MAP (prefix configurable, default ``tw-``):

    tw-ids-<field>      one key per identity field
    tw-baggage-<key>    one key per baggage item

The two namespaces are disjoint, so foreign baggage keys can never be read
back as identity. Prefix matching is case-insensitive and baggage keys are
lowercased on read.

BINARY frames are a single codec-encoded map ``{"ids": {...}, "baggage": {...}}``
that replaces the contents of a bytearray carrier, so a carrier holds at most
one frame.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from tracewire.foundation.config import get_settings
from tracewire.foundation.errors import (
    InvalidCarrierError,
    SpanContextCorruptedError,
    SpanContextNotFoundError,
)

from .carrier import BinaryReadable, as_reader, as_writer
from .codec import Codec, get_codec
from .format import BINARY, TEXT_MAP, Format

if TYPE_CHECKING:
    from tracewire.core.context import SpanContext


@runtime_checkable
class Propagator(Protocol):
    """Encodes span contexts into, and decodes them from, one carrier format."""

    format: Format

    def inject(self, span_context: SpanContext, carrier: object) -> None: ...
    def extract(self, carrier: object) -> SpanContext: ...


def _parse_field(
    context_type: type[SpanContext], name: str, value: object, fmt: Format,
) -> object:
    """Parse one identity field, raising SpanContextCorruptedError on garbage."""
    if not isinstance(value, str):
        raise SpanContextCorruptedError.create(
            "extract", f"identity field {name!r} is not a string", format=fmt, details=repr(value))
    try:
        return context_type.parse_identity_field(name, value)
    except ValueError as e:
        raise SpanContextCorruptedError.create(
            "extract", f"malformed identity field {name!r}", format=fmt, details=repr(value)) from e


def _build(
    context_type: type[SpanContext], fields: Mapping[str, object], baggage: Mapping[str, str], fmt: Format,
) -> SpanContext:
    if not fields:
        raise SpanContextNotFoundError.create("extract", "carrier holds no trace identity", format=fmt)
    try:
        return context_type.from_identity(fields, baggage)
    except ValueError as e:
        raise SpanContextCorruptedError.create("extract", f"incomplete trace identity: {e}", format=fmt) from e


class TextMapPropagator:
    """TEXT_MAP propagator with disjoint identity/baggage key prefixes."""

    __slots__ = ("context_type", "ids_prefix", "baggage_prefix")
    format: Format = TEXT_MAP

    def __init__(self, context_type: type[SpanContext], *, key_prefix: str | None = None) -> None:
        prefix = (key_prefix if key_prefix is not None else get_settings().propagation.key_prefix).lower()
        self.context_type = context_type
        self.ids_prefix = f"{prefix}ids-"
        self.baggage_prefix = f"{prefix}baggage-"

    def inject(self, span_context: SpanContext, carrier: object) -> None:
        if (writer := as_writer(carrier)) is None:
            raise InvalidCarrierError.create(
                "inject", f"{type(carrier).__name__} is not a text-map writer", format=self.format)
        for name, value in span_context.identity().items():
            writer.set(self.ids_prefix + name, value)
        for key, value in span_context.baggage.items():
            writer.set(self.baggage_prefix + key, value)

    def extract(self, carrier: object) -> SpanContext:
        if (reader := as_reader(carrier)) is None:
            raise InvalidCarrierError.create(
                "extract", f"{type(carrier).__name__} is not a text-map reader", format=self.format)

        known = frozenset(self.context_type.IDENTITY_FIELDS)
        fields: dict[str, object] = {}
        baggage: dict[str, str] = {}
        ids_len, bag_len = len(self.ids_prefix), len(self.baggage_prefix)

        def visit(key: str, value: str) -> None:
            lower = key.lower()
            if lower.startswith(self.ids_prefix):
                # Unknown identity fields are tolerated for forward compatibility
                if (name := lower[ids_len:]) in known:
                    fields[name] = _parse_field(self.context_type, name, value, self.format)
            elif lower.startswith(self.baggage_prefix):
                baggage[lower[bag_len:]] = value

        reader.foreach_key(visit)
        return _build(self.context_type, fields, baggage, self.format)


class BinaryPropagator:
    """BINARY propagator: one codec frame per inject, replacing the bytearray contents."""

    __slots__ = ("context_type", "codec")
    format: Format = BINARY

    def __init__(self, context_type: type[SpanContext], *, codec: Codec | str | None = None) -> None:
        self.context_type = context_type
        if codec is None or isinstance(codec, str):
            codec = get_codec(codec or get_settings().propagation.binary_codec)
        self.codec = codec

    def inject(self, span_context: SpanContext, carrier: object) -> None:
        if not isinstance(carrier, bytearray):
            raise InvalidCarrierError.create(
                "inject", f"binary carrier must be a bytearray, got {type(carrier).__name__}", format=self.format)
        # Encode fully before touching the carrier
        frame = self.codec.encode({"ids": span_context.identity(), "baggage": span_context.baggage})
        carrier[:] = frame

    def extract(self, carrier: object) -> SpanContext:
        if not isinstance(carrier, BinaryReadable):
            raise InvalidCarrierError.create(
                "extract", f"binary carrier must be bytes-like, got {type(carrier).__name__}", format=self.format)
        if len(carrier) == 0:
            raise SpanContextNotFoundError.create("extract", "binary carrier is empty", format=self.format)
        try:
            payload = self.codec.decode(carrier)
        except ValueError as e:
            raise SpanContextCorruptedError.create("extract", str(e), format=self.format) from e
        if not isinstance(payload, dict):
            raise SpanContextCorruptedError.create(
                "extract", "binary frame is not a map", format=self.format, details=repr(payload))

        ids, raw_baggage = payload.get("ids") or {}, payload.get("baggage") or {}
        if not isinstance(ids, dict) or not isinstance(raw_baggage, dict):
            raise SpanContextCorruptedError.create("extract", "binary frame sections must be maps", format=self.format)

        known = frozenset(self.context_type.IDENTITY_FIELDS)
        fields = {
            name.lower(): _parse_field(self.context_type, name.lower(), value, self.format)
            for name, value in ids.items()
            if isinstance(name, str) and name.lower() in known
        }
        baggage: dict[str, str] = {}
        for key, value in raw_baggage.items():
            if not (isinstance(key, str) and isinstance(value, str)):
                raise SpanContextCorruptedError.create(
                    "extract", "baggage entries must be strings", format=self.format, details=repr((key, value)))
            baggage[key.lower()] = value
        return _build(self.context_type, fields, baggage, self.format)

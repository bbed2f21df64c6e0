"""Propagation: formats, carriers, codecs and per-format propagators."""

from .carrier import (
    BinaryCarrier,
    TextMapCarrier,
    TextMapReader,
    TextMapWriter,
    Visitor,
    as_reader,
    as_writer,
)
from .codec import Codec, CodecType, MsgpackCodec, OrjsonCodec, get_codec, register_codec
from .format import BINARY, TEXT_MAP, BuiltinFormat, CustomFormat, Format, register_format, registered_formats
from .propagator import BinaryPropagator, Propagator, TextMapPropagator

__all__ = [
    # Formats
    "BuiltinFormat", "CustomFormat", "Format", "TEXT_MAP", "BINARY",
    "register_format", "registered_formats",
    # Carriers
    "TextMapReader", "TextMapWriter", "TextMapCarrier", "BinaryCarrier", "Visitor",
    "as_reader", "as_writer",
    # Codecs
    "Codec", "CodecType", "MsgpackCodec", "OrjsonCodec", "get_codec", "register_codec",
    # Propagators
    "Propagator", "TextMapPropagator", "BinaryPropagator",
]

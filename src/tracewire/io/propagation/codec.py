"""Serialization codecs for the BINARY format.

Provides msgpack (compact binary, the default) and orjson codecs.
Both are core dependencies - no fallback to stdlib json.

Decode failures are normalized to ValueError so the binary propagator can
report them uniformly as corrupted trace data.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Protocol, runtime_checkable

import msgpack
import orjson

from tracewire.foundation.errors import JsonValue


class CodecType(StrEnum):
    """Supported codec types."""
    MSGPACK = "msgpack"
    ORJSON = "orjson"


@runtime_checkable
class Codec(Protocol):
    """Protocol for frame codecs."""

    name: str

    def encode(self, data: JsonValue) -> bytes: ...
    def decode(self, data: bytes | bytearray | memoryview) -> JsonValue: ...


class MsgpackCodec:
    """MessagePack codec - smallest frames, the default for BINARY."""

    __slots__ = ()
    name = "msgpack"

    def encode(self, data: JsonValue) -> bytes:
        return msgpack.packb(data, use_bin_type=True)

    def decode(self, data: bytes | bytearray | memoryview) -> JsonValue:
        try:
            return msgpack.unpackb(data, raw=False, strict_map_key=True)
        except (ValueError, TypeError, msgpack.UnpackException) as e:
            raise ValueError(f"invalid msgpack frame: {e}") from e


class OrjsonCodec:
    """orjson codec - JSON frames, handy when carriers are inspected by humans."""

    __slots__ = ()
    name = "orjson"

    def encode(self, data: JsonValue) -> bytes:
        return orjson.dumps(data)

    def decode(self, data: bytes | bytearray | memoryview) -> JsonValue:
        try:
            return orjson.loads(data)
        except orjson.JSONDecodeError as e:
            raise ValueError(f"invalid json frame: {e}") from e


# ═══════════════════════════════════════════════════════════════════════════════
# Singleton Instances
# ═══════════════════════════════════════════════════════════════════════════════

_msgpack = MsgpackCodec()
_orjson = OrjsonCodec()

_CODECS: dict[str, Codec] = {"msgpack": _msgpack, "orjson": _orjson}


def get_codec(name: str | CodecType | None = None) -> Codec:
    """Get codec by name (default: msgpack).

    Raises:
        ValueError: for unknown codec names
    """
    key = str(name) if name else "msgpack"
    if key not in _CODECS:
        raise ValueError(f"Unknown codec: {key}. Use one of {sorted(_CODECS)}")
    return _CODECS[key]


def register_codec(name: str, codec: Codec) -> None:
    """Register custom codec implementation."""
    _CODECS[name] = codec

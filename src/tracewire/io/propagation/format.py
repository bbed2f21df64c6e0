"""Format identifiers for Tracer.inject / Tracer.extract.

Formats are opaque discriminators compared by identity, never by name:
- BuiltinFormat: closed set every tracer supports (TEXT_MAP, BINARY)
- CustomFormat: open extension point; each ``register_format`` call mints a
  new token, so two packages choosing the same name cannot collide

Plain strings such as ``"text_map"`` are not formats and are never matched.
"""

from __future__ import annotations

import threading
from enum import Enum
from typing import TypeAlias, final


class BuiltinFormat(Enum):
    """Built-in carrier formats.

    TEXT_MAP: string -> string carrier with case-insensitive keys, read through
        ``TextMapReader.foreach_key`` and written through ``TextMapWriter.set``
    BINARY: opaque byte blob; inject overwrites a ``bytearray`` with one frame
    """

    TEXT_MAP = "text_map"
    BINARY = "binary"


@final
class CustomFormat:
    """Identity token for a user-defined format. Equality is identity."""

    __slots__ = ("name",)

    def __init__(self, name: str) -> None:
        self.name = name

    def __repr__(self) -> str:
        return f"CustomFormat({self.name!r})"


Format: TypeAlias = BuiltinFormat | CustomFormat

TEXT_MAP = BuiltinFormat.TEXT_MAP
BINARY = BuiltinFormat.BINARY

_registered: list[CustomFormat] = []
_registry_lock = threading.Lock()


def register_format(name: str) -> CustomFormat:
    """Mint a new custom format token. The name is for display only."""
    fmt = CustomFormat(name)
    with _registry_lock:
        _registered.append(fmt)
    return fmt


def registered_formats() -> tuple[CustomFormat, ...]:
    """All custom formats minted so far, in registration order."""
    with _registry_lock:
        return tuple(_registered)

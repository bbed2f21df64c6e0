"""Carrier capability protocols.

Carriers are modeled as two narrow capabilities rather than one broad type:
- TextMapWriter.set(key, value): one call per key during inject, later
  calls with the same key overwrite
- TextMapReader.foreach_key(visit): visit every key once, in any order, and
  let any exception raised by ``visit`` escape immediately

The fail-fast read is what lets extract detect corruption: a reader that
swallowed visitor errors would hand back partially populated contexts.

Plain ``dict`` carriers are accepted everywhere and adapted through
TextMapCarrier, which shares (does not copy) the underlying mapping.
"""

from __future__ import annotations

from collections.abc import Callable, Iterator, Mapping, MutableMapping
from typing import Protocol, TypeAlias, runtime_checkable

Visitor: TypeAlias = Callable[[str, str], None]

# Binary carriers: inject overwrites a bytearray with one frame, extract reads any buffer
BinaryCarrier: TypeAlias = bytearray
BinaryReadable = (bytes, bytearray, memoryview)


@runtime_checkable
class TextMapWriter(Protocol):
    """Write side of a text-map carrier."""

    def set(self, key: str, value: str) -> None: ...


@runtime_checkable
class TextMapReader(Protocol):
    """Read side of a text-map carrier."""

    def foreach_key(self, visit: Visitor) -> None: ...


class TextMapCarrier(MutableMapping[str, str]):
    """Dict-backed text-map carrier implementing both capabilities.

    Example:
        >>> headers: dict[str, str] = {}
        >>> tracer.inject(span.context(), TEXT_MAP, TextMapCarrier(headers))
        >>> headers
        {'tw-ids-traceid': '2', 'tw-ids-spanid': '2'}
    """

    __slots__ = ("_data",)

    def __init__(self, data: MutableMapping[str, str] | None = None) -> None:
        self._data: MutableMapping[str, str] = data if data is not None else {}

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def foreach_key(self, visit: Visitor) -> None:
        # Snapshot so a visitor may mutate the carrier without breaking iteration
        for key, value in list(self._data.items()):
            visit(key, value)

    def __getitem__(self, key: str) -> str:
        return self._data[key]

    def __setitem__(self, key: str, value: str) -> None:
        self._data[key] = value

    def __delitem__(self, key: str) -> None:
        del self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"TextMapCarrier({dict(self._data)!r})"


class _ReadOnlyTextMap:
    """Reader over a plain Mapping."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, str]) -> None:
        self._data = data

    def foreach_key(self, visit: Visitor) -> None:
        for key, value in list(self._data.items()):
            visit(key, value)


def as_writer(carrier: object) -> TextMapWriter | None:
    """Adapt ``carrier`` to a TextMapWriter, or None if it cannot be written."""
    if isinstance(carrier, TextMapWriter):
        return carrier
    if isinstance(carrier, MutableMapping):
        return TextMapCarrier(carrier)
    return None


def as_reader(carrier: object) -> TextMapReader | None:
    """Adapt ``carrier`` to a TextMapReader, or None if it cannot be read."""
    if isinstance(carrier, TextMapReader):
        return carrier
    if isinstance(carrier, Mapping):
        return _ReadOnlyTextMap(carrier)
    return None

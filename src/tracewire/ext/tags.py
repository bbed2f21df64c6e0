"""Standard span tags.

Tag descriptors pin a well-known key and coerce values to the expected
type, so instrumentation across libraries agrees on names:

    >>> from tracewire.ext import tags
    >>> tags.SPAN_KIND.set(span, tags.SPAN_KIND_RPC_SERVER)
    >>> tags.HTTP_STATUS_CODE.set(span, 301)
    >>> tags.PEER_SERVICE.set(span, "billing")

Numeric descriptors coerce with ``int()``. A value that cannot be coerced is
dropped and the span is left untouched; setting a tag never raises.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Literal

if TYPE_CHECKING:
    from tracewire.core import Span


@dataclass(frozen=True, slots=True)
class StringTag:
    key: str

    def set(self, span: Span, value: str) -> None:
        span.set_tag(self.key, str(value))


@dataclass(frozen=True, slots=True)
class IntTag:
    key: str

    def set(self, span: Span, value: int) -> None:
        try:
            coerced = int(value)
        except (TypeError, ValueError, OverflowError):
            return
        span.set_tag(self.key, coerced)


@dataclass(frozen=True, slots=True)
class BoolTag:
    key: str

    def set(self, span: Span, value: bool) -> None:
        span.set_tag(self.key, bool(value))


SpanKindValue = Literal["client", "server"]

SPAN_KIND_RPC_CLIENT: SpanKindValue = "client"
SPAN_KIND_RPC_SERVER: SpanKindValue = "server"


@dataclass(frozen=True, slots=True)
class SpanKindTag:
    key: str

    def set(self, span: Span, value: SpanKindValue) -> None:
        span.set_tag(self.key, value)


# ─────────────────────────────────────────────────────────────────────────────
# Span kind and component
# ─────────────────────────────────────────────────────────────────────────────

SPAN_KIND = SpanKindTag("span.kind")
COMPONENT = StringTag("component")
SAMPLING_PRIORITY = IntTag("sampling.priority")
ERROR = BoolTag("error")

# ─────────────────────────────────────────────────────────────────────────────
# Peer
# ─────────────────────────────────────────────────────────────────────────────

PEER_SERVICE = StringTag("peer.service")
PEER_HOSTNAME = StringTag("peer.hostname")
PEER_HOST_IPV4 = IntTag("peer.ipv4")  # packed big-endian address
PEER_HOST_IPV6 = StringTag("peer.ipv6")
PEER_PORT = IntTag("peer.port")

# ─────────────────────────────────────────────────────────────────────────────
# HTTP
# ─────────────────────────────────────────────────────────────────────────────

HTTP_URL = StringTag("http.url")
HTTP_METHOD = StringTag("http.method")
HTTP_STATUS_CODE = IntTag("http.status_code")

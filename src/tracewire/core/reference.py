"""Causal references between a new span and prior spans.

If span B refers to span A, the ReferenceType describes A from B's
perspective. Timing diagrams (A is the referent):

    BLOCKED_PARENT      [-A---------------]
                               [-B-]
    RPC_CLIENT          [-remote client A----]
                               [-server B-]
    STARTED_BEFORE      [-A-]
                          [-B-------]
    FINISHED_BEFORE     [-A-]
                                [-B-]
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .context import SpanContext
    from .options import StartSpanOptions


class ReferenceType(IntEnum):
    """Kinds of causal relationship. Order matters: see ``intra_trace``."""

    BLOCKED_PARENT = 0   # referent caused the new span and waits on it
    RPC_CLIENT = 1       # server side of an RPC referring to its client
    STARTED_BEFORE = 2   # referent merely started first
    FINISHED_BEFORE = 3  # referent started and finished first

    @property
    def intra_trace(self) -> bool:
        """Whether the new span adopts the referent's trace identity."""
        return self <= ReferenceType.FINISHED_BEFORE

    def point(self, referent: SpanContext) -> Reference:
        """Build a reference from the span about to start to ``referent``."""
        return Reference(self, referent)


@dataclass(frozen=True, slots=True)
class Reference:
    """A typed causal edge to a referent SpanContext. Usable as a start option."""

    type: ReferenceType
    referent: SpanContext

    @property
    def intra_trace(self) -> bool:
        return self.type.intra_trace

    def apply(self, options: StartSpanOptions) -> None:
        """Append to the option's reference list. Never dedupes or reorders."""
        options.references.append(self)


def child_of(referent: SpanContext) -> Reference:
    """Shorthand for ``ReferenceType.BLOCKED_PARENT.point(referent)``."""
    return ReferenceType.BLOCKED_PARENT.point(referent)


def follows_from(referent: SpanContext) -> Reference:
    """Shorthand for ``ReferenceType.FINISHED_BEFORE.point(referent)``."""
    return ReferenceType.FINISHED_BEFORE.point(referent)

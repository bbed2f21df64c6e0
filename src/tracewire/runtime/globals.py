"""Process-wide default tracer slot.

Set once at startup with ``set_global_tracer``; read anywhere with
``global_tracer``. Until a tracer is registered the slot holds NOOP_TRACER.
"""

from __future__ import annotations

import threading

from tracewire.core import Tracer

from .noop import NOOP_TRACER

_tracer: Tracer = NOOP_TRACER
_registered = False
_lock = threading.Lock()


def global_tracer() -> Tracer:
    """The registered tracer, or the no-op tracer."""
    return _tracer


def set_global_tracer(tracer: Tracer) -> None:
    """Register ``tracer`` as the process-wide default."""
    global _tracer, _registered
    with _lock:
        _tracer, _registered = tracer, True


def is_global_tracer_registered() -> bool:
    return _registered


def reset_global_tracer() -> None:
    """Restore the no-op default (useful for testing)."""
    global _tracer, _registered
    with _lock:
        _tracer, _registered = NOOP_TRACER, False

"""Extensions built on the core protocol."""

from . import tags

__all__ = ["tags"]

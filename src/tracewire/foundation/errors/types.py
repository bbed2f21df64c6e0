"""Type aliases shared across tracewire.

Tag values and log payloads are opaque to the propagation layer; the aliases
below only document intent.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Union

JsonPrimitive = Union[str, int, float, bool, None]
JsonValue = Union[JsonPrimitive, list[Any], dict[str, Any]]  # Any for recursive slots
JsonDict = dict[str, Any]
JsonMapping = Mapping[str, Any]

# Baggage is always string -> string
BaggageDict = dict[str, str]

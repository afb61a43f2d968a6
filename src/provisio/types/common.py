"""Cross-module type aliases."""

from __future__ import annotations

from collections.abc import Callable
from datetime import datetime
from typing import TypeAlias

JsonScalar: TypeAlias = str | int | float | bool | None
JsonValue: TypeAlias = JsonScalar | list["JsonValue"] | dict[str, "JsonValue"]
JsonObject: TypeAlias = dict[str, JsonValue]

Clock: TypeAlias = Callable[[], datetime]

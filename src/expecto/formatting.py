"""Printable representations of subject values and types."""

from __future__ import annotations

import json
import re
from collections.abc import Mapping, Set
from typing import Any


def type_name(t: type | tuple[type, ...]) -> str:
    """Qualified name of a type, with builtins left bare (``str``, ``numbers.Number``)."""
    if isinstance(t, tuple):
        return " or ".join(type_name(member) for member in t)
    module = getattr(t, "__module__", None)
    name = getattr(t, "__qualname__", None) or getattr(t, "__name__", repr(t))
    if module in (None, "builtins"):
        return name
    return f"{module}.{name}"


def format_value(value: Any) -> str:
    """Format a value for report output.

    Strings are double quoted, containers are formatted element by element,
    types print their qualified name and compiled patterns print as
    ``/pattern/``. Anything else falls back to ``repr``.
    """
    if value is None:
        return "None"
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, (bytes, bytearray)):
        return "0x" + value.hex()
    if isinstance(value, type):
        return type_name(value)
    if isinstance(value, re.Pattern):
        return f"/{value.pattern}/"
    if isinstance(value, (list, tuple, Mapping, Set)):
        return _format_container(value, frozenset())
    return repr(value)


def _format_container(value: Any, seen: frozenset[int]) -> str:
    # A container already being formatted higher up prints as an ellipsis
    if id(value) in seen:
        if isinstance(value, list):
            return "[...]"
        if isinstance(value, tuple):
            return "(...)"
        return "{...}"
    seen = seen | {id(value)}

    def element(v: Any) -> str:
        if isinstance(v, (list, tuple, Mapping, Set)):
            return _format_container(v, seen)
        return format_value(v)

    if isinstance(value, list):
        return "[" + ", ".join(element(v) for v in value) + "]"
    if isinstance(value, tuple):
        inner = ", ".join(element(v) for v in value)
        return f"({inner},)" if len(value) == 1 else f"({inner})"
    if isinstance(value, Mapping):
        items = ", ".join(f"{element(k)}: {element(v)}" for k, v in value.items())
        return "{" + items + "}"
    if not value:
        return "set()"
    # Elements in order of their formatted text
    return "{" + ", ".join(sorted(element(v) for v in value)) + "}"


def truncate(text: str, limit: int | None) -> str:
    if limit is None or len(text) <= limit:
        return text
    return text[: max(limit - 1, 0)] + "…"

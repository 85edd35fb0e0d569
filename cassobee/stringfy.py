"""Readable string rendering of values and containers, plus type names."""

from __future__ import annotations

from typing import Any

_CONTAINER_TYPES = (list, set, frozenset, dict)


def is_container(value: Any) -> bool:
    """True for the sequence, set and mapping types rendered as containers."""
    return isinstance(value, _CONTAINER_TYPES)


def type_name(obj: Any) -> str:
    """Fully qualified name of a class, or of an instance's class."""
    cls = obj if isinstance(obj, type) else type(obj)
    if cls.__module__ == "builtins":
        return cls.__qualname__
    return f"{cls.__module__}.{cls.__qualname__}"


def short_type_name(obj: Any) -> str:
    """Class name without its module path."""
    cls = obj if isinstance(obj, type) else type(obj)
    return cls.__qualname__


def _pair(first: Any, second: Any) -> str:
    return f"<{to_string(first)}, {to_string(second)}>"


def _set_items(value: set | frozenset) -> list[Any]:
    try:
        return sorted(value)
    except TypeError:
        return list(value)


def to_string(value: Any, prefix: bool = False) -> str:
    """Render ``value``; containers may be prefixed with their type name."""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, bool):
        return str(int(value))
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return f"{value:f}"
    if isinstance(value, tuple):
        return "{" + " ".join(to_string(item) for item in value) + "}"
    if is_container(value):
        if isinstance(value, dict):
            parts = [_pair(k, v) for k, v in value.items()]
        elif isinstance(value, (set, frozenset)):
            parts = [to_string(item) for item in _set_items(value)]
        else:
            parts = [to_string(item) for item in value]
        head = type_name(value) if prefix else ""
        return head + "{" + ", ".join(parts) + "}"
    raise TypeError(f"cannot render value of type {type_name(value)}")
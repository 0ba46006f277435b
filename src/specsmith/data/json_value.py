# src/specsmith/data/json_value.py
from __future__ import annotations

from collections.abc import Iterator, Mapping


def as_mapping(x: object) -> Mapping[str, object] | None:
    """Returns x when it is a mapping, otherwise None."""
    return x if isinstance(x, Mapping) else None


def as_str(x: object) -> str | None:
    """Returns x when it is a string, otherwise None."""
    return x if isinstance(x, str) else None


def get_path(doc: object, *keys: str) -> object | None:
    """Walks nested mappings by key and returns the value found, or None.

    Any shape mismatch along the way (a list, a scalar, a missing key) yields
    None instead of raising, so callers can treat "missing section" and
    "malformed section" the same way.
    """
    cur: object = doc
    for key in keys:
        m = as_mapping(cur)
        if m is None or key not in m:
            return None
        cur = m[key]
    return cur


def get_mapping(doc: object, *keys: str) -> Mapping[str, object] | None:
    return as_mapping(get_path(doc, *keys))


def iter_items(x: object) -> Iterator[tuple[str, object]]:
    """Yields (str(key), value) pairs of a mapping in its own order.

    Non-mappings yield nothing.
    """
    m = as_mapping(x)
    if m is None:
        return
    for k, v in m.items():
        yield str(k), v

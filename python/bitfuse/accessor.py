"""Nested field access for structured records.

A field path is a dotted string such as ``"author.name"``. Resolving it walks
through mappings one segment at a time; a list or tuple met anywhere along
the way is expanded, every element receiving the rest of the path. Leaves
that are strings or numbers come back as strings. Anything else (``None``,
missing keys, booleans, objects of other shapes) is skipped without error.

Example:
    >>> record = {"title": "Old Man's War", "authors": [{"name": "John Scalzi"}]}
    >>> deep_value(record, "authors.name")
    ['John Scalzi']
"""

from collections.abc import Mapping
from typing import Any, List, Optional, Protocol


class FieldAccessor(Protocol):
    """Strategy resolving a field path against a record to its leaf strings."""

    def __call__(self, record: Any, path: str) -> List[str]: ...


def _resolve(value: Any, path: Optional[str], out: List[str]) -> None:
    if value is None:
        return

    if isinstance(value, (list, tuple)):
        for element in value:
            _resolve(element, path, out)
        return

    if not path:
        if isinstance(value, str):
            out.append(value)
        elif isinstance(value, (int, float)) and not isinstance(value, bool):
            out.append(str(value))
        return

    if isinstance(value, Mapping):
        head, _, rest = path.partition(".")
        _resolve(value.get(head), rest or None, out)


def deep_value(record: Any, path: str) -> List[str]:
    """Resolve a dotted path against a record.

    Args:
        record: A mapping (possibly containing nested mappings and lists)
        path: Dotted field path; an empty path resolves the record itself

    Returns:
        Every string or number leaf found at the end of the path, as strings,
        in document order.

    Example:
        >>> deep_value({"tags": ["sci-fi", 2005]}, "tags")
        ['sci-fi', '2005']
        >>> deep_value({"a": {"b": None}}, "a.b")
        []
    """
    out: List[str] = []
    _resolve(record, path or None, out)
    return out


class DeepValueAccessor:
    """Default FieldAccessor: dotted-path resolution with array expansion."""

    def __call__(self, record: Any, path: str) -> List[str]:
        return deep_value(record, path)

    def __eq__(self, other: object) -> bool:
        return isinstance(other, DeepValueAccessor)

    def __hash__(self) -> int:
        return hash(DeepValueAccessor)

    def __repr__(self) -> str:
        return "DeepValueAccessor()"


__all__ = ["FieldAccessor", "DeepValueAccessor", "deep_value"]

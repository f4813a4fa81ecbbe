"""Enums for bitfuse API."""

from enum import Enum


class CollectionKind(str, Enum):
    """Shape of the collection held by a search engine.

    The kind is decided once, when the collection is set, from its first
    element. String values are preserved so the enum compares equal to
    plain strings.

    Example:
        >>> from bitfuse import Fuse, CollectionKind
        >>> Fuse(["apple", "banana"]).collection_kind
        <CollectionKind.STRINGS: 'strings'>
    """

    STRINGS = "strings"
    """Every element is a string searched as a whole"""

    RECORDS = "records"
    """Every element is a mapping searched through the configured keys"""


__all__ = ["CollectionKind"]

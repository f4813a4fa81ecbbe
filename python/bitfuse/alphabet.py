"""Pattern alphabet precomputation for the Bitap matcher."""

from typing import Dict


def pattern_alphabet(pattern: str) -> Dict[str, int]:
    """
    Build the per-character bitmasks of a pattern.

    For a pattern of length L, the mask of character ``c`` has bit
    ``L - 1 - i`` set for every position ``i`` holding ``c``. Characters
    that do not occur in the pattern are absent and read as 0.

    Args:
        pattern: The (already case-normalized) pattern

    Returns:
        Mapping from character to bitmask

    Example:
        >>> pattern_alphabet("abca")
        {'a': 9, 'b': 4, 'c': 2}
    """
    length = len(pattern)
    mask: Dict[str, int] = {}
    for i, char in enumerate(pattern):
        mask[char] = mask.get(char, 0) | 1 << (length - i - 1)
    return mask


__all__ = ["pattern_alphabet"]

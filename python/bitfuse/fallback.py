"""Literal alternation search for patterns too long for Bitap.

Bitap keeps one bit per pattern character in a machine word, so patterns
longer than ``max_pattern_length`` are matched here instead: the pattern is
cut into words on the token separator and any word found verbatim in the
text counts as a match. The score is a flat 0.5, not distance weighted.
"""

import re
from typing import Union

from bitfuse._utils import DEFAULT_TOKEN_SEPARATOR, compile_separator
from bitfuse.results import MatchResult

FALLBACK_SCORE = 0.5


def regex_search(
    text: str,
    pattern: str,
    token_separator: Union[str, re.Pattern] = DEFAULT_TOKEN_SEPARATOR,
) -> MatchResult:
    """
    Search ``text`` for any separator-delimited word of ``pattern``.

    Args:
        text: Text to search
        pattern: Pattern, typically longer than the Bitap word size
        token_separator: Regex splitting the pattern into alternatives

    Returns:
        MatchResult with score 0.5 and one span per occurrence of any
        alternative, or a non-match with score 1.0

    Example:
        >>> regex_search("the delta wing", "alpha bravo delta").matched_indices
        ((4, 8),)
    """
    separator = compile_separator(token_separator)
    alternatives = [re.escape(chunk) for chunk in separator.split(pattern) if chunk]
    if not alternatives:
        return MatchResult(is_match=False, score=1.0)

    regex = re.compile("|".join(alternatives))
    spans = tuple((m.start(), m.end() - 1) for m in regex.finditer(text))
    if not spans:
        return MatchResult(is_match=False, score=1.0)
    return MatchResult(is_match=True, score=FALLBACK_SCORE, matched_indices=spans)


__all__ = ["FALLBACK_SCORE", "regex_search"]

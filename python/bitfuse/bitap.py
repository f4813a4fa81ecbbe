"""Bit-parallel approximate string matching (Bitap).

The search keeps, for every text position, a bit vector of the pattern
prefixes that end there with at most ``e`` errors, and raises ``e`` one level
at a time until no further level could beat the best score found so far.
Scores combine the error ratio with the distance from the expected location,
so the same pattern scores better near ``location`` than far from it.

Example:
    >>> from bitfuse import Bitap
    >>> Bitap("od mn war").search("Old Man's War").is_match
    True
"""

from dataclasses import replace
from typing import Dict, Optional, Sequence, Tuple

from bitfuse.alphabet import pattern_alphabet
from bitfuse.fallback import regex_search
from bitfuse.options import MatchOptions
from bitfuse.results import MatchResult, Span

# Reported instead of 0 for a perfect substring hit, 0 itself being
# reserved for a match of the whole text.
NEAR_EXACT_SCORE = 0.001


def bitap_score(
    pattern_length: int,
    errors: int = 0,
    current_location: int = 0,
    expected_location: int = 0,
    distance: float = 100,
) -> float:
    """
    Score a candidate match: error ratio plus normalized distance from the expected location.

    Args:
        pattern_length: Length of the pattern
        errors: Number of errors of the candidate
        current_location: Where the candidate was found
        expected_location: Where the pattern was expected
        distance: Distance at which a perfect match scores as a mismatch

    Returns:
        Score, lower is better. With ``distance == 0`` any displacement
        scores 1.0 and an in-place candidate scores its error ratio.

    Example:
        >>> bitap_score(4, errors=1, current_location=10)
        0.35
    """
    accuracy = errors / pattern_length
    proximity = abs(expected_location - current_location)

    if not distance:
        return 1.0 if proximity else accuracy

    return accuracy + proximity / distance


def matched_indices(match_mask: Sequence[bool], min_match_char_length: int = 1) -> Tuple[Span, ...]:
    """
    Collapse a per-character flag array into maximal runs.

    Args:
        match_mask: One flag per text position
        min_match_char_length: Shortest run reported

    Returns:
        Ascending inclusive ``(start, end)`` spans of every run of truthy
        flags at least ``min_match_char_length`` long

    Example:
        >>> matched_indices([1, 1, 0, 1])
        ((0, 1), (3, 3))
        >>> matched_indices([1, 1, 0, 1], min_match_char_length=2)
        ((0, 1),)
    """
    spans = []
    start = -1

    for i, flag in enumerate(match_mask):
        if flag and start == -1:
            start = i
        elif not flag and start != -1:
            if i - start >= min_match_char_length:
                spans.append((start, i - 1))
            start = -1

    length = len(match_mask)
    if length and match_mask[-1] and length - start >= min_match_char_length:
        spans.append((start, length - 1))

    return tuple(spans)


def bitap_search(
    text: str,
    pattern: str,
    alphabet: Optional[Dict[str, int]] = None,
    options: Optional[MatchOptions] = None,
) -> MatchResult:
    """
    Approximately search ``pattern`` in ``text``.

    Both strings are used as given; case folding is the caller's concern
    (see :class:`Bitap`). Patterns longer than ``max_pattern_length`` are
    delegated to :func:`~bitfuse.fallback.regex_search`.

    Args:
        text: Text to search
        pattern: Pattern to find
        alphabet: Precomputed ``pattern_alphabet(pattern)``, built when omitted
        options: Match tunables, defaults when omitted

    Returns:
        MatchResult of the best-scoring location within the threshold
    """
    if options is None:
        options = MatchOptions()

    if len(pattern) > options.max_pattern_length:
        return regex_search(text, pattern, options.token_separator)

    if not pattern:
        # An empty pattern only "occurs" as the whole of an empty text.
        return MatchResult(is_match=not text, score=0.0 if not text else 1.0)

    if alphabet is None:
        alphabet = pattern_alphabet(pattern)

    expected_location = options.location
    distance = options.distance
    text_len = len(text)
    pattern_len = len(pattern)

    def score(errors: int, location: int) -> float:
        return bitap_score(pattern_len, errors, location, expected_location, distance)

    # Highest score beyond which we give up.
    threshold = options.threshold

    # A nearby exact hit bounds the threshold before any fuzzy work.
    best_location = text.find(pattern, expected_location)
    if best_location != -1:
        threshold = min(score(0, best_location), threshold)

        # And the last one starting at or before location + pattern length.
        best_location = text.rfind(pattern, 0, expected_location + 2 * pattern_len)
        if best_location != -1:
            threshold = min(score(0, best_location), threshold)

    best_location = -1
    best_score = 1.0
    match_mask = [False] * text_len
    last_bit_arr = []
    bin_max = pattern_len + text_len
    high_bit = 1 << (pattern_len - 1)
    word_mask = (1 << pattern_len) - 1

    for errors in range(pattern_len):
        # How far from the expected location can an `errors`-error match be
        # and still beat the threshold?
        bin_min = 0
        bin_mid = bin_max
        while bin_min < bin_mid:
            if score(errors, expected_location + bin_mid) <= threshold:
                bin_min = bin_mid
            else:
                bin_max = bin_mid
            bin_mid = (bin_max - bin_min) // 2 + bin_min

        # The next level can only do worse.
        bin_max = bin_mid

        start = max(1, expected_location - bin_mid + 1)
        if options.find_all_matches:
            finish = text_len
        else:
            finish = min(expected_location + bin_mid, text_len) + pattern_len

        bit_arr = [0] * (finish + 2)
        bit_arr[finish + 1] = (1 << errors) - 1

        j = finish
        while j >= start:
            location = j - 1
            char_match = alphabet.get(text[location], 0) if location < text_len else 0

            if char_match:
                match_mask[location] = True

            # Exact
            bit_arr[j] = ((bit_arr[j + 1] << 1) | 1) & char_match

            # Fuzzy
            if errors:
                previous = last_bit_arr[j + 1]
                bit_arr[j] |= ((((previous | last_bit_arr[j]) << 1) | 1) | previous) & word_mask

            if bit_arr[j] & high_bit:
                candidate = score(errors, location)
                if candidate <= threshold:
                    threshold = candidate
                    best_score = candidate
                    best_location = location

                    # Already passed the expected location, downhill from here.
                    if best_location <= expected_location:
                        break

                    # Don't stray further from it than this match did.
                    start = max(1, 2 * expected_location - best_location)
            j -= 1

        if score(errors + 1, expected_location) > threshold:
            break

        last_bit_arr = bit_arr

    is_match = best_location >= 0
    return MatchResult(
        is_match=is_match,
        score=NEAR_EXACT_SCORE if is_match and best_score == 0 else best_score,
        matched_indices=matched_indices(match_mask, options.min_match_char_length),
    )


class Bitap:
    """
    Matcher for one pattern, reusable against any number of texts.

    The pattern is case-folded (unless ``case_sensitive``) and its alphabet
    computed once at construction; neither changes afterwards.

    Args:
        pattern: Pattern to search for
        options: Match tunables (a SearchOptions works too)
        **overrides: Individual MatchOptions fields overriding ``options``

    Example:
        >>> matcher = Bitap("helo", threshold=0.4)
        >>> matcher.search("Hello world").is_match
        True
    """

    def __init__(self, pattern: str, options: Optional[MatchOptions] = None, **overrides):
        if options is None:
            options = MatchOptions(**overrides)
        elif overrides:
            options = replace(options, **overrides)
        self.options = options
        self.pattern = pattern if options.case_sensitive else pattern.lower()
        self.alphabet = (
            pattern_alphabet(self.pattern)
            if len(self.pattern) <= options.max_pattern_length
            else None
        )

    def search(self, text: str) -> MatchResult:
        """Match this pattern against ``text``."""
        if not self.options.case_sensitive:
            text = text.lower()

        if self.pattern == text:
            return MatchResult(
                is_match=True,
                score=0.0,
                matched_indices=((0, len(text) - 1),) if text else (),
            )

        return bitap_search(text, self.pattern, self.alphabet, self.options)

    def __repr__(self) -> str:
        return f"Bitap(pattern={self.pattern!r})"


def match(pattern: str, text: str, **options) -> MatchResult:
    """
    One-shot approximate match of ``pattern`` against ``text``.

    Args:
        pattern: Pattern to search for
        text: Text to search
        **options: MatchOptions fields

    Example:
        >>> match("od mn war", "Old Man's War").is_match
        True
    """
    return Bitap(pattern, MatchOptions(**options)).search(text)


__all__ = [
    "NEAR_EXACT_SCORE",
    "Bitap",
    "bitap_score",
    "bitap_search",
    "match",
    "matched_indices",
]

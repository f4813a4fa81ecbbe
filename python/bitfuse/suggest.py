"""Word completion on top of the search engine.

Finds the word being typed at a caret position, asks a :class:`Fuse`
engine for the closest candidates and splices a chosen candidate back into
the text. Everything here works on plain strings and indices; whatever
editor or widget shows the suggestions passes its text and caret in and
applies the returned text itself.

Example:
    >>> from bitfuse import Fuse, Suggester, apply_suggestion
    >>> suggester = Suggester(Fuse(["hello", "help", "world"]))
    >>> found = suggester.suggest("say helo", caret=8)
    >>> found.candidates[0]
    'hello'
    >>> apply_suggestion("say helo", found.span, found.candidates[0])
    ('say hello ', 10)
"""

from typing import Any, List, NamedTuple, Optional, Tuple

from bitfuse.fuse import Fuse
from bitfuse.results import SearchResult

DEFAULT_LIMIT = 3


class WordSpan(NamedTuple):
    """The word before a caret: ``text[start:end] == word``."""

    start: int
    end: int
    word: str


class Suggestions(NamedTuple):
    """Candidates for the word at ``span``, best first."""

    span: WordSpan
    candidates: List[str]


def _is_ascii_letter(char: str) -> bool:
    return "a" <= char <= "z" or "A" <= char <= "Z"


def word_start(text: str, caret: int) -> int:
    """
    Index where the word ending at ``caret`` starts.

    Words are runs of ASCII letters; any other character before the caret
    ends the previous word.

    Example:
        >>> word_start("it's teh", 8)
        5
    """
    start = 0
    for i in range(min(caret, len(text))):
        if not _is_ascii_letter(text[i]):
            start = i + 1
    return start


def current_word(text: str, caret: int) -> WordSpan:
    """The (possibly empty) word immediately before ``caret``."""
    caret = max(0, min(caret, len(text)))
    start = word_start(text, caret)
    return WordSpan(start, caret, text[start:caret])


def apply_suggestion(text: str, span: WordSpan, candidate: str) -> Tuple[str, int]:
    """
    Replace the word at ``span`` with ``candidate`` followed by a space.

    Returns:
        The new text and the caret position right after the inserted space
    """
    new_text = text[: span.start] + candidate + " " + text[span.end :]
    return new_text, span.start + len(candidate) + 1


class Suggester:
    """
    Completion front end for a search engine.

    Args:
        fuse: Engine holding the vocabulary
        field: For record collections, the path of the string to suggest;
            string collections suggest the strings themselves
        limit: Maximum number of candidates
    """

    def __init__(self, fuse: Fuse, field: Optional[str] = None, limit: int = DEFAULT_LIMIT):
        self.fuse = fuse
        self.field = field
        self.limit = limit

    def _candidate_text(self, result: Any) -> Optional[str]:
        if isinstance(result, SearchResult):
            result = result.item
        if isinstance(result, str):
            return result
        if self.field is None:
            return None
        values = self.fuse.options.get_fn(result, self.field)
        if isinstance(values, str):
            return values
        return values[0] if values else None

    def suggest(self, text: str, caret: int) -> Suggestions:
        """Candidates for the word ending at ``caret``; none for an empty word."""
        span = current_word(text, caret)
        if not span.word:
            return Suggestions(span, [])

        candidates = []
        for result in self.fuse.search(span.word):
            candidate = self._candidate_text(result)
            if candidate is None:
                continue
            candidates.append(candidate)
            if len(candidates) == self.limit:
                break
        return Suggestions(span, candidates)


__all__ = [
    "DEFAULT_LIMIT",
    "Suggester",
    "Suggestions",
    "WordSpan",
    "apply_suggestion",
    "current_word",
    "word_start",
]

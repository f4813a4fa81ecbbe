"""Scored fuzzy search over a collection of strings or records.

The engine runs one :class:`~bitfuse.bitap.Bitap` matcher for the whole
query (and, when tokenizing, one per query word) across every searchable
value of every record, folds the per-field scores into one score per
record, ranks the records and formats them.

Warning:
    The engine holds a reference to its collection. Do not mutate the
    collection while a search is running.

Example:
    >>> from bitfuse import Fuse
    >>> books = [
    ...     {"title": "Old Man's War", "author": {"name": "John Scalzi"}},
    ...     {"title": "The Lock Artist", "author": {"name": "Steve Hamilton"}},
    ... ]
    >>> fuse = Fuse(books, keys=["title", "author.name"])
    >>> fuse.search("old man's war")[0]["title"]
    "Old Man's War"
"""

import logging
import warnings
from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Optional, Sequence, Tuple

from bitfuse.bitap import Bitap
from bitfuse.enums import CollectionKind
from bitfuse.options import FieldSpec, SearchOptions
from bitfuse.results import FieldMatch, SearchResult, Span

logger = logging.getLogger(__name__)


@dataclass
class FieldScore:
    """Score of one searched value of a record."""

    key: Optional[str]
    array_index: Optional[int]
    value: str
    score: float
    matched_indices: Tuple[Span, ...]
    factor: float = 1.0


@dataclass
class CandidateEntry:
    """A record that matched, with every value that contributed to the match."""

    item: Any
    index: int
    output: List[FieldScore] = field(default_factory=list)
    score: float = 1.0


class Fuse:
    """
    Fuzzy search engine over a collection.

    A collection is either a sequence of strings, each searched as a whole,
    or a sequence of records (mappings) searched through ``keys``. Which one
    it is gets decided from the first element when the collection is set.

    Args:
        collection: Strings or records to search
        options: Search options; defaults when omitted
        **overrides: Individual SearchOptions fields overriding ``options``

    Raises:
        ValidationError: If an option is out of range.
        ConfigurationError: If a key is malformed or weighted outside (0, 1].

    Warns:
        UserWarning: If match_all_tokens is set without tokenize.

    Example:
        >>> fuse = Fuse(["you", "to", "the"], include_score=True)
        >>> [(r.item, round(r.score, 2)) for r in fuse.search("yu")]
        [('you', 0.5)]
    """

    def __init__(
        self,
        collection: Sequence[Any] = (),
        options: Optional[SearchOptions] = None,
        **overrides,
    ):
        if options is None:
            options = SearchOptions(**overrides)
        elif overrides:
            options = replace(options, **overrides)
        if options.match_all_tokens and not options.tokenize:
            warnings.warn(
                "match_all_tokens has no effect unless tokenize=True",
                UserWarning,
                stacklevel=2,
            )
        self.options = options
        self._match_options = options.match_options()
        self.set_collection(collection)

    def set_collection(self, collection: Sequence[Any]) -> Sequence[Any]:
        """
        Replace the searched collection.

        Returns:
            The collection itself, unchanged
        """
        self.collection = collection
        if len(collection) and not isinstance(collection[0], str):
            self.collection_kind = CollectionKind.RECORDS
        else:
            self.collection_kind = CollectionKind.STRINGS
        return collection

    def search(self, query: str) -> List[Any]:
        """
        Search the collection.

        Args:
            query: The query string

        Returns:
            Matching records (or their identifiers), best first when sorting
            is enabled. Each entry is a SearchResult when scores or matches
            are requested, the bare record otherwise. No match gives an
            empty list.
        """
        self._log('Search pattern: "%s"', query)

        token_searchers, full_searcher = self._prepare_searchers(query)
        candidates = self._search(token_searchers, full_searcher)
        self._compute_score(candidates)

        if self.options.should_sort:
            candidates = self._sort(candidates)

        return self._format(candidates)

    def _prepare_searchers(self, query: str) -> Tuple[List[Bitap], Bitap]:
        token_searchers = []
        if self.options.tokenize:
            for token in self.options.token_separator.split(query):
                if token:
                    token_searchers.append(Bitap(token, self._match_options))

        full_searcher = Bitap(query, self._match_options)
        return token_searchers, full_searcher

    def _search(self, token_searchers: List[Bitap], full_searcher: Bitap) -> List[CandidateEntry]:
        results: Dict[int, CandidateEntry] = {}

        if self.collection_kind is CollectionKind.STRINGS:
            for index, value in enumerate(self.collection):
                self._analyze(None, None, value, value, index, token_searchers, full_searcher, results)
            return list(results.values())

        get_fn = self.options.get_fn
        for index, record in enumerate(self.collection):
            for spec in self.options.keys:
                values = get_fn(record, spec.name)
                if values is None:
                    continue
                if isinstance(values, str):
                    self._analyze(spec, None, values, record, index, token_searchers, full_searcher, results)
                    continue
                for array_index, value in enumerate(values):
                    self._analyze(
                        spec, array_index, value, record, index, token_searchers, full_searcher, results
                    )

        return list(results.values())

    def _analyze(
        self,
        spec: Optional[FieldSpec],
        array_index: Optional[int],
        value: Any,
        record: Any,
        index: int,
        token_searchers: List[Bitap],
        full_searcher: Bitap,
        results: Dict[int, CandidateEntry],
    ) -> None:
        if not isinstance(value, str):
            return

        options = self.options
        key = spec.name if spec is not None else None
        self._log("Key: %s", key or "-")

        main_result = full_searcher.search(value)
        self._log('Full text: "%s", score: %s', value, main_result.score)

        exists = False
        num_text_matches = 0
        average_score = None

        if options.tokenize:
            words = options.token_separator.split(value)
            scores = []

            for token_searcher in token_searchers:
                self._log('Pattern: "%s"', token_searcher.pattern)
                has_match_in_text = False

                for word in words:
                    token_result = token_searcher.search(word)
                    if token_result.is_match:
                        exists = True
                        has_match_in_text = True
                        scores.append(token_result.score)
                    elif not options.match_all_tokens:
                        scores.append(1.0)
                    self._log(
                        'Token: "%s", score: %s',
                        word,
                        token_result.score if token_result.is_match else 1,
                    )

                if has_match_in_text:
                    num_text_matches += 1

            if scores:
                average_score = sum(scores) / len(scores)
                self._log("Token score average: %s", average_score)

        final_score = main_result.score
        if average_score is not None:
            final_score = (final_score + average_score) / 2
        self._log("Score average: %s", final_score)

        check_text_matches = True
        if options.tokenize and options.match_all_tokens:
            check_text_matches = num_text_matches >= len(token_searchers)
        self._log("Check matches: %s", check_text_matches)

        if not ((exists or main_result.is_match) and check_text_matches):
            return

        entry = results.get(index)
        if entry is None:
            entry = results[index] = CandidateEntry(item=record, index=index)
        entry.output.append(
            FieldScore(
                key=key,
                array_index=array_index,
                value=value,
                score=final_score,
                matched_indices=main_result.matched_indices,
                factor=spec.factor if spec is not None else 1.0,
            )
        )

    def _compute_score(self, candidates: List[CandidateEntry]) -> None:
        self._log("Computing score")

        for entry in candidates:
            total_score = 0.0
            best_score = 1.0

            for output in entry.output:
                weighted = output.score * output.factor
                if output.factor != 1:
                    best_score = min(best_score, weighted)
                else:
                    total_score += weighted

            entry.score = total_score / len(entry.output) if best_score == 1 else best_score
            self._log("Record %d: score %s", entry.index, entry.score)

    def _sort(self, candidates: List[CandidateEntry]) -> List[CandidateEntry]:
        self._log("Sorting")
        # Stable, so equal keys keep collection order.
        return sorted(candidates, key=self.options.sort_key)

    def _format(self, candidates: List[CandidateEntry]) -> List[Any]:
        options = self.options
        annotate = options.include_matches or options.include_score
        resolve_id = options.id is not None and self.collection_kind is CollectionKind.RECORDS
        output = []

        for entry in candidates:
            item = entry.item
            if resolve_id:
                resolved = options.get_fn(item, options.id)
                if isinstance(resolved, str):
                    item = resolved
                else:
                    item = resolved[0] if resolved else None

            if not annotate:
                output.append(item)
                continue

            result = SearchResult(item=item, index=entry.index)
            if options.include_matches:
                result.matches = [
                    FieldMatch(
                        indices=field_score.matched_indices,
                        value=field_score.value,
                        key=field_score.key,
                        array_index=field_score.array_index,
                    )
                    for field_score in entry.output
                    if field_score.matched_indices
                ]
            if options.include_score:
                result.score = entry.score
            output.append(result)

        self._log("Output: %d results", len(output))
        return output

    def _log(self, msg: str, *args) -> None:
        if self.options.verbose:
            logger.info(msg, *args)

    def __len__(self) -> int:
        return len(self.collection)

    def __repr__(self) -> str:
        return f"Fuse(kind={self.collection_kind.value!r}, size={len(self.collection)})"


def search(collection: Sequence[Any], query: str, **options) -> List[Any]:
    """
    One-shot fuzzy search of ``query`` in ``collection``.

    Args:
        collection: Strings or records to search
        query: The query string
        **options: SearchOptions fields

    Example:
        >>> search(["apple", "banana", "cherry"], "banan")[0]
        'banana'
    """
    return Fuse(collection, **options).search(query)


__all__ = ["Fuse", "CandidateEntry", "FieldScore", "search"]

"""Polars expression namespace for Bitap matching.

This module registers a `.bitap` namespace on Polars expressions, so a
pattern can be matched against every value of a string column inside any
expression context.

Each call builds one :class:`~bitfuse.bitap.Bitap` matcher (the pattern
alphabet is computed once) and applies it row by row with map_elements.
Null values stay null.

Warning:
    map_elements runs Python per row. For ranking a whole column against a
    query, ``bitfuse.polars_ext.search_series`` reads better and returns
    the ranked rows directly.

Example:
    >>> import polars as pl
    >>> import bitfuse  # Registers the namespace
    >>>
    >>> df = pl.DataFrame({"title": ["Old Man's War", "The Lock Artist"]})
    >>> df.with_columns(
    ...     hit=pl.col("title").bitap.is_match("od mn war"),
    ...     score=pl.col("title").bitap.score("od mn war"),
    ... )
"""

import polars as pl

from bitfuse.bitap import Bitap
from bitfuse.options import MatchOptions


@pl.api.register_expr_namespace("bitap")
class BitapExprNamespace:
    """
    Bitap matching namespace for Polars expressions.

    Access via `.bitap` on any string expression. Keyword arguments are
    MatchOptions fields (threshold, distance, location, case_sensitive, ...).
    """

    def __init__(self, expr: pl.Expr):
        self._expr = expr

    def score(self, pattern: str, **options) -> pl.Expr:
        """
        Match score of ``pattern`` against each value (0.0 exact, 1.0 no match).

        Example:
            >>> df.with_columns(score=pl.col("name").bitap.score("jon"))
        """
        matcher = Bitap(pattern, MatchOptions(**options))
        return self._expr.map_elements(
            lambda s: matcher.search(str(s)).score,
            return_dtype=pl.Float64,
        )

    def is_match(self, pattern: str, **options) -> pl.Expr:
        """
        Whether ``pattern`` approximately occurs in each value.

        Example:
            >>> df.filter(pl.col("name").bitap.is_match("jon", threshold=0.3))
        """
        matcher = Bitap(pattern, MatchOptions(**options))
        return self._expr.map_elements(
            lambda s: matcher.search(str(s)).is_match,
            return_dtype=pl.Boolean,
        )


__all__ = ["BitapExprNamespace"]

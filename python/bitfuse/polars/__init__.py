"""
Polars integration for bitfuse.

This module provides Bitap matching and fuzzy search for Polars DataFrames
and Series, at two levels:

Levels:
    1. **Expression Namespace** (`.bitap`) - Per-row operations
       Use this to score or filter a column against one pattern.
       Example: `df.with_columns(score=pl.col("name").bitap.score("jon"))`

    2. **DataFrame Functions** - Ranked search
       Use this to rank the rows of a Series or DataFrame against a query.
       Example: `search_dataframe(df, "scalzi", keys=["author"])`

Examples:
    >>> import polars as pl
    >>> import bitfuse.polars as bfp  # or: from bitfuse import polars as bfp

    # Expression namespace (registered automatically when importing bitfuse)
    >>> df = pl.DataFrame({"name": ["John", "Jon", "Jane"]})
    >>> df.filter(pl.col("name").bitap.is_match("jon", threshold=0.3))

    # DataFrame functions
    >>> bfp.search_series(df["name"], "jon")
"""

# Expression namespace is registered on import
import bitfuse.expr as _expr  # noqa: F401
from bitfuse.polars_ext import search_dataframe, search_series

__all__ = ["search_series", "search_dataframe"]

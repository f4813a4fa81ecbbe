"""High-level Polars operations for bitfuse.

This module runs the :class:`~bitfuse.fuse.Fuse` engine over Polars data:
a Series is searched as a string collection, a DataFrame as a collection of
row records whose columns are the searchable keys. Results come back as
DataFrames in ranked order, so they compose with the rest of a Polars
pipeline.

Functions in This Module
------------------------
- ``search_series()``: Rank the values of a Series against a query
- ``search_dataframe()``: Rank the rows of a DataFrame against a query

Example Usage
-------------
>>> import polars as pl
>>> import bitfuse as bf
>>>
>>> books = pl.DataFrame({
...     "title": ["Old Man's War", "The Lock Artist", "HTML5"],
...     "author": ["John Scalzi", "Steve Hamilton", "Remy Sharp"],
... })
>>> bf.search_dataframe(books, "scalzi", keys=["title", "author"])

See Also
--------
- ``bitfuse.expr``: Polars expression namespace for per-row matching
- ``bitfuse.Fuse``: The search engine both functions wrap
"""

from typing import List, Optional, Sequence

import polars as pl

from bitfuse.fuse import Fuse
from bitfuse.options import KeySpec

_ROW = "_row"
_RANK = "_rank"


def _string_columns(df: "pl.DataFrame") -> List[str]:
    return [name for name, dtype in df.schema.items() if dtype == pl.Utf8]


def search_series(series: "pl.Series", query: str, **options) -> "pl.DataFrame":
    """
    Search the values of a Series for ``query``.

    Null values are searched as empty strings.

    Args:
        series: Series of strings to search
        query: The query string
        **options: SearchOptions fields (threshold, distance, tokenize, ...)

    Returns:
        DataFrame with columns:
        - index: Position of the value in the Series
        - value: The matched string
        - score: Aggregate score (lower is better)

    Example:
        >>> names = pl.Series(["John Smith", "Jon Smyth", "Jane Doe"])
        >>> search_series(names, "jon smith", threshold=0.4)
    """
    items = [str(x) if x is not None else "" for x in series.to_list()]
    fuse = Fuse(items, **{**options, "include_score": True, "include_matches": False})
    results = fuse.search(query)

    schema = {"index": pl.Int64, "value": pl.Utf8, "score": pl.Float64}
    if not results:
        return pl.DataFrame(schema=schema)

    return pl.DataFrame(
        {
            "index": [r.index for r in results],
            "value": [r.item for r in results],
            "score": [r.score for r in results],
        },
        schema=schema,
    )


def search_dataframe(
    df: "pl.DataFrame",
    query: str,
    keys: Optional[Sequence[KeySpec]] = None,
    score_column: str = "_score",
    **options,
) -> "pl.DataFrame":
    """
    Search the rows of a DataFrame for ``query``.

    Every row is a record whose columns are addressed by ``keys``; struct
    and list columns can be reached with dotted paths.

    Args:
        df: DataFrame to search
        query: The query string
        keys: Columns to search, with optional weights (any key shape
            accepted by SearchOptions). Defaults to every string column.
        score_column: Name of the appended score column
        **options: Other SearchOptions fields

    Returns:
        The matching rows, best first, with ``score_column`` appended

    Example:
        >>> df = pl.DataFrame({"name": ["Apple Inc", "Microsoft Corp"]})
        >>> search_dataframe(df, "aple", keys=["name"])
    """
    if keys is None:
        keys = _string_columns(df)

    fuse = Fuse(
        df.to_dicts(),
        **{**options, "keys": keys, "id": None, "include_score": True, "include_matches": False},
    )
    results = fuse.search(query)

    hits = pl.DataFrame(
        {
            _ROW: [r.index for r in results],
            score_column: [r.score for r in results],
            _RANK: list(range(len(results))),
        },
        schema={_ROW: pl.UInt32, score_column: pl.Float64, _RANK: pl.UInt32},
    )

    return (
        df.with_row_index(_ROW)
        .join(hits, on=_ROW, how="inner")
        .sort(_RANK)
        .drop([_ROW, _RANK])
    )


__all__ = ["search_series", "search_dataframe"]

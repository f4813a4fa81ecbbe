"""Tests for Polars integration."""

import polars as pl
import pytest

import bitfuse as bf
from bitfuse.polars_ext import search_dataframe, search_series


@pytest.fixture
def books():
    return pl.DataFrame(
        {
            "title": ["Old Man's War", "The Lock Artist", "HTML5"],
            "author": ["John Scalzi", "Steve Hamilton", "Remy Sharp"],
            "year": [2005, 2010, 2010],
        }
    )


class TestExprNamespace:
    """Tests for the .bitap expression namespace."""

    def test_score(self):
        df = pl.DataFrame({"title": ["Old Man's War", "HTML5"]})
        result = df.with_columns(score=pl.col("title").bitap.score("old man's war"))

        assert result.schema["score"] == pl.Float64
        assert result["score"][0] == 0.0

    def test_score_of_substring(self):
        df = pl.DataFrame({"name": ["old man"]})
        result = df.select(pl.col("name").bitap.score("man"))
        assert result["name"][0] == pytest.approx(0.04)

    def test_is_match_filter(self):
        df = pl.DataFrame({"name": ["you", "to", "the"]})
        result = df.filter(pl.col("name").bitap.is_match("yu"))
        assert result["name"].to_list() == ["you"]

    def test_options(self):
        df = pl.DataFrame({"name": ["old man"]})
        result = df.select(
            loose=pl.col("name").bitap.is_match("man"),
            strict=pl.col("name").bitap.is_match("man", distance=0),
        )
        assert result.row(0) == (True, False)

    def test_nulls_stay_null(self):
        df = pl.DataFrame({"name": ["you", None]})
        result = df.select(pl.col("name").bitap.score("yu"))
        assert result["name"][1] is None

    def test_registered_on_import(self):
        assert hasattr(pl.col("x"), "bitap")


class TestSearchSeries:
    """Tests for search_series."""

    def test_basic_search(self):
        result = search_series(pl.Series(["you", "to", "the"]), "yu")

        assert result.columns == ["index", "value", "score"]
        assert result["index"].to_list() == [0]
        assert result["value"].to_list() == ["you"]
        assert result["score"][0] == pytest.approx(0.5)

    def test_ranked(self):
        result = search_series(pl.Series(["xxxxx john", "john x"]), "john")
        assert result["value"].to_list() == ["john x", "xxxxx john"]
        assert result["index"].to_list() == [1, 0]

    def test_no_matches(self):
        result = search_series(pl.Series(["you", "to"]), "zzz")
        assert len(result) == 0
        assert result.schema == {"index": pl.Int64, "value": pl.Utf8, "score": pl.Float64}

    def test_nulls(self):
        result = search_series(pl.Series(["you", None, "yo"]), "you")
        assert result["index"].to_list()[0] == 0
        assert 1 not in result["index"].to_list()

    def test_options_are_forwarded(self):
        result = search_series(pl.Series(["you", "yu"]), "yu", threshold=0.0)
        assert result["value"].to_list() == ["yu"]


class TestSearchDataFrame:
    """Tests for search_dataframe."""

    def test_basic_search(self, books):
        result = search_dataframe(books, "scalzi", keys=["author"])

        assert result.columns == ["title", "author", "year", "_score"]
        assert result["author"][0] == "John Scalzi"
        assert result["_score"][0] == pytest.approx(0.05)

    def test_default_keys_are_string_columns(self):
        df = pl.DataFrame({"title": ["Old Man's War", "HTML5"], "year": [2005, 2010]})
        result = search_dataframe(df, "html5")
        assert result["title"].to_list() == ["HTML5"]
        assert result["_score"][0] == 0.0

    def test_custom_score_column(self, books):
        result = search_dataframe(books, "scalzi", keys=["author"], score_column="relevance")
        assert "relevance" in result.columns
        assert "_score" not in result.columns

    def test_no_matches(self, books):
        result = search_dataframe(books, "zzzzzz", keys=["author"])
        assert len(result) == 0
        assert result.columns == ["title", "author", "year", "_score"]

    def test_weighted_keys(self, books):
        result = search_dataframe(books, "hamilton", keys=[("title", 0.3), ("author", 0.7)])
        assert result["author"][0] == "Steve Hamilton"

    def test_struct_column(self):
        df = pl.DataFrame(
            {
                "title": ["Old Man's War", "The Lock Artist"],
                "author": [
                    {"first": "John", "last": "Scalzi"},
                    {"first": "Steve", "last": "Hamilton"},
                ],
            }
        )
        result = search_dataframe(df, "hamilton", keys=["author.last"])
        assert result["title"].to_list()[0] == "The Lock Artist"
        assert result["_score"][0] == 0.0

    def test_exported_from_package(self):
        assert bf.search_dataframe is search_dataframe
        assert bf.polars.search_series is search_series

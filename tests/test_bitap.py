"""Tests for the Bitap matcher: alphabet, scoring, run collapsing and search."""

import pytest

import bitfuse as bf
from bitfuse.bitap import bitap_score, bitap_search, matched_indices


class TestPatternAlphabet:
    """Tests for pattern_alphabet."""

    def test_repeated_character(self):
        assert bf.pattern_alphabet("abca") == {"a": 0b1001, "b": 0b0100, "c": 0b0010}

    def test_single_character(self):
        assert bf.pattern_alphabet("x") == {"x": 1}

    def test_highest_bit_is_first_character(self):
        alphabet = bf.pattern_alphabet("man")
        assert alphabet["m"] == 1 << 2
        assert alphabet["n"] == 1

    def test_empty_pattern(self):
        assert bf.pattern_alphabet("") == {}

    def test_absent_characters_are_absent(self):
        assert "z" not in bf.pattern_alphabet("abc")


class TestBitapScore:
    """Tests for the score formula."""

    def test_exact_at_expected_location(self):
        assert bitap_score(4) == 0.0

    def test_errors_and_proximity_add_up(self):
        assert bitap_score(4, errors=1, current_location=10) == pytest.approx(0.35)

    def test_proximity_is_symmetric(self):
        before = bitap_score(5, current_location=2, expected_location=10)
        after = bitap_score(5, current_location=18, expected_location=10)
        assert before == after

    def test_zero_distance_displaced(self):
        """distance=0 scores any displacement as a complete mismatch."""
        assert bitap_score(3, errors=0, current_location=4, distance=0) == 1.0

    def test_zero_distance_in_place(self):
        """distance=0 scores an in-place candidate by its error ratio."""
        assert bitap_score(4, errors=2, current_location=0, distance=0) == 0.5


class TestMatchedIndices:
    """Tests for collapsing a flag array into runs."""

    def test_runs(self):
        assert matched_indices([1, 1, 0, 1]) == ((0, 1), (3, 3))

    def test_min_length_drops_short_runs(self):
        assert matched_indices([1, 1, 0, 1], min_match_char_length=2) == ((0, 1),)

    def test_trailing_run(self):
        assert matched_indices([0, 1, 1, 1]) == ((1, 3),)

    def test_whole_array(self):
        assert matched_indices([True, True, True], min_match_char_length=3) == ((0, 2),)

    def test_trailing_run_too_short(self):
        assert matched_indices([1, 1, 1], min_match_char_length=4) == ()

    def test_empty(self):
        assert matched_indices([]) == ()

    def test_no_flags(self):
        assert matched_indices([0, 0, 0]) == ()


class TestBitapSearch:
    """Tests for bitap_search and Bitap."""

    def test_typo_tolerant_title(self):
        assert bf.match("od mn war", "Old Man's War").is_match

    def test_exact_whole_text(self):
        result = bf.match("Hello", "hello")
        assert result == bf.MatchResult(is_match=True, score=0.0, matched_indices=((0, 4),))

    def test_case_sensitive_whole_text(self):
        result = bf.match("Hello", "hello", case_sensitive=True)
        assert result.score > 0.0

    def test_substring_scored_by_distance(self):
        result = bf.match("man", "old man")
        assert result.is_match
        assert result.score == pytest.approx(0.04)
        assert result.matched_indices == ((4, 6),)

    def test_substring_at_location_is_near_exact(self):
        """A perfect hit that is not the whole text reports 0.001, not 0."""
        result = bf.match("old", "old man")
        assert result.is_match
        assert result.score == bf.NEAR_EXACT_SCORE
        assert result.matched_indices == ((0, 2),)

    def test_one_error(self):
        result = bf.match("yu", "you")
        assert result.is_match
        assert result.score == pytest.approx(0.5)
        assert result.matched_indices == ((0, 0), (2, 2))

    def test_no_shared_characters(self):
        result = bf.match("yu", "the")
        assert not result.is_match
        assert result.score == 1.0

    def test_zero_distance_requires_location(self):
        assert not bf.match("man", "old man", distance=0).is_match

    def test_zero_distance_at_location(self):
        result = bf.match("old", "old man", distance=0)
        assert result.is_match
        assert result.score == bf.NEAR_EXACT_SCORE

    def test_threshold_zero_rejects_errors(self):
        assert not bf.match("yu", "you", threshold=0.0).is_match

    def test_find_all_matches_reports_every_run(self):
        assert bf.match("ab", "ab xx ab").matched_indices == ((0, 1),)
        result = bf.match("ab", "ab xx ab", find_all_matches=True)
        assert result.score == bf.NEAR_EXACT_SCORE
        assert result.matched_indices == ((0, 1), (6, 7))

    def test_location_prefers_nearby_hit(self):
        """The hit at the expected location wins over an earlier one."""
        result = bf.match("man", "man xx man", location=7)
        assert result == bf.MatchResult(
            is_match=True, score=bf.NEAR_EXACT_SCORE, matched_indices=((7, 9),)
        )

    def test_location_bounds_the_scan(self):
        """Characters before the expected location are not scanned."""
        result = bf.match("man", "man xx man", location=7, find_all_matches=True)
        assert result.score == bf.NEAR_EXACT_SCORE
        assert result.matched_indices == ((7, 9),)

    def test_location_with_one_error(self):
        result = bf.match("mab", "xx man xx", location=3)
        assert result.is_match
        assert result.score == pytest.approx(1 / 3)
        assert result.matched_indices == ((3, 4),)

    def test_empty_text(self):
        result = bf.match("abc", "")
        assert not result.is_match
        assert result.matched_indices == ()

    def test_precomputed_alphabet(self):
        pattern = "man"
        result = bitap_search("old man", pattern, bf.pattern_alphabet(pattern))
        assert result == bitap_search("old man", pattern)

    def test_search_options_are_accepted(self):
        matcher = bf.Bitap("man", bf.SearchOptions(keys=["title"]))
        assert matcher.search("old man").is_match

    def test_overrides(self):
        matcher = bf.Bitap("man", bf.MatchOptions(), distance=0)
        assert matcher.options.distance == 0
        assert not matcher.search("old man").is_match

    def test_pattern_folded_once(self):
        matcher = bf.Bitap("MaN")
        assert matcher.pattern == "man"
        assert matcher.alphabet == bf.pattern_alphabet("man")

    def test_matcher_is_reusable(self):
        matcher = bf.Bitap("yu")
        assert matcher.search("you") == matcher.search("you")
        assert not matcher.search("the").is_match


class TestEmptyPattern:
    """An empty pattern only matches an empty text."""

    def test_against_text(self):
        result = bf.match("", "anything")
        assert not result.is_match
        assert result.score == 1.0
        assert result.matched_indices == ()

    def test_against_empty_text(self):
        result = bf.match("", "")
        assert result.is_match
        assert result.score == 0.0
        assert result.matched_indices == ()

    def test_bitap_search_directly(self):
        assert not bitap_search("abc", "").is_match

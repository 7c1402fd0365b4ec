"""
Tests for phrase matching and text utilities.

These tests verify:
1. Word-boundary matching (whole-word spans only)
2. Literal, case-sensitive, global, multi-line matching
3. Merging matches from several suggestions
4. Line lookup and selection expansion
"""

import pytest

from suggestions import (
    Suggestion,
    build_target_pattern,
    expand_to_word_boundaries,
    find_all_matches,
    find_matches,
    is_boundary_char,
    iter_lines,
    line_at,
    line_count,
)


def _spans(suggestion, text, base_offset=0):
    return [(m.start_offset, m.end_offset) for m in find_matches(suggestion, text, base_offset)]


# =============================================================================
# TESTS: boundary matching
# =============================================================================

class TestBoundaryMatching:
    """Target phrases match only as whole-word spans."""

    @pytest.mark.parametrize("text", ["foo bar", "say foo.", "(foo)", "foo", "a\tfoo\r\n"])
    def test_matches_at_word_boundaries(self, text):
        assert len(_spans(Suggestion("foo"), text)) == 1

    @pytest.mark.parametrize("text", ["foobar", "barfoo", "foo_bar", "food", "1foo"])
    def test_no_match_inside_words(self, text):
        assert _spans(Suggestion("foo"), text) == []

    def test_offsets_are_half_open(self):
        assert _spans(Suggestion("foo"), "say foo.") == [(4, 7)]

    def test_case_sensitive(self):
        assert _spans(Suggestion("Foo"), "foo Foo FOO") == [(4, 7)]

    def test_phrase_is_literal(self):
        text = "cost is 1.5 or 1x5"
        assert _spans(Suggestion("1.5"), text) == [(8, 11)]

    def test_regex_characters_are_escaped(self):
        assert _spans(Suggestion("a+b"), "a+b aab") == [(0, 3)]
        assert _spans(Suggestion("(x)"), "see (x) now") == [(4, 7)]

    def test_accented_letters_are_word_characters(self):
        text = "un café noir"
        assert _spans(Suggestion("caf"), text) == []
        assert _spans(Suggestion("café"), text) == [(3, 7)]

    def test_pattern_helper(self):
        pattern = build_target_pattern("foo")
        assert pattern.search("say foo.")
        assert not pattern.search("foobar")


# =============================================================================
# TESTS: global and multi-line matching
# =============================================================================

class TestGlobalMatching:
    """All non-overlapping matches are reported left to right."""

    def test_multiple_matches_in_order(self):
        matches = list(find_matches(Suggestion("the"), "the cat and the dog"))
        assert [(m.start_offset, m.end_offset) for m in matches] == [(0, 3), (12, 15)]
        assert [m.occurrence for m in matches] == [0, 1]

    def test_matches_across_lines(self):
        text = "first line foo\nsecond foo line"
        assert _spans(Suggestion("foo"), text) == [(11, 14), (22, 25)]

    def test_multiword_phrase(self):
        text = "He was born in the year 1985."
        assert _spans(Suggestion("in the year"), text) == [(12, 23)]

    def test_base_offset_shifts_results(self):
        assert _spans(Suggestion("foo"), "a foo", base_offset=100) == [(102, 105)]

    def test_is_lazy(self):
        matches = find_matches(Suggestion("x"), "x x x")
        first = next(matches)
        assert first.start_offset == 0

    def test_back_reference(self):
        suggestion = Suggestion("foo", "bar", owner_id="c1")
        match = next(find_matches(suggestion, "foo"))
        assert match.suggestion is suggestion

    def test_no_match(self):
        assert _spans(Suggestion("missing"), "nothing here") == []


class TestFindAllMatches:
    """Matches of several suggestions merge into one ordered stream."""

    def test_sorted_by_offset(self):
        suggestions = [Suggestion("dog"), Suggestion("cat")]
        matches = find_all_matches(suggestions, "cat and dog and cat")
        assert [m.suggestion.target_phrase for m in matches] == ["cat", "dog", "cat"]

    def test_overlapping_matches_dropped(self):
        suggestions = [Suggestion("brown fox"), Suggestion("quick brown")]
        matches = find_all_matches(suggestions, "the quick brown fox")
        assert [m.suggestion.target_phrase for m in matches] == ["quick brown"]

    def test_tie_prefers_earlier_suggestion(self):
        suggestions = [Suggestion("quick", remove=True), Suggestion("quick", "fast")]
        matches = find_all_matches(suggestions, "quick")
        assert len(matches) == 1
        assert matches[0].suggestion.remove is True


# =============================================================================
# TESTS: lines and boundaries
# =============================================================================

class TestLines:
    """Line lookup treats every line break style the same."""

    def test_iter_lines(self):
        lines = list(iter_lines("ab\ncd\r\nef"))
        assert [(l.number, l.from_offset, l.to_offset, l.text) for l in lines] == [
            (1, 0, 2, "ab"),
            (2, 3, 5, "cd"),
            (3, 7, 9, "ef"),
        ]

    def test_empty_text_has_one_line(self):
        assert [l.number for l in iter_lines("")] == [1]

    def test_line_at_line_end_belongs_to_that_line(self):
        line = line_at("ab\ncd", 2)
        assert line.number == 1
        assert line.to_offset == 2

    def test_line_at_next_line(self):
        assert line_at("ab\ncd", 3).number == 2

    def test_line_at_out_of_range(self):
        with pytest.raises(ValueError):
            line_at("ab", 5)

    def test_line_count(self):
        assert line_count("") == 0
        assert line_count("a") == 1
        assert line_count("a\nb") == 2
        assert line_count("a\n") == 2


class TestSelectionExpansion:
    """Selections grow to whole words within their line."""

    def test_partial_word_expands(self):
        assert expand_to_word_boundaries("the quick brown fox", 4, 8) == (4, 9)

    def test_expands_left_and_right(self):
        text = "the quick brown fox"
        start, end = expand_to_word_boundaries(text, 6, 12)
        assert text[start:end] == "quick brown"

    def test_whole_word_unchanged(self):
        assert expand_to_word_boundaries("the quick brown fox", 4, 9) == (4, 9)

    def test_stops_at_line_start_and_end(self):
        text = "first\nsecond\nthird"
        start, end = expand_to_word_boundaries(text, 8, 10)
        assert text[start:end] == "second"

    def test_stops_at_document_end(self):
        text = "the fox"
        assert expand_to_word_boundaries(text, 5, 6) == (4, 7)

    def test_punctuation_is_a_boundary(self):
        text = "say (hello), friend"
        start, end = expand_to_word_boundaries(text, 6, 8)
        assert text[start:end] == "hello"

    def test_accented_word_expands_whole(self):
        assert expand_to_word_boundaries("un café noir", 4, 6) == (3, 7)
        assert not is_boundary_char("é")

    def test_boundary_chars(self):
        assert is_boundary_char(" ")
        assert is_boundary_char("\t")
        assert is_boundary_char(".")
        assert is_boundary_char("-")
        assert not is_boundary_char("a")
        assert not is_boundary_char("_")
        assert not is_boundary_char("")

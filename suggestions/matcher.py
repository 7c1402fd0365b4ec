"""
Suggestion Matcher - Locates target phrases in document text.

A target phrase matches only as a whole-word span: the character before it
must be the start of the text or a non-word character (whitespace, period,
punctuation...), and likewise for the character after it. Matching is
literal, case-sensitive and spans the whole text, so a phrase may match on
any line.
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, List

from .models import Match, Suggestion


def build_target_pattern(target_phrase: str) -> "re.Pattern[str]":
    """
    Compile the search pattern for a target phrase.

    The phrase is escaped, so user text never acts as a wildcard.

    Example:
        pattern = build_target_pattern("foo")
        bool(pattern.search("say foo."))  # True
        bool(pattern.search("foobar"))    # False
    """
    return re.compile(rf"(?<!\w){re.escape(target_phrase)}(?!\w)")


def find_matches(
    suggestion: Suggestion, text: str, base_offset: int = 0
) -> Iterator[Match]:
    """
    Lazily yield every match of the suggestion's target phrase.

    Matches are non-overlapping and in left-to-right order. Each call starts
    a fresh scan of the current text.

    Args:
        suggestion: The suggestion whose target phrase to find
        text: Document text, or a slice of it
        base_offset: Offset of text inside the full document (for slices)
    """
    pattern = build_target_pattern(suggestion.target_phrase)
    for occurrence, found in enumerate(pattern.finditer(text)):
        yield Match(
            start_offset=base_offset + found.start(),
            end_offset=base_offset + found.end(),
            suggestion=suggestion,
            occurrence=occurrence,
        )


def find_all_matches(
    suggestions: Iterable[Suggestion], text: str, base_offset: int = 0
) -> List[Match]:
    """
    Collect matches for many suggestions in document order.

    When matches from different suggestions overlap, the one starting first
    wins (earlier suggestion on ties) and the others are dropped, since the
    render sink only accepts non-overlapping ranges.
    """
    candidates: List[tuple] = []
    for index, suggestion in enumerate(suggestions):
        for match in find_matches(suggestion, text, base_offset):
            candidates.append((match.start_offset, index, match))

    candidates.sort(key=lambda item: (item[0], item[1]))

    kept: List[Match] = []
    for _, _, match in candidates:
        if kept and match.overlaps(kept[-1]):
            continue
        kept.append(match)
    return kept

"""
Suggestion Planner - Computes and applies the edit behind a suggestion.

Replacement: the matched span is replaced by the replacement text.
Removal: the matched span is deleted, plus one trailing character when the
match ends before the end of its line, so no orphan space is left behind.
A match that already ends at the line end never eats the line break.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from .matcher import find_matches
from .models import EditPlan, Match, Suggestion, SuggestionKind
from .text_utils import line_at

logger = logging.getLogger(__name__)


def plan_edit(suggestion: Suggestion, match: Match, text: str) -> Optional[EditPlan]:
    """
    Compute the edit applied when the suggestion's widget is activated.

    Args:
        suggestion: The suggestion being accepted
        match: Where its target phrase sits in text
        text: Current document text

    Returns:
        EditPlan, or None for highlight-only suggestions
    """
    kind = suggestion.kind

    if kind is SuggestionKind.REPLACE:
        return EditPlan(match.start_offset, match.end_offset, suggestion.replacement)

    if kind is SuggestionKind.REMOVE:
        line = line_at(text, match.end_offset)
        extra = 1 if match.end_offset < line.to_offset else 0
        return EditPlan(match.start_offset, match.end_offset + extra, "")

    return None


def preview_plan(suggestion: Suggestion, match: Match) -> Optional[EditPlan]:
    """
    Where the suggestion is shown before it is accepted.

    Replacement text is shown right after the (struck-through) match, so the
    preview is a zero-width insertion at the match end. A removal widget is
    shown in place of the matched span.
    """
    kind = suggestion.kind
    if kind is SuggestionKind.REPLACE:
        return EditPlan(match.end_offset, match.end_offset, suggestion.replacement)
    if kind is SuggestionKind.REMOVE:
        return EditPlan(match.start_offset, match.end_offset, "")
    return None


def apply_plan(text: str, plan: EditPlan) -> str:
    """
    Apply an edit plan to text.

    Raises:
        ValueError: If the plan's range does not fit inside text
    """
    if not 0 <= plan.apply_from <= plan.apply_to <= len(text):
        raise ValueError(
            f"Edit range [{plan.apply_from}, {plan.apply_to}) "
            f"outside document of length {len(text)}"
        )
    return text[:plan.apply_from] + plan.insert_text + text[plan.apply_to:]


def apply_all(
    text: str, suggestions: Iterable[Suggestion]
) -> Tuple[str, List[EditPlan]]:
    """
    Accept every actionable suggestion in order.

    Matches are recomputed against the current text for each suggestion and
    applied right to left, so every offset used is still valid in the text it
    is applied to. Nothing is patched across edits.

    Returns:
        Tuple of (new_text, plans in the order they were applied)
    """
    applied: List[EditPlan] = []

    for suggestion in suggestions:
        if not suggestion.kind.is_actionable:
            continue

        matches = list(find_matches(suggestion, text))
        for match in reversed(matches):
            plan = plan_edit(suggestion, match, text)
            text = apply_plan(text, plan)
            applied.append(plan)

        if matches:
            logger.debug(
                f"Applied {suggestion.kind.value} suggestion "
                f"{suggestion.target_phrase!r} at {len(matches)} location(s)"
            )

    return text, applied

"""
Suggestions Module - Inline edit suggestions embedded in side comments.

A reviewer writes compact annotations in a comment anchored to a line:

    |teh -> the|     replace a phrase
    |very -> |       remove a phrase
    |TBD|            highlight a phrase

This module parses those annotations, finds the target phrases in the
document with word-boundary matching, describes clickable widgets for the
host renderer, and applies an accepted suggestion as one atomic edit.

Parsing and planning (no host needed):
    from suggestions import parse_comment, find_matches, plan_edit, apply_plan

    suggestions = parse_comment("|teh -> the|", owner_id="c1")
    match = next(find_matches(suggestions[0], text))
    text = apply_plan(text, plan_edit(suggestions[0], match, text))

Host integration:
    from suggestions import SuggestionController

    controller = SuggestionController(view, comment_store=store)
    controller.render(comments, sink)
    controller.accept(widget)
    await controller.create_suggestion_from_selection()
"""

from .models import (
    # Core records
    Suggestion,
    SuggestionKind,
    Match,
    EditPlan,
    # Host integration records
    Line,
    Selection,
    Decoration,
    DecorationKind,
    SuggestionWidget,
    CommentAnnotation,
    AuthoringResult,
    ControllerSettings,
)
from .parser import (
    parse_comment,
    parse_annotations,
    format_annotation,
)
from .matcher import (
    build_target_pattern,
    find_matches,
    find_all_matches,
)
from .planner import (
    plan_edit,
    preview_plan,
    apply_plan,
    apply_all,
)
from .text_utils import (
    iter_lines,
    line_at,
    line_count,
    is_boundary_char,
    expand_to_word_boundaries,
)
from .controller import SuggestionController
from .interfaces import (
    CommentStore,
    DecorationSink,
    EditSink,
    EditorView,
    EditingSurface,
    TextHandle,
)
from .memory import (
    InMemoryCommentStore,
    InMemoryEditorView,
    RecordingDecorationSink,
)

__all__ = [
    # Core records
    "Suggestion",
    "SuggestionKind",
    "Match",
    "EditPlan",
    # Host integration records
    "Line",
    "Selection",
    "Decoration",
    "DecorationKind",
    "SuggestionWidget",
    "CommentAnnotation",
    "AuthoringResult",
    "ControllerSettings",
    # Parsing
    "parse_comment",
    "parse_annotations",
    "format_annotation",
    # Matching
    "build_target_pattern",
    "find_matches",
    "find_all_matches",
    # Planning
    "plan_edit",
    "preview_plan",
    "apply_plan",
    "apply_all",
    # Text utilities
    "iter_lines",
    "line_at",
    "line_count",
    "is_boundary_char",
    "expand_to_word_boundaries",
    # Controller and collaborators
    "SuggestionController",
    "CommentStore",
    "DecorationSink",
    "EditSink",
    "EditorView",
    "EditingSurface",
    "TextHandle",
    "InMemoryCommentStore",
    "InMemoryEditorView",
    "RecordingDecorationSink",
]

__version__ = "1.0.0"

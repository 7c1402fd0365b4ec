"""
Suggestion Controller - Connects parsed suggestions to a live editor.

Responsibilities:
1. Rendering: turn comment annotations into decoration descriptors, in
   document order, for the host's render sink
2. Activation: one-shot widgets whose activation yields an EditPlan, applied
   as a single edit by a separate step that owns the document
3. Authoring: turn the current selection into a new ``|phrase -> |`` entry in
   the comment anchored to the selection's line

The controller never draws, never holds locks and never caches matches: every
render and every activation works from the current document text.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import replace
from typing import Callable, Iterable, List, Optional

from .interfaces import CommentStore, DecorationSink, EditorView
from .matcher import find_all_matches, find_matches
from .models import (
    AuthoringResult,
    CommentAnnotation,
    ControllerSettings,
    Decoration,
    DecorationKind,
    EditPlan,
    Match,
    Suggestion,
    SuggestionKind,
    SuggestionWidget,
)
from .parser import format_annotation, parse_annotations
from .planner import plan_edit
from .text_utils import expand_to_word_boundaries, line_at, line_count

logger = logging.getLogger(__name__)


class SuggestionController:
    """
    Renders, activates and authors inline suggestions for one editor view.

    Example:
        controller = SuggestionController(view, comment_store=store)
        controller.render(comments, sink)

        # Host click handler
        plan = controller.accept(widget)

        # Host "add suggestion" button (mousedown must not steal focus)
        result = await controller.create_suggestion_from_selection()
    """

    def __init__(
        self,
        view: EditorView,
        comment_store: Optional[CommentStore] = None,
        settings: Optional[ControllerSettings] = None,
        on_comments_changed: Optional[Callable[[], None]] = None,
    ):
        """
        Initialize the controller.

        Args:
            view: Host view owning the document text, selection and edits
            comment_store: Comment store for the authoring flow.
                           Not required for rendering and activation.
            settings: Styling and behavior settings
            on_comments_changed: Called after the authoring flow changed a comment
        """
        self.view = view
        self.comment_store = comment_store
        self.settings = settings or ControllerSettings()
        self.on_comments_changed = on_comments_changed

    # =========================================================================
    # RENDERING
    # =========================================================================

    def collect_suggestions(self, comments: Iterable[CommentAnnotation]) -> List[Suggestion]:
        """Parse every comment's annotations."""
        return parse_annotations(comments, css_class=self.settings.css_class)

    def build_decorations(
        self,
        suggestions: Iterable[Suggestion],
        text: Optional[str] = None,
        base_offset: int = 0,
    ) -> List[Decoration]:
        """
        Build decorations for every match, in ascending offset order.

        Args:
            suggestions: Parsed suggestions
            text: Text to scan (defaults to the whole document)
            base_offset: Offset of text inside the document (for visible ranges)
        """
        if text is None:
            text = self.view.text

        decorations: List[Decoration] = []
        for match in find_all_matches(suggestions, text, base_offset):
            if base_offset:
                match = self._document_match(match)
            decorations.extend(self._decorate(match, text, base_offset))
        return decorations

    def _document_match(self, match: Match) -> Match:
        """Re-index a match found in a slice by its occurrence in the whole document."""
        for candidate in find_matches(match.suggestion, self.view.text):
            if candidate.start_offset == match.start_offset:
                return replace(match, occurrence=candidate.occurrence)
        # Slice does not line up with the document
        return replace(match, occurrence=-1)

    def _decorate(self, match: Match, text: str, base_offset: int) -> List[Decoration]:
        suggestion = match.suggestion
        attributes = {"class": suggestion.css_class}
        if suggestion.color:
            attributes["style"] = f"color: {suggestion.color}"

        kind = suggestion.kind
        if kind is SuggestionKind.HIGHLIGHT:
            return [Decoration(match.start_offset, match.end_offset, DecorationKind.MARK, attributes=attributes)]

        if kind is SuggestionKind.REMOVE:
            matched_text = text[match.start_offset - base_offset:match.end_offset - base_offset]
            widget = SuggestionWidget(
                text=matched_text,
                css_class=self.settings.remove_class,
                title=self.settings.remove_title,
                match=match,
                color=suggestion.color,
            )
            return [Decoration(match.start_offset, match.end_offset, DecorationKind.REPLACE, widget=widget)]

        # Replacement: strike through the match, show the new text right after it
        attributes["class"] += " replaced"
        widget = SuggestionWidget(
            text=suggestion.replacement,
            css_class=self.settings.replacement_class,
            title=self.settings.accept_title,
            match=match,
            color=suggestion.color,
        )
        return [
            Decoration(match.start_offset, match.end_offset, DecorationKind.MARK, attributes=attributes),
            Decoration(match.end_offset, match.end_offset, DecorationKind.WIDGET, widget=widget),
        ]

    def render(self, comments: Iterable[CommentAnnotation], sink: DecorationSink) -> int:
        """
        Parse comments and push their decorations to the sink.

        Returns:
            Number of decorations added
        """
        decorations = self.build_decorations(self.collect_suggestions(comments))
        for decoration in decorations:
            sink.add_decoration(decoration.from_offset, decoration.to_offset, decoration)
        return len(decorations)

    # =========================================================================
    # ACTIVATION
    # =========================================================================

    def activate(self, widget: SuggestionWidget) -> Optional[EditPlan]:
        """
        Produce the edit for a clicked widget. Works only once per widget.

        Returns:
            EditPlan against the current document, or None when the widget was
            already activated or its phrase can no longer be found
        """
        if widget.activated:
            logger.debug(f"Ignoring repeated activation of {widget.suggestion.target_phrase!r}")
            return None
        widget.activated = True

        text = self.view.text
        match = widget.match
        if self.settings.revalidate_on_activate:
            match = self._revalidate(match, text)
            if match is None:
                logger.warning(
                    f"Suggestion {widget.suggestion.target_phrase!r} no longer matches "
                    "the document, nothing applied"
                )
                return None
        elif match.end_offset > len(text):
            logger.warning(
                f"Suggestion {widget.suggestion.target_phrase!r} points past the end "
                "of the document, nothing applied"
            )
            return None

        return plan_edit(widget.suggestion, match, text)

    def _revalidate(self, match: Match, text: str) -> Optional[Match]:
        """Return the match if it still holds in text, else the same occurrence re-found."""
        moved: Optional[Match] = None
        for candidate in find_matches(match.suggestion, text):
            if candidate.start_offset == match.start_offset:
                return candidate
            if candidate.occurrence == match.occurrence:
                moved = candidate

        if moved is not None:
            logger.info(
                f"Suggestion {match.suggestion.target_phrase!r} moved from "
                f"{match.start_offset} to {moved.start_offset}"
            )
        return moved

    def apply(self, plan: EditPlan, kind: Optional[SuggestionKind] = None) -> None:
        """Dispatch one atomic edit to the view."""
        label = "removal" if (kind is SuggestionKind.REMOVE or plan.is_deletion) else "replacement"
        line = line_at(self.view.text, plan.apply_from)
        logger.info(
            f"Applying {label} suggestion from {plan.apply_from} to {plan.apply_to}, "
            f"line {line.number}"
        )
        self.view.dispatch_edit(plan.apply_from, plan.apply_to, plan.insert_text)

    def accept(self, widget: SuggestionWidget) -> Optional[EditPlan]:
        """Activate a widget and apply its edit. The host must re-render afterwards."""
        plan = self.activate(widget)
        if plan is not None:
            self.apply(plan, widget.suggestion.kind)
        return plan

    # =========================================================================
    # AUTHORING
    # =========================================================================

    def should_show_affordance(self) -> bool:
        """The "add suggestion" button shows for a focused, non-empty, single-line selection."""
        if not self.view.has_focus:
            return False
        selection = self.view.selection
        if selection.empty:
            return False
        text = self.view.text
        return line_at(text, selection.anchor).number == line_at(text, selection.head).number

    async def create_suggestion_from_selection(self) -> Optional[AuthoringResult]:
        """
        Write a ``|phrase -> |`` entry for the selected phrase into its line's comment.

        The selection is first grown to whole words. The entry is appended to the
        comment already anchored to the line (on a new line) or to a new comment,
        inside a single store transaction that also records attribution for the
        new text. The comment is then shown, and once its editing surface exists
        the caret is placed just inside the closing pipe.

        Returns:
            AuthoringResult, or None when there is nothing to do
        """
        store = self.comment_store
        if store is None or not self.should_show_affordance():
            return None

        text = self.view.text
        selection = self.view.selection
        line = line_at(text, selection.from_offset)
        start, end = expand_to_word_boundaries(text, selection.from_offset, selection.to_offset, line)
        annotation = format_annotation(text[start:end])

        existing_id = store.find_comment_on_line(line.number)
        created = existing_id is None
        if not created:
            annotation = "\n" + annotation

        written: List[str] = []

        def append_annotation() -> None:
            # New comments belong to the transaction and roll back with it
            target_id = store.create_comment(line.number) if created else existing_id
            comment_text = store.get_text(target_id)
            first_new_line = line_count(str(comment_text))
            comment_text.insert(len(comment_text), annotation)
            store.mark_attribution(target_id, first_new_line)
            written.append(target_id)

        store.run_transaction(append_annotation, self.settings.transaction_origin)
        comment_id = written[0]
        logger.info(
            f"Added suggestion {text[start:end]!r} to "
            f"{'new' if created else 'existing'} comment {comment_id} on line {line.number}"
        )

        store.set_visible(comment_id, True)
        if self.on_comments_changed is not None:
            self.on_comments_changed()

        try:
            surface = await asyncio.wait_for(
                store.get_editing_surface(comment_id),
                timeout=self.settings.editing_surface_timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                f"Editing surface for comment {comment_id} not ready after "
                f"{self.settings.editing_surface_timeout}s, caret not placed"
            )
            return AuthoringResult(comment_id, annotation, created)

        # Just inside the closing pipe, where the replacement goes
        caret = max(len(surface) - 1, 0)
        surface.focus()
        surface.set_caret(caret)
        return AuthoringResult(comment_id, annotation, created, caret_offset=caret)

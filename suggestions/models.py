"""
Suggestion Models - Data structures for inline edit suggestions.

This module defines the core data models used throughout the suggestions system:

Core Types:
- SuggestionKind: What a parsed directive does (replace, remove, highlight)
- Suggestion: One parsed directive from a comment annotation
- Match: A located occurrence of a suggestion's target phrase
- EditPlan: The exact range and text to apply when a suggestion is accepted

Host Integration Types:
- Line / Selection: Positions inside the host document
- DecorationKind / Decoration: Range descriptors handed to the render sink
- SuggestionWidget: Opaque, one-shot activatable renderable
- CommentAnnotation: A comment's text as seen by the parser
- AuthoringResult: Outcome of the "create suggestion from selection" flow
- ControllerSettings: Styling and behavior knobs for SuggestionController

Matches and plans are transient: they are recomputed on every render pass and
every activation, and are never persisted.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field


class SuggestionKind(str, Enum):
    """What accepting a suggestion does to the document."""

    REPLACE = "replace"  # |target -> replacement|
    REMOVE = "remove"  # |target -> |
    HIGHLIGHT = "highlight"  # |target|

    @property
    def is_actionable(self) -> bool:
        """Highlight-only suggestions have nothing to apply."""
        return self is not SuggestionKind.HIGHLIGHT


class DecorationKind(str, Enum):
    """Kinds of decorations the render sink understands."""

    MARK = "mark"  # Styles an existing span
    REPLACE = "replace"  # Hides a span and shows a widget in its place
    WIDGET = "widget"  # Zero-width widget at a position


@dataclass(frozen=True)
class Suggestion:
    """
    One parsed directive from an owner comment.

    Examples:
        # Replace
        Suggestion(target_phrase="color", replacement="colour", owner_id="c1")

        # Remove
        Suggestion(target_phrase="very", remove=True, owner_id="c1")

        # Highlight only
        Suggestion(target_phrase="TBD", owner_id="c1")
    """

    target_phrase: str
    replacement: str = ""
    remove: bool = False
    owner_id: str = ""
    color: Optional[str] = None
    css_class: str = "cm-suggestion"

    def __post_init__(self):
        """Validate the replace/remove/highlight invariant."""
        if not self.target_phrase:
            raise ValueError("Suggestion requires a non-empty target_phrase")
        if self.remove and self.replacement:
            raise ValueError(
                "Suggestion cannot both remove and replace "
                f"(target={self.target_phrase!r}, replacement={self.replacement!r})"
            )

    @property
    def kind(self) -> SuggestionKind:
        if self.remove:
            return SuggestionKind.REMOVE
        if self.replacement:
            return SuggestionKind.REPLACE
        return SuggestionKind.HIGHLIGHT

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "target": self.target_phrase,
            "replacement": self.replacement,
            "remove": self.remove,
            "kind": self.kind.value,
            "owner_id": self.owner_id,
            "color": self.color,
        }


@dataclass(frozen=True)
class Match:
    """
    A located occurrence of a suggestion's target phrase.

    Attributes:
        start_offset: Start of the matched phrase (inclusive)
        end_offset: End of the matched phrase (exclusive)
        suggestion: The suggestion this match belongs to (not owned)
        occurrence: 0-based index among this suggestion's matches in the scanned
            text (-1 when it has no place in the document)
    """

    start_offset: int
    end_offset: int
    suggestion: Suggestion
    occurrence: int = 0

    def overlaps(self, other: "Match") -> bool:
        """Check whether two matches share at least one character."""
        return self.start_offset < other.end_offset and other.start_offset < self.end_offset


@dataclass(frozen=True)
class EditPlan:
    """
    The atomic mutation performed when a suggestion is accepted.

    Offsets refer to the document text at the moment the plan is applied.
    """

    apply_from: int
    apply_to: int
    insert_text: str = ""

    @property
    def is_deletion(self) -> bool:
        return not self.insert_text and self.apply_to > self.apply_from

    @property
    def is_insertion(self) -> bool:
        return bool(self.insert_text) and self.apply_to == self.apply_from

    @property
    def char_delta(self) -> int:
        """Net change in character count."""
        return len(self.insert_text) - (self.apply_to - self.apply_from)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "from": self.apply_from,
            "to": self.apply_to,
            "insert": self.insert_text,
        }


@dataclass(frozen=True)
class Line:
    """A document line. ``to_offset`` excludes the line break."""

    number: int
    from_offset: int
    to_offset: int
    text: str


@dataclass(frozen=True)
class Selection:
    """Main selection of the host view (anchor may be after head)."""

    anchor: int
    head: int

    @property
    def from_offset(self) -> int:
        return min(self.anchor, self.head)

    @property
    def to_offset(self) -> int:
        return max(self.anchor, self.head)

    @property
    def empty(self) -> bool:
        return self.anchor == self.head


@dataclass
class SuggestionWidget:
    """
    Renderable handed to the host's decoration sink.

    The host binds it to whatever UI primitive it uses and calls
    SuggestionController.activate()/accept() when the user clicks it.
    Activation is one-shot.
    """

    text: str
    css_class: str
    title: str
    match: Match
    color: Optional[str] = None
    activated: bool = False

    @property
    def suggestion(self) -> Suggestion:
        return self.match.suggestion


@dataclass(frozen=True)
class Decoration:
    """A range descriptor for the render sink."""

    from_offset: int
    to_offset: int
    kind: DecorationKind
    widget: Optional[SuggestionWidget] = None
    attributes: Dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class CommentAnnotation:
    """A side comment whose text may contain suggestion annotations."""

    comment_id: str
    text: str
    color: Optional[str] = None


@dataclass(frozen=True)
class AuthoringResult:
    """Outcome of creating a suggestion from the current selection."""

    comment_id: str
    annotation_text: str
    created: bool
    caret_offset: Optional[int] = None


class ControllerSettings(BaseModel):
    """Styling and behavior settings for SuggestionController."""

    model_config = {"populate_by_name": True}

    css_class: str = Field(
        default="cm-suggestion",
        description="Base class for matched phrases",
    )
    replacement_class: str = Field(
        default="cm-replacement",
        description="Class for the inline replacement widget",
    )
    remove_class: str = Field(
        default="cm-suggestion-remove",
        description="Class for the inline removal widget",
    )
    accept_title: str = Field(
        default="Accept suggestion",
        description="Tooltip for replacement widgets",
    )
    remove_title: str = Field(
        default="Remove section",
        description="Tooltip for removal widgets",
    )
    revalidate_on_activate: bool = Field(
        default=True,
        description="Re-check captured offsets against the current text before applying",
    )
    editing_surface_timeout: float = Field(
        default=5.0,
        gt=0,
        description="Seconds to wait for the comment editing surface to materialize",
    )
    transaction_origin: str = Field(
        default="suggestions",
        description="Origin id passed to the comment store transaction",
    )

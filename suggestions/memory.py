"""
In-memory collaborators for SuggestionController.

Simple implementations of the interfaces in ``interfaces.py`` (useful for
tests, the CLI, or any host that keeps documents and comments in process).
"""

from __future__ import annotations

import asyncio
import copy
import logging
import uuid
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from .models import Decoration, EditPlan, Selection
from .planner import apply_plan

logger = logging.getLogger(__name__)


class InMemoryEditorView:
    """A plain-text document with a selection and a focus flag."""

    def __init__(
        self,
        text: str = "",
        selection: Optional[Selection] = None,
        has_focus: bool = True,
    ) -> None:
        self._text = text
        self._selection = selection or Selection(0, 0)
        self._has_focus = has_focus
        self.edits: List[EditPlan] = []

    @property
    def text(self) -> str:
        return self._text

    @property
    def selection(self) -> Selection:
        return self._selection

    @property
    def has_focus(self) -> bool:
        return self._has_focus

    def select(self, anchor: int, head: Optional[int] = None) -> None:
        self._selection = Selection(anchor, anchor if head is None else head)

    def set_focus(self, focused: bool) -> None:
        self._has_focus = focused

    def dispatch_edit(self, from_offset: int, to_offset: int, insert_text: str) -> None:
        plan = EditPlan(from_offset, to_offset, insert_text)
        self._text = apply_plan(self._text, plan)
        self.edits.append(plan)
        # Collapse the selection so it never points past the new end
        end = min(self._selection.head, len(self._text))
        self._selection = Selection(end, end)


class RecordingDecorationSink:
    """Collects decorations and enforces the sink ordering contract."""

    def __init__(self) -> None:
        self.decorations: List[Decoration] = []

    def add_decoration(self, from_offset: int, to_offset: int, decoration: Decoration) -> None:
        if from_offset > to_offset:
            raise ValueError(f"Decoration range [{from_offset}, {to_offset}) is inverted")
        if self.decorations:
            last = self.decorations[-1]
            if from_offset < last.from_offset:
                raise ValueError("Decorations must be added in ascending offset order")
            if last.to_offset > last.from_offset and from_offset < last.to_offset:
                raise ValueError("Decorations must not overlap")
        self.decorations.append(decoration)

    def clear(self) -> None:
        self.decorations.clear()


class CommentText:
    """Mutable text of one comment."""

    def __init__(self, text: str = "") -> None:
        self._text = text

    def __len__(self) -> int:
        return len(self._text)

    def __str__(self) -> str:
        return self._text

    def insert(self, index: int, text: str) -> None:
        if not 0 <= index <= len(self._text):
            raise IndexError(f"Insert index {index} outside comment of length {len(self._text)}")
        self._text = self._text[:index] + text + self._text[index:]


@dataclass
class StoredComment:
    comment_id: str
    line_number: int
    text: CommentText = field(default_factory=CommentText)
    visible: bool = False
    # (from_line_index, transaction origin)
    attributions: List[Tuple[int, Optional[str]]] = field(default_factory=list)


class InMemoryEditingSurface:
    """Editor for a stored comment, tracking focus and caret."""

    def __init__(self, comment: StoredComment) -> None:
        self._comment = comment
        self.focused = False
        self.caret: Optional[int] = None

    def __len__(self) -> int:
        return len(self._comment.text)

    def focus(self) -> None:
        self.focused = True

    def set_caret(self, offset: int) -> None:
        if not 0 <= offset <= len(self):
            raise IndexError(f"Caret {offset} outside comment of length {len(self)}")
        self.caret = offset


class InMemoryCommentStore:
    """
    Line-anchored comments with all-or-nothing transactions.

    Args:
        surface_delay: Seconds before an editing surface materializes
    """

    def __init__(self, surface_delay: float = 0.0) -> None:
        self._comments: Dict[str, StoredComment] = {}
        self._surfaces: Dict[str, InMemoryEditingSurface] = {}
        self._origin: Optional[str] = None
        self.surface_delay = surface_delay
        self.transactions: List[str] = []

    # C
    def create_comment(self, line_number: int, text: str = "") -> str:
        comment_id = f"comment-{uuid.uuid4().hex[:8]}"
        self._comments[comment_id] = StoredComment(comment_id, line_number, CommentText(text))
        return comment_id

    # R
    def read(self, comment_id: str) -> StoredComment:
        return self._comments[comment_id]

    def find_comment_on_line(self, line_number: int) -> Optional[str]:
        for comment in self._comments.values():
            if comment.line_number == line_number:
                return comment.comment_id
        return None

    def get_text(self, comment_id: str) -> CommentText:
        return self.read(comment_id).text

    def comments(self) -> List[StoredComment]:
        return list(self._comments.values())

    # U
    def mark_attribution(self, comment_id: str, from_line_index: int) -> None:
        self.read(comment_id).attributions.append((from_line_index, self._origin))

    def set_visible(self, comment_id: str, visible: bool) -> None:
        self.read(comment_id).visible = visible

    def run_transaction(self, fn: Callable[[], None], origin_id: str) -> None:
        """Run fn atomically: on error every change it made is rolled back."""
        snapshot = copy.deepcopy(self._comments)
        self._origin = origin_id
        try:
            fn()
        except Exception:
            logger.warning(f"Comment transaction from {origin_id!r} failed, rolling back")
            self._comments = snapshot
            self._surfaces.clear()
            raise
        finally:
            self._origin = None
        self.transactions.append(origin_id)

    async def get_editing_surface(self, comment_id: str) -> InMemoryEditingSurface:
        comment = self.read(comment_id)
        if self.surface_delay:
            await asyncio.sleep(self.surface_delay)
        surface = self._surfaces.get(comment_id)
        if surface is None:
            surface = InMemoryEditingSurface(comment)
            self._surfaces[comment_id] = surface
        return surface

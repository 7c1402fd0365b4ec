"""
Collaborator interfaces consumed by SuggestionController.

The host editor, its renderer and the collaborative comment store are owned
elsewhere; the controller only talks to them through these protocols.
"""

from __future__ import annotations

from typing import Awaitable, Callable, Optional, Protocol

from .models import Decoration, Selection


class DecorationSink(Protocol):
    """Receives decorations in ascending, non-overlapping offset order."""

    def add_decoration(self, from_offset: int, to_offset: int, decoration: Decoration) -> None: ...


class EditSink(Protocol):
    """Applies one atomic change to the current document text."""

    def dispatch_edit(self, from_offset: int, to_offset: int, insert_text: str) -> None: ...


class EditorView(EditSink, Protocol):
    """The host view the suggestions are rendered into."""

    @property
    def text(self) -> str: ...

    @property
    def selection(self) -> Selection: ...

    @property
    def has_focus(self) -> bool: ...


class TextHandle(Protocol):
    """Mutable text of one comment."""

    def __len__(self) -> int: ...

    def __str__(self) -> str: ...

    def insert(self, index: int, text: str) -> None: ...


class EditingSurface(Protocol):
    """Live editor of one comment."""

    def __len__(self) -> int: ...

    def focus(self) -> None: ...

    def set_caret(self, offset: int) -> None: ...


class CommentStore(Protocol):
    """Line-anchored side comments with transactional updates."""

    def find_comment_on_line(self, line_number: int) -> Optional[str]: ...

    def create_comment(self, line_number: int) -> str: ...

    def get_text(self, comment_id: str) -> TextHandle: ...

    def mark_attribution(self, comment_id: str, from_line_index: int) -> None: ...

    def run_transaction(self, fn: Callable[[], None], origin_id: str) -> None: ...

    def set_visible(self, comment_id: str, visible: bool) -> None: ...

    def get_editing_surface(self, comment_id: str) -> Awaitable[EditingSurface]: ...

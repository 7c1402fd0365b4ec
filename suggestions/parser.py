"""
Suggestion Parser - Turns comment annotations into Suggestion records.

Annotation mini-language (embedded anywhere in a comment's text):

    |target|                 highlight the phrase only
    |target -> replacement|  replace the phrase
    |target -> |             remove the phrase

Entries are delimited by pipes. Text between entries is ignored, and an
unterminated trailing entry is discarded. There is no escaping: a literal
"|" or "->" cannot appear inside a target phrase.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from .models import CommentAnnotation, Suggestion

logger = logging.getLogger(__name__)

ENTRY_DELIMITER = "|"
ARROW = "->"


def parse_comment(
    text: str,
    owner_id: str,
    color: Optional[str] = None,
    css_class: str = "cm-suggestion",
) -> List[Suggestion]:
    """
    Parse every annotation entry in a comment's text.

    Args:
        text: The comment text
        owner_id: Id of the comment (copied onto every suggestion)
        color: Display color of the comment author, passed through
        css_class: Class handed to the render sink for matched phrases

    Returns:
        Suggestions in order of appearance. Malformed entries produce nothing.

    Example:
        parse_comment("|teh -> the| and |very -> |", "c1")
        # [Suggestion("teh", "the"), Suggestion("very", remove=True)]
    """
    suggestions: List[Suggestion] = []
    rest = text or ""

    while rest:
        start = rest.find(ENTRY_DELIMITER)
        if start == -1:
            break
        rest = rest[start + 1:]

        end = rest.find(ENTRY_DELIMITER)
        if end == -1:
            # Unterminated trailing entry
            break

        body = rest[:end]
        rest = rest[end + 1:]

        target = body
        replacement = ""
        remove = False
        arrow = body.find(ARROW)
        if arrow != -1:
            right_side = body[arrow + len(ARROW):].lstrip()
            if right_side:
                replacement = right_side
            else:
                remove = True
            target = body[:arrow].rstrip()

        if not target.strip():
            logger.debug(f"Skipping annotation entry with empty target: {body!r}")
            continue

        suggestions.append(
            Suggestion(
                target_phrase=target,
                replacement=replacement,
                remove=remove,
                owner_id=owner_id,
                color=color,
                css_class=css_class,
            )
        )

    return suggestions


def parse_annotations(
    comments: Iterable[CommentAnnotation],
    css_class: str = "cm-suggestion",
) -> List[Suggestion]:
    """Parse several comments, keeping comment order then entry order."""
    suggestions: List[Suggestion] = []
    for comment in comments:
        suggestions.extend(
            parse_comment(comment.text, comment.comment_id, comment.color, css_class)
        )
    return suggestions


def format_annotation(target_phrase: str, replacement: str = "") -> str:
    """
    Build a single annotation entry.

    An empty replacement yields the "ready to edit" form ``|phrase -> |``,
    which parses as a removal until the author types a replacement.
    """
    return f"{ENTRY_DELIMITER}{target_phrase} {ARROW} {replacement}{ENTRY_DELIMITER}"

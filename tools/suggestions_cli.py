#!/usr/bin/env python
"""CLI tool to list or apply inline edit suggestions against a text file."""
import sys
import argparse
import logging
from pathlib import Path
from typing import List, Optional

# Add parent directory to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

import json_utils as json
from config import config, get_log_level
from logging_utils import format_plan_summary, setup_logging
from suggestions import (
    CommentAnnotation,
    SuggestionKind,
    apply_all,
    find_all_matches,
    line_at,
    parse_annotations,
    plan_edit,
)

logger = logging.getLogger("suggestions_cli")


def _load_comments(args: argparse.Namespace) -> Optional[List[CommentAnnotation]]:
    comments = []
    for index, comment_path in enumerate(args.comment or []):
        path = Path(comment_path)
        if not path.exists():
            print(f"Error: Comment file not found: {comment_path}", file=sys.stderr)
            return None
        comments.append(CommentAnnotation(path.stem or f"comment-{index}", path.read_text(encoding="utf-8")))
    for index, annotation in enumerate(args.annotation or []):
        comments.append(CommentAnnotation(f"inline-{index}", annotation))
    return comments


def list_suggestions(text: str, comments: List[CommentAnnotation]) -> list:
    """Describe every match with the edit accepting it would make."""
    suggestions = parse_annotations(comments, css_class=config.SUGGESTIONS.css_class)
    rows = []
    for match in find_all_matches(suggestions, text):
        plan = plan_edit(match.suggestion, match, text)
        rows.append(
            {
                "suggestion": match.suggestion.to_dict(),
                "match": {
                    "start": match.start_offset,
                    "end": match.end_offset,
                    "line": line_at(text, match.start_offset).number,
                    "text": text[match.start_offset:match.end_offset],
                },
                "plan": plan.to_dict() if plan else None,
            }
        )
    return rows


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Apply |target -> replacement| suggestions from comments to a document."
    )
    parser.add_argument("document", help="Path to the text document")
    parser.add_argument(
        "-c", "--comment", action="append", help="Path to a comment file (repeatable)"
    )
    parser.add_argument(
        "-a", "--annotation", action="append", help="Annotation text, e.g. '|teh -> the|' (repeatable)"
    )
    parser.add_argument(
        "--list", action="store_true", help="Print matches and planned edits as JSON instead of applying"
    )
    parser.add_argument(
        "--in-place", action="store_true", help="Write the edited text back to the document"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Log every applied edit"
    )

    args = parser.parse_args(argv)
    setup_logging(get_log_level("DEBUG" if args.verbose else None), colored=config.LOG_COLORS)

    doc_path = Path(args.document)
    if not doc_path.exists():
        print(f"Error: File not found: {args.document}", file=sys.stderr)
        return 1

    comments = _load_comments(args)
    if comments is None:
        return 1

    text = doc_path.read_text(encoding="utf-8")

    if args.list:
        print(json.dumps(list_suggestions(text, comments), indent=2))
        return 0

    suggestions = parse_annotations(comments, css_class=config.SUGGESTIONS.css_class)
    new_text, plans = apply_all(text, suggestions)
    if not plans:
        logger.info("No suggestion matched the document, nothing applied")
        return 2

    if args.verbose:
        for plan in plans:
            kind = SuggestionKind.REMOVE if plan.is_deletion else SuggestionKind.REPLACE
            logger.debug(format_plan_summary(kind, plan, colored=config.LOG_COLORS))

    if args.in_place:
        doc_path.write_text(new_text, encoding="utf-8")
        logger.info(f"Applied {len(plans)} edit(s) to {doc_path}")
    else:
        sys.stdout.write(new_text)
    return 0


if __name__ == "__main__":
    sys.exit(main())

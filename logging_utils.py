"""
Console Logging for the inline suggestions engine
=================================================

Colored, level-tagged console logging plus one-line edit summaries.
IMPORTANT: No emojis in console output (Windows encoding issues).
"""

import logging
from typing import Optional

from colorama import Fore, Style, init

from suggestions.models import EditPlan, SuggestionKind

# Initialize colorama for Windows
init(autoreset=True)

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Level colors
LEVEL_COLORS = {
    logging.DEBUG: Fore.WHITE + Style.DIM,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

# Edit icons (text-based, no emojis for Windows)
KIND_ICONS = {
    SuggestionKind.REPLACE: "[REP]",
    SuggestionKind.REMOVE: "[DEL]",
    SuggestionKind.HIGHLIGHT: "[HLT]",
}

KIND_COLORS = {
    SuggestionKind.REPLACE: Fore.GREEN,
    SuggestionKind.REMOVE: Fore.RED,
    SuggestionKind.HIGHLIGHT: Fore.YELLOW,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that colors the whole record by level."""

    def __init__(self, fmt: str = LOG_FORMAT, colored: bool = True):
        super().__init__(fmt)
        self.colored = colored

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        if not self.colored:
            return message
        color = LEVEL_COLORS.get(record.levelno, "")
        return f"{color}{message}{Style.RESET_ALL}"


def setup_logging(level: str = "INFO", colored: bool = True) -> logging.Logger:
    """
    Configure the root logger with a single colored console handler.

    Calling it again replaces the previous handler instead of stacking.
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        if getattr(handler, "_suggestions_handler", False):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(ColoredFormatter(colored=colored))
    handler._suggestions_handler = True
    root_logger.addHandler(handler)
    root_logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    return root_logger


def format_plan_summary(
    kind: SuggestionKind,
    plan: EditPlan,
    line_number: Optional[int] = None,
    colored: bool = True,
) -> str:
    """
    One-line summary of an applied edit.

    Example:
        format_plan_summary(SuggestionKind.REMOVE, EditPlan(4, 9), 1, colored=False)
        # "[DEL] removal [4, 9) line 1"
    """
    icon = KIND_ICONS.get(kind, "[???]")
    label = "removal" if kind is SuggestionKind.REMOVE else kind.value
    if kind is SuggestionKind.REPLACE:
        label = f"replacement -> {plan.insert_text!r}"
    line_str = f" line {line_number}" if line_number is not None else ""
    summary = f"{icon} {label} [{plan.apply_from}, {plan.apply_to}){line_str}"
    if not colored:
        return summary
    return f"{KIND_COLORS.get(kind, Fore.WHITE)}{summary}{Style.RESET_ALL}"

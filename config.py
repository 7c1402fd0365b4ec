"""
Configuration for the inline suggestions engine
===============================================

Central configuration for controller styling/behavior and logging.
Values come from defaults, overridden by environment variables (a .env file
is loaded first). Invalid overrides print a clear error to stderr and raise.
"""

import os
import sys
from typing import Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field, ValidationError

from suggestions.models import ControllerSettings

# Load environment variables from .env file
load_dotenv()

TRUTHY_ENV_VALUES = {"1", "true", "yes", "on"}


def _env_bool(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in TRUTHY_ENV_VALUES


class Config(BaseModel):
    """Configuration settings for the suggestions engine."""

    model_config = {"populate_by_name": True}

    SUGGESTIONS: ControllerSettings = Field(
        default_factory=ControllerSettings,
        description="Suggestion controller settings",
    )

    # Logging
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_COLORS: bool = Field(default=True, description="Colorize console log output")

    def __init__(self, **data):
        super().__init__(**data)
        self.load_from_environment()

    def load_from_environment(self):
        """Load configuration overrides from environment variables."""
        self.LOG_LEVEL = os.getenv("LOG_LEVEL", self.LOG_LEVEL).upper()
        self.LOG_COLORS = _env_bool("LOG_COLORS", self.LOG_COLORS)

        overrides = {}
        string_vars = {
            "css_class": "SUGGESTIONS_CSS_CLASS",
            "replacement_class": "SUGGESTIONS_REPLACEMENT_CLASS",
            "remove_class": "SUGGESTIONS_REMOVE_CLASS",
            "accept_title": "SUGGESTIONS_ACCEPT_TITLE",
            "remove_title": "SUGGESTIONS_REMOVE_TITLE",
            "transaction_origin": "SUGGESTIONS_TRANSACTION_ORIGIN",
        }
        for field_name, env_name in string_vars.items():
            value = os.getenv(env_name)
            if value:
                overrides[field_name] = value

        revalidate = os.getenv("SUGGESTIONS_REVALIDATE_ON_ACTIVATE")
        if revalidate is not None:
            overrides["revalidate_on_activate"] = revalidate.strip().lower() in TRUTHY_ENV_VALUES

        timeout = os.getenv("SUGGESTIONS_EDITING_SURFACE_TIMEOUT")
        if timeout:
            overrides["editing_surface_timeout"] = timeout

        if overrides:
            merged = self.SUGGESTIONS.model_dump()
            merged.update(overrides)
            try:
                self.SUGGESTIONS = ControllerSettings(**merged)
            except ValidationError as exc:
                print(f"[CONFIG ERROR] Invalid suggestion settings: {exc}", file=sys.stderr)
                raise

    def controller_settings(self, **overrides) -> ControllerSettings:
        """Copy of the controller settings with per-call overrides applied."""
        return self.SUGGESTIONS.model_copy(update=overrides)


config = Config()


def get_log_level(name: Optional[str] = None) -> str:
    """Configured log level, or name when given."""
    return (name or config.LOG_LEVEL).upper()

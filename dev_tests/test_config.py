"""
Tests for config.py - Configuration management module.

Test Areas:
1. Defaults
2. Environment overrides for controller settings
3. Logging settings
4. Invalid overrides
"""

import pytest
import os
import sys
from unittest.mock import patch

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from config import Config, get_log_level
from suggestions import ControllerSettings


SUGGESTION_ENV_VARS = [
    "LOG_LEVEL",
    "LOG_COLORS",
    "SUGGESTIONS_CSS_CLASS",
    "SUGGESTIONS_REPLACEMENT_CLASS",
    "SUGGESTIONS_REMOVE_CLASS",
    "SUGGESTIONS_ACCEPT_TITLE",
    "SUGGESTIONS_REMOVE_TITLE",
    "SUGGESTIONS_TRANSACTION_ORIGIN",
    "SUGGESTIONS_REVALIDATE_ON_ACTIVATE",
    "SUGGESTIONS_EDITING_SURFACE_TIMEOUT",
]


# ============================================================================
# Fixtures
# ============================================================================

@pytest.fixture
def clean_env():
    """Provide an environment without any suggestion settings."""
    with patch.dict(os.environ, {}, clear=False):
        for key in SUGGESTION_ENV_VARS:
            os.environ.pop(key, None)
        yield


# ============================================================================
# Defaults
# ============================================================================

class TestDefaults:
    """Config without overrides matches ControllerSettings defaults."""

    def test_controller_defaults(self, clean_env):
        cfg = Config()
        assert cfg.SUGGESTIONS == ControllerSettings()
        assert cfg.SUGGESTIONS.css_class == "cm-suggestion"
        assert cfg.SUGGESTIONS.revalidate_on_activate is True
        assert cfg.SUGGESTIONS.editing_surface_timeout == 5.0

    def test_logging_defaults(self, clean_env):
        cfg = Config()
        assert cfg.LOG_LEVEL == "INFO"
        assert cfg.LOG_COLORS is True


# ============================================================================
# Environment overrides
# ============================================================================

class TestEnvironmentOverrides:
    """Environment variables override defaults."""

    def test_string_overrides(self, clean_env):
        env = {
            "SUGGESTIONS_CSS_CLASS": "hl",
            "SUGGESTIONS_ACCEPT_TITLE": "Apply",
            "SUGGESTIONS_TRANSACTION_ORIGIN": "client-42",
        }
        with patch.dict(os.environ, env):
            cfg = Config()
        assert cfg.SUGGESTIONS.css_class == "hl"
        assert cfg.SUGGESTIONS.accept_title == "Apply"
        assert cfg.SUGGESTIONS.transaction_origin == "client-42"
        assert cfg.SUGGESTIONS.remove_title == "Remove section"

    @pytest.mark.parametrize("value,expected", [("false", False), ("0", False), ("yes", True), ("TRUE", True)])
    def test_revalidate_flag(self, clean_env, value, expected):
        with patch.dict(os.environ, {"SUGGESTIONS_REVALIDATE_ON_ACTIVATE": value}):
            cfg = Config()
        assert cfg.SUGGESTIONS.revalidate_on_activate is expected

    def test_timeout_override(self, clean_env):
        with patch.dict(os.environ, {"SUGGESTIONS_EDITING_SURFACE_TIMEOUT": "1.5"}):
            cfg = Config()
        assert cfg.SUGGESTIONS.editing_surface_timeout == 1.5

    def test_log_settings(self, clean_env):
        with patch.dict(os.environ, {"LOG_LEVEL": "debug", "LOG_COLORS": "off"}):
            cfg = Config()
        assert cfg.LOG_LEVEL == "DEBUG"
        assert cfg.LOG_COLORS is False


# ============================================================================
# Invalid overrides
# ============================================================================

class TestInvalidOverrides:
    """Invalid values fail loudly."""

    def test_non_positive_timeout(self, clean_env, capsys):
        with patch.dict(os.environ, {"SUGGESTIONS_EDITING_SURFACE_TIMEOUT": "0"}):
            with pytest.raises(ValueError):
                Config()
        assert "CONFIG ERROR" in capsys.readouterr().err

    def test_non_numeric_timeout(self, clean_env):
        with patch.dict(os.environ, {"SUGGESTIONS_EDITING_SURFACE_TIMEOUT": "soon"}):
            with pytest.raises(ValueError):
                Config()


# ============================================================================
# Utility Functions
# ============================================================================

class TestUtilities:
    """Helpers around the config singleton."""

    def test_controller_settings_copy(self, clean_env):
        cfg = Config()
        settings = cfg.controller_settings(remove_title="Drop")
        assert settings.remove_title == "Drop"
        assert cfg.SUGGESTIONS.remove_title == "Remove section"

    def test_get_log_level_explicit(self):
        assert get_log_level("warning") == "WARNING"

"""Shared pytest fixtures for the inline suggestions engine tests."""

import pytest
import os
import sys

# Add project root to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from suggestions import (
    CommentAnnotation,
    ControllerSettings,
    InMemoryCommentStore,
    InMemoryEditorView,
    RecordingDecorationSink,
    SuggestionController,
)


# ============================================================================
# Document Fixtures
# ============================================================================

SAMPLE_DOCUMENT = (
    "The quick brown fox jumps over the lazy dog.\n"
    "It was a very very good day for teh fox.\n"
    "Remove this word here"
)


@pytest.fixture
def sample_document():
    """Three-line document used across controller tests."""
    return SAMPLE_DOCUMENT


@pytest.fixture
def view(sample_document):
    """Focused in-memory view over the sample document."""
    return InMemoryEditorView(sample_document)


@pytest.fixture
def sink():
    """Decoration sink that enforces ordering."""
    return RecordingDecorationSink()


@pytest.fixture
def comment_store():
    """Empty in-memory comment store."""
    return InMemoryCommentStore()


@pytest.fixture
def controller(view, comment_store):
    """Controller wired to the in-memory view and store."""
    return SuggestionController(view, comment_store=comment_store)


@pytest.fixture
def review_comments():
    """Comments mixing replace, remove and highlight entries."""
    return [
        CommentAnnotation("c1", "|teh -> the| typo", color="#d33"),
        CommentAnnotation("c2", "|very -> | and check |lazy|", color="#33d"),
    ]


@pytest.fixture
def fast_settings():
    """Settings with a short editing surface timeout."""
    return ControllerSettings(editing_surface_timeout=0.05)

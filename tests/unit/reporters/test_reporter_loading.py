"""Tests for reporter loading module."""

import pytest

from browser_test_runner.exceptions import ConfigurationError, ReporterNotFoundError
from browser_test_runner.reporters import (
    DocumentationReporter,
    DotReporter,
    available_reporters,
    load_reporter_class,
)


@pytest.mark.parametrize(
    ("key", "expected"),
    [
        ("documentation", DocumentationReporter),
        ("dot", DotReporter),
        ("DOT", DotReporter),
    ],
)
def test_load_reporter_class_returns_reporter(key: str, expected: type) -> None:
    """Loads reporter class by key."""
    assert load_reporter_class(key) is expected


def test_load_reporter_class_raises_for_unknown_reporter() -> None:
    """Raises ReporterNotFoundError for unknown reporter key."""
    with pytest.raises(ReporterNotFoundError) as exc_info:
        load_reporter_class("unknown-reporter")

    assert "unknown-reporter" in str(exc_info.value)
    assert "Available reporters" in str(exc_info.value)
    assert isinstance(exc_info.value, ConfigurationError)


def test_available_reporters_lists_registered_names() -> None:
    """Lists every bundled reporter, sorted."""
    assert available_reporters() == ["documentation", "dot"]

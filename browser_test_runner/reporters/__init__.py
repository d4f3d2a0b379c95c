"""Progress reporters selectable by name."""

from browser_test_runner.reporters.base import Reporter
from browser_test_runner.reporters.documentation import DocumentationReporter
from browser_test_runner.reporters.dot import DotReporter
from browser_test_runner.reporters.loading import (
    available_reporters,
    load_reporter_class,
)

__all__ = [
    "DocumentationReporter",
    "DotReporter",
    "Reporter",
    "available_reporters",
    "load_reporter_class",
]

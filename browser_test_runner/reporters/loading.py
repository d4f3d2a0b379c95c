"""Reporters registered as entry points, looked up by name."""

from collections.abc import Mapping, Sequence
from importlib.metadata import EntryPoint, entry_points

from browser_test_runner.exceptions import ReporterNotFoundError
from browser_test_runner.reporters.base import Reporter

ENTRY_POINT_GROUP = "browser_test_runner.reporters"


def registered_reporters() -> Mapping[str, EntryPoint]:
    """Reporter entry points keyed by lowercase name."""
    return {
        entry.name.lower(): entry for entry in entry_points(group=ENTRY_POINT_GROUP)
    }


def available_reporters() -> Sequence[str]:
    """Names accepted by ``load_reporter_class``, sorted."""
    return sorted(registered_reporters())


def load_reporter_class(key: str) -> type[Reporter]:
    """Load a reporter class by name, ignoring case.

    Raises:
        ReporterNotFoundError: If no reporter is registered under ``key``

    """
    entry = registered_reporters().get(key.lower())
    if entry is None:
        raise ReporterNotFoundError(
            f"Reporter '{key}' not found. Available reporters: {available_reporters()}"
        )

    reporter_cls: type[Reporter] = entry.load()
    return reporter_cls

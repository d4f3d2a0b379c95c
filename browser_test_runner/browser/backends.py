"""Headless browser backends and their fixed command lines."""

from enum import StrEnum
from pathlib import Path

from browser_test_runner.exceptions import ConfigurationError

VIEWPORT_WIDTH = 1920
VIEWPORT_HEIGHT = 1080
CHROMIUM_DEBUGGING_PORT = 9222


class BrowserBackend(StrEnum):
    """Supported headless browsers."""

    FIREFOX = "firefox"
    CHROMIUM = "chromium"


def resolve_backend(name: str) -> BrowserBackend:
    """Resolve a backend by name.

    Raises:
        ConfigurationError: If the name is not a supported backend

    """
    try:
        return BrowserBackend(name.lower())
    except ValueError:
        available = [backend.value for backend in BrowserBackend]
        raise ConfigurationError(
            f"Invalid browser '{name}'. Available browsers: {available}"
        ) from None


def build_command(backend: BrowserBackend, profile_directory: Path, url: str) -> list[str]:
    """Build the command line that opens ``url`` headless in ``backend``."""
    match backend:
        case BrowserBackend.FIREFOX:
            return [
                "firefox",
                "--headless",
                "--width",
                str(VIEWPORT_WIDTH),
                "--height",
                str(VIEWPORT_HEIGHT),
                "--profile",
                str(profile_directory),
                url,
            ]
        case BrowserBackend.CHROMIUM:
            return [
                "chromium-browser",
                "--headless",
                "--disable-gpu",
                f"--remote-debugging-port={CHROMIUM_DEBUGGING_PORT}",
                f"--profile-directory={profile_directory}",
                f"--window-size={VIEWPORT_WIDTH},{VIEWPORT_HEIGHT}",
                url,
            ]

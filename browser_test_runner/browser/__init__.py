"""Headless browser backends and process lifecycle."""

from browser_test_runner.browser.backends import BrowserBackend, resolve_backend
from browser_test_runner.browser.launcher import BrowserLauncher, BrowserProfile

__all__ = ["BrowserBackend", "BrowserLauncher", "BrowserProfile", "resolve_backend"]

"""Exceptions raised while preparing or running a browser test session."""


class BrowserTestRunnerError(Exception):
    """Base class for all test runner errors."""


class ConfigurationError(BrowserTestRunnerError):
    """Raised when the session configuration cannot be resolved."""


class ReporterNotFoundError(ConfigurationError):
    """Raised when a reporter is not found."""


class CompileError(BrowserTestRunnerError):
    """Raised when the test sources cannot be compiled into a script."""


class ProtocolError(BrowserTestRunnerError):
    """Raised when the client sends a frame that is not part of the protocol."""


class BrowserLaunchError(BrowserTestRunnerError):
    """Raised when the headless browser process cannot be started."""

"""Abstract base class for progress reporters."""

import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import TextIO


@dataclass(frozen=True, kw_only=True)
class Reporter(ABC):
    """Sink for suite, test and run events emitted during a session."""

    stream: TextIO = field(default_factory=lambda: sys.stdout, repr=False)

    @abstractmethod
    def suite(self, name: str) -> None:
        """Report that a suite is about to run."""

    @abstractmethod
    def succeeded(self, name: str) -> None:
        """Report a passing test."""

    @abstractmethod
    def failed(self, name: str, detail: str) -> None:
        """Report a failing test with its failure detail."""

    @abstractmethod
    def done(self) -> None:
        """Report that the client has run every suite."""

    def write(self, text: str) -> None:
        print(text, end="", file=self.stream, flush=True)

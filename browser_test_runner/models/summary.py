"""Aggregated outcome of a finished session."""

from collections.abc import Sequence
from dataclasses import dataclass, field

from browser_test_runner.models.message import ProtocolMessage


@dataclass(frozen=True, kw_only=True)
class SessionSummary:
    """Counters captured when the client sends the terminal frame."""

    succeeded: int = 0
    failed: Sequence[ProtocolMessage] = field(default_factory=tuple)

    @property
    def total(self) -> int:
        """Number of tests the client reported on."""
        return self.succeeded + len(self.failed)

    @property
    def has_failures(self) -> bool:
        return bool(self.failed)

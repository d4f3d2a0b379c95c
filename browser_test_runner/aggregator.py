"""Aggregation of results streamed by the client execution agent."""

import asyncio
import logging
import sys
from collections.abc import Awaitable, Callable
from dataclasses import dataclass, field
from typing import TextIO

from browser_test_runner.models.message import DONE_FRAME, ProtocolMessage, parse_message
from browser_test_runner.models.summary import SessionSummary
from browser_test_runner.reporters.base import Reporter

log = logging.getLogger(__name__)

ARROW = "➔"


def print_summary(summary: SessionSummary, stream: TextIO) -> None:
    """Print the totals of a finished session followed by each failure."""
    print("=" * 80, file=stream)
    print(f"{summary.total} tests", file=stream)
    print(f"  {ARROW} {summary.succeeded} passed", file=stream)
    print(f"  {ARROW} {len(summary.failed)} failed", file=stream)

    for message in summary.failed:
        print(f"    {message.name}", file=stream)
        print(f"    |> {message.result}", file=stream)

    stream.flush()


@dataclass(kw_only=True)
class ResultAggregator:
    """Session state machine fed by WebSocket frames.

    Counters are only mutated from ``handle`` and ``reset``. The server calls
    ``reset`` on every page load, which always happens before the client of
    that page opens its socket.
    """

    reporter: Reporter
    completion: asyncio.Future[SessionSummary]
    manual: bool = False
    close_listener: Callable[[], Awaitable[None]] | None = None
    output: TextIO = field(default_factory=lambda: sys.stdout, repr=False)

    succeeded: int = field(default=0, init=False)
    failed: list[ProtocolMessage] = field(default_factory=list, init=False)

    def reset(self) -> None:
        """Start counting a new session from zero."""
        self.succeeded = 0
        self.failed = []

    def summary(self) -> SessionSummary:
        return SessionSummary(succeeded=self.succeeded, failed=tuple(self.failed))

    async def handle(self, frame: str) -> None:
        """Process a single text frame.

        Raises:
            ProtocolError: If the frame is neither ``DONE`` nor a valid message

        """
        if frame == DONE_FRAME:
            await self.finish()
            return

        message = parse_message(frame)
        match message.type:
            case "SUITE":
                self.reporter.suite(message.name)
            case "SUCCEEDED":
                self.reporter.succeeded(message.name)
                self.succeeded += 1
            case "FAILED":
                self.reporter.failed(message.name, message.result)
                self.failed.append(message)

    async def finish(self) -> None:
        """Summarize the session and signal completion."""
        self.reporter.done()
        summary = self.summary()
        print_summary(summary, self.output)

        if not self.manual and self.close_listener is not None:
            await self.close_listener()

        if self.completion.done():
            log.debug("Completion already signalled, ignoring repeated DONE")
            return
        self.completion.set_result(summary)

    def fail(self, error: BaseException) -> None:
        """Abort the session with ``error``.

        In manual mode the operator may reload the page, so the session stays
        open and the error is only logged.
        """
        log.error("Session failed: %s", error)
        if self.manual or self.completion.done():
            return
        self.completion.set_exception(error)

"""Session controller tying compiler, server and browser together."""

import asyncio
import logging
import sys
import time
from dataclasses import dataclass, field
from typing import TextIO

from browser_test_runner.browser.backends import resolve_backend
from browser_test_runner.browser.launcher import BrowserLauncher
from browser_test_runner.compiler.base import TestCompiler
from browser_test_runner.compiler.bundle import ScriptBundleCompiler
from browser_test_runner.config import SessionConfig
from browser_test_runner.exceptions import BrowserLaunchError, ConfigurationError
from browser_test_runner.models.artifact import CompiledArtifact
from browser_test_runner.models.summary import SessionSummary
from browser_test_runner.reporters.base import Reporter
from browser_test_runner.reporters.loading import load_reporter_class
from browser_test_runner.server import DEFAULT_RUNTIME_PATH, TestServer
from browser_test_runner.sources import discover_sources

log = logging.getLogger(__name__)

NO_TESTS_MESSAGE = "There are no tests to run!"


@dataclass(frozen=True, kw_only=True)
class SessionController:
    """Runs one browser test session from compilation to teardown."""

    config: SessionConfig
    compiler: TestCompiler = field(default_factory=ScriptBundleCompiler)
    output: TextIO = field(default_factory=lambda: sys.stdout, repr=False)

    async def run(self) -> SessionSummary | None:
        """Run the session.

        Configuration is resolved and the tests compiled before any server or
        browser is started, so errors at those stages leave nothing behind.

        Returns:
            The session summary, or None when there are no tests to run

        Raises:
            ConfigurationError: If the reporter, browser or runtime is invalid
            CompileError: If the tests cannot be compiled
            ProtocolError: If the client sends a malformed frame
            BrowserLaunchError: If the browser cannot be started

        """
        reporter = self.create_reporter()
        backend = resolve_backend(self.config.browser)
        runtime_script = self.load_runtime()

        artifact = await self.compile()
        if not artifact.has_suites:
            print(f"\n{NO_TESTS_MESSAGE}", file=self.output)
            return None

        completion: asyncio.Future[SessionSummary] = (
            asyncio.get_running_loop().create_future()
        )
        server = TestServer(
            script=artifact.script,
            runtime_script=runtime_script,
            reporter=reporter,
            completion=completion,
            manual=self.config.manual,
            host=self.config.host,
            port=self.config.port,
            output=self.output,
        )
        launcher = BrowserLauncher(
            backend=backend, url=self.config.root_url, manual=self.config.manual
        )

        log.info("Starting test server...")
        async with server.running():
            log.info("Starting browser...")
            supervisor = asyncio.create_task(
                launcher.supervise(completion), name="browser-supervisor"
            )
            try:
                if self.config.manual:
                    await asyncio.Event().wait()
                return await self.wait(completion, supervisor)
            finally:
                if not completion.done():
                    supervisor.cancel()
                await asyncio.gather(supervisor, return_exceptions=True)

    def create_reporter(self) -> Reporter:
        reporter_cls = load_reporter_class(self.config.reporter)
        return reporter_cls(stream=self.output)

    def load_runtime(self) -> str:
        """Read the runtime asset served at ``/runtime.js``."""
        path = self.config.runtime_path or DEFAULT_RUNTIME_PATH
        try:
            return path.read_text(encoding="utf-8")
        except OSError as e:
            raise ConfigurationError(f"Cannot read runtime asset {path}: {e}") from e

    async def compile(self) -> CompiledArtifact:
        log.info("Compiling tests...")
        started = time.monotonic()

        sources = discover_sources(
            self.config.test_directories,
            self.config.source_directories,
            self.config.test_file,
        )
        artifact = await self.compiler.compile(sources)

        log.info("Compiling tests... done in %.2fs", time.monotonic() - started)
        return artifact

    async def wait(
        self,
        completion: asyncio.Future[SessionSummary],
        supervisor: asyncio.Task[None],
    ) -> SessionSummary:
        """Wait for the session to complete, or for the browser to fail first."""
        await asyncio.wait({completion, supervisor}, return_when=asyncio.FIRST_COMPLETED)

        if completion.done():
            return completion.result()

        supervisor.result()
        raise BrowserLaunchError("Browser exited before the session completed")

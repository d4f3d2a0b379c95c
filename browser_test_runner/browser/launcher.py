"""Headless browser process lifecycle."""

import asyncio
import contextlib
import logging
import secrets
import shutil
import tempfile
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from browser_test_runner.browser.backends import BrowserBackend, build_command
from browser_test_runner.exceptions import BrowserLaunchError

log = logging.getLogger(__name__)


@dataclass(frozen=True, kw_only=True)
class BrowserProfile:
    """Ephemeral user-data directory for a single browser process."""

    path: Path

    @classmethod
    def create(cls, root: Path | None = None) -> "BrowserProfile":
        """Create a randomly named profile directory under ``root``."""
        base = root if root is not None else Path(tempfile.gettempdir())
        path = base / secrets.token_hex(5)
        path.mkdir()
        log.debug("Created browser profile %s", path)
        return cls(path=path)

    def remove(self) -> None:
        """Recursively delete the profile directory."""
        shutil.rmtree(self.path)
        log.debug("Removed browser profile %s", self.path)


@dataclass(frozen=True, kw_only=True)
class BrowserLauncher:
    """Spawns a headless browser for the session and tears it down afterwards."""

    backend: BrowserBackend
    url: str
    manual: bool = False
    profile_root: Path | None = None

    async def supervise(self, completion: asyncio.Future[Any]) -> None:
        """Keep a browser open on ``url`` until ``completion`` resolves.

        The outcome of ``completion`` is left for its owner to consume; the
        browser is killed and its profile removed however it resolves.

        Raises:
            BrowserLaunchError: If the browser cannot be started, or exits
                before ``completion`` resolves

        """
        if self.manual:
            log.info("Manual mode: open %s in a browser to run the tests", self.url)
            return

        async with self.launch() as process:
            exited = asyncio.create_task(process.wait())
            try:
                await asyncio.wait(
                    [completion, exited], return_when=asyncio.FIRST_COMPLETED
                )
            finally:
                exited.cancel()

            if not completion.done():
                raise BrowserLaunchError(
                    f"{self.backend} exited with code {process.returncode} "
                    "before the session completed"
                )

    @asynccontextmanager
    async def launch(self) -> AsyncGenerator[asyncio.subprocess.Process, None]:
        """Spawn the browser inside a fresh profile, yielding the process."""
        profile = BrowserProfile.create(self.profile_root)
        try:
            command = build_command(self.backend, profile.path, self.url)
            log.info("Starting %s: %s", self.backend, " ".join(command))
            try:
                process = await asyncio.create_subprocess_exec(
                    *command,
                    stdout=asyncio.subprocess.DEVNULL,
                    stderr=asyncio.subprocess.DEVNULL,
                )
            except OSError as e:
                raise BrowserLaunchError(f"Cannot start {command[0]}: {e}") from e

            try:
                yield process
            finally:
                await kill_process(process)
        finally:
            profile.remove()


async def kill_process(process: asyncio.subprocess.Process) -> None:
    """Kill the process unless it already exited, then reap it."""
    if process.returncode is None:
        log.debug("Killing browser process %s", process.pid)
        with contextlib.suppress(ProcessLookupError):
            process.kill()
    await process.wait()

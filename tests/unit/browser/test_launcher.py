"""Tests for the browser launcher."""

import asyncio
from collections.abc import Iterator
from pathlib import Path
from unittest.mock import AsyncMock, Mock, patch

import pytest

from browser_test_runner.browser.backends import BrowserBackend
from browser_test_runner.browser.launcher import (
    BrowserLauncher,
    BrowserProfile,
    kill_process,
)
from browser_test_runner.exceptions import BrowserLaunchError, ProtocolError


@pytest.fixture
def process() -> Mock:
    """Create mock browser process that runs until it is killed."""
    killed = asyncio.Event()
    process = Mock()
    process.pid = 4242
    process.returncode = None

    def kill() -> None:
        process.returncode = -9
        killed.set()

    async def wait() -> int:
        await killed.wait()
        return process.returncode

    process.kill = Mock(side_effect=kill)
    process.wait = AsyncMock(side_effect=wait)
    return process


@pytest.fixture
def spawn(process: Mock) -> Iterator[AsyncMock]:
    """Patch process creation to return the mock process."""
    with patch(
        "browser_test_runner.browser.launcher.asyncio.create_subprocess_exec",
        new_callable=AsyncMock,
        return_value=process,
    ) as mock_spawn:
        yield mock_spawn


@pytest.fixture
def launcher(tmp_path: Path) -> BrowserLauncher:
    """Create launcher writing profiles under tmp_path."""
    return BrowserLauncher(
        backend=BrowserBackend.FIREFOX,
        url="http://localhost:3000",
        profile_root=tmp_path,
    )


def test_profile_create_and_remove(tmp_path: Path) -> None:
    """Creates a randomly named directory and removes it recursively."""
    profile = BrowserProfile.create(tmp_path)

    assert profile.path.parent == tmp_path
    assert profile.path.is_dir()
    (profile.path / "prefs.js").write_text("user_pref();")

    profile.remove()

    assert not profile.path.exists()


def test_profiles_get_distinct_names(tmp_path: Path) -> None:
    """Each profile gets its own directory."""
    first = BrowserProfile.create(tmp_path)
    second = BrowserProfile.create(tmp_path)

    assert first.path != second.path


class TestSupervise:
    """Tests for BrowserLauncher.supervise."""

    async def test_kills_and_cleans_up_after_completion(
        self,
        launcher: BrowserLauncher,
        spawn: AsyncMock,
        process: Mock,
        tmp_path: Path,
    ) -> None:
        """Spawns the browser in a profile and tears both down on completion."""
        completion: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        task = asyncio.create_task(launcher.supervise(completion))
        await asyncio.sleep(0)
        await asyncio.sleep(0)

        spawn.assert_awaited_once()
        command = spawn.await_args.args
        assert command[0] == "firefox"
        assert command[-1] == "http://localhost:3000"
        profile_dir = Path(command[command.index("--profile") + 1])
        assert profile_dir.parent == tmp_path
        assert profile_dir.is_dir()
        process.kill.assert_not_called()

        completion.set_result(None)
        await task

        process.kill.assert_called_once_with()
        assert not profile_dir.exists()
        assert list(tmp_path.iterdir()) == []

    async def test_cleans_up_when_completion_fails(
        self,
        launcher: BrowserLauncher,
        spawn: AsyncMock,
        process: Mock,
        tmp_path: Path,
    ) -> None:
        """Tears down the browser when the session ends with an error."""
        completion: asyncio.Future[None] = asyncio.get_running_loop().create_future()
        completion.set_exception(ProtocolError("bad frame"))

        await launcher.supervise(completion)

        process.kill.assert_called_once_with()
        assert list(tmp_path.iterdir()) == []
        with pytest.raises(ProtocolError):
            completion.result()

    async def test_cleans_up_when_cancelled(
        self,
        launcher: BrowserLauncher,
        spawn: AsyncMock,
        process: Mock,
        tmp_path: Path,
    ) -> None:
        """Tears down the browser when supervision is cancelled."""
        completion: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        task = asyncio.create_task(launcher.supervise(completion))
        await asyncio.sleep(0)
        await asyncio.sleep(0)
        task.cancel()

        with pytest.raises(asyncio.CancelledError):
            await task

        process.kill.assert_called_once_with()
        assert list(tmp_path.iterdir()) == []

    async def test_raises_when_browser_exits_first(
        self,
        launcher: BrowserLauncher,
        spawn: AsyncMock,
        process: Mock,
        tmp_path: Path,
    ) -> None:
        """Fails supervision when the browser exits before completion."""
        process.returncode = 1
        process.wait = AsyncMock(return_value=1)
        completion: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        with pytest.raises(BrowserLaunchError, match="exited with code 1"):
            await launcher.supervise(completion)

        process.kill.assert_not_called()
        assert not completion.done()
        assert list(tmp_path.iterdir()) == []

    async def test_manual_mode_does_nothing(
        self, spawn: AsyncMock, tmp_path: Path
    ) -> None:
        """Spawns nothing and creates no profile in manual mode."""
        launcher = BrowserLauncher(
            backend=BrowserBackend.CHROMIUM,
            url="http://localhost:3000",
            manual=True,
            profile_root=tmp_path,
        )
        completion: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        await launcher.supervise(completion)

        spawn.assert_not_called()
        assert list(tmp_path.iterdir()) == []

    async def test_spawn_failure_removes_profile(
        self, launcher: BrowserLauncher, tmp_path: Path
    ) -> None:
        """Raises BrowserLaunchError and removes the profile when spawn fails."""
        completion: asyncio.Future[None] = asyncio.get_running_loop().create_future()

        with (
            patch(
                "browser_test_runner.browser.launcher.asyncio.create_subprocess_exec",
                new_callable=AsyncMock,
                side_effect=FileNotFoundError("firefox"),
            ),
            pytest.raises(BrowserLaunchError, match="Cannot start firefox"),
        ):
            await launcher.supervise(completion)

        assert list(tmp_path.iterdir()) == []


async def test_kill_process_skips_exited_process(process: Mock) -> None:
    """Does not kill a process that already exited."""
    process.returncode = 0
    process.wait = AsyncMock(return_value=0)

    await kill_process(process)

    process.kill.assert_not_called()
    process.wait.assert_awaited_once()


async def test_kill_process_tolerates_process_exiting_first(process: Mock) -> None:
    """A process that exits right before the kill is still reaped."""
    process.kill = Mock(side_effect=ProcessLookupError)
    process.wait = AsyncMock(return_value=0)

    await kill_process(process)

    process.kill.assert_called_once_with()
    process.wait.assert_awaited_once()

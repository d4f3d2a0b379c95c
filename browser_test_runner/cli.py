"""CLI entry point for running compiled tests in a headless browser."""

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from browser_test_runner.browser.backends import BrowserBackend
from browser_test_runner.config import SessionConfig
from browser_test_runner.controller import SessionController
from browser_test_runner.exceptions import BrowserTestRunnerError, ConfigurationError
from browser_test_runner.reporters.loading import available_reporters


def load_config(args: argparse.Namespace) -> SessionConfig:
    """Build the session configuration from a config file and CLI flags.

    Flags given on the command line take precedence over the config file.
    """
    if args.config is not None:
        try:
            config = SessionConfig.model_validate_json(args.config.read_text())
        except (OSError, ValidationError) as e:
            raise ConfigurationError(f"Invalid config file {args.config}: {e}") from e
    else:
        config = SessionConfig()

    overrides: dict[str, Any] = {
        "reporter": args.reporter,
        "browser": args.browser,
        "port": args.port,
        "test_directories": args.test_dirs,
        "source_directories": args.source_dirs,
        "test_file": args.test,
        "runtime_path": args.runtime,
    }
    update = {key: value for key, value in overrides.items() if value is not None}
    if args.manual:
        update["manual"] = True

    try:
        return SessionConfig.model_validate(config.model_dump() | update)
    except ValidationError as e:
        raise ConfigurationError(f"Invalid configuration: {e}") from e


async def run(config: SessionConfig) -> int:
    """Run a test session and return exit code."""
    log = logging.getLogger("browser_test_runner")

    log.info(
        "Running tests with reporter=%s browser=%s manual=%s",
        config.reporter,
        config.browser,
        config.manual,
    )
    controller = SessionController(config=config)

    try:
        summary = await controller.run()
    except BrowserTestRunnerError as e:
        log.error("Test session failed: %s", e)
        return 1

    if summary is None:
        return 0

    return 1 if summary.has_failures else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Run compiled test suites in a headless browser"
    )
    parser.add_argument(
        "test",
        nargs="?",
        type=Path,
        help="Single test script to run instead of the test directories",
    )
    parser.add_argument(
        "--reporter",
        help=f"Reporter to use ({', '.join(available_reporters())})",
    )
    parser.add_argument(
        "--browser",
        help=f"Headless browser to launch ({', '.join(BrowserBackend)})",
    )
    parser.add_argument(
        "--manual",
        action="store_true",
        help="Do not launch a browser and keep serving after the run",
    )
    parser.add_argument(
        "--port",
        type=int,
        help="Port of the test server",
    )
    parser.add_argument(
        "--test-dir",
        dest="test_dirs",
        action="append",
        type=Path,
        help="Directory with compiled test scripts (repeatable)",
    )
    parser.add_argument(
        "--source-dir",
        dest="source_dirs",
        action="append",
        type=Path,
        help="Directory with scripts the tests depend on (repeatable)",
    )
    parser.add_argument(
        "--runtime",
        type=Path,
        help="Runtime script served at /runtime.js",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="JSON configuration file",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )

    try:
        config = load_config(args)
    except ConfigurationError as e:
        logging.getLogger("browser_test_runner").error("%s", e)
        sys.exit(1)

    try:
        exit_code = asyncio.run(run(config))
    except KeyboardInterrupt:
        logging.getLogger("browser_test_runner").info(
            "Interrupted, test server stopped"
        )
        exit_code = 130
    sys.exit(exit_code)


if __name__ == "__main__":  # pragma: no cover
    main()

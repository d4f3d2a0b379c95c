"""Discover compiled test and library scripts on disk."""

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path

log = logging.getLogger(__name__)

SCRIPT_PATTERN = "**/*.js"


@dataclass(frozen=True, kw_only=True)
class DiscoveredSources:
    """Script files to hand to the compiler, in load order."""

    tests: Sequence[Path]
    libraries: Sequence[Path]


def discover_sources(
    test_directories: Sequence[Path],
    source_directories: Sequence[Path],
    test_file: Path | None = None,
) -> DiscoveredSources:
    """Collect test and library scripts.

    Args:
        test_directories: Directories holding compiled test scripts
        source_directories: Directories holding scripts the tests depend on
        test_file: Single test script that replaces the test directories

    Returns:
        Test scripts and library scripts, each deduplicated and sorted within
        their directory. A file found as a test is never loaded as a library.

    """
    tests = [test_file] if test_file is not None else glob_scripts(test_directories)
    tests = unique(tests)
    seen = {path.resolve() for path in tests}
    libraries = [
        path
        for path in unique(glob_scripts(source_directories))
        if path.resolve() not in seen
    ]

    log.debug("Discovered %d test script(s) and %d library script(s)", len(tests), len(libraries))
    return DiscoveredSources(tests=tests, libraries=libraries)


def glob_scripts(directories: Iterable[Path]) -> list[Path]:
    """Recursively glob script files under each directory, in directory order."""
    paths: list[Path] = []
    for directory in directories:
        if not directory.is_dir():
            log.debug("Skipping missing directory %s", directory)
            continue
        paths.extend(sorted(directory.glob(SCRIPT_PATTERN)))
    return paths


def unique(paths: Iterable[Path]) -> list[Path]:
    """Drop duplicate paths, keeping the first occurrence."""
    seen: set[Path] = set()
    result: list[Path] = []
    for path in paths:
        key = path.resolve()
        if key in seen:
            continue
        seen.add(key)
        result.append(path)
    return result

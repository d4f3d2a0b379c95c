"""Compiler that bundles already-compiled scripts."""

import logging
from dataclasses import dataclass
from pathlib import Path

from browser_test_runner.compiler.base import TestCompiler
from browser_test_runner.exceptions import CompileError
from browser_test_runner.models.artifact import CompiledArtifact
from browser_test_runner.sources import DiscoveredSources

log = logging.getLogger(__name__)

PRELUDE = "var SUITES = [];\n"


@dataclass(frozen=True, kw_only=True)
class ScriptBundleCompiler(TestCompiler):
    """Concatenate library scripts, then test scripts, after the prelude.

    Each test script is expected to push its suites onto ``SUITES``. Scripts
    are not evaluated, so a test script counts as declaring suites whenever
    it is not blank.
    """

    encoding: str = "utf-8"

    async def compile(self, sources: DiscoveredSources) -> CompiledArtifact:
        """Bundle the sources into one script."""
        libraries = {path: self.read_script(path) for path in sources.libraries}
        tests = {path: self.read_script(path) for path in sources.tests}

        for path, text in tests.items():
            if not text.strip():
                log.info("Skipping blank test script %s", path)

        chunks = [PRELUDE]
        chunks.extend(f"// {path}\n{text}" for path, text in libraries.items())
        chunks.extend(
            f"// {path}\n{text}" for path, text in tests.items() if text.strip()
        )

        script = "\n".join(chunks)
        log.debug("Bundled %d byte(s) of script", len(script))
        return CompiledArtifact(
            script=script,
            has_suites=any(text.strip() for text in tests.values()),
        )

    def read_script(self, path: Path) -> str:
        try:
            return path.read_text(encoding=self.encoding)
        except (OSError, UnicodeDecodeError) as e:
            raise CompileError(f"Cannot read {path}: {e}") from e

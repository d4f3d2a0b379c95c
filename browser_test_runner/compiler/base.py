"""Abstract base class for test compilers."""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from browser_test_runner.models.artifact import CompiledArtifact
from browser_test_runner.sources import DiscoveredSources


@dataclass(frozen=True, kw_only=True)
class TestCompiler(ABC):
    """Turns discovered sources into the script served at ``/tests``.

    The produced script must leave a global ``SUITES`` array behind, holding
    ``{name, tests: [{name, proc}]}`` entries in declaration order. The
    harness page hands that array to the client execution agent.

    ``has_suites`` may be an approximation when the compiler does not evaluate
    the scripts it bundles; it must be False whenever no suite can exist.
    """

    __test__ = False

    @abstractmethod
    async def compile(self, sources: DiscoveredSources) -> CompiledArtifact:
        """Compile sources into a single script.

        Args:
            sources: Test and library scripts in load order

        Returns:
            The compiled artifact

        Raises:
            CompileError: If any stage of compilation fails

        """

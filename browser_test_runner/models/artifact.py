"""Output of the compiler pipeline consumed by the test server."""

from dataclasses import dataclass


@dataclass(frozen=True, kw_only=True)
class CompiledArtifact:
    """Compiled test script and whether it declares any suites."""

    script: str
    has_suites: bool

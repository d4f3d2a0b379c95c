"""Reporter printing a single character per test."""

from dataclasses import dataclass

from browser_test_runner.reporters.base import Reporter


@dataclass(frozen=True, kw_only=True)
class DotReporter(Reporter):
    """Prints ``.`` for passing and ``F`` for failing tests."""

    def suite(self, name: str) -> None:
        pass

    def succeeded(self, name: str) -> None:
        self.write(".")

    def failed(self, name: str, detail: str) -> None:
        self.write("F")

    def done(self) -> None:
        self.write("\n")

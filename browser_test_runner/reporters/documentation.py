"""Reporter printing one line per suite and per test."""

from dataclasses import dataclass

from browser_test_runner.reporters.base import Reporter


@dataclass(frozen=True, kw_only=True)
class DocumentationReporter(Reporter):
    """Prints suite names followed by their indented test outcomes."""

    def suite(self, name: str) -> None:
        self.write(f"  {name}\n")

    def succeeded(self, name: str) -> None:
        self.write(f"    ✔ {name}\n")

    def failed(self, name: str, detail: str) -> None:
        self.write(f"    ✘ {name}\n")
        self.write(f"      |> {detail}\n")

    def done(self) -> None:
        self.write("\n")

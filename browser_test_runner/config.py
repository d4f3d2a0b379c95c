"""Configuration for a browser test session."""

from collections.abc import Sequence
from pathlib import Path

from pydantic import BaseModel, Field


class SessionConfig(BaseModel):
    """Configuration for a browser test session."""

    reporter: str = "documentation"
    browser: str = "chromium"
    # Operator drives the browser by hand and the server keeps listening
    manual: bool = False
    host: str = "localhost"
    port: int = Field(default=3000, ge=0, le=65535)
    test_directories: Sequence[Path] = (Path("tests"),)
    source_directories: Sequence[Path] = (Path("source"),)
    test_file: Path | None = None
    runtime_path: Path | None = None

    @property
    def root_url(self) -> str:
        """URL the browser loads the harness page from."""
        return f"http://{self.host}:{self.port}"

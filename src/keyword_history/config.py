"""
Configuration for keyword history runs.
"""

from dataclasses import dataclass
from pathlib import Path

from ..shared_utilities.git_client import DEFAULT_TIMEOUT


@dataclass(frozen=True)
class KeywordTrackerConfig:
    """Options for one keyword history run, fixed at startup."""

    files: str
    keyword: str
    csv_path: Path | None = None
    json_path: Path | None = None
    dedupe: bool = False
    repo_path: Path | None = None
    timeout: float = DEFAULT_TIMEOUT
    quiet: bool = False

    @property
    def writes_files(self) -> bool:
        return self.csv_path is not None or self.json_path is not None

    @property
    def writes_both_formats(self) -> bool:
        return self.csv_path is not None and self.json_path is not None

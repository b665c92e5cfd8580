"""
Configuration for package version history runs.
"""

from dataclasses import dataclass
from pathlib import Path

from ..shared_utilities.git_client import DEFAULT_TIMEOUT

DEFAULT_OUTPUT_STEM = "output"
DEFAULT_OUTPUT_FILE = f"{DEFAULT_OUTPUT_STEM}.json"
DEFAULT_MANIFEST = "package.json"


@dataclass(frozen=True)
class VersionTrackerConfig:
    """Options for one package version history run, fixed at startup."""

    package_name: str
    output_file: Path = Path(DEFAULT_OUTPUT_FILE)
    manifest_pattern: str = DEFAULT_MANIFEST
    repo_path: Path | None = None
    output_format: str = "json"
    timeout: float = DEFAULT_TIMEOUT
    quiet: bool = False


def default_output_file(output_format: str) -> Path:
    """Default report path, with the suffix of the chosen format."""
    return Path(f"{DEFAULT_OUTPUT_STEM}.{output_format}")

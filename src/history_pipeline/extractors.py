"""
Signal extractors applied to a file's content at a single commit.
"""

import json
from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field


class SignalExtractor(ABC):
    """Pulls zero or more values out of a file's content."""

    @abstractmethod
    def extract(self, content: str) -> list[str]:
        """Return the extracted values, in content order."""


class KeywordLineExtractor(SignalExtractor):
    """Extracts every line containing a literal keyword, trimmed."""

    def __init__(self, keyword: str):
        self.keyword = keyword

    def extract(self, content: str) -> list[str]:
        return [
            line.strip() for line in content.split("\n") if self.keyword in line
        ]


@dataclass(frozen=True)
class Manifest:
    """The dependency sections of a JSON package manifest."""

    dependencies: dict[str, str] = field(default_factory=dict)
    dev_dependencies: dict[str, str] = field(default_factory=dict)

    def version_of(self, package_name: str) -> str | None:
        """Version bound to package_name, preferring runtime dependencies."""
        return self.dependencies.get(package_name) or self.dev_dependencies.get(
            package_name
        )


def _string_entries(section: object) -> dict[str, str]:
    if not isinstance(section, Mapping):
        return {}
    return {
        name: version
        for name, version in section.items()
        if isinstance(version, str) and version
    }


def parse_manifest(content: str) -> Manifest | None:
    """Parse a package manifest, returning None if it is not a JSON object."""
    try:
        document = json.loads(content)
    except ValueError:
        return None

    if not isinstance(document, dict):
        return None

    return Manifest(
        dependencies=_string_entries(document.get("dependencies")),
        dev_dependencies=_string_entries(document.get("devDependencies")),
    )


class ManifestVersionExtractor(SignalExtractor):
    """Extracts a named dependency's version from a package manifest."""

    def __init__(self, package_name: str):
        self.package_name = package_name

    def extract(self, content: str) -> list[str]:
        manifest = parse_manifest(content)
        if manifest is None:
            return []

        version = manifest.version_of(self.package_name)
        return [version] if version else []

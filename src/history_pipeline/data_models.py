"""
Data models for history extraction.
"""

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class ExtractionRecord:
    """A value extracted from one file at one commit."""

    filename: str
    date: str
    value: str  # matching line, or dependency version
    commit_hash: str = ""


@dataclass
class ManifestHistory:
    """Distinct dependency versions observed in one manifest's history."""

    manifest_path: str
    history: list[ExtractionRecord] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return {
            "manifestPath": self.manifest_path,
            "history": [
                {
                    "hash": record.commit_hash,
                    "date": record.date,
                    "version": record.value,
                }
                for record in self.history
            ],
        }


def group_by_file(
    records: list[ExtractionRecord],
) -> dict[str, list[ExtractionRecord]]:
    """Group records by filename.

    Files appear in order of their first record and each file's records keep
    their original relative order.
    """
    grouped: dict[str, list[ExtractionRecord]] = {}
    for record in records:
        grouped.setdefault(record.filename, []).append(record)
    return grouped

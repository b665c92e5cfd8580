"""
Deduplication policies deciding which extracted values become records.

Policies are stateful and scoped to a single pipeline run; create a fresh
instance per run.
"""

from abc import ABC, abstractmethod


class DedupState:
    """Last recorded value per file."""

    def __init__(self):
        self._last: dict[str, str] = {}

    def last(self, filename: str) -> str | None:
        return self._last.get(filename)

    def record(self, filename: str, value: str) -> None:
        self._last[filename] = value

    def __len__(self) -> int:
        return len(self._last)


class DedupPolicy(ABC):
    """Decides whether a value extracted from a file should be recorded."""

    name = "base"

    @abstractmethod
    def accept(self, filename: str, value: str) -> bool:
        """Return True if the value should be emitted as a record."""


class NoDedup(DedupPolicy):
    """Records every extracted value."""

    name = "none"

    def accept(self, filename: str, value: str) -> bool:
        return True


class SequentialDedup(DedupPolicy):
    """
    Records a value only when it differs from the file's previous record.

    Commits must be fed oldest first: the comparison is always against the
    immediately preceding recorded value for the same file.
    """

    name = "sequential"

    def __init__(self):
        self.state = DedupState()

    def accept(self, filename: str, value: str) -> bool:
        if self.state.last(filename) == value:
            return False
        self.state.record(filename, value)
        return True


class DistinctValueDedup(DedupPolicy):
    """Records only the first occurrence of each distinct value per file."""

    name = "distinct"

    def __init__(self):
        self._seen: dict[str, set[str]] = {}

    def accept(self, filename: str, value: str) -> bool:
        seen = self._seen.setdefault(filename, set())
        if value in seen:
            return False
        seen.add(value)
        return True

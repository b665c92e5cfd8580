"""
Core history extraction pipeline.

Lists the commits touching a path pattern, reads each matching file at each
commit, extracts values from it and filters them through a dedup policy.
Commits are handled strictly one after another in the order they are given.
"""

from collections.abc import Callable

from ..shared_utilities import (
    Commit,
    GitCollaborator,
    GitError,
    get_logger,
    trace_function,
)
from .data_models import ExtractionRecord
from .dedup import DedupPolicy, NoDedup
from .extractors import SignalExtractor
from .resolvers import ChangedFileResolver, FileResolver

ProgressCallback = Callable[[int, int, str], None]


class HistoryPipeline:
    """Extracts records from a file pattern's commit history."""

    def __init__(
        self,
        git: GitCollaborator,
        extractor: SignalExtractor,
        dedup: DedupPolicy | None = None,
        resolver: FileResolver | None = None,
        oldest_first: bool = True,
        date_format: str = "iso-strict",
        progress_callback: ProgressCallback | None = None,
    ):
        """Initialize the pipeline.

        Args:
            git: Version control collaborator
            extractor: Strategy pulling values out of file content
            dedup: Policy filtering extracted values (default: keep all)
            resolver: Strategy choosing files per commit (default: changed files)
            oldest_first: List commits chronologically instead of newest first
            date_format: git --date format for commit timestamps
            progress_callback: Receives (current, total, message) per commit
        """
        self.git = git
        self.extractor = extractor
        self.dedup = dedup or NoDedup()
        self.resolver = resolver or ChangedFileResolver(git)
        self.oldest_first = oldest_first
        self.date_format = date_format
        self.progress_callback = progress_callback
        self.logger = get_logger(__name__)

    def list_commits(self, pattern: str) -> list[Commit]:
        """List commits for the pattern.

        Raises:
            GitError: If git cannot answer the history query
        """
        return self.git.list_commits(
            pattern, oldest_first=self.oldest_first, date_format=self.date_format
        )

    @trace_function("history_pipeline_process")
    def process(self, commits: list[Commit], pattern: str) -> list[ExtractionRecord]:
        """Extract records from already-listed commits."""
        records: list[ExtractionRecord] = []
        total = len(commits)

        for index, commit in enumerate(commits, start=1):
            self._update_progress(
                index, total, f"Processing commit {index}/{total} {commit.short_hash}"
            )
            for path in self.resolver.files_in_commit(commit, pattern):
                records.extend(self._extract_file(commit, path))

        self.logger.info(
            f"Extracted {len(records)} records from {total} commits "
            f"(dedup={self.dedup.name})"
        )
        return records

    def run(self, pattern: str) -> list[ExtractionRecord]:
        """List commits for the pattern and extract records from them."""
        return self.process(self.list_commits(pattern), pattern)

    def _extract_file(self, commit: Commit, path: str) -> list[ExtractionRecord]:
        try:
            content = self.git.show_file(commit.hash, path)
        except GitError as e:
            self.logger.warning(
                f"Failed to read {path} at commit {commit.short_hash}: {e}"
            )
            return []

        if content is None:
            return []

        return [
            ExtractionRecord(
                filename=path, date=commit.date, value=value, commit_hash=commit.hash
            )
            for value in self.extractor.extract(content)
            if self.dedup.accept(path, value)
        ]

    def _update_progress(self, current: int, total: int, message: str) -> None:
        if self.progress_callback:
            self.progress_callback(current, total, message)

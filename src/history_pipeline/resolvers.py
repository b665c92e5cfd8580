"""
File resolvers mapping a commit to the files worth inspecting.
"""

from abc import ABC, abstractmethod
from fnmatch import fnmatchcase

from ..shared_utilities import Commit, GitCollaborator, GitError, get_logger


class FileResolver(ABC):
    """Selects which files of a commit the pipeline should read."""

    @abstractmethod
    def files_in_commit(self, commit: Commit, pattern: str) -> list[str]:
        """Return the matching paths, sorted."""


class ChangedFileResolver(FileResolver):
    """Files changed by the commit that match the pattern."""

    def __init__(self, git: GitCollaborator):
        self.git = git
        self.logger = get_logger(__name__)

    def files_in_commit(self, commit: Commit, pattern: str) -> list[str]:
        try:
            changed = self.git.changed_files(commit.hash)
        except GitError as e:
            self.logger.warning(
                f"Could not list files for commit {commit.short_hash}: {e}"
            )
            return []

        return sorted({path for path in changed if fnmatchcase(path, pattern)})


class FixedFileResolver(FileResolver):
    """Always the same single path, without consulting git."""

    def __init__(self, path: str):
        self.path = path

    def files_in_commit(self, commit: Commit, pattern: str) -> list[str]:
        return [self.path]

"""
Thin wrapper around the git executable.

All history queries go through GitClient, which exposes the four
operations the history tools need. Anything satisfying GitCollaborator can
stand in for it, which keeps the pipeline testable without a repository.
"""

import subprocess
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from .logging_config import get_logger, get_logging_manager
from .telemetry import trace_operation

DEFAULT_TIMEOUT = 60.0


class GitError(Exception):
    """Base exception for git operations."""

    pass


class GitCommandError(GitError):
    """A git invocation failed or could not be started."""

    def __init__(
        self,
        message: str,
        args: list[str] | None = None,
        returncode: int | None = None,
        stderr: str = "",
    ):
        super().__init__(message)
        self.git_args = args or []
        self.returncode = returncode
        self.stderr = stderr


class GitTimeoutError(GitCommandError):
    """A git invocation exceeded its timeout."""

    pass


@dataclass(frozen=True)
class Commit:
    """A commit as listed by git log."""

    hash: str
    date: str

    @property
    def short_hash(self) -> str:
        return self.hash[:7]


class GitCollaborator(Protocol):
    """Operations the history pipeline needs from version control."""

    def list_commits(
        self, pattern: str, oldest_first: bool = False, date_format: str = "short"
    ) -> list[Commit]: ...

    def changed_files(self, commit_hash: str) -> list[str]: ...

    def show_file(self, commit_hash: str, path: str) -> str | None: ...

    def list_tracked_files(self, pattern: str) -> list[str]: ...


class GitClient:
    """Runs git subcommands against a local repository."""

    def __init__(
        self, repo_path: str | Path | None = None, timeout: float = DEFAULT_TIMEOUT
    ):
        """Initialize the client.

        Args:
            repo_path: Repository working directory (defaults to cwd)
            timeout: Seconds to wait for any single git invocation
        """
        self.repo_path = Path(repo_path).resolve() if repo_path else Path.cwd()
        self.timeout = timeout
        self.logger = get_logger(__name__)

    def _run(self, *args: str) -> str:
        """Run a git command and return its stdout.

        Raises:
            GitTimeoutError: If the command does not finish within the timeout
            GitCommandError: If git is missing or exits non-zero
        """
        # quotepath=off keeps non-ASCII paths unescaped in name listings
        command = ["git", "-c", "core.quotepath=off", *args]
        start = time.time()

        with trace_operation("git_command", {"git.subcommand": args[0]}):
            try:
                result = subprocess.run(
                    command,
                    cwd=self.repo_path,
                    capture_output=True,
                    text=True,
                    encoding="utf-8",
                    errors="replace",
                    timeout=self.timeout,
                    check=False,
                )
            except subprocess.TimeoutExpired as e:
                raise GitTimeoutError(
                    f"git {args[0]} timed out after {self.timeout:g}s",
                    args=list(args),
                ) from e
            except OSError as e:
                raise GitCommandError(
                    f"Could not run git: {e}", args=list(args)
                ) from e

        get_logging_manager().log_git_command(
            list(args), result.returncode, time.time() - start
        )

        if result.returncode != 0:
            stderr = result.stderr.strip()
            raise GitCommandError(
                f"git {args[0]} failed: {stderr or f'exit code {result.returncode}'}",
                args=list(args),
                returncode=result.returncode,
                stderr=stderr,
            )

        return result.stdout

    def list_commits(
        self, pattern: str, oldest_first: bool = False, date_format: str = "short"
    ) -> list[Commit]:
        """List commits touching paths that match pattern.

        Args:
            pattern: Git pathspec (glob or literal path)
            oldest_first: Return commits in chronological order
            date_format: Value for git's --date option

        Returns:
            Commits in the requested order; empty when nothing matches
        """
        args = ["log", "--pretty=format:%H %ad", f"--date={date_format}"]
        if oldest_first:
            args.append("--reverse")
        args.extend(["--", pattern])

        commits = []
        for line in self._run(*args).splitlines():
            line = line.strip()
            if not line:
                continue
            commit_hash, _, date = line.partition(" ")
            commits.append(Commit(hash=commit_hash, date=date))

        self.logger.debug(f"Listed {len(commits)} commits for pattern {pattern!r}")
        return commits

    def changed_files(self, commit_hash: str) -> list[str]:
        """List paths changed by a commit, including a root commit's files.

        Paths are relative to the repository path, like list_commits patterns;
        changes outside it are left out.
        """
        output = self._run(
            "diff-tree",
            "--no-commit-id",
            "--name-only",
            "--relative",
            "-r",
            "--root",
            commit_hash,
        )
        return [line for line in output.splitlines() if line]

    def show_file(self, commit_hash: str, path: str) -> str | None:
        """Return a file's content at a commit, or None if it is not there.

        path is relative to the repository path, not the top level.

        Raises:
            GitTimeoutError: If git does not answer in time
        """
        try:
            return self._run("show", f"{commit_hash}:./{path}")
        except GitTimeoutError:
            raise
        except GitCommandError as e:
            self.logger.debug(f"{path} not found at {commit_hash[:7]}: {e.stderr}")
            return None

    def list_tracked_files(self, pattern: str) -> list[str]:
        """List tracked files matching a pathspec."""
        output = self._run("ls-files", "--", pattern)
        return [line for line in output.splitlines() if line]

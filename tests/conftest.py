"""
Pytest configuration and shared fixtures.
"""

import os
import shutil
import subprocess
from fnmatch import fnmatchcase
from pathlib import Path

import pytest

from src.shared_utilities.git_client import Commit, GitCommandError, GitTimeoutError


class FakeGit:
    """In-memory stand-in for GitClient built from a list of snapshots."""

    def __init__(self):
        self.commits: list[Commit] = []
        self.trees: dict[str, dict[str, str]] = {}
        self.changes: dict[str, list[str]] = {}
        self.list_error: Exception | None = None
        self.failing_diffs: set[str] = set()
        self.slow_shows: set[tuple[str, str]] = set()
        self.shown: list[tuple[str, str]] = []

    @classmethod
    def from_history(cls, history):
        """Build from [(date, {path: content or None}), ...], oldest first."""
        fake = cls()
        tree: dict[str, str] = {}
        for index, (date, changes) in enumerate(history, start=1):
            commit_hash = f"{index:040x}"
            tree = dict(tree)
            for path, content in changes.items():
                if content is None:
                    tree.pop(path, None)
                else:
                    tree[path] = content
            fake.commits.append(Commit(hash=commit_hash, date=date))
            fake.trees[commit_hash] = tree
            fake.changes[commit_hash] = list(changes)
        return fake

    def list_commits(self, pattern, oldest_first=False, date_format="short"):
        if self.list_error:
            raise self.list_error
        matching = [
            commit
            for commit in self.commits
            if any(fnmatchcase(path, pattern) for path in self.changes[commit.hash])
        ]
        return matching if oldest_first else list(reversed(matching))

    def changed_files(self, commit_hash):
        if commit_hash in self.failing_diffs:
            raise GitCommandError("git diff-tree failed: bad object", returncode=128)
        return list(self.changes[commit_hash])

    def show_file(self, commit_hash, path):
        self.shown.append((commit_hash, path))
        if (commit_hash, path) in self.slow_shows:
            raise GitTimeoutError("git show timed out after 1s")
        return self.trees[commit_hash].get(path)

    def list_tracked_files(self, pattern):
        head = self.trees[self.commits[-1].hash] if self.commits else {}
        return sorted(path for path in head if fnmatchcase(path, pattern))


@pytest.fixture
def fake_git_factory():
    """Build a FakeGit from a chronological list of (date, changes) pairs."""
    return FakeGit.from_history


@pytest.fixture
def lodash_history():
    """package.json whose lodash line changes only in the fourth commit."""

    def manifest(version, name="app"):
        return (
            "{\n"
            f'  "name": "{name}",\n'
            '  "dependencies": {\n'
            f'    "lodash": "{version}"\n'
            "  }\n"
            "}\n"
        )

    return [
        ("2024-01-01", {"package.json": manifest("^4.0.0")}),
        ("2024-01-02", {"package.json": manifest("^4.0.0", name="app-renamed")}),
        ("2024-01-03", {"package.json": manifest("^4.0.0", name="app-final")}),
        ("2024-01-04", {"package.json": manifest("^4.1.0", name="app-final")}),
    ]


class GitRepoBuilder:
    """Creates commits with fixed dates in a throwaway repository."""

    def __init__(self, path: Path):
        self.path = path
        self.env = {
            **os.environ,
            "GIT_AUTHOR_NAME": "Test Author",
            "GIT_AUTHOR_EMAIL": "author@example.com",
            "GIT_COMMITTER_NAME": "Test Author",
            "GIT_COMMITTER_EMAIL": "author@example.com",
        }
        self._git("init", "-q")

    def _git(self, *args: str, env: dict | None = None) -> str:
        result = subprocess.run(
            ["git", "-c", "commit.gpgsign=false", *args],
            cwd=self.path,
            env=env or self.env,
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    def commit(self, files: dict[str, str | None], date: str) -> None:
        """Write (or delete, for None) files and commit them at date."""
        for name, content in files.items():
            target = self.path / name
            if content is None:
                self._git("rm", "-q", name)
                continue
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
            self._git("add", name)

        stamp = f"{date}T12:00:00+00:00"
        env = {**self.env, "GIT_AUTHOR_DATE": stamp, "GIT_COMMITTER_DATE": stamp}
        self._git("commit", "-q", "-m", f"update {date}", env=env)


@pytest.fixture
def git_repo(tmp_path):
    """An empty git repository; skipped when git is not installed."""
    if shutil.which("git") is None:
        pytest.skip("git executable not available")
    repo = tmp_path / "repo"
    repo.mkdir()
    return GitRepoBuilder(repo)

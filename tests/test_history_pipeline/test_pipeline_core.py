"""Tests for the history pipeline."""

from unittest.mock import Mock

import pytest

from src.history_pipeline import (
    DistinctValueDedup,
    FixedFileResolver,
    HistoryPipeline,
    KeywordLineExtractor,
    ManifestVersionExtractor,
    SequentialDedup,
)
from src.shared_utilities.git_client import GitCommandError


@pytest.fixture
def multi_file_history():
    return [
        ("2024-01-01", {"a.txt": "key 1\nnothing\nkey 2\n", "b.md": "key doc\n"}),
        ("2024-01-02", {"b.txt": "key b\n"}),
        ("2024-01-03", {"a.txt": "key 1\nkey 3\n", "b.txt": "no match\n"}),
        ("2024-01-04", {"a.txt": None}),
    ]


class TestHistoryPipelineKeyword:
    """Keyword extraction through the pipeline."""

    def test_records_every_matching_line_without_dedup(
        self, fake_git_factory, multi_file_history
    ):
        """Test recording each matching line of each commit."""
        git = fake_git_factory(multi_file_history)
        pipeline = HistoryPipeline(git, KeywordLineExtractor("key"))

        records = pipeline.run("*.txt")

        assert [(r.filename, r.date, r.value) for r in records] == [
            ("a.txt", "2024-01-01", "key 1"),
            ("a.txt", "2024-01-01", "key 2"),
            ("b.txt", "2024-01-02", "key b"),
            ("a.txt", "2024-01-03", "key 1"),
            ("a.txt", "2024-01-03", "key 3"),
        ]

    def test_record_count_equals_matching_lines(
        self, fake_git_factory, multi_file_history
    ):
        """Test that record count equals the matching line count."""
        git = fake_git_factory(multi_file_history)
        pipeline = HistoryPipeline(git, KeywordLineExtractor("key"))

        records = pipeline.run("*")

        expected = 0
        for commit in git.commits:
            for path in git.changes[commit.hash]:
                content = git.trees[commit.hash].get(path) or ""
                expected += sum(1 for line in content.splitlines() if "key" in line)
        assert len(records) == expected

    def test_deleted_file_contributes_nothing(
        self, fake_git_factory, multi_file_history
    ):
        """Test that a file missing at a commit yields no records."""
        git = fake_git_factory(multi_file_history)
        pipeline = HistoryPipeline(git, KeywordLineExtractor("key"))

        records = pipeline.run("a.txt")

        assert {r.date for r in records} == {"2024-01-01", "2024-01-03"}

    def test_dedupe_records_only_changes(self, fake_git_factory, lodash_history):
        """Test recording a line only when it changed."""
        git = fake_git_factory(lodash_history)
        pipeline = HistoryPipeline(
            git, KeywordLineExtractor("lodash"), dedup=SequentialDedup()
        )

        records = pipeline.run("package.json")

        assert [(r.date, r.value) for r in records] == [
            ("2024-01-01", '"lodash": "^4.0.0"'),
            ("2024-01-04", '"lodash": "^4.1.0"'),
        ]

    def test_no_matching_commits(self, fake_git_factory, multi_file_history):
        """Test an empty commit list."""
        git = fake_git_factory(multi_file_history)
        pipeline = HistoryPipeline(git, KeywordLineExtractor("key"))

        assert pipeline.list_commits("*.rs") == []
        assert pipeline.run("*.rs") == []

    def test_list_failure_propagates(self, fake_git_factory, multi_file_history):
        """Test that a commit listing failure is raised."""
        git = fake_git_factory(multi_file_history)
        git.list_error = GitCommandError("git log failed: not a git repository")
        pipeline = HistoryPipeline(git, KeywordLineExtractor("key"))

        with pytest.raises(GitCommandError, match="not a git repository"):
            pipeline.run("*.txt")

    def test_failed_file_listing_skips_only_that_commit(
        self, fake_git_factory, multi_file_history
    ):
        """Test that a failed file listing skips only its commit."""
        git = fake_git_factory(multi_file_history)
        git.failing_diffs.add(git.commits[0].hash)
        pipeline = HistoryPipeline(git, KeywordLineExtractor("key"))

        records = pipeline.run("*.txt")

        assert [r.date for r in records] == ["2024-01-02", "2024-01-03", "2024-01-03"]

    def test_content_timeout_skips_only_that_file(
        self, fake_git_factory, multi_file_history
    ):
        """Test that a content fetch timeout skips only that file."""
        git = fake_git_factory(multi_file_history)
        git.slow_shows.add((git.commits[1].hash, "b.txt"))
        pipeline = HistoryPipeline(git, KeywordLineExtractor("key"))

        records = pipeline.run("*.txt")

        assert "key b" not in [r.value for r in records]
        assert len(records) == 4

    def test_reports_progress_per_commit(self, fake_git_factory, multi_file_history):
        """Test one progress update per commit plus the start."""
        git = fake_git_factory(multi_file_history)
        callback = Mock()
        pipeline = HistoryPipeline(
            git, KeywordLineExtractor("key"), progress_callback=callback
        )

        pipeline.run("*.txt")

        assert callback.call_count == 4
        assert callback.call_args_list[0].args[:2] == (1, 4)
        assert "Processing commit 4/4" in callback.call_args_list[-1].args[2]


class TestHistoryPipelineManifest:
    """Manifest version extraction through the pipeline."""

    def test_distinct_versions_newest_first(self, fake_git_factory):
        """Test distinct versions tagged with the newest commit."""
        def manifest(version):
            return '{"dependencies": {"react": "%s"}}' % version

        git = fake_git_factory(
            [
                ("2024-01-01", {"package.json": manifest("16.0.0")}),
                ("2024-02-01", {"package.json": manifest("17.0.0")}),
                ("2024-03-01", {"package.json": "{broken"}),
                ("2024-04-01", {"package.json": manifest("16.0.0")}),
                ("2024-05-01", {"package.json": manifest("18.0.0")}),
            ]
        )
        pipeline = HistoryPipeline(
            git,
            ManifestVersionExtractor("react"),
            dedup=DistinctValueDedup(),
            resolver=FixedFileResolver("package.json"),
            oldest_first=False,
            date_format="short",
        )

        records = pipeline.run("package.json")

        assert [(r.date, r.value) for r in records] == [
            ("2024-05-01", "18.0.0"),
            ("2024-04-01", "16.0.0"),
            ("2024-02-01", "17.0.0"),
        ]
        assert len({r.value for r in records}) == len(records)

    def test_fixed_resolver_skips_diff_listing(self, fake_git_factory, lodash_history):
        """Test that a fixed file never asks for changed files."""
        git = fake_git_factory(lodash_history)
        git.failing_diffs.update(commit.hash for commit in git.commits)
        pipeline = HistoryPipeline(
            git,
            ManifestVersionExtractor("lodash"),
            resolver=FixedFileResolver("package.json"),
        )

        records = pipeline.run("package.json")

        assert len(records) == 4
        assert len(git.shown) == 4

"""
Main CLI entry point for keyword history analysis.
"""

from pathlib import Path

import click
from dotenv import load_dotenv

from ..history_pipeline import (
    ExtractionRecord,
    HistoryPipeline,
    KeywordLineExtractor,
    NoDedup,
    SequentialDedup,
)
from ..shared_utilities import (
    GitClient,
    GitCollaborator,
    GitError,
    OutputFormat,
    ProgressIndicator,
    get_logger,
)
from ..shared_utilities.cli_base import ClickCommand, setup_logging
from ..shared_utilities.telemetry import trace_function
from .config import KeywordTrackerConfig
from .output_formatter import KeywordHistoryFormatter

# Load environment variables from .env file
load_dotenv()


class KeywordHistoryError(Exception):
    """Base exception for keyword history operations."""

    pass


def run_keyword_history(
    config: KeywordTrackerConfig, git: GitCollaborator | None = None
) -> list[ExtractionRecord]:
    """
    Collect every line containing the keyword across the files' history.

    Args:
        config: Run configuration
        git: Git collaborator (defaults to a GitClient on config.repo_path)

    Returns:
        Records in chronological order

    Raises:
        KeywordHistoryError: If the commit history cannot be listed
    """
    logger = get_logger(__name__)

    if git is None:
        git = GitClient(config.repo_path, timeout=config.timeout)

    progress = ProgressIndicator(quiet=config.quiet)
    pipeline = HistoryPipeline(
        git,
        KeywordLineExtractor(config.keyword),
        dedup=SequentialDedup() if config.dedupe else NoDedup(),
        oldest_first=True,
        date_format="iso-strict",
        progress_callback=progress.update,
    )

    try:
        commits = pipeline.list_commits(config.files)
    except GitError as e:
        raise KeywordHistoryError(
            f"Failed to list commits for '{config.files}': {e}"
        ) from e

    click.echo(f"Found {len(commits)} commits touching '{config.files}'")
    logger.info(f"Scanning {len(commits)} commits, dedupe={config.dedupe}")

    return pipeline.process(commits, config.files)


def write_reports(
    records: list[ExtractionRecord],
    config: KeywordTrackerConfig,
    formatter: KeywordHistoryFormatter,
) -> None:
    """Write requested report files, or print the grouped listing."""
    if not config.writes_files:
        click.echo(formatter.format(records, OutputFormat.TABLE))
        return

    if config.writes_both_formats:
        click.echo(
            "Warning: both --csv and --json given; writing both files.", err=True
        )

    if config.csv_path is not None:
        path = formatter.save(records, config.csv_path, OutputFormat.CSV)
        click.echo(f"CSV written to {path}")

    if config.json_path is not None:
        path = formatter.save(records, config.json_path, OutputFormat.JSON)
        click.echo(f"JSON written to {path}")


@click.command()
@click.option("--files", help="Glob selecting the files to track, e.g. 'src/*.js'")
@click.option("--keyword", help="Literal text a line must contain (case-sensitive)")
@click.option(
    "--csv",
    "csv_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write matching lines to this CSV file",
)
@click.option(
    "--json",
    "json_path",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Write matching lines, grouped by file, to this JSON file",
)
@click.option(
    "--dedupe",
    is_flag=True,
    help="Only record a line when it changed since the file's previous record",
)
@click.option(
    "--repo-path",
    type=click.Path(file_okay=False, path_type=Path),
    help="Repository to inspect (default: current directory)",
)
@ClickCommand.add_git_options()
@ClickCommand.add_common_options()
@trace_function("keyword_history_main", include_args=True)
def main(
    files: str | None,
    keyword: str | None,
    csv_path: Path | None,
    json_path: Path | None,
    dedupe: bool,
    repo_path: Path | None,
    timeout: float,
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Track lines containing a keyword across a repository's history.

    Walks every commit that touched a file matching --files, oldest first,
    and reports each line containing --keyword with the commit date.

    Examples:

        # Print every line mentioning lodash in any package.json
        keyword-history --files '*package.json' --keyword lodash

        # Only record changes, and save both CSV and JSON reports
        keyword-history --files 'src/*.py' --keyword VERSION --dedupe \\
            --csv versions.csv --json versions.json
    """
    setup_logging(verbose)
    logger = get_logger(__name__)

    for name, value in (("--files", files), ("--keyword", keyword)):
        if not value:
            click.echo(f"Error: Missing required option '{name}'.", err=True)
            raise click.Abort()

    config = KeywordTrackerConfig(
        files=files,
        keyword=keyword,
        csv_path=csv_path,
        json_path=json_path,
        dedupe=dedupe,
        repo_path=repo_path,
        timeout=timeout,
        quiet=quiet,
    )

    try:
        records = run_keyword_history(config)
        write_reports(records, config, KeywordHistoryFormatter())
    except KeywordHistoryError as e:
        logger.debug(f"Keyword history failed: {e}")
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e
    except OSError as e:
        click.echo(f"Error: could not write report: {e}", err=True)
        raise click.Abort() from e

    click.echo(f"Found {len(records)} occurrences of '{config.keyword}'")


if __name__ == "__main__":
    main()

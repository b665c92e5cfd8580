"""
Main CLI entry point for package version history analysis.
"""

from pathlib import Path

import click
from dotenv import load_dotenv

from ..history_pipeline import (
    DistinctValueDedup,
    FixedFileResolver,
    HistoryPipeline,
    ManifestHistory,
    ManifestVersionExtractor,
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
from .config import DEFAULT_MANIFEST, VersionTrackerConfig, default_output_file
from .output_formatter import VersionHistoryFormatter

# Load environment variables from .env file
load_dotenv()


class VersionHistoryError(Exception):
    """Base exception for package version history operations."""

    pass


class ManifestNotTrackedError(VersionHistoryError):
    """No tracked file matches the manifest pattern."""

    pass


def track_manifest(
    git: GitCollaborator,
    manifest_path: str,
    package_name: str,
    progress: ProgressIndicator,
) -> ManifestHistory:
    """
    Collect the distinct versions of a dependency in one manifest's history.

    Commits are visited newest first, so each version is tagged with the most
    recent commit in which it appears.

    Raises:
        VersionHistoryError: If the manifest's commits cannot be listed
    """
    pipeline = HistoryPipeline(
        git,
        ManifestVersionExtractor(package_name),
        dedup=DistinctValueDedup(),
        resolver=FixedFileResolver(manifest_path),
        oldest_first=False,
        date_format="short",
        progress_callback=progress.update,
    )

    try:
        commits = pipeline.list_commits(manifest_path)
    except GitError as e:
        raise VersionHistoryError(
            f"Failed to list commits for '{manifest_path}': {e}"
        ) from e

    if not commits:
        click.echo(f"No commits found for the file: {manifest_path}")
        return ManifestHistory(manifest_path=manifest_path)

    click.echo(f"Found {len(commits)} commits for the file: {manifest_path}")
    history = pipeline.process(commits, manifest_path)
    click.echo("File history extraction complete.")

    return ManifestHistory(manifest_path=manifest_path, history=history)


def run_version_history(
    config: VersionTrackerConfig, git: GitCollaborator | None = None
) -> list[ManifestHistory]:
    """
    Build a version history for every tracked manifest matching the pattern.

    Raises:
        ManifestNotTrackedError: If the pattern matches no tracked file
        VersionHistoryError: If git cannot answer a history query
    """
    logger = get_logger(__name__)

    if git is None:
        git = GitClient(config.repo_path, timeout=config.timeout)

    try:
        manifests = git.list_tracked_files(config.manifest_pattern)
    except GitError as e:
        raise VersionHistoryError(
            f"Failed to list files matching '{config.manifest_pattern}': {e}"
        ) from e

    if not manifests:
        raise ManifestNotTrackedError(
            f'The file "{config.manifest_pattern}" does not exist in the repository.'
        )

    logger.info(f"Tracking {config.package_name} across {len(manifests)} manifests")

    progress = ProgressIndicator(quiet=config.quiet)
    histories = []
    for manifest_path in manifests:
        click.echo(f"Extracting history for: {manifest_path}")
        histories.append(
            track_manifest(git, manifest_path, config.package_name, progress)
        )

    return histories


@click.command()
@click.argument("package_name", required=False)
@click.argument(
    "output_file",
    required=False,
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.argument("manifest_pattern", required=False, default=DEFAULT_MANIFEST)
@click.argument(
    "repo_path", required=False, type=click.Path(file_okay=False, path_type=Path)
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice([OutputFormat.JSON, OutputFormat.CSV]),
    default=OutputFormat.JSON,
    help="Output file format (default OUTPUT_FILE: output.json or output.csv)",
    show_default=True,
)
@ClickCommand.add_git_options()
@ClickCommand.add_common_options()
@trace_function("package_version_history_main", include_args=True)
def main(
    package_name: str | None,
    output_file: Path | None,
    manifest_pattern: str,
    repo_path: Path | None,
    output_format: str,
    timeout: float,
    quiet: bool,
    verbose: bool,
) -> None:
    """
    Track the versions of a dependency across package manifest history.

    PACKAGE_NAME is looked up in "dependencies", then "devDependencies", of
    every revision of each tracked manifest matching MANIFEST_PATTERN.
    The distinct versions found are written to OUTPUT_FILE.

    Examples:

        # Versions of react in ./package.json, saved to output.json
        package-version-history react

        # Every package.json in a monorepo
        package-version-history lodash lodash.json '*package.json' ../my-repo
    """
    setup_logging(verbose)
    logger = get_logger(__name__)

    if not package_name:
        click.echo("Error: Missing package name argument.", err=True)
        raise click.Abort()

    if output_file is None:
        output_file = default_output_file(output_format)

    config = VersionTrackerConfig(
        package_name=package_name,
        output_file=output_file,
        manifest_pattern=manifest_pattern,
        repo_path=repo_path,
        output_format=output_format,
        timeout=timeout,
        quiet=quiet,
    )

    try:
        histories = run_version_history(config)
    except VersionHistoryError as e:
        logger.debug(f"Version history failed: {e}")
        click.echo(f"Error: {e}", err=True)
        raise click.Abort() from e

    formatter = VersionHistoryFormatter()
    try:
        path = formatter.save(histories, config.output_file, config.output_format)
    except OSError as e:
        click.echo(f"Error: could not write {config.output_file}: {e}", err=True)
        raise click.Abort() from e

    if not config.quiet:
        click.echo(
            formatter.format(
                histories, OutputFormat.TABLE, package_name=config.package_name
            )
        )
    click.echo(f"History written to {path}")


if __name__ == "__main__":
    main()

"""
Shared CLI utilities for consistent command-line interfaces across tools.

Provides click option sets so both history tools expose the same flags for
verbosity, progress output and git behaviour.
"""

import click

from .git_client import DEFAULT_TIMEOUT
from .logging_config import configure_logging


class ClickCommand:
    """
    Helpers for building consistent Click commands.

    Provides decorators that add common option sets to Click commands.
    """

    @staticmethod
    def add_common_options(exclude: list[str] | None = None):
        """Decorator that adds common options to a Click command."""
        exclude = exclude or []

        def decorator(func):
            # Add options in reverse order since decorators are applied bottom-up
            if "verbose" not in exclude:
                func = click.option(
                    "-v", "--verbose", is_flag=True, help="Enable verbose logging"
                )(func)

            if "quiet" not in exclude:
                func = click.option(
                    "-q", "--quiet", is_flag=True, help="Suppress progress output"
                )(func)

            return func

        return decorator

    @staticmethod
    def add_git_options(exclude: list[str] | None = None):
        """Decorator that adds options controlling git invocations."""
        exclude = exclude or []

        def decorator(func):
            if "timeout" not in exclude:
                func = click.option(
                    "--timeout",
                    type=click.FloatRange(min=0, min_open=True),
                    default=DEFAULT_TIMEOUT,
                    envvar="GIT_HISTORY_TIMEOUT",
                    help="Seconds to wait for each git command",
                    show_default=True,
                )(func)

            return func

        return decorator


def setup_logging(verbose: bool) -> None:
    """Configure logging for a CLI run."""
    configure_logging(level="DEBUG" if verbose else None)

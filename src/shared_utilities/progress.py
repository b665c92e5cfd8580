"""
Console progress reporting for long history traversals.
"""

import click


class ProgressIndicator:
    """Simple progress indicator for CLI operations."""

    def __init__(self, quiet: bool = False):
        """Initialize progress indicator.

        Args:
            quiet: If True, suppress progress output
        """
        self.quiet = quiet

    def update(self, current: int, total: int, message: str) -> None:
        """Update progress display."""
        if self.quiet:
            return

        if total > 0:
            percentage = (current / total) * 100
            click.echo(f"[{percentage:6.1f}%] {message}")
        else:
            click.echo(f"[  ---  ] {message}")

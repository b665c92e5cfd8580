"""
Common utilities shared across tools
"""

from .base_output_formatter import BaseOutputFormatter, OutputFormat
from .git_client import (
    Commit,
    GitClient,
    GitCollaborator,
    GitCommandError,
    GitError,
    GitTimeoutError,
)
from .logging_config import configure_logging, get_logger, get_logging_manager
from .progress import ProgressIndicator
from .telemetry import get_telemetry_manager, trace_function, trace_operation

__all__ = [
    "configure_logging",
    "get_logger",
    "get_logging_manager",
    "get_telemetry_manager",
    "trace_function",
    "trace_operation",
    "BaseOutputFormatter",
    "OutputFormat",
    "Commit",
    "GitClient",
    "GitCollaborator",
    "GitCommandError",
    "GitError",
    "GitTimeoutError",
    "ProgressIndicator",
]

"""
Centralized logging configuration for the git history toolkit.

Provides loguru-based logging with consistent formatting across the
keyword and package-version history tools.
"""

import os
import sys
from pathlib import Path
from typing import Any

from loguru import logger


class LoggingManager:
    """Manages centralized logging configuration across the toolkit."""

    def __init__(self, service_name: str = "git-history-toolkit"):
        """
        Initialize logging manager.

        Args:
            service_name: Name of the service for logging identification
        """
        self.service_name = service_name
        self._configured: tuple[str, bool, bool] | None = None

    def configure_logging(
        self,
        level: str = "WARNING",
        enable_file_logging: bool = False,
        log_file_path: Path | None = None,
        structured_format: bool = False,
    ) -> None:
        """
        Configure logging for the entire application.

        Calling again with different settings replaces the existing handlers.

        Args:
            level: Logging level (DEBUG, INFO, WARNING, ERROR)
            enable_file_logging: Whether to enable file logging
            log_file_path: Path for log file (auto-generated if None)
            structured_format: Whether to include bound extras in each line
        """
        settings = (level, enable_file_logging, structured_format)
        if self._configured == settings:
            return

        # Remove default loguru handler
        logger.remove()

        # Resolve sys.stderr per message so redirected streams are honoured
        logger.add(
            lambda message: sys.stderr.write(message),
            format=self._get_console_format(structured_format),
            level=level,
            colorize=False,
            backtrace=False,
            diagnose=False,
        )

        if enable_file_logging:
            if log_file_path is None:
                log_file_path = Path.cwd() / "logs" / f"{self.service_name}.log"

            log_file_path.parent.mkdir(parents=True, exist_ok=True)

            logger.add(
                str(log_file_path),
                format=self._get_file_format(),
                level=level,
                rotation="10 MB",
                retention="30 days",
                compression="gz",
                serialize=structured_format,
            )

        logger.configure(extra={"service_name": self.service_name})

        self._configured = settings
        logger.debug(
            "Logging configured",
            service=self.service_name,
            level=level,
            file_logging=enable_file_logging,
        )

    def _get_console_format(self, structured: bool) -> str:
        """Get console logging format."""
        if structured:
            return (
                "{time:YYYY-MM-DD HH:mm:ss.SSS} | "
                "{level: <8} | "
                "{name}:{function}:{line} | "
                "{message} | "
                "{extra}\n"
            )
        return "{time:HH:mm:ss} | {level: <8} | {message}\n"

    def _get_file_format(self) -> str:
        """Get file logging format."""
        return (
            "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | "
            "{name}:{function}:{line} | {message}"
        )

    def get_logger(self, name: str) -> Any:
        """
        Get a logger instance with the given name.

        Args:
            name: Logger name (usually __name__)

        Returns:
            Configured logger instance
        """
        return logger.bind(component=name)

    def log_git_command(
        self, args: list[str], returncode: int, duration: float
    ) -> None:
        """Log a finished git invocation."""
        level = "DEBUG" if returncode == 0 else "INFO"
        logger.bind(
            git_args=args, returncode=returncode, duration_seconds=duration
        ).log(level, "git command finished")


# Global logging manager instance
_logging_manager: LoggingManager | None = None


def get_logging_manager() -> LoggingManager:
    """Get or create the global logging manager instance."""
    global _logging_manager
    if _logging_manager is None:
        _logging_manager = LoggingManager()
    return _logging_manager


def configure_logging(
    level: str | None = None,
    structured: bool | None = None,
    enable_file_logging: bool | None = None,
) -> None:
    """
    Configure application logging with sensible defaults.

    Args:
        level: Logging level; falls back to LOG_LEVEL, then WARNING
        structured: Include bound extras in console output (default:
            LOG_STRUCTURED)
        enable_file_logging: Enable file logging (default: ENABLE_FILE_LOGGING)
    """
    if level is None:
        level = os.getenv("LOG_LEVEL", "WARNING").upper()

    if structured is None:
        structured = os.getenv("LOG_STRUCTURED", "false").lower() == "true"

    if enable_file_logging is None:
        enable_file_logging = (
            os.getenv("ENABLE_FILE_LOGGING", "false").lower() == "true"
        )

    manager = get_logging_manager()
    manager.configure_logging(
        level=level,
        structured_format=structured,
        enable_file_logging=enable_file_logging,
    )


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given component.

    Args:
        name: Component name (usually __name__)

    Returns:
        Configured logger instance
    """
    manager = get_logging_manager()
    return manager.get_logger(name)

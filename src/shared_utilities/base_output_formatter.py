"""
Base output formatter for multi-format report generation.

Supports human-readable console output alongside CSV and JSON files, with a
consistent interface across the history tools.
"""

import csv
import io
import json
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from pathlib import Path
from typing import Any


class OutputFormat:
    """Enumeration of supported output formats."""

    TABLE = "table"
    JSON = "json"
    CSV = "csv"


class BaseOutputFormatter(ABC):
    """
    Abstract base class for all output formatters.

    Subclasses turn tool-specific results into text; this class dispatches on
    the format name and handles writing to disk.
    """

    def __init__(self):
        """Initialize the formatter with format handlers."""
        self._format_handlers = {
            OutputFormat.TABLE: self._format_table,
            OutputFormat.JSON: self._format_json,
            OutputFormat.CSV: self._format_csv,
        }

    def format(self, data: Any, format_type: str = OutputFormat.TABLE, **kwargs) -> str:
        """
        Format data according to the specified format type.

        Args:
            data: Data to format
            format_type: Output format type
            **kwargs: Additional format-specific options

        Returns:
            Formatted string output
        """
        handler = self._format_handlers.get(format_type)
        if not handler:
            raise ValueError(f"Unsupported format type: {format_type}")

        return handler(data, **kwargs)

    def save(
        self,
        data: Any,
        output_path: str | Path,
        format_type: str = OutputFormat.JSON,
        **kwargs,
    ) -> Path:
        """
        Save formatted data to a file.

        Args:
            data: Data to save
            output_path: Path to save the file
            format_type: Output format type
            **kwargs: Additional format-specific options

        Returns:
            The path written
        """
        output_path = Path(output_path)
        content = self.format(data, format_type, **kwargs)

        if output_path.parent != Path("."):
            output_path.parent.mkdir(parents=True, exist_ok=True)
        # newline="" keeps csv's \r\n row terminators intact
        with open(output_path, "w", encoding="utf-8", newline="") as f:
            f.write(content)

        return output_path

    @abstractmethod
    def _format_table(self, data: Any, **kwargs) -> str:
        """Format data as human-readable console text."""
        pass

    @abstractmethod
    def _format_csv(self, data: Any, **kwargs) -> str:
        """Format data as CSV."""
        pass

    def _format_json(self, data: Any, **kwargs) -> str:
        """Format data as JSON, keeping insertion order of keys."""
        indent = kwargs.get("indent", 2)
        return json.dumps(data, indent=indent, ensure_ascii=False, default=str)

    def _write_csv(self, header: Sequence[str], rows: Iterable[Sequence[Any]]) -> str:
        """Render rows as CSV with every field quoted."""
        output = io.StringIO()
        writer = csv.writer(output, quoting=csv.QUOTE_ALL)
        writer.writerow(header)
        writer.writerows(rows)
        return output.getvalue()

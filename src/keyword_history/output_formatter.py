"""
Output formatting for keyword history results.
"""

from typing import Any

from ..history_pipeline import ExtractionRecord, group_by_file
from ..shared_utilities import BaseOutputFormatter

CSV_HEADER = ["Filename", "Date", "Line"]


class KeywordHistoryFormatter(BaseOutputFormatter):
    """Formats keyword line records as console text, CSV or JSON."""

    def _format_table(self, data: list[ExtractionRecord], **kwargs: Any) -> str:
        """Group records by file, one block per file."""
        if not data:
            return "No matching lines found."

        lines = []
        for filename, records in group_by_file(data).items():
            lines.append(f"📄 {filename} ({len(records)} entries)")
            lines.append("-" * 40)
            for record in records:
                lines.append(f"  {record.date}  {record.value}")
            lines.append("")

        return "\n".join(lines).rstrip("\n")

    def _format_csv(self, data: list[ExtractionRecord], **kwargs: Any) -> str:
        return self._write_csv(
            CSV_HEADER,
            ([record.filename, record.date, record.value] for record in data),
        )

    def _format_json(self, data: list[ExtractionRecord], **kwargs: Any) -> str:
        grouped = {
            filename: [
                {"date": record.date, "line": record.value} for record in records
            ]
            for filename, records in group_by_file(data).items()
        }
        return super()._format_json(grouped, **kwargs)

"""
Output formatting for package version history results.
"""

from typing import Any

from ..history_pipeline import ManifestHistory
from ..shared_utilities import BaseOutputFormatter

CSV_HEADER = ["Manifest", "Hash", "Date", "Version"]


class VersionHistoryFormatter(BaseOutputFormatter):
    """Formats per-manifest version histories."""

    def _format_table(self, data: list[ManifestHistory], **kwargs: Any) -> str:
        package_name = kwargs.get("package_name", "package")
        lines = [f"📦 Version history: {package_name}", "=" * 60]

        for manifest in data:
            lines.append(f"{manifest.manifest_path} ({len(manifest.history)} versions)")
            if not manifest.history:
                lines.append("  (not found in any revision)")
            for record in manifest.history:
                lines.append(
                    f"  {record.date}  {record.commit_hash[:7]}  {record.value}"
                )
            lines.append("")

        return "\n".join(lines).rstrip("\n")

    def _format_csv(self, data: list[ManifestHistory], **kwargs: Any) -> str:
        return self._write_csv(
            CSV_HEADER,
            (
                [manifest.manifest_path, record.commit_hash, record.date, record.value]
                for manifest in data
                for record in manifest.history
            ),
        )

    def _format_json(self, data: list[ManifestHistory], **kwargs: Any) -> str:
        return super()._format_json([manifest.to_dict() for manifest in data], **kwargs)

"""
Package version history tracking.

Follows a dependency's declared version through the commit history of JSON
package manifests.
"""

from .config import VersionTrackerConfig
from .output_formatter import VersionHistoryFormatter

__all__ = [
    "VersionTrackerConfig",
    "VersionHistoryFormatter",
]

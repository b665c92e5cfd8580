"""
Keyword history tracking.

Reports every line containing a keyword across the commit history of files
matching a glob.
"""

from .config import KeywordTrackerConfig
from .output_formatter import KeywordHistoryFormatter

__all__ = [
    "KeywordTrackerConfig",
    "KeywordHistoryFormatter",
]

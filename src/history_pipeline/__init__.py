"""
History extraction pipeline shared by the keyword and package version tools.
"""

from .core import HistoryPipeline
from .data_models import ExtractionRecord, ManifestHistory, group_by_file
from .dedup import (
    DedupPolicy,
    DedupState,
    DistinctValueDedup,
    NoDedup,
    SequentialDedup,
)
from .extractors import (
    KeywordLineExtractor,
    Manifest,
    ManifestVersionExtractor,
    SignalExtractor,
    parse_manifest,
)
from .resolvers import ChangedFileResolver, FileResolver, FixedFileResolver

__all__ = [
    "HistoryPipeline",
    "ExtractionRecord",
    "ManifestHistory",
    "group_by_file",
    "DedupPolicy",
    "DedupState",
    "DistinctValueDedup",
    "NoDedup",
    "SequentialDedup",
    "KeywordLineExtractor",
    "Manifest",
    "ManifestVersionExtractor",
    "SignalExtractor",
    "parse_manifest",
    "ChangedFileResolver",
    "FileResolver",
    "FixedFileResolver",
]

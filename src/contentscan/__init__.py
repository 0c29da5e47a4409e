"""
contentscan: resolves declared content sources into watchable paths and reports
which files changed between scans.
"""

from contentscan.config import ContentConfigError, find_config_file, load_config
from contentscan.content_paths import (
    ChangedContent,
    ChangeTracker,
    ContentConfig,
    ContentPathSpec,
    FileWatermarks,
    RawContentEntry,
    ResolutionContext,
    ResolutionMode,
)

__all__ = [
    "ChangeTracker",
    "ChangedContent",
    "ContentConfig",
    "ContentConfigError",
    "ContentPathSpec",
    "FileWatermarks",
    "RawContentEntry",
    "ResolutionContext",
    "ResolutionMode",
    "find_config_file",
    "load_config",
]

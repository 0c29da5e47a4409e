"""
Default values shared by content path parsing and change tracking.
"""

from __future__ import annotations

# Extension assigned to inline raw content that doesn't declare one.
DEFAULT_RAW_EXTENSION: str = "html"

# Prefix that marks a content source as an exclusion (negated glob).
EXCLUSION_MARKER: str = "!"

# Name of the instrumentation span wrapped around glob expansion.
FIND_CHANGED_FILES_SPAN: str = "Finding changed files"

# Environment variable that turns on timing output for scans.
DEBUG_ENV_VAR: str = "DEBUG"

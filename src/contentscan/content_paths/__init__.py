"""
Content path resolution and incremental change tracking.

Declared content sources (literal paths, globs, `!` exclusions) are split into a
watchable base and a glob pattern, made absolute, and expanded across symlinks.
A `ChangeTracker` then reports which matched files changed since the last scan.

Usage::

    from contentscan.content_paths import ChangeTracker, ContentConfig

    tracker = ChangeTracker(ContentConfig(files=["src/**/*.html"]))
    watch(tracker.candidates)
    for item in tracker.changed_content():
        extract(item.content, item.extension)
"""

from contentscan.content_paths.defaults import DEFAULT_RAW_EXTENSION
from contentscan.content_paths.expansion import ExclusionMatcher, expand_patterns, expand_specs
from contentscan.content_paths.globs import (
    expand_alternatives,
    expand_braces,
    is_glob,
    normalize_path,
    parse_glob,
    translate_extglobs,
)
from contentscan.content_paths.instrumentation import (
    Instrumentation,
    LoggingInstrumentation,
    NullInstrumentation,
    instrumentation_from_env,
)
from contentscan.content_paths.resolver import (
    parse_candidate_files,
    parse_content_path,
    resolve_path_symlinks,
    resolve_real_path,
    resolve_relative_paths,
)
from contentscan.content_paths.tracker import (
    ChangeTracker,
    resolve_changed_content,
    resolve_changed_files,
)
from contentscan.content_paths.types import (
    ChangedContent,
    ContentConfig,
    ContentPathSpec,
    FileWatermarks,
    RawContentEntry,
    ResolutionContext,
    ResolutionMode,
)

__all__ = [
    "DEFAULT_RAW_EXTENSION",
    "ChangeTracker",
    "ChangedContent",
    "ContentConfig",
    "ContentPathSpec",
    "ExclusionMatcher",
    "FileWatermarks",
    "Instrumentation",
    "LoggingInstrumentation",
    "NullInstrumentation",
    "RawContentEntry",
    "ResolutionContext",
    "ResolutionMode",
    "expand_alternatives",
    "expand_braces",
    "expand_patterns",
    "expand_specs",
    "instrumentation_from_env",
    "is_glob",
    "normalize_path",
    "parse_candidate_files",
    "parse_content_path",
    "parse_glob",
    "resolve_changed_content",
    "resolve_changed_files",
    "resolve_path_symlinks",
    "resolve_real_path",
    "resolve_relative_paths",
    "translate_extglobs",
]

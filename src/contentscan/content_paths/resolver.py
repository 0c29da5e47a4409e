"""
Turns declared content paths (absolute or not, glob or not) into absolute
`ContentPathSpec` entries ready to register with a file watcher.

Symlinked bases produce two entries, one for the link and one for its target,
since some watchers only observe the real path and others only the link.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from dataclasses import replace
from pathlib import Path

from contentscan.content_paths.globs import normalize_path, parse_glob, strip_exclusion_marker
from contentscan.content_paths.types import ContentConfig, ContentPathSpec, ResolutionContext

log = logging.getLogger(__name__)


def parse_candidate_files(
    config: ContentConfig, context: ResolutionContext
) -> list[ContentPathSpec]:
    """
    Resolve every declared file source into specs. The resolution root is
    decided once from `context` and shared by all entries.
    """
    root = context.resolution_root()
    return [spec for file_path in config.files for spec in parse_content_path(file_path, root)]


def parse_content_path(file_path: str, root: str | Path) -> list[ContentPathSpec]:
    """Parse, resolve and symlink-expand a single content path."""
    original = normalize_path(file_path)
    # The exclusion marker isn't part of the path itself.
    base, pattern = parse_glob(strip_exclusion_marker(original))

    specs = resolve_relative_paths([ContentPathSpec(original, base, pattern)], root)
    return [expanded for spec in specs for expanded in resolve_path_symlinks(spec)]


def resolve_relative_paths(
    specs: Iterable[ContentPathSpec], root: str | Path
) -> list[ContentPathSpec]:
    """Replace each spec's `base` with its absolute form relative to `root`."""
    return [replace(spec, base=absolute_path(root, spec.base)) for spec in specs]


def absolute_path(root: str | Path, path: str) -> str:
    """Join `path` onto `root` (unless already absolute), normalized to `/` form."""
    joined = os.path.normpath(os.path.join(os.fspath(root), path))
    return joined.replace(os.sep, "/")


def resolve_real_path(path: str) -> str | None:
    """
    The symlink-free real path of `path`, or `None` if it can't be resolved
    (missing, unreadable, or a link loop).
    """
    try:
        return os.path.realpath(path, strict=True).replace(os.sep, "/")
    except OSError as e:
        log.debug("Could not resolve real path of %s: %s", path, e)
        return None


def resolve_path_symlinks(spec: ContentPathSpec) -> list[ContentPathSpec]:
    """
    Return `[spec]`, plus a copy based at the real path when `spec.base` goes
    through a symlink. Exclusions are never expanded.
    """
    if spec.is_exclusion:
        return [spec]

    real_path = resolve_real_path(spec.base)
    if real_path is None or real_path == spec.base:
        return [spec]
    return [spec, replace(spec, base=real_path)]

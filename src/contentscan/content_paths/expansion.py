"""
Combined glob expansion over a list of queries or specs, with `!`-prefixed exclusions
matched using pathspec.
"""

from __future__ import annotations

import glob
import os
from collections.abc import Iterable, Sequence
from pathlib import Path

import pathspec

from contentscan.content_paths.defaults import EXCLUSION_MARKER
from contentscan.content_paths.globs import (
    expand_alternatives,
    normalize_path,
    parse_glob,
    strip_exclusion_marker,
)
from contentscan.content_paths.resolver import absolute_path
from contentscan.content_paths.types import ContentPathSpec


class ExclusionMatcher:
    """
    Matches absolute file paths against exclusion patterns. Relative exclusions
    are anchored at `cwd`.

    Each exclusion is split into a literal base and a glob suffix. A literal
    exclusion drops the named file or everything beneath the named directory. A
    glob exclusion is compiled as an anchored gitignore-style pattern and checked
    against paths relative to its base.
    """

    def __init__(self, exclusions: Iterable[str], cwd: str | Path) -> None:
        self._literals: list[str] = []
        self._globbed: list[tuple[str, pathspec.PathSpec]] = []
        for exclusion in exclusions:
            for expanded in expand_alternatives(normalize_path(strip_exclusion_marker(exclusion))):
                base, pattern = parse_glob(expanded)
                base = absolute_path(cwd, base)
                if pattern is None:
                    self._literals.append(base)
                else:
                    spec = pathspec.PathSpec.from_lines("gitignore", ["/" + pattern])
                    self._globbed.append((base, spec))

    def __bool__(self) -> bool:
        return bool(self._literals or self._globbed)

    def matches(self, file_path: str) -> bool:
        for literal in self._literals:
            if file_path == literal or _is_beneath(file_path, literal):
                return True
        for base, spec in self._globbed:
            if _is_beneath(file_path, base) and spec.match_file(_relative_to(file_path, base)):
                return True
        return False


def expand_patterns(patterns: Sequence[str], cwd: str | Path | None = None) -> list[str]:
    """
    Expand glob and literal queries into a deduplicated list of absolute file paths.

    Patterns starting with `!` are exclusions and remove matches of the others.
    Relative patterns are anchored at `cwd` (default: the working directory), and
    `cwd` itself is never read as glob syntax. Brace groups are expanded, `**`
    crosses directories, and wildcards don't match dotfiles. Directories are never
    returned. Malformed patterns are passed to `glob` as they are.
    """
    root = Path.cwd() if cwd is None else Path(cwd)
    includes: list[tuple[str, str | None]] = []
    exclusions: list[str] = []
    for pattern in patterns:
        if pattern.startswith(EXCLUSION_MARKER):
            exclusions.append(pattern)
            continue
        for expanded in expand_alternatives(normalize_path(pattern)):
            base, glob_part = parse_glob(expanded)
            includes.append((absolute_path(root, base), glob_part))
    return _expand(includes, ExclusionMatcher(exclusions, root))


def expand_specs(specs: Sequence[ContentPathSpec], cwd: str | Path | None = None) -> list[str]:
    """
    Like `expand_patterns`, but globs each spec's `pattern` beneath its literal
    `base`, so glob characters in the base are matched as plain text. Exclusion
    specs contribute their `original` pattern, anchored at `cwd`.
    """
    root = Path.cwd() if cwd is None else Path(cwd)
    includes = [(spec.base, spec.pattern) for spec in specs if not spec.is_exclusion]
    exclusions = [spec.original for spec in specs if spec.is_exclusion]
    return _expand(includes, ExclusionMatcher(exclusions, root))


def _expand(
    includes: Iterable[tuple[str, str | None]], exclusions: ExclusionMatcher
) -> list[str]:
    found: dict[str, None] = {}
    for base, pattern in includes:
        for file_path in _expand_under(base, pattern):
            if file_path in found or (exclusions and exclusions.matches(file_path)):
                continue
            found[file_path] = None
    return list(found)


def _expand_under(base: str, pattern: str | None) -> Iterable[str]:
    """Files matching `pattern` beneath the literal directory `base`, or `base` itself."""
    if pattern is None:
        if os.path.isfile(base):
            yield base
        return
    for glob_part in expand_alternatives(pattern):
        for match in glob.iglob(glob_part, root_dir=base, recursive=True):
            file_path = absolute_path(base, match)
            if os.path.isfile(file_path):
                yield file_path


def _is_beneath(file_path: str, directory: str) -> bool:
    prefix = directory if directory.endswith("/") else directory + "/"
    return file_path.startswith(prefix)


def _relative_to(file_path: str, directory: str) -> str:
    return file_path[len(directory) :].lstrip("/")

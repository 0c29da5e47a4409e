"""
Incremental change tracking over resolved content paths.

Each scan expands all specs against the filesystem and reports only the files
whose modification time moved past the watermark recorded in the caller's
`FileWatermarks` table.
"""

from __future__ import annotations

import os
from collections.abc import Iterable, Sequence
from pathlib import Path

from contentscan.content_paths.defaults import FIND_CHANGED_FILES_SPAN
from contentscan.content_paths.expansion import expand_specs
from contentscan.content_paths.instrumentation import Instrumentation, NullInstrumentation
from contentscan.content_paths.resolver import parse_candidate_files
from contentscan.content_paths.types import (
    ChangedContent,
    ContentConfig,
    ContentPathSpec,
    FileWatermarks,
    RawContentEntry,
    ResolutionContext,
)


def resolve_changed_files(
    candidate_files: Sequence[ContentPathSpec],
    watermarks: FileWatermarks,
    instrumentation: Instrumentation | None = None,
    cwd: str | Path | None = None,
) -> set[str]:
    """
    Absolute paths of matched files modified since they were last reported.

    Advances the watermark of every returned file. Each spec is globbed beneath its
    literal base. Exclusion specs are passed to the expansion as-is, anchored at
    `cwd`. Not safe to call concurrently with the same `watermarks`.
    """
    instrumentation = instrumentation or NullInstrumentation()

    changed_files: set[str] = set()
    with instrumentation.span(FIND_CHANGED_FILES_SPAN):
        for file_path in expand_specs(candidate_files, cwd=cwd):
            modified = os.stat(file_path).st_mtime_ns
            if modified > watermarks.get(file_path):
                changed_files.add(file_path)
                watermarks.advance(file_path, modified)
    return changed_files


def resolve_changed_content(
    raw_entries: Iterable[RawContentEntry],
    candidate_files: Sequence[ContentPathSpec],
    watermarks: FileWatermarks,
    instrumentation: Instrumentation | None = None,
    cwd: str | Path | None = None,
) -> list[ChangedContent]:
    """
    All raw entries (always, in declaration order), followed by the text of every
    changed file. Bytes that aren't valid UTF-8 are replaced, not fatal. A file that
    disappears before it can be read raises `OSError`.
    """
    changed_content = [ChangedContent(entry.content, entry.extension) for entry in raw_entries]

    for changed_file in resolve_changed_files(candidate_files, watermarks, instrumentation, cwd):
        path = Path(changed_file)
        # Non-UTF-8 bytes decode to U+FFFD.
        content = path.read_text(encoding="utf-8", errors="replace")
        changed_content.append(ChangedContent(content, path.suffix[1:]))

    return changed_content


class ChangeTracker:
    """
    Scanning session over one content config.

    Owns the resolved candidate specs and, unless one is injected, the watermark
    table. Reuse the same instance across scans so that only changed files are
    reported.
    """

    def __init__(
        self,
        config: ContentConfig,
        context: ResolutionContext | None = None,
        watermarks: FileWatermarks | None = None,
        instrumentation: Instrumentation | None = None,
    ) -> None:
        self.config: ContentConfig = config
        self.context: ResolutionContext = context or ResolutionContext()
        self.watermarks: FileWatermarks = watermarks if watermarks is not None else FileWatermarks()
        self.instrumentation: Instrumentation = instrumentation or NullInstrumentation()
        self._candidates: list[ContentPathSpec] | None = None

    @classmethod
    def from_config_file(
        cls,
        config_path: Path,
        watermarks: FileWatermarks | None = None,
        instrumentation: Instrumentation | None = None,
    ) -> ChangeTracker:
        """Load `config_path` and resolve against its directory if it sets `relative`."""
        # Deferred: `contentscan.config` imports this package.
        from contentscan.config import load_config

        config = load_config(config_path)
        context = ResolutionContext.for_config(config_path, config.relative)
        return cls(config, context, watermarks, instrumentation)

    @property
    def candidates(self) -> list[ContentPathSpec]:
        """Resolved specs, computed once. These are what a file watcher should observe."""
        if self._candidates is None:
            self._candidates = parse_candidate_files(self.config, self.context)
        return self._candidates

    def changed_files(self) -> set[str]:
        return resolve_changed_files(
            self.candidates,
            self.watermarks,
            self.instrumentation,
            cwd=self.context.resolution_root(),
        )

    def changed_content(self) -> list[ChangedContent]:
        return resolve_changed_content(
            self.config.raw,
            self.candidates,
            self.watermarks,
            self.instrumentation,
            cwd=self.context.resolution_root(),
        )

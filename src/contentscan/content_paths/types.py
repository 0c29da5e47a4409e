"""Data types for content path resolution and change tracking."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from contentscan.content_paths.defaults import DEFAULT_RAW_EXTENSION, EXCLUSION_MARKER

# Logical watermark of a file that has never been observed.
UNSEEN: float = float("-inf")


@dataclass(frozen=True)
class ContentPathSpec:
    """
    One content source split into a watchable `base` and an optional glob `pattern`.

    `original` is the declared path in forward-slash form. `pattern=None` means
    `base` is itself the literal target.
    """

    original: str
    base: str
    pattern: str | None = None

    @property
    def is_exclusion(self) -> bool:
        return self.original.startswith(EXCLUSION_MARKER)

    @property
    def query(self) -> str:
        """The filesystem query for this spec: `base/pattern`, or just `base`."""
        if self.pattern:
            return f"{self.base}/{self.pattern}"
        return self.base


@dataclass(frozen=True)
class RawContentEntry:
    """Inline content supplied by configuration rather than read from disk."""

    content: str
    extension: str = DEFAULT_RAW_EXTENSION


@dataclass(frozen=True)
class ChangedContent:
    """A piece of content handed to token extraction."""

    content: str
    extension: str


@dataclass
class ContentConfig:
    """
    Declared content sources.

    `files` holds path and glob strings (exclusions prefixed with `!`), `raw` holds
    inline entries in declaration order. `relative=True` asks for paths to be
    resolved against the config file's directory instead of the working directory.
    """

    files: list[str] = field(default_factory=list)
    raw: list[RawContentEntry] = field(default_factory=list)
    relative: bool = False


class ResolutionMode(str, Enum):
    """Where relative content paths are anchored."""

    config_dir = "config_dir"
    working_dir = "working_dir"


@dataclass(frozen=True)
class ResolutionContext:
    """
    Decides, once per pipeline, the root that relative content paths resolve against.
    """

    config_path: Path | None = None
    mode: ResolutionMode = ResolutionMode.working_dir

    @classmethod
    def for_config(cls, config_path: Path | None, relative: bool) -> ResolutionContext:
        mode = ResolutionMode.config_dir if relative else ResolutionMode.working_dir
        return cls(config_path=config_path, mode=mode)

    def resolution_root(self) -> Path:
        """
        The config file's directory when the path is known and `mode` is
        `config_dir`, otherwise the current working directory.
        """
        if self.config_path is not None and self.mode is ResolutionMode.config_dir:
            return Path(self.config_path).absolute().parent
        return Path.cwd()


class FileWatermarks:
    """
    Per-file modification watermarks (`st_mtime_ns`) for one scanning session.

    The caller creates one table per session and passes it into every scan, which
    mutates it in place. Only one scan may use a table at a time; nothing here
    locks. Entries are never removed, so deleted files are not detected.
    """

    def __init__(self, entries: Mapping[str, int] | None = None) -> None:
        self._entries: dict[str, int] = dict(entries or {})

    def get(self, path: str) -> int | float:
        """Last observed mtime of `path`, or negative infinity if never seen."""
        return self._entries.get(path, UNSEEN)

    def advance(self, path: str, mtime_ns: int) -> None:
        self._entries[path] = mtime_ns

    def as_dict(self) -> dict[str, int]:
        return dict(self._entries)

    def __contains__(self, path: object) -> bool:
        return path in self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"FileWatermarks({len(self._entries)} files)"

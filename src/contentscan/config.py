"""
TOML-based loading of content source declarations.

Searches for `.contentscan.toml`, `contentscan.toml`, or `pyproject.toml
[tool.contentscan]` walking up from a start directory. Content sources live under
a `content` key, either as a plain list or as a table with `files` and `relative`:

    [content]
    relative = true
    files = ["src/**/*.html", "!src/vendor/**", { raw = "<b>", extension = "html" }]
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any, cast

from contentscan.content_paths.defaults import DEFAULT_RAW_EXTENSION
from contentscan.content_paths.types import ContentConfig, RawContentEntry

if sys.version_info >= (3, 11):
    import tomllib  # pyright: ignore[reportUnreachable]
else:
    import tomli as tomllib  # type: ignore[no-redef]  # pyright: ignore[reportUnreachable]


class ContentConfigError(ValueError):
    """A content declaration has the wrong shape."""


# Config file search order (first match wins within each directory level)
_CONFIG_FILENAMES = [".contentscan.toml", "contentscan.toml", "pyproject.toml"]

_TOOL_NAME = "contentscan"


def find_config_file(start_dir: Path) -> Path | None:
    """
    Walk up from `start_dir` looking for a config file. Returns the first
    found, or `None`. Search order per directory: `.contentscan.toml` >
    `contentscan.toml` > `pyproject.toml` (only if it has `[tool.contentscan]`).
    """
    current = start_dir.resolve()
    while True:
        for filename in _CONFIG_FILENAMES:
            candidate = current / filename
            if candidate.is_file():
                if filename == "pyproject.toml":
                    if _pyproject_has_tool_section(candidate):
                        return candidate
                else:
                    return candidate
        parent = current.parent
        if parent == current:
            break
        current = parent
    return None


def _pyproject_has_tool_section(path: Path) -> bool:
    try:
        data = tomllib.loads(path.read_text())
        return _TOOL_NAME in data.get("tool", {})
    except (tomllib.TOMLDecodeError, OSError):
        return False


def load_config(config_path: Path) -> ContentConfig:
    """
    Load a `ContentConfig` from a TOML file. For `pyproject.toml`, only the
    `[tool.contentscan]` table is read. TOML decode errors propagate.
    """
    data = tomllib.loads(config_path.read_text())

    if config_path.name == "pyproject.toml":
        data = data.get("tool", {}).get(_TOOL_NAME, {})

    return parse_content_config(data)


def parse_content_config(data: dict[str, Any]) -> ContentConfig:
    """Build a `ContentConfig` from parsed TOML, validating each entry."""
    content = data.get("content", [])
    relative: Any = False

    if isinstance(content, dict):
        items = cast(dict[str, Any], content).items()
        table = {key.replace("-", "_"): value for key, value in items}
        entries = table.get("files", [])
        relative = table.get("relative", False)
    else:
        entries = content

    if not isinstance(entries, list):
        raise ContentConfigError(f"Content files must be a list, got {type(entries).__name__}")
    if not isinstance(relative, bool):
        raise ContentConfigError(f"`relative` must be a boolean, got {relative!r}")

    config = ContentConfig(relative=relative)
    for entry in cast(list[Any], entries):
        if isinstance(entry, str):
            config.files.append(entry)
        elif isinstance(entry, dict):
            config.raw.append(_parse_raw_entry(cast(dict[str, Any], entry)))
        else:
            raise ContentConfigError(f"Invalid content entry: {entry!r}")
    return config


def _parse_raw_entry(entry: dict[str, Any]) -> RawContentEntry:
    raw = entry.get("raw")
    if not isinstance(raw, str):
        raise ContentConfigError(f"Raw content entry needs a string `raw`: {entry!r}")
    extension = entry.get("extension", DEFAULT_RAW_EXTENSION)
    if not isinstance(extension, str):
        raise ContentConfigError(f"Raw content `extension` must be a string: {entry!r}")
    return RawContentEntry(content=raw, extension=extension)

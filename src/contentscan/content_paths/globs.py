"""
Glob classification and base/pattern splitting.

A content path like `./src/**/*.{html,js}` is split into a literal base
(`./src`) that a file watcher can observe and a glob suffix (`**/*.{html,js}`)
that is matched beneath it.
"""

from __future__ import annotations

import re

from contentscan.content_paths.defaults import EXCLUSION_MARKER

# A path is a glob if it has wildcards, a closed character class, a brace group
# with alternatives or a range, or an `@(...)` / `?(...)` group.
_GLOB_RE = re.compile(
    r"""
    [*?]
    | \[[^\]]+\]
    | \{[^{}]*(?:,|\.\.)[^{}]*\}
    | @\(
    """,
    re.VERBOSE,
)

# Characters that make a single path segment unsafe to use as part of a base.
_SEGMENT_MAGIC_RE = re.compile(r"[*?\[{]|@\(")

_SEPARATORS_RE = re.compile(r"[\\/]+")

_RANGE_RE = re.compile(r"^(-?\d+)\.\.(-?\d+)$")

# Numeric brace ranges with this many values or more are left literal.
_MAX_RANGE_SIZE = 1000

# `@(a|b)` (exactly one) and `?(a|b)` (zero or one) groups without nesting.
_EXTGLOB_RE = re.compile(r"([@?])\(([^()]*)\)")


def normalize_path(path: str) -> str:
    """
    Convert separators to `/`, collapse repeated separators and drop a trailing one.
    """
    normalized = _SEPARATORS_RE.sub("/", path)
    if len(normalized) > 1 and normalized.endswith("/"):
        normalized = normalized[:-1]
    return normalized


def is_glob(path: str) -> bool:
    return _GLOB_RE.search(path) is not None


def strip_exclusion_marker(path: str) -> str:
    if path.startswith(EXCLUSION_MARKER):
        return path[len(EXCLUSION_MARKER) :]
    return path


def parse_glob(path: str) -> tuple[str, str | None]:
    """
    Split `path` into `(base, pattern)`.

    Literal paths come back as `(path, None)`. Otherwise `base` is the longest run
    of leading segments free of glob syntax (`"."` if there is none, `"/"` for a
    bare root) and `pattern` is the rest.
    """
    if not is_glob(path):
        return path, None

    segments = path.split("/")
    split_at = 0
    for i, segment in enumerate(segments):
        if _SEGMENT_MAGIC_RE.search(segment):
            split_at = i
            break

    prefix = segments[:split_at]
    if not prefix:
        base = "."
    elif prefix == [""]:
        base = "/"
    else:
        base = "/".join(prefix)

    pattern = "/".join(segments[split_at:])
    if pattern.startswith("./"):
        pattern = pattern[2:]
    return base, pattern.lstrip("/")


def expand_braces(pattern: str) -> list[str]:
    """
    Expand brace groups (`{a,b}`, `{1..3}`, nested groups included) into a list of
    brace-free patterns, in order and without duplicates. Groups with no
    alternatives, ranges of 1000 or more values and unbalanced braces are left
    as they are.
    """
    group = _find_brace_group(pattern)
    if group is None:
        return [pattern]

    start, end, alternatives = group
    prefix, suffix = pattern[:start], pattern[end:]
    expanded: dict[str, None] = {}
    for alternative in alternatives:
        for result in expand_braces(prefix + alternative + suffix):
            expanded[result] = None
    return list(expanded)


def _find_brace_group(pattern: str) -> tuple[int, int, list[str]] | None:
    """Locate the first innermost brace group that actually has alternatives."""
    for match in re.finditer(r"\{([^{}]*)\}", pattern):
        body = match.group(1)
        range_match = _RANGE_RE.match(body)
        if range_match:
            first, last = int(range_match.group(1)), int(range_match.group(2))
            if abs(last - first) + 1 >= _MAX_RANGE_SIZE:
                continue
            step = 1 if last >= first else -1
            alternatives = [str(n) for n in range(first, last + step, step)]
            return match.start(), match.end(), alternatives
        if "," in body:
            return match.start(), match.end(), body.split(",")
    return None


def translate_extglobs(pattern: str) -> str:
    """
    Rewrite `@(a|b)` and `?(a|b)` groups as the equivalent brace groups.

    Other extglob forms (`*(`, `+(`, `!(`) have no brace equivalent and are
    not supported.
    """

    def to_braces(match: re.Match[str]) -> str:
        kind, body = match.group(1), match.group(2)
        alternatives = body.split("|")
        if kind == "?":
            alternatives.insert(0, "")
        if len(alternatives) == 1:
            return alternatives[0]
        return "{" + ",".join(alternatives) + "}"

    return _EXTGLOB_RE.sub(to_braces, pattern)


def expand_alternatives(pattern: str) -> list[str]:
    """Expand extglob alternatives and brace groups into plain glob patterns."""
    return expand_braces(translate_extglobs(pattern))

"""Tests for glob classification and base/pattern splitting."""

from __future__ import annotations

import glob
from pathlib import Path

import pytest

from contentscan.content_paths.globs import (
    expand_alternatives,
    expand_braces,
    is_glob,
    normalize_path,
    parse_glob,
    translate_extglobs,
)


def test_normalize_path_backslashes_and_trailing_separator():
    assert normalize_path("src\\components\\") == "src/components"
    assert normalize_path("src//pages///index.html") == "src/pages/index.html"
    assert normalize_path("/") == "/"


@pytest.mark.parametrize(
    "path",
    [
        "src/index.html",
        "/abs/path/to/file.js",
        "./relative",
        "weird(name)/x.txt",
        "a[b",
        "src/+(a|b).js",
        "src/!(a).js",
    ],
)
def test_is_glob_false_for_literals(path: str):
    assert not is_glob(path)


@pytest.mark.parametrize(
    "path",
    [
        "src/*.html",
        "src/**/file.js",
        "src/?.css",
        "src/[abc].md",
        "src/*.{html,js}",
        "src/page{1..3}.html",
        "src/@(a|b).js",
    ],
)
def test_is_glob_true_for_patterns(path: str):
    assert is_glob(path)


def test_braces_without_alternatives_are_literal():
    assert not is_glob("src/{name}.html")


def test_parse_literal_absolute_path():
    assert parse_glob("/abs/path/to/index.html") == ("/abs/path/to/index.html", None)


def test_parse_literal_relative_path():
    assert parse_glob("./src/index.html") == ("./src/index.html", None)


@pytest.mark.parametrize(
    ("path", "base", "pattern"),
    [
        ("src/**/*.html", "src", "**/*.html"),
        ("./src/**/*.html", "./src", "**/*.html"),
        ("/abs/src/*.{js,ts}", "/abs/src", "*.{js,ts}"),
        ("*.html", ".", "*.html"),
        ("./*.html", ".", "*.html"),
        ("/*.html", "/", "*.html"),
        ("src/{a,b}/index.html", "src", "{a,b}/index.html"),
        ("{src,lib}/**/*.js", ".", "{src,lib}/**/*.js"),
        ("pages/[slug]/*.tsx", "pages", "[slug]/*.tsx"),
    ],
)
def test_parse_glob_splits_base_and_pattern(path: str, base: str, pattern: str):
    assert parse_glob(path) == (base, pattern)


def test_parse_glob_base_has_no_magic():
    base, pattern = parse_glob("a/b/c*/d/**/e.txt")
    assert base == "a/b"
    assert pattern == "c*/d/**/e.txt"
    assert not is_glob(base)


def test_split_matches_same_files_as_original(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    (tmp_path / "src" / "nested").mkdir(parents=True)
    (tmp_path / "src" / "a.html").write_text("a")
    (tmp_path / "src" / "nested" / "b.html").write_text("b")
    (tmp_path / "src" / "nested" / "c.js").write_text("c")
    monkeypatch.chdir(tmp_path)

    original = "src/**/*.html"
    base, pattern = parse_glob(original)
    assert sorted(glob.glob(f"{base}/{pattern}", recursive=True)) == sorted(
        glob.glob(original, recursive=True)
    )


def test_expand_braces_alternatives():
    assert expand_braces("src/*.{html,js}") == ["src/*.html", "src/*.js"]


def test_expand_braces_range():
    assert expand_braces("page{1..3}.md") == ["page1.md", "page2.md", "page3.md"]
    assert expand_braces("v{3..1}") == ["v3", "v2", "v1"]


def test_expand_braces_nested_and_multiple():
    assert expand_braces("{a,{b,c}}.txt") == ["a.txt", "b.txt", "c.txt"]
    assert expand_braces("{x,y}/{1,2}") == ["x/1", "x/2", "y/1", "y/2"]


def test_expand_braces_leaves_literal_braces():
    assert expand_braces("src/{name}.html") == ["src/{name}.html"]
    assert expand_braces("src/{a,b") == ["src/{a,b"]


def test_expand_braces_leaves_huge_ranges_literal():
    assert expand_braces("file{1..100000000}.txt") == ["file{1..100000000}.txt"]
    assert len(expand_braces("file{1..999}.txt")) == 999


def test_translate_extglobs():
    assert translate_extglobs("*.@(js|ts)") == "*.{js,ts}"
    assert translate_extglobs("@(a).js") == "a.js"
    assert translate_extglobs("index?(.min).js") == "index{,.min}.js"
    assert translate_extglobs("*.+(js|ts)") == "*.+(js|ts)"


def test_expand_alternatives_mixes_extglobs_and_braces():
    assert expand_alternatives("{src,lib}/*.@(js|ts)") == [
        "src/*.js",
        "src/*.ts",
        "lib/*.js",
        "lib/*.ts",
    ]

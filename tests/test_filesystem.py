"""Tests for the local filesystem adapter (infra/filesystem.py)."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

from bltc.core.models import SourceFile
from bltc.exceptions import OutputRootError
from bltc.infra.filesystem import LocalFileSystem, parse_multi_path


class TestParseMultiPath:
    def test_semicolon_separated(self) -> None:
        assert parse_multi_path("a;b") == [Path("a"), Path("b")]

    def test_os_path_separator(self) -> None:
        assert parse_multi_path(f"a{os.pathsep}b") == [Path("a"), Path("b")]

    def test_empty_parts_skipped(self) -> None:
        assert parse_multi_path(";a;;") == [Path("a")]


class TestGlob:
    def test_literal_name(self, tmp_path: Path) -> None:
        (tmp_path / "foo.blt").write_text("x", encoding="utf-8")
        assert LocalFileSystem().glob("foo.blt", [tmp_path]) == [
            SourceFile(tmp_path / "foo.blt", Path("foo.blt")),
        ]

    def test_no_match(self, tmp_path: Path) -> None:
        assert LocalFileSystem().glob("*.blt", [tmp_path]) == []

    def test_recursive_pattern_keeps_relative_path(self, tmp_path: Path) -> None:
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        (nested / "deep.blt").write_text("x", encoding="utf-8")

        matches = LocalFileSystem().glob("**/*.blt", [tmp_path])

        assert matches == [SourceFile(nested / "deep.blt", Path("a/b/deep.blt"))]

    def test_directories_excluded(self, tmp_path: Path) -> None:
        (tmp_path / "sub.blt").mkdir()
        (tmp_path / "file.blt").write_text("x", encoding="utf-8")
        matches = LocalFileSystem().glob("*.blt", [tmp_path])
        assert [m.relative_path for m in matches] == [Path("file.blt")]

    def test_each_search_path_searched(self, tmp_path: Path) -> None:
        one, two = tmp_path / "one", tmp_path / "two"
        one.mkdir()
        two.mkdir()
        (one / "x.blt").write_text("1", encoding="utf-8")
        (two / "x.blt").write_text("2", encoding="utf-8")

        matches = LocalFileSystem().glob("x.blt", [one, two])

        assert [m.path for m in matches] == [one / "x.blt", two / "x.blt"]

    def test_absolute_pattern_expanded_once(self, tmp_path: Path) -> None:
        (tmp_path / "a.blt").write_text("x", encoding="utf-8")
        pattern = str(tmp_path / "*.blt")

        matches = LocalFileSystem().glob(pattern, [tmp_path, tmp_path / "other"])

        assert matches == [SourceFile(tmp_path / "a.blt", tmp_path / "a.blt")]


class TestReadText:
    def test_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "u.blt"
        path.write_text("héllo", encoding="utf-8")
        assert LocalFileSystem().read_text(path) == "héllo"


class TestPrepareOutputRoot:
    def test_creates_missing_directory(self, tmp_path: Path) -> None:
        target = tmp_path / "out" / "nested"
        root = LocalFileSystem().prepare_output_root(target)
        assert root == target
        assert target.is_dir()

    def test_relative_made_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        root = LocalFileSystem().prepare_output_root(Path("out"))
        assert root.is_absolute()
        assert root == tmp_path / "out"

    def test_existing_file_rejected(self, tmp_path: Path) -> None:
        target = tmp_path / "file"
        target.write_text("", encoding="utf-8")

        with pytest.raises(OutputRootError, match="not a directory") as exc_info:
            LocalFileSystem().prepare_output_root(target)
        assert exc_info.value.path == str(target)

    def test_creation_failure_wrapped(self, tmp_path: Path) -> None:
        blocker = tmp_path / "blocker"
        blocker.write_text("", encoding="utf-8")

        with pytest.raises(OutputRootError) as exc_info:
            LocalFileSystem().prepare_output_root(blocker / "child")
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        assert LocalFileSystem().cwd() == tmp_path

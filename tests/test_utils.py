"""Tests for sizing, removal and formatting helpers."""

from __future__ import annotations

import os

import pytest

from devsweep.utils import bytes_to_human, home_dir, remove_path, size_of


def _deny_scandir(monkeypatch, denied):
    """Make os.scandir raise PermissionError for one directory."""
    original = os.scandir

    def scandir(path="."):
        if os.fspath(path) == os.fspath(denied):
            raise PermissionError(13, "Permission denied", os.fspath(path))
        return original(path)

    monkeypatch.setattr(os, "scandir", scandir)


class TestSizeOf:
    def test_file(self, tmp_path, make_file):
        path = make_file(tmp_path / "a.bin", 1234)
        assert size_of(path, False) == 1234

    def test_missing_file_is_zero(self, tmp_path):
        assert size_of(tmp_path / "missing", False) == 0

    def test_missing_directory_is_zero(self, tmp_path):
        assert size_of(tmp_path / "missing", True) == 0

    def test_directory_is_sum_of_children(self, tmp_path, make_file):
        make_file(tmp_path / "d" / "one", 100)
        make_file(tmp_path / "d" / "sub" / "two", 200)
        make_file(tmp_path / "d" / "sub" / "deeper" / "three", 300)
        d = tmp_path / "d"
        children = sum(size_of(p, p.is_dir()) for p in d.iterdir())
        assert size_of(d, True) == 600 == children

    def test_depth_is_unbounded(self, tmp_path, make_file):
        deep = tmp_path / "d"
        for i in range(30):
            deep = deep / f"level{i}"
        make_file(deep / "leaf", 42)
        assert size_of(tmp_path / "d", True) == 42

    def test_unreadable_child_contributes_zero(self, tmp_path, make_file, monkeypatch):
        make_file(tmp_path / "d" / "ok" / "file", 500)
        make_file(tmp_path / "d" / "locked" / "file", 700)
        make_file(tmp_path / "d" / "top", 11)
        _deny_scandir(monkeypatch, tmp_path / "d" / "locked")
        assert size_of(tmp_path / "d", True) == 511
        assert size_of(tmp_path / "d" / "ok", True) == 500

    def test_symlink_cycle_terminates(self, tmp_path, make_file):
        d = tmp_path / "d"
        make_file(d / "file", 10)
        loop = d / "loop"
        loop.symlink_to(d, target_is_directory=True)
        assert size_of(d, True) == 10 + os.lstat(loop).st_size

    def test_broken_symlink_is_a_leaf(self, tmp_path):
        d = tmp_path / "d"
        d.mkdir()
        link = d / "dangling"
        link.symlink_to(tmp_path / "nowhere")
        assert size_of(d, True) == os.lstat(link).st_size


class TestRemovePath:
    def test_removes_directory_tree(self, tmp_path, make_file):
        make_file(tmp_path / "d" / "sub" / "f", 5)
        remove_path(tmp_path / "d")
        assert not (tmp_path / "d").exists()

    def test_removes_file(self, tmp_path, make_file):
        path = make_file(tmp_path / "f", 5)
        remove_path(path)
        assert not path.exists()

    def test_missing_target_is_not_an_error(self, tmp_path):
        remove_path(tmp_path / "gone")

    def test_symlink_to_directory_removes_link_only(self, tmp_path, make_file):
        make_file(tmp_path / "real" / "keep", 5)
        link = tmp_path / "link"
        link.symlink_to(tmp_path / "real", target_is_directory=True)
        remove_path(link)
        assert not os.path.lexists(link)
        assert (tmp_path / "real" / "keep").exists()


class TestHomeDir:
    def test_from_home(self, monkeypatch, tmp_path):
        monkeypatch.setenv("HOME", str(tmp_path))
        assert home_dir() == tmp_path

    def test_falls_back_to_userprofile(self, monkeypatch, tmp_path):
        monkeypatch.delenv("HOME", raising=False)
        monkeypatch.setenv("USERPROFILE", str(tmp_path))
        assert home_dir() == tmp_path

    def test_missing(self, monkeypatch):
        monkeypatch.delenv("HOME", raising=False)
        monkeypatch.delenv("USERPROFILE", raising=False)
        assert home_dir() is None


@pytest.mark.parametrize(
    ("size", "expected"),
    [
        (0, "0 B"),
        (512, "512 B"),
        (1536, "1.5 KB"),
        (150 * 1024 * 1024, "150.0 MB"),
        (3 * 1024**3, "3.0 GB"),
    ],
)
def test_bytes_to_human(size, expected):
    assert bytes_to_human(size) == expected

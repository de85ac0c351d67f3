"""Tests for scratch and output file helpers."""

import pytest

from mdeps.file_utils import check_writable, replace_on_success, temporary_path


def test_replace_on_success_swaps_in_new_content(tmp_path):
    target = tmp_path / "graph.svg"
    target.write_bytes(b"old")

    with replace_on_success(target) as f:
        f.write(b"new")

    assert target.read_bytes() == b"new"
    assert [p.name for p in tmp_path.iterdir()] == ["graph.svg"]


def test_replace_on_success_keeps_original_when_writing_fails(tmp_path):
    target = tmp_path / "graph.svg"
    target.write_bytes(b"old")

    with pytest.raises(RuntimeError):
        with replace_on_success(target) as f:
            f.write(b"half")
            raise RuntimeError("render failed")

    assert target.read_bytes() == b"old"
    assert [p.name for p in tmp_path.iterdir()] == ["graph.svg"]


def test_replace_on_success_creates_missing_file(tmp_path):
    target = tmp_path / "graph.png"

    with replace_on_success(target) as f:
        f.write(b"png")

    assert target.read_bytes() == b"png"


def test_check_writable(tmp_path):
    check_writable(tmp_path / "new.svg")

    with pytest.raises(FileNotFoundError):
        check_writable(tmp_path / "missing" / "new.svg")
    with pytest.raises(IsADirectoryError):
        check_writable(tmp_path)


def test_temporary_path_is_removed():
    with temporary_path(".dot") as path:
        path.write_text("digraph {}", encoding="utf-8")

    assert not path.exists()

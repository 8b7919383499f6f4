"""目录扫描的单元测试：深度限制、符号链接、权限错误与致命 IO 错误。"""

import errno
import os

import pytest

from app.packages.crucible.core.enums import ScanErrorKind
from app.packages.crucible.core.exceptions import ScanError
from app.packages.crucible.services.directory_scanner import directory_scanner


def _paths(entries) -> set[str]:
    return {entry.path for entry in entries}


def test_depth_zero_returns_only_root(project):
    entries = directory_scanner.scan(str(project), 0)
    assert _paths(entries) == {str(project)}
    assert entries[0].is_directory


def test_depth_one_returns_direct_children(project):
    entries = directory_scanner.scan(str(project), 1)
    assert _paths(entries) == {
        str(project),
        str(project / "a.txt"),
        str(project / "b.txt"),
        str(project / "docs"),
        str(project / "src"),
    }


def test_full_depth_reaches_leaves(project):
    entries = directory_scanner.scan(str(project), 4)
    assert str(project / "src" / "lib" / "deep" / "leaf.txt") in _paths(entries)
    assert len(entries) == 11

    shallower = directory_scanner.scan(str(project), 3)
    assert str(project / "src" / "lib" / "deep" / "leaf.txt") not in _paths(shallower)
    assert str(project / "src" / "lib" / "deep") in _paths(shallower)


def test_entry_metadata(project):
    entries = {entry.path: entry for entry in directory_scanner.scan(str(project), 1)}
    a_txt = entries[str(project / "a.txt")]

    assert a_txt.is_directory is False
    assert a_txt.is_symlink is False
    assert a_txt.size == len("alpha")
    assert a_txt.modified is not None
    assert a_txt.hierarchy[-2:] == ["project", "a.txt"]
    assert a_txt.extra_tags == []
    assert entries[str(project / "src")].is_directory is True


@pytest.mark.skipif(os.name == "nt", reason="symlink creation needs privileges on Windows")
def test_symlinks_are_recorded_but_not_followed(tmp_path):
    root = tmp_path / "root"
    (root / "real").mkdir(parents=True)
    (root / "real" / "inner.txt").write_text("x", encoding="utf-8")
    (root / "link").symlink_to(root / "real", target_is_directory=True)
    root = root.resolve()

    entries = {entry.path: entry for entry in directory_scanner.scan(str(root), 3)}

    link = entries[str(root / "link")]
    assert link.is_symlink is True
    assert link.is_directory is False
    assert str(root / "real" / "inner.txt") in entries
    assert not any(path.startswith(str(root / "link") + os.sep) for path in entries)


def test_permission_denied_directory_is_skipped(project, monkeypatch):
    real_scandir = os.scandir
    denied = str(project / "src")

    def fake_scandir(path):
        if os.fspath(path) == denied:
            raise PermissionError(errno.EACCES, "Permission denied", denied)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    paths = _paths(directory_scanner.scan(str(project), 3))

    assert denied in paths
    assert str(project / "src" / "main.py") not in paths
    assert str(project / "docs" / "readme.md") in paths


def test_permission_denied_root_yields_no_entries(project, monkeypatch):
    real_lstat = os.lstat

    def fake_lstat(path, *args, **kwargs):
        if os.fspath(path) == str(project):
            raise PermissionError(errno.EACCES, "Permission denied", str(project))
        return real_lstat(path, *args, **kwargs)

    monkeypatch.setattr(os, "lstat", fake_lstat)

    assert directory_scanner.scan(str(project), 2) == []


def test_other_io_errors_abort_the_scan(project, monkeypatch):
    real_scandir = os.scandir
    broken = str(project / "docs")

    def fake_scandir(path):
        if os.fspath(path) == broken:
            raise OSError(errno.EIO, "Input/output error", broken)
        return real_scandir(path)

    monkeypatch.setattr(os, "scandir", fake_scandir)

    with pytest.raises(ScanError) as exc_info:
        directory_scanner.scan(str(project), 2)
    assert exc_info.value.kind == ScanErrorKind.IO
    assert broken in exc_info.value.message


def test_missing_root_is_an_io_error(tmp_path):
    with pytest.raises(ScanError) as exc_info:
        directory_scanner.scan(str(tmp_path / "missing"), 1)
    assert exc_info.value.kind == ScanErrorKind.IO


def test_negative_depth_is_rejected(project):
    with pytest.raises(ScanError) as exc_info:
        directory_scanner.scan(str(project), -1)
    assert exc_info.value.kind == ScanErrorKind.IO

"""路径工具的单元测试（POSIX 路径语义）。"""

import os

import pytest

from app.packages.crucible.utils.path_utils import (
    descendant_prefix,
    display_name,
    escape_like,
    normalize_path,
    parent_key,
    path_depth,
    path_hierarchy,
    strict_ancestors,
)

pytestmark = pytest.mark.skipif(os.name == "nt", reason="POSIX path semantics")


def test_depth_counts_normal_segments_only():
    assert path_depth("/") == 0
    assert path_depth("/root") == 1
    assert path_depth("/root/project") == 2
    assert path_depth("/root/./project") == 2
    assert path_depth("relative/dir") == 2


def test_depth_counts_parent_segments():
    assert path_depth("/root/../project") == 3


def test_hierarchy_keeps_root_marker_and_components():
    assert path_hierarchy("/") == ["/"]
    assert path_hierarchy("/root/project") == ["/", "root", "project"]
    assert path_hierarchy("/a/../b") == ["/", "a", "..", "b"]
    assert path_hierarchy("a/./b") == ["a", "b"]


def test_normalize_resolves_symlinks(tmp_path):
    target = tmp_path / "target"
    target.mkdir()
    link = tmp_path / "link"
    link.symlink_to(target, target_is_directory=True)

    assert normalize_path(str(link)) == str(target.resolve())


def test_normalize_resolves_relative_segments(tmp_path):
    (tmp_path / "a").mkdir()
    assert normalize_path(f"{tmp_path}/a/../a/.") == str((tmp_path / "a").resolve())


def test_normalize_falls_back_to_given_path(tmp_path):
    missing = str(tmp_path / "does-not-exist" / "file.txt")
    assert normalize_path(missing) == missing


def test_parent_key():
    assert parent_key("/root/project") == "/root"
    assert parent_key("/root") == "/"
    assert parent_key("/") is None
    assert parent_key("file.txt") is None


def test_strict_ancestors_nearest_first():
    assert strict_ancestors("/root/project/src") == ["/root/project", "/root", "/"]
    assert strict_ancestors("/") == []


def test_descendant_prefix_does_not_double_separator():
    assert descendant_prefix("/") == "/"
    assert descendant_prefix("/root") == "/root/"


def test_escape_like_escapes_wildcards_and_escape_char():
    assert escape_like("a_b%c\\d") == "a\\_b\\%c\\\\d"
    assert escape_like("plain") == "plain"


def test_display_name():
    assert display_name("/root/project") == "project"
    assert display_name("/") == "/"

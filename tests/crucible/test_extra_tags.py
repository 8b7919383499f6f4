"""平台扩展标签的单元测试。"""

import pytest

from app.packages.crucible.services import extra_tags
from app.packages.crucible.services.extra_tags import (
    NativeIndexedTagProvider,
    NoExtraTagProvider,
    PathEquivalence,
    build_extra_tag_provider,
)
from app.packages.crucible.services.types import Entry


def _entries(*paths: str) -> list[Entry]:
    return [Entry(path=path, is_directory=False) for path in paths]


def test_none_provider_leaves_entries_untouched():
    entries = _entries("/r", "/r/a")
    NoExtraTagProvider().collect("/r", entries)
    assert [entry.extra_tags for entry in entries] == [[], []]


def test_path_equivalence_is_ascii_case_insensitive():
    equivalence = PathEquivalence("C:\\Users\\Demo")
    assert equivalence.equals("C:\\Users\\Demo")
    assert equivalence.equals("c:\\USERS\\demo")
    assert not equivalence.equals("C:\\Users\\Other")
    assert not equivalence.equals(None)


def test_path_equivalence_does_not_fold_non_ascii():
    equivalence = PathEquivalence("/data/Ärger")
    assert not equivalence.equals("/data/ärger")


def test_native_provider_only_reads_direct_children():
    """只有扫描根的直接子项会被读取索引关键字。"""
    seen: list[str] = []

    def reader(path):
        seen.append(path)
        return ["Indexed"]

    entries = _entries("/r", "/r/a.txt", "/r/sub", "/r/sub/deep.txt")
    NativeIndexedTagProvider(reader=reader).collect("/r", entries)

    assert sorted(seen) == ["/r/a.txt", "/r/sub"]
    by_path = {entry.path: entry for entry in entries}
    assert by_path["/r"].extra_tags == []
    assert by_path["/r/a.txt"].extra_tags == ["Indexed"]
    assert by_path["/r/sub/deep.txt"].extra_tags == []


def test_native_provider_merges_unique_trimmed_keywords():
    entries = _entries("/r/a")
    entries[0].extra_tags = ["keep"]

    NativeIndexedTagProvider(reader=lambda path: [" x ", "keep", "", "x", "y"]).collect("/r", entries)

    assert entries[0].extra_tags == ["keep", "x", "y"]


def test_native_provider_skips_unreadable_entries():
    def reader(path):
        if path.endswith("bad"):
            raise OSError("index unavailable")
        return ["ok"]

    entries = _entries("/r/bad", "/r/good")
    NativeIndexedTagProvider(reader=reader).collect("/r", entries)

    assert [entry.extra_tags for entry in entries] == [[], ["ok"]]


@pytest.mark.parametrize(
    ("choice", "system", "expected"),
    [
        ("none", "Windows", NoExtraTagProvider),
        ("native", "Linux", NativeIndexedTagProvider),
        ("auto", "Windows", NativeIndexedTagProvider),
        ("auto", "Linux", NoExtraTagProvider),
        ("bogus", "Darwin", NoExtraTagProvider),
        (" NATIVE ", "Linux", NativeIndexedTagProvider),
    ],
)
def test_build_extra_tag_provider(monkeypatch, choice, system, expected):
    monkeypatch.setattr(extra_tags.platform, "system", lambda: system)
    assert isinstance(build_extra_tag_provider(choice), expected)


def test_native_provider_default_reader_adds_nothing():
    """未注入读取器时，原生提供者不会凭空产生扩展标签。"""
    entries = _entries("/r/a", "/r/b")
    entries[1].extra_tags = ["kept"]

    NativeIndexedTagProvider().collect("/r", entries)

    assert [entry.extra_tags for entry in entries] == [[], ["kept"]]

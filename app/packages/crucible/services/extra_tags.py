"""平台扩展标签：按运行平台补充一组不透明的附加标签。

进程启动时根据配置选定一个实现，之后扫描流程只通过 ``ExtraTagProvider``
接口调用它。扩展标签写入 ``Entry.extra_tags``，不参与 own/inherited 的继承计算。
"""

from __future__ import annotations

import platform
import string
from typing import Callable, Iterable, Optional, Sequence

from app.packages.crucible.core.config import get_settings
from app.packages.crucible.core.enums import ExtraTagProviderEnum
from app.packages.crucible.core.logger import logger
from app.packages.crucible.services.types import Entry
from app.packages.crucible.utils.path_utils import parent_key

KeywordReader = Callable[[str], Iterable[str]]


class ExtraTagProvider:
    """扩展标签提供者接口。"""

    name = "base"

    def collect(self, root: str, entries: Sequence[Entry]) -> None:  # pragma: no cover - interface definition
        raise NotImplementedError


class NoExtraTagProvider(ExtraTagProvider):
    """非 Windows 平台不读取任何扩展标签。"""

    name = ExtraTagProviderEnum.NONE.value

    def collect(self, root: str, entries: Sequence[Entry]) -> None:
        return None


_ASCII_LOWER = str.maketrans(string.ascii_uppercase, string.ascii_lowercase)


class PathEquivalence:
    """Windows 路径等价判断：先比较原样路径，再做 ASCII 大小写无关比较。"""

    def __init__(self, path: str) -> None:
        self.canonical = path
        self.insensitive = path.translate(_ASCII_LOWER)

    def equals(self, other: Optional[str]) -> bool:
        if other is None:
            return False
        if other == self.canonical:
            return True
        return self.insensitive == other.translate(_ASCII_LOWER)


def _read_system_keywords(path: str) -> list[str]:
    """默认读取器不访问 Windows 属性系统，始终返回空列表。

    需要真实的 “关键字” 时，由调用方通过 ``NativeIndexedTagProvider(reader=...)``
    注入读取器；提供者只负责筛选直接子项并合并结果。
    """
    return []


class NativeIndexedTagProvider(ExtraTagProvider):
    """读取 Windows 索引的 “关键字” 作为扩展标签，只处理扫描根的直接子项。"""

    name = ExtraTagProviderEnum.NATIVE.value

    def __init__(self, reader: Optional[KeywordReader] = None) -> None:
        self._reader = reader or _read_system_keywords

    def collect(self, root: str, entries: Sequence[Entry]) -> None:
        root_equivalence = PathEquivalence(root)
        for entry in entries:
            if not root_equivalence.equals(parent_key(entry.path)):
                continue
            try:
                keywords = list(self._reader(entry.path))
            except OSError as exc:
                logger.warning("Failed to read indexed keywords for %s: %s", entry.path, exc)
                continue
            merged = list(entry.extra_tags)
            for keyword in keywords:
                keyword = (keyword or "").strip()
                if keyword and keyword not in merged:
                    merged.append(keyword)
            entry.extra_tags = merged


def build_extra_tag_provider(choice: Optional[str] = None) -> ExtraTagProvider:
    """根据配置选择实现：``auto`` 仅在 Windows 上启用原生索引标签。"""
    raw = (choice or get_settings().extra_tag_provider or "auto").strip().lower()
    try:
        selected = ExtraTagProviderEnum(raw)
    except ValueError:
        logger.warning("Unknown extra tag provider %r, falling back to auto", raw)
        selected = ExtraTagProviderEnum.AUTO

    if selected == ExtraTagProviderEnum.AUTO:
        selected = ExtraTagProviderEnum.NATIVE if platform.system() == "Windows" else ExtraTagProviderEnum.NONE

    if selected == ExtraTagProviderEnum.NATIVE:
        return NativeIndexedTagProvider()
    return NoExtraTagProvider()

"""扫描链路中的请求级数据结构：条目、树节点与标签快照。

这些对象只在单次请求内存在，响应生成后即丢弃，不做跨请求缓存。
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class Entry:
    """扫描得到的一个文件系统条目。

    ``own_tags`` / ``inherited_tags`` 由 TagResolver 计算后回填，
    ``extra_tags`` 由平台扩展标签提供者填充，与继承计算无关。
    """

    path: str
    is_directory: bool
    is_symlink: bool = False
    size: int = 0
    modified: Optional[str] = None
    hierarchy: list[str] = field(default_factory=list)
    extra_tags: list[str] = field(default_factory=list)
    own_tags: list[str] = field(default_factory=list)
    inherited_tags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class DirectoryNode:
    name: str
    info: Entry
    children: list["DirectoryNode"] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """递归渲染为响应结构（显式栈，避免深层目录触发递归上限）。"""
        rendered: dict[str, Any] = {"name": self.name, "info": self.info.to_dict(), "children": []}
        stack: list[tuple[DirectoryNode, dict[str, Any]]] = [(self, rendered)]
        while stack:
            node, out = stack.pop()
            for child in node.children:
                child_out = {"name": child.name, "info": child.info.to_dict(), "children": []}
                out["children"].append(child_out)
                stack.append((child, child_out))
        return rendered


@dataclass
class TagSnapshot:
    """一次范围查询的结果。

    ``direct_tags``：范围内每个路径直接拥有的标签（不含空集合）；
    ``root_ancestor_tags``：扫描根所有严格祖先的标签并集，祖先本身不会成为树节点。
    """

    direct_tags: dict[str, set[str]] = field(default_factory=dict)
    root_ancestor_tags: set[str] = field(default_factory=set)

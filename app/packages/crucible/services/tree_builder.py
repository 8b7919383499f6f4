"""树形组装：把扫描得到的扁平条目列表组装成以扫描根为根的有序树。"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, List, Sequence

from app.packages.crucible.core.enums import ScanErrorKind
from app.packages.crucible.core.exceptions import ScanError
from app.packages.crucible.services.types import DirectoryNode, Entry
from app.packages.crucible.utils.path_utils import display_name, parent_key, path_key


def _sort_key(node: DirectoryNode) -> tuple[bool, str]:
    # 目录在前，同类按名称的码点顺序
    return (not node.info.is_directory, node.name)


class TreeBuilder:
    def build(self, root: str, entries: Sequence[Entry]) -> DirectoryNode:
        """组装目录树；条目中找不到根路径时报 ``MissingRoot``，不返回残缺结果。

        每一层的子节点独立排序，因此结果与扫描顺序无关。
        """
        root_key = path_key(root)
        root_entry = next((entry for entry in entries if path_key(entry.path) == root_key), None)
        if root_entry is None:
            raise ScanError(ScanErrorKind.MISSING_ROOT, root)

        children_map: Dict[str, List[Entry]] = defaultdict(list)
        for entry in entries:
            parent = parent_key(entry.path)
            if parent is not None:
                children_map[parent].append(entry)

        root_node = DirectoryNode(name=display_name(root_entry.path), info=root_entry)
        stack: list[DirectoryNode] = [root_node]
        while stack:
            node = stack.pop()
            own_key = path_key(node.info.path)
            node.children = [
                DirectoryNode(name=display_name(child.path), info=child)
                for child in children_map.get(own_key, [])
                if path_key(child.path) != own_key
            ]
            node.children.sort(key=_sort_key)
            stack.extend(node.children)

        return root_node


tree_builder = TreeBuilder()

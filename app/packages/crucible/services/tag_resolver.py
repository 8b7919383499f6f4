"""标签继承计算：把标签快照合并到扫描条目上。

- own_tags：条目规范路径在 ``direct_tags`` 中的标签；
- inherited_tags：扫描根取 ``root_ancestor_tags``，其余节点取父节点的
  ``own ∪ inherited``；父节点不在扫描集合内时为空。

按深度排序保证父节点先于子节点处理，结果以路径为键记忆化，
不依赖递归调用栈，深层目录也不会触发递归上限。
"""

from __future__ import annotations

from typing import Dict, Sequence, Set

from app.packages.crucible.services.types import Entry, TagSnapshot
from app.packages.crucible.utils.path_utils import parent_key, path_depth, path_key


class TagResolver:
    def resolve(self, root: str, entries: Sequence[Entry], snapshot: TagSnapshot) -> Sequence[Entry]:
        root_key = path_key(root)

        own: Dict[str, Set[str]] = {}
        for entry in entries:
            key = path_key(entry.path)
            own[key] = set(snapshot.direct_tags.get(key, ()))

        inherited: Dict[str, Set[str]] = {}
        for entry in sorted(entries, key=lambda e: path_depth(e.path)):
            key = path_key(entry.path)
            if key in inherited:
                continue
            if key == root_key:
                inherited[key] = set(snapshot.root_ancestor_tags)
                continue
            parent = parent_key(key)
            if parent is not None and parent in inherited:
                inherited[key] = own[parent] | inherited[parent]
            else:
                inherited[key] = set()

        for entry in entries:
            key = path_key(entry.path)
            entry.own_tags = sorted(own[key])
            entry.inherited_tags = sorted(inherited[key])
        return entries


tag_resolver = TagResolver()

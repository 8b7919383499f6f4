"""目录扫描：从根路径出发按深度限制遍历，产出扁平的条目列表。

- 根路径自身为第 0 层，只要可读就一定包含在结果中；
- 权限不足的条目（或无法列出内容的目录）跳过并记录警告，遍历继续；
- 其他 IO 错误立即中止本次扫描，以 ``ScanError(Io)`` 返回给调用方；
- 符号链接只记录（``is_symlink=True``），从不跟随进入，避免环路。

返回列表的顺序没有约定，下游不应依赖它。
"""

from __future__ import annotations

import os
import stat
from typing import Optional

from app.packages.crucible.core.enums import ScanErrorKind
from app.packages.crucible.core.exceptions import ScanError
from app.packages.crucible.core.logger import logger
from app.packages.crucible.core.timezone import timestamp_to_rfc3339
from app.packages.crucible.services.types import Entry
from app.packages.crucible.utils.path_utils import path_hierarchy


def _build_entry(path: str, st: os.stat_result) -> Entry:
    return Entry(
        path=path,
        is_directory=stat.S_ISDIR(st.st_mode),
        is_symlink=stat.S_ISLNK(st.st_mode),
        size=int(st.st_size),
        modified=timestamp_to_rfc3339(getattr(st, "st_mtime", None)),
        hierarchy=path_hierarchy(path),
    )


class DirectoryScanner:
    def scan(self, root: str, max_depth: int) -> list[Entry]:
        if max_depth < 0:
            raise ScanError(ScanErrorKind.IO, f"scan depth must be non-negative, got {max_depth}")

        entries: list[Entry] = []
        root_entry = self._stat_root(root)
        if root_entry is None:
            return entries
        entries.append(root_entry)

        pending: list[tuple[str, int]] = []
        if root_entry.is_directory and max_depth > 0:
            pending.append((root_entry.path, 0))

        while pending:
            directory, depth = pending.pop()
            for entry in self._list_children(directory):
                entries.append(entry)
                if entry.is_directory and depth + 1 < max_depth:
                    pending.append((entry.path, depth + 1))

        return entries

    def _stat_root(self, root: str) -> Optional[Entry]:
        try:
            st = os.lstat(root)
        except PermissionError:
            logger.warning("Skipping entry due to permission denied: %s", root)
            return None
        except OSError as exc:
            raise ScanError(ScanErrorKind.IO, f"{root}: {exc}") from exc
        return _build_entry(root, st)

    def _list_children(self, directory: str) -> list[Entry]:
        children: list[Entry] = []
        try:
            with os.scandir(directory) as iterator:
                for dir_entry in iterator:
                    path = os.path.join(directory, dir_entry.name)
                    try:
                        st = dir_entry.stat(follow_symlinks=False)
                    except PermissionError:
                        logger.warning("Skipping entry due to permission denied: %s", path)
                        continue
                    except OSError as exc:
                        raise ScanError(ScanErrorKind.IO, f"{path}: {exc}") from exc
                    children.append(_build_entry(path, st))
        except PermissionError:
            logger.warning("Skipping entry due to permission denied: %s", directory)
            return children
        except OSError as exc:
            raise ScanError(ScanErrorKind.IO, f"{directory}: {exc}") from exc
        return children


directory_scanner = DirectoryScanner()

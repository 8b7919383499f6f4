"""扫描编排：文件系统遍历 -> 组装目录树 -> 取标签快照 -> 计算继承 -> 扩展标签。

只有“取标签快照”这一步持有共享存储锁，遍历文件系统期间不占用连接。
任何一步失败都整体失败，不返回残缺的树。
"""

from __future__ import annotations

import os

from app.packages.crucible.core.constants import CURRENT_DIRECTORY_SCAN_DEPTH
from app.packages.crucible.core.enums import ScanErrorKind
from app.packages.crucible.core.exceptions import ScanError
from app.packages.crucible.core.logger import logger
from app.packages.crucible.db.session import StoreContext
from app.packages.crucible.services.directory_scanner import directory_scanner
from app.packages.crucible.services.extra_tags import ExtraTagProvider, NoExtraTagProvider
from app.packages.crucible.services.tag_resolver import tag_resolver
from app.packages.crucible.services.tag_store import tag_store
from app.packages.crucible.services.tree_builder import tree_builder
from app.packages.crucible.services.types import DirectoryNode
from app.packages.crucible.utils.path_utils import normalize_path


class ScanService:
    def scan_directory(
        self,
        context: StoreContext,
        root: str,
        max_depth: int,
        *,
        provider: ExtraTagProvider | None = None,
    ) -> DirectoryNode:
        try:
            return self._perform_scan(context, root, max_depth, provider or NoExtraTagProvider())
        except ScanError as exc:
            logger.error("Failed to scan directory at %s: %s", root, exc.detail)
            raise

    def scan_current_directory(
        self,
        context: StoreContext,
        *,
        provider: ExtraTagProvider | None = None,
    ) -> DirectoryNode:
        try:
            current_dir = os.getcwd()
        except OSError as exc:
            logger.error("Failed to get current directory: %s", exc)
            raise ScanError(ScanErrorKind.CURRENT_DIR, str(exc)) from exc
        return self.scan_directory(context, current_dir, CURRENT_DIRECTORY_SCAN_DEPTH, provider=provider)

    def _perform_scan(
        self,
        context: StoreContext,
        root: str,
        max_depth: int,
        provider: ExtraTagProvider,
    ) -> DirectoryNode:
        normalized_root = normalize_path(root)
        entries = directory_scanner.scan(normalized_root, max_depth)
        tree = tree_builder.build(normalized_root, entries)
        snapshot = tag_store.query(context, normalized_root, max_depth)
        tag_resolver.resolve(normalized_root, entries, snapshot)
        provider.collect(normalized_root, entries)
        logger.info(
            "Scanned %s (depth=%s): %s entries, %s tagged path(s) in range",
            normalized_root,
            max_depth,
            len(entries),
            len(snapshot.direct_tags),
        )
        return tree


scan_service = ScanService()

"""标签存储服务：路径标签的写入与按范围查询。

所有数据库访问都必须经过调用方显式传入的 :class:`StoreContext`，
持锁时间只覆盖一次写事务或一次范围查询。
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, Set

from sqlalchemy.exc import SQLAlchemyError

from app.packages.crucible.core.enums import ScanErrorKind, TaggingErrorKind
from app.packages.crucible.core.exceptions import ScanError, TaggingError
from app.packages.crucible.core.logger import logger
from app.packages.crucible.core.timezone import now as tz_now
from app.packages.crucible.crud.path_tag import path_tag_crud
from app.packages.crucible.db.session import StoreContext, StoreLockTimeout, StoreUnavailable
from app.packages.crucible.services.types import TagSnapshot
from app.packages.crucible.utils.path_utils import normalize_path, path_depth, strict_ancestors


class TagStore:
    # ----------------------------
    # 写入
    # ----------------------------
    def assign(self, context: StoreContext, paths: Iterable[str], tag: str) -> int:
        """把 ``tag`` 赋给所有路径，返回写入的行数。

        校验在取锁之前完成；写入在同一事务内进行，要么全部成功，要么全部回滚。
        """
        normalized_tag = (tag or "").strip()
        if not normalized_tag:
            raise TaggingError(TaggingErrorKind.EMPTY_TAG)

        unique_paths: Set[str] = set()
        for raw in paths or []:
            if raw is None or not str(raw).strip():
                continue
            normalized = normalize_path(raw)
            logger.debug("Assigning tag to path: %s -> %s", raw, normalized)
            unique_paths.add(normalized)

        if not unique_paths:
            raise TaggingError(TaggingErrorKind.EMPTY_PATHS)

        try:
            with context.acquire() as db:
                try:
                    path_tag_crud.ensure_table(db)
                    written = path_tag_crud.upsert_many(
                        db,
                        rows=((path, path_depth(path)) for path in sorted(unique_paths)),
                        tag=normalized_tag,
                        created_at=tz_now(),
                    )
                    db.commit()
                except SQLAlchemyError as exc:
                    db.rollback()
                    logger.error("Failed to assign tag %r: %s", normalized_tag, exc)
                    raise TaggingError(TaggingErrorKind.DATABASE, str(exc)) from exc
        except StoreLockTimeout as exc:
            raise TaggingError(TaggingErrorKind.CONNECTION, str(exc)) from exc
        except StoreUnavailable as exc:
            raise TaggingError(TaggingErrorKind.CONNECTION_UNAVAILABLE, str(exc)) from exc

        logger.info("Assigned tag %r to %s path(s)", normalized_tag, written)
        return written

    # ----------------------------
    # 查询
    # ----------------------------
    def query(self, context: StoreContext, root: str, max_depth: int) -> TagSnapshot:
        """一次性取回 ``[root, root + max_depth]`` 范围内的直接标签，以及根的所有祖先标签。"""
        normalized_root = normalize_path(root)
        root_depth = path_depth(normalized_root)
        ancestors = strict_ancestors(normalized_root)

        try:
            with context.acquire() as db:
                try:
                    path_tag_crud.ensure_table(db)
                    direct_rows = path_tag_crud.list_in_range(
                        db, root=normalized_root, root_depth=root_depth, max_depth=max_depth
                    )
                    ancestor_rows = path_tag_crud.list_for_paths(db, paths=ancestors)
                    db.commit()
                except SQLAlchemyError as exc:
                    db.rollback()
                    raise ScanError(ScanErrorKind.DATABASE, str(exc)) from exc
        except (StoreLockTimeout, StoreUnavailable) as exc:
            raise ScanError(ScanErrorKind.DATABASE, str(exc)) from exc

        direct_tags: Dict[str, Set[str]] = defaultdict(set)
        for path, tag in direct_rows:
            if tag:
                direct_tags[path].add(tag)

        return TagSnapshot(
            direct_tags={path: tags for path, tags in direct_tags.items() if tags},
            root_ancestor_tags={tag for _, tag in ancestor_rows if tag},
        )

    def tags_for_path(self, context: StoreContext, path: str) -> tuple[str, list[str]]:
        """返回 ``(规范路径, 该路径直接拥有的标签)``，标签已排序。"""
        normalized = normalize_path(path)
        try:
            with context.acquire() as db:
                try:
                    path_tag_crud.ensure_table(db)
                    rows = path_tag_crud.list_for_paths(db, paths=[normalized])
                    db.commit()
                except SQLAlchemyError as exc:
                    db.rollback()
                    raise TaggingError(TaggingErrorKind.DATABASE, str(exc)) from exc
        except StoreLockTimeout as exc:
            raise TaggingError(TaggingErrorKind.CONNECTION, str(exc)) from exc
        except StoreUnavailable as exc:
            raise TaggingError(TaggingErrorKind.CONNECTION_UNAVAILABLE, str(exc)) from exc
        return normalized, sorted({tag for _, tag in rows})


tag_store = TagStore()

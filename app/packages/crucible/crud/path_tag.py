"""PathTag CRUD。"""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session

from app.packages.crucible.crud.base import CRUDBase
from app.packages.crucible.models.path_tag import PathTag
from app.packages.crucible.utils.path_utils import descendant_prefix, escape_like


class CRUDPathTag(CRUDBase[PathTag]):
    def upsert_many(
        self,
        db: Session,
        *,
        rows: Iterable[tuple[str, int]],
        tag: str,
        created_at: datetime,
    ) -> int:
        """为每个 ``(path, path_depth)`` 写入同一个标签；已存在的组合只刷新 created_at。"""
        count = 0
        for path, depth in rows:
            self.merge(db, {"path": path, "tag": tag, "path_depth": depth, "created_at": created_at})
            count += 1
        db.flush()
        return count

    def list_in_range(self, db: Session, *, root: str, root_depth: int, max_depth: int) -> list[tuple[str, str]]:
        """根路径自身，以及深度在 ``(root_depth, root_depth + max_depth]`` 内的后代路径。

        LIKE 负责走索引缩小范围；SQLite 的 LIKE 对 ASCII 不区分大小写，
        再用 substr 做一次逐字符的精确前缀比较。
        """
        raw_prefix = descendant_prefix(root)
        prefix = escape_like(raw_prefix) + "%"
        rows = (
            db.query(PathTag.path, PathTag.tag)
            .filter(
                or_(
                    PathTag.path == root,
                    and_(
                        PathTag.path_depth > root_depth,
                        PathTag.path_depth <= root_depth + max_depth,
                        PathTag.path.like(prefix, escape="\\"),
                        func.substr(PathTag.path, 1, len(raw_prefix)) == raw_prefix,
                    ),
                )
            )
            .all()
        )
        return [(row.path, row.tag) for row in rows]

    def list_for_paths(self, db: Session, *, paths: Sequence[str]) -> list[tuple[str, str]]:
        if not paths:
            return []
        rows = db.query(PathTag.path, PathTag.tag).filter(PathTag.path.in_(list(paths))).all()
        return [(row.path, row.tag) for row in rows]

    def count_for_path(self, db: Session, *, path: str) -> int:
        return self.query(db).filter(PathTag.path == path).count()


path_tag_crud = CRUDPathTag(PathTag)

"""Database bootstrapping utilities."""

from __future__ import annotations

import logging
from pathlib import Path

from sqlalchemy.engine import Engine

from app.packages.crucible.db import session as db_session
from app.packages.crucible.models.base import Base
from app.packages.crucible.models.path_tag import PathTag  # noqa: F401 - ensure table registration

logger = logging.getLogger(__name__)


def _ensure_sqlite_directory(engine: Engine) -> None:
    """SQLite 文件所在目录不存在时先行创建（应用私有数据目录）。"""
    if engine.dialect.name != "sqlite":
        return
    database = engine.url.database
    if not database or database == ":memory:":
        return
    Path(database).parent.mkdir(parents=True, exist_ok=True)


def init_db() -> None:
    """创建标签表并把共享会话安装到存储上下文中。"""
    engine = db_session.engine
    _ensure_sqlite_directory(engine)
    Base.metadata.create_all(bind=engine)
    db_session.store_context.initialize(db_session.SessionLocal())
    logger.info("Tag store initialized at %s", engine.url.render_as_string(hide_password=True))

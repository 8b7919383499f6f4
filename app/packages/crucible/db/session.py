"""Database engine, session factory and the shared store context.

All store access goes through one :class:`StoreContext`: a mutex plus an
optional session. Requests take the context explicitly (see
``core.dependencies.get_store_context``) instead of reaching for ambient state.
"""

from __future__ import annotations

import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.packages.crucible.core.config import get_settings

settings = get_settings()


class StoreLockTimeout(Exception):
    """在限定时间内未能拿到共享连接的互斥锁。"""


class StoreUnavailable(Exception):
    """共享连接尚未初始化。"""


def build_engine(url: str) -> Engine:
    # SQL 语句的输出由日志配置中的 sqlalchemy.engine 控制，不使用 echo
    connect_args = {}
    if url.startswith("sqlite"):
        # the session is shared across threadpool workers, serialized by StoreContext
        connect_args["check_same_thread"] = False
    return create_engine(url, pool_pre_ping=True, connect_args=connect_args)


class StoreContext:
    """持有进程内唯一的数据库会话，并用互斥锁串行化所有存储操作。

    生命周期：未初始化 -> 已初始化（启动时由 ``init_db`` 完成），之后不再显式关闭。
    持锁期间其他需要存储的请求全部阻塞；扫描文件系统本身不需要持锁。
    """

    def __init__(self, lock_timeout: float = 10.0) -> None:
        self._lock = threading.Lock()
        self._session: Optional[Session] = None
        self.lock_timeout = lock_timeout

    def initialize(self, session: Session) -> None:
        """安装共享会话；重复初始化时替换并关闭旧会话（测试会切换引擎）。"""
        with self._lock:
            previous, self._session = self._session, session
        if previous is not None and previous is not session:
            previous.close()

    @contextmanager
    def acquire(self, timeout: Optional[float] = None) -> Iterator[Session]:
        wait = self.lock_timeout if timeout is None else timeout
        acquired = self._lock.acquire(timeout=wait) if wait >= 0 else self._lock.acquire()
        if not acquired:
            raise StoreLockTimeout(f"timed out after {wait}s waiting for the store lock")
        try:
            if self._session is None:
                raise StoreUnavailable("store connection is not initialized")
            yield self._session
        finally:
            self._lock.release()


engine = build_engine(settings.sql_database_url)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
store_context = StoreContext(lock_timeout=settings.store_lock_timeout)

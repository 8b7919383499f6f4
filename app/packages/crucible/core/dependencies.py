"""依赖注入模块：封装 FastAPI 中复用度高的依赖函数。"""

from functools import lru_cache

from app.packages.crucible.db import session as db_session
from app.packages.crucible.db.session import StoreContext
from app.packages.crucible.services.extra_tags import ExtraTagProvider, build_extra_tag_provider


def get_store_context() -> StoreContext:
    """返回进程内共享的存储上下文（互斥锁 + 会话）。"""
    return db_session.store_context


@lru_cache
def get_extra_tag_provider() -> ExtraTagProvider:
    """扩展标签提供者只在首次使用时按配置选定一次。"""
    return build_extra_tag_provider()

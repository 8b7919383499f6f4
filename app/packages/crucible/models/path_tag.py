"""路径标签模型：记录某个规范化路径被直接赋予的标签。

存储规则：
- path：写入前经过规范化（解析符号链接与相对片段，失败时保留原样）；
- (path, tag) 为联合主键，重复赋值只刷新 created_at，不产生重复行；
- path_depth：写入时计算的层级深度，用于按深度范围检索后代标签。
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, func
from sqlalchemy.orm import Mapped, mapped_column

from app.packages.crucible.core.constants import PATH_TAGS_TABLE
from app.packages.crucible.models.base import Base


class PathTag(Base):
    __tablename__ = PATH_TAGS_TABLE

    path: Mapped[str] = mapped_column(String(4096), primary_key=True)
    tag: Mapped[str] = mapped_column(String(255), primary_key=True)
    path_depth: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )

"""CRUD 基类：为各实体提供通用的数据访问方法。"""

from typing import Any, Generic, Optional, Type, TypeVar

from sqlalchemy.orm import Query, Session

from app.packages.crucible.models.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class CRUDBase(Generic[ModelType]):
    """封装常见的查询与保存逻辑，减少重复代码。

    事务边界由调用方控制：这里的方法只 ``add``/``merge``/``flush``，从不提交。
    """

    def __init__(self, model: Type[ModelType]):
        self.model = model

    def get(self, db: Session, ident: Any) -> Optional[ModelType]:
        return db.get(self.model, ident)

    def query(self, db: Session) -> Query:
        return db.query(self.model)

    def merge(self, db: Session, obj_in: dict[str, Any]) -> ModelType:
        """按主键插入或覆盖一行。"""
        return db.merge(self.model(**obj_in))

    def ensure_table(self, db: Session) -> None:
        """表不存在时按模型定义创建，已存在则什么也不做。"""
        self.model.__table__.create(bind=db.connection(), checkfirst=True)

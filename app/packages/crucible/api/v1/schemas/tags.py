"""路径标签 - 请求/响应模型。"""

from typing import Any

from pydantic import BaseModel, Field

from app.packages.crucible.api.v1.schemas.common import ResponseEnvelope


class AssignTagBody(BaseModel):
    # 空列表与空白标签交由业务层校验，以返回带类型的错误
    paths: list[str] = Field(default_factory=list)
    tag: str = ""


class PathTagsItem(BaseModel):
    path: str
    tags: list[str]


TagMutationResponse = ResponseEnvelope[Any]
PathTagsResponse = ResponseEnvelope[PathTagsItem]

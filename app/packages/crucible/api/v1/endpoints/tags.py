"""路径标签路由：为一组路径设置标签，以及查询单个路径的直接标签。

当前不提供删除标签的接口。
"""

from fastapi import APIRouter, Depends, Query

from app.packages.crucible.api.v1.schemas.tags import (
    AssignTagBody,
    PathTagsItem,
    PathTagsResponse,
    TagMutationResponse,
)
from app.packages.crucible.core.constants import HTTP_STATUS_OK
from app.packages.crucible.core.dependencies import get_store_context
from app.packages.crucible.core.responses import create_response
from app.packages.crucible.db.session import StoreContext
from app.packages.crucible.services.tag_store import tag_store

router = APIRouter(prefix="/tags", tags=["tags"])


@router.post("", response_model=TagMutationResponse)
def assign_tag(body: AssignTagBody, store: StoreContext = Depends(get_store_context)):
    tag_store.assign(store, body.paths, body.tag)
    return create_response("设置标签成功", None, HTTP_STATUS_OK)


@router.get("", response_model=PathTagsResponse)
def list_path_tags(
    path: str = Query(..., min_length=1),
    store: StoreContext = Depends(get_store_context),
):
    normalized, tags = tag_store.tags_for_path(store, path)
    return create_response("获取路径标签成功", PathTagsItem(path=normalized, tags=tags).model_dump(), HTTP_STATUS_OK)

"""目录扫描路由：扫描指定目录或当前工作目录，返回带标签的目录树。"""

from fastapi import APIRouter, Depends, Query

from app.packages.crucible.api.v1.schemas.scan import ScanResponse
from app.packages.crucible.core.constants import HTTP_STATUS_OK
from app.packages.crucible.core.dependencies import get_extra_tag_provider, get_store_context
from app.packages.crucible.core.responses import create_response
from app.packages.crucible.db.session import StoreContext
from app.packages.crucible.services.extra_tags import ExtraTagProvider
from app.packages.crucible.services.scan_service import scan_service

router = APIRouter(prefix="/scan", tags=["scan"])


@router.get("", response_model=ScanResponse)
def scan_directory(
    path: str = Query(..., min_length=1, description="扫描根路径（绝对路径）"),
    depth: int = Query(..., ge=0, description="根目录以下的最大遍历层数"),
    store: StoreContext = Depends(get_store_context),
    provider: ExtraTagProvider = Depends(get_extra_tag_provider),
):
    """扫描 ``path`` 及其 ``depth`` 层以内的条目，并计算每个条目的直接/继承标签。"""
    tree = scan_service.scan_directory(store, path, depth, provider=provider)
    return create_response("扫描目录成功", tree.to_dict(), HTTP_STATUS_OK)


@router.get("/current", response_model=ScanResponse)
def scan_current_directory(
    store: StoreContext = Depends(get_store_context),
    provider: ExtraTagProvider = Depends(get_extra_tag_provider),
):
    """扫描服务进程的当前工作目录，深度固定为 2。"""
    tree = scan_service.scan_current_directory(store, provider=provider)
    return create_response("扫描当前目录成功", tree.to_dict(), HTTP_STATUS_OK)

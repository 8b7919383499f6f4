"""API v1 汇总路由：统一挂载所有版本化的子路由。"""

from fastapi import APIRouter

from app.packages.crucible.api.v1.endpoints import scan, tags

api_router = APIRouter()
api_router.include_router(scan.router)
api_router.include_router(tags.router)

"""异常处理模块：定义统一的业务异常与响应格式。

扫描与打标签的失败都以“带类型的错误”返回，``data`` 中携带
``{"type": <错误类型>, "message": <详细信息>}``，调用方可以按类型分支处理，
同时直接展示详细信息。
"""

from typing import Any, Optional

from fastapi import HTTPException, Request, status
from fastapi.responses import JSONResponse

from app.packages.crucible.core.constants import (
    HTTP_STATUS_BAD_REQUEST,
    HTTP_STATUS_INTERNAL_SERVER_ERROR,
    HTTP_STATUS_SERVICE_UNAVAILABLE,
)
from app.packages.crucible.core.enums import ScanErrorKind, TaggingErrorKind


class AppException(HTTPException):
    """携带统一响应结构的业务异常，方便在全局处理中转换响应体。"""

    def __init__(self, msg: str, code: int = status.HTTP_400_BAD_REQUEST, data=None) -> None:
        super().__init__(status_code=code, detail=msg)
        self.data = data


class ScanError(AppException):
    """目录扫描失败。``kind`` 区分失败类型，``message`` 为原始错误信息。"""

    _TEMPLATES = {
        ScanErrorKind.CURRENT_DIR: "获取当前工作目录失败: {message}",
        ScanErrorKind.MISSING_ROOT: "扫描结果中缺少根目录: {message}",
        ScanErrorKind.IO: "IO 错误: {message}",
        ScanErrorKind.DATABASE: "数据库错误: {message}",
    }

    def __init__(self, kind: ScanErrorKind, message: str) -> None:
        self.kind = kind
        self.message = message
        super().__init__(
            self._TEMPLATES[kind].format(message=message),
            HTTP_STATUS_INTERNAL_SERVER_ERROR,
            data={"type": kind.value, "message": message},
        )


class TaggingError(AppException):
    """标签写入失败。"""

    _TEMPLATES = {
        TaggingErrorKind.EMPTY_TAG: ("标签不能为空", HTTP_STATUS_BAD_REQUEST),
        TaggingErrorKind.EMPTY_PATHS: ("路径列表不能为空", HTTP_STATUS_BAD_REQUEST),
        TaggingErrorKind.CONNECTION: ("获取数据库连接失败: {message}", HTTP_STATUS_SERVICE_UNAVAILABLE),
        TaggingErrorKind.CONNECTION_UNAVAILABLE: ("数据库连接不可用", HTTP_STATUS_SERVICE_UNAVAILABLE),
        TaggingErrorKind.DATABASE: ("数据库错误: {message}", HTTP_STATUS_INTERNAL_SERVER_ERROR),
    }

    def __init__(self, kind: TaggingErrorKind, message: Optional[str] = None) -> None:
        template, code = self._TEMPLATES[kind]
        self.kind = kind
        self.message = message
        super().__init__(
            template.format(message=message or ""),
            code,
            data={"type": kind.value, "message": message},
        )


def _payload(exc: HTTPException) -> dict[str, Any]:
    return {"msg": exc.detail, "data": getattr(exc, "data", None), "code": exc.status_code}


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:  # pragma: no cover - framework glue
    """将 FastAPI 的 ``HTTPException`` 转换为统一响应格式。"""
    return JSONResponse(status_code=exc.status_code, content=_payload(exc))


async def generic_exception_handler(request: Request, exc: Exception) -> JSONResponse:  # pragma: no cover - framework glue
    """兜底处理：将未捕获异常转换为标准的 500 响应结构。"""
    payload = {
        "msg": "服务器内部错误",
        "data": None,
        "code": status.HTTP_500_INTERNAL_SERVER_ERROR,
    }
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, content=payload)

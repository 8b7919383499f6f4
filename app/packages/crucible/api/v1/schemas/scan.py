"""目录扫描 - 响应模型。"""

from typing import Optional

from pydantic import BaseModel, Field

from app.packages.crucible.api.v1.schemas.common import ResponseEnvelope


class EntryInfo(BaseModel):
    path: str
    is_directory: bool
    is_symlink: bool
    size: int
    modified: Optional[str] = None  # RFC 3339，文件系统无法提供时为空
    hierarchy: list[str] = Field(default_factory=list)
    extra_tags: list[str] = Field(default_factory=list)
    own_tags: list[str] = Field(default_factory=list)
    inherited_tags: list[str] = Field(default_factory=list)


class DirectoryNodeItem(BaseModel):
    name: str
    info: EntryInfo
    children: list["DirectoryNodeItem"] = Field(default_factory=list)


DirectoryNodeItem.model_rebuild()

ScanResponse = ResponseEnvelope[DirectoryNodeItem]

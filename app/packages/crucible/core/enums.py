"""枚举定义：约束扫描与打标签失败时的错误类型。"""

from enum import Enum


class ScanErrorKind(str, Enum):
    """目录扫描请求的失败类型。"""

    CURRENT_DIR = "CurrentDir"
    MISSING_ROOT = "MissingRoot"
    IO = "Io"
    DATABASE = "Database"


class TaggingErrorKind(str, Enum):
    """标签写入请求的失败类型。"""

    EMPTY_TAG = "EmptyTag"
    EMPTY_PATHS = "EmptyPaths"
    CONNECTION = "Connection"
    CONNECTION_UNAVAILABLE = "ConnectionUnavailable"
    DATABASE = "Database"


class ExtraTagProviderEnum(str, Enum):
    AUTO = "auto"
    NONE = "none"
    NATIVE = "native"

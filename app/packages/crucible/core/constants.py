"""常量定义：HTTP 状态码与扫描相关的固定取值。"""

HTTP_STATUS_OK = 200
HTTP_STATUS_BAD_REQUEST = 400
HTTP_STATUS_INTERNAL_SERVER_ERROR = 500
HTTP_STATUS_SERVICE_UNAVAILABLE = 503

# scan/current 固定的扫描深度
CURRENT_DIRECTORY_SCAN_DEPTH = 2

PATH_TAGS_TABLE = "path_tags"

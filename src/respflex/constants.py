"""
响应封装常量配置模块

定义分页默认值、元数据键名、查询参数名等
"""

# 分页默认配置
DEFAULT_PAGE = 1  # 默认页码（从 1 开始）
DEFAULT_PAGE_SIZE = 10  # 默认每页条数
MIN_PAGE_SIZE = 1  # 每页最小条数
MAX_PAGE_SIZE = 100  # 每页最大条数

# 总数未知时的哨兵值（跳过 COUNT 查询时使用）
UNKNOWN_TOTAL_COUNT = -1
# 总页数无法计算时的哨兵值
UNKNOWN_TOTAL_PAGES = -1

# 分页元数据在 meta 中的键名
PAGINATION_META_KEY = "pagination"

# 分页查询参数名称
PAGE_QUERY_PARAM = "page"
PAGE_SIZE_QUERY_PARAM = "page_size"

# JSON:API 格式版本
JSONAPI_VERSION = "1.0"

# Django settings 中的配置项名称
SETTINGS_KEY = "RESPFLEX"
SETTINGS_FORMATTER = "FORMATTER"
SETTINGS_PAGINATION_CALCULATOR = "PAGINATION_CALCULATOR"

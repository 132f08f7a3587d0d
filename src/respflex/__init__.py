"""
respflex 响应封装模块

把 API 处理函数的返回值统一封装为 {success, data, meta, timestamp} 结构，
支持可插拔的格式化器和分页元数据计算

主要组件:
    - 格式化器: BaseResponseFormatter, DefaultResponseFormatter, JSONAPIResponseFormatter
    - 分页计算器: BasePaginationCalculator, DefaultPaginationCalculator
    - 分页切片: slice_sequence, slice_query, paginate
    - 注册表: ResponseRegistry, default_registry
    - 配置: ResponseOptions, configure_from_settings
    - DRF 集成: respflex.drf（需显式导入）

使用示例:
    >>> from respflex import ResponseOptions, paginate
    >>>
    >>> ResponseOptions().use_default_formatter().use_pagination().apply()
    >>> result = paginate(list(range(100)), page=2, page_size=10)
    >>> result["meta"]["pagination"]["totalPages"]
    10
"""

# 异常类
from respflex.exceptions import (
    CallerContractError,
    ConfigurationError,
    ResponseFlexError,
)

# 响应格式化器
from respflex.formatter import (
    BaseResponseFormatter,
    DefaultResponseFormatter,
    JSONAPIResponseFormatter,
    TypedResponseFormatter,
)

# 分页计算器
from respflex.pagination import (
    BasePaginationCalculator,
    DefaultPaginationCalculator,
    PaginationMeta,
)

# 注册表
from respflex.registry import (
    ResponseRegistry,
    configure,
    default_registry,
    get_formatter,
    get_pagination_calculator,
    is_pagination_enabled,
)

# 配置入口
from respflex.config import (
    ResponseOptions,
    configure_from_settings,
)

# 分页切片
from respflex.slicer import (
    PageSlice,
    paginate,
    slice_query,
    slice_sequence,
    slice_source,
)

# 工具函数
from respflex.utils import (
    normalize,
    normalize_page,
    normalize_page_size,
)

# 常量配置
from respflex.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
    PAGINATION_META_KEY,
    UNKNOWN_TOTAL_COUNT,
)

__all__ = [
    # 异常
    "ResponseFlexError",
    "ConfigurationError",
    "CallerContractError",
    # 格式化器
    "BaseResponseFormatter",
    "DefaultResponseFormatter",
    "JSONAPIResponseFormatter",
    "TypedResponseFormatter",
    # 分页计算器
    "BasePaginationCalculator",
    "DefaultPaginationCalculator",
    "PaginationMeta",
    # 注册表
    "ResponseRegistry",
    "default_registry",
    "configure",
    "get_formatter",
    "get_pagination_calculator",
    "is_pagination_enabled",
    # 配置
    "ResponseOptions",
    "configure_from_settings",
    # 分页切片
    "PageSlice",
    "slice_sequence",
    "slice_query",
    "slice_source",
    "paginate",
    # 工具函数
    "normalize",
    "normalize_page",
    "normalize_page_size",
    # 常量
    "DEFAULT_PAGE",
    "DEFAULT_PAGE_SIZE",
    "MIN_PAGE_SIZE",
    "MAX_PAGE_SIZE",
    "PAGINATION_META_KEY",
    "UNKNOWN_TOTAL_COUNT",
]

__version__ = "0.1.0"
__author__ = "HACK-WU"

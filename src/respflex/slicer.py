"""
分页切片模块

从已排序、已过滤的数据源中取出一页数据，并统计数据源总数。

支持两类数据源:
    - 内存序列（list、tuple 或任意可迭代对象），总数即长度
    - 可查询数据源（如 Django QuerySet），需要支持 count() 和切片，
      总数通过额外的 count() 查询获得，可以通过 include_total_count=False 跳过

切片只负责偏移和截取，不做排序和过滤
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from typing import Any

from respflex.constants import PAGINATION_META_KEY, UNKNOWN_TOTAL_COUNT
from respflex.exceptions import CallerContractError
from respflex.registry import ResponseRegistry, default_registry

logger = logging.getLogger(__name__)

# 可以直接切片的内存序列类型，其余序列（如 deque）先物化为列表
_SLICEABLE_TYPES = (list, tuple, range, str)

# 由 paginate 生成、不能通过上下文传入的格式化参数
_RESERVED_CONTEXT_KEYS = frozenset({"data", "meta"})


@dataclass
class PageSlice:
    """
    单页切片结果

    属性:
        items: 当前页的数据
        total_count: 数据源总数，跳过计数时为 -1
        page: 请求的页码
        page_size: 请求的页大小
    """

    items: list[Any] = field(default_factory=list)
    total_count: int = 0
    page: int = 1
    page_size: int = 0


def _bounds(page: int, page_size: int) -> tuple[int, int]:
    # 负偏移按 0 处理，非正页大小得到空页
    offset = max(0, (page - 1) * page_size)
    limit = max(0, page_size)
    return offset, offset + limit


def is_query_source(source: Any) -> bool:
    """
    判断数据源是否为可查询数据源（提供 count() 且不是内存序列）

    按鸭子类型识别: 不是 collections.abc.Sequence，且有可调用的 count 和 __getitem__。
    count 必须可以无参调用（如 Django QuerySet.count()）。实现了序列协议但未注册为
    Sequence 的对象，其 count(value) 需要参数，会被误判为可查询数据源，
    这类对象请先注册为 Sequence 或转换为 list 再分页
    """
    if isinstance(source, Sequence):
        return False
    return callable(getattr(source, "count", None)) and hasattr(source, "__getitem__")


def slice_sequence(source: Iterable[Any], page: int, page_size: int) -> PageSlice:
    """
    对内存序列分页

    参数:
        source: 已排序、已过滤的数据。list、tuple、range、str 直接切片，
                其他可迭代对象（包括 deque 等不支持切片的序列）先物化为列表
        page: 页码（从 1 开始）
        page_size: 页大小

    返回:
        PageSlice 实例，total_count 为数据源长度
    """
    items = source if isinstance(source, _SLICEABLE_TYPES) else list(source)
    start, stop = _bounds(page, page_size)
    logger.debug(f"Slicing in-memory sequence of {len(items)} items at [{start}:{stop}]")
    return PageSlice(items=list(items[start:stop]), total_count=len(items), page=page, page_size=page_size)


def slice_query(query: Any, page: int, page_size: int, include_total_count: bool = True) -> PageSlice:
    """
    对可查询数据源分页

    参数:
        query: 支持 count() 和切片的数据源（如 Django QuerySet）
        page: 页码（从 1 开始）
        page_size: 页大小
        include_total_count: 是否执行 count() 查询，大表上可能开销较大

    返回:
        PageSlice 实例，跳过计数时 total_count 为 -1
    """
    total_count = query.count() if include_total_count else UNKNOWN_TOTAL_COUNT
    start, stop = _bounds(page, page_size)
    logger.debug(f"Slicing query source at [{start}:{stop}], total_count={total_count}")
    return PageSlice(items=list(query[start:stop]), total_count=total_count, page=page, page_size=page_size)


def slice_source(source: Any, page: int, page_size: int, include_total_count: bool = True) -> PageSlice:
    """
    根据数据源类型选择切片方式

    include_total_count 只对可查询数据源生效，内存序列总是直接取长度
    """
    if is_query_source(source):
        return slice_query(source, page, page_size, include_total_count=include_total_count)
    return slice_sequence(source, page, page_size)


def paginate(
    source: Any,
    page: int,
    page_size: int,
    include_total_count: bool = True,
    registry: ResponseRegistry | None = None,
    meta_key: str = PAGINATION_META_KEY,
    **kwargs,
) -> dict[str, Any]:
    """
    切片、计算分页元数据并格式化为响应

    参数:
        source: 内存序列或可查询数据源
        page: 页码（从 1 开始）
        page_size: 页大小
        include_total_count: 是否统计可查询数据源的总数
        registry: 提供格式化器和分页计算器的注册表，默认进程级注册表
        meta_key: 分页元数据在 meta 中的键名
        **kwargs: 透传给格式化器的上下文，不能包含 data 或 meta

    返回:
        格式化后的响应，data 为当前页数据，meta 为 {meta_key: 分页元数据}

    异常:
        ConfigurationError: 格式化器或分页计算器未配置时抛出
        CallerContractError: 上下文中包含 data 或 meta 时抛出
    """
    reserved = _RESERVED_CONTEXT_KEYS.intersection(kwargs)
    if reserved:
        raise CallerContractError(
            f"paginate() context must not contain {sorted(reserved)}; data and meta are built from the page"
        )

    registry = registry if registry is not None else default_registry
    calculator = registry.get_pagination_calculator()
    formatter = registry.get_formatter()

    page_slice = slice_source(source, page, page_size, include_total_count=include_total_count)
    metadata = calculator.compute_metadata(page, page_size, page_slice.total_count)
    return formatter.format(page_slice.items, build_pagination_meta(metadata, meta_key), **kwargs)


def build_pagination_meta(metadata: Any, meta_key: str = PAGINATION_META_KEY) -> dict[str, Any]:
    """把分页元数据放到 meta 的指定键下，PaginationMeta 会被转换为字典"""
    to_dict = getattr(metadata, "to_dict", None)
    return {meta_key: to_dict() if callable(to_dict) else metadata}

"""
分页元数据模块

提供分页元数据值对象、分页计算器基类和默认实现
"""

from __future__ import annotations

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from respflex.constants import UNKNOWN_TOTAL_PAGES

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PaginationMeta:
    """
    分页元数据

    属性:
        page: 当前页码（从 1 开始）
        page_size: 每页条数
        total_count: 总条数，未知时为 -1
        total_pages: 总页数，总条数未知或不大于 0 时为 -1
        has_next_page: 是否有下一页
        has_previous_page: 是否有上一页
    """

    page: int
    page_size: int
    total_count: int
    total_pages: int
    has_next_page: bool
    has_previous_page: bool

    def to_dict(self) -> dict[str, Any]:
        """转换为响应中使用的驼峰键字典"""
        return {
            "page": self.page,
            "pageSize": self.page_size,
            "totalCount": self.total_count,
            "totalPages": self.total_pages,
            "hasNextPage": self.has_next_page,
            "hasPreviousPage": self.has_previous_page,
        }


class BasePaginationCalculator(ABC):
    """分页计算器基类，定义如何根据页码、页大小和总数生成分页元数据。"""

    @abstractmethod
    def compute_metadata(self, page: int, page_size: int, total_count: int) -> PaginationMeta:
        """
        计算分页元数据

        参数:
            page: 当前页码（从 1 开始）
            page_size: 每页条数
            total_count: 总条数，未知时传 -1

        返回:
            PaginationMeta 实例
        """


class DefaultPaginationCalculator(BasePaginationCalculator):
    """
    默认分页计算器

    规则:
        - total_count > 0 时，total_pages = ceil(total_count / page_size)
        - total_count <= 0（包括未知的 -1 和真实的 0）时，total_pages = -1，has_next_page = False
        - page_size 不大于 0 时同样无法计算总页数，total_pages = -1
        - has_previous_page 只取决于 page > 1

    不会校验或修正 page / page_size，需要时请先调用 normalize()
    """

    def compute_metadata(self, page: int, page_size: int, total_count: int) -> PaginationMeta:
        if total_count > 0 and page_size > 0:
            total_pages = math.ceil(total_count / page_size)
        else:
            total_pages = UNKNOWN_TOTAL_PAGES

        metadata = PaginationMeta(
            page=page,
            page_size=page_size,
            total_count=total_count,
            total_pages=total_pages,
            has_next_page=total_pages > 0 and page < total_pages,
            has_previous_page=page > 1,
        )
        logger.debug(f"Computed pagination metadata: {metadata}")
        return metadata

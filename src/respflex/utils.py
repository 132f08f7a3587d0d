"""工具函数模块

提供分页参数规范化等可选的辅助功能
"""

from __future__ import annotations

from respflex.constants import MAX_PAGE_SIZE, MIN_PAGE_SIZE


def normalize_page(page: int) -> int:
    """
    规范化页码，保证不小于 1

    示例:
        >>> normalize_page(-5)
        1
    """
    return max(1, page)


def normalize_page_size(page_size: int, min_size: int = MIN_PAGE_SIZE, max_size: int = MAX_PAGE_SIZE) -> int:
    """
    将页大小限制在 [min_size, max_size] 区间内

    参数:
        page_size: 用户传入的页大小
        min_size: 允许的最小页大小
        max_size: 允许的最大页大小

    返回:
        规范化后的页大小

    示例:
        >>> normalize_page_size(999)
        100
        >>> normalize_page_size(150, min_size=10, max_size=200)
        150
    """
    return max(min_size, min(page_size, max_size))


def normalize(
    page: int,
    page_size: int,
    min_page_size: int = MIN_PAGE_SIZE,
    max_page_size: int = MAX_PAGE_SIZE,
) -> tuple[int, int]:
    """
    同时规范化页码和页大小

    返回:
        (page, page_size) 元组
    """
    return normalize_page(page), normalize_page_size(page_size, min_page_size, max_page_size)

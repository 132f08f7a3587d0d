"""
Django REST Framework 集成模块

提供在 DRF 视图中返回统一响应的辅助函数、分页类和视图 Mixin

注意:
    本模块依赖已配置好的 Django settings，不会被 respflex 包自动导入，
    需要显式 from respflex.drf import ...

使用示例:
    from respflex import drf

    class UserDetailView(APIView):
        def get(self, request, pk):
            return drf.ok(get_user(pk), request=request)

    class UserListView(drf.EnvelopeResponseMixin, generics.ListAPIView):
        serializer_class = UserSerializer
        pagination_class = drf.EnvelopePagination
        response_formatter_class = JSONAPIResponseFormatter
"""

from __future__ import annotations

import logging
from typing import Any

from rest_framework import status
from rest_framework.pagination import BasePagination
from rest_framework.response import Response

from respflex.constants import (
    DEFAULT_PAGE,
    DEFAULT_PAGE_SIZE,
    MAX_PAGE_SIZE,
    MIN_PAGE_SIZE,
    PAGE_QUERY_PARAM,
    PAGE_SIZE_QUERY_PARAM,
    PAGINATION_META_KEY,
)
from respflex.formatter import BaseResponseFormatter
from respflex.pagination import BasePaginationCalculator
from respflex.registry import ResponseRegistry, default_registry, resolve_component
from respflex.slicer import PageSlice, build_pagination_meta, paginate, slice_source
from respflex.utils import normalize

logger = logging.getLogger(__name__)


def _format(data: Any, meta: Any = None, registry: ResponseRegistry | None = None, **kwargs) -> dict[str, Any]:
    registry = registry if registry is not None else default_registry
    return registry.get_formatter().format(data, meta, **kwargs)


def ok(data: Any, registry: ResponseRegistry | None = None, **kwargs) -> Response:
    """返回 200 OK，data 被封装为统一响应"""
    return Response(_format(data, registry=registry, **kwargs), status=status.HTTP_200_OK)


def created(data: Any, location: str, registry: ResponseRegistry | None = None, **kwargs) -> Response:
    """返回 201 Created，并设置 Location 响应头"""
    return Response(
        _format(data, registry=registry, **kwargs),
        status=status.HTTP_201_CREATED,
        headers={"Location": location},
    )


def updated(data: Any, registry: ResponseRegistry | None = None, **kwargs) -> Response:
    """返回 200 OK，用于 PUT/PATCH 更新"""
    return Response(_format(data, registry=registry, **kwargs), status=status.HTTP_200_OK)


def no_content() -> Response:
    """返回 204 No Content，不带响应体"""
    return Response(status=status.HTTP_204_NO_CONTENT)


def deleted() -> Response:
    """返回 204 No Content，用于 DELETE"""
    return no_content()


def with_meta(data: Any, meta: Any, registry: ResponseRegistry | None = None, **kwargs) -> Response:
    """返回 200 OK，同时携带自定义元数据"""
    return Response(_format(data, meta, registry=registry, **kwargs), status=status.HTTP_200_OK)


def custom(data: Any, status_code: int, registry: ResponseRegistry | None = None, **kwargs) -> Response:
    """使用自定义状态码返回统一响应"""
    return Response(_format(data, registry=registry, **kwargs), status=status_code)


def paged(
    source: Any,
    page: int,
    page_size: int,
    include_total_count: bool = True,
    registry: ResponseRegistry | None = None,
    **kwargs,
) -> Response:
    """
    对数据源分页并返回 200 OK

    参数:
        source: 内存序列或可查询数据源（如 QuerySet）
        page: 页码
        page_size: 页大小
        include_total_count: 是否统计可查询数据源的总数
        registry: 注册表，默认进程级注册表
        **kwargs: 透传给格式化器的上下文
    """
    payload = paginate(
        source, page, page_size, include_total_count=include_total_count, registry=registry, **kwargs
    )
    return Response(payload, status=status.HTTP_200_OK)


class EnvelopeResponseMixin:
    """
    视图 Mixin，通过类属性注入格式化器和分页计算器

    类属性:
        response_formatter_class: 格式化器类或实例，None 时使用注册表中的格式化器
        pagination_calculator_class: 分页计算器类或实例，None 时使用注册表中的计算器
        response_registry: 注册表，None 时使用进程级注册表
    """

    response_formatter_class: type[BaseResponseFormatter] | BaseResponseFormatter | None = None
    pagination_calculator_class: type[BasePaginationCalculator] | BasePaginationCalculator | None = None
    response_registry: ResponseRegistry | None = None

    def get_response_registry(self) -> ResponseRegistry:
        return self.response_registry if self.response_registry is not None else default_registry

    def get_response_formatter(self) -> BaseResponseFormatter:
        if self.response_formatter_class is None:
            return self.get_response_registry().get_formatter()
        return resolve_component(self.response_formatter_class, BaseResponseFormatter, "formatter")

    def get_pagination_calculator(self) -> BasePaginationCalculator:
        if self.pagination_calculator_class is None:
            return self.get_response_registry().get_pagination_calculator()
        return resolve_component(self.pagination_calculator_class, BasePaginationCalculator, "pagination_calculator")

    def envelope_response(
        self,
        data: Any,
        meta: Any = None,
        status_code: int = status.HTTP_200_OK,
        headers: dict[str, str] | None = None,
    ) -> Response:
        """使用视图的格式化器封装数据并返回响应"""
        payload = self.get_response_formatter().format(data, meta, request=getattr(self, "request", None))
        return Response(payload, status=status_code, headers=headers)


class EnvelopePagination(BasePagination):
    """
    统一响应格式的 DRF 分页类

    从查询参数读取页码和页大小（缺失或非法时使用默认值），规范化后切片，
    分页元数据放在 meta.pagination 中

    当视图继承 EnvelopeResponseMixin 时，格式化器和分页计算器取自视图；否则取自注册表

    类属性:
        page_size: 默认页大小
        min_page_size: 最小页大小
        max_page_size: 最大页大小
        page_query_param: 页码查询参数名
        page_size_query_param: 页大小查询参数名
        include_total_count: 是否统计可查询数据源的总数
        meta_key: 分页元数据在 meta 中的键名
        registry: 注册表，None 时使用进程级注册表
    """

    page_size: int = DEFAULT_PAGE_SIZE
    min_page_size: int = MIN_PAGE_SIZE
    max_page_size: int = MAX_PAGE_SIZE
    page_query_param: str = PAGE_QUERY_PARAM
    page_size_query_param: str = PAGE_SIZE_QUERY_PARAM
    include_total_count: bool = True
    meta_key: str = PAGINATION_META_KEY
    registry: ResponseRegistry | None = None

    def __init__(self):
        self.page_slice: PageSlice | None = None
        self.request = None
        self.view = None

    def get_page_params(self, request) -> tuple[int, int]:
        """读取并规范化分页参数"""
        page = self._int_param(request, self.page_query_param, DEFAULT_PAGE)
        page_size = self._int_param(request, self.page_size_query_param, self.page_size)
        return normalize(page, page_size, self.min_page_size, self.max_page_size)

    @staticmethod
    def _int_param(request, name: str, default: int) -> int:
        raw = request.query_params.get(name)
        if raw in (None, ""):
            return default
        try:
            return int(raw)
        except (TypeError, ValueError):
            logger.debug(f"Ignoring invalid query parameter {name}={raw!r}")
            return default

    def paginate_queryset(self, queryset, request, view=None):
        page, page_size = self.get_page_params(request)
        self.request = request
        self.view = view
        self.page_slice = slice_source(queryset, page, page_size, include_total_count=self.include_total_count)
        return self.page_slice.items

    def _get_registry(self) -> ResponseRegistry:
        return self.registry if self.registry is not None else default_registry

    def get_formatter(self) -> BaseResponseFormatter:
        if isinstance(self.view, EnvelopeResponseMixin):
            return self.view.get_response_formatter()
        return self._get_registry().get_formatter()

    def get_pagination_calculator(self) -> BasePaginationCalculator:
        if isinstance(self.view, EnvelopeResponseMixin):
            return self.view.get_pagination_calculator()
        return self._get_registry().get_pagination_calculator()

    def get_paginated_response(self, data):
        page_slice = self.page_slice
        metadata = self.get_pagination_calculator().compute_metadata(
            page_slice.page, page_slice.page_size, page_slice.total_count
        )
        payload = self.get_formatter().format(data, build_pagination_meta(metadata, self.meta_key), request=self.request)
        return Response(payload, status=status.HTTP_200_OK)

"""
响应格式化器模块

提供响应格式化的基类和默认实现，用于将处理函数的返回值统一封装为标准结构
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any

from respflex.constants import JSONAPI_VERSION
from respflex.exceptions import CallerContractError

logger = logging.getLogger(__name__)


class BaseResponseFormatter(ABC):
    """响应格式化器基类，定义如何把数据和元数据封装为响应结构。"""

    @abstractmethod
    def format(
        self,
        data: Any = None,
        meta: Any = None,
        **kwargs,
    ) -> dict[str, Any]:
        """
        格式化数据为统一的字典结构

        参数:
           data: 原始数据，原样引用，None 也会被保留
           meta: 可选元数据，原样嵌入，不做校验
           **kwargs: 调用上下文（如 request），具体格式化器按需使用

        返回:
            格式化后的字典结构
        """


class DefaultResponseFormatter(BaseResponseFormatter):
    """默认响应格式化器，生成 {success, data, meta, timestamp} 结构。"""

    def format(
        self,
        data: Any = None,
        meta: Any = None,
        **kwargs,
    ) -> dict[str, Any]:
        return {
            "success": True,
            "data": data,
            "meta": meta,
            "timestamp": datetime.now(timezone.utc),
        }


class JSONAPIResponseFormatter(BaseResponseFormatter):
    """
    JSON:API 风格的响应格式化器

    生成 {jsonapi, data, meta, links} 结构，links.self 的取值优先级:
        1. kwargs 中的 request（调用 request.build_absolute_uri()）
        2. kwargs 中的 self_link
        3. 实例的 self_link 属性

    参数:
        self_link: 默认的 self 链接
        version: JSON:API 版本号

    使用示例:
        >>> formatter = JSONAPIResponseFormatter(self_link="/api/users")
        >>> formatter.format([{"id": 1}])["links"]
        {'self': '/api/users'}
    """

    self_link: str | None = None
    version: str = JSONAPI_VERSION

    def __init__(self, self_link: str | None = None, version: str | None = None):
        self.self_link = self_link or self.self_link
        self.version = version or self.version

    def format(
        self,
        data: Any = None,
        meta: Any = None,
        **kwargs,
    ) -> dict[str, Any]:
        return {
            "jsonapi": {"version": self.version},
            "data": data,
            "meta": meta,
            "links": {"self": self._resolve_self_link(**kwargs)},
        }

    def _resolve_self_link(self, request: Any = None, self_link: str | None = None, **kwargs) -> str | None:
        if request is not None and hasattr(request, "build_absolute_uri"):
            return request.build_absolute_uri()
        return self_link or self.self_link


class TypedResponseFormatter(BaseResponseFormatter):
    """
    强类型响应格式化器

    在委托给内部格式化器之前校验 data 和 meta 的类型，None 始终被接受

    参数:
        data_type: data 允许的类型（或类型元组），None 表示不校验
        meta_type: meta 允许的类型（或类型元组），None 表示不校验
        formatter: 被委托的格式化器实例，默认 DefaultResponseFormatter

    异常:
        CallerContractError: data 或 meta 类型不匹配时抛出
    """

    def __init__(
        self,
        data_type: type | tuple[type, ...] | None = None,
        meta_type: type | tuple[type, ...] | None = None,
        formatter: BaseResponseFormatter | None = None,
    ):
        self.data_type = data_type
        self.meta_type = meta_type
        self.formatter = formatter or DefaultResponseFormatter()

    def format(
        self,
        data: Any = None,
        meta: Any = None,
        **kwargs,
    ) -> dict[str, Any]:
        self._check("data", data, self.data_type)
        self._check("meta", meta, self.meta_type)
        return self.formatter.format(data, meta, **kwargs)

    @staticmethod
    def _check(field: str, value: Any, expected: type | tuple[type, ...] | None) -> None:
        if expected is None or value is None or isinstance(value, expected):
            return
        logger.debug(f"Rejected {field} of type {type(value).__name__}")
        raise CallerContractError(
            f"{field} must be an instance of {expected!r}, got {type(value).__name__}",
            expected=expected,
            actual=value,
        )

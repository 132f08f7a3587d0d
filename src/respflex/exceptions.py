"""
响应封装异常模块

定义配置错误和调用约定错误，所有异常都同步抛给调用方（HTTP 边界层）
"""

from __future__ import annotations

from typing import Any


class ResponseFlexError(Exception):
    """
    响应封装异常基类

    所有自定义异常的基类，用于统一捕获库内抛出的错误
    """


class ConfigurationError(ResponseFlexError):
    """
    配置异常

    在格式化器或分页计算器尚未配置时被请求、传入无效组件、
    或 settings 中的导入路径无法解析时抛出。属于部署期缺陷，不应被吞掉。

    参数:
        message: 错误描述信息
        component: 出错的组件名称（"formatter" / "pagination_calculator"，可选）

    属性:
        component: 出错的组件名称
    """

    def __init__(self, message: str, component: str | None = None):
        super().__init__(message)
        self.component = component


class CallerContractError(ResponseFlexError):
    """
    调用约定异常

    当强类型格式化器收到与声明类型不兼容的 data 或 meta，
    或 paginate 的上下文参数中包含 data / meta 时抛出

    参数:
        message: 错误描述信息
        expected: 期望的类型
        actual: 实际传入的值

    属性:
        expected: 期望的类型
        actual: 实际传入的值
    """

    def __init__(self, message: str, expected: Any = None, actual: Any = None):
        super().__init__(message)
        self.expected = expected
        self.actual = actual

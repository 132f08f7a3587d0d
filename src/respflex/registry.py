"""配置注册表模块

保存当前生效的响应格式化器和分页计算器。

注册表在进程启动时显式配置一次，之后在每次格式化/分页时读取；
测试中可以重新配置，重新配置会完整替换旧状态，不做合并。

读取时只拿当前状态快照的引用，写入时在锁内构建新的不可变快照后整体替换，
因此并发读取要么看到完整的新状态，要么看到完整的旧状态。

使用示例:
    >>> from respflex import default_registry, DefaultResponseFormatter, DefaultPaginationCalculator
    >>> default_registry.configure(DefaultResponseFormatter, DefaultPaginationCalculator())
    >>> default_registry.get_formatter().format({"id": 1})["success"]
    True
"""

from __future__ import annotations

import logging
import threading
from typing import Any, NamedTuple

from respflex.exceptions import ConfigurationError
from respflex.formatter import BaseResponseFormatter
from respflex.pagination import BasePaginationCalculator

logger = logging.getLogger(__name__)

FORMATTER_NOT_CONFIGURED = "Response formatter is not configured. Call configure() first."
PAGINATION_NOT_CONFIGURED = (
    "Pagination is not configured. Pass a pagination calculator to configure() to enable pagination."
)


class _RegistryState(NamedTuple):
    formatter: BaseResponseFormatter | None = None
    pagination_calculator: BasePaginationCalculator | None = None


def resolve_component(component: Any, base_class: type, component_name: str) -> Any:
    """
    把类或实例统一解析为组件实例

    参数:
        component: 组件类或实例
        base_class: 组件必须继承的基类
        component_name: 组件名称，用于错误信息

    返回:
        组件实例

    异常:
        ConfigurationError: 组件类型无效或实例化失败时抛出
    """
    # 处理类：尝试实例化
    if isinstance(component, type) and issubclass(component, base_class):
        try:
            return component()
        except Exception as e:
            logger.error(f"Failed to instantiate {component.__name__}: {e}")
            raise ConfigurationError(f"{component_name} instantiation failed: {e}", component=component_name) from e

    # 处理实例：直接返回
    if isinstance(component, base_class):
        return component

    raise ConfigurationError(
        f"{component_name} must be a {base_class.__name__} subclass or instance, got {component!r}",
        component=component_name,
    )


class ResponseRegistry:
    """
    响应组件注册表

    持有当前生效的格式化器（必需）和分页计算器（可选）
    """

    def __init__(self):
        self._state = _RegistryState()
        self._lock = threading.RLock()

    def configure(
        self,
        formatter: BaseResponseFormatter | type[BaseResponseFormatter],
        pagination_calculator: BasePaginationCalculator | type[BasePaginationCalculator] | None = None,
    ) -> None:
        """
        配置格式化器和分页计算器，完整替换之前的配置

        参数:
            formatter: 格式化器类或实例
            pagination_calculator: 分页计算器类或实例，None 表示不启用分页

        异常:
            ConfigurationError: 传入的组件无效时抛出，此时旧配置保持不变
        """
        if formatter is None:
            raise ConfigurationError("formatter must not be None", component="formatter")

        new_state = _RegistryState(
            formatter=resolve_component(formatter, BaseResponseFormatter, "formatter"),
            pagination_calculator=(
                resolve_component(pagination_calculator, BasePaginationCalculator, "pagination_calculator")
                if pagination_calculator is not None
                else None
            ),
        )

        with self._lock:
            if self._state.formatter is not None:
                logger.warning("Response registry is being reconfigured; previous configuration is replaced")
            self._state = new_state

        logger.info(
            f"Response registry configured with formatter={type(new_state.formatter).__name__}, "
            f"pagination_calculator={type(new_state.pagination_calculator).__name__ if new_state.pagination_calculator else None}"
        )

    def reset(self) -> None:
        """清空配置，恢复到未配置状态"""
        with self._lock:
            self._state = _RegistryState()
        logger.debug("Response registry reset")

    def get_formatter(self) -> BaseResponseFormatter:
        """
        获取当前格式化器

        异常:
            ConfigurationError: 尚未配置格式化器时抛出
        """
        formatter = self._state.formatter
        if formatter is None:
            raise ConfigurationError(FORMATTER_NOT_CONFIGURED, component="formatter")
        return formatter

    def get_pagination_calculator(self) -> BasePaginationCalculator:
        """
        获取当前分页计算器

        异常:
            ConfigurationError: 尚未配置分页计算器时抛出
        """
        calculator = self._state.pagination_calculator
        if calculator is None:
            raise ConfigurationError(PAGINATION_NOT_CONFIGURED, component="pagination_calculator")
        return calculator

    def is_pagination_enabled(self) -> bool:
        return self._state.pagination_calculator is not None

    def is_configured(self) -> bool:
        return self._state.formatter is not None


# 进程级注册表，应用启动时显式配置
default_registry = ResponseRegistry()


def configure(
    formatter: BaseResponseFormatter | type[BaseResponseFormatter],
    pagination_calculator: BasePaginationCalculator | type[BasePaginationCalculator] | None = None,
) -> None:
    """配置进程级注册表"""
    default_registry.configure(formatter, pagination_calculator)


def get_formatter() -> BaseResponseFormatter:
    return default_registry.get_formatter()


def get_pagination_calculator() -> BasePaginationCalculator:
    return default_registry.get_pagination_calculator()


def is_pagination_enabled() -> bool:
    return default_registry.is_pagination_enabled()

"""
配置入口模块

提供两种启动期配置方式:
    - ResponseOptions: 链式调用的配置构建器
    - configure_from_settings: 从 Django settings（或普通字典）读取导入路径完成配置

使用示例:
    # 方式1: 构建器
    ResponseOptions().use_default_formatter().use_pagination().apply()

    # 方式2: Django settings
    RESPFLEX = {
        "FORMATTER": "respflex.formatter.JSONAPIResponseFormatter",
        "PAGINATION_CALCULATOR": "respflex.pagination.DefaultPaginationCalculator",
    }
    configure_from_settings()
"""

from __future__ import annotations

import logging
from importlib import import_module
from typing import Any

from respflex.constants import SETTINGS_FORMATTER, SETTINGS_KEY, SETTINGS_PAGINATION_CALCULATOR
from respflex.exceptions import ConfigurationError
from respflex.formatter import BaseResponseFormatter, DefaultResponseFormatter
from respflex.pagination import BasePaginationCalculator, DefaultPaginationCalculator
from respflex.registry import ResponseRegistry, default_registry

logger = logging.getLogger(__name__)


class ResponseOptions:
    """
    响应组件配置构建器

    收集格式化器和分页计算器，最后通过 apply() 一次性写入注册表

    属性:
        formatter: 格式化器类或实例
        pagination_calculator: 分页计算器类或实例，None 表示不启用分页
    """

    def __init__(self):
        self.formatter: BaseResponseFormatter | type[BaseResponseFormatter] | None = None
        self.pagination_calculator: BasePaginationCalculator | type[BasePaginationCalculator] | None = None

    def use_formatter(self, formatter: BaseResponseFormatter | type[BaseResponseFormatter]) -> ResponseOptions:
        self.formatter = formatter
        return self

    def use_default_formatter(self) -> ResponseOptions:
        self.formatter = DefaultResponseFormatter
        return self

    def use_pagination(
        self,
        calculator: BasePaginationCalculator | type[BasePaginationCalculator] | None = None,
    ) -> ResponseOptions:
        """启用分页，未指定计算器时使用 DefaultPaginationCalculator"""
        self.pagination_calculator = calculator if calculator is not None else DefaultPaginationCalculator
        return self

    def apply(self, registry: ResponseRegistry | None = None) -> ResponseRegistry:
        """
        把当前配置写入注册表

        参数:
            registry: 目标注册表，默认进程级注册表

        返回:
            写入后的注册表

        异常:
            ConfigurationError: 未设置格式化器时抛出
        """
        if self.formatter is None:
            raise ConfigurationError(
                "A response formatter is required. Call use_formatter() before apply().", component="formatter"
            )
        target = registry if registry is not None else default_registry
        target.configure(self.formatter, self.pagination_calculator)
        return target


def import_from_path(path: str) -> Any:
    """
    根据 "module.ClassName" 形式的路径导入对象

    异常:
        ConfigurationError: 路径格式错误或导入失败时抛出
    """
    try:
        module_name, attr_name = path.rsplit(".", 1)
        return getattr(import_module(module_name), attr_name)
    except (ValueError, ImportError, AttributeError) as e:
        logger.error(f"Failed to import {path}: {e}")
        raise ConfigurationError(f"Could not import '{path}': {e}") from e


def _load(value: Any) -> Any:
    return import_from_path(value) if isinstance(value, str) else value


def configure_from_settings(
    config: dict[str, Any] | None = None,
    registry: ResponseRegistry | None = None,
) -> ResponseRegistry:
    """
    从配置字典完成注册表配置

    参数:
        config: 配置字典，包含 FORMATTER 和可选的 PAGINATION_CALCULATOR，
                值可以是导入路径、类或实例。None 时读取 django.conf.settings.RESPFLEX
        registry: 目标注册表，默认进程级注册表

    返回:
        写入后的注册表

    异常:
        ConfigurationError: 配置缺失、FORMATTER 未设置或导入失败时抛出
    """
    if config is None:
        from django.conf import settings

        config = getattr(settings, SETTINGS_KEY, None)
        if config is None:
            raise ConfigurationError(f"settings.{SETTINGS_KEY} is not defined")

    formatter = config.get(SETTINGS_FORMATTER)
    if formatter is None:
        raise ConfigurationError(f"{SETTINGS_KEY}['{SETTINGS_FORMATTER}'] is required", component="formatter")

    options = ResponseOptions().use_formatter(_load(formatter))
    calculator = config.get(SETTINGS_PAGINATION_CALCULATOR)
    if calculator is not None:
        options.use_pagination(_load(calculator))

    return options.apply(registry)

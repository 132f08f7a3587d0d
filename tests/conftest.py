"""
通用测试 Fixture 定义

提供测试所需的注册表、可查询数据源替身和工具对象
"""

import pytest

from respflex.formatter import DefaultResponseFormatter
from respflex.pagination import DefaultPaginationCalculator
from respflex.registry import ResponseRegistry, default_registry


class FakeQuerySet:
    """
    模拟 Django QuerySet 的可查询数据源

    记录 count() 调用次数和切片参数，便于断言查询行为
    """

    def __init__(self, rows):
        self._rows = list(rows)
        self.count_calls = 0
        self.slices = []

    def count(self):
        self.count_calls += 1
        return len(self._rows)

    def __getitem__(self, key):
        if isinstance(key, slice):
            self.slices.append((key.start, key.stop))
            if (key.start or 0) < 0:
                raise ValueError("Negative indexing is not supported.")
        return self._rows[key]

    def __iter__(self):
        return iter(self._rows)


@pytest.fixture(autouse=True)
def reset_global_registry():
    """每个测试结束后清空进程级注册表，避免测试之间互相影响"""
    yield
    default_registry.reset()


@pytest.fixture
def empty_registry():
    """未配置的注册表"""
    return ResponseRegistry()


@pytest.fixture
def configured_registry():
    """已配置默认格式化器和分页计算器的注册表"""
    registry = ResponseRegistry()
    registry.configure(DefaultResponseFormatter(), DefaultPaginationCalculator())
    return registry


@pytest.fixture
def formatter_only_registry():
    """只配置了格式化器、未启用分页的注册表"""
    registry = ResponseRegistry()
    registry.configure(DefaultResponseFormatter())
    return registry


@pytest.fixture
def hundred_items():
    """1..100 的数据项"""
    return [{"id": i, "name": f"Item {i}"} for i in range(1, 101)]


@pytest.fixture
def fake_queryset(hundred_items):
    """包含 100 条数据的可查询数据源"""
    return FakeQuerySet(hundred_items)


@pytest.fixture
def queryset_factory():
    """按给定数据构造可查询数据源"""
    return FakeQuerySet

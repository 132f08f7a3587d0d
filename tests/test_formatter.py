"""
formatter.py 模块的单元测试

测试用例:
- UT-FMT-001: DefaultResponseFormatter 生成标准结构
- UT-FMT-002: DefaultResponseFormatter 原样保留 data 和 meta
- UT-FMT-003: DefaultResponseFormatter 保留 None 数据
- UT-FMT-004: BaseResponseFormatter 抽象方法验证
- UT-FMT-005: JSONAPIResponseFormatter 生成 JSON:API 结构
- UT-FMT-006: TypedResponseFormatter 类型校验
"""

import pytest
from abc import ABC
from datetime import datetime, timezone
from unittest.mock import Mock

from respflex.exceptions import CallerContractError
from respflex.formatter import (
    BaseResponseFormatter,
    DefaultResponseFormatter,
    JSONAPIResponseFormatter,
    TypedResponseFormatter,
)


class TestBaseResponseFormatter:
    """测试 BaseResponseFormatter 抽象基类"""

    @pytest.mark.unit
    def test_is_abstract_class(self):
        """UT-FMT-004: BaseResponseFormatter 是抽象类"""
        assert issubclass(BaseResponseFormatter, ABC)

        with pytest.raises(TypeError, match="Can't instantiate abstract class"):
            BaseResponseFormatter()

    @pytest.mark.unit
    def test_has_abstract_format_method(self):
        """UT-FMT-004: BaseResponseFormatter 有抽象 format 方法"""
        assert getattr(BaseResponseFormatter.format, "__isabstractmethod__", False)


class TestDefaultResponseFormatter:
    """测试 DefaultResponseFormatter 格式化器"""

    @pytest.fixture
    def formatter(self):
        return DefaultResponseFormatter()

    @pytest.mark.unit
    def test_format_standard_envelope(self, formatter):
        """UT-FMT-001: 生成 {success, data, meta, timestamp} 结构"""
        # Arrange
        data = {"user_id": 123}

        # Act
        result = formatter.format(data)

        # Assert
        assert set(result) == {"success", "data", "meta", "timestamp"}
        assert result["success"] is True
        assert result["data"] == {"user_id": 123}
        assert result["meta"] is None

    @pytest.mark.unit
    def test_data_and_meta_are_not_copied(self, formatter):
        """UT-FMT-002: data 和 meta 原样引用，不复制"""
        # Arrange
        data = [{"id": 1}, {"id": 2}]
        meta = {"total": 2}

        # Act
        result = formatter.format(data, meta)

        # Assert
        assert result["data"] is data
        assert result["meta"] is meta

    @pytest.mark.unit
    def test_format_none_data(self, formatter):
        """UT-FMT-003: None 数据被保留"""
        result = formatter.format(None, {"info": "x"})

        assert "data" in result
        assert result["data"] is None
        assert result["success"] is True

    @pytest.mark.unit
    def test_format_does_not_modify_input(self, formatter):
        """format 不修改输入"""
        data = {"mutable": [1, 2, 3]}
        snapshot = {"mutable": [1, 2, 3]}

        formatter.format(data, {"a": 1})

        assert data == snapshot

    @pytest.mark.unit
    def test_timestamp_is_utc_now(self, formatter):
        """timestamp 为当前 UTC 时间"""
        before = datetime.now(timezone.utc)

        result = formatter.format("payload")

        after = datetime.now(timezone.utc)
        assert result["timestamp"].tzinfo is not None
        assert result["timestamp"].utcoffset().total_seconds() == 0
        assert before <= result["timestamp"] <= after

    @pytest.mark.unit
    @pytest.mark.parametrize("data", [0, "", [], {}, False, "text", 3.14])
    def test_falsy_and_scalar_data_preserved(self, formatter, data):
        """参数化测试: 假值和标量数据不会被替换"""
        result = formatter.format(data)

        assert result["data"] is data

    @pytest.mark.unit
    def test_same_inputs_same_structure(self, formatter):
        """相同输入除 timestamp 外结构相同"""
        first = formatter.format({"a": 1}, {"b": 2})
        second = formatter.format({"a": 1}, {"b": 2})

        first.pop("timestamp")
        second.pop("timestamp")
        assert first == second

    @pytest.mark.unit
    def test_ignores_context_kwargs(self, formatter):
        """额外的上下文参数被忽略"""
        result = formatter.format({"a": 1}, request=Mock(), custom_arg=42)

        assert result["data"] == {"a": 1}


class TestJSONAPIResponseFormatter:
    """测试 JSONAPIResponseFormatter 格式化器"""

    @pytest.mark.unit
    def test_format_jsonapi_structure(self):
        """UT-FMT-005: 生成 {jsonapi, data, meta, links} 结构"""
        formatter = JSONAPIResponseFormatter(self_link="/api/users")
        data = [{"id": 1}]

        result = formatter.format(data, {"total": 1})

        assert result == {
            "jsonapi": {"version": "1.0"},
            "data": data,
            "meta": {"total": 1},
            "links": {"self": "/api/users"},
        }
        assert result["data"] is data

    @pytest.mark.unit
    def test_self_link_from_request(self):
        """request 上下文优先生成 self 链接"""
        formatter = JSONAPIResponseFormatter(self_link="/fallback")
        request = Mock()
        request.build_absolute_uri.return_value = "http://testserver/api/users?page=2"

        result = formatter.format([], request=request)

        assert result["links"]["self"] == "http://testserver/api/users?page=2"

    @pytest.mark.unit
    def test_self_link_from_kwarg(self):
        """self_link 参数覆盖实例默认值"""
        formatter = JSONAPIResponseFormatter(self_link="/fallback")

        result = formatter.format(None, self_link="/api/items")

        assert result["links"]["self"] == "/api/items"
        assert result["data"] is None

    @pytest.mark.unit
    def test_default_self_link_is_none(self):
        """未配置 self 链接时为 None"""
        result = JSONAPIResponseFormatter().format({"a": 1})

        assert result["links"] == {"self": None}

    @pytest.mark.unit
    def test_custom_version(self):
        """可以自定义 JSON:API 版本"""
        result = JSONAPIResponseFormatter(version="1.1").format({})

        assert result["jsonapi"] == {"version": "1.1"}


class TestTypedResponseFormatter:
    """测试 TypedResponseFormatter 格式化器"""

    @pytest.mark.unit
    def test_accepts_matching_types(self):
        """UT-FMT-006: 类型匹配时委托给内部格式化器"""
        formatter = TypedResponseFormatter(data_type=list, meta_type=dict)
        data = [1, 2]

        result = formatter.format(data, {"total": 2})

        assert result["success"] is True
        assert result["data"] is data

    @pytest.mark.unit
    def test_accepts_none(self):
        """None 始终被接受"""
        formatter = TypedResponseFormatter(data_type=list, meta_type=dict)

        result = formatter.format(None, None)

        assert result["data"] is None
        assert result["meta"] is None

    @pytest.mark.unit
    def test_rejects_wrong_data_type(self):
        """UT-FMT-006: data 类型不匹配时抛出 CallerContractError"""
        formatter = TypedResponseFormatter(data_type=list)

        with pytest.raises(CallerContractError, match="data must be an instance of") as exc_info:
            formatter.format({"not": "a list"})

        assert exc_info.value.expected is list
        assert exc_info.value.actual == {"not": "a list"}

    @pytest.mark.unit
    def test_rejects_wrong_meta_type(self):
        """meta 类型不匹配时抛出 CallerContractError"""
        formatter = TypedResponseFormatter(meta_type=dict)

        with pytest.raises(CallerContractError, match="meta must be an instance of"):
            formatter.format([1], "not a dict")

    @pytest.mark.unit
    def test_delegates_to_inner_formatter(self):
        """使用传入的内部格式化器"""
        inner = JSONAPIResponseFormatter(self_link="/x")
        formatter = TypedResponseFormatter(data_type=(list, tuple), formatter=inner)

        result = formatter.format((1, 2))

        assert result["links"] == {"self": "/x"}

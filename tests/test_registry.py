"""
工具注册表测试
"""

from concurrent.futures import ThreadPoolExecutor

import pytest

from mcp_gateway.core.errors import InvalidStatusTransitionError
from mcp_gateway.tools.base import StaticTool
from mcp_gateway.tools.metadata import ToolMetadata, ToolStatus
from mcp_gateway.tools.registry import ToolRegistry


def make_tool(name: str, description: str = "测试工具", status: ToolStatus = ToolStatus.PUBLISHED) -> StaticTool:
    metadata = ToolMetadata.for_dynamic_tool("tester").with_status(status, "tester")
    return StaticTool(
        name=name,
        description=description,
        input_schema={"type": "object", "properties": {}, "required": []},
        handler=lambda arguments, principal: {"echo": arguments},
        metadata=metadata,
    )


class TestRegister:
    """注册"""

    def test_register_and_get(self, empty_registry: ToolRegistry):
        tool = make_tool("echo")

        assert empty_registry.register(tool) is True
        assert empty_registry.get_tool("echo") is tool
        assert empty_registry.has_tool("echo")
        assert "echo" in empty_registry
        assert len(empty_registry) == 1

    def test_duplicate_name_is_conflict(self, empty_registry: ToolRegistry):
        """同名注册不覆盖已有工具"""
        first = make_tool("echo", description="first")
        second = make_tool("echo", description="second")

        assert empty_registry.register(first) is True
        assert empty_registry.register(second) is False

        assert empty_registry.get_tool("echo") is first
        assert empty_registry.get_tool("echo").description == "first"
        assert len(empty_registry) == 1

    def test_get_unknown_returns_none(self, empty_registry: ToolRegistry):
        assert empty_registry.get_tool("missing") is None
        assert not empty_registry.has_tool("missing")

    def test_builtin_tools_loaded(self, registry: ToolRegistry):
        assert registry.has_tool("get_warehouse_inventory")
        assert registry.has_tool("query_trade_data")
        assert all(
            tool.metadata.status == ToolStatus.PUBLISHED
            for tool in registry.get_all_tools()
        )

    def test_concurrent_distinct_registrations(self, empty_registry: ToolRegistry):
        """100 个并发注册全部成功，不丢失"""
        names = [f"tool_{i}" for i in range(100)]

        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda n: empty_registry.register(make_tool(n)), names))

        assert all(results)
        assert len(empty_registry) == 100
        assert sorted(t.name for t in empty_registry.get_all_tools()) == sorted(names)

    def test_concurrent_same_name_only_one_wins(self, empty_registry: ToolRegistry):
        with ThreadPoolExecutor(max_workers=16) as pool:
            results = list(pool.map(lambda i: empty_registry.register(make_tool("race")), range(50)))

        assert results.count(True) == 1
        assert len(empty_registry) == 1


class TestQueries:
    """查询与注销"""

    def test_snapshot_is_immutable(self, empty_registry: ToolRegistry):
        empty_registry.register(make_tool("echo"))
        snapshot = empty_registry.get_all_tools()

        assert isinstance(snapshot, tuple)
        with pytest.raises(AttributeError):
            snapshot.append(make_tool("other"))  # type: ignore[attr-defined]

        empty_registry.register(make_tool("other"))
        assert len(snapshot) == 1

    def test_published_only(self, empty_registry: ToolRegistry):
        empty_registry.register(make_tool("live"))
        empty_registry.register(make_tool("draft", status=ToolStatus.DRAFT))

        published = [t.name for t in empty_registry.get_published_tools()]
        assert published == ["live"]

    def test_unregister(self, empty_registry: ToolRegistry):
        empty_registry.register(make_tool("echo"))

        assert empty_registry.unregister("echo") is True
        assert empty_registry.get_tool("echo") is None
        # 不存在时静默忽略
        assert empty_registry.unregister("echo") is False


class TestUpdateStatus:
    """状态更新"""

    def test_update_stamps_operator(self, empty_registry: ToolRegistry):
        tool = make_tool("echo", status=ToolStatus.DRAFT)
        empty_registry.register(tool)
        before = tool.metadata

        assert empty_registry.update_tool_status("echo", ToolStatus.PUBLISHED, "admin") is True

        after = empty_registry.get_tool("echo").metadata
        assert after.status == ToolStatus.PUBLISHED
        assert after.updated_by == "admin"
        assert after.updated_at >= before.updated_at
        assert after.created_by == before.created_by
        # 旧元数据不受影响
        assert before.status == ToolStatus.DRAFT

    def test_update_unknown_returns_false(self, empty_registry: ToolRegistry):
        assert empty_registry.update_tool_status("missing", ToolStatus.PUBLISHED, "admin") is False

    def test_disallowed_transition_raises(self, empty_registry: ToolRegistry):
        empty_registry.register(make_tool("echo", status=ToolStatus.DRAFT))

        with pytest.raises(InvalidStatusTransitionError) as exc_info:
            empty_registry.update_tool_status(
                "echo",
                ToolStatus.OFFLINE,
                "admin",
                allowed_from={ToolStatus.PUBLISHED, ToolStatus.OFFLINE},
            )

        assert exc_info.value.status_code == 409
        assert empty_registry.get_tool("echo").metadata.status == ToolStatus.DRAFT

    def test_update_races_unregister(self, empty_registry: ToolRegistry):
        """状态更新与注销并发：要么更新成功后被删除，要么发现工具不存在"""
        empty_registry.register(make_tool("echo", status=ToolStatus.DRAFT))

        with ThreadPoolExecutor(max_workers=2) as pool:
            update = pool.submit(empty_registry.update_tool_status, "echo", ToolStatus.PUBLISHED, "admin")
            remove = pool.submit(empty_registry.unregister, "echo")

        assert remove.result() is True
        assert update.result() in (True, False)
        assert empty_registry.get_tool("echo") is None

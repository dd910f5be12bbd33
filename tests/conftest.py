"""Shared fixtures for the tool router tests."""

from collections import Counter
from unittest.mock import MagicMock

import mongomock
import pytest

from tool_router.adapters.mongodb_adapter import MongoDBAdapter
from tool_router.plugins.base import ToolPlugin
from tool_router.plugins.registry import PluginRegistry
from tool_router.plugins.tools.function_tool import FunctionTool


class CountingService:
    """Data service that records every handler invocation."""

    def __init__(self):
        self.calls = Counter()

    def hit(self, tool, **kwargs):
        self.calls[tool] += 1
        return {"tool": tool, **kwargs}


def get_alpha(data: CountingService) -> dict:
    """Return the alpha widgets report"""
    return data.hit("GetAlpha")


def get_beta(data: CountingService, count: int = 1) -> dict:
    """Count beta widgets in stock"""
    return data.hit("GetBeta", count=count)


def find_gamma(data: CountingService, name: str) -> dict:
    """Find gamma widgets by name"""
    return data.hit("FindGamma", name=name)


def explode(data: CountingService) -> dict:
    """Handler that always faults"""
    raise RuntimeError("boom")


class CountingPlugin(ToolPlugin):
    plugin_id = "counting"
    plugin_display_name = "Counting Plugin"
    plugin_description = "Widgets used by the tests"

    def get_tools(self):
        return [
            FunctionTool(get_alpha),
            FunctionTool(get_beta),
            FunctionTool(find_gamma),
            FunctionTool(explode),
        ]

    def create_data_service(self, storage, config):
        return CountingService()


class StatsPlugin(ToolPlugin):
    plugin_id = "thirdapi"
    plugin_description = "Analytics over imported statistics"

    def get_tools(self):
        def get_import_statistics(data: CountingService) -> dict:
            """Get latest import statistics summary"""
            return data.hit("GetImportStatistics")

        return [FunctionTool(get_import_statistics)]

    def create_data_service(self, storage, config):
        return CountingService()


@pytest.fixture
def counting_plugin():
    """A counting plugin with its data service initialized."""
    plugin = CountingPlugin()
    plugin.initialize({}, storage=MagicMock())
    return plugin


@pytest.fixture
def stats_plugin():
    plugin = StatsPlugin()
    plugin.initialize({}, storage=MagicMock())
    return plugin


@pytest.fixture
def registry(counting_plugin, stats_plugin):
    """A frozen registry holding the counting and stats plugins."""
    registry = PluginRegistry()
    registry.register(counting_plugin)
    registry.register(stats_plugin)
    registry.freeze()
    return registry


@pytest.fixture
def plugin_factory():
    """Build ToolPlugin subclasses on the fly from handler functions."""

    def make(plugin_id, *handlers, route_prefix=""):
        plugin_class = type(
            f"{plugin_id.title()}Plugin",
            (ToolPlugin,),
            {
                "plugin_id": plugin_id,
                "plugin_route_prefix": route_prefix,
                "get_tools": lambda self: [FunctionTool(h) for h in handlers],
                "create_data_service": lambda self, storage, config: CountingService(),
            },
        )
        plugin = plugin_class()
        plugin.initialize({}, storage=MagicMock())
        return plugin

    return make


@pytest.fixture
def mongo_adapter():
    """MongoDB adapter backed by mongomock."""
    client = mongomock.MongoClient()
    adapter = MongoDBAdapter(connection_string=client.HOST, database_name="test_db")
    # Replace the real client with the mock
    adapter.client = client
    adapter.db = client["test_db"]
    return adapter

"""
Tests for the PluginManager implementation.

Covers built-in plugin loading, per-plugin enablement, initialization hook
failures and third-party plugins published as entry points.
"""

import pytest
from unittest.mock import MagicMock, patch

from tool_router.domains.errors import PluginRegistrationError
from tool_router.interfaces.plugins.plugins import Plugin
from tool_router.plugins.manager import ENTRY_POINT_GROUP, PluginManager
from tool_router.plugins.registry import PluginRegistry
from tool_router.plugins.supermarket.data_service import MongoSupermarketDataService
from tool_router.plugins.thirdapi.data_service import MongoThirdApiDataService


@pytest.fixture
def no_entry_points():
    return {"load_entry_points": False}


def make_entry_point(name, factory=None, error=None):
    entry_point = MagicMock()
    entry_point.name = name
    if error is not None:
        entry_point.load.side_effect = error
    else:
        entry_point.load.return_value = factory
    return entry_point


class TestPluginManager:
    """Test suite for PluginManager."""

    def test_init_defaults(self):
        manager = PluginManager()
        assert manager.config == {}
        assert isinstance(manager.registry, PluginRegistry)
        assert manager.storage is None

    def test_load_builtins_without_storage(self, no_entry_points):
        manager = PluginManager(config=no_entry_points)

        loaded = manager.load_plugins()

        assert loaded == ["supermarket", "thirdapi"]
        assert manager.registry.frozen is True
        assert len(manager.registry.list_tool_names()) == 15
        # Tools stay registered; dispatch reports the missing data service
        assert manager.get_plugin("supermarket").data_service is None

    def test_load_builtins_with_storage(self, mongo_adapter):
        manager = PluginManager(
            config={
                "load_entry_points": False,
                "supermarket": {"products_collection": "items", "recent_sales_days": 3},
            },
            storage=mongo_adapter,
        )
        manager.load_plugins()

        supermarket = manager.get_plugin("supermarket").data_service
        assert isinstance(supermarket, MongoSupermarketDataService)
        assert supermarket.products_collection == "items"
        assert supermarket.sales_collection == "sales"
        assert supermarket.recent_sales_days == 3
        assert isinstance(
            manager.get_plugin("thirdapi").data_service, MongoThirdApiDataService
        )

    def test_disabled_builtin(self):
        manager = PluginManager(
            config={"load_entry_points": False, "thirdapi": {"enabled": False}}
        )
        assert manager.load_plugins() == ["supermarket"]
        assert manager.get_plugin("thirdapi") is None

    def test_register_plugin_hook_failure(self):
        manager = PluginManager()
        plugin = MagicMock(spec=Plugin)
        plugin.name = "broken"
        plugin.initialize.side_effect = Exception("Init failed")

        assert manager.register_plugin(plugin) is False
        assert manager.get_plugin("broken") is None
        plugin.get_tools.assert_not_called()

    def test_register_plugin_passes_config_section(self, counting_plugin):
        manager = PluginManager(config={"counting": {"limit": 5}}, storage="storage")
        counting_plugin.initialize = MagicMock()

        assert manager.register_plugin(counting_plugin) is True
        counting_plugin.initialize.assert_called_once_with({"limit": 5}, "storage")

    def test_register_plugin_collision_raises(self, counting_plugin, plugin_factory):
        manager = PluginManager()
        manager.register_plugin(counting_plugin)

        def get_alpha(data):
            """Duplicate of the counting tool"""

        with pytest.raises(PluginRegistrationError):
            manager.register_plugin(plugin_factory("other", get_alpha))

    @patch("tool_router.plugins.manager.importlib.metadata.entry_points")
    def test_load_entry_points(self, mock_entry_points, counting_plugin):
        mock_entry_points.return_value = [
            make_entry_point("counting", factory=lambda: counting_plugin),
            make_entry_point("broken", error=ImportError("missing module")),
        ]
        manager = PluginManager(
            config={"supermarket": {"enabled": False}, "thirdapi": {"enabled": False}}
        )

        loaded = manager.load_plugins()

        mock_entry_points.assert_called_once_with(group=ENTRY_POINT_GROUP)
        assert loaded == ["counting"]
        assert manager.registry.list_tool_names() == [
            "GetAlpha",
            "GetBeta",
            "FindGamma",
            "Explode",
        ]

    @patch("tool_router.plugins.manager.importlib.metadata.entry_points")
    def test_disabled_entry_point_not_loaded(self, mock_entry_points):
        entry_point = make_entry_point("counting", factory=MagicMock())
        mock_entry_points.return_value = [entry_point]
        manager = PluginManager(config={"counting": {"enabled": False}})

        manager.load_plugins()

        entry_point.load.assert_not_called()

    def test_list_plugins(self, no_entry_points):
        manager = PluginManager(config=no_entry_points)
        manager.load_plugins()

        plugins = {p["name"]: p for p in manager.list_plugins()}
        assert plugins["thirdapi"]["displayName"] == "Third API Plugin"
        assert plugins["supermarket"]["routePrefix"] == "supermarket"
        assert "GetLowStockProducts" in plugins["supermarket"]["tools"]
        assert "FindArticleByContentKey" in plugins["thirdapi"]["tools"]

"""
Plugin manager for the tool router.

This module implements the concrete PluginManager that loads the built-in
plugins and any third-party plugins published under the ``tool_router.plugins``
entry-point group, runs their initialization hooks and freezes the registry.
"""

import importlib.metadata
import logging
from typing import Any, Dict, List, Optional, Type

from tool_router.interfaces.plugins.plugins import Plugin
from tool_router.interfaces.plugins.plugins import (
    PluginManager as PluginManagerInterface,
)
from tool_router.interfaces.providers.data_storage import DataStorageProvider
from tool_router.plugins.registry import PluginRegistry
from tool_router.plugins.supermarket import SupermarketPlugin
from tool_router.plugins.thirdapi import ThirdApiPlugin

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "tool_router.plugins"

BUILTIN_PLUGINS: Dict[str, Type[Plugin]] = {
    "supermarket": SupermarketPlugin,
    "thirdapi": ThirdApiPlugin,
}


class PluginManager(PluginManagerInterface):
    """Manager for discovering, initializing and registering plugins."""

    def __init__(
        self,
        config: Optional[Dict[str, Any]] = None,
        registry: Optional[PluginRegistry] = None,
        storage: Optional[DataStorageProvider] = None,
    ):
        """Initialize with the ``plugins`` config section, a registry and storage."""
        self.config = config or {}
        self.registry = registry or PluginRegistry()
        self.storage = storage

    def plugin_config(self, name: str) -> Dict[str, Any]:
        section = self.config.get(name)
        return section if isinstance(section, dict) else {}

    def is_enabled(self, name: str) -> bool:
        return bool(self.plugin_config(name).get("enabled", True))

    def register_plugin(self, plugin: Plugin) -> bool:
        """Run the plugin's initialization hook and register it.

        Args:
            plugin: The plugin to register

        Returns:
            True if registration succeeded, False if the hook failed

        Raises:
            PluginRegistrationError: The plugin id or a tool name collides
        """
        try:
            plugin.initialize(self.plugin_config(plugin.name), self.storage)
        except Exception as e:
            logger.error(f"Error initializing plugin {plugin.name}: {e}")
            return False

        self.registry.register(plugin)
        logger.info(f"Successfully registered plugin {plugin.name}")
        return True

    def load_plugins(self) -> List[str]:
        """Load built-in and entry-point plugins, then freeze the registry.

        Returns:
            List of loaded plugin names
        """
        loaded_plugins = []

        for name, plugin_class in BUILTIN_PLUGINS.items():
            if not self.is_enabled(name):
                logger.info(f"Built-in plugin {name} is disabled")
                continue
            if self.register_plugin(plugin_class()):
                loaded_plugins.append(name)

        if self.config.get("load_entry_points", True):
            loaded_plugins.extend(self._load_entry_points())

        self.registry.freeze()
        return loaded_plugins

    def _load_entry_points(self) -> List[str]:
        loaded = []
        for entry_point in importlib.metadata.entry_points(group=ENTRY_POINT_GROUP):
            if not self.is_enabled(entry_point.name):
                logger.info(f"Plugin entry point {entry_point.name} is disabled")
                continue
            try:
                logger.info(f"Found plugin entry point: {entry_point.name}")
                plugin_factory = entry_point.load()
                plugin = plugin_factory()
            except Exception as e:
                logger.error(f"Error loading plugin {entry_point.name}: {e}")
                continue
            if self.register_plugin(plugin):
                loaded.append(plugin.name)
        return loaded

    def get_plugin(self, name: str) -> Optional[Plugin]:
        return self.registry.get_plugin(name)

    def list_plugins(self) -> List[Dict[str, Any]]:
        """List all registered plugins with their details."""
        return [
            {
                "name": plugin.name,
                "displayName": plugin.display_name,
                "description": plugin.description,
                "routePrefix": plugin.route_prefix,
                "tools": [
                    tool.name for tool in self.registry.get_plugin_tools(plugin.name)
                ],
            }
            for plugin in self.registry.list_plugins()
        ]

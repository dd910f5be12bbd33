"""
Plugin registry for the tool router.

This module implements the concrete PluginRegistry that holds every installed
plugin and the tools it exposes. The registry is filled at startup and frozen
before the first request is served.
"""

import logging
from typing import Dict, List, Optional, Tuple

from tool_router.domains.errors import PluginRegistrationError
from tool_router.interfaces.plugins.plugins import Plugin, Tool
from tool_router.interfaces.plugins.plugins import (
    PluginRegistry as PluginRegistryInterface,
)

logger = logging.getLogger(__name__)


class PluginRegistry(PluginRegistryInterface):
    """Instance-based registry of plugins and their tools."""

    def __init__(self):
        """Initialize an empty, unfrozen registry."""
        self._plugins: Dict[str, Plugin] = {}
        self._tools: Dict[str, Tool] = {}
        self._owners: Dict[str, str] = {}  # tool name -> plugin id
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, plugin: Plugin) -> None:
        """Register a plugin and all of its tools.

        Raises:
            PluginRegistrationError: The registry is frozen, the plugin id is
                already taken, or one of its tool names is already registered.
        """
        if self._frozen:
            raise PluginRegistrationError(
                f"Cannot register plugin {plugin.name}: registry is frozen"
            )
        if plugin.name in self._plugins:
            raise PluginRegistrationError(
                f"Plugin {plugin.name} is already registered"
            )

        tools = plugin.get_tools()
        seen = set()
        for tool in tools:
            owner = self._owners.get(tool.name)
            if owner is not None or tool.name in seen:
                raise PluginRegistrationError(
                    f"Tool {tool.name} from plugin {plugin.name} collides with "
                    f"the tool of the same name from plugin {owner or plugin.name}"
                )
            seen.add(tool.name)

        self._plugins[plugin.name] = plugin
        for tool in tools:
            self._tools[tool.name] = tool
            self._owners[tool.name] = plugin.name
        logger.info(
            f"Registered plugin {plugin.name} with tools: {[t.name for t in tools]}"
        )

    def freeze(self) -> None:
        self._frozen = True
        logger.info(
            f"Plugin registry frozen with {len(self._plugins)} plugins "
            f"and {len(self._tools)} tools"
        )

    def list_plugins(self) -> List[Plugin]:
        return list(self._plugins.values())

    def list_tool_names(self) -> List[str]:
        return list(self._tools.keys())

    def get_plugin(self, plugin_id: str) -> Optional[Plugin]:
        return self._plugins.get(plugin_id)

    def get_tool(self, tool_name: str) -> Optional[Tool]:
        return self._tools.get(tool_name)

    def get_owner(self, tool_name: str) -> Optional[Plugin]:
        """Get the plugin that contributed a tool."""
        plugin_id = self._owners.get(tool_name)
        return self._plugins.get(plugin_id) if plugin_id else None

    def get_plugin_tools(self, plugin_id: str) -> List[Tool]:
        return [
            tool for name, tool in self._tools.items() if self._owners[name] == plugin_id
        ]

    def iter_tools(self) -> List[Tuple[Plugin, Tool]]:
        return [
            (self._plugins[self._owners[name]], tool)
            for name, tool in self._tools.items()
        ]

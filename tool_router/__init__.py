"""
Tool Router - discovery, resolution and execution of plugin tools.

This package enumerates the tools contributed by plugins, keeps a searchable
catalog of their metadata, resolves names or free-text queries to one tool,
extracts missing parameters from free text and dispatches the call.
"""

# Client interface (main entry point)
from tool_router.client.tool_router import ToolRouter

# Factory for wiring the services
from tool_router.factories.router_factory import ToolRouterFactory

# Plugin authoring
from tool_router.plugins.base import ToolPlugin
from tool_router.plugins.manager import PluginManager
from tool_router.plugins.registry import PluginRegistry
from tool_router.plugins.tools.function_tool import FunctionTool
from tool_router.interfaces.plugins.plugins import Plugin, Tool

# Package metadata
__all__ = [
    # Main client interface
    "ToolRouter",
    # Factories
    "ToolRouterFactory",
    # Plugins and tools
    "PluginManager",
    "PluginRegistry",
    "ToolPlugin",
    "FunctionTool",
    "Plugin",
    "Tool",
]

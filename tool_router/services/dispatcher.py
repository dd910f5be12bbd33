"""
Tool dispatch service.

The routing table is built once from the frozen plugin registry. Lookups are
exact; every tool-logic error is returned as a failed ToolExecutionResult.
"""
import logging
from typing import Any, Dict, Optional, Tuple

from tool_router.domains.errors import (
    DownstreamHandlerError,
    ToolRouterError,
    UnknownToolError,
)
from tool_router.domains.requests import ToolExecutionResult
from tool_router.interfaces.plugins.plugins import Plugin, PluginRegistry, Tool
from tool_router.interfaces.services.dispatcher import (
    ToolDispatcher as ToolDispatcherInterface,
)

logger = logging.getLogger(__name__)


class ToolDispatcher(ToolDispatcherInterface):
    """Routes tool names to plugin handlers."""

    def __init__(self, registry: PluginRegistry):
        self._routes: Dict[str, Tuple[Plugin, Tool]] = {
            tool.name: (plugin, tool) for plugin, tool in registry.iter_tools()
        }
        logger.info(f"Routing table built with {len(self._routes)} tools")

    def has_tool(self, name: str) -> bool:
        return name in self._routes

    async def execute(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> ToolExecutionResult:
        route = self._routes.get(name)
        if route is None:
            logger.warning(f"Unknown tool requested: {name}")
            return ToolExecutionResult.fail(name, UnknownToolError(name))

        plugin, tool = route
        logger.debug(f"Dispatching {name} to plugin {plugin.name} with {arguments}")
        try:
            data = await self._invoke(plugin, tool, arguments or {})
        except ToolRouterError as e:
            logger.error(f"Tool {name} failed: {e}")
            return ToolExecutionResult.fail(name, e, plugin.name)
        return ToolExecutionResult.ok(name, data, plugin.name)

    async def _invoke(self, plugin: Plugin, tool: Tool, arguments: Dict[str, Any]) -> Any:
        """Run the handler, wrapping handler faults as DownstreamHandlerError."""
        if plugin.data_service is None:
            raise DownstreamHandlerError(
                f"Plugin {plugin.name} has no data service configured"
            )
        try:
            return await tool.execute(plugin.data_service, arguments)
        except ToolRouterError:
            raise
        except Exception as e:
            raise DownstreamHandlerError(str(e) or type(e).__name__) from e

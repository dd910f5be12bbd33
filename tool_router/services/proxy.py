"""
Tool proxy service.

Framework-independent handlers for the inbound tool requests: invoke a tool
(or a multi_tool_use batch), search the catalog, list tool schemas and report
health.
"""
import asyncio
import logging
from typing import Any, Dict, Optional, Union

from tool_router.domains.requests import (
    MultiToolBatchResult,
    SearchRequest,
    SearchResponse,
    ToolCallRequest,
    ToolExecutionResult,
)
from tool_router.domains.tools import utc_now
from tool_router.interfaces.plugins.plugins import PluginRegistry
from tool_router.interfaces.providers.catalog import ToolCatalogProvider
from tool_router.interfaces.services.dispatcher import ToolDispatcher
from tool_router.interfaces.services.orchestrator import MultiToolOrchestrator
from tool_router.interfaces.services.parameters import ParameterExtractor
from tool_router.interfaces.services.proxy import (
    ToolProxyService as ToolProxyServiceInterface,
)

logger = logging.getLogger(__name__)

SERVICE_NAME = "tool-router"


class ToolProxyService(ToolProxyServiceInterface):
    """Entry point for tool calls coming from agents or HTTP handlers."""

    def __init__(
        self,
        registry: PluginRegistry,
        catalog: ToolCatalogProvider,
        extractor: ParameterExtractor,
        dispatcher: ToolDispatcher,
        orchestrator: MultiToolOrchestrator,
    ):
        self.registry = registry
        self.catalog = catalog
        self.extractor = extractor
        self.dispatcher = dispatcher
        self.orchestrator = orchestrator

    async def call_tool(
        self, request: ToolCallRequest, timeout: Optional[float] = None
    ) -> Union[ToolExecutionResult, MultiToolBatchResult]:
        """Handle a tool invocation request.

        Args:
            request: Inbound request
            timeout: Seconds before the in-flight call is cancelled

        Returns:
            A single result, or a batch result for explicit tool_uses
        """
        tool_name = request.tool or ""
        logger.info(f"Received tool call request: {tool_name}")
        try:
            return await asyncio.wait_for(self._dispatch(request), timeout)
        except asyncio.TimeoutError:
            logger.error(f"Tool call {tool_name} timed out after {timeout}s")
            return ToolExecutionResult.fail(
                tool_name, f"Tool call timed out after {timeout} seconds"
            )

    async def _dispatch(
        self, request: ToolCallRequest
    ) -> Union[ToolExecutionResult, MultiToolBatchResult]:
        if request.is_multi_tool:
            return await self.orchestrator.run(
                request.arguments,
                query=request.query,
                original_user_input=request.original_user_input,
            )
        if not request.tool:
            if not request.query:
                return ToolExecutionResult.fail(
                    "", "Request must name a tool or carry a query"
                )
            return await self.orchestrator.run_query(
                request.query, request.original_user_input
            )

        arguments = request.arguments or {}
        if not arguments and request.free_text:
            arguments = self.extractor.extract(request.free_text)
            logger.info(f"Extracted parameters for {request.tool}: {arguments}")
        return await self.dispatcher.execute(request.tool or "", arguments)

    async def search(self, request: SearchRequest) -> SearchResponse:
        """Search the catalog.

        Raises:
            CatalogUnavailableError: The catalog could not be searched.
        """
        results = await self.catalog.search(request.query)
        logger.info(f"Search '{request.query}' returned {len(results)} results")
        return SearchResponse(
            value=[descriptor.to_document() for descriptor in results],
            count=len(results),
        )

    def get_tool_schemas(self) -> Dict[str, Any]:
        plugins = {}
        for plugin in self.registry.list_plugins():
            tools = []
            for tool in self.registry.get_plugin_tools(plugin.name):
                tools.append(
                    {
                        "name": tool.name,
                        "description": tool.description,
                        "parameters": [spec.model_dump() for spec in tool.parameters],
                        "requiresParameters": any(
                            spec.required for spec in tool.parameters
                        ),
                        "schema": tool.get_schema(),
                    }
                )
            plugins[plugin.name] = {
                "displayName": plugin.display_name,
                "routePrefix": plugin.route_prefix,
                "tools": tools,
            }
        return {"plugins": plugins, "toolCount": len(self.registry.list_tool_names())}

    def health(self) -> Dict[str, Any]:
        return {
            "status": "healthy",
            "service": SERVICE_NAME,
            "timestamp": utc_now().isoformat(),
            "plugins": len(self.registry.list_plugins()),
            "tools": len(self.registry.list_tool_names()),
        }


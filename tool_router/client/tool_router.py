"""
Simplified client interface for the tool router.

This module provides a clean API for end users to call, search and resolve
tools without dealing with the wiring of the individual services.
"""

import asyncio
import importlib.util
import json
import logging
from typing import Any, Dict, List, Optional

from tool_router.domains.errors import ToolRouterError
from tool_router.domains.requests import SearchRequest, ToolCallRequest
from tool_router.factories.router_factory import ToolRouterFactory
from tool_router.interfaces.client.client import ToolRouter as ToolRouterInterface

logger = logging.getLogger(__name__)


def load_config(config_path: str) -> Dict[str, Any]:
    """Load configuration from a JSON file or a Python file exposing ``config``."""
    with open(config_path, "r") as f:
        if config_path.endswith(".json"):
            return json.load(f)
    spec = importlib.util.spec_from_file_location("config", config_path)
    config_module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(config_module)
    return config_module.config


class ToolRouter(ToolRouterInterface):
    """Simplified client interface for the tool router."""

    def __init__(self, config_path: str = None, config: Dict[str, Any] = None):
        """Initialize the router from config file or dictionary.

        Args:
            config_path: Path to configuration file (JSON or Python)
            config: Configuration dictionary
        """
        if not config and not config_path:
            raise ValueError("Either config or config_path must be provided")

        if config_path:
            config = load_config(config_path)

        self.services = ToolRouterFactory.create_from_config(config)
        self._started = False
        self._start_lock = asyncio.Lock()

    async def start(self) -> None:
        """Build the catalog once if ``catalog.index_on_startup`` is set."""
        async with self._start_lock:
            if self._started:
                return
            self._started = True
            if self.services.index_on_startup:
                result = await self.reindex()
                if not result["success"]:
                    logger.error(f"Startup indexing failed: {result['error']}")

    async def call(
        self,
        tool: str,
        arguments: Optional[Dict[str, Any]] = None,
        original_user_input: Optional[str] = None,
        query: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Invoke a tool (or multi_tool_use) and return the serialized result."""
        await self.start()
        request = ToolCallRequest(
            tool=tool,
            arguments=arguments,
            originalUserInput=original_user_input,
            query=query,
        )
        result = await self.services.proxy.call_tool(request, timeout=timeout)
        return result.to_dict()

    async def search(self, query: str) -> Dict[str, Any]:
        await self.start()
        response = await self.services.proxy.search(SearchRequest(query=query))
        return response.to_dict()

    async def resolve(self, query: str) -> Optional[Dict[str, Any]]:
        await self.start()
        descriptor = await self.services.resolver.resolve_by_query(query)
        return descriptor.to_document() if descriptor else None

    def resolve_name(self, name: str) -> Optional[Dict[str, Any]]:
        descriptor = self.services.resolver.resolve_by_name(name)
        return descriptor.to_document() if descriptor else None

    async def reindex(self) -> Dict[str, Any]:
        """Rebuild the catalog, reporting failures instead of raising them."""
        try:
            report = await self.services.indexer.index_tools()
        except ToolRouterError as e:
            logger.error(f"Re-index failed: {e}")
            return {"success": False, "error": str(e), "errorType": e.error_type}
        return {"success": True, **report.to_dict()}

    def extract_parameters(self, text: str) -> Dict[str, str]:
        return self.services.extractor.extract(text)

    def list_tools(self) -> List[Dict[str, Any]]:
        indexer = self.services.indexer
        return [
            {
                "name": tool.name,
                "plugin": plugin.name,
                "path": indexer.invocation_path(plugin, tool),
                "parameters": [spec.to_text() for spec in tool.parameters],
                "description": tool.description,
            }
            for plugin, tool in self.services.registry.iter_tools()
        ]

    def tool_schemas(self) -> Dict[str, Any]:
        return self.services.proxy.get_tool_schemas()

    def health(self) -> Dict[str, Any]:
        return self.services.proxy.health()

"""
Thirdapi plugin: merchandise master data imported into MongoDB.
"""
from typing import Any, Dict, List

from tool_router.interfaces.plugins.plugins import Tool
from tool_router.interfaces.providers.data_storage import DataStorageProvider
from tool_router.plugins.base import ToolPlugin
from tool_router.plugins.thirdapi import tools
from tool_router.plugins.thirdapi.data_service import MongoThirdApiDataService
from tool_router.plugins.tools.function_tool import FunctionTool


class ThirdApiPlugin(ToolPlugin):
    """Built-in analytics plugin over the ThirdApi Pump and Summary collections."""

    plugin_id = "thirdapi"
    plugin_display_name = "Third API Plugin"
    plugin_description = "A plugin for Third API data operations using MongoDB"
    plugin_route_prefix = "thirdapi"

    def get_tools(self) -> List[Tool]:
        return [
            FunctionTool(tools.get_content_types_summary),
            FunctionTool(tools.get_prices_without_base_item),
            FunctionTool(tools.get_latest_statistics),
            FunctionTool(tools.get_plu_data),
            FunctionTool(tools.get_articles_with_ingredients),
            FunctionTool(
                tools.find_articles_by_name,
                parameter_descriptions={
                    "name": "Part of the article name to search for (case-insensitive)"
                },
            ),
            FunctionTool(
                tools.find_article_by_content_key,
                parameter_descriptions={
                    "content_key": "Content key, zero-padded to 18 digits "
                    "(e.g. 1615 becomes 000000000000001615)"
                },
            ),
        ]

    def create_data_service(
        self, storage: DataStorageProvider, config: Dict[str, Any]
    ) -> MongoThirdApiDataService:
        return MongoThirdApiDataService(
            storage,
            pump_collection=config.get("pump_collection", "Pump"),
            summary_collection=config.get("summary_collection", "Summary"),
        )

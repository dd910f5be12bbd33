"""
Supermarket plugin: products, sales and inventory tools.
"""
from typing import Any, Dict, List

from tool_router.interfaces.plugins.plugins import Tool
from tool_router.interfaces.providers.data_storage import DataStorageProvider
from tool_router.plugins.base import ToolPlugin
from tool_router.plugins.supermarket import tools
from tool_router.plugins.supermarket.data_service import MongoSupermarketDataService
from tool_router.plugins.tools.function_tool import FunctionTool


class SupermarketPlugin(ToolPlugin):
    """Built-in plugin for the supermarket database."""

    plugin_id = "supermarket"
    plugin_display_name = "Supermarket Plugin"
    plugin_description = "Products, sales, revenue and inventory of the supermarket"
    plugin_route_prefix = "supermarket"

    def get_tools(self) -> List[Tool]:
        return [
            FunctionTool(tools.get_products),
            FunctionTool(
                tools.get_sales_data, parameter_descriptions=tools.DATE_DESCRIPTIONS
            ),
            FunctionTool(
                tools.get_total_revenue, parameter_descriptions=tools.DATE_DESCRIPTIONS
            ),
            FunctionTool(
                tools.get_low_stock_products,
                parameter_descriptions={"threshold": "Stock threshold level"},
            ),
            FunctionTool(
                tools.get_sales_by_category,
                parameter_descriptions=tools.DATE_DESCRIPTIONS,
            ),
            FunctionTool(tools.get_inventory_status),
            FunctionTool(
                tools.get_daily_summary,
                parameter_descriptions={
                    "date": "Specific date in YYYY-MM-DD format (optional, defaults to today)"
                },
            ),
            FunctionTool(tools.get_detailed_inventory),
        ]

    def create_data_service(
        self, storage: DataStorageProvider, config: Dict[str, Any]
    ) -> MongoSupermarketDataService:
        return MongoSupermarketDataService(
            storage,
            products_collection=config.get("products_collection", "products"),
            sales_collection=config.get("sales_collection", "sales"),
            recent_sales_days=config.get("recent_sales_days", 7),
        )

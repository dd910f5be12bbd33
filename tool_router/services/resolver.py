"""
Tool resolution service.

Maps an explicit tool name or a free-text query to exactly one active tool
descriptor. Name lookups are exact; query lookups go through the catalog and
apply the analytics preference rule.
"""
import logging
from typing import Dict, Iterable, List, Optional

from tool_router.domains.tools import ToolDescriptor
from tool_router.interfaces.providers.catalog import ToolCatalogProvider
from tool_router.interfaces.services.resolver import (
    ToolResolver as ToolResolverInterface,
)

logger = logging.getLogger(__name__)

DEFAULT_ANALYTICS_PLUGINS = ["thirdapi", "gkapi"]
DEFAULT_ANALYTICS_KEYWORDS = [
    "analytics",
    "statistics",
    "content",
    "mongodb",
    "prices",
    "summary",
    "ingredient",
]


class ToolResolver(ToolResolverInterface):
    """Resolves tool names and queries to active descriptors."""

    def __init__(
        self,
        catalog: ToolCatalogProvider,
        descriptors: Optional[Iterable[ToolDescriptor]] = None,
        analytics_plugins: Optional[List[str]] = None,
        analytics_keywords: Optional[List[str]] = None,
    ):
        """Initialize the resolver.

        Args:
            catalog: Catalog used for query-based resolution
            descriptors: Descriptors of registered tools for name lookups
            analytics_plugins: Plugin ids preferred for analytics queries
            analytics_keywords: Query markers of analytics intent
        """
        self.catalog = catalog
        self.analytics_plugins = [
            plugin.lower() for plugin in (analytics_plugins or DEFAULT_ANALYTICS_PLUGINS)
        ]
        self.analytics_keywords = [
            keyword.lower()
            for keyword in (analytics_keywords or DEFAULT_ANALYTICS_KEYWORDS)
        ]
        self._by_name: Dict[str, ToolDescriptor] = {}
        self.load_descriptors(descriptors or [])

    def load_descriptors(self, descriptors: Iterable[ToolDescriptor]) -> None:
        """Replace the name lookup table with the active descriptors given."""
        self._by_name = {
            descriptor.name: descriptor
            for descriptor in descriptors
            if descriptor.is_active
        }

    def resolve_by_name(self, name: str) -> Optional[ToolDescriptor]:
        return self._by_name.get(name)

    def is_analytics_query(self, query: str) -> bool:
        lowered = query.lower()
        return any(keyword in lowered for keyword in self.analytics_keywords)

    def is_analytics_tool(self, descriptor: ToolDescriptor) -> bool:
        plugin_id = descriptor.plugin_id.lower()
        path = descriptor.invocation_path.lower()
        return any(
            plugin_id == group or f"/{group}/" in path
            for group in self.analytics_plugins
        )

    def select(self, query: str, results: List[ToolDescriptor]) -> Optional[ToolDescriptor]:
        """Pick one descriptor from ranked search results."""
        active = [result for result in results if result.is_active]
        if self.is_analytics_query(query):
            for result in active:
                if self.is_analytics_tool(result):
                    return result
        for result in active:
            if result.name and result.invocation_path:
                return result
        return None

    async def resolve_by_query(self, query: str) -> Optional[ToolDescriptor]:
        """Search the catalog and apply the analytics preference rule.

        Raises:
            CatalogUnavailableError: The catalog could not be searched.
        """
        results = await self.catalog.search(query)
        logger.debug(
            f"Catalog search for '{query}' returned {[r.name for r in results]}"
        )
        selected = self.select(query, results)
        if selected is None:
            logger.warning(f"No suitable tool found for query: {query}")
        else:
            logger.info(f"Resolved query '{query}' to tool {selected.name}")
        return selected

"""
Tool indexing service.

Builds one ToolDescriptor per registered tool and publishes the full set to
the catalog with full-replace semantics: ensure the index, delete every
existing entry, upload the new set in one batch.
"""
import asyncio
import logging
import re
import uuid
from typing import Dict, List, Optional, Tuple

from tool_router.domains.errors import (
    CatalogIncompleteError,
    ConcurrentReindexError,
    ToolRouterError,
)
from tool_router.domains.tools import IndexingReport, ToolDescriptor, utc_now
from tool_router.interfaces.plugins.plugins import Plugin, PluginRegistry, Tool
from tool_router.interfaces.providers.catalog import ToolCatalogProvider
from tool_router.interfaces.services.indexing import (
    ToolIndexingService as ToolIndexingServiceInterface,
)

logger = logging.getLogger(__name__)

# Curated invocation paths; these win over the derived fallback.
DEFAULT_TOOL_PATHS: Dict[str, str] = {
    "GetProducts": "/api/supermarket/products",
    "GetSalesData": "/api/supermarket/sales",
    "GetTotalRevenue": "/api/supermarket/revenue",
    "GetLowStockProducts": "/api/supermarket/products/low-stock",
    "GetSalesByCategory": "/api/supermarket/sales/by-category",
    "GetInventoryStatus": "/api/supermarket/inventory/status",
    "GetDailySummary": "/api/supermarket/sales/daily-summary",
    "GetDetailedInventory": "/api/supermarket/inventory/detailed",
    "GetPricesWithoutBaseItem": "/api/thirdapi/prices-without-base-item",
    "GetLatestStatistics": "/api/thirdapi/latest-statistics",
    "GetContentTypesSummary": "/api/thirdapi/content-types",
}

_KEBAB_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_kebab_case(name: str) -> str:
    """``LowStockProducts`` -> ``low-stock-products``"""
    return _KEBAB_BOUNDARY.sub("-", name).lower()


def derive_invocation_path(route_prefix: str, tool_name: str) -> str:
    """Fallback path: ``/api/{prefix}/{kebab name without a leading Get}``."""
    name = tool_name[3:] if tool_name.startswith("Get") and len(tool_name) > 3 else tool_name
    return f"/api/{route_prefix}/{to_kebab_case(name)}"


class ToolIndexingService(ToolIndexingServiceInterface):
    """Extracts tool metadata from the registry and publishes it to the catalog."""

    def __init__(
        self,
        registry: PluginRegistry,
        catalog: ToolCatalogProvider,
        tool_paths: Optional[Dict[str, str]] = None,
    ):
        self.registry = registry
        self.catalog = catalog
        self.tool_paths = {**DEFAULT_TOOL_PATHS, **(tool_paths or {})}
        self._lock = asyncio.Lock()

    @property
    def is_indexing(self) -> bool:
        return self._lock.locked()

    def invocation_path(self, plugin: Plugin, tool: Tool) -> str:
        explicit = self.tool_paths.get(tool.name)
        if explicit:
            return explicit
        return derive_invocation_path(plugin.route_prefix, tool.name)

    def extract_tool_descriptors(self) -> List[ToolDescriptor]:
        """Build one active descriptor per registered tool, in registration order."""
        now = utc_now()
        descriptors = [
            ToolDescriptor(
                id=uuid.uuid4().hex,
                name=tool.name,
                plugin_id=plugin.name,
                description=tool.description,
                invocation_path=self.invocation_path(plugin, tool),
                parameter_signature=tool.parameters,
                response_type_hint=tool.response_type_hint,
                is_active=True,
                last_updated=now,
            )
            for plugin, tool in self.registry.iter_tools()
        ]
        logger.info(f"Extracted {len(descriptors)} tool descriptors")
        return descriptors

    async def index_tools(self) -> IndexingReport:
        """Fully replace the catalog contents with a fresh extraction.

        Raises:
            ConcurrentReindexError: Another rebuild is in flight.
            CatalogUnavailableError: The catalog failed; previous contents are
                restored when possible.
            CatalogIncompleteError: The catalog was emptied and neither the new
                nor the previous contents could be uploaded.
        """
        if self._lock.locked():
            raise ConcurrentReindexError()

        async with self._lock:
            report = IndexingReport()
            descriptors = self.extract_tool_descriptors()
            if not descriptors:
                logger.warning("No tools found to index; catalog left untouched")
                report.finished_at = utc_now()
                return report

            await self.catalog.ensure_index()
            previous = await self.catalog.get_all()
            replace = asyncio.ensure_future(self._replace(previous, descriptors))
            try:
                report.replaced, report.indexed = await asyncio.shield(replace)
            except asyncio.CancelledError:
                # the lock stays held until the pending write has settled
                await asyncio.wait({replace})
                if replace.exception() is not None:
                    raise replace.exception()
                logger.warning("Re-index cancelled after the catalog was rebuilt")
                raise
            report.finished_at = utc_now()
            logger.info(
                f"Catalog rebuilt: {report.indexed} tools indexed, "
                f"{report.replaced} previous entries replaced"
            )
            return report

    async def _replace(
        self, previous: List[ToolDescriptor], descriptors: List[ToolDescriptor]
    ) -> Tuple[int, int]:
        replaced = 0
        if previous:
            replaced = await self.catalog.delete_all()
        try:
            indexed = await self.catalog.upload(descriptors)
        except ToolRouterError as e:
            logger.error(f"Catalog upload failed, restoring previous contents: {e}")
            await self._restore(previous, e)
            raise
        return replaced, indexed

    async def _restore(
        self, previous: List[ToolDescriptor], cause: ToolRouterError
    ) -> None:
        try:
            await self.catalog.delete_all()
            if previous:
                await self.catalog.upload(previous)
        except ToolRouterError as e:
            logger.error(f"Catalog restore failed, catalog is incomplete: {e}")
            raise CatalogIncompleteError(
                f"Catalog left incomplete after failed rebuild: {cause}"
            ) from e

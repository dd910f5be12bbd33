"""
Tests for the MongoDB-backed tool catalog.
"""

from unittest.mock import MagicMock

import pytest
from pymongo.errors import PyMongoError, ServerSelectionTimeoutError

from tool_router.adapters.mongo_catalog import MongoToolCatalog
from tool_router.domains.errors import CatalogUnavailableError
from tool_router.domains.tools import ToolDescriptor
from tool_router.services.resolver import ToolResolver


@pytest.fixture
def descriptors():
    return [
        ToolDescriptor(
            id="products",
            name="GetProducts",
            plugin_id="supermarket",
            description="Get all products in the supermarket inventory",
            invocation_path="/api/supermarket/products",
        ),
        ToolDescriptor(
            id="low-stock",
            name="GetLowStockProducts",
            plugin_id="supermarket",
            description="Get products with low stock levels",
            invocation_path="/api/supermarket/products/low-stock",
        ),
        ToolDescriptor(
            id="statistics",
            name="GetLatestStatistics",
            plugin_id="thirdapi",
            description="Get latest processing statistics",
            invocation_path="/api/thirdapi/latest-statistics",
        ),
    ]


@pytest.fixture
def catalog(mongo_adapter):
    return MongoToolCatalog(mongo_adapter, collection="mcp_tools")


class TestMongoToolCatalog:
    """Test suite for MongoToolCatalog."""

    @pytest.mark.asyncio
    async def test_ensure_index(self, catalog, mongo_adapter):
        assert await catalog.index_exists() is False
        await catalog.ensure_index()
        await catalog.ensure_index()

        assert await catalog.index_exists() is True
        indexes = mongo_adapter.db["mcp_tools"].index_information()
        keys = [info["key"] for info in indexes.values()]
        assert [("name", 1)] in keys
        assert [("isActive", 1)] in keys

    @pytest.mark.asyncio
    async def test_upload_and_get_all(self, catalog, descriptors, mongo_adapter):
        await catalog.ensure_index()
        assert await catalog.upload(descriptors) == 3

        stored = mongo_adapter.find_one("mcp_tools", {"name": "GetProducts"})
        assert stored["_id"] == "products"
        assert stored["endpoint"] == "/api/supermarket/products"

        names = [d.name for d in await catalog.get_all()]
        assert sorted(names) == sorted(d.name for d in descriptors)

    @pytest.mark.asyncio
    async def test_upload_empty(self, catalog):
        await catalog.ensure_index()
        assert await catalog.upload([]) == 0

    @pytest.mark.asyncio
    async def test_search_ranked(self, catalog, descriptors):
        await catalog.ensure_index()
        await catalog.upload(descriptors)

        results = await catalog.search("low stock")
        assert [r.name for r in results] == ["GetLowStockProducts"]

        results = await catalog.search("Statistics")
        assert [r.name for r in results] == ["GetLatestStatistics"]

    @pytest.mark.asyncio
    async def test_search_everything(self, catalog, descriptors):
        await catalog.ensure_index()
        await catalog.upload(descriptors)
        assert len(await catalog.search("*")) == 3

    @pytest.mark.asyncio
    async def test_search_everything_respects_top(self, mongo_adapter, descriptors):
        catalog = MongoToolCatalog(mongo_adapter, top=2)
        await catalog.ensure_index()
        await catalog.upload(descriptors)
        assert len(await catalog.search("*")) == 2

    @pytest.mark.asyncio
    async def test_search_punctuation_only(self, catalog, descriptors):
        await catalog.ensure_index()
        await catalog.upload(descriptors)
        assert await catalog.search("???") == []

    @pytest.mark.asyncio
    async def test_delete_all(self, catalog, descriptors):
        await catalog.ensure_index()
        await catalog.upload(descriptors)
        assert await catalog.delete_all() == 3
        assert await catalog.get_all() == []

    @pytest.mark.asyncio
    async def test_driver_errors_become_catalog_unavailable(self):
        adapter = MagicMock()
        adapter.find.side_effect = ServerSelectionTimeoutError("no servers")
        adapter.delete_all.side_effect = PyMongoError("write failed")
        catalog = MongoToolCatalog(adapter)

        with pytest.raises(CatalogUnavailableError) as exc_info:
            await catalog.search("stock")
        assert "no servers" in str(exc_info.value)

        with pytest.raises(CatalogUnavailableError):
            await catalog.delete_all()

    @pytest.mark.asyncio
    async def test_malformed_documents_are_skipped(
        self, catalog, descriptors, mongo_adapter
    ):
        await catalog.ensure_index()
        await catalog.upload(descriptors)
        mongo_adapter.insert_many(
            "mcp_tools",
            [
                {
                    "_id": "blank",
                    "name": "",
                    "description": "Statistics placeholder left by an older indexer",
                    "pluginId": "thirdapi",
                    "invocationPath": "/api/thirdapi/blank",
                }
            ],
        )

        results = await catalog.search("statistics")
        assert [r.name for r in results] == ["GetLatestStatistics"]
        assert len(await catalog.search("*")) == 3
        assert len(await catalog.get_all()) == 3

        resolver = ToolResolver(catalog)
        selected = await resolver.resolve_by_query("show me statistics")
        assert selected.name == "GetLatestStatistics"

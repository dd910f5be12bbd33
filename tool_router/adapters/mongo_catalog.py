"""
MongoDB-backed tool catalog.

Documents follow the catalog schema produced by ToolDescriptor.to_document().
Candidates are pre-filtered with case-insensitive regular expressions and
ranked with the same scorer as the in-memory catalog.
"""
import asyncio
import logging
import re
from typing import Any, Callable, Dict, List

from pydantic import ValidationError
from pymongo import ASCENDING
from pymongo.errors import PyMongoError

from tool_router.adapters.memory_catalog import (
    DEFAULT_TOP,
    is_match_all,
    rank,
    tokenize,
)
from tool_router.domains.errors import CatalogUnavailableError
from tool_router.domains.tools import ToolDescriptor
from tool_router.interfaces.providers.catalog import ToolCatalogProvider
from tool_router.interfaces.providers.data_storage import DataStorageProvider

logger = logging.getLogger(__name__)

SEARCHABLE_FIELDS = [
    "name",
    "description",
    "pluginId",
    "invocationPath",
    "httpMethod",
    "parameters",
    "responseType",
]


class MongoToolCatalog(ToolCatalogProvider):
    """Tool catalog stored in a MongoDB collection."""

    def __init__(
        self,
        db_adapter: DataStorageProvider,
        collection: str = "mcp_tools",
        top: int = DEFAULT_TOP,
    ):
        self.db = db_adapter
        self.collection = collection
        self.top = top

    async def _call(self, func: Callable[..., Any], *args: Any) -> Any:
        try:
            return await asyncio.to_thread(func, *args)
        except PyMongoError as e:
            logger.error(f"Tool catalog '{self.collection}' failed: {e}")
            raise CatalogUnavailableError(f"Tool catalog unavailable: {e}") from e

    async def ensure_index(self) -> None:
        if await self.index_exists():
            return
        logger.info(f"Creating tool catalog collection '{self.collection}'")
        await self._call(self.db.create_collection, self.collection)
        await self._call(self.db.create_index, self.collection, [("name", ASCENDING)])
        await self._call(
            self.db.create_index, self.collection, [("isActive", ASCENDING)]
        )

    async def index_exists(self) -> bool:
        return await self._call(self.db.collection_exists, self.collection)

    async def delete_all(self) -> int:
        return await self._call(self.db.delete_all, self.collection, {})

    async def upload(self, descriptors: List[ToolDescriptor]) -> int:
        documents = []
        for descriptor in descriptors:
            document = descriptor.to_document()
            document["_id"] = descriptor.id
            documents.append(document)
        inserted = await self._call(self.db.insert_many, self.collection, documents)
        return len(inserted)

    def _to_descriptors(self, documents: List[Dict[str, Any]]) -> List[ToolDescriptor]:
        """Convert catalog documents, skipping entries that are not valid tools."""
        descriptors = []
        for document in documents:
            try:
                descriptors.append(ToolDescriptor.from_document(document))
            except ValidationError as e:
                logger.warning(
                    f"Skipping malformed document {document.get('_id')!r} in "
                    f"tool catalog '{self.collection}': {e.error_count()} errors"
                )
        return descriptors

    async def search(self, text: str) -> List[ToolDescriptor]:
        if is_match_all(text):
            documents = await self._call(
                self.db.find, self.collection, {}, None, self.top
            )
            return self._to_descriptors(documents)

        terms = set(tokenize(text))
        if not terms:
            return []
        query = {
            "$or": [
                {field: {"$regex": re.escape(term), "$options": "i"}}
                for field in SEARCHABLE_FIELDS
                for term in sorted(terms)
            ]
        }
        documents = await self._call(self.db.find, self.collection, query)
        candidates = self._to_descriptors(documents)
        return rank(candidates, text, self.top)

    async def get_all(self) -> List[ToolDescriptor]:
        documents = await self._call(self.db.find, self.collection, {})
        return self._to_descriptors(documents)

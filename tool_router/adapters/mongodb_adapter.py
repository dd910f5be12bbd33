"""
MongoDB adapter for the tool router.

This adapter implements the DataStorageProvider interface for MongoDB and is
shared by the Mongo-backed catalog and the built-in plugin data services.
"""
from typing import Dict, List, Optional, Tuple

from pymongo import MongoClient

from tool_router.interfaces.providers.data_storage import DataStorageProvider


class MongoDBAdapter(DataStorageProvider):
    """MongoDB implementation of DataStorageProvider."""

    def __init__(self, connection_string: str, database_name: str):
        self.client = MongoClient(connection_string)
        self.db = self.client[database_name]

    def create_collection(self, name: str) -> None:
        if name not in self.db.list_collection_names():
            self.db.create_collection(name)

    def collection_exists(self, name: str) -> bool:
        return name in self.db.list_collection_names()

    def insert_many(self, collection: str, documents: List[Dict]) -> List[str]:
        if not documents:
            return []
        result = self.db[collection].insert_many(documents)
        return [str(inserted_id) for inserted_id in result.inserted_ids]

    def find_one(
        self, collection: str, query: Dict, sort: Optional[List[Tuple]] = None
    ) -> Optional[Dict]:
        if sort:
            return self.db[collection].find_one(query, sort=sort)
        return self.db[collection].find_one(query)

    def find(
        self,
        collection: str,
        query: Dict,
        sort: Optional[List[Tuple]] = None,
        limit: int = 0,
        skip: int = 0,
        projection: Optional[Dict] = None,
    ) -> List[Dict]:
        cursor = self.db[collection].find(query, projection)
        if sort:
            cursor = cursor.sort(sort)
        if skip > 0:
            cursor = cursor.skip(skip)
        if limit > 0:
            cursor = cursor.limit(limit)
        return list(cursor)

    def delete_all(self, collection: str, query: Dict) -> int:
        return self.db[collection].delete_many(query).deleted_count

    def count_documents(self, collection: str, query: Dict) -> int:
        return self.db[collection].count_documents(query)

    def aggregate(self, collection: str, pipeline: List[Dict]) -> List[Dict]:
        return list(self.db[collection].aggregate(pipeline))

    def create_index(self, collection: str, keys: List[Tuple], **kwargs) -> None:
        self.db[collection].create_index(keys, **kwargs)

from abc import ABC, abstractmethod
from typing import Dict, List, Optional


class DataStorageProvider(ABC):
    """Interface for data storage providers."""

    @abstractmethod
    def create_collection(self, name: str) -> None:
        """Create a new collection."""
        pass

    @abstractmethod
    def collection_exists(self, name: str) -> bool:
        """Check if collection exists."""
        pass

    @abstractmethod
    def insert_many(self, collection: str, documents: List[Dict]) -> List[str]:
        """Insert a batch of documents into a collection."""
        pass

    @abstractmethod
    def find_one(
        self, collection: str, query: Dict, sort: Optional[List] = None
    ) -> Optional[Dict]:
        """Find a single document."""
        pass

    @abstractmethod
    def find(
        self,
        collection: str,
        query: Dict,
        sort: Optional[List] = None,
        limit: int = 0,
        skip: int = 0,
        projection: Optional[Dict] = None,
    ) -> List[Dict]:
        """Find documents matching query."""
        pass

    @abstractmethod
    def delete_all(self, collection: str, query: Dict) -> int:
        """Delete all documents matching query, returning the deleted count."""
        pass

    @abstractmethod
    def count_documents(self, collection: str, query: Dict) -> int:
        """Count documents matching query."""
        pass

    @abstractmethod
    def aggregate(self, collection: str, pipeline: List[Dict]) -> List[Dict]:
        """Run an aggregation pipeline."""
        pass

    @abstractmethod
    def create_index(self, collection: str, keys: List, **kwargs) -> None:
        """Create an index."""
        pass

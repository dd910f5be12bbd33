from abc import ABC, abstractmethod
from typing import List

from tool_router.domains.tools import ToolDescriptor


class ToolCatalogProvider(ABC):
    """Interface for the searchable store of tool descriptors.

    Every method is a suspension point; implementations raise
    CatalogUnavailableError when the backing store fails.
    """

    @abstractmethod
    async def ensure_index(self) -> None:
        """Create the catalog with its fixed schema if it does not exist."""
        pass

    @abstractmethod
    async def index_exists(self) -> bool:
        """Check whether the catalog exists."""
        pass

    @abstractmethod
    async def delete_all(self) -> int:
        """Remove every entry, returning how many were removed."""
        pass

    @abstractmethod
    async def upload(self, descriptors: List[ToolDescriptor]) -> int:
        """Upload descriptors in one batch, returning how many were stored."""
        pass

    @abstractmethod
    async def search(self, text: str) -> List[ToolDescriptor]:
        """Full-text search, best match first."""
        pass

    @abstractmethod
    async def get_all(self) -> List[ToolDescriptor]:
        """Return every entry in upload order."""
        pass

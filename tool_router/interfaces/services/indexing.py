from abc import ABC, abstractmethod
from typing import List

from tool_router.domains.tools import IndexingReport, ToolDescriptor


class ToolIndexingService(ABC):
    """Interface for building and publishing the tool catalog."""

    @abstractmethod
    def extract_tool_descriptors(self) -> List[ToolDescriptor]:
        """Build one descriptor per registered tool."""
        pass

    @abstractmethod
    async def index_tools(self) -> IndexingReport:
        """Fully replace the catalog contents with a fresh extraction."""
        pass

    @property
    @abstractmethod
    def is_indexing(self) -> bool:
        """Whether a rebuild is in flight."""
        pass

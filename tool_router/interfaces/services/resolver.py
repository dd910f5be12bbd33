from abc import ABC, abstractmethod
from typing import Optional

from tool_router.domains.tools import ToolDescriptor


class ToolResolver(ABC):
    """Interface for mapping a name or free-text query to one tool."""

    @abstractmethod
    def resolve_by_name(self, name: str) -> Optional[ToolDescriptor]:
        """Exact lookup against active descriptors; None when not found."""
        pass

    @abstractmethod
    async def resolve_by_query(self, query: str) -> Optional[ToolDescriptor]:
        """Catalog search with domain preference; None when nothing matches."""
        pass

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional


class ToolRouter(ABC):
    """Interface for the tool router client."""

    @abstractmethod
    async def call(
        self,
        tool: str,
        arguments: Optional[Dict[str, Any]] = None,
        original_user_input: Optional[str] = None,
        query: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> Dict[str, Any]:
        """Invoke a tool and return the serialized result."""
        pass

    @abstractmethod
    async def search(self, query: str) -> Dict[str, Any]:
        """Search the tool catalog."""
        pass

    @abstractmethod
    async def resolve(self, query: str) -> Optional[Dict[str, Any]]:
        """Resolve a free-text query to one tool document."""
        pass

    @abstractmethod
    async def reindex(self) -> Dict[str, Any]:
        """Rebuild the tool catalog."""
        pass

    @abstractmethod
    def extract_parameters(self, text: str) -> Dict[str, str]:
        """Extract parameters from free text."""
        pass

    @abstractmethod
    def list_tools(self) -> List[Dict[str, Any]]:
        """List registered tools."""
        pass

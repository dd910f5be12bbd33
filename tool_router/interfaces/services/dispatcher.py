from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from tool_router.domains.requests import ToolExecutionResult


class ToolDispatcher(ABC):
    """Interface for routing a tool name to its handler."""

    @abstractmethod
    def has_tool(self, name: str) -> bool:
        """Check whether a name is present in the routing table."""
        pass

    @abstractmethod
    async def execute(
        self, name: str, arguments: Optional[Dict[str, Any]] = None
    ) -> ToolExecutionResult:
        """Invoke the handler registered for name.

        Args:
            name: Exact tool name
            arguments: Argument map, coerced to the handler's declared types

        Returns:
            A result envelope; never raises for tool-logic errors
        """
        pass

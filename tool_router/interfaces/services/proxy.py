from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from tool_router.domains.requests import (
    MultiToolBatchResult,
    SearchRequest,
    SearchResponse,
    ToolCallRequest,
    ToolExecutionResult,
)


class ToolProxyService(ABC):
    """Interface for inbound tool proxy requests."""

    @abstractmethod
    async def call_tool(
        self, request: ToolCallRequest, timeout: Optional[float] = None
    ) -> Union[ToolExecutionResult, MultiToolBatchResult]:
        """Handle a tool invocation request."""
        pass

    @abstractmethod
    async def search(self, request: SearchRequest) -> SearchResponse:
        """Handle a catalog search request."""
        pass

    @abstractmethod
    def get_tool_schemas(self) -> Dict[str, Any]:
        """Describe every registered tool grouped by plugin."""
        pass

    @abstractmethod
    def health(self) -> Dict[str, Any]:
        """Report service status."""
        pass

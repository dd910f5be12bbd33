from abc import ABC, abstractmethod
from typing import Any, Dict, Optional, Union

from tool_router.domains.requests import MultiToolBatchResult, ToolExecutionResult


class MultiToolOrchestrator(ABC):
    """Interface for multi_tool_use requests."""

    @abstractmethod
    async def run(
        self,
        arguments: Optional[Dict[str, Any]] = None,
        query: Optional[str] = None,
        original_user_input: Optional[str] = None,
    ) -> Union[ToolExecutionResult, MultiToolBatchResult]:
        """Run a query-mode or explicit batch request."""
        pass

    @abstractmethod
    async def run_query(
        self, query: str, raw_input: Optional[str] = None
    ) -> ToolExecutionResult:
        """Resolve a free-text query to one tool and execute it."""
        pass

"""
Multi-tool orchestration service.

Handles ``multi_tool_use`` requests in one of two modes:

- query mode: resolve a free-text query to one tool, extract its parameters
  from the raw input, dispatch, and return a single result;
- batch mode: dispatch each ``tool_uses`` entry in input order and return one
  result per entry, whatever happened to the others.
"""
import logging
from typing import Any, Dict, List, Optional, Union

from pydantic import ValidationError

from tool_router.domains.errors import (
    CatalogUnavailableError,
    MalformedBatchRequestError,
    ResolutionMissError,
)
from tool_router.domains.requests import (
    MULTI_TOOL_USE,
    MultiToolBatchResult,
    ToolExecutionResult,
    ToolUse,
)
from tool_router.interfaces.services.dispatcher import ToolDispatcher
from tool_router.interfaces.services.orchestrator import (
    MultiToolOrchestrator as MultiToolOrchestratorInterface,
)
from tool_router.interfaces.services.parameters import ParameterExtractor
from tool_router.interfaces.services.resolver import ToolResolver

logger = logging.getLogger(__name__)

FUNCTIONS_PREFIX = "functions."
TOOL_ALIASES = {"search_azure_cognitive": "GetDetailedInventory"}
TEXT_ARGUMENTS = ("query", "originalUserInput")


def normalize_tool_name(raw_name: str) -> str:
    """Strip the ``functions.`` prefix and map legacy aliases."""
    name = raw_name.strip()
    if name.startswith(FUNCTIONS_PREFIX):
        name = name[len(FUNCTIONS_PREFIX):]
    return TOOL_ALIASES.get(name, name)


class MultiToolOrchestrator(MultiToolOrchestratorInterface):
    """Runs query-mode and batch-mode multi-tool requests."""

    def __init__(
        self,
        resolver: ToolResolver,
        extractor: ParameterExtractor,
        dispatcher: ToolDispatcher,
    ):
        self.resolver = resolver
        self.extractor = extractor
        self.dispatcher = dispatcher

    async def run(
        self,
        arguments: Optional[Dict[str, Any]] = None,
        query: Optional[str] = None,
        original_user_input: Optional[str] = None,
    ) -> Union[ToolExecutionResult, MultiToolBatchResult]:
        arguments = arguments or {}
        for key in TEXT_ARGUMENTS:
            value = arguments.get(key)
            if value is not None and not isinstance(value, str):
                return ToolExecutionResult.fail(
                    MULTI_TOOL_USE,
                    MalformedBatchRequestError(
                        f"'{key}' must be a string, got {type(value).__name__}"
                    ),
                )

        query = query or arguments.get("query") or original_user_input
        if query:
            raw_input = original_user_input or arguments.get("originalUserInput") or query
            return await self.run_query(query, raw_input)

        tool_uses = arguments.get("tool_uses")
        if tool_uses:
            return await self.run_batch(tool_uses)

        return ToolExecutionResult.fail(
            MULTI_TOOL_USE,
            MalformedBatchRequestError(
                "multi_tool_use requires either 'query' or 'tool_uses' parameter"
            ),
        )

    async def run_query(
        self, query: str, raw_input: Optional[str] = None
    ) -> ToolExecutionResult:
        """Resolve a query to one tool and dispatch it with extracted parameters."""
        try:
            descriptor = await self.resolver.resolve_by_query(query)
        except CatalogUnavailableError as e:
            logger.error(f"Catalog unavailable while resolving '{query}': {e}")
            return ToolExecutionResult.fail(MULTI_TOOL_USE, e)

        if descriptor is None:
            return ToolExecutionResult.fail(MULTI_TOOL_USE, ResolutionMissError(query))

        parameters = self.extractor.extract(raw_input or query)
        logger.info(f"Query '{query}' routed to {descriptor.name} with {parameters}")
        return await self.dispatcher.execute(descriptor.name, parameters)

    async def run_batch(self, tool_uses: List[Any]) -> MultiToolBatchResult:
        """Dispatch every entry in order; a failed entry never stops the rest."""
        if not isinstance(tool_uses, list):
            tool_uses = [tool_uses]
        results = []
        for index, entry in enumerate(tool_uses):
            results.append(await self._run_entry(index, entry))
        return MultiToolBatchResult(results=results)

    async def _run_entry(self, index: int, entry: Any) -> ToolExecutionResult:
        try:
            tool_use = ToolUse.model_validate(entry)
        except ValidationError as e:
            return ToolExecutionResult.fail(
                MULTI_TOOL_USE,
                MalformedBatchRequestError(
                    f"tool_uses[{index}] is malformed: {e.error_count()} errors"
                ),
            )
        if not tool_use.recipient_name.strip():
            return ToolExecutionResult.fail(
                MULTI_TOOL_USE,
                MalformedBatchRequestError(
                    f"tool_uses[{index}] is missing recipient_name"
                ),
            )
        name = normalize_tool_name(tool_use.recipient_name)
        logger.debug(f"Batch entry {index}: {tool_use.recipient_name} -> {name}")
        return await self.dispatcher.execute(name, tool_use.parameters or {})

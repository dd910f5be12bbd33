"""
Request and result shapes exchanged with callers.

Field aliases follow the wire format of the tool proxy endpoints
(``tool``, ``originalUserInput``, ``recipient_name`` ...).
"""
from datetime import datetime
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field, model_validator

from tool_router.domains.errors import ToolRouterError
from tool_router.domains.tools import utc_now

MULTI_TOOL_USE = "multi_tool_use"


class ToolUse(BaseModel):
    """One entry of a multi_tool_use ``tool_uses`` array."""

    model_config = {"populate_by_name": True}

    recipient_name: str = Field("", description="Raw tool name, e.g. functions.GetProducts")
    parameters: Optional[Dict[str, Any]] = None


class ToolCallRequest(BaseModel):
    """Inbound tool invocation."""

    model_config = {"populate_by_name": True}

    tool: Optional[str] = Field(None, description="Tool name or multi_tool_use")
    arguments: Optional[Dict[str, Any]] = None
    original_user_input: Optional[str] = Field(None, alias="originalUserInput")
    query: Optional[str] = None

    @property
    def is_multi_tool(self) -> bool:
        return self.tool == MULTI_TOOL_USE

    @property
    def free_text(self) -> Optional[str]:
        """Text usable for parameter extraction."""
        return self.original_user_input or self.query


class SearchRequest(BaseModel):
    query: str = ""


class ToolExecutionResult(BaseModel):
    """Normalized outcome of one dispatcher invocation."""

    model_config = {"populate_by_name": True, "frozen": True}

    tool_name: str = Field("", alias="tool")
    success: bool
    data: Optional[Any] = None
    error: Optional[str] = None
    error_type: Optional[str] = Field(None, alias="errorType")
    plugin_id: Optional[str] = Field(None, alias="plugin")
    timestamp: datetime = Field(default_factory=utc_now)

    @model_validator(mode="after")
    def check_outcome(self) -> "ToolExecutionResult":
        if self.success and self.error is not None:
            raise ValueError("A successful result cannot carry an error")
        if not self.success:
            if not self.error:
                raise ValueError("A failed result must carry an error message")
            if self.data is not None:
                raise ValueError("A failed result cannot carry data")
        return self

    @classmethod
    def ok(
        cls, tool_name: str, data: Any, plugin_id: Optional[str] = None
    ) -> "ToolExecutionResult":
        return cls(tool=tool_name, success=True, data=data, plugin=plugin_id)

    @classmethod
    def fail(
        cls,
        tool_name: str,
        error: Union[ToolRouterError, str],
        plugin_id: Optional[str] = None,
    ) -> "ToolExecutionResult":
        if isinstance(error, ToolRouterError):
            message, error_type = str(error), error.error_type
        else:
            message, error_type = error, None
        return cls(
            tool=tool_name or "",
            success=False,
            error=message or "Unknown error",
            errorType=error_type,
            plugin=plugin_id,
        )

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")


class MultiToolBatchResult(BaseModel):
    """Ordered results of an explicit tool_uses batch, one per entry."""

    model_config = {"frozen": True}

    results: List[ToolExecutionResult] = Field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(result.success for result in self.results)

    def __len__(self) -> int:
        return len(self.results)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "tool": MULTI_TOOL_USE,
            "data": [result.to_dict() for result in self.results],
        }


class SearchResponse(BaseModel):
    """Catalog search response: ``{ value: [...], count }``."""

    value: List[Dict[str, Any]] = Field(default_factory=list)
    count: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")

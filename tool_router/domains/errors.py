"""
Error taxonomy for the tool router.

Every error that can reach the dispatcher or orchestrator boundary derives from
ToolRouterError and is converted into a failed ToolExecutionResult there.
"""


class ToolRouterError(Exception):
    """Base class for all tool router errors."""

    error_type = "ToolRouterError"

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message


class UnknownToolError(ToolRouterError):
    """Tool name is not present in the routing table."""

    error_type = "UnknownTool"

    def __init__(self, tool_name: str):
        super().__init__(f"Unknown tool: {tool_name}")
        self.tool_name = tool_name


class ResolutionMissError(ToolRouterError):
    """A free-text query matched no active tool."""

    error_type = "ResolutionMiss"

    def __init__(self, query: str):
        super().__init__(f"No suitable tool found for query: {query}")
        self.query = query


class MalformedBatchRequestError(ToolRouterError):
    """A multi-tool request carried neither a query nor usable tool_uses."""

    error_type = "MalformedBatchRequest"


class ArgumentCoercionError(ToolRouterError):
    """A supplied argument could not be coerced to the handler's declared type."""

    error_type = "ArgumentCoercionError"


class DownstreamHandlerError(ToolRouterError):
    """The plugin handler itself faulted."""

    error_type = "DownstreamHandlerError"


class CatalogUnavailableError(ToolRouterError):
    """The search catalog is unreachable or returned an error."""

    error_type = "CatalogUnavailable"


class CatalogIncompleteError(CatalogUnavailableError):
    """A rebuild left the catalog emptied without the new contents in place."""

    error_type = "CatalogIncomplete"


class ConcurrentReindexError(ToolRouterError):
    """A re-index was requested while another one was still running."""

    error_type = "ConcurrentReindex"

    def __init__(self, message: str = "A catalog re-index is already in progress"):
        super().__init__(message)


class PluginRegistrationError(ToolRouterError):
    """Startup-time plugin configuration error (e.g. duplicate tool names)."""

    error_type = "PluginRegistrationError"

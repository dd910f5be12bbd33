"""
Plugin system interfaces.

These interfaces define the contracts for the plugin system: plugins contribute
tools, the registry holds them for the lifetime of the process.
"""
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Tuple

from tool_router.domains.tools import ParameterSpec
from tool_router.interfaces.providers.data_storage import DataStorageProvider


class Tool(ABC):
    """Interface for one invocable tool handler."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the invocation name of the tool."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get the description of the tool."""
        pass

    @property
    @abstractmethod
    def parameters(self) -> List[ParameterSpec]:
        """Get the ordered parameter signature, excluding the data-service handle."""
        pass

    @property
    @abstractmethod
    def response_type_hint(self) -> str:
        """Get a descriptive name of the response shape."""
        pass

    @abstractmethod
    def get_schema(self) -> Dict[str, Any]:
        """Get the JSON schema for the tool parameters."""
        pass

    @abstractmethod
    def coerce(self, arguments: Dict[str, Any]) -> Dict[str, Any]:
        """Coerce an argument map to the handler's declared parameter types."""
        pass

    @abstractmethod
    async def execute(self, data_service: Any, arguments: Dict[str, Any]) -> Any:
        """Execute the tool against a data service with the given arguments."""
        pass


class Plugin(ABC):
    """Interface for plugins that can be loaded by the system."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Get the plugin identifier."""
        pass

    @property
    @abstractmethod
    def display_name(self) -> str:
        """Get the human readable plugin name."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Get the description of the plugin."""
        pass

    @property
    @abstractmethod
    def route_prefix(self) -> str:
        """Get the route prefix used for derived invocation paths."""
        pass

    @property
    @abstractmethod
    def data_service(self) -> Optional[Any]:
        """Get the data-service handle passed to every tool, if configured."""
        pass

    @abstractmethod
    def get_tools(self) -> List[Tool]:
        """Get the ordered list of tools the plugin exposes."""
        pass

    @abstractmethod
    def initialize(
        self, config: Dict[str, Any], storage: Optional[DataStorageProvider] = None
    ) -> None:
        """Initialization hook run once at startup."""
        pass


class PluginRegistry(ABC):
    """Interface for the startup-time plugin registry."""

    @abstractmethod
    def register(self, plugin: Plugin) -> None:
        """Register a plugin and all of its tools."""
        pass

    @abstractmethod
    def freeze(self) -> None:
        """Reject any further registration."""
        pass

    @abstractmethod
    def list_plugins(self) -> List[Plugin]:
        """List registered plugins in registration order."""
        pass

    @abstractmethod
    def list_tool_names(self) -> List[str]:
        """List the union of tool names across all plugins."""
        pass

    @abstractmethod
    def get_plugin(self, plugin_id: str) -> Optional[Plugin]:
        """Get a plugin by identifier."""
        pass

    @abstractmethod
    def get_tool(self, tool_name: str) -> Optional[Tool]:
        """Get a tool by name."""
        pass

    @abstractmethod
    def get_plugin_tools(self, plugin_id: str) -> List[Tool]:
        """Get the tools registered by one plugin, in declaration order."""
        pass

    @abstractmethod
    def iter_tools(self) -> List[Tuple[Plugin, Tool]]:
        """List (plugin, tool) pairs in registration order."""
        pass


class PluginManager(ABC):
    """Interface for the plugin manager."""

    @abstractmethod
    def register_plugin(self, plugin: Plugin) -> bool:
        """Initialize and register a plugin."""
        pass

    @abstractmethod
    def load_plugins(self) -> List[str]:
        """Load built-in and entry-point plugins, then freeze the registry."""
        pass

    @abstractmethod
    def get_plugin(self, name: str) -> Optional[Plugin]:
        """Get a plugin by name."""
        pass

    @abstractmethod
    def list_plugins(self) -> List[Dict[str, Any]]:
        """List all registered plugins with their details."""
        pass

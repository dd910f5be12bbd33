"""
Base class for plugins that declare their tools as FunctionTool entries.
"""
import logging
from abc import abstractmethod
from typing import Any, Dict, List, Optional

from tool_router.interfaces.plugins.plugins import Plugin, Tool
from tool_router.interfaces.providers.data_storage import DataStorageProvider

logger = logging.getLogger(__name__)


class ToolPlugin(Plugin):
    """Plugin with a fixed tool manifest and an optional data service.

    Subclasses set the class attributes and implement ``get_tools`` and
    ``create_data_service``.
    """

    plugin_id: str = ""
    plugin_display_name: str = ""
    plugin_description: str = ""
    plugin_route_prefix: str = ""

    def __init__(self):
        self._data_service: Optional[Any] = None
        self._config: Dict[str, Any] = {}

    @property
    def name(self) -> str:
        return self.plugin_id

    @property
    def display_name(self) -> str:
        return self.plugin_display_name or self.plugin_id

    @property
    def description(self) -> str:
        return self.plugin_description

    @property
    def route_prefix(self) -> str:
        return self.plugin_route_prefix or self.plugin_id

    @property
    def data_service(self) -> Optional[Any]:
        return self._data_service

    @property
    def config(self) -> Dict[str, Any]:
        return self._config

    @abstractmethod
    def get_tools(self) -> List[Tool]:
        """Return the plugin's tool manifest."""
        pass

    @abstractmethod
    def create_data_service(
        self, storage: DataStorageProvider, config: Dict[str, Any]
    ) -> Any:
        """Build the data service handed to every tool handler."""
        pass

    def initialize(
        self, config: Dict[str, Any], storage: Optional[DataStorageProvider] = None
    ) -> None:
        """Keep the plugin's config section and build the data service.

        Without a storage provider the plugin stays registered but has no data
        service; its tools then fail at dispatch time.
        """
        self._config = dict(config or {})
        if storage is None:
            logger.warning(
                f"Plugin {self.name} has no storage configured; its tools will fail when called"
            )
            self._data_service = None
            return
        self._data_service = self.create_data_service(storage, self._config)
        logger.info(f"Plugin {self.name} initialized with {type(self._data_service).__name__}")

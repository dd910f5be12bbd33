"""
Factory for creating and wiring components of the tool router.

This module handles the creation and dependency injection for the plugin
registry, catalog, and the resolution and execution services.
"""

import logging
from typing import Any, Dict, List, Optional

# Adapter imports
from tool_router.adapters.memory_catalog import DEFAULT_TOP, InMemoryToolCatalog
from tool_router.adapters.mongo_catalog import MongoToolCatalog
from tool_router.adapters.mongodb_adapter import MongoDBAdapter

# Service imports
from tool_router.services.dispatcher import ToolDispatcher
from tool_router.services.indexing import ToolIndexingService
from tool_router.services.orchestrator import MultiToolOrchestrator
from tool_router.services.parameters import ParameterExtractor
from tool_router.services.proxy import ToolProxyService
from tool_router.services.resolver import ToolResolver

# Plugin imports
from tool_router.interfaces.plugins.plugins import Plugin
from tool_router.interfaces.providers.catalog import ToolCatalogProvider
from tool_router.plugins.manager import PluginManager
from tool_router.plugins.registry import PluginRegistry

logger = logging.getLogger(__name__)

CATALOG_PROVIDERS = ("memory", "mongo")
DEFAULT_CATALOG_COLLECTION = "mcp_tools"


class ToolRouterServices:
    """The wired service graph produced by the factory."""

    def __init__(
        self,
        registry: PluginRegistry,
        plugin_manager: PluginManager,
        catalog: ToolCatalogProvider,
        indexer: ToolIndexingService,
        resolver: ToolResolver,
        extractor: ParameterExtractor,
        dispatcher: ToolDispatcher,
        orchestrator: MultiToolOrchestrator,
        proxy: ToolProxyService,
        index_on_startup: bool = True,
    ):
        self.registry = registry
        self.plugin_manager = plugin_manager
        self.catalog = catalog
        self.indexer = indexer
        self.resolver = resolver
        self.extractor = extractor
        self.dispatcher = dispatcher
        self.orchestrator = orchestrator
        self.proxy = proxy
        self.index_on_startup = index_on_startup


class ToolRouterFactory:
    """Factory for creating and wiring components of the tool router."""

    @staticmethod
    def _create_storage(config: Dict[str, Any]) -> Optional[MongoDBAdapter]:
        if "mongo" not in config:
            return None
        if "connection_string" not in config["mongo"]:
            raise ValueError("MongoDB connection string is required.")
        if "database" not in config["mongo"]:
            raise ValueError("MongoDB database name is required.")
        return MongoDBAdapter(
            connection_string=config["mongo"]["connection_string"],
            database_name=config["mongo"]["database"],
        )

    @staticmethod
    def _create_catalog(
        catalog_config: Dict[str, Any], db_adapter: Optional[MongoDBAdapter]
    ) -> ToolCatalogProvider:
        provider = catalog_config.get("provider", "memory")
        if provider not in CATALOG_PROVIDERS:
            raise ValueError(
                f"Unknown catalog provider '{provider}'. Expected one of {CATALOG_PROVIDERS}."
            )
        top = catalog_config.get("top", DEFAULT_TOP)
        if not isinstance(top, int) or isinstance(top, bool) or top <= 0:
            raise ValueError("Catalog 'top' must be a positive integer.")

        if provider == "mongo":
            if db_adapter is None:
                raise ValueError("The mongo catalog provider requires a 'mongo' config section.")
            logger.info("Using MongoDB tool catalog")
            return MongoToolCatalog(
                db_adapter,
                collection=catalog_config.get("collection", DEFAULT_CATALOG_COLLECTION),
                top=top,
            )
        logger.info("Using in-memory tool catalog")
        return InMemoryToolCatalog(top=top)

    @staticmethod
    def _configure_logging(config: Dict[str, Any]) -> None:
        level = config.get("logging", {}).get("level")
        if level:
            logging.getLogger("tool_router").setLevel(str(level).upper())

    @staticmethod
    def create_from_config(
        config: Dict[str, Any], extra_plugins: Optional[List[Plugin]] = None
    ) -> ToolRouterServices:
        """Create the tool router from configuration.

        Args:
            config: Configuration dictionary
            extra_plugins: Plugin instances to register alongside the loaded ones

        Returns:
            Wired ToolRouterServices instance
        """
        if config is None:
            raise ValueError("Configuration is required.")
        ToolRouterFactory._configure_logging(config)

        db_adapter = ToolRouterFactory._create_storage(config)
        catalog = ToolRouterFactory._create_catalog(config.get("catalog", {}), db_adapter)

        registry = PluginRegistry()
        plugin_manager = PluginManager(
            config=config.get("plugins", {}), registry=registry, storage=db_adapter
        )
        for plugin in extra_plugins or []:
            plugin_manager.register_plugin(plugin)
        loaded_plugins = plugin_manager.load_plugins()
        logger.info(f"Loaded plugins: {loaded_plugins}")

        indexer = ToolIndexingService(
            registry, catalog, tool_paths=config.get("tool_paths")
        )
        resolver_config = config.get("resolver", {})
        resolver = ToolResolver(
            catalog,
            descriptors=indexer.extract_tool_descriptors(),
            analytics_plugins=resolver_config.get("analytics_plugins"),
            analytics_keywords=resolver_config.get("analytics_keywords"),
        )
        extractor = ParameterExtractor()
        dispatcher = ToolDispatcher(registry)
        orchestrator = MultiToolOrchestrator(resolver, extractor, dispatcher)
        proxy = ToolProxyService(registry, catalog, extractor, dispatcher, orchestrator)

        return ToolRouterServices(
            registry=registry,
            plugin_manager=plugin_manager,
            catalog=catalog,
            indexer=indexer,
            resolver=resolver,
            extractor=extractor,
            dispatcher=dispatcher,
            orchestrator=orchestrator,
            proxy=proxy,
            index_on_startup=config.get("catalog", {}).get("index_on_startup", True),
        )

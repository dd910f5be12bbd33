"""
Adapters for external systems and services.

These adapters implement the provider interfaces defined in
tool_router.interfaces: MongoDB storage and the tool catalogs.
"""

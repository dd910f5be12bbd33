"""
Abstract interfaces for the tool router.

These interfaces define the contracts that concrete implementations
must adhere to.

This package contains:
- Plugin interfaces for tools, plugins and the registry
- Provider interfaces for the catalog and data storage
- Service interfaces for resolution, dispatch and orchestration
"""

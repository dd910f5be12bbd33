"""
Plugin system for the tool router.

This package provides the plugin registry, the plugin manager, the
FunctionTool wrapper and the built-in plugins.
"""

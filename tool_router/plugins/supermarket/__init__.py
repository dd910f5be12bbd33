"""
Built-in supermarket plugin.
"""
from tool_router.plugins.supermarket.plugin import SupermarketPlugin

__all__ = ["SupermarketPlugin"]

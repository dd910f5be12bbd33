"""
Built-in thirdapi plugin.
"""
from tool_router.plugins.thirdapi.plugin import ThirdApiPlugin

__all__ = ["ThirdApiPlugin"]

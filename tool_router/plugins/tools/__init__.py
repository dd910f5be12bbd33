"""
Tool implementations for the tool router.

This package contains FunctionTool, which turns a handler function into a tool.
"""

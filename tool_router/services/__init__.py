"""
Service implementations for the tool router.

These services implement the business logic interfaces defined in
tool_router.interfaces.services.
"""

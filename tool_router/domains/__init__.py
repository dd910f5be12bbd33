"""
Domain models for the tool router.

This package contains the tool descriptor, request and result models and the
error taxonomy.
"""

from tool_router.domains.errors import *
from tool_router.domains.requests import *
from tool_router.domains.tools import *

"""
HTTP API for parsing and tracing.
"""

from logtrace.api.routes import router

__all__ = ["router"]

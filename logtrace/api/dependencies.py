"""
FastAPI dependencies for dependency injection.
"""

from functools import lru_cache
from zoneinfo import ZoneInfo

from logtrace.config import get_settings
from logtrace.analysis.view import LogViewBuilder
from logtrace.parsers.log_line_parser import LogLineParser
from logtrace.trace.resolver import TraceResolver


@lru_cache()
def get_parser() -> LogLineParser:
    """Get cached log line parser instance."""
    return LogLineParser()


@lru_cache()
def get_view_builder() -> LogViewBuilder:
    """Get cached log view builder instance."""
    settings = get_settings()
    return LogViewBuilder(parser=get_parser(), path_option_limit=settings.path_option_limit)


@lru_cache()
def get_trace_resolver() -> TraceResolver:
    """Get cached trace resolver configured from settings."""
    settings = get_settings()
    timezone = ZoneInfo(settings.log_timezone) if settings.log_timezone else None
    return TraceResolver(policy=settings.trace_policy(), timezone=timezone)

"""
Pydantic models for logtrace.
"""

from logtrace.models.log_line import (
    HttpMethod,
    LogLevel,
    ParsedLogLine,
    StatusGroup,
    resolve_status_group,
)
from logtrace.models.usage import CredentialInfo, SourceInfo, UsageDetailWithEndpoint
from logtrace.models.trace import TraceCandidate, TraceConfidence
from logtrace.models.view import LogFacets, LogView, LogViewQuery, PathOption

__all__ = [
    "HttpMethod",
    "LogLevel",
    "ParsedLogLine",
    "StatusGroup",
    "resolve_status_group",
    "CredentialInfo",
    "SourceInfo",
    "UsageDetailWithEndpoint",
    "TraceCandidate",
    "TraceConfidence",
    "LogFacets",
    "LogView",
    "LogViewQuery",
    "PathOption",
]

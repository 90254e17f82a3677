"""
Trace candidate resolution.
"""

from logtrace.trace.paths import is_traceable_request_path, normalize_trace_path
from logtrace.trace.policy import TracePolicy
from logtrace.trace.resolver import TraceResolver, resolve_trace_candidates
from logtrace.trace.timestamps import parse_log_timestamp_ms

__all__ = [
    "is_traceable_request_path",
    "normalize_trace_path",
    "TracePolicy",
    "TraceResolver",
    "resolve_trace_candidates",
    "parse_log_timestamp_ms",
]

"""
Usage statistics normalization and source display helpers.
"""

from logtrace.usage.collector import (
    collect_usage_details_with_endpoint,
    normalize_auth_index,
    parse_usage_timestamp_ms,
)
from logtrace.usage.sources import build_credential_map, resolve_source_display

__all__ = [
    "collect_usage_details_with_endpoint",
    "normalize_auth_index",
    "parse_usage_timestamp_ms",
    "build_credential_map",
    "resolve_source_display",
]

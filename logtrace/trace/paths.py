"""
Request path normalization and the traceable-path gate.
"""

import re
from typing import Optional

TRACEABLE_EXACT_PATHS = frozenset({
    "/v1/chat/completions",
    "/v1/messages",
    "/v1/responses",
})
TRACEABLE_PREFIX_PATHS = ("/v1beta/models",)

_SURROUNDING_QUOTES_RE = re.compile(r'^"+|"+$')
_TRAILING_SLASHES_RE = re.compile(r"/+$")


def normalize_trace_path(value: Optional[str]) -> str:
    """Strip quotes and the query string from a logged path."""
    text = _SURROUNDING_QUOTES_RE.sub("", value or "")
    return text.split("?", 1)[0].strip()


def normalize_traceable_path(value: Optional[str]) -> str:
    """Like normalize_trace_path, also dropping trailing slashes."""
    normalized = normalize_trace_path(value)
    if not normalized or normalized == "/":
        return normalized
    return _TRAILING_SLASHES_RE.sub("", normalized)


def is_traceable_request_path(value: Optional[str]) -> bool:
    """
    Check whether requests to this path are recorded in usage statistics.
    
    Only these requests can be traced; callers must check this before
    resolving candidates for a line.
    """
    path = normalize_traceable_path(value)
    if not path:
        return False
    if path in TRACEABLE_EXACT_PATHS:
        return True
    return any(path.startswith(prefix) for prefix in TRACEABLE_PREFIX_PATHS)

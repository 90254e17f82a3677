"""
Compiled patterns and token helpers shared by the parser stages.
"""

import re
from typing import Optional, Tuple

from logtrace.models.log_line import HttpMethod, LogLevel

# ---------------------------------------------------------------------------
# Compiled regex patterns
# ---------------------------------------------------------------------------

HTTP_METHODS = tuple(m.value for m in HttpMethod)
_METHODS_ALT = "|".join(HTTP_METHODS)

HTTP_METHOD_RE = re.compile(rf"\b({_METHODS_ALT})\b", re.ASCII)

TIMESTAMP_PREFIX_RE = re.compile(
    r"^\[?(\d{4}-\d{2}-\d{2}[ T]\d{2}:\d{2}:\d{2}(?:\.\d{1,3})?)\]?"
)
REQUEST_ID_PREFIX_RE = re.compile(r"^\[([a-f0-9]{8}|--------)\]\s*", re.IGNORECASE)
LEVEL_PREFIX_RE = re.compile(
    r"^\[?(trace|debug|info|warn|warning|error|fatal)\s*\]?(?=\s|\[|$)\s*",
    re.IGNORECASE,
)
SOURCE_RE = re.compile(r"^\[([^\]]+)\]")

LATENCY_RE = re.compile(
    r"\b(?:\d+(?:\.\d+)?\s*(?:µs|us|ms|s|m))(?:\s*\d+(?:\.\d+)?\s*(?:µs|us|ms|s|m))*\b",
    re.IGNORECASE | re.ASCII,
)
IPV4_RE = re.compile(r"\b(?:\d{1,3}\.){3}\d{1,3}\b", re.ASCII)
IPV6_RE = re.compile(r"\b(?:[a-f0-9]{0,4}:){2,7}[a-f0-9]{0,4}\b", re.IGNORECASE | re.ASCII)
TIME_OF_DAY_RE = re.compile(r"^\d{1,2}:\d{2}:\d{2}(?:\.\d{1,3})?$")

REQUEST_ID_SEGMENT_RE = re.compile(r"^([a-f0-9]{8}|--------)$", re.IGNORECASE)
STATUS_SEGMENT_RE = re.compile(r"^(\d{3})$")
GIN_TIMESTAMP_SEGMENT_RE = re.compile(
    r"^\[GIN\]\s+(\d{4})/(\d{2})/(\d{2})\s*-\s*(\d{2}:\d{2}:\d{2}(?:\.\d{1,3})?)\s*$"
)
_SECONDS_PRECISION_RE = re.compile(r"^(\d{4}-\d{2}-\d{2})[ T](\d{2}:\d{2}:\d{2})")
_PLACEHOLDER_ID_RE = re.compile(r"^-+$")

# Tried in order, first in-range hit wins.
# ASCII word boundaries so tokens glued to CJK text still match.
HTTP_STATUS_PATTERNS = [
    re.compile(r"\|\s*([1-5]\d{2})\s*\|", re.ASCII),
    re.compile(r"\b([1-5]\d{2})\s*-", re.ASCII),
    re.compile(rf"\b(?:{_METHODS_ALT})\s+\S+\s+([1-5]\d{{2}})\b", re.ASCII),
    re.compile(r"\b(?:status|code|http)[:\s]+([1-5]\d{2})\b", re.IGNORECASE | re.ASCII),
    re.compile(
        r"\b([1-5]\d{2})\s+(?:OK|Created|Accepted|No Content|Moved|Found|Bad Request|"
        r"Unauthorized|Forbidden|Not Found|Method Not Allowed|Internal Server Error|"
        r"Bad Gateway|Service Unavailable|Gateway Timeout)\b",
        re.IGNORECASE | re.ASCII,
    ),
]

# Level keywords in inference priority order
_LEVEL_KEYWORDS = [
    (re.compile(r"\bfatal\b", re.ASCII), LogLevel.FATAL),
    (re.compile(r"\berror\b", re.ASCII), LogLevel.ERROR),
    (re.compile(r"\bwarn(?:ing)?\b", re.ASCII), LogLevel.WARN),
    (re.compile(r"\binfo\b", re.ASCII), LogLevel.INFO),
    (re.compile(r"\bdebug\b", re.ASCII), LogLevel.DEBUG),
    (re.compile(r"\btrace\b", re.ASCII), LogLevel.TRACE),
]
_WARNING_KEYWORD_ZH = "警告"

_LEVEL_ALIASES = {
    "warning": LogLevel.WARN,
    "warn": LogLevel.WARN,
    "info": LogLevel.INFO,
    "error": LogLevel.ERROR,
    "fatal": LogLevel.FATAL,
    "debug": LogLevel.DEBUG,
    "trace": LogLevel.TRACE,
}

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def is_placeholder_request_id(value: str) -> bool:
    """True for the all-dash id emitted when a line has no request."""
    return bool(_PLACEHOLDER_ID_RE.match(value))


def normalize_level(value: str) -> Optional[LogLevel]:
    """Map a level word to its canonical form ('WARNING' -> warn)."""
    return _LEVEL_ALIASES.get(value.strip().lower())


def infer_level(line: str) -> Optional[LogLevel]:
    """Guess a level from keywords anywhere in the line."""
    lowered = line.lower()
    for pattern, level in _LEVEL_KEYWORDS:
        if level is LogLevel.WARN and _WARNING_KEYWORD_ZH in line:
            return level
        if pattern.search(lowered):
            return level
    return None


def detect_status_code(text: str) -> Optional[int]:
    """Find an HTTP status code using contextual patterns."""
    for pattern in HTTP_STATUS_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        code = int(match.group(1))
        if 100 <= code <= 599:
            return code
    return None


def extract_latency(text: str) -> Optional[str]:
    """Return the first duration token with inner whitespace removed."""
    match = LATENCY_RE.search(text)
    if not match:
        return None
    return re.sub(r"\s+", "", match.group(0))


def extract_ip(text: str) -> Optional[str]:
    """Return the first IPv4 literal, or a plausible IPv6 literal."""
    ipv4 = IPV4_RE.search(text)
    if ipv4:
        return ipv4.group(0)

    ipv6 = IPV6_RE.search(text)
    if not ipv6:
        return None

    candidate = ipv6.group(0)
    # 12:34:56 looks like hextets
    if TIME_OF_DAY_RE.match(candidate):
        return None
    if "::" not in candidate and len(candidate.split(":")) != 8:
        return None
    return candidate


def extract_method_and_path(text: str) -> Tuple[Optional[HttpMethod], Optional[str]]:
    """Find an HTTP method and the token right after it."""
    match = HTTP_METHOD_RE.search(text)
    if not match:
        return None, None

    method = HttpMethod(match.group(1))
    after = text[match.end():].strip()
    path = after.split()[0] if after else None
    return method, path


def match_gin_timestamp(segment: str) -> Optional[str]:
    """Convert '[GIN] 2024/01/01 - 10:00:00' to '2024-01-01 10:00:00'."""
    match = GIN_TIMESTAMP_SEGMENT_RE.match(segment)
    if not match:
        return None
    year, month, day, clock = match.groups()
    return f"{year}-{month}-{day} {clock}"


def truncate_to_seconds(value: str) -> str:
    """Normalize a timestamp to 'YYYY-MM-DD HH:MM:SS' for comparison."""
    trimmed = value.strip()
    match = _SECONDS_PRECISION_RE.match(trimmed)
    if not match:
        return trimmed
    return f"{match.group(1)} {match.group(2)}"

"""
Parsed log line model.
The parser emits this schema for every raw line, whatever its format.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict


class LogLevel(str, Enum):
    """Canonical log levels."""
    TRACE = "trace"
    DEBUG = "debug"
    INFO = "info"
    WARN = "warn"
    ERROR = "error"
    FATAL = "fatal"


class HttpMethod(str, Enum):
    """HTTP verbs recognized in request logs."""
    GET = "GET"
    POST = "POST"
    PUT = "PUT"
    PATCH = "PATCH"
    DELETE = "DELETE"
    OPTIONS = "OPTIONS"
    HEAD = "HEAD"


class StatusGroup(str, Enum):
    """HTTP status classes."""
    SUCCESS = "2xx"
    REDIRECT = "3xx"
    CLIENT_ERROR = "4xx"
    SERVER_ERROR = "5xx"


class ParsedLogLine(BaseModel):
    """
    One structured interpretation of one raw log line.
    
    Only ``raw`` and ``message`` are always present. Everything else is
    filled in when the parser recognizes the corresponding token.
    """
    
    raw: str = Field(
        description="Original line, verbatim"
    )
    timestamp: Optional[str] = Field(
        default=None,
        description="Extracted date-time string, unnormalized"
    )
    level: Optional[LogLevel] = Field(
        default=None,
        description="Normalized log level"
    )
    source: Optional[str] = Field(
        default=None,
        description="Bracketed origin tag (e.g. file:line)"
    )
    request_id: Optional[str] = Field(
        default=None,
        description="8-hex-digit request correlation token"
    )
    status_code: Optional[int] = Field(
        default=None,
        ge=100,
        le=599,
        description="HTTP status code"
    )
    latency: Optional[str] = Field(
        default=None,
        description="Compact duration token (e.g. 12.4ms)"
    )
    ip: Optional[str] = Field(
        default=None,
        description="IPv4 or IPv6 literal"
    )
    method: Optional[HttpMethod] = Field(
        default=None,
        description="HTTP method"
    )
    path: Optional[str] = Field(
        default=None,
        description="First token following the HTTP method"
    )
    message: str = Field(
        default="",
        description="Residual text after structured fields are removed"
    )

    model_config = ConfigDict(
        frozen=True,
        json_schema_extra={
            "example": {
                "raw": "[2024-01-01 10:00:00] [a1b2c3d4] info [router.go:22] | 200 | 12ms | 203.0.113.5 | POST /v1/chat/completions | req ok",
                "timestamp": "2024-01-01 10:00:00",
                "level": "info",
                "source": "router.go:22",
                "request_id": "a1b2c3d4",
                "status_code": 200,
                "latency": "12ms",
                "ip": "203.0.113.5",
                "method": "POST",
                "path": "/v1/chat/completions",
                "message": "req ok",
            }
        }
    )


def resolve_status_group(status_code: Optional[int]) -> Optional[StatusGroup]:
    """Map a status code to its status class, if it has one."""
    if status_code is None:
        return None
    if 200 <= status_code < 300:
        return StatusGroup.SUCCESS
    if 300 <= status_code < 400:
        return StatusGroup.REDIRECT
    if 400 <= status_code < 500:
        return StatusGroup.CLIENT_ERROR
    if 500 <= status_code < 600:
        return StatusGroup.SERVER_ERROR
    return None

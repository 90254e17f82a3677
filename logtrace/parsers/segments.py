"""
Segment detectors for pipe-delimited line bodies.

Example body:
    [GIN] 2024/01/01 - 10:00:00 | 200 | 12.4ms | 203.0.113.5 | POST "/v1/messages"

Detectors run in this order: GIN timestamp, request id, status code,
latency, IP, method + path, source.
"""

from typing import Optional, Tuple

from logtrace.models.log_line import HttpMethod
from logtrace.parsers.base import ParseState, SegmentDetector, cut_span
from logtrace.parsers.patterns import (
    HTTP_METHOD_RE,
    LATENCY_RE,
    REQUEST_ID_SEGMENT_RE,
    SOURCE_RE,
    STATUS_SEGMENT_RE,
    extract_ip,
    extract_latency,
    extract_method_and_path,
    is_placeholder_request_id,
    match_gin_timestamp,
    truncate_to_seconds,
)


class GinTimestampSegment(SegmentDetector):
    """
    Timestamp written by the GIN access logger.
    
    Becomes the line timestamp when the prefix had none. When the line
    already has a timestamp, the segment is only claimed if both agree
    to the second; otherwise it is left in the message.
    """
    
    name = "timestamp"
    
    def match(self, segment: str) -> Optional[str]:
        return match_gin_timestamp(segment)
    
    def record(self, value: str, state: ParseState) -> bool:
        current = state.get(self.name)
        if not current:
            state.set(self.name, value)
            return True
        return truncate_to_seconds(current) == truncate_to_seconds(value)


class RequestIdSegment(SegmentDetector):
    """Bare request id segment; the dash placeholder is claimed but dropped."""
    
    name = "request_id"
    
    def match(self, segment: str) -> Optional[str]:
        match = REQUEST_ID_SEGMENT_RE.match(segment)
        return match.group(1) if match else None
    
    def record(self, value: str, state: ParseState) -> bool:
        if not is_placeholder_request_id(value):
            state.set(self.name, value)
        return True


class StatusCodeSegment(SegmentDetector):
    """Three-digit HTTP status code in [100, 599]."""
    
    name = "status_code"
    
    def match(self, segment: str) -> Optional[int]:
        match = STATUS_SEGMENT_RE.match(segment)
        return int(match.group(1)) if match else None
    
    def record(self, value: int, state: ParseState) -> bool:
        if not 100 <= value <= 599:
            return False
        state.set(self.name, value)
        return True


class LatencySegment(SegmentDetector):
    name = "latency"
    
    def match(self, segment: str) -> Optional[str]:
        return extract_latency(segment)
    
    def remainder(self, segment: str, value: str) -> str:
        # value has its inner whitespace collapsed; cut the raw match instead
        match = LATENCY_RE.search(segment)
        return cut_span(segment, match.start(), match.end()) if match else ""


class IpSegment(SegmentDetector):
    name = "ip"
    
    def match(self, segment: str) -> Optional[str]:
        return extract_ip(segment)


class MethodPathSegment(SegmentDetector):
    """HTTP method followed by the request path."""
    
    name = "method"
    
    def match(self, segment: str) -> Optional[Tuple[HttpMethod, Optional[str]]]:
        method, path = extract_method_and_path(segment)
        if method is None:
            return None
        return method, path
    
    def record(self, value: Tuple[HttpMethod, Optional[str]], state: ParseState) -> bool:
        method, path = value
        state.set("method", method)
        state.set("path", path)
        return True
    
    def remainder(self, segment: str, value: Tuple[HttpMethod, Optional[str]]) -> str:
        match = HTTP_METHOD_RE.search(segment)
        if not match:
            return ""
        end = match.end()
        path = value[1]
        if path:
            end = segment.index(path, end) + len(path)
        return cut_span(segment, match.start(), end)


class SourceSegment(SegmentDetector):
    name = "source"
    
    def match(self, segment: str) -> Optional[str]:
        match = SOURCE_RE.match(segment)
        return match.group(1) if match else None
    
    def remainder(self, segment: str, value: str) -> str:
        match = SOURCE_RE.match(segment)
        return cut_span(segment, 0, match.end()) if match else ""

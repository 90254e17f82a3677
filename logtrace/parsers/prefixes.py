"""
Prefix stages: tokens recognized at the start of a log line.

Applied in order: timestamp, request id, level, source.
"""

from logtrace.parsers.base import ParseState, PrefixExtractor
from logtrace.parsers.patterns import (
    LEVEL_PREFIX_RE,
    REQUEST_ID_PREFIX_RE,
    SOURCE_RE,
    TIMESTAMP_PREFIX_RE,
    is_placeholder_request_id,
    normalize_level,
)


class TimestampPrefix(PrefixExtractor):
    """
    Leading date-time, bracketed or bare.
    
    Example: [2024-01-01 10:00:00.123] ...
    """
    
    name = "timestamp"
    
    def consume(self, state: ParseState) -> bool:
        match = TIMESTAMP_PREFIX_RE.match(state.remaining)
        if not match:
            return False
        state.set(self.name, match.group(1))
        state.consume(match.end())
        return True


class RequestIdPrefix(PrefixExtractor):
    """Bracketed 8-hex-digit request id, or the [--------] placeholder."""
    
    name = "request_id"
    
    def consume(self, state: ParseState) -> bool:
        match = REQUEST_ID_PREFIX_RE.match(state.remaining)
        if not match:
            return False
        request_id = match.group(1)
        if not is_placeholder_request_id(request_id):
            state.set(self.name, request_id)
        state.consume(match.end())
        return True


class LevelPrefix(PrefixExtractor):
    """Log level word such as 'INFO', '[warn ]' or 'Warning'."""
    
    name = "level"
    
    def consume(self, state: ParseState) -> bool:
        match = LEVEL_PREFIX_RE.match(state.remaining)
        if not match:
            return False
        state.set(self.name, normalize_level(match.group(1)))
        state.consume(match.end())
        return True


class SourcePrefix(PrefixExtractor):
    """Bracketed origin tag, e.g. [gin_logger.go:94]."""
    
    name = "source"
    
    def consume(self, state: ParseState) -> bool:
        match = SOURCE_RE.match(state.remaining)
        if not match:
            return False
        state.set(self.name, match.group(1))
        state.consume(match.end())
        return True

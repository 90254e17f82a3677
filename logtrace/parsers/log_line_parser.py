"""
Parser for mixed-format server log lines.
"""

from typing import List, Optional, Sequence

from logtrace.models.log_line import ParsedLogLine
from logtrace.parsers.base import ParseState, PrefixExtractor, SegmentDetector
from logtrace.parsers.patterns import (
    detect_status_code,
    extract_ip,
    extract_latency,
    extract_method_and_path,
    infer_level,
    match_gin_timestamp,
    truncate_to_seconds,
)
from logtrace.parsers.prefixes import (
    LevelPrefix,
    RequestIdPrefix,
    SourcePrefix,
    TimestampPrefix,
)
from logtrace.parsers.segments import (
    GinTimestampSegment,
    IpSegment,
    LatencySegment,
    MethodPathSegment,
    RequestIdSegment,
    SourceSegment,
    StatusCodeSegment,
)


def default_prefix_extractors() -> List[PrefixExtractor]:
    """Prefix stages in the order they are applied."""
    return [
        TimestampPrefix(),
        RequestIdPrefix(),
        LevelPrefix(),
        SourcePrefix(),
    ]


def default_segment_detectors() -> List[SegmentDetector]:
    """Pipe-segment detectors in the order they are applied."""
    return [
        GinTimestampSegment(),
        RequestIdSegment(),
        StatusCodeSegment(),
        LatencySegment(),
        IpSegment(),
        MethodPathSegment(),
        SourceSegment(),
    ]


class LogLineParser:
    """
    Turns one raw log line into a ParsedLogLine.

    Handles the formats written by the proxy's loggers:
    - Request logs:  [2024-01-01 10:00:00] [a1b2c3d4] [info ] [gin_logger.go:94] [GIN] ... | 200 | ...
    - GIN pipe logs: [GIN] 2024/01/01 - 10:00:00 | 200 | 12ms | 1.2.3.4 | GET /v1/models
    - Plain leveled messages: WARN token refresh failed for auth 3

    Parsing never fails: text that no stage recognizes ends up in
    ``message``.
    """

    def __init__(
        self,
        prefix_extractors: Optional[Sequence[PrefixExtractor]] = None,
        segment_detectors: Optional[Sequence[SegmentDetector]] = None,
    ):
        """
        Initialize the parser pipeline.

        Args:
            prefix_extractors: Prefix stages. If None, uses the default order.
            segment_detectors: Pipe-segment detectors. If None, uses the default order.
        """
        if prefix_extractors is None:
            prefix_extractors = default_prefix_extractors()
        if segment_detectors is None:
            segment_detectors = default_segment_detectors()
        self.prefix_extractors = list(prefix_extractors)
        self.segment_detectors = list(segment_detectors)

    def parse_line(self, raw: str) -> ParsedLogLine:
        """
        Parse a single log line.

        Args:
            raw: The line exactly as read

        Returns:
            ParsedLogLine with ``raw`` preserved verbatim
        """
        state = ParseState(raw=raw, remaining=raw.strip())

        for extractor in self.prefix_extractors:
            extractor.consume(state)

        if "|" in state.remaining:
            message = self._parse_pipe_body(state)
        else:
            message = self._parse_free_text_body(state)

        if state.get("level") is None:
            state.set("level", infer_level(raw))

        message = self._absorb_gin_timestamp(message, state)

        return ParsedLogLine(raw=raw, message=message, **state.fields)

    def parse_content(self, content: str) -> List[ParsedLogLine]:
        """
        Parse a multi-line log buffer.

        Args:
            content: Log text, one entry per line

        Returns:
            Parsed lines in input order, blank lines skipped
        """
        return [self.parse_line(line) for line in content.splitlines() if line.strip()]

    def _parse_pipe_body(self, state: ParseState) -> str:
        """
        Classify each '|' segment.

        Unclaimed segments and the leftovers of partly matched ones form
        the message, in segment order.
        """
        segments = [segment.strip() for segment in state.remaining.split("|")]
        segments = [segment for segment in segments if segment]
        consumed = set()

        for detector in self.segment_detectors:
            detector.claim(segments, consumed, state)

        parts = []
        for index, segment in enumerate(segments):
            if index not in consumed:
                parts.append(segment)
            elif index in state.leftovers:
                parts.append(state.leftovers[index])
        return " | ".join(parts)

    def _parse_free_text_body(self, state: ParseState) -> str:
        """
        Scan free text for request details.

        Matches may overlap here; the body is kept whole as the message.
        """
        text = state.remaining

        status_code = detect_status_code(text)
        if status_code is not None:
            state.set("status_code", status_code)

        latency = extract_latency(text)
        if latency:
            state.set("latency", latency)

        ip = extract_ip(text)
        if ip:
            state.set("ip", ip)

        method, path = extract_method_and_path(text)
        if method is not None:
            state.set("method", method)
            state.set("path", path)

        return text

    def _absorb_gin_timestamp(self, message: str, state: ParseState) -> str:
        """Drop a message that only repeats the line's timestamp."""
        if not message:
            return message

        gin_timestamp = match_gin_timestamp(message)
        if gin_timestamp is None:
            return message

        timestamp = state.get("timestamp")
        if not timestamp:
            timestamp = gin_timestamp
            state.set("timestamp", timestamp)

        if truncate_to_seconds(timestamp) == truncate_to_seconds(gin_timestamp):
            return ""
        return message


_default_parser = LogLineParser()


def parse_log_line(raw: str) -> ParsedLogLine:
    """Parse one line with the default pipeline."""
    return _default_parser.parse_line(raw)


def parse_content(content: str) -> List[ParsedLogLine]:
    """Parse a log buffer with the default pipeline."""
    return _default_parser.parse_content(content)

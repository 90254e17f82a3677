"""
Log line parser and its pipeline stages.
"""

from logtrace.parsers.base import ParseState, PrefixExtractor, SegmentDetector
from logtrace.parsers.log_line_parser import LogLineParser, parse_content, parse_log_line

__all__ = [
    "ParseState",
    "PrefixExtractor",
    "SegmentDetector",
    "LogLineParser",
    "parse_content",
    "parse_log_line",
]

"""
Log view builder - filters a log buffer and counts facets for the
structured filter controls.
"""

import logging
from typing import Dict, Optional, Sequence

from logtrace.models.log_line import HttpMethod, ParsedLogLine, StatusGroup, resolve_status_group
from logtrace.models.view import LogFacets, LogView, LogViewQuery, PathOption
from logtrace.parsers.log_line_parser import LogLineParser

logger = logging.getLogger(__name__)

MANAGEMENT_API_PREFIX = "/v0/management"
DEFAULT_PATH_OPTION_LIMIT = 12


class LogViewBuilder:
    """
    Builds the filtered view of a log buffer.
    
    Steps:
    1. Drop management API lines and lines not matching the search text
    2. Parse what is left
    3. Count facets over the parsed lines
    4. Apply method, status group and path filters
    """
    
    def __init__(self, parser: Optional[LogLineParser] = None, path_option_limit: int = DEFAULT_PATH_OPTION_LIMIT):
        self.parser = parser or LogLineParser()
        self.path_option_limit = path_option_limit
    
    def build(self, lines: Sequence[str], query: Optional[LogViewQuery] = None) -> LogView:
        """
        Filter raw lines into a view.
        
        Args:
            lines: Raw log lines, oldest first
            query: Filters to apply. If None, only management lines are hidden.
            
        Returns:
            LogView with the surviving parsed lines and facet counts
        """
        query = query or LogViewQuery()
        working = [line for line in lines if line.strip()]
        
        if query.hide_management_logs:
            working = [line for line in working if MANAGEMENT_API_PREFIX not in line]
        
        search = (query.search or "").strip().lower()
        if search:
            working = [line for line in working if search in line.lower()]
        
        parsed = [self.parser.parse_line(line) for line in working]
        facets = self.compute_facets(parsed)
        
        if query.has_structured_filters:
            parsed = [line for line in parsed if self._matches(line, query)]
        
        removed = max(len(lines) - len(parsed), 0)
        logger.debug("Log view kept %d of %d lines", len(parsed), len(lines))
        return LogView(lines=parsed, facets=facets, removed_count=removed)
    
    def compute_facets(self, lines: Sequence[ParsedLogLine]) -> LogFacets:
        """Count methods, status groups and the most frequent paths."""
        method_counts: Dict[HttpMethod, int] = {}
        status_counts: Dict[StatusGroup, int] = {}
        path_counts: Dict[str, int] = {}
        
        for line in lines:
            if line.method:
                method_counts[line.method] = method_counts.get(line.method, 0) + 1
            
            group = resolve_status_group(line.status_code)
            if group:
                status_counts[group] = status_counts.get(group, 0) + 1
            
            if line.path:
                path_counts[line.path] = path_counts.get(line.path, 0) + 1
        
        ranked = sorted(path_counts.items(), key=lambda item: (-item[1], item[0]))
        path_options = [
            PathOption(path=path, count=count)
            for path, count in ranked[:self.path_option_limit]
        ]
        
        return LogFacets(
            method_counts=method_counts,
            status_counts=status_counts,
            path_options=path_options,
        )
    
    def _matches(self, line: ParsedLogLine, query: LogViewQuery) -> bool:
        """Check a parsed line against the structured filters."""
        if query.methods and line.method not in query.methods:
            return False
        
        if query.status_groups:
            group = resolve_status_group(line.status_code)
            if group is None or group not in query.status_groups:
                return False
        
        if query.paths and line.path not in query.paths:
            return False
        
        return True


def compute_facets(lines: Sequence[ParsedLogLine]) -> LogFacets:
    """Count facets with the default path option limit."""
    return LogViewBuilder().compute_facets(lines)


def build_log_view(lines: Sequence[str], query: Optional[LogViewQuery] = None) -> LogView:
    """Build a log view with the default parser."""
    return LogViewBuilder().build(lines, query)

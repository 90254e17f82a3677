"""
Log view models - filtered parsed lines plus facet counts.
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from logtrace.models.log_line import HttpMethod, ParsedLogLine, StatusGroup


class PathOption(BaseModel):
    """A request path and how often it appears."""
    path: str
    count: int


class LogFacets(BaseModel):
    """Counts used to build structured filters."""
    
    method_counts: Dict[HttpMethod, int] = Field(default_factory=dict)
    status_counts: Dict[StatusGroup, int] = Field(default_factory=dict)
    path_options: List[PathOption] = Field(default_factory=list)


class LogViewQuery(BaseModel):
    """Filters applied when building a log view."""
    
    search: Optional[str] = Field(
        default=None,
        description="Case-insensitive substring matched against raw lines"
    )
    hide_management_logs: bool = Field(
        default=True,
        description="Drop lines produced by management API calls"
    )
    methods: List[HttpMethod] = Field(default_factory=list)
    status_groups: List[StatusGroup] = Field(default_factory=list)
    paths: List[str] = Field(default_factory=list)

    @property
    def has_structured_filters(self) -> bool:
        return bool(self.methods or self.status_groups or self.paths)


class LogView(BaseModel):
    """Result of filtering a log buffer."""
    
    lines: List[ParsedLogLine] = Field(default_factory=list)
    facets: LogFacets = Field(default_factory=LogFacets)
    removed_count: int = Field(
        default=0,
        description="Number of input lines not present in the view"
    )

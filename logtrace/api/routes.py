"""
FastAPI API routes.
"""

import logging
from typing import Any, Dict, List, Optional
from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from logtrace import __version__
from logtrace.models.log_line import ParsedLogLine
from logtrace.models.trace import TraceCandidate
from logtrace.models.usage import SourceInfo, UsageDetailWithEndpoint
from logtrace.models.view import LogFacets, LogView, LogViewQuery
from logtrace.trace.paths import is_traceable_request_path
from logtrace.usage.collector import collect_usage_details_with_endpoint
from logtrace.usage.sources import build_credential_map
from logtrace.api.dependencies import get_parser, get_trace_resolver, get_view_builder

logger = logging.getLogger(__name__)

router = APIRouter()


# Request/Response Models
class ParseRequest(BaseModel):
    """Request model for parsing a log buffer."""
    content: str


class ParseResponse(BaseModel):
    """Parsed lines plus facet counts."""
    lines: List[ParsedLogLine]
    facets: LogFacets


class ViewRequest(BaseModel):
    """Request model for building a filtered log view."""
    content: str
    query: LogViewQuery = Field(default_factory=LogViewQuery)


class TraceableResponse(BaseModel):
    path: str
    traceable: bool


class TraceRequest(BaseModel):
    """
    Request model for trace resolution.
    
    The line may be sent already parsed or as raw text. Usage details may
    be sent normalized or as a raw usage snapshot.
    """
    line: Optional[ParsedLogLine] = None
    raw: Optional[str] = None
    usage_details: List[UsageDetailWithEndpoint] = Field(default_factory=list)
    usage_snapshot: Optional[Dict[str, Any]] = None
    auth_files: Optional[Any] = None
    source_info: Dict[str, SourceInfo] = Field(default_factory=dict)


class TraceResponse(BaseModel):
    line: ParsedLogLine
    candidates: List[TraceCandidate]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


# Routes
@router.get("/api/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse(status="healthy", version=__version__)


@router.post("/api/logs/parse", response_model=ParseResponse)
async def parse_logs(request: ParseRequest):
    """Parse a log buffer line by line."""
    if not request.content or not request.content.strip():
        raise HTTPException(status_code=400, detail="Log content is required")
    
    lines = get_parser().parse_content(request.content)
    facets = get_view_builder().compute_facets(lines)
    
    logger.info("Parsed %d log lines", len(lines))
    return ParseResponse(lines=lines, facets=facets)


@router.post("/api/logs/view", response_model=LogView)
async def view_logs(request: ViewRequest):
    """
    Filter a log buffer.
    
    Management API lines and search misses are dropped before parsing;
    method, status group and path filters apply to parsed lines.
    """
    return get_view_builder().build(request.content.splitlines(), request.query)


@router.get("/api/trace/traceable", response_model=TraceableResponse)
async def check_traceable(path: str = ""):
    """Check whether a request path can be traced to usage records."""
    return TraceableResponse(path=path, traceable=is_traceable_request_path(path))


@router.post("/api/trace", response_model=TraceResponse)
async def trace_request(request: TraceRequest):
    """
    Rank usage details that may belong to a request log line.
    
    An empty candidate list means no plausible match was found.
    """
    line = request.line
    if line is None and request.raw is not None:
        line = get_parser().parse_line(request.raw)
    if line is None:
        raise HTTPException(status_code=400, detail="A parsed line or raw line is required")
    
    if not is_traceable_request_path(line.path):
        logger.warning("Trace requested for non-traceable path %r", line.path)
        raise HTTPException(
            status_code=422,
            detail=f"Path is not traceable: {line.path or '-'}"
        )
    
    usage_details = list(request.usage_details)
    if request.usage_snapshot is not None:
        usage_details.extend(collect_usage_details_with_endpoint(request.usage_snapshot))
    
    candidates = get_trace_resolver().resolve(
        line,
        usage_details,
        source_info_map=request.source_info,
        auth_file_map=build_credential_map(request.auth_files),
    )
    
    logger.info(
        "Trace for %s %s: %d candidates from %d usage details",
        line.method.value if line.method else "-", line.path, len(candidates), len(usage_details),
    )
    return TraceResponse(line=line, candidates=candidates)

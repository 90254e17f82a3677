"""
Trace candidate model - a ranked pairing of a log line with a usage detail.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, ConfigDict

from logtrace.models.usage import SourceInfo, UsageDetailWithEndpoint


class TraceConfidence(str, Enum):
    """Coarse strength of a trace candidate."""
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class TraceCandidate(BaseModel):
    """
    A proposed match between the selected log line and one usage detail.
    
    The log line itself is held by the caller, so only the usage side
    is stored here.
    """
    
    detail: UsageDetailWithEndpoint = Field(
        description="Matched usage detail"
    )
    score: int = Field(
        description="Summed signal score (always positive)"
    )
    confidence: TraceConfidence = Field(
        description="Confidence tier derived from the score"
    )
    time_delta_ms: Optional[int] = Field(
        default=None,
        description="Absolute time between the two events, None if either is unknown"
    )
    source_info: Optional[SourceInfo] = Field(
        default=None,
        description="Display name of the detail's source"
    )

    model_config = ConfigDict(frozen=True)

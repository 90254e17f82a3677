"""
Abstract base class for trace matching signals.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from logtrace.models.log_line import ParsedLogLine
from logtrace.models.usage import UsageDetailWithEndpoint
from logtrace.trace.policy import TracePolicy


@dataclass(frozen=True)
class TraceContext:
    """Values derived from the selected log line once per resolution."""

    line: ParsedLogLine
    timestamp_ms: Optional[int]
    path: str


@dataclass
class MatchEvidence:
    """Score accumulated for one (line, usage detail) pair."""

    score: int = 0
    time_delta_ms: Optional[int] = None
    method_matched: bool = False
    path_matched: bool = False


class TraceSignal(ABC):
    """
    Abstract base class for all matching signals.
    
    Each signal must define:
    - signal_id: Unique identifier
    - description: What agreement the signal looks for
    - apply(): Add its points to the evidence
    
    A signal with nothing to compare (a missing field on either side)
    leaves the evidence untouched.
    """
    
    signal_id: str
    description: str
    
    def __init__(self, policy: Optional[TracePolicy] = None):
        self.policy = policy or TracePolicy()
    
    @abstractmethod
    def apply(
        self,
        context: TraceContext,
        detail: UsageDetailWithEndpoint,
        evidence: MatchEvidence,
    ) -> None:
        """
        Score one usage detail against the log line.
        
        Args:
            context: Precomputed log line values
            detail: Usage detail being scored
            evidence: Accumulator updated in place
        """
        pass

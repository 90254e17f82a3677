"""
Outcome signal: success/failure agreement.
"""

from logtrace.models.usage import UsageDetailWithEndpoint
from logtrace.trace.signals.base import MatchEvidence, TraceContext, TraceSignal


class OutcomeSignal(TraceSignal):
    """A 4xx/5xx log line should pair with a failed usage event."""
    
    signal_id = "outcome"
    description = "Log status and usage failure flag agree"
    
    FAILURE_STATUS = 400
    
    def apply(
        self,
        context: TraceContext,
        detail: UsageDetailWithEndpoint,
        evidence: MatchEvidence,
    ) -> None:
        status_code = context.line.status_code
        if status_code is None:
            return
        
        log_failed = status_code >= self.FAILURE_STATUS
        if log_failed == detail.failed:
            evidence.score += self.policy.outcome_match_weight
        else:
            evidence.score += self.policy.outcome_mismatch_penalty

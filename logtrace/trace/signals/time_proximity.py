"""
Time proximity signal.
"""

from logtrace.models.usage import UsageDetailWithEndpoint
from logtrace.trace.signals.base import MatchEvidence, TraceContext, TraceSignal


class TimeProximitySignal(TraceSignal):
    """
    Rewards usage events recorded close to the log line.
    
    Tiers (default policy):
    - within 3s: strong
    - within 10s: medium
    - within 30s: weak
    - beyond: penalty
    """
    
    signal_id = "time_proximity"
    description = "Usage event recorded close to the log timestamp"
    
    def apply(
        self,
        context: TraceContext,
        detail: UsageDetailWithEndpoint,
        evidence: MatchEvidence,
    ) -> None:
        if context.timestamp_ms is None or detail.timestamp_ms <= 0:
            return
        
        delta = abs(context.timestamp_ms - detail.timestamp_ms)
        evidence.time_delta_ms = delta
        
        policy = self.policy
        if delta <= policy.strong_window_ms:
            evidence.score += policy.strong_window_weight
        elif delta <= policy.window_ms:
            evidence.score += policy.window_weight
        elif delta <= policy.max_window_ms:
            evidence.score += policy.max_window_weight
        else:
            evidence.score += policy.beyond_window_penalty

"""
Request shape signals: HTTP method and path agreement.
"""

from logtrace.models.usage import UsageDetailWithEndpoint
from logtrace.trace.paths import normalize_trace_path
from logtrace.trace.signals.base import MatchEvidence, TraceContext, TraceSignal


class MethodSignal(TraceSignal):
    signal_id = "method"
    description = "Log method equals the usage endpoint method"
    
    def apply(
        self,
        context: TraceContext,
        detail: UsageDetailWithEndpoint,
        evidence: MatchEvidence,
    ) -> None:
        method = context.line.method
        if not method or not detail.endpoint_method:
            return
        
        if method.value.upper() == detail.endpoint_method.upper():
            evidence.score += self.policy.method_match_weight
            evidence.method_matched = True
        else:
            evidence.score += self.policy.method_mismatch_penalty


class PathSignal(TraceSignal):
    """
    Compares request paths.
    
    Exact equality scores highest; one path being a prefix of the other
    (e.g. /v1beta/models vs /v1beta/models/gemini-pro:generateContent)
    still counts as a match.
    """
    
    signal_id = "path"
    description = "Log path equals or contains the usage endpoint path"
    
    def apply(
        self,
        context: TraceContext,
        detail: UsageDetailWithEndpoint,
        evidence: MatchEvidence,
    ) -> None:
        log_path = context.path
        detail_path = normalize_trace_path(detail.endpoint_path)
        if not log_path or not detail_path:
            return
        
        if log_path == detail_path:
            evidence.score += self.policy.path_exact_weight
            evidence.path_matched = True
        elif log_path.startswith(detail_path) or detail_path.startswith(log_path):
            evidence.score += self.policy.path_prefix_weight
            evidence.path_matched = True
        else:
            evidence.score += self.policy.path_mismatch_penalty

"""
Trace resolver - ranks usage details that may belong to a log line.
"""

import logging
import sys
from datetime import tzinfo
from typing import Iterable, List, Mapping, Optional

from logtrace.models.log_line import ParsedLogLine
from logtrace.models.trace import TraceCandidate, TraceConfidence
from logtrace.models.usage import CredentialInfo, SourceInfo, UsageDetailWithEndpoint
from logtrace.trace.paths import normalize_trace_path
from logtrace.trace.policy import TracePolicy
from logtrace.trace.signals import (
    MatchEvidence,
    MethodSignal,
    OutcomeSignal,
    PathSignal,
    TimeProximitySignal,
    TraceContext,
    TraceSignal,
)
from logtrace.trace.timestamps import parse_log_timestamp_ms
from logtrace.usage.sources import resolve_source_display

logger = logging.getLogger(__name__)


class TraceResolver:
    """
    Correlates a request log line with recorded usage details.

    Log lines and usage events share no identifier, so every usage detail
    is scored by summing weighted signal agreements:
    1. Time proximity of the two events
    2. HTTP method equality
    3. Path equality or prefix containment
    4. Success/failure agreement

    Pairs with no positive score are dropped, as are pairs far apart in
    time with neither method nor path in agreement. The rest are ranked
    by score, then by time delta.

    Callers are expected to check ``is_traceable_request_path`` first.
    """

    def __init__(
        self,
        policy: Optional[TracePolicy] = None,
        signals: Optional[List[TraceSignal]] = None,
        timezone: Optional[tzinfo] = None,
    ):
        """
        Initialize the resolver.

        Args:
            policy: Windows, weights and thresholds. If None, uses defaults.
            signals: Custom signal list. If None, uses the default signals.
            timezone: Zone of naive log timestamps (None = local time)
        """
        self.policy = policy or TracePolicy()
        if signals is None:
            self.signals = self._get_default_signals()
        else:
            self.signals = signals
        self.timezone = timezone

    def _get_default_signals(self) -> List[TraceSignal]:
        """Get the default set of matching signals."""
        return [
            TimeProximitySignal(self.policy),
            MethodSignal(self.policy),
            PathSignal(self.policy),
            OutcomeSignal(self.policy),
        ]

    def build_context(self, line: ParsedLogLine) -> TraceContext:
        """Precompute the log line values shared by every comparison."""
        return TraceContext(
            line=line,
            timestamp_ms=parse_log_timestamp_ms(line.timestamp, self.timezone),
            path=normalize_trace_path(line.path),
        )

    def score(
        self,
        context: TraceContext,
        detail: UsageDetailWithEndpoint,
    ) -> Optional[MatchEvidence]:
        """
        Score a single usage detail.

        Returns:
            The evidence, or None if the detail is not a plausible match
        """
        evidence = MatchEvidence()
        for signal in self.signals:
            signal.apply(context, detail, evidence)

        if (
            evidence.time_delta_ms is not None
            and evidence.time_delta_ms > self.policy.max_window_ms
            and not evidence.method_matched
            and not evidence.path_matched
        ):
            return None

        if evidence.score <= 0:
            return None
        return evidence

    def classify(self, score: int) -> TraceConfidence:
        """Map a score to its confidence tier."""
        if score >= self.policy.high_confidence_score:
            return TraceConfidence.HIGH
        if score >= self.policy.medium_confidence_score:
            return TraceConfidence.MEDIUM
        return TraceConfidence.LOW

    def resolve(
        self,
        line: ParsedLogLine,
        usage_details: Iterable[UsageDetailWithEndpoint],
        source_info_map: Optional[Mapping[str, SourceInfo]] = None,
        auth_file_map: Optional[Mapping[str, CredentialInfo]] = None,
    ) -> List[TraceCandidate]:
        """
        Rank the usage details that may have produced this log line.

        Args:
            line: Selected log line
            usage_details: Usage details to search
            source_info_map: Configured sources, for display names only
            auth_file_map: Auth files by index, for display names only

        Returns:
            Up to ``policy.max_candidates`` candidates, best first.
            Empty when nothing plausible is found.
        """
        context = self.build_context(line)

        scored = []
        examined = 0
        for detail in usage_details:
            examined += 1
            evidence = self.score(context, detail)
            if evidence is not None:
                scored.append((detail, evidence))

        scored.sort(key=lambda item: (
            -item[1].score,
            item[1].time_delta_ms if item[1].time_delta_ms is not None else sys.maxsize,
        ))

        candidates = [
            TraceCandidate(
                detail=detail,
                score=evidence.score,
                confidence=self.classify(evidence.score),
                time_delta_ms=evidence.time_delta_ms,
                source_info=resolve_source_display(
                    detail.source, detail.auth_index, source_info_map, auth_file_map
                ),
            )
            for detail, evidence in scored[:self.policy.max_candidates]
        ]

        logger.debug(
            "Resolved %d trace candidates from %d usage details (%d plausible)",
            len(candidates), examined, len(scored),
        )
        return candidates


_default_resolver = TraceResolver()


def resolve_trace_candidates(
    line: ParsedLogLine,
    usage_details: Iterable[UsageDetailWithEndpoint],
    source_info_map: Optional[Mapping[str, SourceInfo]] = None,
    auth_file_map: Optional[Mapping[str, CredentialInfo]] = None,
) -> List[TraceCandidate]:
    """Resolve trace candidates with the default policy."""
    return _default_resolver.resolve(line, usage_details, source_info_map, auth_file_map)

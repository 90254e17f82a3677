"""
Trace matching signals.
"""

from logtrace.trace.signals.base import MatchEvidence, TraceContext, TraceSignal
from logtrace.trace.signals.time_proximity import TimeProximitySignal
from logtrace.trace.signals.request import MethodSignal, PathSignal
from logtrace.trace.signals.outcome import OutcomeSignal

__all__ = [
    "MatchEvidence",
    "TraceContext",
    "TraceSignal",
    "TimeProximitySignal",
    "MethodSignal",
    "PathSignal",
    "OutcomeSignal",
]

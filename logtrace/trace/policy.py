"""
Tunable constants for trace candidate scoring.
"""

from pydantic import BaseModel, Field, model_validator


class TracePolicy(BaseModel):
    """
    Time windows, signal weights and confidence thresholds.
    
    The defaults were tuned by hand against proxy logs. Treat them as
    policy: tests should only rely on the relative ordering they produce.
    """
    
    # Time windows
    strong_window_ms: int = Field(default=3_000, ge=0)
    window_ms: int = Field(default=10_000, ge=0)
    max_window_ms: int = Field(default=30_000, ge=0)
    
    # Signal weights
    strong_window_weight: int = 42
    window_weight: int = 30
    max_window_weight: int = 12
    beyond_window_penalty: int = -12
    method_match_weight: int = 18
    method_mismatch_penalty: int = -8
    path_exact_weight: int = 24
    path_prefix_weight: int = 12
    path_mismatch_penalty: int = -8
    outcome_match_weight: int = 10
    outcome_mismatch_penalty: int = -6
    
    # Confidence tiers
    high_confidence_score: int = 70
    medium_confidence_score: int = 45
    
    max_candidates: int = Field(default=8, ge=1)
    
    @model_validator(mode="after")
    def check_ordering(self) -> "TracePolicy":
        """Windows and confidence thresholds must be ordered."""
        if not self.strong_window_ms <= self.window_ms <= self.max_window_ms:
            raise ValueError(
                "Time windows must satisfy strong_window_ms <= window_ms <= max_window_ms"
            )
        if self.medium_confidence_score > self.high_confidence_score:
            raise ValueError("medium_confidence_score must not exceed high_confidence_score")
        return self

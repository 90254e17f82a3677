"""
Application configuration using Pydantic Settings.
Loads from environment variables and .env file.
"""

from functools import lru_cache
from typing import Optional
from pydantic_settings import BaseSettings, SettingsConfigDict

from logtrace.trace.policy import TracePolicy


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )
    
    # Application Settings
    app_env: str = "development"
    debug: bool = True
    app_name: str = "Log Trace Service"
    log_level: str = "INFO"
    
    # Timezone of naive log timestamps (None = server local time)
    log_timezone: Optional[str] = None
    
    # Trace Matching Policy
    trace_strong_window_ms: int = 3_000
    trace_window_ms: int = 10_000
    trace_max_window_ms: int = 30_000
    trace_high_confidence_score: int = 70
    trace_medium_confidence_score: int = 45
    trace_max_candidates: int = 8
    
    # Log View
    path_option_limit: int = 12

    def trace_policy(self) -> TracePolicy:
        """Build the trace policy from the configured thresholds."""
        return TracePolicy(
            strong_window_ms=self.trace_strong_window_ms,
            window_ms=self.trace_window_ms,
            max_window_ms=self.trace_max_window_ms,
            high_confidence_score=self.trace_high_confidence_score,
            medium_confidence_score=self.trace_medium_confidence_score,
            max_candidates=self.trace_max_candidates,
        )


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()

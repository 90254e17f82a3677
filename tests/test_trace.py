"""
Tests for trace candidate resolution.
"""

from datetime import timezone

import pytest
from pydantic import ValidationError

from logtrace.models.trace import TraceConfidence
from logtrace.models.usage import CredentialInfo, SourceInfo, UsageDetailWithEndpoint
from logtrace.parsers.log_line_parser import parse_log_line
from logtrace.trace.paths import is_traceable_request_path, normalize_trace_path
from logtrace.trace.policy import TracePolicy
from logtrace.trace.resolver import TraceResolver, resolve_trace_candidates
from logtrace.trace.timestamps import parse_log_timestamp_ms


REQUEST_LINE = ("[2024-01-01 10:00:00] [a1b2c3d4] info [router.go:22] | 200 | 12ms | "
                "203.0.113.5 | POST /v1/chat/completions | req ok")
BASE_MS = parse_log_timestamp_ms("2024-01-01 10:00:00", timezone.utc)


def create_detail(
    offset_seconds=None,
    method="POST",
    path="/v1/chat/completions",
    failed=False,
    source=None,
    auth_index=None,
    model_name="gpt-4o",
) -> UsageDetailWithEndpoint:
    """Helper to create a usage detail relative to the request line."""
    timestamp_ms = 0 if offset_seconds is None else BASE_MS + int(offset_seconds * 1000)
    return UsageDetailWithEndpoint(
        timestamp_ms=timestamp_ms,
        endpoint_method=method,
        endpoint_path=path,
        model_name=model_name,
        source=source,
        auth_index=auth_index,
        failed=failed,
    )


class TestTraceablePaths:
    """Tests for the traceable path gate."""

    @pytest.mark.parametrize("path", [
        "/v1/chat/completions",
        "/v1/chat/completions?stream=true",
        "/v1/messages/",
        '"/v1/responses"',
        "/v1beta/models/gemini-pro:streamGenerateContent?alt=sse",
    ])
    def test_traceable(self, path):
        assert is_traceable_request_path(path) is True

    @pytest.mark.parametrize("path", [None, "", "/", "/health", "/v1/models", "/v0/management/usage"])
    def test_not_traceable(self, path):
        assert is_traceable_request_path(path) is False

    def test_normalize_trace_path(self):
        assert normalize_trace_path('"/v1/messages?beta=true"') == "/v1/messages"
        assert normalize_trace_path(None) == ""


class TestLogTimestamps:
    """Tests for log timestamp conversion."""

    def test_parse_with_fraction(self):
        assert parse_log_timestamp_ms("2024-01-01 10:00:00.5", timezone.utc) == 1704103200500

    def test_parse_with_offset(self):
        assert parse_log_timestamp_ms("2024-01-01T18:00:00+08:00") == 1704103200000

    @pytest.mark.parametrize("value", [None, "", "garbage", "2024-13-01 10:00:00", "2024/01/01 10:00:00"])
    def test_invalid(self, value):
        assert parse_log_timestamp_ms(value, timezone.utc) is None


class TestTracePolicy:
    """Tests for TracePolicy validation."""

    def test_defaults_are_valid(self):
        policy = TracePolicy()

        assert policy.strong_window_ms < policy.window_ms < policy.max_window_ms

    def test_equal_windows_allowed(self):
        policy = TracePolicy(strong_window_ms=5_000, window_ms=5_000, max_window_ms=5_000)

        assert policy.window_ms == 5_000

    @pytest.mark.parametrize("overrides", [
        {"strong_window_ms": 20_000},
        {"window_ms": 40_000},
        {"max_window_ms": 5_000},
        {"medium_confidence_score": 80},
        {"high_confidence_score": 40},
    ])
    def test_misordered_values_rejected(self, overrides):
        with pytest.raises(ValidationError):
            TracePolicy(**overrides)


class TestTraceResolver:
    """Tests for TraceResolver."""

    def setup_method(self):
        self.resolver = TraceResolver(timezone=timezone.utc)
        self.line = parse_log_line(REQUEST_LINE)

    def test_empty_usage_details(self):
        assert self.resolver.resolve(self.line, []) == []

    def test_orders_by_time_proximity(self):
        near = create_detail(1)
        middle = create_detail(8)
        far = create_detail(40)

        candidates = self.resolver.resolve(self.line, [far, near, middle])

        assert [c.detail for c in candidates] == [near, middle, far]
        assert [c.time_delta_ms for c in candidates] == [1000, 8000, 40000]
        assert candidates[0].confidence == TraceConfidence.HIGH
        assert candidates[-1].confidence == TraceConfidence.LOW

    def test_resolve_is_repeatable(self):
        details = [create_detail(2), create_detail(5, failed=True), create_detail(-20, path="/v1/messages")]

        first = self.resolver.resolve(self.line, details)
        second = self.resolver.resolve(self.line, details)

        assert first == second

    def test_line_without_timestamp_uses_other_signals(self):
        line = parse_log_line("INFO POST /v1/chat/completions 200 OK")
        matching = create_detail(1)
        failed = create_detail(1, failed=True)
        other_endpoint = create_detail(1, method="GET", path="/v1/models")

        candidates = self.resolver.resolve(line, [failed, other_endpoint, matching])

        assert [c.detail for c in candidates] == [matching, failed]
        assert all(c.time_delta_ms is None for c in candidates)
        assert candidates[0].score > candidates[1].score

    def test_detail_without_timestamp_has_no_delta(self):
        candidates = self.resolver.resolve(self.line, [create_detail(None)])

        assert len(candidates) == 1
        assert candidates[0].time_delta_ms is None

    def test_far_detail_without_request_agreement_is_dropped(self):
        resolver = TraceResolver(policy=TracePolicy(beyond_window_penalty=0), timezone=timezone.utc)
        unrelated = create_detail(120, method=None, path=None)

        assert resolver.resolve(self.line, [unrelated]) == []

    def test_far_detail_with_request_agreement_is_kept(self):
        candidates = self.resolver.resolve(self.line, [create_detail(120)])

        assert len(candidates) == 1
        assert candidates[0].time_delta_ms == 120000

    def test_non_positive_scores_are_dropped(self):
        mismatch = create_detail(60, method="GET", path="/v1/models", failed=True)

        assert self.resolver.resolve(self.line, [mismatch]) == []

    def test_prefix_path_match(self):
        line = parse_log_line(
            "[2024-01-01 10:00:00] [info ] [gin_logger.go:94] | 200 | 3s | "
            "POST /v1beta/models/gemini-pro:generateContent"
        )
        candidates = self.resolver.resolve(line, [create_detail(1, path="/v1beta/models")])

        assert len(candidates) == 1
        assert candidates[0].score == 42 + 18 + 12 + 10

    def test_ties_broken_by_time_delta(self):
        later = create_detail(2.5)
        sooner = create_detail(-0.5)

        candidates = self.resolver.resolve(self.line, [later, sooner])

        assert candidates[0].score == candidates[1].score
        assert [c.detail for c in candidates] == [sooner, later]

    def test_results_are_truncated(self):
        details = [create_detail(i) for i in range(12)]

        candidates = self.resolver.resolve(self.line, details)

        assert len(candidates) == 8

    def test_custom_candidate_limit(self):
        resolver = TraceResolver(policy=TracePolicy(max_candidates=2), timezone=timezone.utc)

        assert len(resolver.resolve(self.line, [create_detail(i) for i in range(5)])) == 2

    @pytest.mark.parametrize("score,confidence", [
        (94, TraceConfidence.HIGH),
        (70, TraceConfidence.HIGH),
        (69, TraceConfidence.MEDIUM),
        (45, TraceConfidence.MEDIUM),
        (44, TraceConfidence.LOW),
        (1, TraceConfidence.LOW),
    ])
    def test_classify(self, score, confidence):
        assert self.resolver.classify(score) == confidence

    def test_source_display_enrichment(self):
        temporary = create_detail(1, source="t:team-a")
        by_auth_file = create_detail(2, source="abc123", auth_index=3)
        configured = create_detail(3, source="sk-configured")

        candidates = self.resolver.resolve(
            self.line,
            [temporary, by_auth_file, configured],
            source_info_map={"sk-configured": SourceInfo(display_name="Claude #1", type="claude")},
            auth_file_map={"3": CredentialInfo(name="alice.json", type="codex")},
        )

        names = {c.detail.source: c.source_info.display_name for c in candidates}
        assert names == {
            "t:team-a": "team-a",
            "abc123": "alice.json",
            "sk-configured": "Claude #1",
        }

    def test_enrichment_does_not_change_ranking(self):
        details = [create_detail(5, source="b", auth_index=1), create_detail(1, source="a")]

        plain = self.resolver.resolve(self.line, details)
        enriched = self.resolver.resolve(
            self.line, details, auth_file_map={"1": CredentialInfo(name="x.json")}
        )

        assert [c.detail for c in plain] == [c.detail for c in enriched]
        assert [c.score for c in plain] == [c.score for c in enriched]

    def test_module_level_resolver(self):
        line = parse_log_line("POST /v1/messages 200 OK")

        candidates = resolve_trace_candidates(line, [create_detail(None, path="/v1/messages")])

        assert len(candidates) == 1
        assert candidates[0].score == 18 + 24 + 10
        assert candidates[0].confidence == TraceConfidence.MEDIUM

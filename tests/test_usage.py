"""
Tests for usage snapshot normalization and source display helpers.
"""

import pytest

from logtrace.models.usage import CredentialInfo, SourceInfo
from logtrace.usage.collector import (
    collect_usage_details_with_endpoint,
    normalize_auth_index,
    parse_usage_timestamp_ms,
    split_endpoint,
)
from logtrace.usage.sources import build_credential_map, resolve_source_display


SNAPSHOT = {
    "usage": {
        "apis": {
            "POST /v1/chat/completions": {
                "models": {
                    "gpt-4o": {
                        "details": [
                            {
                                "timestamp": "2024-01-01T10:00:01.123456789Z",
                                "source": "t:team-a",
                                "auth_index": 3,
                                "failed": False,
                                "tokens": {"input_tokens": 10, "output_tokens": 20},
                            },
                            "not a detail",
                        ]
                    },
                    "broken": {"details": "nope"},
                }
            },
            "/v1beta/models": {
                "models": {
                    "gemini-pro": {
                        "details": [
                            {"timestamp": "yesterday", "auth_index": True, "failed": True},
                        ]
                    }
                }
            },
            "garbage": None,
        }
    }
}


class TestCollectUsageDetails:
    """Tests for collect_usage_details_with_endpoint."""

    def test_flattens_snapshot(self):
        details = collect_usage_details_with_endpoint(SNAPSHOT)

        assert len(details) == 2
        chat, gemini = details

        assert chat.endpoint_method == "POST"
        assert chat.endpoint_path == "/v1/chat/completions"
        assert chat.model_name == "gpt-4o"
        assert chat.timestamp_ms == 1704103201123
        assert chat.source == "t:team-a"
        assert chat.auth_index == 3
        assert chat.failed is False

        assert gemini.endpoint_method is None
        assert gemini.endpoint_path == "/v1beta/models"
        assert gemini.timestamp_ms == 0
        assert gemini.auth_index is None
        assert gemini.failed is True

    def test_unwrapped_snapshot(self):
        details = collect_usage_details_with_endpoint(SNAPSHOT["usage"])

        assert len(details) == 2

    @pytest.mark.parametrize("snapshot", [None, {}, {"usage": None}, {"apis": []}, []])
    def test_empty_or_malformed_snapshot(self, snapshot):
        assert collect_usage_details_with_endpoint(snapshot) == []


class TestUsageHelpers:
    """Tests for auth index, timestamp and endpoint helpers."""

    @pytest.mark.parametrize("value,expected", [
        (3, "3"),
        (3.0, "3"),
        (2.5, "2.5"),
        (" 7 ", "7"),
        ("", None),
        ("   ", None),
        (True, None),
        (None, None),
        (float("nan"), None),
        ({"index": 1}, None),
    ])
    def test_normalize_auth_index(self, value, expected):
        assert normalize_auth_index(value) == expected

    @pytest.mark.parametrize("value,expected", [
        ("2024-01-01T10:00:00Z", 1704103200000),
        ("2024-01-01T18:00:00.250+08:00", 1704103200250),
        ("2024-01-01T10:00:00", 1704103200000),
        ("bad", 0),
        ("", 0),
        (None, 0),
        (1704103200000, 0),
    ])
    def test_parse_usage_timestamp(self, value, expected):
        assert parse_usage_timestamp_ms(value) == expected

    @pytest.mark.parametrize("endpoint,expected", [
        ("POST /v1/messages", ("POST", "/v1/messages")),
        ("get /v1/models", ("GET", "/v1/models")),
        ("/v1/responses", (None, "/v1/responses")),
        ("openai-key", (None, None)),
    ])
    def test_split_endpoint(self, endpoint, expected):
        assert split_endpoint(endpoint) == expected


class TestSourceDisplay:
    """Tests for credential maps and source display names."""

    def test_build_credential_map(self):
        credentials = build_credential_map({"files": [
            {"auth_index": 1, "name": "a.json", "type": "codex"},
            {"authIndex": "2", "provider": "gemini"},
            {"name": "no-index.json"},
            "junk",
        ]})

        assert credentials == {
            "1": CredentialInfo(name="a.json", type="codex"),
            "2": CredentialInfo(name="2", type="gemini"),
        }

    def test_build_credential_map_from_list(self):
        assert list(build_credential_map([{"auth_index": 0, "name": "z.json"}])) == ["0"]

    @pytest.mark.parametrize("payload", [None, {}, "files", {"files": "x"}])
    def test_build_credential_map_malformed(self, payload):
        assert build_credential_map(payload) == {}

    def test_configured_source_wins(self):
        info = resolve_source_display(
            " sk-1 ", 1,
            source_info_map={"sk-1": SourceInfo(display_name="Gemini #1", type="gemini")},
            auth_file_map={"1": CredentialInfo(name="a.json", type="codex")},
        )

        assert info == SourceInfo(display_name="Gemini #1", type="gemini")

    def test_auth_file_fallback(self):
        info = resolve_source_display("unknown", "1", auth_file_map={"1": CredentialInfo(name="a.json", type="codex")})

        assert info == SourceInfo(display_name="a.json", type="codex")

    @pytest.mark.parametrize("source,expected", [
        ("t:team-a", "team-a"),
        ("raw-source", "raw-source"),
        ("", "-"),
        (None, "-"),
    ])
    def test_raw_source_fallback(self, source, expected):
        assert resolve_source_display(source, None).display_name == expected

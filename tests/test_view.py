"""
Tests for log view filtering and facets.
"""

from logtrace.analysis.view import LogViewBuilder, build_log_view, compute_facets
from logtrace.models.log_line import HttpMethod, StatusGroup, resolve_status_group
from logtrace.models.view import LogViewQuery, PathOption
from logtrace.parsers.log_line_parser import parse_content


LOG_LINES = [
    "[2024-01-01 10:00:00] [info ] [gin_logger.go:94] | 200 | 5ms | 10.0.0.1 | POST /v1/chat/completions",
    "[2024-01-01 10:00:01] [info ] [gin_logger.go:94] | 200 | 5ms | 10.0.0.1 | GET /v1/models",
    "[2024-01-01 10:00:02] [warn ] [gin_logger.go:94] | 500 | 5ms | 10.0.0.1 | POST /v1/chat/completions",
    "[2024-01-01 10:00:03] [info ] [gin_logger.go:94] | 200 | 1ms | 10.0.0.1 | GET /v0/management/config",
    "[2024-01-01 10:00:04] [info ] plain message",
]


class TestLogViewBuilder:
    """Tests for LogViewBuilder."""

    def setup_method(self):
        self.builder = LogViewBuilder()

    def test_hides_management_lines_by_default(self):
        view = self.builder.build(LOG_LINES)

        assert len(view.lines) == 4
        assert view.removed_count == 1
        assert all("/v0/management" not in line.raw for line in view.lines)

    def test_shows_management_lines_when_asked(self):
        view = self.builder.build(LOG_LINES, LogViewQuery(hide_management_logs=False))

        assert len(view.lines) == 5
        assert view.removed_count == 0

    def test_facets(self):
        view = self.builder.build(LOG_LINES)

        assert view.facets.method_counts == {HttpMethod.POST: 2, HttpMethod.GET: 1}
        assert view.facets.status_counts == {StatusGroup.SUCCESS: 2, StatusGroup.SERVER_ERROR: 1}
        assert view.facets.path_options == [
            PathOption(path="/v1/chat/completions", count=2),
            PathOption(path="/v1/models", count=1),
        ]

    def test_method_filter(self):
        view = self.builder.build(LOG_LINES, LogViewQuery(methods=[HttpMethod.POST]))

        assert [line.status_code for line in view.lines] == [200, 500]
        assert view.removed_count == 3
        assert view.facets.method_counts[HttpMethod.GET] == 1

    def test_status_group_filter(self):
        view = self.builder.build(LOG_LINES, LogViewQuery(status_groups=[StatusGroup.SERVER_ERROR]))

        assert len(view.lines) == 1
        assert view.lines[0].status_code == 500

    def test_path_filter(self):
        view = self.builder.build(LOG_LINES, LogViewQuery(paths=["/v1/models"]))

        assert [line.path for line in view.lines] == ["/v1/models"]

    def test_search_is_case_insensitive(self):
        view = self.builder.build(LOG_LINES, LogViewQuery(search="  PLAIN  "))

        assert [line.message for line in view.lines] == ["plain message"]

    def test_path_option_limit_and_ordering(self):
        builder = LogViewBuilder(path_option_limit=2)
        lines = parse_content("GET /b\nGET /a\nGET /c\nGET /c")

        facets = builder.compute_facets(lines)

        assert facets.path_options == [PathOption(path="/c", count=2), PathOption(path="/a", count=1)]


class TestModuleHelpers:
    """Tests for module-level helpers."""

    def test_build_log_view(self):
        assert len(build_log_view(LOG_LINES).lines) == 4

    def test_compute_facets_empty(self):
        facets = compute_facets([])

        assert facets.method_counts == {}
        assert facets.path_options == []

    def test_resolve_status_group(self):
        assert resolve_status_group(204) == StatusGroup.SUCCESS
        assert resolve_status_group(302) == StatusGroup.REDIRECT
        assert resolve_status_group(404) == StatusGroup.CLIENT_ERROR
        assert resolve_status_group(503) == StatusGroup.SERVER_ERROR
        assert resolve_status_group(101) is None
        assert resolve_status_group(None) is None

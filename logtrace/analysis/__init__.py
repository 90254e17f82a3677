"""
Log view filtering and facet counting.
"""

from logtrace.analysis.view import LogViewBuilder, build_log_view, compute_facets

__all__ = ["LogViewBuilder", "build_log_view", "compute_facets"]

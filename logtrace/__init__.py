"""
logtrace - Log Line Parsing and Usage Trace Correlation

Parses semi-structured server log lines into normalized records and
correlates request lines with recorded upstream usage events.
"""

__version__ = "1.0.0"

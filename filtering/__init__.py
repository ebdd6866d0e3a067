"""
Query language for selecting tests.

Parses ``+``/``-`` scoped entries and resolves them against packages,
classes, methods and annotations.
"""

from filtering.conditions import CONDITIONS, get_condition, method_corresponds
from filtering.query import FilterEntry, parse_entry, parse_query
from filtering.tests_filter import TestsFilter, in_package

__all__ = [
    "CONDITIONS",
    "FilterEntry",
    "TestsFilter",
    "get_condition",
    "in_package",
    "method_corresponds",
    "parse_entry",
    "parse_query",
]

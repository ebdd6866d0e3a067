"""
Extraction Engine

Tree-sitter-based Java source parser and test extractor.
Builds a source-tree model of test classes and turns test methods into
``TestUnit`` records.
"""

from extraction.models import TestUnit
from extraction.parser import create_parser, parse_file, parse_bytes, count_error_nodes
from extraction.source_tree import (
    Annotation,
    AnnotationKind,
    CompilationUnit,
    Method,
    ParseResult,
)
from extraction.traversal import build_compilation_unit
from extraction.strategies import ExtractionStrategies, build_strategies
from extraction.extractor import (
    ExtractionStats,
    TestExtractor,
    discover_java_files,
    iter_compilation_units,
    iter_parse_results,
    parse_compilation_unit,
)

__all__ = [
    # Data models
    "TestUnit",
    "Annotation",
    "AnnotationKind",
    "CompilationUnit",
    "Method",
    "ParseResult",
    "ExtractionStats",
    # Low-level parsing
    "create_parser",
    "parse_file",
    "parse_bytes",
    "count_error_nodes",
    # Mid-level model building
    "build_compilation_unit",
    # High-level orchestration
    "ExtractionStrategies",
    "build_strategies",
    "TestExtractor",
    "discover_java_files",
    "iter_compilation_units",
    "iter_parse_results",
    "parse_compilation_unit",
]

"""
High-level orchestrator for test extraction.

This module discovers Java files under a root, parses them into compilation
units and turns qualifying methods into ``TestUnit`` records, optionally
filtered by a ``TestsFilter``.
"""

import logging
import os
from typing import Iterable, Iterator, List, Optional, Tuple

from core.errors import StructuralError
from extraction.config import (
    DEFAULT_TEST_ID_ANNOTATION,
    JAVA_EXTENSIONS,
)
from extraction.models import TestUnit
from extraction.parser import count_error_nodes, parse_file
from extraction.source_tree import CompilationUnit, Method, ParseResult
from extraction.strategies import ExtractionStrategies
from extraction.traversal import build_compilation_unit

logger = logging.getLogger(__name__)


class ExtractionStats:
    """Statistics for an extraction operation."""

    def __init__(self):
        self.files_parsed = 0
        self.files_skipped = 0
        self.tests_extracted = 0

    def to_dict(self) -> dict:
        """Convert stats to dictionary."""
        return {
            "files_parsed": self.files_parsed,
            "files_skipped": self.files_skipped,
            "tests_extracted": self.tests_extracted,
        }

    def __str__(self) -> str:
        return (
            f"ExtractionStats(parsed={self.files_parsed}, "
            f"skipped={self.files_skipped}, tests={self.tests_extracted})"
        )


def discover_java_files(directory: str) -> List[str]:
    """Recursively discover all Java source files in a directory.

    Args:
        directory: Root directory to search.

    Returns:
        Sorted list of absolute paths to Java files.
    """
    java_files = []
    directory = os.path.abspath(directory)

    for root, dirs, files in os.walk(directory):
        # Hidden directories are never package segments
        dirs[:] = [d for d in dirs if not d.startswith(".")]

        for file in files:
            if os.path.splitext(file)[1] in JAVA_EXTENSIONS:
                java_files.append(os.path.join(root, file))

    logger.debug("Found %d Java files in %s", len(java_files), directory)
    return sorted(java_files)


def parse_compilation_unit(file_path: str) -> ParseResult:
    """Parse one file, reporting unreadable or syntactically broken files as failures."""
    try:
        tree, source_bytes = parse_file(file_path)
        source_bytes.decode("utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return ParseResult(path=file_path, diagnostic=f"cannot read file: {e}")

    if tree.root_node.has_error:
        return ParseResult(
            path=file_path,
            diagnostic=f"{count_error_nodes(tree)} syntax error node(s)",
        )
    return ParseResult(path=file_path, unit=build_compilation_unit(tree, source_bytes, file_path))


def iter_parse_results(directory: str) -> Iterator[ParseResult]:
    """Parse every Java file under ``directory``."""
    if not os.path.isdir(directory):
        raise FileNotFoundError(f"Directory not found: {directory}")
    for file_path in discover_java_files(directory):
        yield parse_compilation_unit(file_path)


def iter_compilation_units(
    results: Iterable[ParseResult],
    stats: Optional[ExtractionStats] = None,
) -> Iterator[CompilationUnit]:
    """Yield the units of successful results, skipping failures with a warning."""
    for result in results:
        if not result.is_successful:
            logger.warning("Skipping unparseable file %s: %s", result.path, result.diagnostic)
            if stats is not None:
                stats.files_skipped += 1
            continue
        if stats is not None:
            stats.files_parsed += 1
        yield result.unit


class TestExtractor:
    """Turns methods of compilation units into tests.

    Args:
        strategies: Predicate, name, line and attribute functions.
        test_id_annotation: Annotation holding the test identifier.
    """

    __test__ = False

    def __init__(
        self,
        strategies: Optional[ExtractionStrategies] = None,
        test_id_annotation: str = DEFAULT_TEST_ID_ANNOTATION,
    ):
        self.strategies = strategies or ExtractionStrategies()
        self.test_id_annotation = test_id_annotation

    def test_methods(self, unit: CompilationUnit) -> Iterator[Method]:
        for method in unit.methods:
            if self.strategies.is_test(method):
                yield method

    def read_identifier(self, method: Method) -> Optional[str]:
        annotation = method.find_annotation(self.test_id_annotation)
        if annotation is None:
            return None
        return annotation.string_value()

    def to_test_unit(self, method: Method) -> TestUnit:
        """Convert a test method into a ``TestUnit``.

        Raises:
            StructuralError: If the method has no body.
        """
        if method.body is None:
            raise StructuralError(f"Method {method.name} has no body")
        transform = self.strategies.line_transform
        return TestUnit(
            name=self.strategies.get_test_name(method),
            identifier=self.read_identifier(method),
            content="\n".join(transform(statement) for statement in method.body),
            attributes=self.strategies.get_attributes(method),
        )

    def iter_test_pairs(
        self, units: Iterable[CompilationUnit]
    ) -> Iterator[Tuple[Method, TestUnit]]:
        """Yield every test method with its converted unit."""
        for unit in units:
            for method in self.test_methods(unit):
                yield method, self.to_test_unit(method)

    def extract_all(self, units: Iterable[CompilationUnit]) -> List[TestUnit]:
        return [test for _, test in self.iter_test_pairs(units)]

    def extract_selected(self, units: Iterable[CompilationUnit], tests_filter) -> List[TestUnit]:
        """Extract the tests a ``TestsFilter`` selects.

        Package/class-only queries keep every test of an included class;
        method-only queries check methods of included classes; anything else
        checks every test method against all scopes.
        """
        result: List[TestUnit] = []
        if tests_filter.has_only_packages_and_classes():
            logger.debug("Selecting by package and class scopes")
            for unit in units:
                if tests_filter.class_included(unit):
                    result.extend(self.to_test_unit(m) for m in self.test_methods(unit))
        elif tests_filter.has_only_methods():
            logger.debug("Selecting by method scope within included classes")
            for unit in units:
                if tests_filter.class_included(unit):
                    result.extend(
                        self.to_test_unit(m)
                        for m in self.test_methods(unit)
                        if tests_filter.method_included(m)
                    )
        else:
            logger.debug("Selecting by all scopes")
            for unit in units:
                result.extend(
                    self.to_test_unit(m)
                    for m in self.test_methods(unit)
                    if tests_filter.method_included(m)
                )
        return result

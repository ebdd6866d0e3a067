"""
Tests source backed by a directory of Java test classes.

Every call re-scans and re-parses ``tests_dir``; nothing is cached between
calls.
"""

import logging
from typing import List, Optional, Sequence

from core.errors import ConfigurationError
from core.source_config import SourceConfig
from core.source_contract import TestsSource
from core.structured_logging import operation_scope
from extraction.config import DEFAULT_TEST_ID_ANNOTATION
from extraction.extractor import (
    ExtractionStats,
    TestExtractor,
    iter_compilation_units,
    iter_parse_results,
)
from extraction.models import TestUnit
from extraction.strategies import ExtractionStrategies, build_strategies
from filtering.tests_filter import TestsFilter
from reconcile.identifiers import FileWriter, reconcile_identifiers, write_source_file

logger = logging.getLogger(__name__)


class JavaCodeSource(TestsSource):
    """Reads tests from Java sources and writes identifiers back to them.

    Args:
        tests_dir: Root directory of the tests (mandatory before any call).
        strategies: Test predicate, name, line and attribute functions.
        test_id_annotation: Annotation holding the test identifier.
        writer: Function persisting rewritten files.
    """

    def __init__(
        self,
        tests_dir: Optional[str] = None,
        strategies: Optional[ExtractionStrategies] = None,
        test_id_annotation: str = DEFAULT_TEST_ID_ANNOTATION,
        writer: FileWriter = write_source_file,
    ):
        self.tests_dir = tests_dir
        self.strategies = strategies or ExtractionStrategies()
        self.test_id_annotation = test_id_annotation
        self.writer = writer

    @classmethod
    def from_config(cls, config: SourceConfig, **kwargs) -> "JavaCodeSource":
        return cls(
            tests_dir=config.tests_dir,
            strategies=build_strategies(config),
            test_id_annotation=config.test_id_annotation,
            **kwargs,
        )

    def _validate_mandatory_parameters(self) -> None:
        if not self.tests_dir:
            raise ConfigurationError("tests_dir property cannot be empty")

    def _extractor(self) -> TestExtractor:
        return TestExtractor(self.strategies, self.test_id_annotation)

    def get_all(self) -> List[TestUnit]:
        self._validate_mandatory_parameters()
        with operation_scope("get_all"):
            stats = ExtractionStats()
            units = iter_compilation_units(iter_parse_results(self.tests_dir), stats)
            tests = self._extractor().extract_all(units)
            stats.tests_extracted = len(tests)
            logger.info("Extracted all tests from %s: %s", self.tests_dir, stats)
            return tests

    def get_tests(self, query: str) -> List[TestUnit]:
        self._validate_mandatory_parameters()
        with operation_scope("get_tests"):
            tests_filter = TestsFilter(query)
            stats = ExtractionStats()
            units = iter_compilation_units(iter_parse_results(self.tests_dir), stats)
            tests = self._extractor().extract_selected(units, tests_filter)
            stats.tests_extracted = len(tests)
            logger.info("Selected tests for query '%s': %s", query, stats)
            return tests

    def update_identifiers(self, tests: Sequence[TestUnit]) -> List[str]:
        self._validate_mandatory_parameters()
        with operation_scope("update_identifiers"):
            stats = ExtractionStats()
            units = iter_compilation_units(iter_parse_results(self.tests_dir), stats)
            written = reconcile_identifiers(units, self._extractor(), list(tests), self.writer)
            logger.info(
                "Reconciled %d known test(s) against %s: %d file(s) rewritten, %s",
                len(tests),
                self.tests_dir,
                len(written),
                stats,
            )
            return written

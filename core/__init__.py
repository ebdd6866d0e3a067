"""Core shared contracts and utilities."""

from core.errors import (
    ConfigurationError,
    StructuralError,
    TestSourceError,
    ValidationError,
)
from core.source_contract import TestsSource, build_identity_key
from core.structured_logging import (
    configure_structured_logging,
    get_operation,
    get_run_id,
    operation_scope,
    set_run_id,
)
from core.source_config import SourceConfig, load_source_config, parse_source_config
from core.run_artifacts import read_known_tests, write_run_report

__all__ = [
    "ConfigurationError",
    "StructuralError",
    "TestSourceError",
    "ValidationError",
    "TestsSource",
    "build_identity_key",
    "configure_structured_logging",
    "get_operation",
    "get_run_id",
    "operation_scope",
    "set_run_id",
    "SourceConfig",
    "load_source_config",
    "parse_source_config",
    "read_known_tests",
    "write_run_report",
]

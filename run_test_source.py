#!/usr/bin/env python3
"""
Command-line entry point for Java test selection and identifier updates.

Usage:
    python run_test_source.py --tests-dir src/test/java list
    python run_test_source.py --config source.yml select "+package:org.example -class:DateTimeTest"
    python run_test_source.py --config source.yml update-ids known_tests.json
"""

import argparse
import dataclasses
import json
import logging
import os
import sys
from typing import Any, Dict, List, Optional

from core.errors import TestSourceError
from core.run_artifacts import read_known_tests, write_run_report
from core.source_config import SourceConfig, load_source_config
from core.structured_logging import configure_structured_logging, set_run_id
from extraction.models import TestUnit
from sources.java_code_source import JavaCodeSource

logger = logging.getLogger(__name__)


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Returns:
        Parsed argument namespace.
    """
    parser = argparse.ArgumentParser(
        description="Select Java tests by query and write test identifiers back",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python run_test_source.py --tests-dir src/test/java list\n"
            "  python run_test_source.py --tests-dir src/test/java select \"+class:LoginTest\"\n"
        ),
    )
    parser.add_argument("--config", help="Path to a YAML/JSON source config.")
    parser.add_argument("--tests-dir", help="Tests root directory (overrides the config).")
    parser.add_argument(
        "--report-dir",
        default="output/run_reports",
        help="Directory for JSON run reports. Default: output/run_reports",
    )
    parser.add_argument("--log-file", help="Also write logs to this file.")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging.")

    commands = parser.add_subparsers(dest="command", required=True)

    list_cmd = commands.add_parser("list", help="Extract every test.")
    list_cmd.add_argument("--output", help="Write the tests as JSON to this file.")

    select_cmd = commands.add_parser("select", help="Extract the tests matching a query.")
    select_cmd.add_argument("query", help="Query, e.g. '+package:org.example -class:Foo'.")
    select_cmd.add_argument("--output", help="Write the tests as JSON to this file.")

    update_cmd = commands.add_parser(
        "update-ids", help="Write identifiers of known tests into the sources."
    )
    update_cmd.add_argument("known_tests", help="JSON file with name/content/identifier entries.")

    return parser.parse_args(argv)


def build_source(args: argparse.Namespace) -> JavaCodeSource:
    config = load_source_config(args.config) if args.config else SourceConfig()
    if args.tests_dir:
        config = dataclasses.replace(config, tests_dir=args.tests_dir)
    return JavaCodeSource.from_config(config)


def _write_tests(tests: List[TestUnit], output: Optional[str]) -> None:
    if not output:
        return
    os.makedirs(os.path.dirname(os.path.abspath(output)), exist_ok=True)
    with open(output, "w", encoding="utf-8") as f:
        json.dump([t.to_dict() for t in tests], f, indent=2, ensure_ascii=False)
    logger.info("Wrote %d tests to %s", len(tests), output)


def execute(args: argparse.Namespace) -> Dict[str, Any]:
    """Run the selected command and return its report payload."""
    source = build_source(args)
    if args.command == "list":
        tests = source.get_all()
        _write_tests(tests, args.output)
        return {"tests": [t.to_dict() for t in tests], "test_count": len(tests)}
    if args.command == "select":
        tests = source.get_tests(args.query)
        _write_tests(tests, args.output)
        return {
            "query": args.query,
            "tests": [t.to_dict() for t in tests],
            "test_count": len(tests),
        }
    known = [TestUnit.from_dict(entry) for entry in read_known_tests(args.known_tests)]
    written = source.update_identifiers(known)
    return {"known_test_count": len(known), "written_files": written}


def main(argv: Optional[List[str]] = None) -> int:
    args = parse_args(argv)
    configure_structured_logging(
        level=logging.DEBUG if args.verbose else logging.INFO,
        log_file=args.log_file,
    )
    run_id = set_run_id()

    run_report: Dict[str, Any] = {
        "run_id": run_id,
        "command": args.command,
        "status": "failed",
    }
    exit_code = 0
    try:
        run_report.update(execute(args))
        run_report["status"] = "succeeded"
    except (TestSourceError, FileNotFoundError, ValueError) as exc:
        run_report["error"] = str(exc)
        logger.error("%s failed: %s", args.command, exc)
        exit_code = 1

    report_path = write_run_report(run_report, run_id, args.report_dir)
    logger.info("Run report written: %s", report_path)
    return exit_code


if __name__ == "__main__":
    sys.exit(main())

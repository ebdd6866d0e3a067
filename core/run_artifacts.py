"""Run artifact helpers: known-test input files and JSON run reports."""

from __future__ import annotations

import json
import os
from datetime import datetime, timezone
from pathlib import Path
from typing import Any


def write_run_report(
    report: dict[str, Any],
    run_id: str,
    output_dir: str = "output/run_reports",
) -> str:
    """Write a JSON run report and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    payload = dict(report)
    payload.setdefault("run_id", run_id)
    payload.setdefault("timestamp_utc", datetime.now(timezone.utc).isoformat())
    path = os.path.join(output_dir, f"{run_id}.json")
    with open(path, "w", encoding="utf-8") as f:
        json.dump(payload, f, indent=2, sort_keys=True, ensure_ascii=False)
    return path


def read_known_tests(path: str) -> list[dict[str, Any]]:
    """Read the list of already-registered tests from a JSON file.

    The file holds either a list of test objects or an object with a
    ``tests`` list; every entry must be an object.
    """
    tests_path = Path(path)
    if not tests_path.is_file():
        raise FileNotFoundError(f"Known tests file not found: {tests_path}")

    payload = json.loads(tests_path.read_text(encoding="utf-8"))
    if isinstance(payload, dict):
        payload = payload.get("tests")
    if not isinstance(payload, list):
        raise ValueError("known tests must be a list")
    for entry in payload:
        if not isinstance(entry, dict):
            raise ValueError("known tests entries must be objects")
    return payload

"""Configuration contract for a Java tests source."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

LINE_STYLES = ("raw", "steps")


@dataclass(frozen=True)
class SourceConfig:
    """Settings a ``JavaCodeSource`` is built from."""

    tests_dir: str | None = None
    test_annotation: str = "Test"
    test_id_annotation: str = "TestCase"
    test_name_prefix: str = ""
    humanize_names: bool = False
    line_style: str = "raw"
    attributes: dict[str, str] = field(default_factory=dict)


def _expect_dict(payload: Any, ctx: str) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ValueError(f"{ctx} must be an object")
    return payload


def _load_config_payload(path: str) -> dict[str, Any]:
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(f"Source config file not found: {config_path}")

    text = config_path.read_text(encoding="utf-8")
    if config_path.suffix.lower() == ".json":
        payload = json.loads(text)
    else:
        payload = yaml.safe_load(text)
    if payload is None:
        return {}
    return _expect_dict(payload, "source config")


def _required_name(payload: dict[str, Any], key: str, default: str) -> str:
    value = str(payload.get(key, default)).strip()
    if not value:
        raise ValueError(f"{key} cannot be blank")
    return value


def parse_source_config(payload: dict[str, Any]) -> SourceConfig:
    """Validate a raw mapping and turn it into a ``SourceConfig``."""
    payload = _expect_dict(payload, "source config")

    tests_dir_raw = payload.get("tests_dir")
    tests_dir = str(tests_dir_raw).strip() if tests_dir_raw is not None else None

    line_style = str(payload.get("line_style", "raw")).strip().lower()
    if line_style not in LINE_STYLES:
        raise ValueError(
            f"line_style must be one of {', '.join(LINE_STYLES)}, got '{line_style}'"
        )

    attributes_raw = _expect_dict(payload.get("attributes") or {}, "attributes")
    attributes: dict[str, str] = {}
    for attr_name, annotation_name in attributes_raw.items():
        annotation = str(annotation_name).strip()
        if not annotation:
            raise ValueError(f"attribute '{attr_name}': annotation name is required")
        attributes[str(attr_name)] = annotation

    return SourceConfig(
        tests_dir=tests_dir or None,
        test_annotation=_required_name(payload, "test_annotation", "Test"),
        test_id_annotation=_required_name(payload, "test_id_annotation", "TestCase"),
        test_name_prefix=str(payload.get("test_name_prefix", "")),
        humanize_names=bool(payload.get("humanize_names", False)),
        line_style=line_style,
        attributes=attributes,
    )


def load_source_config(path: str) -> SourceConfig:
    """Load and validate a source config from a YAML/JSON file."""
    return parse_source_config(_load_config_payload(path))

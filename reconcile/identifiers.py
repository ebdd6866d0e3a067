"""
Identifier reconciliation.

Tests are re-extracted from the source and matched against already
registered tests by ``(name, content)``. Each match yields a marker edit on
its method: the identifier annotation is replaced, or added after the
method's last annotation. Edits are spliced into the original bytes, so only
files with at least one edit are rewritten and everything outside the edited
annotations stays byte-identical.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, List, Optional, Sequence, Tuple

from extraction.extractor import TestExtractor
from extraction.models import TestUnit
from extraction.source_tree import CompilationUnit, Method, quote_literal

logger = logging.getLogger(__name__)

FileWriter = Callable[[str, bytes], None]


@dataclass(frozen=True)
class MarkerEdit:
    """Replace ``source[start:end]`` of a unit with ``text``."""

    method_name: str
    start: int
    end: int
    text: str


def write_source_file(path: str, data: bytes) -> None:
    """Overwrite ``path`` with ``data``."""
    with open(path, "wb") as f:
        f.write(data)


def find_known_test(test: TestUnit, known_tests: Sequence[TestUnit]) -> Optional[TestUnit]:
    """Return the first known test sharing ``test``'s identity key."""
    key = test.identity_key
    for known in known_tests:
        if known.identity_key == key:
            return known
    return None


def marker_text(annotation_name: str, identifier: str) -> str:
    return f"@{annotation_name}({quote_literal(identifier)})"


def plan_marker_edit(
    method: Method,
    annotation_name: str,
    identifier: str,
    newline: str = "\n",
) -> Optional[MarkerEdit]:
    """Plan the edit giving ``method`` the identifier marker.

    Returns None when the method already carries exactly this identifier.
    """
    existing = method.find_annotation(annotation_name)
    if existing is not None and existing.is_single_value and existing.string_value() == identifier:
        return None

    text = marker_text(annotation_name, identifier)
    if existing is not None:
        return MarkerEdit(method.name, existing.start_byte, existing.end_byte, text)
    if method.annotations:
        anchor = method.annotations[-1].end_byte
        return MarkerEdit(method.name, anchor, anchor, newline + method.indent + text)
    return MarkerEdit(
        method.name, method.start_byte, method.start_byte, text + newline + method.indent
    )


def apply_edits(source: bytes, edits: Iterable[MarkerEdit]) -> bytes:
    """Splice edits into ``source``, last offset first.

    Raises:
        ValueError: If two edits overlap.
    """
    ordered = sorted(edits, key=lambda e: (e.start, e.end), reverse=True)
    result = source
    previous_start = len(source) + 1
    for edit in ordered:
        if edit.end > previous_start:
            raise ValueError(f"Overlapping edit for method {edit.method_name}")
        result = result[: edit.start] + edit.text.encode("utf-8") + result[edit.end :]
        previous_start = edit.start
    return result


def _newline_of(unit: CompilationUnit) -> str:
    return "\r\n" if b"\r\n" in unit.source else "\n"


def plan_unit_edits(
    unit: CompilationUnit,
    extractor: TestExtractor,
    known_tests: Sequence[TestUnit],
) -> List[MarkerEdit]:
    """Plan marker edits for every test of ``unit`` matching a known test."""
    edits: List[MarkerEdit] = []
    newline = _newline_of(unit)
    for method in extractor.test_methods(unit):
        current = extractor.to_test_unit(method)
        known = find_known_test(current, known_tests)
        if known is None:
            continue
        if known.identifier is None:
            logger.warning(
                "Known test '%s' matching %s.%s has no identifier; leaving it unmarked",
                known.name,
                unit.type_name,
                method.name,
            )
            continue
        edit = plan_marker_edit(method, extractor.test_id_annotation, known.identifier, newline)
        if edit is None:
            logger.debug("%s.%s already marked %s", unit.type_name, method.name, known.identifier)
            continue
        logger.debug("Marking %s.%s with %s", unit.type_name, method.name, known.identifier)
        edits.append(edit)
    return edits


def reconcile_identifiers(
    units: Iterable[CompilationUnit],
    extractor: TestExtractor,
    known_tests: Sequence[TestUnit],
    writer: FileWriter = write_source_file,
) -> List[str]:
    """Write identifiers of ``known_tests`` onto matching test methods.

    All units are planned before anything is written, so a structural error
    leaves every file untouched.

    Returns:
        Paths of the rewritten files, in traversal order.
    """
    planned: List[Tuple[CompilationUnit, List[MarkerEdit]]] = []
    for unit in units:
        edits = plan_unit_edits(unit, extractor, known_tests)
        if edits:
            planned.append((unit, edits))

    written: List[str] = []
    for unit, edits in planned:
        if unit.path is None:
            raise ValueError(f"Unit {unit.type_name} has no path to write to")
        writer(unit.path, apply_edits(unit.source, edits))
        logger.info("Updated %d identifier(s) in %s", len(edits), unit.path)
        written.append(unit.path)
    return written


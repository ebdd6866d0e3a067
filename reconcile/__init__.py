"""
Identifier reconciliation: writes externally assigned test identifiers back
into Java sources.
"""

from reconcile.identifiers import (
    MarkerEdit,
    apply_edits,
    find_known_test,
    marker_text,
    plan_marker_edit,
    plan_unit_edits,
    reconcile_identifiers,
    write_source_file,
)

__all__ = [
    "MarkerEdit",
    "apply_edits",
    "find_known_test",
    "marker_text",
    "plan_marker_edit",
    "plan_unit_edits",
    "reconcile_identifiers",
    "write_source_file",
]

"""
AST traversal building the source-tree model.

This module walks a tree-sitter Java tree and produces a ``CompilationUnit``
holding every method declaration with its annotations and rendered body
statements.
"""

import logging
import re
from pathlib import Path
from typing import Iterator, List, Optional

from tree_sitter import Node, Tree

from extraction.config import (
    ANNOTATION_NODE,
    COMMENT_NODES,
    ELEMENT_VALUE_PAIR_NODE,
    MARKER_ANNOTATION_NODE,
    METHOD_NODE,
    MODIFIERS_NODE,
    NAME_NODES,
    PACKAGE_NODE,
    TYPE_DECLARATIONS,
)
from extraction.source_tree import (
    Annotation,
    AnnotationKind,
    CompilationUnit,
    Method,
)

logger = logging.getLogger(__name__)

# Line breaks plus the indentation around them
_LINE_BREAK_RE = re.compile(r"[ \t]*\r?\n\s*")


def node_text(node: Node) -> str:
    """Decode the source text covered by ``node``."""
    return node.text.decode("utf-8") if node.text else ""


def render_source_text(text: str) -> str:
    """Render a possibly multi-line fragment as a single line.

    Line breaks collapse to one space, or to nothing right after ``(`` and
    right before ``)`` or ``.``, so wrapped calls render like unwrapped ones.
    """
    text = text.strip()

    def _join(match: re.Match) -> str:
        before = text[match.start() - 1] if match.start() > 0 else ""
        after = text[match.end()] if match.end() < len(text) else ""
        if before == "(" or after in (")", "."):
            return ""
        return " "

    return _LINE_BREAK_RE.sub(_join, text)


def _named_children(node: Node) -> List[Node]:
    return [child for child in node.named_children if child.type not in COMMENT_NODES]


def extract_package_name(root: Node) -> Optional[str]:
    """Return the declared package, or None for the unnamed package."""
    for child in root.named_children:
        if child.type != PACKAGE_NODE:
            continue
        for name_node in child.named_children:
            if name_node.type in NAME_NODES:
                return node_text(name_node)
    return None


def extract_primary_type_name(root: Node, file_path: Optional[str]) -> Optional[str]:
    """Return the primary type name of a file.

    Java ties the public type to the file name, so the file stem wins;
    in-memory sources fall back to the first top-level type declaration.
    """
    if file_path:
        return Path(file_path).stem
    for child in root.named_children:
        if child.type in TYPE_DECLARATIONS:
            name_node = child.child_by_field_name("name")
            if name_node is not None:
                return node_text(name_node)
    return None


def extract_annotation(node: Node) -> Optional[Annotation]:
    """Build an ``Annotation`` from a marker_annotation/annotation node."""
    name_node = node.child_by_field_name("name")
    if name_node is None:
        logger.debug("Annotation at line %d has no name", node.start_point.row + 1)
        return None
    name = node_text(name_node)

    if node.type == MARKER_ANNOTATION_NODE:
        return Annotation(
            name=name,
            kind=AnnotationKind.MARKER,
            start_byte=node.start_byte,
            end_byte=node.end_byte,
        )

    arguments = node.child_by_field_name("arguments")
    elements = _named_children(arguments) if arguments is not None else []
    pair_nodes = [e for e in elements if e.type == ELEMENT_VALUE_PAIR_NODE]

    # `@A()` and `@A(k = v, ...)` are both key-value forms
    if pair_nodes or not elements:
        pairs = []
        for pair in pair_nodes:
            key_node = pair.child_by_field_name("key")
            value_node = pair.child_by_field_name("value")
            if key_node is None or value_node is None:
                continue
            pairs.append((node_text(key_node), render_source_text(node_text(value_node))))
        return Annotation(
            name=name,
            kind=AnnotationKind.KEY_VALUE,
            pairs=tuple(pairs),
            start_byte=node.start_byte,
            end_byte=node.end_byte,
        )

    return Annotation(
        name=name,
        kind=AnnotationKind.SINGLE_VALUE,
        value=render_source_text(node_text(elements[0])),
        start_byte=node.start_byte,
        end_byte=node.end_byte,
    )


def _line_indent(source_bytes: bytes, offset: int) -> str:
    line_start = source_bytes.rfind(b"\n", 0, offset) + 1
    prefix = source_bytes[line_start:offset].decode("utf-8", errors="ignore")
    return prefix if not prefix.strip() else ""


def extract_method(node: Node, unit: CompilationUnit) -> Optional[Method]:
    """Add the method declared by ``node`` to ``unit`` and return it."""
    name_node = node.child_by_field_name("name")
    if name_node is None:
        logger.debug("Method at line %d has no name", node.start_point.row + 1)
        return None

    annotations = []
    for child in node.children:
        if child.type != MODIFIERS_NODE:
            continue
        for modifier in child.named_children:
            if modifier.type in (MARKER_ANNOTATION_NODE, ANNOTATION_NODE):
                annotation = extract_annotation(modifier)
                if annotation is not None:
                    annotations.append(annotation)

    body_node = node.child_by_field_name("body")
    body = None
    if body_node is not None:
        body = tuple(render_source_text(node_text(s)) for s in _named_children(body_node))

    return unit.add_method(
        node_text(name_node),
        annotations=tuple(annotations),
        body=body,
        start_byte=node.start_byte,
        indent=_line_indent(unit.source, node.start_byte),
    )


def iter_method_nodes(root: Node) -> Iterator[Node]:
    """Yield every method declaration in document order, nested ones included."""
    stack = [root]
    while stack:
        node = stack.pop()
        if node.type == METHOD_NODE:
            yield node
        stack.extend(reversed(node.children))


def build_compilation_unit(
    tree: Tree,
    source_bytes: bytes,
    file_path: Optional[str] = None,
) -> CompilationUnit:
    """Build the source-tree model of one parsed file.

    Args:
        tree: The parsed AST tree.
        source_bytes: The raw source file bytes.
        file_path: Path the source was read from, if any.

    Returns:
        A compilation unit owning all of the file's methods.
    """
    root = tree.root_node
    unit = CompilationUnit(
        package_name=extract_package_name(root),
        primary_type_name=extract_primary_type_name(root, file_path),
        path=file_path,
        source=source_bytes,
    )
    for method_node in iter_method_nodes(root):
        extract_method(method_node, unit)

    logger.debug(
        "Built unit %s.%s with %d methods",
        unit.package,
        unit.type_name,
        len(unit.methods),
    )
    return unit

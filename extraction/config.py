"""
Configuration constants for Java test extraction.

Defines the tree-sitter node type strings the traversal relies on.
"""

from typing import Set

PACKAGE_NODE: str = "package_declaration"

# Names as they appear after `package` or `@`
NAME_NODES: Set[str] = {
    "identifier",
    "scoped_identifier",
}

# Top-level declarations that can be the primary type of a file
TYPE_DECLARATIONS: Set[str] = {
    "class_declaration",
    "interface_declaration",
    "enum_declaration",
    "record_declaration",
    "annotation_type_declaration",
}

METHOD_NODE: str = "method_declaration"

MODIFIERS_NODE: str = "modifiers"

# Annotation forms
MARKER_ANNOTATION_NODE: str = "marker_annotation"
ANNOTATION_NODE: str = "annotation"
ELEMENT_VALUE_PAIR_NODE: str = "element_value_pair"

# Comments are extras and may show up among statements and arguments
COMMENT_NODES: Set[str] = {
    "line_comment",
    "block_comment",
    "comment",
}

JAVA_EXTENSIONS: Set[str] = {
    ".java",
}

DEFAULT_TEST_ANNOTATION: str = "Test"
DEFAULT_TEST_ID_ANNOTATION: str = "TestCase"

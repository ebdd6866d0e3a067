"""Tests sources exposing get_all / get_tests / update_identifiers."""

from sources.java_code_source import JavaCodeSource

__all__ = ["JavaCodeSource"]

"""
Pluggable per-method functions used while turning methods into tests.

Each slot of ``ExtractionStrategies`` can be replaced on its own; the
defaults reproduce the plain behaviour (``@Test`` methods, raw names and
lines, no attributes).
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Mapping

from core.source_config import SourceConfig
from extraction.config import DEFAULT_TEST_ANNOTATION
from extraction.source_tree import Method
from extraction.text import separate_by_upper_case_letters, steps_line

TestPredicate = Callable[[Method], bool]
NameMapper = Callable[[Method], str]
LineTransform = Callable[[str], str]
AttributeExtractor = Callable[[Method], Dict[str, Any]]


def annotated_with(annotation_name: str) -> TestPredicate:
    """Predicate accepting methods that carry ``annotation_name``."""

    def _is_test(method: Method) -> bool:
        return method.has_annotation(annotation_name)

    return _is_test


def method_name(method: Method) -> str:
    return method.name


def humanized_name(prefix: str = "") -> NameMapper:
    """Name mapper turning ``createReminder`` into ``<prefix>Create Reminder``."""

    def _name(method: Method) -> str:
        return prefix + separate_by_upper_case_letters(method.name)

    return _name


def prefixed_name(prefix: str) -> NameMapper:
    def _name(method: Method) -> str:
        return prefix + method.name

    return _name


def keep_line(line: str) -> str:
    return line


def no_attributes(method: Method) -> Dict[str, Any]:
    return {}


def annotation_attributes(mapping: Mapping[str, str]) -> AttributeExtractor:
    """Attribute extractor reading values from annotations.

    ``mapping`` maps attribute names to annotation names. Single-value
    annotations contribute their unquoted literal, key-value annotations a
    dict of their pairs and marker annotations ``True``. Absent annotations
    contribute nothing.
    """

    def _attributes(method: Method) -> Dict[str, Any]:
        attributes: Dict[str, Any] = {}
        for attr_name, annotation_name in mapping.items():
            annotation = method.find_annotation(annotation_name)
            if annotation is None:
                continue
            if annotation.is_single_value:
                attributes[attr_name] = annotation.string_value()
            elif annotation.is_key_value:
                attributes[attr_name] = dict(annotation.pairs)
            else:
                attributes[attr_name] = True
        return attributes

    return _attributes


@dataclass
class ExtractionStrategies:
    """Named strategy slots consulted for every method."""

    is_test: TestPredicate = field(
        default_factory=lambda: annotated_with(DEFAULT_TEST_ANNOTATION)
    )
    get_test_name: NameMapper = method_name
    line_transform: LineTransform = keep_line
    get_attributes: AttributeExtractor = no_attributes


def build_strategies(config: SourceConfig) -> ExtractionStrategies:
    """Translate declarative source settings into strategy functions."""
    if config.humanize_names:
        get_test_name = humanized_name(config.test_name_prefix)
    elif config.test_name_prefix:
        get_test_name = prefixed_name(config.test_name_prefix)
    else:
        get_test_name = method_name

    return ExtractionStrategies(
        is_test=annotated_with(config.test_annotation),
        get_test_name=get_test_name,
        line_transform=steps_line if config.line_style == "steps" else keep_line,
        get_attributes=(
            annotation_attributes(config.attributes) if config.attributes else no_attributes
        ),
    )

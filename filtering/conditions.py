"""
Annotation comparators.

Every ``annotation*`` query kind maps to a condition ``(method, value) ->
bool``. Values are ``Name``, ``Name,Literal`` or ``Name,Attr,Literal``
depending on the kind.
"""

from typing import Callable, Dict, List

from core.errors import ValidationError
from extraction.source_tree import Method
from extraction.text import substring_after, substring_before

Condition = Callable[[Method, str], bool]


def _annotation_name(method: Method, value: str) -> bool:
    return any(a.name == value for a in method.annotations)


def _annotation_value(method: Method, value: str) -> bool:
    name = substring_before(value, ",")
    literal = substring_after(value, ",")
    return any(
        a.is_single_value and a.name == name and a.value == literal
        for a in method.annotations
    )


def _annotation_value_contains(method: Method, value: str) -> bool:
    name = substring_before(value, ",")
    fragment = substring_after(value, ",")
    return any(
        a.is_single_value and a.name == name and fragment in (a.value or "")
        for a in method.annotations
    )


def _split_attribute_condition(value: str) -> List[str]:
    parts = value.split(",")
    if len(parts) != 3:
        raise ValidationError("Condition value should contain 3 values separated by comma")
    return parts


def _annotation_attribute_value(method: Method, value: str) -> bool:
    name, attr, literal = _split_attribute_condition(value)
    return any(
        a.is_key_value and a.name == name and (attr, literal) in a.pairs
        for a in method.annotations
    )


def _annotation_attribute_value_contains(method: Method, value: str) -> bool:
    name, attr, fragment = _split_attribute_condition(value)
    return any(
        a.is_key_value
        and a.name == name
        and any(key == attr and fragment in text for key, text in a.pairs)
        for a in method.annotations
    )


CONDITIONS: Dict[str, Condition] = {
    "annotationName": _annotation_name,
    "annotationValue": _annotation_value,
    "annotationValueContains": _annotation_value_contains,
    "annotationAttributeValue": _annotation_attribute_value,
    "annotationAttributeValueContains": _annotation_attribute_value_contains,
}


def get_condition(kind: str) -> Condition:
    """Look up the comparator for an annotation query kind.

    Raises:
        ValidationError: If ``kind`` is not an annotation comparator.
    """
    try:
        return CONDITIONS[kind]
    except KeyError:
        raise ValidationError("Annotation condition not recognized") from None


def method_corresponds(method: Method, kind: str, value: str) -> bool:
    return get_condition(kind)(method, value)

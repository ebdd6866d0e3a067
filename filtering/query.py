"""
Query parsing.

A query is a space separated list of entries ``<sign><kind>:<value>``, for
example ``+package:org.example -method:RemindersTest.deleteReminder``.
Only blank queries are rejected here; unknown kinds and malformed values
surface when the entry is evaluated.
"""

from dataclasses import dataclass
from typing import List

from core.errors import ValidationError
from extraction.text import substring_after, substring_before

INCLUDE_SIGN = "+"
EXCLUDE_SIGN = "-"

PACKAGE = "package"
CLASS = "class"
METHOD = "method"
ANNOTATION_PREFIX = "annotation"


@dataclass(frozen=True)
class FilterEntry:
    """One query token.

    Attributes:
        included: True for ``+`` entries, False for ``-`` entries
        kind: Scope tag between the sign and the first ``:``
        value: Text after the first ``:``
    """

    included: bool
    kind: str
    value: str

    @property
    def is_annotation(self) -> bool:
        return self.kind.startswith(ANNOTATION_PREFIX)


def parse_entry(token: str) -> FilterEntry:
    body = token[1:]
    return FilterEntry(
        included=token[0] == INCLUDE_SIGN,
        kind=substring_before(body, ":"),
        value=substring_after(token, ":"),
    )


def parse_query(query: str) -> List[FilterEntry]:
    """Parse a query string into filter entries.

    Raises:
        ValidationError: If the query is empty or whitespace only.
    """
    if not query or not query.strip():
        raise ValidationError("Search criteria cannot be empty")
    return [parse_entry(token) for token in query.strip().split(" ") if token]

"""
Parser-independent model of a Java source tree.

Compilation units own their methods, methods own their annotations and keep a
back-reference to the unit they were declared in. Byte offsets point into the
unit's original source so edits can be spliced without reprinting the file.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

_LITERAL_ESCAPES = {
    "\\": "\\\\",
    "\"": "\\\"",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\b": "\\b",
    "\f": "\\f",
}
_LITERAL_UNESCAPES = {escape[1]: char for char, escape in _LITERAL_ESCAPES.items()}
_LITERAL_UNESCAPES.update({"'": "'", "s": " "})

# Named escapes, then octal escapes up to \377
_ESCAPE_RE = re.compile(r"\\([btnfrs\"'\\]|[0-3][0-7]{2}|[0-7]{1,2})")


class AnnotationKind(str, Enum):
    """Shape of an annotation's argument list."""

    MARKER = "marker"
    SINGLE_VALUE = "single_value"
    KEY_VALUE = "key_value"


@dataclass(frozen=True)
class Annotation:
    """A single annotation attached to a method.

    Attributes:
        name: Annotation name as written (``Test``, ``org.junit.Test``)
        kind: Marker, single-value or key-value pairs
        value: Literal text of the value for single-value annotations
        pairs: ``(key, literal text)`` tuples for key-value annotations
        start_byte: Offset of ``@`` in the unit source
        end_byte: Offset just past the annotation in the unit source
    """

    name: str
    kind: AnnotationKind = AnnotationKind.MARKER
    value: Optional[str] = None
    pairs: Tuple[Tuple[str, str], ...] = ()
    start_byte: int = 0
    end_byte: int = 0

    @property
    def is_single_value(self) -> bool:
        return self.kind is AnnotationKind.SINGLE_VALUE

    @property
    def is_key_value(self) -> bool:
        return self.kind is AnnotationKind.KEY_VALUE

    def string_value(self) -> Optional[str]:
        """Literal value with surrounding string quotes removed."""
        if self.value is None:
            return None
        return unquote_literal(self.value)


@dataclass(frozen=True)
class Method:
    """A method declaration and the pieces of it the extraction needs."""

    name: str
    annotations: Tuple[Annotation, ...] = ()
    # Rendered statements; None when the declaration has no body
    body: Optional[Tuple[str, ...]] = ()
    unit: Optional["CompilationUnit"] = field(default=None, compare=False, repr=False)
    start_byte: int = 0
    indent: str = ""

    def find_annotation(self, name: str) -> Optional[Annotation]:
        for annotation in self.annotations:
            if annotation.name == name:
                return annotation
        return None

    def has_annotation(self, name: str) -> bool:
        return self.find_annotation(name) is not None

    @property
    def class_name(self) -> str:
        return self.unit.type_name if self.unit is not None else ""

    @property
    def package_name(self) -> str:
        return self.unit.package if self.unit is not None else ""


@dataclass(eq=False)
class CompilationUnit:
    """One parsed source file.

    ``package_name`` and ``primary_type_name`` are None when the file does
    not declare them; ``package`` and ``type_name`` resolve those to the
    unnamed package / empty name.
    """

    package_name: Optional[str] = None
    primary_type_name: Optional[str] = None
    path: Optional[str] = None
    source: bytes = field(default=b"", repr=False)
    methods: List[Method] = field(default_factory=list, repr=False)

    @property
    def package(self) -> str:
        return self.package_name or ""

    @property
    def type_name(self) -> str:
        return self.primary_type_name or ""

    def add_method(self, name: str, **kwargs) -> Method:
        """Create a method owned by this unit and append it."""
        method = Method(name=name, unit=self, **kwargs)
        self.methods.append(method)
        return method


@dataclass(frozen=True)
class ParseResult:
    """Outcome of parsing one file: a unit on success, a diagnostic otherwise."""

    path: str
    unit: Optional[CompilationUnit] = None
    diagnostic: Optional[str] = None

    @property
    def is_successful(self) -> bool:
        return self.unit is not None


def _unescape(match: re.Match) -> str:
    code = match.group(1)
    if code in _LITERAL_UNESCAPES:
        return _LITERAL_UNESCAPES[code]
    return chr(int(code, 8))


def unquote_literal(text: str) -> str:
    """Strip the quotes of a Java string literal, leave anything else as is."""
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        return _ESCAPE_RE.sub(_unescape, text[1:-1])
    return text


def quote_literal(value: str) -> str:
    """Render ``value`` as a Java string literal that stays on one line."""
    parts = []
    for char in value:
        if char in _LITERAL_ESCAPES:
            parts.append(_LITERAL_ESCAPES[char])
        elif ord(char) < 0x20 or char == "\x7f":
            parts.append("\\%03o" % ord(char))
        else:
            parts.append(char)
    return '"' + "".join(parts) + '"'

"""
Data model for extracted tests.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from core.source_contract import build_identity_key


@dataclass(frozen=True)
class TestUnit:
    """A single test as seen by the outside world.

    Attributes:
        name: Test name produced by the configured name mapping
        content: Transformed body statements joined by newlines
        identifier: Externally assigned identifier, or None
        attributes: Extra attributes produced by the attribute strategy
    """

    __test__ = False

    name: str
    content: str
    identifier: Optional[str] = None
    attributes: Dict[str, Any] = field(default_factory=dict, hash=False)

    @property
    def identity_key(self) -> Tuple[str, str]:
        """Key used to recognise the test regardless of its identifier."""
        return build_identity_key(self.name, self.content)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the test to a dictionary suitable for JSON serialization."""
        return asdict(self)

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "TestUnit":
        """Build a test from a mapping with ``name``, ``content`` and ``identifier``.

        ``id`` is accepted as an alias of ``identifier``.
        """
        if "name" not in payload or "content" not in payload:
            raise ValueError("test entry requires 'name' and 'content'")
        identifier = payload.get("identifier", payload.get("id"))
        return cls(
            name=str(payload["name"]),
            content=str(payload["content"]),
            identifier=str(identifier) if identifier is not None else None,
            attributes=dict(payload.get("attributes") or {}),
        )

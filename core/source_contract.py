"""Contract shared by every tests source and by identifier reconciliation."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from extraction.models import TestUnit


def build_identity_key(name: str, content: str) -> tuple[str, str]:
    """Build the key used to recognise a test between two extractions.

    The identifier is deliberately not part of the key, so a test keeps the
    same key before and after its identifier has been written back.
    """
    return name, content


class TestsSource(ABC):
    """A place tests are read from and identifiers are written back to."""

    __test__ = False

    @abstractmethod
    def get_all(self) -> list[TestUnit]:
        """Return every test found in the source."""

    @abstractmethod
    def get_tests(self, query: str) -> list[TestUnit]:
        """Return the tests selected by ``query``."""

    @abstractmethod
    def update_identifiers(self, tests: Sequence[TestUnit]) -> list[str]:
        """Write identifiers of ``tests`` back into the source.

        Returns:
            Paths of the files that were rewritten.
        """

"""
Scope resolution for parsed queries.

Each scope (package, class, method, annotation) is checked on its own:

* allowed: no ``+`` entry targets the scope, or one of them matches;
* not excluded: no ``-`` entry targeting the scope matches.

An entity is included when every relevant scope allows it and, only then,
none excludes it. A ``+method:Cls.name`` entry also allows class ``Cls``.
"""

import logging
from typing import List

from extraction.source_tree import CompilationUnit, Method
from filtering.conditions import method_corresponds
from filtering.query import CLASS, METHOD, PACKAGE, FilterEntry, parse_query

logger = logging.getLogger(__name__)


def in_package(parent_package: str, current_package: str) -> bool:
    """True if ``current_package`` is ``parent_package`` or lies below it."""
    return (
        parent_package == current_package
        or current_package.startswith(parent_package + ".")
    )


class TestsFilter:
    """Decides which classes and methods a query selects."""

    __test__ = False

    def __init__(self, query: str):
        self.entries: List[FilterEntry] = parse_query(query)
        logger.debug("Parsed query into %d entries: %s", len(self.entries), self.entries)

    def _included(self, kind: str) -> List[FilterEntry]:
        return [e for e in self.entries if e.included and e.kind == kind]

    def _excluded(self, kind: str) -> List[FilterEntry]:
        return [e for e in self.entries if not e.included and e.kind == kind]

    def has_only_packages_and_classes(self) -> bool:
        return all(e.kind in (PACKAGE, CLASS) for e in self.entries)

    def has_only_methods(self) -> bool:
        return all(e.kind == METHOD for e in self.entries)

    # package scope

    def package_allowed(self, package: str) -> bool:
        included = self._included(PACKAGE)
        return not included or any(in_package(e.value, package) for e in included)

    def package_not_excluded(self, package: str) -> bool:
        return not any(in_package(e.value, package) for e in self._excluded(PACKAGE))

    # class scope

    def class_allowed(self, class_name: str) -> bool:
        included = [e for e in self.entries if e.included and e.kind in (CLASS, METHOD)]
        if not included:
            return True
        return any(
            (e.kind == CLASS and e.value == class_name)
            or (e.kind == METHOD and e.value.startswith(class_name + "."))
            for e in included
        )

    def class_not_excluded(self, class_name: str) -> bool:
        return not any(e.value == class_name for e in self._excluded(CLASS))

    # method scope

    def method_allowed(self, class_name: str, method_name: str) -> bool:
        own_class = [
            e for e in self._included(METHOD) if e.value.startswith(class_name + ".")
        ]
        qualified = f"{class_name}.{method_name}"
        return not own_class or any(e.value == qualified for e in own_class)

    def method_not_excluded(self, class_name: str, method_name: str) -> bool:
        qualified = f"{class_name}.{method_name}"
        return not any(e.value == qualified for e in self._excluded(METHOD))

    # annotation scope

    def annotations_allowed(self, method: Method) -> bool:
        included = [e for e in self.entries if e.included and e.is_annotation]
        return not included or any(
            method_corresponds(method, e.kind, e.value) for e in included
        )

    def annotations_not_excluded(self, method: Method) -> bool:
        return not any(
            method_corresponds(method, e.kind, e.value)
            for e in self.entries
            if not e.included and e.is_annotation
        )

    # entities

    def class_included(self, unit: CompilationUnit) -> bool:
        """Check the package and class scopes of a compilation unit."""
        package = unit.package
        class_name = unit.type_name
        if self.package_allowed(package) and self.class_allowed(class_name):
            return self.package_not_excluded(package) and self.class_not_excluded(class_name)
        return False

    def method_included(self, method: Method) -> bool:
        """Check all four scopes for a method, deriving its class and package."""
        package = method.package_name
        class_name = method.class_name
        if (
            self.package_allowed(package)
            and self.class_allowed(class_name)
            and self.method_allowed(class_name, method.name)
            and self.annotations_allowed(method)
        ):
            return (
                self.package_not_excluded(package)
                and self.class_not_excluded(class_name)
                and self.method_not_excluded(class_name, method.name)
                and self.annotations_not_excluded(method)
            )
        return False

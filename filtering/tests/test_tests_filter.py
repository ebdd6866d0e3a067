"""Tests for scope resolution against an in-memory source tree."""

import unittest

from core.errors import ValidationError
from extraction.source_tree import Annotation, AnnotationKind, CompilationUnit
from filtering.tests_filter import TestsFilter, in_package


def _method(package="a.b", class_name="Foo", name="bar", annotations=()):
    unit = CompilationUnit(package_name=package, primary_type_name=class_name)
    return unit.add_method(name, annotations=tuple(annotations), body=())


def _unit(package="a.b", class_name="Foo"):
    return CompilationUnit(package_name=package, primary_type_name=class_name)


class TestInPackage(unittest.TestCase):
    def test_dot_boundary(self):
        self.assertTrue(in_package("a.b", "a.b"))
        self.assertTrue(in_package("a.b", "a.b.c"))
        self.assertFalse(in_package("a.b", "a.bc"))
        self.assertFalse(in_package("a.b", "a"))


class TestClassIncluded(unittest.TestCase):
    def test_package_inclusion(self):
        tests_filter = TestsFilter("+package:a.b")
        self.assertTrue(tests_filter.class_included(_unit("a.b.c")))
        self.assertFalse(tests_filter.class_included(_unit("a.bc")))

    def test_package_exclusion_of_subpackage(self):
        tests_filter = TestsFilter("+package:a -package:a.b")
        self.assertTrue(tests_filter.class_included(_unit("a.x")))
        self.assertFalse(tests_filter.class_included(_unit("a.b.c")))

    def test_exclusion_dominates_inclusion(self):
        self.assertFalse(TestsFilter("+class:Foo -class:Foo").class_included(_unit()))
        self.assertFalse(TestsFilter("+package:a.b -package:a.b").class_included(_unit()))

    def test_method_inclusion_allows_owning_class(self):
        tests_filter = TestsFilter("+method:Foo.bar")
        self.assertTrue(tests_filter.class_included(_unit(class_name="Foo")))
        self.assertFalse(tests_filter.class_included(_unit(class_name="Other")))

    def test_class_inclusion(self):
        tests_filter = TestsFilter("+class:Foo +class:Baz")
        self.assertTrue(tests_filter.class_included(_unit(class_name="Baz")))
        self.assertFalse(tests_filter.class_included(_unit(class_name="Qux")))

    def test_unnamed_package(self):
        self.assertFalse(TestsFilter("+package:a").class_included(_unit(package=None)))
        self.assertTrue(TestsFilter("-package:a").class_included(_unit(package=None)))


class TestMethodIncluded(unittest.TestCase):
    def test_method_inclusion_narrows_only_its_class(self):
        tests_filter = TestsFilter("+class:Other +method:Foo.bar")
        self.assertTrue(tests_filter.method_included(_method(name="bar")))
        self.assertFalse(tests_filter.method_included(_method(name="baz")))
        self.assertTrue(tests_filter.method_included(_method(class_name="Other", name="any")))

    def test_method_exclusion(self):
        tests_filter = TestsFilter("-method:Foo.bar")
        self.assertFalse(tests_filter.method_included(_method(name="bar")))
        self.assertTrue(tests_filter.method_included(_method(name="baz")))

    def test_method_in_excluded_package(self):
        self.assertFalse(TestsFilter("+method:Foo.bar -package:a").method_included(_method()))

    def test_annotation_inclusion_and_exclusion(self):
        tagged = _method(annotations=[Annotation("Smoke")])
        plain = _method()
        self.assertTrue(TestsFilter("+annotationName:Smoke").method_included(tagged))
        self.assertFalse(TestsFilter("+annotationName:Smoke").method_included(plain))
        self.assertFalse(TestsFilter("-annotationName:Smoke").method_included(tagged))
        self.assertTrue(TestsFilter("-annotationName:Smoke").method_included(plain))

    def test_annotation_value_conditions(self):
        method = _method(
            annotations=[Annotation("UserStories", AnnotationKind.SINGLE_VALUE, value='"COT-10"')]
        )
        self.assertTrue(TestsFilter('+annotationValue:UserStories,"COT-10"').method_included(method))
        self.assertFalse(TestsFilter("+annotationValue:UserStories,COT-10").method_included(method))
        self.assertTrue(TestsFilter("+annotationValueContains:UserStories,COT-1").method_included(method))
        self.assertFalse(TestsFilter("+annotationValueContains:Other,COT-1").method_included(method))

    def test_attribute_conditions(self):
        method = _method(
            annotations=[
                Annotation(
                    "Test",
                    AnnotationKind.KEY_VALUE,
                    pairs=(("groups", '{ "datetime", "smoke" }'), ("priority", "1")),
                )
            ]
        )
        self.assertTrue(TestsFilter("+annotationAttributeValue:Test,priority,1").method_included(method))
        self.assertFalse(TestsFilter("+annotationAttributeValue:Test,priority,2").method_included(method))
        self.assertTrue(
            TestsFilter("+annotationAttributeValueContains:Test,groups,smoke").method_included(method)
        )
        self.assertFalse(
            TestsFilter("+annotationAttributeValueContains:Test,owner,smoke").method_included(method)
        )

    def test_value_conditions_ignore_other_shapes(self):
        method = _method(annotations=[Annotation("Test", AnnotationKind.KEY_VALUE, pairs=(("value", "1"),))])
        self.assertFalse(TestsFilter("+annotationValue:Test,1").method_included(method))


class TestLazyValidation(unittest.TestCase):
    def test_unknown_annotation_kind_raises_on_evaluation(self):
        tests_filter = TestsFilter("+annotationFoo:Bar")
        with self.assertRaises(ValidationError) as ctx:
            tests_filter.method_included(_method())
        self.assertEqual(str(ctx.exception), "Annotation condition not recognized")

    def test_wrong_attribute_part_count_raises(self):
        for query in ("+annotationAttributeValue:a,b", "+annotationAttributeValueContains:a,b,c,d"):
            with self.subTest(query=query):
                with self.assertRaises(ValidationError) as ctx:
                    TestsFilter(query).method_included(_method())
                self.assertEqual(
                    str(ctx.exception),
                    "Condition value should contain 3 values separated by comma",
                )

    def test_exclusions_not_evaluated_when_not_allowed(self):
        tests_filter = TestsFilter("+class:Other -annotationFoo:Bar")
        self.assertFalse(tests_filter.method_included(_method()))


class TestQueryShape(unittest.TestCase):
    def test_packages_and_classes_only(self):
        self.assertTrue(TestsFilter("+package:a -class:B").has_only_packages_and_classes())
        self.assertFalse(TestsFilter("+package:a -method:B.c").has_only_packages_and_classes())

    def test_methods_only(self):
        self.assertTrue(TestsFilter("+method:A.b -method:A.c").has_only_methods())
        self.assertFalse(TestsFilter("+method:A.b +annotationName:X").has_only_methods())


if __name__ == "__main__":
    unittest.main()

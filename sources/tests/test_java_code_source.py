"""
End-to-end tests for JavaCodeSource over the Java fixtures.
"""

import shutil
import tempfile
import textwrap
import unittest
from pathlib import Path

from core.errors import ConfigurationError, StructuralError, ValidationError
from core.source_config import SourceConfig
from extraction.models import TestUnit
from extraction.strategies import ExtractionStrategies, humanized_name
from extraction.text import steps_line
from sources.java_code_source import JavaCodeSource

FIXTURES = Path(__file__).parent / "fixtures"
TESTS_DIR = FIXTURES / "org" / "example" / "tests"

CREATE_REMINDER = TestUnit(
    name="[TEST] Create Reminder",
    identifier="COT-101",
    content="Open Reminders App\nAdd Reminder [ reminder ]\nCheck Last Reminder [ reminder ]",
)
DELETE_REMINDER = TestUnit(
    name="[TEST] Delete Reminder",
    identifier="COT-102",
    content=(
        "Open Reminders App\nAdd Reminder [ reminder ]\nDelete Last Reminder\nRefresh Page"
        "\nCheck Reminder Is Absent [ reminder ]"
    ),
)
CURRENT_DATE = TestUnit(
    name="[TEST] Current Date",
    identifier="COT-110",
    content="Open Reminders App\nCheck Current Date",
)
CURRENT_TIME = TestUnit(
    name="[TEST] Current Time",
    content="Open Reminders App\nCheck Current Time With Precision In Minutes [ 2 ]",
)

QUERY_DATA = [
    ("+method:RemindersTest.deleteReminder", [DELETE_REMINDER]),
    ("-method:RemindersTest.deleteReminder", [CREATE_REMINDER, CURRENT_DATE, CURRENT_TIME]),
    (
        "+method:RemindersTest.createReminder +method:RemindersTest.deleteReminder",
        [CREATE_REMINDER, DELETE_REMINDER],
    ),
    ("+class:DateTimeTest", [CURRENT_DATE, CURRENT_TIME]),
    (
        "+class:DateTimeTest +class:RemindersTest",
        [CREATE_REMINDER, DELETE_REMINDER, CURRENT_DATE, CURRENT_TIME],
    ),
    ("-class:DateTimeTest", [CREATE_REMINDER, DELETE_REMINDER]),
    (
        "+class:DateTimeTest +class:RemindersTest -method:RemindersTest.deleteReminder",
        [CREATE_REMINDER, CURRENT_DATE, CURRENT_TIME],
    ),
    (
        "+class:DateTimeTest +method:RemindersTest.deleteReminder",
        [DELETE_REMINDER, CURRENT_DATE, CURRENT_TIME],
    ),
    (
        "+package:org.example.tests",
        [CREATE_REMINDER, DELETE_REMINDER, CURRENT_DATE, CURRENT_TIME],
    ),
    (
        "+package:org.example.tests -package:org.example.tests.datetime",
        [CREATE_REMINDER, DELETE_REMINDER],
    ),
    ("-package:org.example.tests.datetime", [CREATE_REMINDER, DELETE_REMINDER]),
    ("+package:org.example.test", []),
    ("+package:org.example.tests -class:RemindersTest", [CURRENT_DATE, CURRENT_TIME]),
    ("+annotationName:TestCase", [CREATE_REMINDER, DELETE_REMINDER, CURRENT_DATE]),
    ("-annotationName:TestCase", [CURRENT_TIME]),
    ('+annotationValue:UserStories,"COT-10"', [CURRENT_DATE, CURRENT_TIME]),
    (
        "+annotationValueContains:UserStories,COT-1",
        [CREATE_REMINDER, CURRENT_DATE, CURRENT_TIME],
    ),
    ('+annotationAttributeValue:Test,dataProvider,"createReminderData"', [CREATE_REMINDER]),
    ("+annotationAttributeValueContains:Test,groups,smoke", [CURRENT_DATE]),
]

NEGATIVE_QUERY_DATA = [
    ("+annotationFoo:Bar", "Annotation condition not recognized"),
    ("+annotationAttributeValue:a,b", "Condition value should contain 3 values separated by comma"),
    (
        "+annotationAttributeValueContains:a,b,c,d",
        "Condition value should contain 3 values separated by comma",
    ),
]


def _strategies() -> ExtractionStrategies:
    return ExtractionStrategies(
        get_test_name=humanized_name("[TEST] "),
        line_transform=steps_line,
    )


def _sorted(tests):
    return sorted(tests, key=lambda t: t.name)


class TestJavaCodeSource(unittest.TestCase):
    """Selection over the reminders/datetime fixtures."""

    def setUp(self):
        self.source = JavaCodeSource(tests_dir=str(TESTS_DIR), strategies=_strategies())

    def test_get_all(self):
        self.assertEqual(
            _sorted(self.source.get_all()),
            _sorted([CREATE_REMINDER, DELETE_REMINDER, CURRENT_DATE, CURRENT_TIME]),
        )

    def test_get_tests_by_query(self):
        for query, expected in QUERY_DATA:
            with self.subTest(query=query):
                self.assertEqual(_sorted(self.source.get_tests(query)), _sorted(expected))

    def test_get_tests_by_query_negative(self):
        for query, message in NEGATIVE_QUERY_DATA:
            with self.subTest(query=query):
                with self.assertRaises(ValidationError) as ctx:
                    self.source.get_tests(query)
                self.assertEqual(str(ctx.exception), message)

    def test_blank_query(self):
        with self.assertRaises(ValidationError):
            self.source.get_tests("  ")

    def test_default_strategies_use_raw_names(self):
        tests = JavaCodeSource(tests_dir=str(TESTS_DIR)).get_tests("+method:DateTimeTest.currentDate")
        self.assertEqual(len(tests), 1)
        self.assertEqual(tests[0].name, "currentDate")
        self.assertEqual(
            tests[0].content,
            "NavigationSteps.openRemindersApp();\nDateTimeSteps.checkCurrentDate();",
        )

    def test_from_config(self):
        config = SourceConfig(
            tests_dir=str(TESTS_DIR),
            test_name_prefix="[TEST] ",
            humanize_names=True,
            line_style="steps",
            attributes={"stories": "UserStories"},
        )
        tests = JavaCodeSource.from_config(config).get_tests("+method:DateTimeTest.currentDate")
        self.assertEqual(tests[0].name, CURRENT_DATE.name)
        self.assertEqual(tests[0].content, CURRENT_DATE.content)
        self.assertEqual(tests[0].attributes, {"stories": "COT-10"})


class TestMandatoryParameters(unittest.TestCase):
    def test_mandatory_parameters_not_provided(self):
        source = JavaCodeSource()
        with self.assertRaises(ConfigurationError):
            source.get_all()
        with self.assertRaises(ConfigurationError):
            source.get_tests("")
        with self.assertRaises(ConfigurationError):
            source.update_identifiers([])

    def test_test_with_empty_body(self):
        source = JavaCodeSource(tests_dir=str(FIXTURES / "negative" / "emptybody"))
        with self.assertRaises(StructuralError):
            source.get_all()


class TestUpdateIdentifiers(unittest.TestCase):
    def setUp(self):
        self.tmpdir = tempfile.mkdtemp()
        self.tests_dir = Path(self.tmpdir) / "org" / "example" / "tests"
        shutil.copytree(TESTS_DIR, self.tests_dir)
        self.file1 = self.tests_dir / "Test1.java"
        self.file2 = self.tests_dir / "Test2.java"
        self.file1.write_text(
            textwrap.dedent(
                """\
                package org.example.tests;
                public class Test1 {
                    @Test
                    public void someTest() {
                        NavigationSteps.openApp();
                        SomeSteps.doSomething();
                    }
                }
                """
            ),
            encoding="utf-8",
        )
        self.file2.write_text(
            textwrap.dedent(
                """\
                package org.example.tests;
                public class Test2 {
                    @Test
                    @TestCase("COT-100")
                    public void anotherTest() {
                        NavigationSteps.openApp();
                        SomeSteps.doSomethingElse();
                    }
                }
                """
            ),
            encoding="utf-8",
        )
        self.source = JavaCodeSource(tests_dir=str(self.tests_dir), strategies=_strategies())
        self.known = [
            TestUnit(name="[TEST] Some Test", identifier="COT-123", content="Open App\nDo Something"),
            TestUnit(
                name="[TEST] Another Test",
                identifier="COT-124",
                content="Open App\nDo Something Else",
            ),
        ]

    def tearDown(self):
        shutil.rmtree(self.tmpdir, ignore_errors=True)

    def test_update_test_id(self):
        reminders_before = (self.tests_dir / "RemindersTest.java").read_bytes()

        written = self.source.update_identifiers(self.known)

        self.assertEqual(sorted(written), sorted([str(self.file1), str(self.file2)]))
        self.assertEqual(
            self.file1.read_text(encoding="utf-8"),
            textwrap.dedent(
                """\
                package org.example.tests;
                public class Test1 {
                    @Test
                    @TestCase("COT-123")
                    public void someTest() {
                        NavigationSteps.openApp();
                        SomeSteps.doSomething();
                    }
                }
                """
            ),
        )
        self.assertEqual(
            self.file2.read_text(encoding="utf-8"),
            textwrap.dedent(
                """\
                package org.example.tests;
                public class Test2 {
                    @Test
                    @TestCase("COT-124")
                    public void anotherTest() {
                        NavigationSteps.openApp();
                        SomeSteps.doSomethingElse();
                    }
                }
                """
            ),
        )
        self.assertEqual((self.tests_dir / "RemindersTest.java").read_bytes(), reminders_before)

    def test_update_is_idempotent(self):
        self.source.update_identifiers(self.known)
        writes = []
        source = JavaCodeSource(
            tests_dir=str(self.tests_dir),
            strategies=_strategies(),
            writer=lambda path, data: writes.append(path),
        )
        self.assertEqual(source.update_identifiers(self.known), [])
        self.assertEqual(writes, [])

    def test_updated_ids_are_read_back(self):
        self.source.update_identifiers(self.known)
        tests = self.source.get_tests("+class:Test1 +class:Test2")
        self.assertEqual(
            sorted(t.identifier for t in tests),
            ["COT-123", "COT-124"],
        )

    def test_duplicate_known_tests_first_wins(self):
        known = [
            TestUnit(name="[TEST] Some Test", identifier="FIRST", content="Open App\nDo Something"),
            TestUnit(name="[TEST] Some Test", identifier="SECOND", content="Open App\nDo Something"),
        ]
        self.source.update_identifiers(known)
        self.assertIn('@TestCase("FIRST")', self.file1.read_text(encoding="utf-8"))
        self.assertNotIn("SECOND", self.file1.read_text(encoding="utf-8"))


class TestPackageDirectories(unittest.TestCase):
    """Package segments named like build output are still test packages."""

    def test_build_like_package_dirs_are_visited(self):
        for package in ("build", "out", "bin", "target", "tests"):
            with self.subTest(package=package), tempfile.TemporaryDirectory() as tmpdir:
                package_dir = Path(tmpdir) / "org" / "example" / package
                package_dir.mkdir(parents=True)
                (package_dir / "BuildTest.java").write_text(
                    f"package org.example.{package};\n"
                    "public class BuildTest {\n"
                    "    @Test\n"
                    "    public void buildsThings() {\n"
                    "        Steps.build();\n"
                    "    }\n"
                    "}\n",
                    encoding="utf-8",
                )
                tests = JavaCodeSource(tests_dir=tmpdir).get_tests("+package:org.example")
                self.assertEqual([t.name for t in tests], ["buildsThings"])


if __name__ == "__main__":
    unittest.main()

"""Text helpers used by name and line transforms."""

import re

_CAMEL_BOUNDARY_RE = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def separate_by_upper_case_letters(text: str) -> str:
    """Split camel case into capitalised words.

    >>> separate_by_upper_case_letters("openRemindersApp")
    'Open Reminders App'
    """
    spaced = _CAMEL_BOUNDARY_RE.sub(" ", text)
    return spaced[:1].upper() + spaced[1:]


def substring_after(text: str, delimiter: str) -> str:
    """Text after the first ``delimiter``, or the whole text if it is absent."""
    _, sep, rest = text.partition(delimiter)
    return rest if sep else text


def substring_before(text: str, delimiter: str) -> str:
    """Text before the first ``delimiter``, or the whole text if it is absent."""
    return text.partition(delimiter)[0]


def steps_line(line: str) -> str:
    """Render a step call as a readable sentence.

    ``ReminderSteps.addReminder(reminder);`` becomes
    ``Add Reminder [ reminder ]``.
    """
    return (
        separate_by_upper_case_letters(substring_after(line, "."))
        .replace("();", "")
        .replace("(", " [ ")
        .replace(");", " ]")
    )

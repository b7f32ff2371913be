"""Missing unit test detection: new classes in a PR without any test usage."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Optional

from prchecks.config import (
    DEFAULT_CLASSES_EXCEPTIONS,
    DEFAULT_SUBCLASSES_EXCEPTIONS,
    DEFAULT_TEST_FILE_PATTERNS,
    DEFAULT_UNIT_TESTS_BYPASS_PR_LABEL,
    MISSING_TESTS_BYPASSED_FORMAT,
    MISSING_TESTS_ERROR_FORMAT,
    MISSING_TESTS_NO_BYPASS_FORMAT,
)
from prchecks.matchers import (
    PatternLike,
    compile_patterns,
    find_classes,
    find_non_private_classes,
    is_class_exception,
    is_test_file,
)
from prchecks.models import ChangeType, ClassViolation, FileDiff, PRSnapshot, Severity
from prchecks.reporter import Reporter

logger = logging.getLogger(__name__)


def find_classes_missing_tests(
    files: Iterable[FileDiff],
    classes_exceptions: Iterable[PatternLike] = tuple(DEFAULT_CLASSES_EXCEPTIONS),
    subclasses_exceptions: Iterable[PatternLike] = tuple(DEFAULT_SUBCLASSES_EXCEPTIONS),
    test_file_patterns: Iterable[PatternLike] = tuple(DEFAULT_TEST_FILE_PATTERNS),
) -> list[ClassViolation]:
    """Find classes added in non-test files that no added test line refers to.

    Classes whose name also appears on a removed line are treated as moved or
    edited rather than new. Any whole-word mention of the class in an added
    line of any test file counts as test usage.
    """
    class_regexes = compile_patterns(classes_exceptions)
    subclass_regexes = compile_patterns(subclasses_exceptions)
    test_regexes = compile_patterns(test_file_patterns)

    violations: list[ClassViolation] = []
    removed_classes: set[str] = set()
    added_test_lines: list[str] = []

    for file_diff in files:
        if is_test_file(file_diff.path, test_regexes):
            added_test_lines.extend(line.raw_text for line in file_diff.added_lines)
            continue

        for line in file_diff.lines:
            if line.change_type == ChangeType.ADDED:
                for name, tail in find_non_private_classes(line.raw_text):
                    if is_class_exception(
                        name, tail, file_diff.path, class_regexes, subclass_regexes
                    ):
                        logger.debug("Skipping excepted class %s in %s", name, file_diff.path)
                        continue
                    violations.append(ClassViolation(name, file_diff.path))
            elif line.change_type == ChangeType.REMOVED:
                removed_classes.update(name for name, _ in find_classes(line.raw_text))

    # Only newly added classes, not modified signatures or moved lines
    violations = [v for v in violations if v.class_name not in removed_classes]

    return [
        v
        for v in violations
        if not any(
            re.search(rf"\b{re.escape(v.class_name)}\b", line) for line in added_test_lines
        )
    ]


def check_missing_tests(
    snapshot: PRSnapshot,
    reporter: Reporter,
    classes_exceptions: Iterable[PatternLike] = tuple(DEFAULT_CLASSES_EXCEPTIONS),
    subclasses_exceptions: Iterable[PatternLike] = tuple(DEFAULT_SUBCLASSES_EXCEPTIONS),
    bypass_label: Optional[str] = DEFAULT_UNIT_TESTS_BYPASS_PR_LABEL,
    test_file_patterns: Iterable[PatternLike] = tuple(DEFAULT_TEST_FILE_PATTERNS),
) -> None:
    """Report classes added without tests.

    Errors by default; warnings when the PR carries `bypass_label`.
    """
    violations = find_classes_missing_tests(
        snapshot.files,
        classes_exceptions=classes_exceptions,
        subclasses_exceptions=subclasses_exceptions,
        test_file_patterns=test_file_patterns,
    )
    if not violations:
        return

    logger.info(
        "Classes missing tests: %s", ", ".join(v.class_name for v in violations)
    )
    if bypass_label and bypass_label in snapshot.labels:
        for v in violations:
            reporter.report(
                MISSING_TESTS_BYPASSED_FORMAT % (v.class_name, bypass_label),
                Severity.WARNING,
            )
    else:
        for v in violations:
            if bypass_label:
                message = MISSING_TESTS_ERROR_FORMAT % (v.class_name, bypass_label)
            else:
                message = MISSING_TESTS_NO_BYPASS_FORMAT % v.class_name
            reporter.report(message, Severity.ERROR)

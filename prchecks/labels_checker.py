"""Label checks for pull requests and issues."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from typing import Optional

from prchecks.config import (
    DEFAULT_ISSUE_LABEL_FORMATS,
    DO_NOT_MERGE_MESSAGE_FORMAT,
    ISSUE_LABELS_ERROR_MESSAGE,
    ISSUE_LABELS_SUCCESS_MESSAGE,
    MISSING_LABELS_MESSAGE_FORMAT,
)
from prchecks.matchers import PatternLike, compile_patterns
from prchecks.models import PRSnapshot, Severity
from prchecks.reporter import Reporter

logger = logging.getLogger(__name__)


def markdown_list_string(items: Iterable[str]) -> str:
    return ", ".join(f"`{item}`" for item in items)


def missing_label_patterns(
    labels: Iterable[str], expected: Iterable[re.Pattern]
) -> list[re.Pattern]:
    """Patterns not matched (searched) by any of the labels."""
    labels = list(labels)
    return [p for p in expected if not any(p.search(label) for label in labels)]


def _check_missing_labels(
    labels: tuple[str, ...],
    expected_labels: Iterable[PatternLike],
    severity: Severity,
    reporter: Reporter,
    custom_message: Optional[str] = None,
) -> None:
    missing = missing_label_patterns(labels, compile_patterns(expected_labels))
    if not missing:
        return

    logger.info("Missing %s label(s): %s", severity, [p.pattern for p in missing])
    message = custom_message or MISSING_LABELS_MESSAGE_FORMAT % markdown_list_string(
        p.pattern for p in missing
    )
    reporter.report(message, severity)


def check_labels(
    snapshot: PRSnapshot,
    reporter: Reporter,
    do_not_merge_labels: Iterable[str] = (),
    required_labels: Iterable[PatternLike] = (),
    required_labels_error: Optional[str] = None,
    recommended_labels: Iterable[PatternLike] = (),
    recommended_labels_warning: Optional[str] = None,
) -> None:
    """Check the PR for do-not-merge labels and missing required/recommended ones.

    Each required or recommended pattern must be matched by at least one label.
    Use a single empty pattern to ask for "at least one label".
    """
    blocking = {label.casefold() for label in do_not_merge_labels or ()}
    found = [label for label in snapshot.labels if label.casefold() in blocking]
    if found:
        reporter.report(
            DO_NOT_MERGE_MESSAGE_FORMAT % markdown_list_string(found), Severity.ERROR
        )

    _check_missing_labels(
        snapshot.labels,
        required_labels or (),
        Severity.ERROR,
        reporter,
        custom_message=required_labels_error,
    )
    _check_missing_labels(
        snapshot.labels,
        recommended_labels or (),
        Severity.WARNING,
        reporter,
        custom_message=recommended_labels_warning,
    )


def check_issue_labels(
    labels: Iterable[str],
    reporter: Reporter,
    label_formats: Iterable[PatternLike] = tuple(DEFAULT_ISSUE_LABEL_FORMATS),
    error_message: str = ISSUE_LABELS_ERROR_MESSAGE,
    success_message: str = ISSUE_LABELS_SUCCESS_MESSAGE,
) -> bool:
    """Check that every label format is matched by some label of an issue.

    Reports the success message as INFO, or the error message as ERROR.
    Returns True when all formats matched.
    """
    missing = missing_label_patterns(labels, compile_patterns(label_formats))
    for pattern in missing:
        logger.info("No match found for regex '%s'", pattern.pattern)

    if missing:
        reporter.report(error_message, Severity.ERROR)
        return False
    reporter.report(success_message, Severity.INFO)
    return True

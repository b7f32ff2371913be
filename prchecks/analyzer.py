"""Runs every configured checker over one pull request snapshot."""

from __future__ import annotations

import logging
from typing import Optional

from prchecks.labels_checker import check_issue_labels, check_labels
from prchecks.models import PRSnapshot
from prchecks.policies import CheckPolicies
from prchecks.reporter import Reporter
from prchecks.size_checker import check_diff_size, check_pr_body
from prchecks.tracks_checker import check_tracks_changes
from prchecks.unit_test_checker import check_missing_tests

logger = logging.getLogger(__name__)


def run_checks(
    snapshot: PRSnapshot,
    policies: CheckPolicies,
    reporter: Optional[Reporter] = None,
) -> Reporter:
    """Run the checkers enabled in `policies`, in a fixed order."""
    reporter = reporter if reporter is not None else Reporter()
    logger.info(
        "Checking PR: %d files, +%d/-%d, labels=%s",
        len(snapshot.files),
        snapshot.insertions,
        snapshot.deletions,
        list(snapshot.labels),
    )

    for size in policies.diff_size:
        check_diff_size(
            snapshot,
            reporter,
            max_size=size.max_size,
            file_selector=size.file_selector,
            metric=size.metric,
            message=size.message,
            severity=size.severity,
        )

    if policies.pr_body is not None:
        check_pr_body(
            snapshot,
            reporter,
            min_length=policies.pr_body.min_length,
            message=policies.pr_body.message,
            severity=policies.pr_body.severity,
        )

    if policies.labels is not None:
        labels = policies.labels
        check_labels(
            snapshot,
            reporter,
            do_not_merge_labels=labels.do_not_merge_labels,
            required_labels=labels.required_labels,
            required_labels_error=labels.required_labels_error,
            recommended_labels=labels.recommended_labels,
            recommended_labels_warning=labels.recommended_labels_warning,
        )

    if policies.issue_labels is not None:
        check_issue_labels(
            snapshot.labels,
            reporter,
            label_formats=policies.issue_labels.label_formats,
            error_message=policies.issue_labels.error_message,
            success_message=policies.issue_labels.success_message,
        )

    if policies.missing_tests is not None:
        tests = policies.missing_tests
        check_missing_tests(
            snapshot,
            reporter,
            classes_exceptions=tests.classes_exceptions,
            subclasses_exceptions=tests.subclasses_exceptions,
            bypass_label=tests.bypass_label,
            test_file_patterns=tests.test_file_patterns,
        )

    if policies.tracks is not None:
        check_tracks_changes(
            snapshot,
            reporter,
            tracks_files=policies.tracks.tracks_files,
            tracks_usage_matchers=policies.tracks.tracks_usage_matchers,
            tracks_label=policies.tracks.tracks_label,
        )

    logger.info(
        "Checks done: %d error(s), %d warning(s), %d message(s)",
        len(reporter.errors),
        len(reporter.warnings),
        len(reporter.messages),
    )
    return reporter

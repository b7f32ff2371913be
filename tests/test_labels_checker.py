import re

from prchecks.config import ISSUE_LABELS_ERROR_MESSAGE, ISSUE_LABELS_SUCCESS_MESSAGE
from prchecks.labels_checker import check_issue_labels, check_labels
from prchecks.models import Severity


def test_no_configuration_is_a_no_op(make_snapshot, reporter):
    check_labels(make_snapshot(labels=["anything"]), reporter)

    assert reporter.outcomes == []


def test_do_not_merge_is_case_insensitive(make_snapshot, reporter):
    snapshot = make_snapshot(labels=["DO NOT MERGE", "bug", "do not merge"])

    check_labels(snapshot, reporter, do_not_merge_labels=["Do Not Merge"])

    assert reporter.errors == [
        "This PR is tagged with `DO NOT MERGE`, `do not merge` label(s)."
    ]


def test_missing_required_label(make_snapshot, reporter):
    check_labels(
        make_snapshot(labels=["Bug"]), reporter, required_labels=[r"^feature:"]
    )

    assert reporter.errors == ["PR is missing label(s) matching: `^feature:`"]


def test_required_label_present(make_snapshot, reporter):
    check_labels(
        make_snapshot(labels=["feature:ui"]),
        reporter,
        required_labels=[re.compile(r"^feature:")],
    )

    assert reporter.outcomes == []


def test_every_pattern_must_be_matched(make_snapshot, reporter):
    check_labels(
        make_snapshot(labels=["type: bug"]),
        reporter,
        required_labels=[r"^type:", r"^feature:", r"^priority"],
    )

    assert reporter.errors == [
        "PR is missing label(s) matching: `^feature:`, `^priority`"
    ]


def test_empty_pattern_requires_any_label(make_snapshot, reporter):
    check_labels(make_snapshot(labels=[]), reporter, required_labels=[""])
    assert len(reporter.errors) == 1

    reporter.outcomes.clear()
    check_labels(make_snapshot(labels=["x"]), reporter, required_labels=[""])
    assert reporter.outcomes == []


def test_recommended_labels_warn_with_custom_message(make_snapshot, reporter):
    check_labels(
        make_snapshot(labels=["Bug"]),
        reporter,
        required_labels=[r"Bug"],
        recommended_labels=[r"Documentation"],
        recommended_labels_warning="Consider adding the Documentation label.",
    )

    assert reporter.status_report == {
        "errors": [],
        "warnings": ["Consider adding the Documentation label."],
        "messages": [],
    }


def test_custom_required_error(make_snapshot, reporter):
    check_labels(
        make_snapshot(),
        reporter,
        required_labels=[r"Bug|Enhancement"],
        required_labels_error="Please add Bug or Enhancement.",
    )

    assert reporter.outcomes[0].message == "Please add Bug or Enhancement."
    assert reporter.outcomes[0].severity == Severity.ERROR


def test_issue_labels_success(reporter):
    assert check_issue_labels(["bug", "[Type] Crash"], reporter, label_formats=[r"\[Type\]"])

    assert reporter.messages == [ISSUE_LABELS_SUCCESS_MESSAGE]


def test_issue_labels_require_one_label_by_default(reporter):
    assert not check_issue_labels([], reporter)

    assert reporter.errors == [ISSUE_LABELS_ERROR_MESSAGE]


def test_issue_labels_all_formats_needed(reporter):
    result = check_issue_labels(
        ["[Type] Bug"],
        reporter,
        label_formats=[r"\[Type\]", r"\[Pri\]"],
        error_message="Needs type and priority.",
    )

    assert result is False
    assert reporter.errors == ["Needs type and priority."]

from prchecks.analyzer import run_checks
from prchecks.config import DIFF_SIZE_MESSAGE_FORMAT, TRACKS_PR_INSTRUCTIONS
from prchecks.models import Severity
from prchecks.policies import CheckPolicies, default_policies, policies_from_dict
from prchecks.reporter import Reporter


def _snapshot(make_snapshot, **overrides):
    values = dict(
        files={
            "app/src/main/java/org/Foo.kt": "+class Foo : Base() {\n+    tracker.track(EVENT)",
            "README.md": "+docs",
        },
        stats={"app/src/main/java/org/Foo.kt": (600, 0), "README.md": (1, 0)},
        insertions=601,
        labels=["bug"],
        body="A long enough description of the change.",
    )
    values.update(overrides)
    return make_snapshot(**values)


def test_default_policies_run_in_order(make_snapshot):
    reporter = run_checks(_snapshot(make_snapshot), default_policies())

    assert [(o.severity, o.message) for o in reporter.outcomes] == [
        (Severity.WARNING, DIFF_SIZE_MESSAGE_FORMAT % 500),
        (
            Severity.ERROR,
            "Please add tests for class `Foo` (or add `unit-tests-exemption` label to ignore this).",
        ),
    ]


def test_empty_policies_report_nothing(make_snapshot):
    reporter = run_checks(_snapshot(make_snapshot, body=""), CheckPolicies())

    assert reporter.outcomes == []


def test_configured_checks(make_snapshot):
    policies = policies_from_dict(
        {
            "diff_size": [
                {"max_size": 10, "include": [r"\.md$"]},
                {"max_size": 100, "metric": "deletions"},
            ],
            "pr_body": {"min_length": 100, "severity": "error"},
            "labels": {"required_labels": ["^type:"]},
            "issue_labels": {"label_formats": ["bug"]},
            "tracks": {"tracks_usage_matchers": [r"tracker\.track"]},
        }
    )

    reporter = run_checks(_snapshot(make_snapshot), policies)

    assert reporter.status_report == {
        "errors": [
            "The PR description appears very short, less than 100 characters long. "
            "Please provide a summary of your changes in the PR description.",
            "PR is missing label(s) matching: `^type:`",
        ],
        "warnings": [],
        "messages": ["✅ Yay, issue looks great!", TRACKS_PR_INSTRUCTIONS],
    }


def test_appends_to_given_reporter(make_snapshot):
    reporter = Reporter()
    reporter.report("earlier", Severity.INFO)

    result = run_checks(_snapshot(make_snapshot), CheckPolicies(), reporter)

    assert result is reporter
    assert reporter.messages == ["earlier"]


def test_runs_are_idempotent(make_snapshot):
    snapshot = _snapshot(make_snapshot)
    policies = default_policies()

    first = run_checks(snapshot, policies).outcomes
    second = run_checks(snapshot, policies).outcomes

    assert first == second

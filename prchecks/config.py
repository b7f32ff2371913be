"""Configuration constants for the pull request checks."""

from __future__ import annotations

# ── Size Checks ──────────────────────────────────────────────────────────────
DEFAULT_MAX_DIFF_SIZE = 500
DEFAULT_MIN_PR_BODY_LENGTH = 10

DIFF_SIZE_MESSAGE_FORMAT = (
    "This PR is larger than %d lines of changes. Please consider splitting it "
    "into smaller PRs for easier and faster reviews."
)
MIN_PR_BODY_MESSAGE_FORMAT = (
    "The PR description appears very short, less than %d characters long. "
    "Please provide a summary of your changes in the PR description."
)

# Metrics accepted by the diff size check
SIZE_METRICS = ("insertions", "deletions", "total")

# ── Labels ───────────────────────────────────────────────────────────────────
DO_NOT_MERGE_MESSAGE_FORMAT = "This PR is tagged with %s label(s)."
MISSING_LABELS_MESSAGE_FORMAT = "PR is missing label(s) matching: %s"

# Issue label workflow
DEFAULT_ISSUE_LABEL_FORMATS = [".*"]
ISSUE_LABELS_ERROR_MESSAGE = "At least one label is required."
ISSUE_LABELS_SUCCESS_MESSAGE = "✅ Yay, issue looks great!"

# ── Missing Unit Tests ───────────────────────────────────────────────────────
# Paths of test sources (JVM/Android layout by default)
DEFAULT_TEST_FILE_PATTERNS = [
    r"/(test|androidTest).*\.(java|kt)$",
]

DEFAULT_CLASSES_EXCEPTIONS = [
    r"ViewHolder$",
    r"Module$",
]

DEFAULT_SUBCLASSES_EXCEPTIONS = [
    r"(Fragment|Activity)\b",
    r"RecyclerView",
]

DEFAULT_UNIT_TESTS_BYPASS_PR_LABEL = "unit-tests-exemption"

# Modifier that hides a class declaration from the missing tests check
PRIVATE_CLASS_MODIFIER = "private"

MISSING_TESTS_ERROR_FORMAT = (
    "Please add tests for class `%s` (or add `%s` label to ignore this)."
)
MISSING_TESTS_NO_BYPASS_FORMAT = "Please add tests for class `%s`."
MISSING_TESTS_BYPASSED_FORMAT = (
    "Class `%s` is missing tests, but `%s` label was set to ignore this."
)

# ── Tracks (analytics) Changes ───────────────────────────────────────────────
TRACKS_PR_INSTRUCTIONS = (
    "This PR contains changes to Tracks-related logic. Please ensure "
    "(**author and reviewer**) the following are completed:\n"
    "- The PR must be reviewed by an analytics owner.\n"
    "- The tracks events must be validated in the Tracks system.\n"
    "- Verify the internal Tracks spreadsheet has also been updated.\n"
    "- Please consider registering any new events.\n"
)
TRACKS_NO_LABEL_INSTRUCTION_FORMAT = "- The PR must be assigned the **%s** label.\n"
TRACKS_NO_LABEL_MESSAGE_FORMAT = "Please ensure the PR has the `%s` label."

# ── Runtime Config ───────────────────────────────────────────────────────────
GITHUB_TOKEN_ENV = "GITHUB_TOKEN"
CONFIG_PATH_ENV = "PRCHECKS_CONFIG"
DEFAULT_CONFIG_PATH = "prchecks.json"

# Marker appended to rendered reports so a posted comment can be recognised
REPORT_MARKER = "<!-- generated_by_prchecks -->"

# ── Server Config ────────────────────────────────────────────────────────────
SERVER_NAME = "prchecks-mcp"
SERVER_VERSION = "0.1.0"
SERVER_HOST = "127.0.0.1"
SERVER_PORT = 8089

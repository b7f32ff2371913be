"""Size checks: diff size thresholds and PR description length."""

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Optional

from prchecks.config import (
    DIFF_SIZE_MESSAGE_FORMAT,
    MIN_PR_BODY_MESSAGE_FORMAT,
    SIZE_METRICS,
)
from prchecks.models import FileDiff, PRSnapshot, Severity
from prchecks.reporter import Reporter

logger = logging.getLogger(__name__)

FileSelector = Callable[[FileDiff], bool]


def diff_size(
    snapshot: PRSnapshot,
    file_selector: Optional[FileSelector] = None,
    metric: str = "total",
) -> int:
    """Compute insertions, deletions or both over the selected files.

    Without a selector the platform aggregate is used as-is. With one, the
    per-file stats are summed; files without stats count as 0.
    """
    if metric not in SIZE_METRICS:
        raise ValueError(f"Unknown size metric {metric!r}, expected one of {SIZE_METRICS}")
    if file_selector is not None and not callable(file_selector):
        raise TypeError(f"file_selector must be callable, got {type(file_selector).__name__}")

    if file_selector is None:
        if metric == "insertions":
            return snapshot.insertions
        if metric == "deletions":
            return snapshot.deletions
        return snapshot.lines_of_code

    size = 0
    for file_diff in snapshot.files:
        if not file_selector(file_diff):
            continue
        stats = snapshot.stats_for(file_diff.path)
        if stats is None:
            continue
        if metric == "insertions":
            size += stats.insertions
        elif metric == "deletions":
            size += stats.deletions
        else:
            size += stats.total
    return size


def check_diff_size(
    snapshot: PRSnapshot,
    reporter: Reporter,
    max_size: int,
    file_selector: Optional[FileSelector] = None,
    metric: str = "total",
    message: Optional[str] = None,
    severity: Severity = Severity.WARNING,
) -> None:
    """Report when the diff size for `metric` is larger than `max_size`."""
    size = diff_size(snapshot, file_selector=file_selector, metric=metric)
    logger.info("Diff size (%s): %d, max %d", metric, size, max_size)
    if size > max_size:
        reporter.report(message or DIFF_SIZE_MESSAGE_FORMAT % max_size, severity)


def check_pr_body(
    snapshot: PRSnapshot,
    reporter: Reporter,
    min_length: int,
    message: Optional[str] = None,
    severity: Severity = Severity.WARNING,
) -> None:
    """Report when the PR description is not longer than `min_length`."""
    if len(snapshot.body) > min_length:
        return
    reporter.report(message or MIN_PR_BODY_MESSAGE_FORMAT % min_length, severity)

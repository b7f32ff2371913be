"""Tracks (analytics) change detection, gated by a PR label."""

from __future__ import annotations

import logging
import posixpath
from collections.abc import Callable, Iterable
from typing import Optional

from prchecks.config import (
    TRACKS_NO_LABEL_INSTRUCTION_FORMAT,
    TRACKS_NO_LABEL_MESSAGE_FORMAT,
    TRACKS_PR_INSTRUCTIONS,
)
from prchecks.matchers import PatternLike, compile_patterns, matches_any
from prchecks.models import ChangeType, FileDiff, PRSnapshot, Severity
from prchecks.reporter import Reporter

logger = logging.getLogger(__name__)

LineMatcher = Callable[[str], bool]


def matching_lines(
    files: Iterable[FileDiff],
    line_matcher: LineMatcher,
    change_type: Optional[ChangeType] = None,
) -> list[str]:
    """Raw diff lines accepted by `line_matcher`.

    `change_type` of None searches both added and removed lines.
    """
    wanted = (
        (ChangeType.ADDED, ChangeType.REMOVED) if change_type is None else (change_type,)
    )
    return [
        line.raw_text
        for file_diff in files
        for line in file_diff.lines
        if line.change_type in wanted and line_matcher(line.raw_text)
    ]


def touches_files(files: Iterable[FileDiff], watched: Iterable[str]) -> bool:
    """True if a changed file's full path or basename is in `watched`."""
    watched = set(watched)
    return any(
        f.path in watched or posixpath.basename(f.path) in watched for f in files
    )


def check_tracks_changes(
    snapshot: PRSnapshot,
    reporter: Reporter,
    tracks_files: Iterable[str] = (),
    tracks_usage_matchers: Iterable[PatternLike] = (),
    tracks_label: Optional[str] = None,
    instructions: str = TRACKS_PR_INSTRUCTIONS,
    no_label_instruction_format: str = TRACKS_NO_LABEL_INSTRUCTION_FORMAT,
    no_label_message_format: str = TRACKS_NO_LABEL_MESSAGE_FORMAT,
) -> None:
    """Report review instructions when a PR changes analytics code.

    When `tracks_label` is configured but missing from the PR, two errors are
    reported: the instructions with a label reminder appended (shown on the
    PR), and the bare label message (status signal).
    """
    usage_regexes = compile_patterns(tracks_usage_matchers)

    touched = touches_files(snapshot.files, tracks_files)
    if not touched and usage_regexes:
        touched = bool(
            matching_lines(snapshot.files, lambda line: matches_any(usage_regexes, line))
        )
    if not touched:
        return

    logger.info("PR contains Tracks-related changes")
    if not tracks_label or tracks_label in snapshot.labels:
        reporter.report(instructions, Severity.INFO)
        return

    reporter.report(
        instructions + no_label_instruction_format % tracks_label, Severity.ERROR
    )
    reporter.report(no_label_message_format % tracks_label, Severity.ERROR)

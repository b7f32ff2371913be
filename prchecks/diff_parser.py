"""Diff parsing: patch text to DiffLine facts, unified diff to FileDiff objects."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from prchecks.models import ChangeType, DiffLine, FileDiff, FileStats, PRSnapshot


def change_type(line: str) -> ChangeType:
    """Classify one diff line purely by its prefix."""
    if line.startswith("+") and not line.startswith("+++"):
        return ChangeType.ADDED
    if line.startswith("-") and not line.startswith("---"):
        return ChangeType.REMOVED
    return ChangeType.CONTEXT


def parse_patch(patch: Optional[str]) -> tuple[DiffLine, ...]:
    """Turn the patch of a single file into an ordered sequence of DiffLines."""
    if not patch:
        return ()
    return tuple(DiffLine(change_type(line), line) for line in patch.splitlines())


def _strip_prefix(path: str, prefix: str) -> Optional[str]:
    if path == "/dev/null":
        return None
    return path.removeprefix(prefix)


def parse_diff(diff_text: str) -> list[FileDiff]:
    """Parse a unified diff (as printed by `git diff`) into FileDiff objects."""
    files: list[FileDiff] = []
    current_path: Optional[str] = None
    current_lines: list[DiffLine] = []
    in_hunk = False

    def flush() -> None:
        if current_path is not None:
            files.append(FileDiff(path=current_path, lines=tuple(current_lines)))

    for line in diff_text.splitlines():
        # New file header
        if line.startswith("diff --git"):
            flush()
            parts = line.split()
            current_path = None
            current_lines = []
            in_hunk = False
            if len(parts) >= 4:
                old_path = _strip_prefix(parts[2], "a/")
                new_path = _strip_prefix(parts[3], "b/")
                current_path = new_path or old_path or "<unknown>"
            continue

        if current_path is None:
            continue

        if not in_hunk:
            # File metadata; `+++ /dev/null` marks a deletion, keep the old path
            if line.startswith("+++ "):
                new_path = _strip_prefix(line[4:].strip(), "b/")
                if new_path:
                    current_path = new_path
                continue
            if not line.startswith("@@"):
                continue
            in_hunk = True

        current_lines.append(DiffLine(change_type(line), line))

    flush()
    return files


def count_stats(file_diff: FileDiff) -> FileStats:
    """Count insertions and deletions from the parsed lines of a file."""
    return FileStats(
        insertions=len(file_diff.added_lines),
        deletions=len(file_diff.removed_lines),
    )


def snapshot_from_diff(
    diff_text: str,
    labels: Iterable[str] = (),
    body: Optional[str] = None,
) -> PRSnapshot:
    """Build a PRSnapshot from local diff text, computing stats from the lines."""
    files = parse_diff(diff_text)
    stats = {f.path: count_stats(f) for f in files}
    return PRSnapshot(
        files=tuple(files),
        labels=tuple(labels),
        body=body or "",
        insertions=sum(s.insertions for s in stats.values()),
        deletions=sum(s.deletions for s in stats.values()),
        file_stats=stats,
    )

"""Data models for the pull request checks."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class Severity(str, Enum):
    """Severity levels for check outcomes."""

    ERROR = "error"  # Blocks the merge
    WARNING = "warning"  # Non-blocking, shown on the PR
    INFO = "info"  # Informational message, e.g. review instructions

    def __str__(self) -> str:
        return self.value


class ChangeType(str, Enum):
    """Kind of a single line in a unified diff."""

    ADDED = "added"
    REMOVED = "removed"
    CONTEXT = "context"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DiffLine:
    """One line of a file patch, prefix included."""

    change_type: ChangeType
    raw_text: str

    @property
    def content(self) -> str:
        """Line text without the one-character diff prefix."""
        if self.change_type == ChangeType.CONTEXT:
            return self.raw_text[1:] if self.raw_text.startswith(" ") else self.raw_text
        return self.raw_text[1:]


@dataclass(frozen=True)
class FileDiff:
    """Changed lines of a single file in a pull request."""

    path: str
    lines: tuple[DiffLine, ...] = ()

    @property
    def added_lines(self) -> list[DiffLine]:
        return [line for line in self.lines if line.change_type == ChangeType.ADDED]

    @property
    def removed_lines(self) -> list[DiffLine]:
        return [line for line in self.lines if line.change_type == ChangeType.REMOVED]


@dataclass(frozen=True)
class FileStats:
    """Per-file insertion/deletion counts as reported by the platform."""

    insertions: int = 0
    deletions: int = 0

    @property
    def total(self) -> int:
        return self.insertions + self.deletions


@dataclass(frozen=True)
class PRSnapshot:
    """Read-only view of a pull request, fetched once per run.

    ``file_stats`` may omit files: the platform does not always report stats
    for huge or binary files.
    """

    files: tuple[FileDiff, ...] = ()
    labels: tuple[str, ...] = ()
    body: str = ""
    insertions: int = 0
    deletions: int = 0
    file_stats: dict[str, FileStats] = field(default_factory=dict)

    @property
    def lines_of_code(self) -> int:
        return self.insertions + self.deletions

    def stats_for(self, path: str) -> Optional[FileStats]:
        return self.file_stats.get(path)


@dataclass(frozen=True)
class ClassViolation:
    """A class added in non-test code with no matching test usage."""

    class_name: str
    file_path: str


@dataclass(frozen=True)
class CheckOutcome:
    """A single message emitted by a checker."""

    message: str
    severity: Severity

    def to_dict(self) -> dict:
        return {"severity": str(self.severity), "message": self.message}

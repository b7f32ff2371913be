import pytest

from prchecks.diff_parser import parse_patch
from prchecks.models import FileDiff, FileStats, PRSnapshot
from prchecks.reporter import Reporter


@pytest.fixture
def reporter():
    return Reporter()


def make_file(path, patch=""):
    return FileDiff(path=path, lines=parse_patch(patch))


@pytest.fixture
def make_snapshot():
    """Build a PRSnapshot from {path: patch} plus optional per-file stats."""

    def _make(files=None, labels=(), body="", stats=None, insertions=0, deletions=0):
        files = files or {}
        stats = stats or {}
        return PRSnapshot(
            files=tuple(make_file(path, patch) for path, patch in files.items()),
            labels=tuple(labels),
            body=body,
            insertions=insertions,
            deletions=deletions,
            file_stats={path: FileStats(*counts) for path, counts in stats.items()},
        )

    return _make

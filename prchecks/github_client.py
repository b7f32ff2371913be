"""GitHub API client using PyGithub: fetches PR snapshots and posts comments."""

from __future__ import annotations

import logging
import os
from typing import Optional

from github import Auth, Github
from github.PullRequest import PullRequest

from prchecks.config import GITHUB_TOKEN_ENV
from prchecks.diff_parser import parse_patch
from prchecks.models import FileDiff, FileStats, PRSnapshot

logger = logging.getLogger(__name__)


class GitHubClient:
    """Thin wrapper around PyGithub for the two calls the checks need."""

    def __init__(self, token: Optional[str] = None, github: Optional[Github] = None):
        if github is not None:
            self.github = github
            return
        token = token or os.getenv(GITHUB_TOKEN_ENV)
        if not token:
            raise ValueError(f"{GITHUB_TOKEN_ENV} environment variable not set")
        self.github = Github(auth=Auth.Token(token))

    def get_pull_request(self, repo_full_name: str, pr_number: int) -> PullRequest:
        return self.github.get_repo(repo_full_name).get_pull(pr_number)

    def fetch_snapshot(self, repo_full_name: str, pr_number: int) -> PRSnapshot:
        """Fetch files, patches, stats, labels and body of a pull request."""
        pr = self.get_pull_request(repo_full_name, pr_number)

        files: list[FileDiff] = []
        stats: dict[str, FileStats] = {}
        for f in pr.get_files():
            files.append(FileDiff(path=f.filename, lines=parse_patch(f.patch)))
            # Stats can be missing for huge or binary files
            if f.additions is None and f.deletions is None:
                continue
            stats[f.filename] = FileStats(
                insertions=f.additions or 0, deletions=f.deletions or 0
            )

        labels = tuple(label.name for label in pr.labels)
        logger.info(
            "Fetched PR #%d in %s: %d files, labels=%s",
            pr_number,
            repo_full_name,
            len(files),
            list(labels),
        )
        return PRSnapshot(
            files=tuple(files),
            labels=labels,
            body=pr.body or "",
            insertions=pr.additions or 0,
            deletions=pr.deletions or 0,
            file_stats=stats,
        )

    def post_comment(self, repo_full_name: str, pr_number: int, comment_body: str) -> None:
        """Post the rendered report as a new comment on the pull request."""
        pr = self.get_pull_request(repo_full_name, pr_number)
        pr.create_issue_comment(comment_body)
        logger.info("Posted comment on PR #%d", pr_number)

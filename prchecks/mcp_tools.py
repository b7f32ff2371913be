"""MCP tool definitions for the pull request checks."""

from __future__ import annotations

import asyncio
import json
import logging
import traceback
from typing import Optional

from fastmcp import FastMCP

from prchecks.analyzer import run_checks
from prchecks.diff_parser import snapshot_from_diff
from prchecks.github_client import GitHubClient
from prchecks.policies import (
    DEFAULT_POLICIES_DICT,
    CheckPolicies,
    default_policies,
    policies_from_dict,
)

logger = logging.getLogger(__name__)


def _error_response(tool_name: str, error: Exception) -> str:
    """Build a structured JSON error response for MCP tool failures."""
    logger.error("Tool %s failed: %s\n%s", tool_name, error, traceback.format_exc())
    return json.dumps(
        {
            "verdict": "ERROR",
            "stats": {"errors": 0, "warnings": 0, "messages": 0, "total": 0},
            "outcomes": [],
            "error": str(error),
        },
        indent=2,
    )


def _parse_policies(config: Optional[str]) -> CheckPolicies:
    if not config:
        return default_policies()
    return policies_from_dict(json.loads(config))


def parse_labels(labels: Optional[str]) -> list[str]:
    """Split a comma-separated label string, dropping blanks."""
    if not labels:
        return []
    return [label.strip() for label in labels.split(",") if label.strip()]


def check_diff_json(
    diff: str,
    labels: Optional[str] = None,
    body: Optional[str] = None,
    config: Optional[str] = None,
) -> str:
    """Run the checks over a unified diff; JSON report or JSON error."""
    try:
        policies = _parse_policies(config)
        snapshot = snapshot_from_diff(diff, labels=parse_labels(labels), body=body)
        return run_checks(snapshot, policies).to_json()
    except Exception as e:
        return _error_response("check_diff", e)


async def check_pull_request_json(
    repo: str,
    pr_number: int,
    config: Optional[str] = None,
    client: Optional[GitHubClient] = None,
) -> str:
    """Fetch a PR from GitHub (in a worker thread) and run the checks."""
    try:
        policies = _parse_policies(config)
        client = client or GitHubClient()
        snapshot = await asyncio.to_thread(client.fetch_snapshot, repo, pr_number)
        return run_checks(snapshot, policies).to_json()
    except Exception as e:
        return _error_response("check_pull_request", e)


def register_tools(mcp: FastMCP) -> None:
    """Register all check tools on the given FastMCP server instance."""

    @mcp.tool()
    def check_diff(
        diff: str,
        labels: Optional[str] = None,
        body: Optional[str] = None,
        config: Optional[str] = None,
    ) -> str:
        """Run the PR checks against a local unified diff.

        Insertion/deletion stats are counted from the diff itself.

        Args:
            diff: The unified diff output (e.g., from `git diff main...HEAD`)
            labels: Optional comma-separated PR labels (e.g., "bug,Tracks")
            body: Optional PR description text
            config: Optional JSON policy config, same format as prchecks.json
        """
        return check_diff_json(diff, labels=labels, body=body, config=config)

    @mcp.tool()
    async def check_pull_request(
        repo: str,
        pr_number: int,
        config: Optional[str] = None,
    ) -> str:
        """Fetch a GitHub pull request and run the PR checks against it.

        Needs GITHUB_TOKEN in the server environment.

        Args:
            repo: Repository full name (e.g., "owner/repo")
            pr_number: Pull request number
            config: Optional JSON policy config, same format as prchecks.json
        """
        return await check_pull_request_json(repo, pr_number, config=config)

    @mcp.tool()
    def get_default_config() -> str:
        """Get the default policy config as JSON, a starting point for prchecks.json."""
        return json.dumps(DEFAULT_POLICIES_DICT, indent=2)

#!/usr/bin/env python3
"""Run the PR checks from CI or locally.

Usage:
  python run_checks.py --repo owner/name --pr 123 --post-comment --fail-on-errors
  git diff main...HEAD | python run_checks.py --diff - --labels "bug,ui" --body "..."

Exit status: 0 when the checks ran (and, with --fail-on-errors, found no
errors), 1 when errors were found with --fail-on-errors, 2 for bad input or
configuration.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Optional

from github import GithubException

from prchecks.analyzer import run_checks
from prchecks.diff_parser import snapshot_from_diff
from prchecks.github_client import GitHubClient
from prchecks.matchers import ConfigError
from prchecks.policies import load_policies

logger = logging.getLogger("prchecks.cli")


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Run pull request checks.")
    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument("--pr", type=int, help="GitHub pull request number (needs --repo)")
    source.add_argument("--diff", help="Unified diff file, or - for stdin")
    parser.add_argument("--repo", help="Repository full name, e.g. owner/name")
    parser.add_argument("--labels", default="", help="Comma-separated labels (with --diff)")
    parser.add_argument("--body", default="", help="PR description (with --diff)")
    parser.add_argument("--config", help="Policy config JSON (default: prchecks.json)")
    parser.add_argument("--format", choices=("markdown", "json"), default="markdown")
    parser.add_argument("--post-comment", action="store_true", help="Post the report on the PR")
    parser.add_argument("--fail-on-errors", action="store_true")
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def _read_diff(source: str) -> str:
    if source == "-":
        return sys.stdin.read()
    return Path(source).read_text(encoding="utf-8")


def main(argv: Optional[list[str]] = None) -> int:
    args = _build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stderr,
    )
    logging.getLogger("github").setLevel(logging.WARNING)
    logging.getLogger("urllib3").setLevel(logging.WARNING)

    if args.pr is not None and not args.repo:
        print("Error: --pr requires --repo", file=sys.stderr)
        return 2
    if args.post_comment and args.pr is None:
        print("Error: --post-comment requires --pr", file=sys.stderr)
        return 2

    try:
        policies = load_policies(args.config)
        client: Optional[GitHubClient] = None
        if args.pr is not None:
            client = GitHubClient()
            snapshot = client.fetch_snapshot(args.repo, args.pr)
        else:
            labels = [label.strip() for label in args.labels.split(",") if label.strip()]
            snapshot = snapshot_from_diff(_read_diff(args.diff), labels=labels, body=args.body)
    except (ConfigError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    except GithubException as e:
        print(f"Error: GitHub request failed: {e}", file=sys.stderr)
        return 2

    reporter = run_checks(snapshot, policies)
    logger.info("Verdict: %s", reporter.verdict)
    rendered = reporter.to_json() if args.format == "json" else reporter.to_markdown()
    print(rendered)

    if args.post_comment and client is not None and reporter.outcomes:
        client.post_comment(args.repo, args.pr, reporter.to_markdown())

    if args.fail_on_errors and reporter.has_errors:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

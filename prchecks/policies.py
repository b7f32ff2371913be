"""Typed check policies, loaded from a JSON config file."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from prchecks.config import (
    CONFIG_PATH_ENV,
    DEFAULT_CLASSES_EXCEPTIONS,
    DEFAULT_CONFIG_PATH,
    DEFAULT_ISSUE_LABEL_FORMATS,
    DEFAULT_MAX_DIFF_SIZE,
    DEFAULT_MIN_PR_BODY_LENGTH,
    DEFAULT_SUBCLASSES_EXCEPTIONS,
    DEFAULT_TEST_FILE_PATTERNS,
    DEFAULT_UNIT_TESTS_BYPASS_PR_LABEL,
    ISSUE_LABELS_ERROR_MESSAGE,
    ISSUE_LABELS_SUCCESS_MESSAGE,
    SIZE_METRICS,
)
from prchecks.matchers import ConfigError, compile_patterns, selector_for_paths
from prchecks.models import Severity

logger = logging.getLogger(__name__)


def _regexes(*defaults: str) -> Any:
    """Field holding compiled patterns; strings from JSON are compiled on load."""
    return field(
        default=compile_patterns(defaults) if defaults else (),
        metadata={"regex": True},
    )


# ── Policies ─────────────────────────────────────────────────────────────────


@dataclass(frozen=True)
class SizePolicy:
    max_size: int = DEFAULT_MAX_DIFF_SIZE
    metric: str = "total"
    include: tuple[re.Pattern, ...] = _regexes()
    exclude: tuple[re.Pattern, ...] = _regexes()
    message: Optional[str] = None
    severity: Severity = Severity.WARNING

    @property
    def file_selector(self):
        """Path based selector, or None to use the PR aggregate."""
        if not self.include and not self.exclude:
            return None
        return selector_for_paths(self.include, self.exclude)


@dataclass(frozen=True)
class BodyPolicy:
    min_length: int = DEFAULT_MIN_PR_BODY_LENGTH
    message: Optional[str] = None
    severity: Severity = Severity.WARNING


@dataclass(frozen=True)
class LabelsPolicy:
    do_not_merge_labels: tuple[str, ...] = ()
    required_labels: tuple[re.Pattern, ...] = _regexes()
    required_labels_error: Optional[str] = None
    recommended_labels: tuple[re.Pattern, ...] = _regexes()
    recommended_labels_warning: Optional[str] = None


@dataclass(frozen=True)
class IssueLabelsPolicy:
    label_formats: tuple[re.Pattern, ...] = _regexes(*DEFAULT_ISSUE_LABEL_FORMATS)
    error_message: str = ISSUE_LABELS_ERROR_MESSAGE
    success_message: str = ISSUE_LABELS_SUCCESS_MESSAGE


@dataclass(frozen=True)
class MissingTestsPolicy:
    classes_exceptions: tuple[re.Pattern, ...] = _regexes(*DEFAULT_CLASSES_EXCEPTIONS)
    subclasses_exceptions: tuple[re.Pattern, ...] = _regexes(
        *DEFAULT_SUBCLASSES_EXCEPTIONS
    )
    bypass_label: Optional[str] = DEFAULT_UNIT_TESTS_BYPASS_PR_LABEL
    test_file_patterns: tuple[re.Pattern, ...] = _regexes(*DEFAULT_TEST_FILE_PATTERNS)


@dataclass(frozen=True)
class TracksPolicy:
    tracks_files: tuple[str, ...] = ()
    tracks_usage_matchers: tuple[re.Pattern, ...] = _regexes()
    tracks_label: Optional[str] = None


@dataclass(frozen=True)
class CheckPolicies:
    """Which checkers run, and with what settings. None disables a checker."""

    diff_size: tuple[SizePolicy, ...] = ()
    pr_body: Optional[BodyPolicy] = None
    labels: Optional[LabelsPolicy] = None
    issue_labels: Optional[IssueLabelsPolicy] = None
    missing_tests: Optional[MissingTestsPolicy] = None
    tracks: Optional[TracksPolicy] = None


# Mirrors the checks a typical Dangerfile enables
DEFAULT_POLICIES_DICT: dict[str, Any] = {
    "diff_size": [{"max_size": DEFAULT_MAX_DIFF_SIZE}],
    "pr_body": {"min_length": DEFAULT_MIN_PR_BODY_LENGTH},
    "labels": {"do_not_merge_labels": ["Do Not Merge"]},
    "missing_tests": {},
}

_SECTIONS = {
    "pr_body": BodyPolicy,
    "labels": LabelsPolicy,
    "issue_labels": IssueLabelsPolicy,
    "missing_tests": MissingTestsPolicy,
    "tracks": TracksPolicy,
}


# ── Loading ──────────────────────────────────────────────────────────────────


def _string_list(section: str, key: str, value: Any) -> list[str]:
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{section}.{key} must be a list of strings")
    return value


def _build(section: str, cls: type, data: Any) -> Any:
    """Build one policy dataclass from its JSON object, validating every key."""
    if not isinstance(data, dict):
        raise ConfigError(f"Section '{section}' must be an object")

    known = {f.name: f for f in fields(cls)}
    unknown = sorted(set(data) - set(known))
    if unknown:
        raise ConfigError(f"Unknown key(s) in '{section}': {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    for key, value in data.items():
        f = known[key]
        if f.metadata.get("regex"):
            kwargs[key] = compile_patterns(_string_list(section, key, value))
        elif key in ("do_not_merge_labels", "tracks_files"):
            kwargs[key] = tuple(_string_list(section, key, value))
        elif key == "severity":
            try:
                kwargs[key] = Severity(value)
            except ValueError as e:
                raise ConfigError(f"{section}.severity: {e}") from e
        elif key in ("max_size", "min_length"):
            if not isinstance(value, int) or isinstance(value, bool) or value < 0:
                raise ConfigError(f"{section}.{key} must be a non-negative integer")
            kwargs[key] = value
        elif key == "metric":
            if value not in SIZE_METRICS:
                raise ConfigError(
                    f"{section}.metric must be one of {', '.join(SIZE_METRICS)}"
                )
            kwargs[key] = value
        else:
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"{section}.{key} must be a string")
            kwargs[key] = value
    return cls(**kwargs)


def policies_from_dict(data: Any) -> CheckPolicies:
    """Build CheckPolicies from a parsed JSON document."""
    if not isinstance(data, dict):
        raise ConfigError("Config root must be an object")

    unknown = sorted(set(data) - set(_SECTIONS) - {"diff_size"})
    if unknown:
        raise ConfigError(f"Unknown config section(s): {', '.join(unknown)}")

    kwargs: dict[str, Any] = {}
    size_data = data.get("diff_size", [])
    if isinstance(size_data, dict):
        size_data = [size_data]
    if not isinstance(size_data, list):
        raise ConfigError("Section 'diff_size' must be an object or a list of objects")
    kwargs["diff_size"] = tuple(_build("diff_size", SizePolicy, s) for s in size_data)

    for section, cls in _SECTIONS.items():
        if data.get(section) is not None:
            kwargs[section] = _build(section, cls, data[section])
    return CheckPolicies(**kwargs)


def default_policies() -> CheckPolicies:
    return policies_from_dict(DEFAULT_POLICIES_DICT)


def load_policies(path: Optional[str] = None) -> CheckPolicies:
    """Load policies from `path`, $PRCHECKS_CONFIG, or ./prchecks.json.

    Falls back to the defaults when no path is given and no file exists.
    """
    explicit = path or os.getenv(CONFIG_PATH_ENV)
    config_path = Path(explicit or DEFAULT_CONFIG_PATH)
    if not config_path.exists():
        if explicit:
            raise ConfigError(f"Config file not found: {config_path}")
        logger.info("No %s found, using default policies", config_path)
        return default_policies()

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ConfigError(f"{config_path} is not valid JSON: {e}") from e
    logger.info("Loaded policies from %s", config_path)
    return policies_from_dict(data)

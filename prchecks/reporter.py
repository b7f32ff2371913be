"""Reporter: ordered sink for check outcomes, with JSON and Markdown rendering."""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone

from prchecks.config import REPORT_MARKER
from prchecks.models import CheckOutcome, Severity

logger = logging.getLogger(__name__)

_SECTION_TITLES = {
    Severity.ERROR: "Errors",
    Severity.WARNING: "Warnings",
    Severity.INFO: "Messages",
}
_SECTION_ICONS = {
    Severity.ERROR: "🚫",
    Severity.WARNING: "⚠️",
    Severity.INFO: "📖",
}


@dataclass
class Reporter:
    """Accumulates outcomes in call order. Duplicates are kept."""

    outcomes: list[CheckOutcome] = field(default_factory=list)
    created_at: str = field(
        default_factory=lambda: datetime.now(timezone.utc).isoformat()
    )

    def report(self, message: str, severity: Severity) -> None:
        severity = Severity(severity)
        logger.debug("Reported %s: %s", severity, message)
        self.outcomes.append(CheckOutcome(message=message, severity=severity))

    def _messages(self, severity: Severity) -> list[str]:
        return [o.message for o in self.outcomes if o.severity == severity]

    @property
    def errors(self) -> list[str]:
        return self._messages(Severity.ERROR)

    @property
    def warnings(self) -> list[str]:
        return self._messages(Severity.WARNING)

    @property
    def messages(self) -> list[str]:
        return self._messages(Severity.INFO)

    @property
    def has_errors(self) -> bool:
        return any(o.severity == Severity.ERROR for o in self.outcomes)

    @property
    def verdict(self) -> str:
        if self.errors:
            return "FAILED: errors must be addressed before merging"
        if self.warnings:
            return "PASSED WITH WARNINGS"
        return "PASSED"

    @property
    def status_report(self) -> dict[str, list[str]]:
        return {
            "errors": self.errors,
            "warnings": self.warnings,
            "messages": self.messages,
        }

    def to_dict(self) -> dict:
        return {
            "verdict": self.verdict,
            "stats": {
                "errors": len(self.errors),
                "warnings": len(self.warnings),
                "messages": len(self.messages),
                "total": len(self.outcomes),
            },
            "outcomes": [o.to_dict() for o in self.outcomes],
            "created_at": self.created_at,
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent)

    def to_markdown(self) -> str:
        """Render the outcomes as a PR comment, grouped by severity."""
        parts = [f"**{self.verdict}**"]
        for severity in (Severity.ERROR, Severity.WARNING, Severity.INFO):
            entries = self._messages(severity)
            if not entries:
                continue
            parts.append(f"\n### {_SECTION_ICONS[severity]} {_SECTION_TITLES[severity]}\n")
            parts.extend(f"- {entry.strip()}" for entry in entries)
        parts.append(f"\n{REPORT_MARKER}")
        return "\n".join(parts)

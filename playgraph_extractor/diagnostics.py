"""
Diagnostics collected while processing documents.

Warnings and progress messages are recorded as events on a Reporter
instance passed through the pipeline, so callers (and tests) can inspect
what happened to each day after the run.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional


class Severity(Enum):
    """Severity levels for diagnostic events."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class EventType(Enum):
    """Kinds of events the pipeline reports."""
    PROGRESS = "progress"
    MALFORMED_PAYLOAD = "malformed_payload"
    NO_TARGET_GRAPH = "no_target_graph"
    MISSING_DATE = "missing_date"
    DAY_FAILED = "day_failed"
    SPECIAL_RULE = "special_rule"
    CENSORED = "censored"
    FETCH_FAILED = "fetch_failed"
    WRITTEN = "written"


@dataclass
class DiagnosticEvent:
    """A single reported event."""
    event_type: EventType
    severity: Severity
    message: str
    day: Optional[str] = None


@dataclass
class Reporter:
    """Collects diagnostic events and echoes them to the console.

    Args:
        quiet: If True, events are only recorded, not printed
    """
    quiet: bool = False
    events: List[DiagnosticEvent] = field(default_factory=list)

    def report(self, event_type: EventType, severity: Severity,
               message: str, day: Optional[str] = None) -> DiagnosticEvent:
        event = DiagnosticEvent(event_type, severity, message, day)
        self.events.append(event)
        if not self.quiet:
            prefix = "" if severity == Severity.INFO else f"[{severity.value.upper()}] "
            print(f"{prefix}{message}")
        return event

    def info(self, message: str, event_type: EventType = EventType.PROGRESS,
             day: Optional[str] = None) -> DiagnosticEvent:
        return self.report(event_type, Severity.INFO, message, day)

    def warning(self, event_type: EventType, message: str,
                day: Optional[str] = None) -> DiagnosticEvent:
        return self.report(event_type, Severity.WARNING, message, day)

    def error(self, event_type: EventType, message: str,
              day: Optional[str] = None) -> DiagnosticEvent:
        return self.report(event_type, Severity.ERROR, message, day)

    def by_type(self, event_type: EventType) -> List[DiagnosticEvent]:
        return [e for e in self.events if e.event_type == event_type]

    @property
    def warnings(self) -> List[DiagnosticEvent]:
        return [e for e in self.events if e.severity == Severity.WARNING]

    @property
    def errors(self) -> List[DiagnosticEvent]:
        return [e for e in self.events if e.severity == Severity.ERROR]


def format_report(reporter: Reporter, use_colors: bool = True) -> str:
    """Format the warnings and errors of a run for display."""
    if use_colors:
        RED = '\033[0;31m'
        GREEN = '\033[0;32m'
        YELLOW = '\033[1;33m'
        BOLD = '\033[1m'
        NC = '\033[0m'
    else:
        RED = GREEN = YELLOW = BOLD = NC = ''

    lines = [f"\n{BOLD}DIAGNOSTICS{NC}", "=" * 50]

    problems = [e for e in reporter.events if e.severity != Severity.INFO]
    if not problems:
        lines.append(f"{GREEN}No warnings or errors{NC}")
        return "\n".join(lines)

    for event in problems:
        color = RED if event.severity == Severity.ERROR else YELLOW
        icon = "✗" if event.severity == Severity.ERROR else "⚠"
        where = f" {event.day}" if event.day else ""
        lines.append(
            f"  {color}{icon} [{event.severity.value.upper()}]{NC}{where}: {event.message}"
        )

    lines.append("")
    lines.append(
        f"{BOLD}Total:{NC} {len(reporter.warnings)} warnings, {len(reporter.errors)} errors"
    )
    return "\n".join(lines)

"""Build logger for protranspile

Prints progress to stdout and problems to stderr, and keeps every event as a
record so the orchestrator and tests can summarize a run afterwards.
"""

import sys
from dataclasses import dataclass
from enum import Enum
from typing import Dict, List, Optional, TextIO


class EventKind(Enum):
    """Kinds of build events"""
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    DETAIL = "detail"


@dataclass
class BuildEvent:
    """Record of a single logged event"""
    kind: EventKind
    message: str
    subject: Optional[str] = None

    def format(self) -> str:
        if self.kind == EventKind.ERROR:
            prefix = "Error: "
        elif self.kind == EventKind.WARNING:
            prefix = "Warning: "
        else:
            prefix = ""
        return f"{prefix}{self.message}"


class BuildLogger:
    """Logs generator progress

    Usage:
        logger = BuildLogger(verbose=True)
        logger.info("Exporting WS TypeScript class names →", "ccxt.d.ts")
        logger.error("Cannot transform binance.ts", subject="binance")
        print(logger.get_summary())
    """

    def __init__(self, verbose: bool = False, quiet: bool = False,
                 stdout: Optional[TextIO] = None, stderr: Optional[TextIO] = None) -> None:
        """Initialize build logger

        Args:
            verbose: If True, print per-file detail messages
            quiet: If True, record events without printing them
            stdout: Stream for progress output (default: sys.stdout)
            stderr: Stream for warnings and errors (default: sys.stderr)
        """
        self.verbose = verbose
        self.quiet = quiet
        self._stdout = stdout
        self._stderr = stderr
        self.events: List[BuildEvent] = []

    def _emit(self, event: BuildEvent) -> None:
        self.events.append(event)
        if self.quiet:
            return
        if event.kind == EventKind.DETAIL and not self.verbose:
            return
        if event.kind in (EventKind.WARNING, EventKind.ERROR):
            stream = self._stderr or sys.stderr
        else:
            stream = self._stdout or sys.stdout
        print(event.format(), file=stream)

    def info(self, message: str, subject: Optional[str] = None) -> None:
        self._emit(BuildEvent(EventKind.INFO, message, subject))

    def success(self, message: str, subject: Optional[str] = None) -> None:
        self._emit(BuildEvent(EventKind.SUCCESS, message, subject))

    def warning(self, message: str, subject: Optional[str] = None) -> None:
        self._emit(BuildEvent(EventKind.WARNING, message, subject))

    def error(self, message: str, subject: Optional[str] = None) -> None:
        self._emit(BuildEvent(EventKind.ERROR, message, subject))

    def detail(self, message: str, subject: Optional[str] = None) -> None:
        """Per-file message, printed only when verbose"""
        self._emit(BuildEvent(EventKind.DETAIL, message, subject))

    def messages(self, kind: Optional[EventKind] = None) -> List[str]:
        return [e.message for e in self.events if kind is None or e.kind == kind]

    def get_summary(self) -> Dict[str, int]:
        """Count of recorded events per kind"""
        summary: Dict[str, int] = {kind.value: 0 for kind in EventKind}
        for event in self.events:
            summary[event.kind.value] += 1
        return summary

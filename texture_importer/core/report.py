from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from .models import AssetRecord, ImportOutcome

DEFAULT_MAX_REPORT_LINES = 20


@dataclass
class ErrorAggregator:
    """Collects per-asset failure lines and renders one bounded report."""

    max_lines: int = DEFAULT_MAX_REPORT_LINES
    lines: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        if self.max_lines < 1:
            raise ValueError("max_lines must be at least 1")

    @property
    def has_errors(self) -> bool:
        return bool(self.lines)

    def add(self, record: AssetRecord, message: str) -> None:
        self.lines.append(f"[{record.display_name}]: {message}")

    def add_outcome(self, outcome: ImportOutcome) -> None:
        if outcome.message is not None:
            self.add(outcome.task.record, outcome.message)

    def extend(self, outcomes: Iterable[ImportOutcome]) -> None:
        for outcome in outcomes:
            self.add_outcome(outcome)

    def render(self) -> Optional[str]:
        """Return the first ``max_lines`` report lines, or None when nothing failed.

        A single failure message may span several lines (exception text), so
        the cap applies to physical lines rather than to entries.
        """
        if not self.lines:
            return None
        physical = "\n".join(self.lines).splitlines()
        return "\n".join(physical[: self.max_lines])

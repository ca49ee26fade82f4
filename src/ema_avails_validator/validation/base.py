"""Base classes for the validation framework.

This module provides the core data structures shared by every validator:
severity levels, the error and notification entries that describe a single
finding, and the per-sheet ErrorLog that validators report findings through.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ema_avails_validator.validation.summary import SheetErrorSummary

logger = logging.getLogger(__name__)


class Severity(str, Enum):
    """Severity levels for validation errors, most severe first."""

    CRITICAL = "critical"  # Structural problem, the row can't be interpreted
    ERROR = "error"  # Value does not conform to the EMA format
    WARNING = "warning"  # Business-rule concern

    @property
    def rank(self) -> int:
        """Position in the severity ordering (0 is the most severe)."""
        return list(Severity).index(self)

    def at_least(self, threshold: Severity) -> bool:
        """Return True if this level is as severe as ``threshold`` or more."""
        return self.rank <= threshold.rank


class LocatorKind(str, Enum):
    """Granularity of the locations an entry is reported at."""

    CELL = "cell"
    ROW = "row"


@dataclass(frozen=True)
class Location:
    """A place in a sheet where a finding occurred.

    Attributes:
        row: Row number in the sheet (1-indexed, header is row 1)
        column: Column name for cell findings, None for row findings
        value: The offending value seen at this location
    """

    row: int
    column: str | None = None
    value: str | None = None

    def __str__(self) -> str:
        if self.column is None:
            return f"row {self.row}"
        return f"{self.column} row {self.row}"


@dataclass(frozen=True, eq=False)
class ErrorEntry:
    """A single rule violation plus every location it recurred at.

    The identity fields are frozen; only ``locations`` grows as duplicate
    findings are assimilated. Two entries describe the same finding when their
    ``key`` values are equal, regardless of where they were found.

    Attributes:
        message: Human-readable description of the violation
        severity: How serious the violation is
        expected: Description of what a valid value looks like
        value: The first offending value seen
        kind: Whether the entry locates cells or whole rows
        locations: Every location this violation was found at, in report order
    """

    message: str
    severity: Severity
    expected: str
    value: str | None = None
    kind: LocatorKind = LocatorKind.CELL
    locations: list[Location] = field(default_factory=list)

    @classmethod
    def for_cell(
        cls,
        row: int,
        column: str,
        message: str,
        severity: Severity,
        value: str | None,
        expected: str,
    ) -> ErrorEntry:
        """Create an entry for a violation in a single cell."""
        return cls(
            message=message,
            severity=severity,
            expected=expected,
            value=value,
            kind=LocatorKind.CELL,
            locations=[Location(row=row, column=column, value=value)],
        )

    @classmethod
    def for_row(
        cls,
        row: int,
        message: str,
        severity: Severity,
        value: str | None,
        expected: str,
    ) -> ErrorEntry:
        """Create an entry for a violation of a cross-column rule."""
        return cls(
            message=message,
            severity=severity,
            expected=expected,
            value=value,
            kind=LocatorKind.ROW,
            locations=[Location(row=row, value=value)],
        )

    @property
    def key(self) -> tuple[LocatorKind, Severity, str, str]:
        """Identity of the finding, independent of where it occurred."""
        return (self.kind, self.severity, self.message, self.expected)

    @property
    def occurrences(self) -> int:
        """Number of locations recorded for this entry."""
        return len(self.locations)

    def assimilate(self, other: ErrorEntry) -> None:
        """Absorb the locations of a duplicate finding.

        Raises:
            ValueError: If ``other`` describes a different finding
        """
        if other.key != self.key:
            raise ValueError(f"Cannot assimilate {other.message!r} into {self.message!r}")
        self.locations.extend(other.locations)

    def to_log_string(self, column_label: dict[str, str] | None = None) -> str:
        """Format the entry for a report.

        Args:
            column_label: Optional mapping of column names to display labels

        Returns:
            Multi-line description of the entry and its locations
        """
        lines = [f"[{self.severity.value.upper()}] {self.message}"]
        lines.append(f"    Expected: {self.expected}")
        if self.value is not None:
            lines.append(f"    Value:    {self.value!r}")
        lines.extend(_format_locations(self.locations, column_label or {}))
        return "\n".join(lines)

    def __str__(self) -> str:
        sev = self.severity.value.upper()
        return f"[{sev}] {self.message} ({self.occurrences}x)"


@dataclass(frozen=True, eq=False)
class NotificationEntry:
    """An informational finding that is not a conformance failure.

    Notifications are tracked in their own ledger and never count toward
    severity totals.
    """

    message: str
    expected: str
    value: str | None = None
    kind: LocatorKind = LocatorKind.ROW
    locations: list[Location] = field(default_factory=list)

    @classmethod
    def for_cell(
        cls,
        row: int,
        column: str,
        message: str,
        value: str | None,
        expected: str,
    ) -> NotificationEntry:
        """Create a notification about a single cell."""
        return cls(
            message=message,
            expected=expected,
            value=value,
            kind=LocatorKind.CELL,
            locations=[Location(row=row, column=column, value=value)],
        )

    @classmethod
    def for_row(cls, row: int, message: str, value: str | None, expected: str) -> NotificationEntry:
        """Create a notification about a whole row."""
        return cls(
            message=message,
            expected=expected,
            value=value,
            kind=LocatorKind.ROW,
            locations=[Location(row=row, value=value)],
        )

    @property
    def key(self) -> tuple[LocatorKind, str, str]:
        """Identity of the notification, independent of where it occurred."""
        return (self.kind, self.message, self.expected)

    @property
    def occurrences(self) -> int:
        return len(self.locations)

    def assimilate(self, other: NotificationEntry) -> None:
        """Absorb the locations of a duplicate notification.

        Raises:
            ValueError: If ``other`` describes a different notification
        """
        if other.key != self.key:
            raise ValueError(f"Cannot assimilate {other.message!r} into {self.message!r}")
        self.locations.extend(other.locations)

    def to_log_string(self, column_label: dict[str, str] | None = None) -> str:
        lines = [f"[NOTICE] {self.message}", f"    {self.expected}"]
        lines.extend(_format_locations(self.locations, column_label or {}))
        return "\n".join(lines)


def _format_locations(locations: list[Location], column_label: dict[str, str]) -> list[str]:
    """Group locations by column, listing the rows for each."""
    rows_by_column: dict[str | None, list[int]] = {}
    for location in locations:
        rows_by_column.setdefault(location.column, []).append(location.row)

    lines = []
    for column, rows in rows_by_column.items():
        rows_str = ", ".join(str(r) for r in rows)
        if column is None:
            lines.append(f"    Rows:     {rows_str}")
        else:
            label = column_label.get(column)
            name = f"{column} ({label})" if label and label != column else column
            lines.append(f"    Column:   {name}, rows {rows_str}")
    return lines


class ErrorLog:
    """Sink that validators report findings through.

    One ErrorLog is created per sheet and passed explicitly to every column
    and row validator call. It routes each finding to the summary of the
    sheet being validated.
    """

    def __init__(self, summary: SheetErrorSummary):
        """Bind the log to the summary of the sheet being validated.

        Args:
            summary: Summary that receives every finding reported here
        """
        self.summary = summary

    def append_error(self, entry: ErrorEntry) -> None:
        """Report a rule violation."""
        logger.debug(f"{self.summary.sheet_name}: {entry.message} at {entry.locations}")
        self.summary.append_error(entry)

    def append_notification(self, entry: NotificationEntry) -> None:
        """Report an informational finding."""
        logger.debug(f"{self.summary.sheet_name}: {entry.message} at {entry.locations}")
        self.summary.append_notification(entry)

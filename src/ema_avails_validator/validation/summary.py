"""Per-sheet and per-workbook aggregation of validation findings.

A SheetErrorSummary is the ledger for one sheet. Repeated findings collapse
into a single entry that accumulates every location it occurred at, while the
occurrence and severity counters still count every report.
"""

from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from ema_avails_validator.validation.base import ErrorEntry, NotificationEntry, Severity

if TYPE_CHECKING:
    from ema_avails_validator.validation.specs import Specification, SpecVersion


def _zero_counts() -> dict[Severity, int]:
    return {level: 0 for level in Severity}


class SheetErrorSummary:
    """All findings for one sheet, plus the context they were found in.

    Attributes:
        sheet_name: Name of the sheet as it appears in the workbook
        sheet_index: 0-based position of the sheet in the workbook
        specification: Specification the sheet was validated against
        rows_checked: Number of data rows validated
    """

    def __init__(self, sheet_name: str, sheet_index: int, specification: Specification):
        self.sheet_name = sheet_name
        self.sheet_index = sheet_index
        self.specification = specification
        self.rows_checked = 0

        self._errors: dict[tuple, ErrorEntry] = {}
        self._error_occurrences: dict[tuple, int] = {}
        self._notifications: dict[tuple, NotificationEntry] = {}
        self._notification_occurrences: dict[tuple, int] = {}
        self._severity_counts = _zero_counts()

    # Recording ---------------------------------------------------------------

    def append_error(self, entry: ErrorEntry) -> None:
        """Record a violation.

        A violation equal to one already recorded is merged into the existing
        entry. Either way, the occurrence count for the entry and the running
        total for its severity go up by one.

        The ledger stores its own copy, so the caller's entry is never modified.
        """
        key = entry.key
        existing = self._errors.get(key)
        if existing is None:
            self._errors[key] = replace(entry, locations=list(entry.locations))
            self._error_occurrences[key] = 1
        else:
            existing.assimilate(entry)
            self._error_occurrences[key] += 1
        self._severity_counts[entry.severity] += 1

    def append_notification(self, entry: NotificationEntry) -> None:
        """Record a notification, merging it with an equal one if present."""
        key = entry.key
        existing = self._notifications.get(key)
        if existing is None:
            self._notifications[key] = replace(entry, locations=list(entry.locations))
            self._notification_occurrences[key] = 1
        else:
            existing.assimilate(entry)
            self._notification_occurrences[key] += 1

    def clear_error_sheet_summary(self) -> None:
        """Reset the error ledger and severity counts to their initial state.

        Notifications are kept.
        """
        self._errors.clear()
        self._error_occurrences.clear()
        self._severity_counts = _zero_counts()

    # Counts ------------------------------------------------------------------

    @property
    def error_count(self) -> int:
        """Total number of violations reported, counting every occurrence."""
        return sum(self._error_occurrences.values())

    @property
    def error_columns_count(self) -> int:
        """Number of distinct violations."""
        return len(self._errors)

    @property
    def notification_count(self) -> int:
        """Total number of notifications reported, counting every occurrence."""
        return sum(self._notification_occurrences.values())

    @property
    def severity_counts(self) -> dict[Severity, int]:
        """Severity level -> number of violations reported at that level."""
        return dict(self._severity_counts)

    # Context -----------------------------------------------------------------

    @property
    def version(self) -> SpecVersion:
        """Spec version the sheet was validated against."""
        return self.specification.version

    @property
    def excel_sheet_index(self) -> int:
        """1-based sheet index, as shown to spreadsheet users."""
        return self.sheet_index + 1

    @property
    def error_log(self) -> dict[ErrorEntry, int]:
        """Distinct violations -> occurrence count, in first-seen order."""
        return {entry: self._error_occurrences[key] for key, entry in self._errors.items()}

    @property
    def notifications_log(self) -> dict[NotificationEntry, int]:
        """Distinct notifications -> occurrence count, in first-seen order."""
        return {entry: self._notification_occurrences[key] for key, entry in self._notifications.items()}

    def get_errors_by_severity(self, severity: Severity) -> list[ErrorEntry]:
        """Get the distinct violations at one severity level."""
        return [entry for entry in self._errors.values() if entry.severity == severity]

    def has_errors_at(self, threshold: Severity) -> bool:
        """Whether any violation at ``threshold`` or more severe was reported."""
        return any(count and level.at_least(threshold) for level, count in self._severity_counts.items())

    # Output ------------------------------------------------------------------

    def format_sheet_error_summary(self, include_notifications: bool = False) -> list[str]:
        """Format every distinct entry, most severe first.

        Column names are resolved to their descriptions through the
        Specification the sheet was validated against.
        """
        labels = self.specification.column_labels
        entries = sorted(self._errors.values(), key=lambda e: e.severity.rank)
        lines = [
            f"{entry.to_log_string(labels)}\n    Occurrences: {self._error_occurrences[entry.key]}"
            for entry in entries
        ]
        if include_notifications:
            lines.extend(entry.to_log_string(labels) for entry in self._notifications.values())
        return lines

    def print_sheet_error_summary(self, include_notifications: bool = False) -> None:
        """Print every distinct entry in this summary."""
        for line in self.format_sheet_error_summary(include_notifications):
            print(line)

    def sheet_print_string(self) -> str:
        """Format the sheet's name, index, spec version and error count."""
        return (
            f"Sheet  name: {self.sheet_name}\n"
            f"Sheet index: {self.excel_sheet_index}\n"
            f"EMA Version: {self.version.value}\n"
            f"Error count: {self.error_count}\n"
        )

    def __repr__(self) -> str:
        return (
            f"SheetErrorSummary({self.sheet_name!r}, index={self.sheet_index}, "
            f"version={self.version.value!r}, errors={self.error_count})"
        )


@dataclass
class WorkbookSummary:
    """Validation results for every sheet of one workbook.

    Attributes:
        source: Name of the workbook file
        sheets: One summary per validated sheet, in workbook order
    """

    source: str
    sheets: list[SheetErrorSummary] = field(default_factory=list)

    @property
    def severity_counts(self) -> dict[Severity, int]:
        """Severity level -> total violations across all sheets."""
        totals = _zero_counts()
        for sheet in self.sheets:
            for level, count in sheet.severity_counts.items():
                totals[level] += count
        return totals

    @property
    def error_count(self) -> int:
        return sum(sheet.error_count for sheet in self.sheets)

    @property
    def notification_count(self) -> int:
        return sum(sheet.notification_count for sheet in self.sheets)

    @property
    def rows_checked(self) -> int:
        return sum(sheet.rows_checked for sheet in self.sheets)

    def has_errors_at(self, threshold: Severity) -> bool:
        """Whether any sheet has a violation at ``threshold`` or more severe."""
        return any(sheet.has_errors_at(threshold) for sheet in self.sheets)

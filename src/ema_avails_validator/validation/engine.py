"""Validation engine for orchestrating workbook validation.

This module provides the main entry points for validating avails:
- validate_workbook(): Validate every sheet of a workbook
- validate_sheet(): Validate a single sheet against one Specification
- validate_row(): Validate a single row (for debugging/testing)
- resolve_headers(): Check a header row against a Specification
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path  # noqa: TC003 - Path is used at runtime

import pandas as pd

from ema_avails_validator.validation import messages
from ema_avails_validator.validation.base import (
    ErrorEntry,
    ErrorLog,
    NotificationEntry,
    Severity,
)
from ema_avails_validator.validation.specs import (
    Specification,
    SpecVersion,
    detect_version,
    get_specification,
)
from ema_avails_validator.validation.summary import SheetErrorSummary, WorkbookSummary
from ema_avails_validator.workbook import SheetData, Workbook  # noqa: TC001 - used at runtime

logger = logging.getLogger(__name__)

HEADER_ROW = 1


def resolve_headers(headers: list[str], specification: Specification, log: ErrorLog) -> list[str]:
    """Check a header row and return the columns that can be validated.

    Headers that aren't columns of the Specification are reported as CRITICAL, once
    per header cell. Required columns missing from the header are reported as
    CRITICAL; missing optional columns produce a notification.

    Args:
        headers: Header cells of the sheet, in order
        specification: Specification the sheet is validated against
        log: Error log of the sheet being validated

    Returns:
        Names of the Specification's columns present in the header, in header order
    """
    resolved: list[str] = []
    for header in headers:
        name = header.strip()
        if not name:
            continue
        if specification.column(name) is None:
            log.append_error(
                ErrorEntry.for_cell(
                    HEADER_ROW,
                    name,
                    messages.UNSUPPORTED_COLUMN,
                    Severity.CRITICAL,
                    name,
                    messages.UNSUPPORTED_COLUMN_EXPECTED,
                )
            )
        elif name not in resolved:
            resolved.append(name)

    for name, column in specification.columns.items():
        if name in resolved:
            continue
        if column.required:
            log.append_error(
                ErrorEntry.for_cell(
                    HEADER_ROW,
                    name,
                    messages.MISSING_REQUIRED_COLUMN,
                    Severity.CRITICAL,
                    None,
                    messages.MISSING_REQUIRED_COLUMN_EXPECTED,
                )
            )
        else:
            log.append_notification(
                NotificationEntry.for_cell(
                    HEADER_ROW,
                    name,
                    messages.MISSING_OPTIONAL_COLUMN,
                    None,
                    messages.MISSING_OPTIONAL_COLUMN_EXPECTED,
                )
            )

    return resolved


def validate_row(
    row: Mapping[str, str],
    row_number: int,
    specification: Specification,
    log: ErrorLog,
) -> None:
    """Validate a single row: every cell first, then the cross-column rules.

    Only columns present in ``row`` are checked. Row validators run in spec
    order and stop at the first one that signals the row is fully explained.

    Args:
        row: Dict mapping column names to values
        row_number: Row number (1-indexed, header is row 1)
        specification: Specification the sheet is validated against
        log: Error log of the sheet being validated
    """
    for name, value in row.items():
        column = specification.column(name)
        if column is not None:
            column.validate(value, row_number, log)

    for validator in specification.row_validators:
        if validator.validate(row, row_number, log):
            logger.debug(f"Row {row_number}: {validator.name} ended row checks")
            break


def validate_sheet(sheet: SheetData, specification: Specification) -> SheetErrorSummary:
    """Validate one sheet against a Specification.

    Args:
        sheet: Sheet read from the workbook
        specification: Specification selected for this sheet

    Returns:
        SheetErrorSummary with every finding for the sheet
    """
    summary = SheetErrorSummary(sheet.name, sheet.index, specification)
    log = ErrorLog(summary)

    columns = resolve_headers(sheet.headers, specification, log)

    for row_number, raw in enumerate(sheet.rows, start=HEADER_ROW + 1):
        if not any(value.strip() for value in raw.values()):
            continue
        # Columns missing from the header stay absent; row validators treat them as already reported
        row = {name: raw.get(name, "") for name in columns}
        validate_row(row, row_number, specification, log)
        summary.rows_checked += 1

    logger.info(
        f"Validated {sheet.name} ({specification.version}): {summary.rows_checked} rows, "
        f"{summary.error_count} errors, {summary.notification_count} notifications"
    )
    return summary


def select_specification(sheet: SheetData, version: SpecVersion | None = None) -> Specification:
    """Pick the Specification for a sheet.

    Args:
        sheet: Sheet to validate
        version: Explicit version; detected from the header row if None

    Returns:
        The Specification to validate the sheet against

    Raises:
        ValueError: If no version was given and none fits the header row
    """
    if version is not None:
        return get_specification(version)

    detected = detect_version(sheet.headers)
    if detected is None:
        raise ValueError(f"Could not detect the EMA spec version of sheet '{sheet.name}'")
    logger.info(f"Detected {detected} for sheet {sheet.name}")
    return get_specification(detected)


def validate_workbook(
    workbook: Workbook,
    version: SpecVersion | None = None,
    sheet_names: list[str] | None = None,
) -> WorkbookSummary:
    """Validate the sheets of a workbook, in workbook order.

    Args:
        workbook: Workbook read from the input file
        version: Spec version for every sheet; detected per sheet if None
        sheet_names: Only validate these sheets (all sheets if None)

    Returns:
        WorkbookSummary with one SheetErrorSummary per validated sheet
    """
    report = WorkbookSummary(source=workbook.source)

    for sheet in workbook.sheets:
        if sheet_names is not None and sheet.name not in sheet_names:
            continue
        if not sheet.headers:
            logger.warning(f"Sheet {sheet.name} is empty, skipping")
            continue
        specification = select_specification(sheet, version)
        report.sheets.append(validate_sheet(sheet, specification))

    return report


def print_validation_report(report: WorkbookSummary, verbose: bool = False) -> None:
    """Print human-readable validation report.

    Args:
        report: WorkbookSummary to print
        verbose: If True, include notifications
    """
    print("\nVALIDATION REPORT")
    print("=" * 60)
    print(f"Workbook:       {report.source}")
    print(f"Sheets checked: {len(report.sheets)}")
    print(f"Rows checked:   {report.rows_checked}")
    print(f"Errors found:   {report.error_count}")
    print()

    for sheet in report.sheets:
        print(sheet.sheet_print_string())
        for line in sheet.format_sheet_error_summary(include_notifications=verbose):
            print(line)
        print()

    print("Summary by severity:")
    for level, count in report.severity_counts.items():
        print(f"  {level.value}: {count}")
    if verbose:
        print(f"  notifications: {report.notification_count}")


def report_to_dataframe(report: WorkbookSummary) -> pd.DataFrame:
    """Flatten a report into one row per distinct finding.

    Notifications are included with a severity of "notification".
    """
    records = []
    for sheet in report.sheets:
        for entry, count in sheet.error_log.items():
            records.append(_entry_record(sheet, entry, entry.severity.value, count))
        for notice, count in sheet.notifications_log.items():
            records.append(_entry_record(sheet, notice, "notification", count))

    columns = [
        "sheet",
        "sheet_index",
        "version",
        "severity",
        "message",
        "expected",
        "value",
        "occurrences",
        "locations",
    ]
    return pd.DataFrame.from_records(records, columns=columns)


def _entry_record(
    sheet: SheetErrorSummary,
    entry: ErrorEntry | NotificationEntry,
    severity: str,
    count: int,
) -> dict[str, object]:
    return {
        "sheet": sheet.sheet_name,
        "sheet_index": sheet.excel_sheet_index,
        "version": sheet.version.value,
        "severity": severity,
        "message": entry.message,
        "expected": entry.expected,
        "value": entry.value,
        "occurrences": count,
        "locations": "; ".join(str(location) for location in entry.locations),
    }


def export_validation_report(report: WorkbookSummary, path: Path) -> None:
    """Export validation report to a JSON file, or a TSV file if the suffix is .tsv.

    Args:
        report: WorkbookSummary to export
        path: Output file path
    """
    path.parent.mkdir(parents=True, exist_ok=True)

    if path.suffix.lower() == ".tsv":
        report_to_dataframe(report).to_csv(path, sep="\t", index=False)
        logger.info(f"Exported validation report to {path}")
        return

    data = {
        "source": report.source,
        "rows_checked": report.rows_checked,
        "severity_counts": {level.value: count for level, count in report.severity_counts.items()},
        "sheets": [
            {
                "sheet": sheet.sheet_name,
                "sheet_index": sheet.excel_sheet_index,
                "version": sheet.version.value,
                "error_count": sheet.error_count,
                "severity_counts": {level.value: count for level, count in sheet.severity_counts.items()},
                "errors": [
                    {
                        "severity": entry.severity.value,
                        "message": entry.message,
                        "expected": entry.expected,
                        "value": entry.value,
                        "occurrences": count,
                        "locations": [
                            {"row": loc.row, "column": loc.column, "value": loc.value} for loc in entry.locations
                        ],
                    }
                    for entry, count in sheet.error_log.items()
                ],
                "notifications": [
                    {
                        "message": notice.message,
                        "expected": notice.expected,
                        "occurrences": count,
                        "locations": [{"row": loc.row, "column": loc.column} for loc in notice.locations],
                    }
                    for notice, count in sheet.notifications_log.items()
                ],
            }
            for sheet in report.sheets
        ],
    }

    with path.open("w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)

    logger.info(f"Exported validation report to {path}")

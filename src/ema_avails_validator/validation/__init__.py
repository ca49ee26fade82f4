"""Avails sheet validation framework.

This package validates EMA avails sheets against a versioned specification of
column formats and cross-column business rules, and aggregates the findings
into deduplicated per-sheet ledgers.

Main entry points:
    - validate_workbook(): Validate every sheet of a workbook
    - validate_sheet(): Validate a single sheet
    - validate_row(): Validate a single row

Example:
    from ema_avails_validator.validation import validate_workbook, print_validation_report
    from ema_avails_validator.workbook import read_workbook

    report = validate_workbook(read_workbook(Path("avails.xlsx")))
    print_validation_report(report)
"""

from ema_avails_validator.validation.base import (
    ErrorEntry,
    ErrorLog,
    Location,
    LocatorKind,
    NotificationEntry,
    Severity,
)
from ema_avails_validator.validation.columns import ColumnDefinition
from ema_avails_validator.validation.engine import (
    export_validation_report,
    print_validation_report,
    report_to_dataframe,
    resolve_headers,
    select_specification,
    validate_row,
    validate_sheet,
    validate_workbook,
)
from ema_avails_validator.validation.rows import RowValidator
from ema_avails_validator.validation.rules import (
    CellRule,
    DenylistCharacters,
    MaxLength,
    NotEmpty,
    RegexFormat,
    evaluate_rule,
)
from ema_avails_validator.validation.specs import (
    SPECIFICATIONS,
    Specification,
    SpecVersion,
    detect_version,
    get_specification,
    list_versions,
)
from ema_avails_validator.validation.summary import SheetErrorSummary, WorkbookSummary

__all__ = [
    "SPECIFICATIONS",
    "CellRule",
    "ColumnDefinition",
    "DenylistCharacters",
    "ErrorEntry",
    "ErrorLog",
    "Location",
    "LocatorKind",
    "MaxLength",
    "NotEmpty",
    "NotificationEntry",
    "RegexFormat",
    "RowValidator",
    "Severity",
    "SheetErrorSummary",
    "SpecVersion",
    "Specification",
    "WorkbookSummary",
    "detect_version",
    "evaluate_rule",
    "export_validation_report",
    "get_specification",
    "list_versions",
    "print_validation_report",
    "report_to_dataframe",
    "resolve_headers",
    "select_specification",
    "validate_row",
    "validate_sheet",
    "validate_workbook",
]

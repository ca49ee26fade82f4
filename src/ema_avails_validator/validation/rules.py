"""Cell-level validation rules.

Each rule kind is a small frozen dataclass carrying its own configuration.
The kinds form a closed set (``CellRule``) and are evaluated by a single
function, ``evaluate_rule``. Adding a new kind of check means adding a
dataclass here and a branch in ``check_value``.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

from ema_avails_validator.validation import messages
from ema_avails_validator.validation.base import ErrorEntry, Severity

if TYPE_CHECKING:
    from ema_avails_validator.validation.base import ErrorLog


@dataclass(frozen=True)
class RegexFormat:
    """Value must fully match at least one of the patterns.

    Attributes:
        patterns: Acceptable formats, tried in order
        message: Message reported when no pattern matches
        expected: Description of the acceptable formats
        severity: Severity of a miss
        warn_only: Report a miss as a WARNING regardless of ``severity``
    """

    patterns: tuple[re.Pattern[str], ...]
    message: str
    expected: str
    severity: Severity = Severity.ERROR
    warn_only: bool = False


@dataclass(frozen=True)
class NotEmpty:
    """Value must contain something other than whitespace."""

    message: str = messages.REQUIRED_VALUE_MISSING
    expected: str = messages.REQUIRED_VALUE_EXPECTED
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class DenylistCharacters:
    """Value must not contain any character matched by ``pattern``."""

    pattern: re.Pattern[str]
    message: str = messages.ILLEGAL_METADATA_CHARACTERS
    expected: str = messages.ILLEGAL_METADATA_CHARACTERS_EXPECTED
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class MaxLength:
    """Value must not be longer than ``limit`` characters."""

    limit: int
    message: str = messages.VALUE_TOO_LONG
    expected: str = ""
    severity: Severity = Severity.ERROR

    @property
    def expected_text(self) -> str:
        return self.expected or f"At most {self.limit} characters."


CellRule = RegexFormat | NotEmpty | DenylistCharacters | MaxLength


def check_value(rule: CellRule, value: str) -> tuple[Severity, str, str] | None:
    """Check a value against a rule without reporting anything.

    Args:
        rule: The rule to apply
        value: Raw cell value

    Returns:
        (severity, message, expected) describing the violation, or None if
        the value is acceptable

    Raises:
        TypeError: If ``rule`` is not a known rule kind
    """
    if isinstance(rule, RegexFormat):
        if not value.strip():
            return None
        if any(pattern.fullmatch(value.strip()) for pattern in rule.patterns):
            return None
        severity = Severity.WARNING if rule.warn_only else rule.severity
        return severity, rule.message, rule.expected

    if isinstance(rule, NotEmpty):
        if value.strip():
            return None
        return rule.severity, rule.message, rule.expected

    if isinstance(rule, DenylistCharacters):
        if rule.pattern.search(value) is None:
            return None
        return rule.severity, rule.message, rule.expected

    if isinstance(rule, MaxLength):
        if len(value) <= rule.limit:
            return None
        return rule.severity, rule.message, rule.expected_text

    raise TypeError(f"Unknown cell rule: {type(rule).__name__}")


def evaluate_rule(rule: CellRule, value: str, row: int, column: str, log: ErrorLog) -> bool:
    """Apply a rule to one cell and report a violation through the log.

    Args:
        rule: The rule to apply
        value: Raw cell value
        row: Row number of the cell (1-indexed, header is row 1)
        column: Column name of the cell
        log: Error log of the sheet being validated

    Returns:
        True if the value is acceptable, False if a violation was reported
    """
    violation = check_value(rule, value)
    if violation is None:
        return True

    severity, message, expected = violation
    log.append_error(ErrorEntry.for_cell(row, column, message, severity, value, expected))
    return False


def regex_format(
    *patterns: re.Pattern[str],
    expected: str,
    message: str = messages.SPECIFIC_VALUES_ONLY,
    severity: Severity = Severity.ERROR,
    warn_only: bool = False,
) -> RegexFormat:
    """Build a RegexFormat rule from one or more patterns."""
    return RegexFormat(
        patterns=tuple(patterns),
        message=message,
        expected=expected,
        severity=severity,
        warn_only=warn_only,
    )

"""Tests for cell-level validation rules."""

import re

import pytest

from ema_avails_validator.validation import messages, patterns
from ema_avails_validator.validation.base import ErrorLog, Severity
from ema_avails_validator.validation.rules import (
    DenylistCharacters,
    MaxLength,
    NotEmpty,
    check_value,
    evaluate_rule,
    regex_format,
)
from ema_avails_validator.validation.summary import SheetErrorSummary

FORMAT_PROFILE = regex_format(patterns.FORMAT_PROFILE_VALUES, expected=messages.EXPECTED_FORMAT_PROFILE)


class TestRegexFormat:
    """Tests for RegexFormat rules."""

    @pytest.mark.parametrize("value", ["HD", "sd", "UHD", " 3D "])
    def test_accepts_matching_values(self, value: str) -> None:
        """Test values matching a pattern pass."""
        assert check_value(FORMAT_PROFILE, value) is None

    def test_rejects_partial_match(self) -> None:
        """Test that the whole value must match."""
        severity, message, expected = check_value(FORMAT_PROFILE, "HDR")

        assert severity == Severity.ERROR
        assert message == messages.SPECIFIC_VALUES_ONLY
        assert expected == messages.EXPECTED_FORMAT_PROFILE

    def test_any_pattern_may_match(self) -> None:
        """Test that a value matching the second pattern passes."""
        rule = regex_format(patterns.DATE_FORMAT, patterns.OPEN_END_DATE, expected=messages.EXPECTED_END_DATE)

        assert check_value(rule, "2014-05-01") is None
        assert check_value(rule, "Open") is None
        assert check_value(rule, "soon") is not None

    def test_blank_values_pass(self) -> None:
        """Test that format rules leave blank cells to NotEmpty."""
        assert check_value(FORMAT_PROFILE, "") is None
        assert check_value(FORMAT_PROFILE, "   ") is None

    def test_warn_only_downgrades_severity(self) -> None:
        """Test that warn_only reports misses as warnings."""
        rule = regex_format(
            patterns.FORMAT_PROFILE_VALUES,
            expected=messages.EXPECTED_FORMAT_PROFILE,
            severity=Severity.CRITICAL,
            warn_only=True,
        )

        severity, _, _ = check_value(rule, "4K")

        assert severity == Severity.WARNING


class TestNotEmpty:
    """Tests for NotEmpty rules."""

    def test_rejects_whitespace(self) -> None:
        """Test that a trimmed-empty value fails."""
        assert check_value(NotEmpty(), "  ") == (
            Severity.ERROR,
            messages.REQUIRED_VALUE_MISSING,
            messages.REQUIRED_VALUE_EXPECTED,
        )

    def test_accepts_value(self) -> None:
        """Test that any content passes."""
        assert check_value(NotEmpty(), "x") is None


class TestDenylistCharacters:
    """Tests for DenylistCharacters rules."""

    @pytest.mark.parametrize("value", ["a\tb", "line\nbreak", "<b>", 'say "hi"', "a|b"])
    def test_rejects_illegal_characters(self, value: str) -> None:
        """Test that each illegal character is caught."""
        assert check_value(DenylistCharacters(patterns.ILLEGAL_METADATA_CHARACTERS), value) is not None

    def test_accepts_plain_text_and_blank(self) -> None:
        """Test that ordinary text and blank values pass."""
        rule = DenylistCharacters(patterns.ILLEGAL_METADATA_CHARACTERS)

        assert check_value(rule, "The Example: Part 2") is None
        assert check_value(rule, "") is None


class TestMaxLength:
    """Tests for MaxLength rules."""

    def test_limit(self) -> None:
        """Test values up to the limit pass and longer ones fail."""
        rule = MaxLength(5)

        assert check_value(rule, "12345") is None
        assert check_value(rule, "123456") == (Severity.ERROR, messages.VALUE_TOO_LONG, "At most 5 characters.")


class TestEvaluateRule:
    """Tests for evaluate_rule reporting."""

    def test_reports_one_entry_on_failure(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that a failing rule reports exactly one cell entry."""
        assert evaluate_rule(FORMAT_PROFILE, "HDR", 4, "FormatProfile", movie_log) is False

        entries = list(movie_summary.error_log)
        assert len(entries) == 1
        assert entries[0].locations[0].row == 4
        assert entries[0].locations[0].column == "FormatProfile"
        assert entries[0].value == "HDR"

    def test_reports_nothing_on_success(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that a passing rule reports nothing."""
        assert evaluate_rule(FORMAT_PROFILE, "HD", 4, "FormatProfile", movie_log) is True
        assert movie_summary.error_count == 0

    def test_unknown_rule_raises(self, movie_log: ErrorLog) -> None:
        """Test that an unknown rule kind is a programming error."""
        with pytest.raises(TypeError, match="Unknown cell rule"):
            evaluate_rule(re.compile("x"), "x", 2, "SRP", movie_log)  # type: ignore[arg-type]

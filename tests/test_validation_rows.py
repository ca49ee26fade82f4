"""Tests for row validators."""

from ema_avails_validator.validation import messages
from ema_avails_validator.validation.base import ErrorLog, LocatorKind, Severity
from ema_avails_validator.validation.rows import (
    CaptionExemptionValidator,
    CaptionIncludedValidator,
    EpisodeNumberValidator,
    ExceptionFlagValidator,
    WindowDatesValidator,
    lookup,
)
from ema_avails_validator.validation.specs import SpecVersion
from ema_avails_validator.validation.summary import SheetErrorSummary


class TestLookup:
    """Tests for the row lookup helper."""

    def test_absent_column_is_none(self) -> None:
        """Test that a missing column is reported as None, not an error."""
        assert lookup({"Territory": "US"}, "CaptionIncluded") is None

    def test_value_is_trimmed(self) -> None:
        """Test that cell values are stripped."""
        assert lookup({"Territory": " US "}, "Territory") == "US"


class TestCaptionIncludedValidator:
    """Tests for CaptionIncludedValidator."""

    def test_tv_season_row_is_exempt(self, tv_summary: SheetErrorSummary, tv_log: ErrorLog) -> None:
        """Test that TV season rows skip caption checks entirely."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_TV)

        result = validator.validate({"WorkType": "Season 1", "Territory": "US"}, 2, tv_log)

        assert result is True
        assert tv_summary.error_count == 0

    def test_tv_us_invalid_value(self, tv_summary: SheetErrorSummary, tv_log: ErrorLog) -> None:
        """Test that a US TV row with a non Yes/No value reports one ERROR."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_TV)

        row = {"WorkType": "Episode", "Territory": "US", "CaptionIncluded": "Maybe"}

        result = validator.validate(row, 4, tv_log)

        assert result is False
        entries = list(tv_summary.error_log)
        assert len(entries) == 1
        assert entries[0].severity == Severity.ERROR
        assert entries[0].kind == LocatorKind.ROW
        assert entries[0].expected == messages.CAPTION_INCLUDED_EXPECTED
        assert entries[0].value == "Maybe"

    def test_missing_territory_is_already_explained(self, tv_summary: SheetErrorSummary, tv_log: ErrorLog) -> None:
        """Test that a row without Territory reports nothing and ends row checks."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_TV)

        result = validator.validate({"WorkType": "Episode", "CaptionIncluded": "Maybe"}, 2, tv_log)

        assert result is True
        assert tv_summary.error_count == 0

    def test_tv_missing_work_type_is_already_explained(
        self, tv_summary: SheetErrorSummary, tv_log: ErrorLog
    ) -> None:
        """Test that a TV row without WorkType reports nothing and ends row checks."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_TV)

        result = validator.validate({"Territory": "US", "CaptionIncluded": "Maybe"}, 2, tv_log)

        assert result is True
        assert tv_summary.error_count == 0

    def test_missing_caption_column_is_already_explained(
        self, movie_summary: SheetErrorSummary, movie_log: ErrorLog
    ) -> None:
        """Test that a US row without a CaptionIncluded column reports nothing."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_MOVIE)

        assert validator.validate({"Territory": "US"}, 2, movie_log) is True
        assert movie_summary.error_count == 0

    def test_yes_no_case_insensitive(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that yes/no are accepted in any case."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_MOVIE)

        for value in ("Yes", "no", "YES"):
            validator.validate({"Territory": "us", "CaptionIncluded": value}, 2, movie_log)

        assert movie_summary.error_count == 0

    def test_non_us_territory_not_checked(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that the rule only applies to the United States."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_MOVIE)

        assert validator.validate({"Territory": "CA", "CaptionIncluded": ""}, 2, movie_log) is False
        assert movie_summary.error_count == 0

    def test_movie_season_not_exempt(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that the season exemption only applies to TV specs."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_MOVIE)

        validator.validate({"WorkType": "Season", "Territory": "US", "CaptionIncluded": ""}, 2, movie_log)

        assert movie_summary.error_count == 1

    def test_repeated_violations_merge(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that the same violation on many rows becomes one entry."""
        validator = CaptionIncludedValidator(SpecVersion.EMA_1_6_MOVIE)

        for row_number in (2, 3, 4):
            validator.validate({"Territory": "US", "CaptionIncluded": ""}, row_number, movie_log)

        assert movie_summary.error_columns_count == 1
        assert movie_summary.error_count == 3
        entry = next(iter(movie_summary.error_log))
        assert [loc.row for loc in entry.locations] == [2, 3, 4]


class TestCaptionExemptionValidator:
    """Tests for CaptionExemptionValidator."""

    def test_requires_code_when_no_captions(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that US rows without captions need an exemption code."""
        row = {"Territory": "US", "CaptionIncluded": "No", "CaptionExemption": ""}

        assert CaptionExemptionValidator().validate(row, 2, movie_log) is False

        entry = next(iter(movie_summary.error_log))
        assert entry.message == messages.CAPTION_EXEMPTION_ERROR

    def test_valid_code(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that an exemption code from 1 to 6 passes."""
        row = {"Territory": "US", "CaptionIncluded": "No", "CaptionExemption": "4"}

        CaptionExemptionValidator().validate(row, 2, movie_log)

        assert movie_summary.error_count == 0

    def test_captions_included_needs_no_code(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that no exemption is needed when captions are included."""
        row = {"Territory": "US", "CaptionIncluded": "Yes", "CaptionExemption": ""}

        CaptionExemptionValidator().validate(row, 2, movie_log)

        assert movie_summary.error_count == 0


class TestExceptionFlagValidator:
    """Tests for ExceptionFlagValidator."""

    def test_instructions_without_flag_warns(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that manual instructions without the flag are a WARNING."""
        row = {"OtherInstructions": "Call before release", "ExceptionFlag": ""}

        ExceptionFlagValidator().validate(row, 2, movie_log)

        assert movie_summary.severity_counts[Severity.WARNING] == 1
        assert movie_summary.severity_counts[Severity.ERROR] == 0

    def test_flag_set(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that a Yes flag satisfies the rule."""
        row = {"OtherInstructions": "Call before release", "ExceptionFlag": "yes"}

        ExceptionFlagValidator().validate(row, 2, movie_log)

        assert movie_summary.error_count == 0

    def test_missing_column(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that a missing ExceptionFlag column ends row checks quietly."""
        assert ExceptionFlagValidator().validate({"OtherInstructions": "x"}, 2, movie_log) is True
        assert movie_summary.error_count == 0


class TestWindowDatesValidator:
    """Tests for WindowDatesValidator."""

    def test_start_after_end(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that an inverted window is an ERROR."""
        WindowDatesValidator().validate({"Start": "2015-01-01", "End": "2014-01-01"}, 2, movie_log)

        entry = next(iter(movie_summary.error_log))
        assert entry.message == messages.WINDOW_DATES_ERROR
        assert entry.value == "2015-01-01 > 2014-01-01"

    def test_same_day_window(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that a one-day window is allowed."""
        WindowDatesValidator().validate({"Start": "2014-01-01", "End": "2014-01-01"}, 2, movie_log)

        assert movie_summary.error_count == 0

    def test_unparseable_dates_left_to_column_checks(
        self, movie_summary: SheetErrorSummary, movie_log: ErrorLog
    ) -> None:
        """Test that bad dates don't produce a second, window-level error."""
        WindowDatesValidator().validate({"Start": "2014-02-30", "End": "someday"}, 2, movie_log)

        assert movie_summary.error_count == 0

    def test_open_end_is_notification(self, movie_summary: SheetErrorSummary, movie_log: ErrorLog) -> None:
        """Test that an 'Open' end date is noted, not counted as an error."""
        WindowDatesValidator().validate({"Start": "2014-01-01", "End": "open"}, 2, movie_log)

        assert movie_summary.error_count == 0
        assert movie_summary.notification_count == 1


class TestEpisodeNumberValidator:
    """Tests for EpisodeNumberValidator."""

    def test_episode_without_number(self, tv_summary: SheetErrorSummary, tv_log: ErrorLog) -> None:
        """Test that episodes need an episode number."""
        EpisodeNumberValidator().validate({"WorkType": "Episode", "EpisodeNumber": ""}, 2, tv_log)

        assert tv_summary.error_count == 1

    def test_season_without_number(self, tv_summary: SheetErrorSummary, tv_log: ErrorLog) -> None:
        """Test that season rows don't need an episode number."""
        EpisodeNumberValidator().validate({"WorkType": "Season", "EpisodeNumber": ""}, 2, tv_log)

        assert tv_summary.error_count == 0

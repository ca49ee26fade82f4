"""Row validators for cross-column business rules.

A row validator runs once per data row with every cell value of that row. It
reports violations through the sheet's ErrorLog and returns True when the
remaining row validators should be skipped for this row.

Columns that are missing from the row are treated as already explained: the
header check reports missing required columns once, so row validators return
early instead of reporting a second, misleading error for every row.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from collections.abc import Mapping
from datetime import date
from typing import TYPE_CHECKING

from ema_avails_validator.validation import messages, patterns
from ema_avails_validator.validation.base import ErrorEntry, NotificationEntry, Severity

if TYPE_CHECKING:
    from ema_avails_validator.validation.base import ErrorLog
    from ema_avails_validator.validation.specs import SpecVersion

logger = logging.getLogger(__name__)


def lookup(row: Mapping[str, str], column: str) -> str | None:
    """Get a cell value from a row, or None if the column is absent."""
    value = row.get(column)
    if value is None:
        return None
    return value.strip()


class RowValidator(ABC):
    """Abstract base class for row validators.

    Subclasses must implement:
        - validate(): Check a row and report any violations
        - name: Property returning the validator's name
    """

    @abstractmethod
    def validate(self, row: Mapping[str, str], row_number: int, log: ErrorLog) -> bool:
        """Validate one data row.

        Args:
            row: Dict mapping column names to cell values
            row_number: Row number in the sheet (1-indexed, header is row 1)
            log: Error log of the sheet being validated

        Returns:
            True if no further row validators need to run for this row
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return validator name for reporting."""

    def __repr__(self) -> str:
        return f"{type(self).__name__}()"


class CaptionIncludedValidator(RowValidator):
    """US avails must state whether closed captions are included.

    For TV specs, season aggregate rows carry no caption information and are
    exempt.
    """

    def __init__(self, version: SpecVersion):
        self.version = version

    @property
    def name(self) -> str:
        return "caption_included"

    def validate(self, row: Mapping[str, str], row_number: int, log: ErrorLog) -> bool:
        if self.version.is_tv:
            work_type = lookup(row, "WorkType")
            if work_type is None or patterns.SEASON_WORK_TYPE.search(work_type):
                return True

        territory = lookup(row, "Territory")
        caption_included = lookup(row, "CaptionIncluded")
        if territory is None or caption_included is None:
            return True

        if patterns.UNITED_STATES_COUNTRY_CODE.fullmatch(territory) and not patterns.YES_OR_NO_ONLY.fullmatch(
            caption_included
        ):
            log.append_error(
                ErrorEntry.for_row(
                    row_number,
                    messages.CAPTION_INCLUDED_ERROR,
                    Severity.ERROR,
                    caption_included,
                    messages.CAPTION_INCLUDED_EXPECTED,
                )
            )
        return False

    def __repr__(self) -> str:
        return f"CaptionIncludedValidator({self.version.value!r})"


class CaptionExemptionValidator(RowValidator):
    """US avails without captions must give a caption exemption code."""

    @property
    def name(self) -> str:
        return "caption_exemption"

    def validate(self, row: Mapping[str, str], row_number: int, log: ErrorLog) -> bool:
        territory = lookup(row, "Territory")
        caption_included = lookup(row, "CaptionIncluded")
        exemption = lookup(row, "CaptionExemption")
        if territory is None or caption_included is None or exemption is None:
            return True

        if not patterns.UNITED_STATES_COUNTRY_CODE.fullmatch(territory):
            return False
        if caption_included.lower() != "no":
            return False
        if not patterns.CAPTION_EXEMPTION_VALUES.fullmatch(exemption):
            log.append_error(
                ErrorEntry.for_row(
                    row_number,
                    messages.CAPTION_EXEMPTION_ERROR,
                    Severity.ERROR,
                    exemption,
                    messages.CAPTION_EXEMPTION_EXPECTED,
                )
            )
        return False


class ExceptionFlagValidator(RowValidator):
    """Manual instructions must be flagged so they are not processed automatically."""

    @property
    def name(self) -> str:
        return "exception_flag"

    def validate(self, row: Mapping[str, str], row_number: int, log: ErrorLog) -> bool:
        instructions = lookup(row, "OtherInstructions")
        flag = lookup(row, "ExceptionFlag")
        if instructions is None or flag is None:
            return True

        if instructions and not patterns.YES_ONLY.fullmatch(flag):
            log.append_error(
                ErrorEntry.for_row(
                    row_number,
                    messages.EXCEPTION_FLAG_NOT_SET,
                    Severity.WARNING,
                    flag,
                    messages.EXCEPTION_FLAG_EXPECTED,
                )
            )
        return False


class WindowDatesValidator(RowValidator):
    """The avail window must not end before it starts.

    Dates that don't parse are left to the Start/End column checks. An End of
    'Open' is noted as an open-ended window.
    """

    @property
    def name(self) -> str:
        return "window_dates"

    def validate(self, row: Mapping[str, str], row_number: int, log: ErrorLog) -> bool:
        start = lookup(row, "Start")
        end = lookup(row, "End")
        if start is None or end is None:
            return True

        if patterns.OPEN_END_DATE.fullmatch(end):
            log.append_notification(
                NotificationEntry.for_row(
                    row_number,
                    messages.OPEN_ENDED_WINDOW,
                    end,
                    messages.OPEN_ENDED_WINDOW_EXPECTED,
                )
            )
            return False

        start_date = _parse_date(start)
        end_date = _parse_date(end)
        if start_date is None or end_date is None:
            return False

        if start_date > end_date:
            log.append_error(
                ErrorEntry.for_row(
                    row_number,
                    messages.WINDOW_DATES_ERROR,
                    Severity.ERROR,
                    f"{start} > {end}",
                    messages.WINDOW_DATES_EXPECTED,
                )
            )
        return False


class EpisodeNumberValidator(RowValidator):
    """Episode avails must carry an episode number (TV specs only)."""

    @property
    def name(self) -> str:
        return "episode_number"

    def validate(self, row: Mapping[str, str], row_number: int, log: ErrorLog) -> bool:
        work_type = lookup(row, "WorkType")
        episode_number = lookup(row, "EpisodeNumber")
        if work_type is None or episode_number is None:
            return True

        if patterns.EPISODE_WORK_TYPE.fullmatch(work_type) and not episode_number:
            log.append_error(
                ErrorEntry.for_row(
                    row_number,
                    messages.EPISODE_NUMBER_MISSING,
                    Severity.ERROR,
                    episode_number,
                    messages.EPISODE_NUMBER_EXPECTED,
                )
            )
        return False


def _parse_date(value: str) -> date | None:
    if not patterns.DATE_FORMAT.fullmatch(value):
        return None
    try:
        return date.fromisoformat(value)
    except ValueError:
        logger.debug(f"Not a calendar date: {value!r}")
        return None

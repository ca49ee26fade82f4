"""Column definitions for EMA avails sheets.

A ColumnDefinition binds a column name to the ordered list of cell rules that
every value in that column must pass. The catalog at the bottom of this module
describes every column known to any supported EMA spec version; specs pick the
columns they use from it and decide which of them are required.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING

from ema_avails_validator.validation import messages, patterns
from ema_avails_validator.validation.rules import (
    CellRule,
    DenylistCharacters,
    MaxLength,
    NotEmpty,
    evaluate_rule,
    regex_format,
)

if TYPE_CHECKING:
    from ema_avails_validator.validation.base import ErrorLog


@dataclass(frozen=True)
class ColumnDefinition:
    """Expected format of one column.

    Attributes:
        name: Column header as published by EMA
        description: Human-readable label used in reports
        required: Whether every row must have a value in this column
        format_rules: Rules a non-empty value must pass, in order
        validators: Rules actually applied to each cell, built once from the above
    """

    name: str
    description: str
    required: bool = False
    format_rules: tuple[CellRule, ...] = ()
    validators: tuple[CellRule, ...] = field(init=False, default=())

    def __post_init__(self) -> None:
        object.__setattr__(self, "validators", self.build_validators())

    def build_validators(self) -> tuple[CellRule, ...]:
        """Build the cell rules for this column.

        Required columns also enforce non-emptiness. Optional columns only
        enforce their format rules, which pass on blank values.
        """
        validators = list(self.format_rules)
        if self.required:
            validators.append(NotEmpty())
        return tuple(validators)

    def validate(self, value: str, row: int, log: ErrorLog) -> bool:
        """Run every rule against a cell value.

        All rules run even after one fails, so each independent defect in the
        cell is reported.

        Args:
            value: Raw cell value
            row: Row number of the cell (1-indexed, header is row 1)
            log: Error log of the sheet being validated

        Returns:
            True if the value passed every rule
        """
        results = [evaluate_rule(rule, value, row, self.name, log) for rule in self.validators]
        return all(results)

    def with_required(self, required: bool = True) -> ColumnDefinition:
        """Return a copy of this definition with a different required flag."""
        if required == self.required:
            return self
        return replace(self, required=required)


NO_ILLEGAL_CHARACTERS = DenylistCharacters(patterns.ILLEGAL_METADATA_CHARACTERS)


def text_column(name: str, description: str, max_length: int | None = None) -> ColumnDefinition:
    """Free text column that only forbids illegal metadata characters."""
    rules: list[CellRule] = [NO_ILLEGAL_CHARACTERS]
    if max_length is not None:
        rules.append(MaxLength(max_length))
    return ColumnDefinition(name, description, format_rules=tuple(rules))


def coded_column(name: str, description: str, *rules: CellRule) -> ColumnDefinition:
    """Column whose values must match a specific format."""
    return ColumnDefinition(name, description, format_rules=rules)


def _values(pattern: re.Pattern[str], expected: str) -> CellRule:
    return regex_format(pattern, expected=expected, message=messages.SPECIFIC_VALUES_ONLY)


def _date(expected: str = messages.EXPECTED_DATE, *extra: re.Pattern[str]) -> CellRule:
    return regex_format(patterns.DATE_FORMAT, *extra, expected=expected, message=messages.INVALID_DATE_FORMAT)


def _number(pattern: re.Pattern[str], expected: str) -> CellRule:
    return regex_format(pattern, expected=expected, message=messages.INVALID_NUMBER_FORMAT)


def _whole_number() -> CellRule:
    return _number(patterns.INTEGER_FORMAT, messages.EXPECTED_INTEGER)


def _code(pattern: re.Pattern[str], expected: str) -> CellRule:
    return regex_format(pattern, expected=expected, message=messages.INVALID_CODE_FORMAT)


def _identifier(name: str, description: str) -> ColumnDefinition:
    return text_column(name, description, max_length=255)


# Column catalog -------------------------------------------------------------

_CATALOG: list[ColumnDefinition] = [
    # Offer
    text_column("DisplayName", "Licensor display name", max_length=255),
    coded_column("StoreLanguage", "Store language", _code(patterns.LANGUAGE_CODE, messages.EXPECTED_LANGUAGE)),
    coded_column("Territory", "Territory", _code(patterns.TERRITORY_CODE, messages.EXPECTED_TERRITORY)),
    coded_column(
        "WorkType",
        "Work type",
        _values(patterns.MOVIE_WORK_TYPE_VALUES, messages.EXPECTED_MOVIE_WORK_TYPE),
    ),
    coded_column(
        "EntryType",
        "Entry type",
        _values(patterns.ENTRY_TYPE_VALUES, messages.EXPECTED_ENTRY_TYPE),
    ),
    # Titles
    text_column("TitleInternalAlias", "Internal title", max_length=4000),
    text_column("TitleDisplayUnlimited", "Display title", max_length=4000),
    # Terms
    coded_column(
        "LocalizationType",
        "Localization type",
        _values(patterns.LOCALIZATION_TYPE_VALUES, messages.EXPECTED_LOCALIZATION_TYPE),
    ),
    coded_column(
        "LicenseType",
        "License type",
        _values(patterns.LICENSE_TYPE_VALUES, messages.EXPECTED_LICENSE_TYPE),
    ),
    text_column("LicenseRightsDescription", "License rights description"),
    coded_column(
        "FormatProfile",
        "Format profile",
        _values(patterns.FORMAT_PROFILE_VALUES, messages.EXPECTED_FORMAT_PROFILE),
    ),
    coded_column("Start", "Window start date", _date()),
    coded_column(
        "End",
        "Window end date",
        _date(messages.EXPECTED_END_DATE, patterns.OPEN_END_DATE),
    ),
    coded_column(
        "PriceType",
        "Price type",
        _values(patterns.PRICE_TYPE_VALUES, messages.EXPECTED_PRICE_TYPE),
    ),
    text_column("PriceValue", "Price value or tier"),
    coded_column("SRP", "Suggested retail price", _number(patterns.FLOAT_FORMAT, messages.EXPECTED_PRICE)),
    text_column("Description", "Description"),
    text_column("OtherTerms", "Other terms"),
    text_column("OtherInstructions", "Other instructions"),
    # Identifiers
    _identifier("ContentID", "Content identifier"),
    _identifier("ProductID", "Product identifier"),
    _identifier("EncodeID", "Encode identifier"),
    _identifier("AvailID", "Avail identifier"),
    _identifier("AltID", "Alternate identifier"),
    text_column("Metadata", "Metadata"),
    # Dates and release history
    coded_column("SuppressionLiftDate", "Suppression lift date", _date()),
    coded_column("SpecialPreOrderFulfillDate", "Pre-order fulfill date", _date()),
    coded_column("ReleaseYear", "Release year", _number(patterns.YEAR_FORMAT, messages.EXPECTED_YEAR)),
    coded_column("ReleaseHistoryOriginal", "Original release date", _date()),
    coded_column("ReleaseHistoryPhysicalHV", "Physical home video release date", _date()),
    coded_column(
        "ExceptionFlag",
        "Exception flag",
        _values(patterns.YES_OR_NO_ONLY, messages.EXPECTED_YES_OR_NO),
    ),
    # Ratings
    text_column("RatingSystem", "Rating system"),
    text_column("RatingValue", "Rating value"),
    text_column("RatingReason", "Rating reason"),
    # Durations
    coded_column("RentalDuration", "Rental duration (hours)", _whole_number()),
    coded_column("WatchDuration", "Watch duration (hours)", _whole_number()),
    coded_column("TotalRunTime", "Total run time", _number(patterns.RUN_TIME_FORMAT, messages.EXPECTED_RUN_TIME)),
    # Captions
    coded_column(
        "CaptionIncluded",
        "Closed captions included",
        _values(patterns.YES_OR_NO_ONLY, messages.EXPECTED_YES_OR_NO),
    ),
    coded_column(
        "CaptionExemption",
        "Caption exemption code",
        _values(patterns.CAPTION_EXEMPTION_VALUES, messages.EXPECTED_CAPTION_EXEMPTION),
    ),
    # Miscellaneous
    text_column("Any", "Any"),
    _identifier("ContractID", "Contract identifier"),
    text_column("ServiceProvider", "Service provider"),
    coded_column("HoldbackLanguage", "Holdback language", _code(patterns.LANGUAGE_CODE, messages.EXPECTED_LANGUAGE)),
    coded_column(
        "HoldbackExclusionLanguage",
        "Holdback exclusion language",
        _code(patterns.LANGUAGE_CODE, messages.EXPECTED_LANGUAGE),
    ),
]

_TV_CATALOG: list[ColumnDefinition] = [
    coded_column(
        "WorkType",
        "Work type",
        _values(patterns.TV_WORK_TYPE_VALUES, messages.EXPECTED_TV_WORK_TYPE),
    ),
    text_column("SeriesTitleInternalAlias", "Internal series title", max_length=4000),
    text_column("SeriesTitleDisplayUnlimited", "Display series title", max_length=4000),
    text_column("SeasonTitleInternalAlias", "Internal season title", max_length=4000),
    text_column("SeasonTitleDisplayUnlimited", "Display season title", max_length=4000),
    text_column("EpisodeTitleInternalAlias", "Internal episode title", max_length=4000),
    text_column("EpisodeTitleDisplayUnlimited", "Display episode title", max_length=4000),
    coded_column("SeasonNumber", "Season number", _whole_number()),
    coded_column("EpisodeNumber", "Episode number", _whole_number()),
    coded_column("EpisodeCount", "Episode count", _whole_number()),
    coded_column("SeasonCount", "Season count", _whole_number()),
    _identifier("SeriesContentID", "Series content identifier"),
    _identifier("SeasonContentID", "Season content identifier"),
    _identifier("EpisodeContentID", "Episode content identifier"),
    _identifier("SeriesAltID", "Series alternate identifier"),
    _identifier("SeasonAltID", "Season alternate identifier"),
    _identifier("EpisodeAltID", "Episode alternate identifier"),
    _identifier("SeasonProductID", "Season product identifier"),
    _identifier("EpisodeProductID", "Episode product identifier"),
    text_column("CompanyDisplayCredit", "Company display credit"),
]

MOVIE_COLUMNS: dict[str, ColumnDefinition] = {column.name: column for column in _CATALOG}

# TV sheets replace the movie title/identifier columns and WorkType values
TV_COLUMNS: dict[str, ColumnDefinition] = {
    **{
        name: column
        for name, column in MOVIE_COLUMNS.items()
        if name not in {"TitleInternalAlias", "TitleDisplayUnlimited", "ContentID", "ProductID"}
    },
    **{column.name: column for column in _TV_CATALOG},
}


def select_columns(
    catalog: dict[str, ColumnDefinition],
    names: list[str],
    required: set[str],
) -> dict[str, ColumnDefinition]:
    """Pick columns from a catalog in the given order, marking the required ones.

    Raises:
        KeyError: If a name is not in the catalog
    """
    unknown = set(required) - set(names)
    if unknown:
        raise KeyError(f"Required columns not selected: {sorted(unknown)}")
    return {name: catalog[name].with_required(name in required) for name in names}

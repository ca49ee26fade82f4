"""EMA spec versions and their validation tables.

Each supported spec version owns one Specification: the columns a sheet of
that version may contain and the row validators that apply to its rows. A
sheet is validated against exactly one Specification; validators are never
mixed across versions.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from ema_avails_validator.validation.columns import (
    MOVIE_COLUMNS,
    TV_COLUMNS,
    ColumnDefinition,
    select_columns,
)
from ema_avails_validator.validation.rows import (
    CaptionExemptionValidator,
    CaptionIncludedValidator,
    EpisodeNumberValidator,
    ExceptionFlagValidator,
    RowValidator,
    WindowDatesValidator,
)

logger = logging.getLogger(__name__)


class SpecVersion(str, Enum):
    """Supported EMA avails spec versions."""

    EMA_1_5 = "EMA 1.5"
    EMA_1_6_MOVIE = "EMA 1.6 Movie"
    EMA_1_6_TV = "EMA 1.6 TV"

    @property
    def is_tv(self) -> bool:
        """Whether this version describes TV (series/season/episode) avails."""
        return self is SpecVersion.EMA_1_6_TV

    @classmethod
    def from_name(cls, name: str) -> SpecVersion:
        """Look up a version by value or member name, ignoring case.

        Raises:
            ValueError: If no version matches
        """
        wanted = name.strip().lower().replace("_", " ").replace("-", " ")
        for version in cls:
            if wanted in (version.value.lower(), version.name.lower().replace("_", " ")):
                return version
        raise ValueError(f"Unknown spec version: {name}. Available: {[v.value for v in cls]}")

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class Specification:
    """What a valid sheet looks like for one spec version.

    Attributes:
        version: The spec version this table describes
        columns: Column name -> ColumnDefinition, in spec order (read-only)
        row_validators: Cross-column rules, run in order for every row
    """

    version: SpecVersion
    columns: Mapping[str, ColumnDefinition]
    row_validators: tuple[RowValidator, ...] = field(default=())

    def __post_init__(self) -> None:
        if not self.columns:
            raise ValueError(f"Specification for {self.version} has no column definitions")
        object.__setattr__(self, "columns", MappingProxyType(dict(self.columns)))
        object.__setattr__(self, "row_validators", tuple(self.row_validators))

    def column(self, name: str) -> ColumnDefinition | None:
        """Get a column definition by header name, or None if not in this spec."""
        return self.columns.get(name)

    @property
    def required_columns(self) -> list[str]:
        """Names of the columns every sheet of this version must contain."""
        return [name for name, column in self.columns.items() if column.required]

    @property
    def column_labels(self) -> dict[str, str]:
        """Column name -> human-readable description, for reports."""
        return {name: column.description for name, column in self.columns.items()}

    def display_name(self, column: str) -> str:
        """Human-readable name of a column, falling back to the raw header."""
        definition = self.column(column)
        return definition.description if definition else column


# Spec tables ----------------------------------------------------------------

_MOVIE_1_5_NAMES = [
    name
    for name in MOVIE_COLUMNS
    if name not in {"ServiceProvider", "TotalRunTime", "HoldbackLanguage", "HoldbackExclusionLanguage"}
]

_OFFER_REQUIRED = {
    "DisplayName",
    "StoreLanguage",
    "Territory",
    "WorkType",
    "EntryType",
    "LicenseType",
    "FormatProfile",
    "Start",
    "End",
    "PriceType",
    "PriceValue",
}


def _build_specifications() -> dict[SpecVersion, Specification]:
    ema_1_5 = Specification(
        version=SpecVersion.EMA_1_5,
        columns=select_columns(MOVIE_COLUMNS, _MOVIE_1_5_NAMES, _OFFER_REQUIRED | {"TitleInternalAlias"}),
        row_validators=(
            WindowDatesValidator(),
            ExceptionFlagValidator(),
            CaptionIncludedValidator(SpecVersion.EMA_1_5),
            CaptionExemptionValidator(),
        ),
    )
    ema_1_6_movie = Specification(
        version=SpecVersion.EMA_1_6_MOVIE,
        columns=select_columns(
            MOVIE_COLUMNS,
            list(MOVIE_COLUMNS),
            _OFFER_REQUIRED | {"TitleInternalAlias", "AvailID"},
        ),
        row_validators=(
            WindowDatesValidator(),
            ExceptionFlagValidator(),
            CaptionIncludedValidator(SpecVersion.EMA_1_6_MOVIE),
            CaptionExemptionValidator(),
        ),
    )
    ema_1_6_tv = Specification(
        version=SpecVersion.EMA_1_6_TV,
        columns=select_columns(
            TV_COLUMNS,
            list(TV_COLUMNS),
            _OFFER_REQUIRED | {"SeriesTitleInternalAlias", "AvailID"},
        ),
        row_validators=(
            WindowDatesValidator(),
            ExceptionFlagValidator(),
            EpisodeNumberValidator(),
            CaptionIncludedValidator(SpecVersion.EMA_1_6_TV),
            CaptionExemptionValidator(),
        ),
    )
    return {spec.version: spec for spec in (ema_1_5, ema_1_6_movie, ema_1_6_tv)}


SPECIFICATIONS: dict[SpecVersion, Specification] = _build_specifications()


def get_specification(version: SpecVersion | str) -> Specification:
    """Get the Specification registered for a version.

    Args:
        version: A SpecVersion or its name (e.g. "EMA 1.6 TV")

    Returns:
        The Specification for that version
    """
    if not isinstance(version, SpecVersion):
        version = SpecVersion.from_name(version)
    return SPECIFICATIONS[version]


def list_versions() -> list[SpecVersion]:
    """List all spec versions with a registered Specification."""
    return list(SPECIFICATIONS.keys())


def detect_version(headers: Iterable[str]) -> SpecVersion | None:
    """Pick the spec version that best fits a sheet's header row.

    A version is a candidate only if every one of its required columns is
    present. Candidates are ranked by matched columns minus unsupported
    headers; ties go to the smaller spec (the closest fit).

    Args:
        headers: Header cells of the sheet

    Returns:
        The best-fitting version, or None if no version fits
    """
    present = {header.strip() for header in headers if header and header.strip()}
    best: tuple[int, int] | None = None
    best_version: SpecVersion | None = None

    for version, spec in SPECIFICATIONS.items():
        if not set(spec.required_columns) <= present:
            logger.debug(f"{version} rejected, missing {set(spec.required_columns) - present}")
            continue
        matched = len(present & set(spec.columns))
        unsupported = len(present - set(spec.columns))
        score = (matched - unsupported, -len(spec.columns))
        if best is None or score > best:
            best = score
            best_version = version

    return best_version

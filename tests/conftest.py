"""Pytest configuration for ema-avails-validator tests.

This file is automatically loaded by pytest and sets up test fixtures
and configuration that are shared across all test modules.
"""

import pytest

from ema_avails_validator.validation.base import ErrorLog
from ema_avails_validator.validation.specs import SpecVersion, get_specification
from ema_avails_validator.validation.summary import SheetErrorSummary


@pytest.fixture(autouse=True)
def clean_validator_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep developer .env settings out of the tests."""
    for name in ("EMA_VALIDATOR_SPEC_VERSION", "EMA_VALIDATOR_FAIL_ON", "EMA_VALIDATOR_LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def movie_summary() -> SheetErrorSummary:
    """Empty summary for an EMA 1.6 Movie sheet."""
    return SheetErrorSummary("Movies", 0, get_specification(SpecVersion.EMA_1_6_MOVIE))


@pytest.fixture
def movie_log(movie_summary: SheetErrorSummary) -> ErrorLog:
    """Error log bound to ``movie_summary``."""
    return ErrorLog(movie_summary)


@pytest.fixture
def tv_summary() -> SheetErrorSummary:
    """Empty summary for an EMA 1.6 TV sheet."""
    return SheetErrorSummary("TV", 1, get_specification(SpecVersion.EMA_1_6_TV))


@pytest.fixture
def tv_log(tv_summary: SheetErrorSummary) -> ErrorLog:
    """Error log bound to ``tv_summary``."""
    return ErrorLog(tv_summary)


@pytest.fixture
def movie_row() -> dict[str, str]:
    """A valid EMA 1.6 Movie avail."""
    return {
        "DisplayName": "Example Studios",
        "StoreLanguage": "en",
        "Territory": "US",
        "WorkType": "Movie",
        "EntryType": "Full Extract",
        "TitleInternalAlias": "The Example",
        "LicenseType": "EST",
        "FormatProfile": "HD",
        "Start": "2014-01-01",
        "End": "2014-12-31",
        "PriceType": "Tier",
        "PriceValue": "1",
        "AvailID": "AV-0001",
        "OtherInstructions": "",
        "ExceptionFlag": "",
        "CaptionIncluded": "Yes",
        "CaptionExemption": "",
        "TotalRunTime": "1:45:00",
    }


@pytest.fixture
def tv_row() -> dict[str, str]:
    """A valid EMA 1.6 TV episode avail."""
    return {
        "DisplayName": "Example Studios",
        "StoreLanguage": "en",
        "Territory": "US",
        "WorkType": "Episode",
        "EntryType": "Full Extract",
        "SeriesTitleInternalAlias": "Example Show",
        "SeasonNumber": "1",
        "EpisodeNumber": "3",
        "LicenseType": "EST",
        "FormatProfile": "HD",
        "Start": "2014-01-01",
        "End": "Open",
        "PriceType": "Tier",
        "PriceValue": "2",
        "AvailID": "AV-TV-0003",
        "CaptionIncluded": "No",
        "CaptionExemption": "3",
    }

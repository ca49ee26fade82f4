"""Regular expressions shared by the column and row validators.

Patterns are matched against the whole cell value (``re.fullmatch``) unless
noted otherwise. Values are compared case-insensitively where the EMA spec
allows either case.
"""

from __future__ import annotations

import re

# Characters that break downstream metadata ingestion (searched, not matched)
ILLEGAL_METADATA_CHARACTERS = re.compile(r"[\t\r\n<>\"|\\]")

# Country and language codes
UNITED_STATES_COUNTRY_CODE = re.compile(r"US", re.IGNORECASE)
TERRITORY_CODE = re.compile(r"[A-Z]{2}", re.IGNORECASE)
LANGUAGE_CODE = re.compile(r"[a-z]{2,3}(-[a-z0-9]{2,8})*", re.IGNORECASE)

# Enumerated values
YES_OR_NO_ONLY = re.compile(r"yes|no", re.IGNORECASE)
YES_ONLY = re.compile(r"yes", re.IGNORECASE)
FORMAT_PROFILE_VALUES = re.compile(r"SD|HD|3D|UHD", re.IGNORECASE)
ENTRY_TYPE_VALUES = re.compile(r"Full Extract|Full Delete", re.IGNORECASE)
LICENSE_TYPE_VALUES = re.compile(r"EST|VOD|SVOD|POEST|PEST|FVOD|AVOD", re.IGNORECASE)
LOCALIZATION_TYPE_VALUES = re.compile(r"sub|dub|subdub|any", re.IGNORECASE)
PRICE_TYPE_VALUES = re.compile(r"Tier|Category|WSP|SRP|NA", re.IGNORECASE)
MOVIE_WORK_TYPE_VALUES = re.compile(r"Movie|Short", re.IGNORECASE)
TV_WORK_TYPE_VALUES = re.compile(r"Episode|Season|Series|Mini-Series", re.IGNORECASE)
CAPTION_EXEMPTION_VALUES = re.compile(r"[1-6]")
OPEN_END_DATE = re.compile(r"Open", re.IGNORECASE)

# Numbers, dates and durations
DATE_FORMAT = re.compile(r"\d{4}-\d{2}-\d{2}")
YEAR_FORMAT = re.compile(r"\d{4}")
INTEGER_FORMAT = re.compile(r"\d+")
FLOAT_FORMAT = re.compile(r"\d+(\.\d+)?")
RUN_TIME_FORMAT = re.compile(r"\d{1,3}:[0-5]\d:[0-5]\d")

# Substring match used to recognise season aggregate rows
SEASON_WORK_TYPE = re.compile(r"season", re.IGNORECASE)
EPISODE_WORK_TYPE = re.compile(r"episode", re.IGNORECASE)

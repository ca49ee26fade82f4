"""Message and expected-value texts reported by the validators.

Entries are deduplicated on these strings, so every violation of one rule must
use the same message/expected pair.
"""

# Generic cell format problems
SPECIFIC_VALUES_ONLY = "Only specific values are allowed in this column."
INVALID_DATE_FORMAT = "Invalid date format."
INVALID_NUMBER_FORMAT = "Invalid number format."
INVALID_CODE_FORMAT = "Invalid code format."
VALUE_TOO_LONG = "Value is longer than the column allows."
REQUIRED_VALUE_MISSING = "A value is required for this column."
REQUIRED_VALUE_EXPECTED = "Any non-empty value."
ILLEGAL_METADATA_CHARACTERS = "The value contains characters that are not allowed in metadata."
ILLEGAL_METADATA_CHARACTERS_EXPECTED = (
    "Values must not contain tabs, line breaks, double quotes, '<', '>', '|' or '\\'."
)

# Expected values per column family
EXPECTED_DATE = "A date in the form YYYY-MM-DD."
EXPECTED_END_DATE = "A date in the form YYYY-MM-DD, or 'Open'."
EXPECTED_YEAR = "A four digit year, for example 2014."
EXPECTED_INTEGER = "A whole number, for example 48."
EXPECTED_PRICE = "A non-negative decimal number, for example 9.99."
EXPECTED_RUN_TIME = "A duration in the form H:MM:SS, for example 1:45:00."
EXPECTED_TERRITORY = "A two letter ISO 3166-1 country code, for example US."
EXPECTED_LANGUAGE = "A language code such as en, fr-CA or zh-Hant."
EXPECTED_FORMAT_PROFILE = "One of SD, HD, 3D or UHD."
EXPECTED_ENTRY_TYPE = "One of 'Full Extract' or 'Full Delete'."
EXPECTED_LICENSE_TYPE = "One of EST, VOD, SVOD, POEST, PEST, FVOD or AVOD."
EXPECTED_LOCALIZATION_TYPE = "One of sub, dub, subdub or any."
EXPECTED_PRICE_TYPE = "One of Tier, Category, WSP, SRP or NA."
EXPECTED_MOVIE_WORK_TYPE = "One of Movie or Short."
EXPECTED_TV_WORK_TYPE = "One of Episode, Season, Series or Mini-Series."
EXPECTED_YES_OR_NO = "Yes or No."
EXPECTED_CAPTION_EXEMPTION = "A caption exemption code from 1 to 6."

# Header problems
UNSUPPORTED_COLUMN = "Invalid column header."
UNSUPPORTED_COLUMN_EXPECTED = (
    "Please refer to the parent EMA spec for the precise column names, as these are not flexible."
)
MISSING_REQUIRED_COLUMN = "A required column is missing from the header row."
MISSING_REQUIRED_COLUMN_EXPECTED = "Every required column of the EMA spec must be present."
MISSING_OPTIONAL_COLUMN = "An optional column is not present in the header row."
MISSING_OPTIONAL_COLUMN_EXPECTED = "Optional columns may be omitted; their checks were skipped."

# Cross-column rules
CAPTION_INCLUDED_ERROR = "CaptionIncluded must be set for avails in the United States."
CAPTION_INCLUDED_EXPECTED = "CaptionIncluded must be 'Yes' or 'No' when Territory is US."
CAPTION_EXEMPTION_ERROR = "CaptionExemption is required when captions are not included."
CAPTION_EXEMPTION_EXPECTED = (
    "A caption exemption code from 1 to 6 when Territory is US and CaptionIncluded is 'No'."
)
EXCEPTION_FLAG_NOT_SET = (
    "The exception flag column must be 'Yes' if manual columns are filled in."
)
EXCEPTION_FLAG_EXPECTED = "ExceptionFlag is 'Yes' whenever OtherInstructions has a value."
WINDOW_DATES_ERROR = "The avail window starts after it ends."
WINDOW_DATES_EXPECTED = "Start must be on or before End."
EPISODE_NUMBER_MISSING = "Episode avails must carry an episode number."
EPISODE_NUMBER_EXPECTED = "EpisodeNumber is filled in whenever WorkType is Episode."
OPEN_ENDED_WINDOW = "The avail window has no fixed end date."
OPEN_ENDED_WINDOW_EXPECTED = "End of 'Open' is accepted and treated as an indefinite window."

"""Runtime settings for the validator.

Settings come from environment variables, optionally loaded from a ``.env``
file in the working directory:

    EMA_VALIDATOR_SPEC_VERSION  Spec version to validate against (default: detect)
    EMA_VALIDATOR_FAIL_ON       Lowest severity that fails a run (default: error)
    EMA_VALIDATOR_LOG_LEVEL     Root log level (default: INFO)
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from dotenv import load_dotenv

from ema_avails_validator.validation.base import Severity
from ema_avails_validator.validation.specs import SpecVersion

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Settings:
    """Validator settings.

    Attributes:
        spec_version: Version to validate every sheet against, or None to detect
        fail_on: Lowest severity that makes a run fail
        log_level: Root logging level name
    """

    spec_version: SpecVersion | None = None
    fail_on: Severity = Severity.ERROR
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment (and ``.env``, if present).

    Raises:
        ValueError: If a variable is set to an unknown version, severity or log level
    """
    load_dotenv()

    version_name = os.getenv("EMA_VALIDATOR_SPEC_VERSION")
    spec_version = SpecVersion.from_name(version_name) if version_name else None

    fail_on_name = os.getenv("EMA_VALIDATOR_FAIL_ON", Severity.ERROR.value)
    try:
        fail_on = Severity(fail_on_name.strip().lower())
    except ValueError as e:
        raise ValueError(
            f"Invalid EMA_VALIDATOR_FAIL_ON: {fail_on_name}. Available: {[s.value for s in Severity]}"
        ) from e

    log_level = os.getenv("EMA_VALIDATOR_LOG_LEVEL", "INFO").strip().upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Invalid EMA_VALIDATOR_LOG_LEVEL: {log_level}")

    settings = Settings(spec_version=spec_version, fail_on=fail_on, log_level=log_level)
    logger.debug(f"Loaded settings: {settings}")
    return settings

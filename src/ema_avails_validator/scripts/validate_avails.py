#!/usr/bin/env python3
"""Validate an EMA avails workbook.

Checks every sheet of an XLSX workbook (or a single TSV/CSV sheet) against the
EMA avails spec and reports each distinct problem once, with every row it
occurred in.

Usage:
    uv run python -m ema_avails_validator.scripts.validate_avails avails.xlsx
    uv run python -m ema_avails_validator.scripts.validate_avails avails.xlsx --sheet Movies
    uv run python -m ema_avails_validator.scripts.validate_avails avails.tsv --spec-version "EMA 1.6 TV"
    uv run python -m ema_avails_validator.scripts.validate_avails avails.xlsx -o report.tsv --fail-on critical
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from ema_avails_validator.config import load_settings
from ema_avails_validator.validation import (
    Severity,
    SpecVersion,
    export_validation_report,
    list_versions,
    print_validation_report,
    validate_workbook,
)
from ema_avails_validator.workbook import read_workbook

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


@click.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option(
    "--spec-version",
    type=click.Choice([v.value for v in SpecVersion], case_sensitive=False),
    default=None,
    help="EMA spec version to validate against (detected per sheet by default)",
)
@click.option(
    "--sheet",
    "-s",
    "sheets",
    multiple=True,
    help="Validate only this sheet (can be repeated)",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(path_type=Path),
    default=None,
    help="Export report to a JSON file, or TSV if the name ends in .tsv",
)
@click.option(
    "--fail-on",
    type=click.Choice([s.value for s in Severity], case_sensitive=False),
    default=None,
    help="Exit with status 1 if any finding is at least this severe (default: error)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Include notifications in output",
)
@click.option(
    "--debug",
    is_flag=True,
    help="Enable debug logging",
)
def main(
    input_path: Path,
    spec_version: str | None,
    sheets: tuple[str, ...],
    output: Path | None,
    fail_on: str | None,
    verbose: bool,
    debug: bool,
) -> None:
    """Validate an EMA avails workbook against the EMA spec.

    \b
    Reports, per sheet:
    - Unsupported and missing column headers (critical)
    - Cell values in the wrong format (error)
    - Cross-column rule violations such as caption rules (error/warning)
    - Informational notices, with --verbose
    """
    try:
        settings = load_settings()
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    logging.getLogger().setLevel(logging.DEBUG if debug else settings.log_level)

    version = SpecVersion.from_name(spec_version) if spec_version else settings.spec_version
    threshold = Severity(fail_on.lower()) if fail_on else settings.fail_on

    try:
        workbook = read_workbook(input_path)
    except ValueError as e:
        raise click.UsageError(str(e)) from e

    if sheets:
        unknown = [name for name in sheets if workbook.get_sheet(name) is None]
        if unknown:
            available = ", ".join(sheet.name for sheet in workbook.sheets)
            raise click.UsageError(f"Sheet(s) not found: {', '.join(unknown)}. Available: {available}")

    click.echo(f"Validating {input_path.name}...")
    if version is None:
        click.echo(f"Detecting spec version per sheet from: {', '.join(v.value for v in list_versions())}")

    try:
        report = validate_workbook(workbook, version=version, sheet_names=list(sheets) or None)
    except ValueError as e:
        raise click.UsageError(f"{e}. Use --spec-version to choose one.") from e

    print_validation_report(report, verbose=verbose)

    if output is not None:
        export_validation_report(report, output)
        click.echo(f"\nExported report to {output}")

    if report.has_errors_at(threshold):
        click.echo(f"\nFAILED: findings at {threshold.value} level or above")
        sys.exit(1)
    click.echo("\nPASSED")


if __name__ == "__main__":
    main()

"""
csvcursor: command line front end for ``CSVReader``.

Settings come from CLI flags, then environment variables (optionally from a
``.env`` file in the working directory), then ``ReaderConfig`` defaults:

    CSV_FIELD_DELIMITER   Field delimiter (default ",")
    CSV_TEXT_QUALIFIER    Text qualifier (default: none)
    CSV_ROW_DELIMITER     Row delimiter, backslash escapes allowed (default: any line break)
    CSV_FIELD_NAME_ROW    Header row index (default 0)
    CSV_FIRST_DATA_ROW    First data row index (default 1)
    CSV_ENCODING_TYPE     AUTO_DETECT | ANSI | UTF8 (default AUTO_DETECT)
    CSV_ANSI_ENCODING     Codec used for ANSI (default cp1252)

Commands:
    headers   Print the header names with their index.
    rows      Print data rows as CSV or JSON lines.
    validate  Check the header and that every row matches its field count.

Usage examples:
    csvcursor headers  --source data/contacts.csv
    csvcursor rows     --source data/contacts.csv --qualifier '"' --fields id,name --format json
    csvcursor validate --source data/contacts.csv --delimiter ';'

Exit codes:
    0  Success
    1  Source or validation error
    2  Configuration / argument error
"""

from __future__ import annotations

import argparse
import csv
import json
import logging
import sys

from dotenv import find_dotenv, load_dotenv

from csvcursor.configs.config import EncodingType, ReaderConfig, unescape_text
from csvcursor.configs.exceptions import AlignmentError, ConfigError, CSVParserError
from csvcursor.discovery.csv_reader import CSVReader
from csvcursor.transformers.row_generator import generate_records, generate_rows
from csvcursor.utils.validation import find_misaligned_rows, validate_headers_not_empty

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Logging
# ---------------------------------------------------------------------------

def _setup_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%dT%H:%M:%S",
        level=level,
        stream=sys.stderr,
    )


# ---------------------------------------------------------------------------
# Config: CLI flags override env vars override defaults
# ---------------------------------------------------------------------------

def _build_config(args: argparse.Namespace) -> ReaderConfig:
    kwargs: dict = {}

    if args.delimiter is not None:      kwargs["field_delimiter"] = unescape_text(args.delimiter)
    if args.qualifier is not None:      kwargs["text_qualifier"]  = unescape_text(args.qualifier) or None
    if args.row_delimiter is not None:  kwargs["row_delimiter"]   = unescape_text(args.row_delimiter)
    if args.field_name_row is not None: kwargs["field_name_row"]  = args.field_name_row
    if args.first_data_row is not None: kwargs["first_data_row"]  = args.first_data_row
    if args.encoding is not None:       kwargs["encoding_type"]   = EncodingType.parse(args.encoding)

    return ReaderConfig(**kwargs)


def _open_reader(args: argparse.Namespace) -> CSVReader:
    reader = CSVReader(args.source, config=_build_config(args))
    reader.open()
    return reader


# ---------------------------------------------------------------------------
# Subcommand handlers
# ---------------------------------------------------------------------------

def _cmd_headers(args: argparse.Namespace) -> int:
    reader = _open_reader(args)
    try:
        for index, name in enumerate(reader.headers()):
            print(f"{index}\t{name}")
    finally:
        reader.close()
    return 0


def _cmd_rows(args: argparse.Namespace) -> int:
    reader = _open_reader(args)
    try:
        fields = [f.strip() for f in args.fields.split(",")] if args.fields else None
        if args.format == "json":
            for record in generate_records(reader, fields):
                print(json.dumps(record, ensure_ascii=False))
        elif fields is None:
            writer = csv.writer(sys.stdout, lineterminator="\n")
            for row in generate_rows(reader):
                writer.writerow(row)
        else:
            writer = csv.writer(sys.stdout, lineterminator="\n")
            for record in generate_records(reader, fields):
                writer.writerow(record.values())
    finally:
        reader.close()
    return 0


def _cmd_validate(args: argparse.Namespace) -> int:
    reader = _open_reader(args)
    try:
        source = str(reader.path)
        try:
            validate_headers_not_empty(
                reader.headers(), source, row_number=reader.config.field_name_row
            )
        except AlignmentError as e:
            print(f"✗ {source} — {e}", file=sys.stderr)
            return 1

        errors = find_misaligned_rows(reader)
        if errors:
            for error in errors:
                logger.debug("Misaligned row: %s", error)
            print(
                f"✗ {source} — {len(errors)} misaligned row(s); first: {errors[0]}",
                file=sys.stderr,
            )
            return 1

        print(f"✓ {source} — valid ({reader.row_count()} row(s), {reader.field_count()} field(s))")
        return 0
    finally:
        reader.close()


# ---------------------------------------------------------------------------
# Argument parser (importable for tests)
# ---------------------------------------------------------------------------

def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="csvcursor",
        description="Sequential CSV reader",
        epilog=(
            "Reader settings may also come from CSV_* environment variables\n"
            "or a .env file in the working directory."
        ),
    )
    parser.add_argument("--verbose", "-v", action="store_true")

    sub = parser.add_subparsers(dest="command", required=True)

    def _source_args(p):
        p.add_argument("--source", required=True)

    def _config_args(p):
        p.add_argument("--delimiter",      default=None)
        p.add_argument("--qualifier",      default=None)
        p.add_argument("--row-delimiter",  default=None, dest="row_delimiter")
        p.add_argument("--field-name-row", type=int, default=None, dest="field_name_row")
        p.add_argument("--first-data-row", type=int, default=None, dest="first_data_row")
        p.add_argument(
            "--encoding",
            default=None,
            help="AUTO_DETECT, ANSI or UTF8",
        )

    p_headers = sub.add_parser("headers", help="Print header names")
    _source_args(p_headers); _config_args(p_headers)

    p_rows = sub.add_parser("rows", help="Print data rows")
    _source_args(p_rows); _config_args(p_rows)
    p_rows.add_argument("--fields", default=None, help="Comma-separated header names")
    p_rows.add_argument("--format", choices=("csv", "json"), default="csv")

    p_val = sub.add_parser("validate", help="Check row alignment against the header")
    _source_args(p_val); _config_args(p_val)

    return parser


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def run(argv: list[str] | None = None) -> int:
    """Parse ``argv``, dispatch the subcommand and return its exit code."""
    load_dotenv(find_dotenv(usecwd=True))
    parser = _build_parser()
    args = parser.parse_args(argv)
    _setup_logging(args.verbose)
    handlers = {"headers": _cmd_headers, "rows": _cmd_rows, "validate": _cmd_validate}

    try:
        return handlers[args.command](args)
    except ConfigError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except CSVParserError as e:
        logger.error("%s failed: %s", args.command, e)
        print(f"✗ {args.source} — {e}", file=sys.stderr)
        return 1


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()

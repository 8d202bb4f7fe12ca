"""
Row shape checks for a loaded ``CSVReader``.

The cursor happily serves ragged files: ``field_at`` only fails when the
caller asks for a position the current row lacks.  The ``validate``
command (and any caller wanting a strict file) uses these helpers to find
rows whose field count differs from the header before reading them.

Row numbers are the zero-based line indices the cursor uses, so an
``AlignmentError.row_number`` can be passed straight to ``CSVReader.seek``.
"""

from __future__ import annotations

from csvcursor.configs.exceptions import AlignmentError
from csvcursor.discovery.csv_reader import CSVReader


def validate_row_alignment(
    row: list[str],
    expected_field_count: int,
    row_number: int,
    source_path: str | None = None,
) -> None:
    """
    Raise ``AlignmentError`` unless ``row`` has ``expected_field_count`` fields.

    Args:
        row:                  Tokenized fields of one line.
        expected_field_count: Field count of the header line.
        row_number:           Line index of ``row`` in the source.
        source_path:          Source file, when there is one.
    """
    got = len(row)
    if got == expected_field_count:
        return
    raise AlignmentError(
        f"Row {row_number} has {got} fields, expected {expected_field_count}.",
        source_path=source_path,
        row_number=row_number,
        expected=expected_field_count,
        got=got,
    )


def validate_headers_not_empty(
    headers: list[str],
    source_path: str | None = None,
    row_number: int = 0,
) -> None:
    """
    Reject a header line that is missing or holds blank names.

    Blank names cannot be looked up with ``field_by_name``; every blank
    position is listed in the error message.
    """
    if not headers:
        raise AlignmentError(
            "CSV source has no headers.",
            source_path=source_path,
            row_number=row_number,
            expected=1,
            got=0,
        )

    blank = [str(i) for i, name in enumerate(headers) if not name.strip()]
    if blank:
        raise AlignmentError(
            f"Header name is blank at position {', '.join(blank)}.",
            source_path=source_path,
            row_number=row_number,
            expected=len(headers),
            got=len(headers) - len(blank),
        )


def find_misaligned_rows(reader: CSVReader) -> list[AlignmentError]:
    """
    Collect an ``AlignmentError`` for every data row of ``reader`` whose
    field count differs from ``reader.field_count()``.

    Iterates with ``reader.rows()``, so the cursor ends after-last.
    """
    source_path = str(reader.path) if reader.path else None
    expected = reader.field_count()
    errors: list[AlignmentError] = []

    for row_number, row in enumerate(reader.rows(), start=reader.config.first_data_row):
        try:
            validate_row_alignment(row, expected, row_number, source_path)
        except AlignmentError as e:
            errors.append(e)
    return errors

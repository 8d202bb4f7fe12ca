"""
Row streams over a loaded ``CSVReader``.

Key properties:
  - **Lazy**: each row is tokenized only when the generator reaches it.
  - **Rewindable**: every call starts again from the first data row
    (relies on ``CSVReader.rows()`` rewinding on each call).
  - **Named output**: ``generate_records`` yields dicts keyed by header
    name, in header order (or in the order of ``fields`` when given).

Usage::

    for record in generate_records(reader, fields=["id", "Name"]):
        # record == {"id": "1", "Name": "Alice"}
        pass
"""

from __future__ import annotations

from typing import Iterator, Sequence

from csvcursor.configs.exceptions import FieldNotFoundError
from csvcursor.discovery.base import AbstractSource


def generate_rows(source: AbstractSource) -> Iterator[list[str]]:
    """Yield every data row of an already-loaded ``source`` as a field list."""
    yield from source.rows()


def generate_records(
    source: AbstractSource,
    fields: Sequence[str] | None = None,
) -> Iterator[dict[str, str]]:
    """
    Stream data rows as dicts keyed by header name.

    Args:
        source: An already-loaded source.
        fields: Optional subset of header names to emit, matched
                case-insensitively.  Keys use the spelling from the header.

    Yields:
        One ``dict`` per data row.  Fields missing from a short row map to ``""``.

    Raises:
        FieldNotFoundError: If a name in ``fields`` is not a header.
    """
    headers = source.headers()
    if fields is None:
        selected = list(enumerate(headers))
    else:
        lookup = {}
        for i, name in enumerate(headers):
            lookup.setdefault(name.casefold(), i)
        selected = []
        for name in fields:
            index = lookup.get(name.casefold())
            if index is None:
                raise FieldNotFoundError(name)
            selected.append((index, headers[index]))

    for row in source.rows():
        yield {
            name: row[index] if index < len(row) else ""
            for index, name in selected
        }

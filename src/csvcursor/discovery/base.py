"""
Row source interface shared by the reader, the row generators and the CLI.

A source is loaded whole by ``open()``; ``headers()`` and ``rows()`` then
read from memory, so neither touches the file again.  ``generate_rows`` and
``generate_records`` only need this interface, not the cursor methods of
``CSVReader``.

Usage:
    with CSVReader("contacts.csv", field_delimiter=";") as source:
        print(source.headers())
        for fields in source.rows():
            ...
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Iterator


class AbstractSource(ABC):
    """
    A loadable table of text fields with one header line.

    ``path`` is optional: sources loaded from a stream or from a list of
    lines have none.  Used as a context manager, the source is opened on
    entry and its content dropped on exit.
    """

    def __init__(self, path: Path | str | None = None) -> None:
        self.path = Path(path) if path is not None else None

    @abstractmethod
    def open(self) -> None:
        """Load ``path`` into memory, replacing any earlier content."""

    @abstractmethod
    def headers(self) -> list[str]:
        """Field names from the header line; ``[]`` when nothing is loaded."""

    @abstractmethod
    def rows(self) -> Iterator[list[str]]:
        """
        Yield the fields of every data line, in file order.

        Lines before the first data line (the header among them) are skipped.
        Every call starts again from the first data line.
        """

    @abstractmethod
    def close(self) -> None:
        """Drop the loaded lines and header names."""

    def __enter__(self) -> "AbstractSource":
        self.open()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()

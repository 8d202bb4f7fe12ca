"""
Cursor-style CSV reader implementing ``AbstractSource``.

The whole source is loaded into a ``LineStore`` up front; fields are then
tokenized lazily, one row at a time, as the caller reads them.

Cursor states:
  - before-first  ``current_row_index < first_data_row``
  - positioned    a valid data row; its raw text is cached
  - after-last    ``current_row_index > last row``

The three states never overlap, even when ``first_data_row`` lies past the
last line.

Handles:
- Header names read once per load from ``field_name_row``.
- Case-insensitive field lookup by name.
- Boundary moves never raise: ``advance`` past the end parks the cursor
  after-last, ``retreat`` before the start parks it before-first.
- Direct positioning (``seek``, ``first``, ``last``, ``current_row_index``)
  raises ``OutOfRangeError`` and leaves the cursor untouched.

Usage::

    reader = CSVReader("contacts.csv", text_qualifier='"')
    reader.open()
    while not reader.is_after_last():
        print(reader.field_by_name("Name"))
        reader.advance()
    reader.close()
"""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import IO, Iterable, Iterator

from csvcursor.configs.config import ReaderConfig
from csvcursor.configs.exceptions import (
    FieldIndexError,
    FieldNotFoundError,
    OutOfRangeError,
    SourceNotFoundError,
)
from csvcursor.discovery.base import AbstractSource
from csvcursor.discovery.line_store import LineStore
from csvcursor.discovery.tokenizer import tokenize
from csvcursor.loaders.source_loader import read_lines_from_file, read_lines_from_stream

logger = logging.getLogger(__name__)


class CSVReader(AbstractSource):
    """
    Sequential CSV reader with a movable row cursor.

    Args:
        path: Optional path to the CSV file, used by ``open()``.
        config: Reader settings.  Defaults to ``ReaderConfig()``.
        **overrides: Individual ``ReaderConfig`` fields overriding ``config``.

    Raises:
        ConfigError: If the resulting configuration is invalid.
    """

    def __init__(
        self,
        path: Path | str | None = None,
        config: ReaderConfig | None = None,
        **overrides,
    ) -> None:
        super().__init__(path)
        config = config if config is not None else ReaderConfig()
        if overrides:
            config = dataclasses.replace(config, **overrides)
        config.validate()
        self.config = config

        self._store = LineStore()
        self._field_names: list[str] = []
        self._row_index = -1
        self._current_row = ""
        self._fields: list[str] | None = None

    # ── loading ──────────────────────────────────────────────────────────

    def open(self) -> None:
        """
        Load ``self.path``, read the header row and position at the first data row.

        Raises:
            SourceNotFoundError: If no path is set or the file does not exist.
            SourceDecodeError:   If the file cannot be decoded.
        """
        if self.path is None:
            raise SourceNotFoundError("No source file set")
        lines = read_lines_from_file(
            self.path,
            encoding_type=self.config.encoding_type,
            row_delimiter=self.config.row_delimiter,
            ansi_encoding=self.config.ansi_encoding,
        )
        self._after_load(lines)

    def load_from_file(self, path: Path | str) -> None:
        self.path = Path(path)
        self.open()

    def load_from_stream(self, stream: IO, source_path: str | None = None) -> None:
        """Load from a binary (or already-decoded text) file-like object."""
        lines = read_lines_from_stream(
            stream,
            encoding_type=self.config.encoding_type,
            row_delimiter=self.config.row_delimiter,
            ansi_encoding=self.config.ansi_encoding,
            source_path=source_path,
        )
        self._after_load(lines)

    def load_from_lines(self, lines: Iterable[str]) -> None:
        """Load already-split, already-decoded rows."""
        self._after_load(lines)

    def close(self) -> None:
        """Drop the loaded lines and header names."""
        self._store.clear()
        self._field_names = []
        self._row_index = -1
        self._current_row = ""
        self._fields = None

    def _after_load(self, lines: Iterable[str]) -> None:
        self._store.load(lines)
        self._load_field_names()

        first = self.config.first_data_row
        count = self._store.count()
        if first < count:
            self._move_to(first)
        else:
            # No data rows: park after-last so iteration loops end at once.
            self._move_to(max(first, count))

        logger.debug(
            "Loaded %d line(s), %d field name(s), %d data row(s) from %s",
            self._store.count(), len(self._field_names), self.row_count(),
            self.path or "<stream>",
        )

    def _load_field_names(self) -> None:
        row = self.config.field_name_row
        if row < self._store.count():
            self._field_names = self._tokenize(self._store.get(row))
        else:
            self._field_names = []

    # ── cursor ───────────────────────────────────────────────────────────

    @property
    def current_row_index(self) -> int:
        return self._row_index

    @current_row_index.setter
    def current_row_index(self, value: int) -> None:
        self.seek(value)

    @property
    def current_row_text(self) -> str:
        """Raw text of the current row; ``""`` outside the data rows."""
        return self._current_row

    def is_before_first(self) -> bool:
        return self._row_index < self.config.first_data_row

    def is_after_last(self) -> bool:
        return self._row_index > self._store.count() - 1

    def seek(self, index: int) -> None:
        """
        Position the cursor on row ``index``.

        Raises:
            OutOfRangeError: If ``index`` is outside ``[first_data_row, row count - 1]``.
                The cursor is left where it was.
        """
        lower = self.config.first_data_row
        upper = self._store.count() - 1
        if index < lower or index > upper:
            raise OutOfRangeError("Value out of range", value=index, lower=lower, upper=upper)
        self._move_to(index)

    def first(self) -> None:
        self.seek(self.config.first_data_row)

    def last(self) -> None:
        self.seek(self._store.count() - 1)

    def advance(self) -> None:
        """Move to the next row; stays after-last once past the end."""
        if self.is_after_last():
            return
        self._move_to(max(self._row_index + 1, self.config.first_data_row))

    def retreat(self) -> None:
        """Move to the previous row; stays before-first once past the start."""
        if self.is_before_first():
            return
        self._move_to(min(self._row_index - 1, self._store.count() - 1))

    def _move_to(self, index: int) -> None:
        self._row_index = index
        if self.is_before_first() or self.is_after_last():
            self._current_row = ""
        else:
            self._current_row = self._store.get(index)
        self._fields = None

    # ── fields ───────────────────────────────────────────────────────────

    @property
    def field_names(self) -> list[str]:
        return list(self._field_names)

    def field_count(self) -> int:
        """Number of header fields."""
        return len(self._field_names)

    def row_count(self) -> int:
        """Number of data rows (lines from ``first_data_row`` on)."""
        return max(0, self._store.count() - self.config.first_data_row)

    def field_name_at(self, index: int) -> str:
        """
        Return the header name at ``index``.

        Raises:
            FieldIndexError: If ``index`` is outside ``[0, field_count())``.
        """
        if index < 0 or index >= len(self._field_names):
            raise FieldIndexError(
                "Field name index out of range",
                index=index,
                field_count=len(self._field_names),
            )
        return self._field_names[index]

    def field_at(self, index: int) -> str:
        """
        Return field ``index`` of the current row.

        Raises:
            FieldIndexError: If the current row has no field at ``index``.
                Before-first and after-last rows have no fields at all.
        """
        fields = self._current_fields()
        if index < 0 or index >= len(fields):
            raise FieldIndexError(
                f"Field index out of range at row {self._row_index}",
                index=index,
                field_count=len(fields),
            )
        return fields[index]

    def field_by_name(self, name: str) -> str:
        """
        Return the current row's value for header ``name`` (case-insensitive).

        Raises:
            FieldNotFoundError: If no header matches ``name``.
            FieldIndexError:    If the current row is shorter than the header.
        """
        index = self._index_of(name)
        if index < 0:
            raise FieldNotFoundError(name)
        return self.field_at(index)

    def contains_field(self, name: str) -> bool:
        return self._index_of(name) >= 0

    def current_record(self) -> dict[str, str]:
        """Current row keyed by header name; missing trailing fields map to ``""``."""
        fields = self._current_fields()
        return {
            name: fields[i] if i < len(fields) else ""
            for i, name in enumerate(self._field_names)
        }

    def _index_of(self, name: str) -> int:
        key = name.casefold()
        for i, field_name in enumerate(self._field_names):
            if field_name.casefold() == key:
                return i
        return -1

    def _current_fields(self) -> list[str]:
        if self._fields is None:
            self._fields = self._tokenize(self._current_row)
        return self._fields

    def _tokenize(self, raw_row: str) -> list[str]:
        return tokenize(raw_row, self.config.field_delimiter, self.config.text_qualifier)

    # ── AbstractSource interface ─────────────────────────────────────────

    def headers(self) -> list[str]:
        """Return the cached header names."""
        return self.field_names

    def rows(self) -> Iterator[list[str]]:
        """
        Yield each data row as a list of fields.

        Rewinds to the first data row on each call and leaves the cursor
        after-last when exhausted.
        """
        if self.row_count() == 0:
            return
        self.first()
        while not self.is_after_last():
            yield list(self._current_fields())
            self.advance()

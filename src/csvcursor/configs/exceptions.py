"""
Custom exceptions for the csvcursor reader.

Hierarchy:
    CSVParserError
    ├── SourceError            The source could not be turned into lines.
    │   ├── SourceNotFoundError   The requested file does not exist.
    │   └── SourceDecodeError     Bytes are not valid in the requested encoding.
    ├── OutOfRangeError        Cursor positioned outside the data rows.
    ├── FieldNotFoundError     No header matches the requested field name.
    ├── FieldIndexError        Field or field-name index outside the row.
    ├── AlignmentError         Row field count doesn't match header count.
    └── ConfigError            Reader settings are unusable.
"""


class CSVParserError(Exception):
    """Base class for all reader errors."""


class SourceError(CSVParserError):
    """
    Raised when a source cannot be loaded.

    Args:
        message: Human-readable description of the failure.
        source_path: Path of the source being loaded, if it has one.
    """

    def __init__(self, message: str, source_path: str | None = None) -> None:
        super().__init__(message)
        self.source_path = source_path

    def __str__(self) -> str:
        base = super().__str__()
        if self.source_path:
            return f"{base} | source={self.source_path}"
        return base


class SourceNotFoundError(SourceError):
    """Raised when the source path is not an existing file."""


class SourceDecodeError(SourceError):
    """
    Raised when source bytes cannot be decoded with a fixed encoding.

    Args:
        message: Human-readable description.
        source_path: Path of the source, if any.
        encoding: Codec that failed.
    """

    def __init__(
        self,
        message: str,
        source_path: str | None = None,
        encoding: str | None = None,
    ) -> None:
        super().__init__(message, source_path)
        self.encoding = encoding

    def __str__(self) -> str:
        base = super().__str__()
        if self.encoding:
            return f"{base} | encoding={self.encoding}"
        return base


class OutOfRangeError(CSVParserError):
    """
    Raised when the cursor is asked to move outside ``[first_data_row, last_row]``.

    Args:
        message: Human-readable description.
        value: The rejected row index.
        lower: Lowest valid row index.
        upper: Highest valid row index (``lower - 1`` when there are no rows).
    """

    def __init__(
        self,
        message: str,
        value: int | None = None,
        lower: int | None = None,
        upper: int | None = None,
    ) -> None:
        super().__init__(message)
        self.value = value
        self.lower = lower
        self.upper = upper

    def __str__(self) -> str:
        base = super().__str__()
        parts = []
        if self.value is not None:
            parts.append(f"value={self.value}")
        if self.lower is not None and self.upper is not None:
            parts.append(f"range=[{self.lower}, {self.upper}]")
        if parts:
            return f"{base} | {' '.join(parts)}"
        return base


class FieldNotFoundError(CSVParserError, KeyError):
    """
    Raised when ``field_by_name`` finds no header with the given name.

    Args:
        field_name: The name that was looked up.
    """

    def __init__(self, field_name: str) -> None:
        super().__init__(f'"{field_name}" field not found')
        self.field_name = field_name

    def __str__(self) -> str:
        # KeyError.__str__ would repr() the message.
        return str(self.args[0])


class FieldIndexError(CSVParserError, IndexError):
    """
    Raised when a positional field lookup falls outside the row.

    Args:
        message: Human-readable description.
        index: The rejected index.
        field_count: Number of fields actually available.
    """

    def __init__(
        self,
        message: str,
        index: int | None = None,
        field_count: int | None = None,
    ) -> None:
        super().__init__(message)
        self.index = index
        self.field_count = field_count

    def __str__(self) -> str:
        base = super().__str__()
        parts = []
        if self.index is not None:
            parts.append(f"index={self.index}")
        if self.field_count is not None:
            parts.append(f"field_count={self.field_count}")
        if parts:
            return f"{base} | {' '.join(parts)}"
        return base


class AlignmentError(CSVParserError):
    """
    Raised when a row has a different number of fields than the header row.

    Args:
        message: Human-readable description.
        source_path: Path of the CSV file.
        row_number: Zero-based row index where the misalignment was detected.
        expected: Number of fields expected (from header).
        got: Number of fields actually found in the row.
    """

    def __init__(
        self,
        message: str,
        source_path: str | None = None,
        row_number: int | None = None,
        expected: int | None = None,
        got: int | None = None,
    ) -> None:
        super().__init__(message)
        self.source_path = source_path
        self.row_number = row_number
        self.expected = expected
        self.got = got

    def __str__(self) -> str:
        base = super().__str__()
        parts = []
        if self.source_path:
            parts.append(f"source={self.source_path}")
        if self.row_number is not None:
            parts.append(f"row={self.row_number}")
        if self.expected is not None:
            parts.append(f"expected={self.expected}")
        if self.got is not None:
            parts.append(f"got={self.got}")
        if parts:
            return f"{base} | {' '.join(parts)}"
        return base


class ConfigError(CSVParserError, ValueError):
    """
    Raised when a ``ReaderConfig`` setting is unusable.

    Args:
        message: Human-readable description.
        setting: Name of the offending setting.
    """

    def __init__(self, message: str, setting: str | None = None) -> None:
        super().__init__(message)
        self.setting = setting

    def __str__(self) -> str:
        base = super().__str__()
        if self.setting:
            return f"{base} | setting={self.setting}"
        return base

"""
Reader configuration.

All tuneable defaults live here. Import from this module everywhere;
never hardcode delimiters, row indices or encodings inline.

Usage:
    from csvcursor.configs.config import ReaderConfig
    cfg = ReaderConfig()                                  # defaults
    cfg = ReaderConfig(field_delimiter=";", text_qualifier='"')

Environment overrides (optional) can be loaded via .env / os.environ before
constructing the config object; this module does not load .env itself.
"""

from __future__ import annotations

import codecs
import os
from dataclasses import dataclass, field
from enum import Enum

from csvcursor.configs.exceptions import ConfigError


DEFAULT_FIELD_DELIMITER: str = ","
"""Character separating sibling fields within one row."""

DEFAULT_FIELD_NAME_ROW: int = 0
"""Row index holding the header (field names)."""

DEFAULT_FIRST_DATA_ROW: int = 1
"""Row index at which iteration begins."""

DEFAULT_ANSI_ENCODING: str = "cp1252"
"""Code page used for ANSI sources and as the AUTO_DETECT fallback."""


class EncodingType(str, Enum):
    """How the loader turns source bytes into text."""

    AUTO_DETECT = "AUTO_DETECT"
    ANSI = "ANSI"
    UTF8 = "UTF8"

    @classmethod
    def parse(cls, raw: str) -> "EncodingType":
        """Case-insensitive lookup, accepting ``utf-8`` / ``auto`` spellings."""
        key = raw.strip().upper().replace("-", "").replace("_", "")
        aliases = {"AUTO": cls.AUTO_DETECT, "AUTODETECT": cls.AUTO_DETECT}
        if key in aliases:
            return aliases[key]
        for member in cls:
            if member.value.replace("_", "") == key:
                return member
        raise ConfigError(f"Unknown encoding type: {raw!r}", setting="encoding_type")


def unescape_text(raw: str) -> str:
    """
    Resolve backslash escapes such as ``\\t`` or ``\\r\\n`` typed as plain text.

    Text that is not a valid escape sequence (a lone ``\\``, for instance)
    is returned unchanged.
    """
    try:
        return raw.encode("latin-1", "backslashreplace").decode("unicode_escape")
    except UnicodeDecodeError:
        return raw


def _env_text(key: str) -> str | None:
    """Return an env value with backslash escapes resolved, or None if unset/empty."""
    raw = os.environ.get(key)
    if not raw:
        return None
    return unescape_text(raw)


def _env_int(key: str, default: int) -> int:
    raw = os.environ.get(key)
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError as e:
        raise ConfigError(
            f"{key} must be an integer, got {raw!r}",
            setting=key.removeprefix("CSV_").lower(),
        ) from e


@dataclass(slots=True)
class ReaderConfig:
    """
    Runtime configuration for ``CSVReader``.

    Attributes:
        field_delimiter: Single character separating fields.
        text_qualifier: Optional single character enclosing a field so that it
            may contain the delimiter.  ``None`` disables qualifying.
        row_delimiter: Sequence ending one row.  ``None`` means any platform
            line break (``\\r\\n``, ``\\n`` or ``\\r``).
        field_name_row: Row index the header names are read from.
        first_data_row: Row index iteration starts at.
        encoding_type: Decoding strategy for file and stream sources.
        ansi_encoding: Python codec name used for ``EncodingType.ANSI``.
    """

    field_delimiter: str = field(
        default_factory=lambda: _env_text("CSV_FIELD_DELIMITER") or DEFAULT_FIELD_DELIMITER
    )
    text_qualifier: str | None = field(
        default_factory=lambda: _env_text("CSV_TEXT_QUALIFIER")
    )
    row_delimiter: str | None = field(
        default_factory=lambda: _env_text("CSV_ROW_DELIMITER")
    )
    field_name_row: int = field(
        default_factory=lambda: _env_int("CSV_FIELD_NAME_ROW", DEFAULT_FIELD_NAME_ROW)
    )
    first_data_row: int = field(
        default_factory=lambda: _env_int("CSV_FIRST_DATA_ROW", DEFAULT_FIRST_DATA_ROW)
    )
    encoding_type: EncodingType = field(
        default_factory=lambda: EncodingType.parse(
            os.environ.get("CSV_ENCODING_TYPE", EncodingType.AUTO_DETECT.value)
        )
    )
    ansi_encoding: str = field(
        default_factory=lambda: os.environ.get("CSV_ANSI_ENCODING", DEFAULT_ANSI_ENCODING)
    )

    def validate(self) -> None:
        """
        Check the settings are usable by the tokenizer and the cursor.

        Raises:
            ConfigError: On a multi-character delimiter or qualifier, a
                qualifier equal to the delimiter, an empty row delimiter,
                negative row indices or an unknown ANSI codec.
        """
        if len(self.field_delimiter) != 1:
            raise ConfigError(
                f"Field delimiter must be a single character, got {self.field_delimiter!r}",
                setting="field_delimiter",
            )
        if self.text_qualifier is not None:
            if len(self.text_qualifier) != 1:
                raise ConfigError(
                    f"Text qualifier must be a single character, got {self.text_qualifier!r}",
                    setting="text_qualifier",
                )
            if self.text_qualifier == self.field_delimiter:
                raise ConfigError(
                    "Text qualifier and field delimiter must differ",
                    setting="text_qualifier",
                )
        if self.row_delimiter is not None and self.row_delimiter == "":
            raise ConfigError("Row delimiter must not be empty", setting="row_delimiter")
        if self.field_name_row < 0:
            raise ConfigError(
                f"field_name_row must be >= 0, got {self.field_name_row}",
                setting="field_name_row",
            )
        if self.first_data_row < 0:
            raise ConfigError(
                f"first_data_row must be >= 0, got {self.first_data_row}",
                setting="first_data_row",
            )
        try:
            codecs.lookup(self.ansi_encoding)
        except LookupError as e:
            raise ConfigError(
                f"Unknown ANSI encoding {self.ansi_encoding!r}",
                setting="ansi_encoding",
            ) from e

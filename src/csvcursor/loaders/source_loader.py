"""
Source loading for the csvcursor reader.

Turns a file path or a byte stream into the ordered list of text lines the
``LineStore`` holds.  This is the only module that touches the filesystem or
decodes bytes; the reader core works on decoded lines.

Decoding strategies (``EncodingType``):
  - ``UTF8``        strict UTF-8; a leading BOM is stripped.
  - ``ANSI``        strict decode with ``ReaderConfig.ansi_encoding`` (cp1252 by default).
  - ``AUTO_DETECT`` try UTF-8 first, fall back to ANSI on a decode error.

Row splitting:
  - ``row_delimiter=None`` splits on any line break (``\\r\\n``, ``\\n``, ``\\r``).
  - Any other string splits on that exact sequence.
  - A single trailing delimiter does not produce an extra empty row.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import IO

from csvcursor.configs.config import DEFAULT_ANSI_ENCODING, EncodingType
from csvcursor.configs.exceptions import SourceDecodeError, SourceNotFoundError

logger = logging.getLogger(__name__)

_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")
_UTF8 = "utf-8-sig"


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------

def split_rows(text: str, row_delimiter: str | None = None) -> list[str]:
    """
    Split decoded text into physical rows.

    Args:
        text:          Decoded source text.
        row_delimiter: Exact row separator, or ``None`` for any line break.

    Returns:
        The rows without their delimiters.  ``[]`` for empty text.
    """
    if not text:
        return []
    if row_delimiter is None:
        lines = _LINE_BREAK_RE.split(text)
    else:
        lines = text.split(row_delimiter)
    if lines[-1] == "":
        lines.pop()
    return lines


def decode_bytes(
    data: bytes,
    encoding_type: EncodingType = EncodingType.AUTO_DETECT,
    ansi_encoding: str = DEFAULT_ANSI_ENCODING,
    source_path: str | None = None,
) -> str:
    """
    Decode raw source bytes according to ``encoding_type``.

    Raises:
        SourceDecodeError: If the bytes are invalid for the chosen encoding
            (for ``AUTO_DETECT``, invalid for both UTF-8 and ANSI).
    """
    if encoding_type is EncodingType.UTF8:
        return _decode(data, _UTF8, source_path)
    if encoding_type is EncodingType.ANSI:
        return _decode(data, ansi_encoding, source_path)

    try:
        text = data.decode(_UTF8)
    except UnicodeDecodeError as e:
        logger.warning(
            "Source %s is not valid UTF-8 (%s); falling back to %s",
            source_path or "<stream>", e.reason, ansi_encoding,
        )
        return _decode(data, ansi_encoding, source_path)
    logger.debug("Decoded %s as UTF-8", source_path or "<stream>")
    return text


def read_lines_from_stream(
    stream: IO,
    encoding_type: EncodingType = EncodingType.AUTO_DETECT,
    row_delimiter: str | None = None,
    ansi_encoding: str = DEFAULT_ANSI_ENCODING,
    source_path: str | None = None,
) -> list[str]:
    """
    Read the rest of ``stream`` and split it into rows.

    Binary streams are decoded per ``encoding_type``; text streams are taken
    as already decoded.
    """
    data = stream.read()
    if isinstance(data, str):
        text = data
    else:
        text = decode_bytes(bytes(data), encoding_type, ansi_encoding, source_path)
    return split_rows(text, row_delimiter)


def read_lines_from_file(
    path: Path | str,
    encoding_type: EncodingType = EncodingType.AUTO_DETECT,
    row_delimiter: str | None = None,
    ansi_encoding: str = DEFAULT_ANSI_ENCODING,
) -> list[str]:
    """
    Load ``path`` into a list of rows.

    Raises:
        SourceNotFoundError: If ``path`` is not an existing file.
        SourceDecodeError:   If the content cannot be decoded.
    """
    path = Path(path)
    if not path.is_file():
        raise SourceNotFoundError("File not exists", source_path=str(path))

    with open(path, "rb") as f:
        lines = read_lines_from_stream(
            f,
            encoding_type=encoding_type,
            row_delimiter=row_delimiter,
            ansi_encoding=ansi_encoding,
            source_path=str(path),
        )
    logger.debug("Read %d line(s) from %s", len(lines), path)
    return lines


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _decode(data: bytes, encoding: str, source_path: str | None) -> str:
    try:
        return data.decode(encoding)
    except UnicodeDecodeError as e:
        raise SourceDecodeError(
            f"Cannot decode source: {e.reason} at byte {e.start}",
            source_path=source_path,
            encoding=encoding,
        ) from e

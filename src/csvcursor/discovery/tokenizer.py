"""
Field tokenizer: splits one raw row into its field values.

A single left-to-right scan folds delimiter detection and qualifier handling
together, so a qualified field may contain the delimiter character:

    tokenize('"a","b,c",d', ",", '"')   # → ["a", "b,c", "d"]

Rules:
  - A qualifier is only significant as the first character of a field.  The
    field then runs to the next qualifier (or end of row if there is none);
    both qualifiers are dropped and doubled qualifiers are NOT unescaped.
    Anything between the closing qualifier and the next delimiter is dropped.
  - An unqualified field runs to the next delimiter or end of row.
  - A trailing delimiter produces a final empty field.
  - An empty row produces no fields at all.
  - Values are never whitespace-trimmed.
  - Quoting never spans rows; each call sees exactly one line.
"""

from __future__ import annotations

from csvcursor.configs.config import DEFAULT_FIELD_DELIMITER
from csvcursor.configs.exceptions import ConfigError


def tokenize(
    raw_row: str,
    delimiter: str = DEFAULT_FIELD_DELIMITER,
    qualifier: str | None = None,
) -> list[str]:
    """
    Split ``raw_row`` into fields.

    Args:
        raw_row:   One line of source text, without its row delimiter.
        delimiter: Single field-separator character.
        qualifier: Optional single character enclosing a field, or ``None``.

    Returns:
        The field values in row order.  ``[]`` for an empty row.

    Raises:
        ConfigError: If ``delimiter`` is not exactly one character.
    """
    if len(delimiter) != 1:
        raise ConfigError(
            f"Field delimiter must be a single character, got {delimiter!r}",
            setting="field_delimiter",
        )

    fields: list[str] = []
    length = len(raw_row)
    if length == 0:
        return fields

    pos = 0
    while True:
        if qualifier is not None and pos < length and raw_row[pos] == qualifier:
            close = raw_row.find(qualifier, pos + 1)
            if close == -1:
                close = length
            fields.append(raw_row[pos + 1:close])
            end = raw_row.find(delimiter, close + 1)
        else:
            end = raw_row.find(delimiter, pos)
            fields.append(raw_row[pos:end] if end != -1 else raw_row[pos:])

        if end == -1:
            return fields
        pos = end + 1

"""
Ordered storage for the raw lines of a loaded source.

One string per physical row, in file order.  The store does no parsing; the
reader tokenizes lines on demand.
"""

from __future__ import annotations

from typing import Iterable, Iterator


class LineStore:
    """Indexed, replace-on-load sequence of raw text lines."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def load(self, lines: Iterable[str]) -> None:
        """Replace the current content with ``lines``."""
        self._lines = list(lines)

    def clear(self) -> None:
        self._lines = []

    def count(self) -> int:
        return len(self._lines)

    def get(self, index: int) -> str:
        """
        Return the line at ``index``.

        Raises:
            IndexError: If ``index`` is outside ``[0, count)``.  Negative
                indices are rejected rather than counted from the end.
        """
        if index < 0 or index >= len(self._lines):
            raise IndexError(f"Line index {index} out of range [0, {len(self._lines)})")
        return self._lines[index]

    def __len__(self) -> int:
        return len(self._lines)

    def __iter__(self) -> Iterator[str]:
        return iter(self._lines)

"""Matrix entry positions and simple predicates over sets of entries."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable


@dataclass(frozen=True, eq=False)
class Entry:
    """Position of a nonzero entry in a sparse matrix."""

    row_index: int
    col_index: int

    def __eq__(self, other: Any) -> bool:
        # Any object exposing row_index and col_index compares by position.
        try:
            return (
                self.row_index == other.row_index
                and self.col_index == other.col_index
            )
        except AttributeError:
            return NotImplemented

    def __hash__(self) -> int:
        return hash((self.row_index, self.col_index))

    def __str__(self) -> str:
        return f"Entry{{.row_index={self.row_index}, .col_index={self.col_index}}}"


def sort_entries_row_major(entries: Iterable[Entry]) -> list[Entry]:
    """Return the entries sorted by row index, then by column index."""
    return sorted(entries, key=lambda entry: (entry.row_index, entry.col_index))


def is_lower_triangle(sparsity: Any) -> bool:
    """True if every entry lies strictly below the diagonal."""
    return all(entry.row_index > entry.col_index for entry in sparsity.entries)


def is_square(sparsity: Any) -> bool:
    """True if the sparsity has as many rows as columns."""
    return sparsity.num_rows == sparsity.num_cols
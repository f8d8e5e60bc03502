"""Sparsity patterns of matrices and operations on them."""

from __future__ import annotations

import itertools
from dataclasses import dataclass, field
from typing import Any, Iterable, Sequence

from blockldl.entry import Entry, is_square
from blockldl.permutation import (
    Permutation,
    invert_permutation,
    permuted_entry,
    permuted_entry_lower_triangle,
)


def _as_entry(entry: Any) -> Entry:
    if isinstance(entry, Entry):
        return entry
    if hasattr(entry, "row_index") and hasattr(entry, "col_index"):
        return Entry(int(entry.row_index), int(entry.col_index))
    row_index, col_index = entry
    return Entry(int(row_index), int(col_index))


@dataclass(frozen=True)
class Sparsity:
    """Dimensions and nonzero positions of a sparse matrix."""

    num_rows: int
    num_cols: int
    entries: tuple[Entry, ...] = ()

    def __post_init__(self) -> None:
        if self.num_rows < 0 or self.num_cols < 0:
            raise ValueError("dimensions must not be negative")
        entries = tuple(_as_entry(entry) for entry in self.entries)
        for entry in entries:
            if not (
                0 <= entry.row_index < self.num_rows
                and 0 <= entry.col_index < self.num_cols
            ):
                raise ValueError(
                    f"{entry} lies outside a {self.num_rows}x{self.num_cols} matrix"
                )
        object.__setattr__(self, "entries", entries)

    @property
    def nnz(self) -> int:
        """Number of nonzero entries."""
        return len(self.entries)


def _as_sparsity(sparsity: Any) -> Sparsity:
    if isinstance(sparsity, Sparsity):
        return sparsity
    return Sparsity(sparsity.num_rows, sparsity.num_cols, tuple(sparsity.entries))


@dataclass(frozen=True, init=False)
class SparsityCSR(Sparsity):
    """A sparsity with its entries grouped by row (compressed sparse row)."""

    row_begin_indices: tuple[int, ...] = ()

    def __init__(self, sparsity: Any) -> None:
        base = _as_sparsity(sparsity)
        entries, row_begin_indices = get_entries_csr(base)
        object.__setattr__(self, "num_rows", base.num_rows)
        object.__setattr__(self, "num_cols", base.num_cols)
        object.__setattr__(self, "entries", entries)
        object.__setattr__(self, "row_begin_indices", row_begin_indices)

    def row_view(self, i: int) -> tuple[Entry, ...]:
        """The entries of row ``i`` in stored order."""
        return self.entries[self.row_begin_indices[i] : self.row_begin_indices[i + 1]]

    def find(self, i: int, j: int) -> int | None:
        """Index into ``entries`` of position (i, j), or None if it is zero."""
        begin = self.row_begin_indices[i]
        for offset, entry in enumerate(self.row_view(i)):
            if entry.col_index == j:
                return begin + offset
        return None

    def is_nonzero(self, i: int, j: int) -> bool:
        return self.find(i, j) is not None

    def entry_index(self, i: int, j: int) -> int:
        """Index into ``entries`` of position (i, j); KeyError if it is zero."""
        index = self.find(i, j)
        if index is None:
            raise KeyError((i, j))
        return index


@dataclass
class BoolMatrix:
    """Dense boolean matrix marking nonzero positions."""

    num_rows: int
    num_cols: int
    values: list[list[bool]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.values:
            self.values = [[False] * self.num_cols for _ in range(self.num_rows)]
        if len(self.values) != self.num_rows or any(
            len(row) != self.num_cols for row in self.values
        ):
            raise ValueError(
                f"values do not form a {self.num_rows}x{self.num_cols} matrix"
            )
        self.values = [[bool(value) for value in row] for row in self.values]

    @property
    def nnz(self) -> int:
        """Number of true entries."""
        return sum(sum(row) for row in self.values)


def make_sparsity(num_rows: int, num_cols: int, entries: Iterable[Any]) -> Sparsity:
    """Build a sparsity from entries or (row, col) pairs."""
    return Sparsity(num_rows, num_cols, tuple(entries))


def make_empty_sparsity(num_rows: int, num_cols: int) -> Sparsity:
    return Sparsity(num_rows, num_cols, ())


def make_sparsity_csr(sparsity: Any) -> SparsityCSR:
    return SparsityCSR(sparsity)


def make_empty_sparsity_csr(num_rows: int, num_cols: int) -> SparsityCSR:
    return SparsityCSR(make_empty_sparsity(num_rows, num_cols))


def get_row_counts(sparsity: Any) -> list[int]:
    """Number of entries in each row."""
    sparsity = _as_sparsity(sparsity)
    row_counts = [0] * sparsity.num_rows
    for entry in sparsity.entries:
        row_counts[entry.row_index] += 1
    return row_counts


def get_row_begin_indices(row_counts: Sequence[int]) -> list[int]:
    """Prefix sums of the row counts, starting with 0."""
    return list(itertools.accumulate(row_counts, initial=0))


def get_entries_csr(sparsity: Any) -> tuple[tuple[Entry, ...], tuple[int, ...]]:
    """Entries grouped by row (keeping input order within a row) and row starts."""
    sparsity = _as_sparsity(sparsity)
    row_begin_indices = get_row_begin_indices(get_row_counts(sparsity))
    rows: list[list[Entry]] = [[] for _ in range(sparsity.num_rows)]
    for entry in sparsity.entries:
        rows[entry.row_index].append(entry)
    return tuple(itertools.chain.from_iterable(rows)), tuple(row_begin_indices)


def _check_permutation_size(permutation: Any, dim: int, what: str) -> None:
    if len(permutation) != dim:
        raise ValueError(f"{what} permutation has size {len(permutation)}, expected {dim}")


def get_sparsity_permuted(
    sparsity: Any,
    permutation_row: Permutation | Sequence[int],
    permutation_col: Permutation | Sequence[int],
) -> Sparsity:
    """The sparsity of the matrix with rows and columns reordered."""
    sparsity = _as_sparsity(sparsity)
    _check_permutation_size(permutation_row, sparsity.num_rows, "row")
    _check_permutation_size(permutation_col, sparsity.num_cols, "column")
    inverse_row = invert_permutation(permutation_row)
    inverse_col = invert_permutation(permutation_col)
    return Sparsity(
        sparsity.num_rows,
        sparsity.num_cols,
        tuple(
            permuted_entry(entry, inverse_row, inverse_col)
            for entry in sparsity.entries
        ),
    )


def _require_square(sparsity: Any) -> None:
    if not is_square(sparsity):
        raise ValueError(
            f"sparsity must be square, got {sparsity.num_rows}x{sparsity.num_cols}"
        )


def get_nnz_lower_triangle(sparsity: Any) -> int:
    """Number of entries strictly below the diagonal."""
    _require_square(sparsity)
    return sum(entry.row_index > entry.col_index for entry in sparsity.entries)


def get_sparsity_lower_triangle(
    sparsity: Any, permutation: Permutation | Sequence[int]
) -> Sparsity:
    """Strict lower triangle of a symmetric sparsity after symmetric permutation."""
    sparsity = _as_sparsity(sparsity)
    _require_square(sparsity)
    _check_permutation_size(permutation, sparsity.num_rows, "symmetric")
    inverse = invert_permutation(permutation)
    dim = sparsity.num_rows
    return Sparsity(
        dim,
        dim,
        tuple(
            permuted_entry_lower_triangle(entry, inverse)
            for entry in sparsity.entries
            if entry.row_index > entry.col_index
        ),
    )


def is_sparsity_subset(
    sparsity_lhs: Any,
    sparsity_rhs: Any,
    permutation_row: Permutation | Sequence[int] | None = None,
    permutation_col: Permutation | Sequence[int] | None = None,
) -> bool:
    """True if every entry of the permuted lhs is also an entry of rhs."""
    lhs = _as_sparsity(sparsity_lhs)
    rhs = _as_sparsity(sparsity_rhs)
    if (lhs.num_rows, lhs.num_cols) != (rhs.num_rows, rhs.num_cols):
        raise ValueError("sparsities have different dimensions")
    if permutation_row is None:
        permutation_row = Permutation.identity(lhs.num_rows)
    if permutation_col is None:
        permutation_col = Permutation.identity(lhs.num_cols)
    lhs_csr = make_sparsity_csr(
        get_sparsity_permuted(lhs, permutation_row, permutation_col)
    )
    rhs_csr = make_sparsity_csr(rhs)
    for row_index in range(lhs.num_rows):
        rhs_cols = {entry.col_index for entry in rhs_csr.row_view(row_index)}
        if any(entry.col_index not in rhs_cols for entry in lhs_csr.row_view(row_index)):
            return False
    return True


def is_sparsity_subset_lower_triangle(
    sparsity_lhs: Any, sparsity_rhs: Any, permutation: Permutation | Sequence[int]
) -> bool:
    """True if the permuted strict lower triangle of lhs lies within rhs."""
    return is_sparsity_subset(
        get_sparsity_lower_triangle(sparsity_lhs, permutation), sparsity_rhs
    )


def is_sparsity_equal(sparsity_lhs: Any, sparsity_rhs: Any) -> bool:
    """True if both sparsities have the same set of nonzero positions."""
    return is_sparsity_subset(sparsity_lhs, sparsity_rhs) and is_sparsity_subset(
        sparsity_rhs, sparsity_lhs
    )


def sparse_entries_from_bool_matrix(bool_matrix: BoolMatrix) -> tuple[Entry, ...]:
    """The true positions of a boolean matrix in row-major order."""
    return tuple(
        Entry(i, j)
        for i, row in enumerate(bool_matrix.values)
        for j, value in enumerate(row)
        if value
    )


def get_matrix_value_at(matrix: Any, i: int, j: int) -> Any:
    """Value of a matrix at (i, j), or 0.0 if that position is not stored."""
    target = Entry(i, j)
    for entry_index, entry in enumerate(matrix.sparsity.entries):
        if target == entry:
            return matrix.value_at(entry_index)
    return 0.0
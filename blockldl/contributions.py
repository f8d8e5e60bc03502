"""Which factor entries contribute to, or are influenced by, one another."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator

from blockldl.sparsity import SparsityCSR, make_sparsity_csr


@dataclass(frozen=True)
class Contribution:
    """A pair of entries (i, k) and (j, k) sharing the column k."""

    entry_index_ik: int
    entry_index_jk: int
    k: int


@dataclass(frozen=True)
class Influenced:
    """A source entry and the target entry it influences."""

    entry_index_source: int
    entry_index_target: int


def _as_csr(sparsity: Any) -> SparsityCSR:
    if isinstance(sparsity, SparsityCSR):
        return sparsity
    return make_sparsity_csr(sparsity)


def foreach_contributing_entry(
    sparsity: Any, sparsity_below: Any, i: int, j: int, column_limit: int
) -> Iterator[Contribution]:
    """Yield the columns k < column_limit where row i of ``sparsity_below``
    and row j of ``sparsity`` both hold an entry.

    Entries within a row are expected in ascending column order; entry
    indices refer to the compressed-row order of each sparsity.
    """
    sparsity = _as_csr(sparsity)
    below = _as_csr(sparsity_below)
    index_ik = below.row_begin_indices[i]
    end_i = below.row_begin_indices[i + 1]
    index_jk = sparsity.row_begin_indices[j]
    end_j = sparsity.row_begin_indices[j + 1]

    while index_ik != end_i and index_jk != end_j:
        col_i = below.entries[index_ik].col_index
        col_j = sparsity.entries[index_jk].col_index
        if col_i >= column_limit or col_j >= column_limit:
            break
        if col_i == col_j:
            yield Contribution(index_ik, index_jk, col_i)
        if col_i <= col_j:
            index_ik += 1
        if col_j <= col_i:
            index_jk += 1


def get_num_contributions_mixed(
    sparsity: Any, sparsity_below: Any, i: int, j: int, column_limit: int
) -> int:
    """Number of contributions found by :func:`foreach_contributing_entry`."""
    return sum(
        1
        for _ in foreach_contributing_entry(
            sparsity, sparsity_below, i, j, column_limit
        )
    )


def get_contributions_mixed(
    sparsity: Any,
    sparsity_below: Any,
    i: int,
    j: int,
    column_limit: int | None = None,
) -> list[Contribution]:
    """All contributions, limited by default to the common column range."""
    if column_limit is None:
        column_limit = min(sparsity.num_cols, sparsity_below.num_cols)
    return list(
        foreach_contributing_entry(sparsity, sparsity_below, i, j, column_limit)
    )


def get_contributions_lower_triangle(
    sparsity: Any, i: int, j: int
) -> list[Contribution]:
    """Contributions to entry (i, j) of a lower-triangular factor block."""
    return get_contributions_mixed(sparsity, sparsity, i, j, j)


def get_contributions_rectangular(
    sparsity: Any, i: int, j: int
) -> list[Contribution]:
    """Contributions between rows i and j over all columns."""
    return get_contributions_mixed(sparsity, sparsity, i, j)


def get_num_influenced(sparsity_source: Any, j: int, k_end: int) -> int:
    """Number of rows k < k_end where column j of the source is nonzero."""
    source = _as_csr(sparsity_source)
    return sum(1 for k in range(k_end) if source.is_nonzero(k, j))


def get_influenced_list(
    i: int,
    j: int,
    sparsity_source: Any,
    sparsity_target: Any,
    target_column_limit: int | None = None,
) -> list[Influenced]:
    """Map entries (k, j) of the source to the entries (i, k) of the target
    they influence through the linking entry (i, j).

    Only target columns k < ``target_column_limit`` are considered; a target
    entry (i, k) that is not stored raises KeyError.
    """
    source = _as_csr(sparsity_source)
    target = _as_csr(sparsity_target)
    if target_column_limit is None:
        target_column_limit = target.num_cols
    return [
        Influenced(source.entry_index(k, j), target.entry_index(i, k))
        for k in range(target_column_limit)
        if source.is_nonzero(k, j)
    ]


def get_influenced_list_lower_triangle(
    i: int, j: int, sparsity_source: Any, sparsity_target: Any
) -> list[Influenced]:
    """Like :func:`get_influenced_list`, restricted to the target's lower triangle."""
    return get_influenced_list(i, j, sparsity_source, sparsity_target, i)
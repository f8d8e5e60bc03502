from dataclasses import dataclass

import pytest

from blockldl.entry import Entry, is_lower_triangle, sort_entries_row_major
from blockldl.permutation import Permutation
from blockldl.sparsity import (
    BoolMatrix,
    Sparsity,
    SparsityCSR,
    get_entries_csr,
    get_matrix_value_at,
    get_nnz_lower_triangle,
    get_row_begin_indices,
    get_row_counts,
    get_sparsity_lower_triangle,
    get_sparsity_permuted,
    is_sparsity_equal,
    is_sparsity_subset,
    is_sparsity_subset_lower_triangle,
    make_empty_sparsity,
    make_empty_sparsity_csr,
    make_sparsity,
    make_sparsity_csr,
    sparse_entries_from_bool_matrix,
)

LFAT5_ENTRIES = [
    (0, 0), (3, 0), (4, 0), (1, 1), (5, 1), (2, 2),
    (6, 2), (3, 3), (7, 3), (8, 3), (4, 4), (7, 4),
    (8, 4), (5, 5), (9, 5), (6, 6), (10, 6), (7, 7),
    (11, 7), (12, 7), (8, 8), (11, 8), (12, 8), (9, 9),
    (10, 10), (11, 11), (13, 11), (12, 12), (13, 12), (13, 13),
]
LFAT5_PERMUTATION = Permutation((13, 11, 12, 8, 7, 0, 4, 3, 9, 1, 5, 10, 2, 6))

NOS2_B_ENTRIES = [(0, 0), (1, 1), (1, 2), (2, 1), (2, 2)]


@pytest.fixture
def lfat5():
    return make_sparsity(14, 14, LFAT5_ENTRIES)


def test_make_sparsity(lfat5):
    assert lfat5.nnz == len(LFAT5_ENTRIES)
    assert lfat5.entries[1] == Entry(3, 0)
    assert make_empty_sparsity(2, 5).nnz == 0


def test_entry_out_of_range_rejected():
    with pytest.raises(ValueError):
        make_sparsity(2, 2, [(2, 0)])
    with pytest.raises(ValueError):
        make_sparsity(2, 2, [(0, 2)])


def test_csr_structure(lfat5):
    csr = make_sparsity_csr(lfat5)
    assert csr.row_begin_indices[0] == 0
    assert csr.row_begin_indices[-1] == lfat5.nnz
    counts = get_row_counts(lfat5)
    for i in range(14):
        row = csr.row_view(i)
        assert len(row) == counts[i]
        assert all(entry.row_index == i for entry in row)
    assert sorted(csr.entries, key=lambda e: (e.row_index, e.col_index)) == \
        sort_entries_row_major(lfat5.entries)


def test_csr_keeps_input_order_within_row():
    csr = SparsityCSR(make_sparsity(2, 3, [(1, 1), (0, 2), (1, 0)]))
    assert csr.row_view(1) == (Entry(1, 1), Entry(1, 0))
    assert csr.row_view(0) == (Entry(0, 2),)


def test_csr_lookup(lfat5):
    csr = make_sparsity_csr(lfat5)
    for row_index, col_index in LFAT5_ENTRIES:
        assert csr.is_nonzero(row_index, col_index)
        assert csr.entries[csr.entry_index(row_index, col_index)] == Entry(row_index, col_index)
    assert csr.find(0, 13) is None
    assert not csr.is_nonzero(0, 13)
    with pytest.raises(KeyError):
        csr.entry_index(0, 13)


def test_empty_csr():
    csr = make_empty_sparsity_csr(3, 4)
    assert csr.nnz == 0
    assert list(csr.row_begin_indices) == [0, 0, 0, 0]


def test_row_begin_indices_are_prefix_sums(lfat5):
    counts = get_row_counts(lfat5)
    begins = get_row_begin_indices(counts)
    assert len(begins) == len(counts) + 1
    assert all(begins[i + 1] - begins[i] == counts[i] for i in range(len(counts)))
    entries, row_begin = get_entries_csr(lfat5)
    assert list(row_begin) == begins
    assert len(entries) == lfat5.nnz


def test_permuted_roundtrip(lfat5):
    permutation = LFAT5_PERMUTATION
    permuted = get_sparsity_permuted(lfat5, permutation, permutation)
    assert permuted.nnz == lfat5.nnz
    back = get_sparsity_permuted(permuted, permutation.inverse(), permutation.inverse())
    assert is_sparsity_equal(back, lfat5)
    identity = Permutation.identity(14)
    assert get_sparsity_permuted(lfat5, identity, identity).entries == lfat5.entries


def test_permuted_wrong_size_rejected(lfat5):
    with pytest.raises(ValueError):
        get_sparsity_permuted(lfat5, Permutation.identity(3), Permutation.identity(14))


def test_subset_with_permutation(lfat5):
    permuted = get_sparsity_permuted(lfat5, LFAT5_PERMUTATION, LFAT5_PERMUTATION)
    assert is_sparsity_subset(lfat5, permuted, LFAT5_PERMUTATION, LFAT5_PERMUTATION)
    assert is_sparsity_equal(permuted, get_sparsity_permuted(
        lfat5, LFAT5_PERMUTATION, LFAT5_PERMUTATION))


def test_subset_and_equal():
    full = make_sparsity(3, 3, NOS2_B_ENTRIES)
    part = make_sparsity(3, 3, NOS2_B_ENTRIES[:3])
    shuffled = make_sparsity(3, 3, list(reversed(NOS2_B_ENTRIES)))
    assert is_sparsity_subset(part, full)
    assert not is_sparsity_subset(full, part)
    assert is_sparsity_equal(full, shuffled)
    assert not is_sparsity_equal(full, part)
    assert is_sparsity_subset(make_empty_sparsity(3, 3), part)


def test_subset_dimension_mismatch():
    with pytest.raises(ValueError):
        is_sparsity_subset(make_empty_sparsity(2, 3), make_empty_sparsity(3, 2))


def test_lower_triangle(lfat5):
    lower = get_sparsity_lower_triangle(lfat5, LFAT5_PERMUTATION)
    assert is_lower_triangle(lower)
    assert lower.nnz == get_nnz_lower_triangle(lfat5)
    assert is_sparsity_subset_lower_triangle(lfat5, lower, LFAT5_PERMUTATION)
    identity_lower = get_sparsity_lower_triangle(lfat5, Permutation.identity(14))
    assert identity_lower.entries == tuple(
        Entry(r, c) for r, c in LFAT5_ENTRIES if r > c
    )


def test_lower_triangle_requires_square():
    with pytest.raises(ValueError):
        get_nnz_lower_triangle(make_empty_sparsity(2, 3))
    with pytest.raises(ValueError):
        get_sparsity_lower_triangle(make_empty_sparsity(2, 3), Permutation.identity(2))


def test_bool_matrix_entries():
    values = [[True, False, True], [False, False, False], [False, True, False]]
    matrix = BoolMatrix(3, 3, values)
    entries = sparse_entries_from_bool_matrix(matrix)
    assert len(entries) == matrix.nnz
    assert list(entries) == sort_entries_row_major(entries)
    assert all(values[e.row_index][e.col_index] for e in entries)


def test_bool_matrix_default_and_shape():
    assert BoolMatrix(2, 4).nnz == 0
    with pytest.raises(ValueError):
        BoolMatrix(2, 2, [[True, False]])


@dataclass
class _ValuedMatrix:
    sparsity: Sparsity
    values: tuple

    def value_at(self, i):
        return self.values[i]


def test_get_matrix_value_at():
    sparsity = make_sparsity(3, 3, NOS2_B_ENTRIES)
    values = (-320000.0, -39321600000.0, -614400000.0, 614400000.0, 6400000.0)
    matrix = _ValuedMatrix(sparsity, values)
    assert get_matrix_value_at(matrix, 1, 2) == -614400000.0
    assert get_matrix_value_at(matrix, 2, 2) == 6400000.0
    assert get_matrix_value_at(matrix, 0, 2) == 0.0
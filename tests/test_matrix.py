import pytest

from blockldl.matrix import (
    DummyRange,
    EmptyMatrixInput,
    MatrixTridiagonalArrowheadLinked,
    make_empty_matrix_link,
    make_empty_matrix_repeating_outer,
    make_empty_matrix_start,
    square,
)


def _shape(matrix):
    return (matrix.sparsity.num_rows, matrix.sparsity.num_cols)


def test_empty_matrix_input_has_no_entries():
    matrix = EmptyMatrixInput(3, 2)
    assert _shape(matrix) == (3, 2)
    assert matrix.sparsity.nnz == 0
    assert len(matrix.sparsity.row_begin_indices) == 4


def test_empty_matrix_input_value_at_fails():
    with pytest.raises(IndexError):
        EmptyMatrixInput(2, 2).value_at(0)


def test_empty_matrix_input_rejects_values():
    with pytest.raises(ValueError):
        EmptyMatrixInput(2, 2, [1.0])


def test_dummy_range_length_and_items():
    items = DummyRange(list, 3)
    assert len(items) == 3
    first = items[0]
    assert first == []
    first.append(1)
    assert items[0] == []


@pytest.mark.parametrize("index", [-1, 3, 10])
def test_dummy_range_bounds(index):
    with pytest.raises(IndexError):
        DummyRange(list, 3)[index]


def test_dummy_range_negative_size():
    with pytest.raises(ValueError):
        DummyRange(list, -1)


def test_empty_matrix_link_shapes():
    link = make_empty_matrix_link(5, 2, 4)
    assert _shape(link.prev) == (2, 5)
    assert _shape(link.diag) == (2, 2)
    assert _shape(link.next) == (4, 2)


def test_empty_matrix_start_shapes():
    start = make_empty_matrix_start(3, 6, 1)
    assert _shape(start.diag) == (3, 3)
    assert _shape(start.next) == (6, 3)
    assert _shape(start.outer) == (1, 3)


def test_empty_repeating_outer():
    outer = make_empty_matrix_repeating_outer(2, 7, 4)
    assert len(outer.subdiag) == 5
    assert _shape(outer.subdiag[4]) == (2, 7)
    assert _shape(outer.diag) == (2, 2)
    with pytest.raises(IndexError):
        outer.subdiag[5]


def test_arrowhead_container_holds_parts():
    start = make_empty_matrix_start(1, 2, 3)
    matrix = MatrixTridiagonalArrowheadLinked(start, None, None, None)
    assert matrix.start is start
    assert matrix.tridiag is None


def test_square():
    assert square(3) == 9
    assert square(-2.5) == 6.25
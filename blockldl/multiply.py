"""Sparse matrix-vector products for single and block-structured matrices."""

from __future__ import annotations

import enum
from typing import Any, MutableSequence, Sequence


class MultiplyKind(enum.Flag):
    """Which products a stored matrix contributes."""

    NORMAL = 1
    TRANSPOSED = 2
    SYMMETRIC = NORMAL | TRANSPOSED


def multiply(
    kind: MultiplyKind,
    matrix: Any,
    solution: Sequence[Any],
    rhs: MutableSequence[Any],
) -> None:
    """Add the product of ``matrix`` and ``solution`` to ``rhs`` in place.

    NORMAL adds A x, TRANSPOSED adds A^T x and SYMMETRIC treats the stored
    entries as one triangle of a symmetric matrix, counting diagonal entries
    once.
    """
    kind = MultiplyKind(kind)
    for entry_index, entry in enumerate(matrix.sparsity.entries):
        row_index = entry.row_index
        col_index = entry.col_index
        value = matrix.value_at(entry_index)
        if kind & MultiplyKind.NORMAL:
            rhs[row_index] += value * solution[col_index]
        if kind == MultiplyKind.SYMMETRIC and row_index == col_index:
            continue
        if kind & MultiplyKind.TRANSPOSED:
            rhs[col_index] += value * solution[row_index]


def multiply_repeating_block_tridiagonal(
    matrices_a: Sequence[Any],
    matrices_b: Sequence[Any],
    solution: Sequence[Sequence[Any]],
    rhs: Sequence[MutableSequence[Any]],
) -> None:
    """Add the product of a symmetric block-tridiagonal matrix to ``rhs``.

    ``matrices_a`` holds the diagonal blocks (lower triangles),
    ``matrices_b`` the subdiagonal blocks, one fewer.
    """
    multiply(MultiplyKind.SYMMETRIC, matrices_a[0], solution[0], rhs[0])
    for i in range(len(matrices_b)):
        multiply(MultiplyKind.TRANSPOSED, matrices_b[i], solution[i + 1], rhs[i])
        multiply(MultiplyKind.NORMAL, matrices_b[i], solution[i], rhs[i + 1])
        multiply(MultiplyKind.SYMMETRIC, matrices_a[i + 1], solution[i + 1], rhs[i + 1])


def multiply_repeating_block_tridiagonal_arrowhead_linked(
    matrix: Any, solution: Any, rhs: Any
) -> None:
    """Add the product of a block-tridiagonal arrowhead matrix with start and
    link parts to ``rhs``; vectors have start, tridiag, link and outer parts."""
    normal = MultiplyKind.NORMAL
    transposed = MultiplyKind.TRANSPOSED
    symmetric = MultiplyKind.SYMMETRIC

    multiply(symmetric, matrix.start.diag, solution.start, rhs.start)
    multiply(transposed, matrix.start.next, solution.tridiag[0], rhs.start)
    multiply(transposed, matrix.start.outer, solution.outer, rhs.start)

    multiply(normal, matrix.start.next, solution.start, rhs.tridiag[0])
    multiply_repeating_block_tridiagonal(
        matrix.tridiag.diag, matrix.tridiag.subdiag, solution.tridiag, rhs.tridiag
    )

    num_repetitions = len(matrix.tridiag.subdiag)
    for i in range(num_repetitions + 1):
        outer_block = matrix.outer.subdiag[i]
        multiply(transposed, outer_block, solution.outer, rhs.tridiag[i])
        multiply(normal, outer_block, solution.tridiag[i], rhs.outer)
    multiply(transposed, matrix.link.prev, solution.link, rhs.tridiag[num_repetitions])

    multiply(normal, matrix.link.prev, solution.tridiag[num_repetitions], rhs.link)
    multiply(transposed, matrix.link.next, solution.outer, rhs.link)
    multiply(symmetric, matrix.link.diag, solution.link, rhs.link)

    multiply(normal, matrix.start.outer, solution.start, rhs.outer)
    multiply(normal, matrix.link.next, solution.link, rhs.outer)
    multiply(symmetric, matrix.outer.diag, solution.outer, rhs.outer)
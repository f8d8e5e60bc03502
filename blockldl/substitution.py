"""Forward and backward substitution with blocks of a sparse LDL^T factor.

A factor block stores the strictly lower (or off-diagonal) entries of one
block of L in permuted order. Its permutations map a stored row or column to
its index in the caller's vectors, so every vector passed to the functions
here is given in unpermuted order.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, MutableSequence, Sequence

from blockldl.permutation import Permutation
from blockldl.sparsity import SparsityCSR, make_sparsity_csr


def _as_permutation(permutation: Any, dim: int, what: str) -> Permutation:
    if permutation is None:
        return Permutation.identity(dim)
    if not isinstance(permutation, Permutation):
        permutation = Permutation(tuple(permutation))
    if len(permutation) != dim:
        raise ValueError(
            f"{what} permutation has size {len(permutation)}, expected {dim}"
        )
    return permutation


@dataclass
class FactorBlock:
    """One block of a factor: its sparsity, values and permutations.

    ``values[e]`` belongs to ``sparsity.entries[e]`` in compressed-row order.
    """

    sparsity: Any
    values: list = field(default_factory=list)
    permutation_row: Any = None
    permutation_col: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.sparsity, SparsityCSR):
            self.sparsity = make_sparsity_csr(self.sparsity)
        self.values = list(self.values)
        if len(self.values) != self.sparsity.nnz:
            raise ValueError(
                f"got {len(self.values)} values for {self.sparsity.nnz} entries"
            )
        self.permutation_row = _as_permutation(
            self.permutation_row, self.sparsity.num_rows, "row"
        )
        self.permutation_col = _as_permutation(
            self.permutation_col, self.sparsity.num_cols, "column"
        )

    def orig_row_index(self, i: int) -> int:
        """Index in the unpermuted vector of stored row ``i``."""
        return self.permutation_row[i]

    def orig_col_index(self, j: int) -> int:
        """Index in the unpermuted vector of stored column ``j``."""
        return self.permutation_col[j]

    def _row(self, i: int) -> range:
        begin = self.sparsity.row_begin_indices[i]
        end = self.sparsity.row_begin_indices[i + 1]
        return range(begin, end)

    def _forward_row(self, i: int, solution: Sequence[Any], init: Any) -> Any:
        value = init
        for entry_index in self._row(i):
            j = self.sparsity.entries[entry_index].col_index
            value -= self.values[entry_index] * solution[self.orig_col_index(j)]
        return value

    def _backward_row(
        self, i: int, solution_i: Any, partial_solution: MutableSequence[Any]
    ) -> None:
        for entry_index in self._row(i):
            j = self.sparsity.entries[entry_index].col_index
            partial_solution[self.orig_col_index(j)] -= (
                self.values[entry_index] * solution_i
            )


def solve_forward_substitution(
    factor_block: FactorBlock,
    solution: Sequence[Any],
    partial_solution: MutableSequence[Any],
) -> None:
    """partial_solution -= factor_block * solution, in place.

    Rows are processed in ascending order, so passing the same vector as
    ``solution`` and ``partial_solution`` solves with a diagonal block.
    """
    for i in range(factor_block.sparsity.num_rows):
        i_orig = factor_block.orig_row_index(i)
        partial_solution[i_orig] = factor_block._forward_row(
            i, solution, partial_solution[i_orig]
        )


def solve_forward_substitution_combined(
    diag: FactorBlock,
    rhs_in_solution_out: MutableSequence[Any],
    left: FactorBlock,
    solution_left: Sequence[Any],
) -> None:
    """Forward substitution of a block row with one off-diagonal block
    ``left`` and the diagonal block ``diag`` in one pass."""
    if diag.sparsity.num_rows != left.sparsity.num_rows:
        raise ValueError("diagonal and left block have different row counts")
    if diag.permutation_row != left.permutation_row:
        raise ValueError("diagonal and left block have different row permutations")
    for i in range(diag.sparsity.num_rows):
        i_orig = diag.orig_row_index(i)
        value = rhs_in_solution_out[i_orig]
        value = left._forward_row(i, solution_left, value)
        value = diag._forward_row(i, rhs_in_solution_out, value)
        rhs_in_solution_out[i_orig] = value


def solve_forward_substitution_diagonal(
    diag: FactorBlock, rhs_in_solution_out: MutableSequence[Any]
) -> None:
    """Solve in place with the unit lower-triangular diagonal block ``diag``."""
    solve_forward_substitution(diag, rhs_in_solution_out, rhs_in_solution_out)


def solve_backward_substitution(
    factor_block: FactorBlock,
    solution: Sequence[Any],
    partial_solution: MutableSequence[Any],
) -> None:
    """partial_solution -= transposed(factor_block) * solution, in place.

    Rows are processed in descending order, so passing the same vector as
    ``solution`` and ``partial_solution`` solves with a diagonal block.
    """
    for i in reversed(range(factor_block.sparsity.num_rows)):
        i_orig = factor_block.orig_row_index(i)
        factor_block._backward_row(i, solution[i_orig], partial_solution)


def solve_backward_substitution_diagonal(
    factor_block_diagonal: FactorBlock, partial_solution: MutableSequence[Any]
) -> None:
    """Solve in place with the transposed unit lower-triangular diagonal block."""
    solve_backward_substitution(
        factor_block_diagonal, partial_solution, partial_solution
    )
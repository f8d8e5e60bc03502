# blockldl

Building blocks for sparse symmetric LDL^T solvers on block-structured
matrices: sparsity patterns, permutations, block-wise matrix-vector products
and block forward/backward substitution. Pure Python, no dependencies.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `blockldl.entry`: `Entry` (a row/column index pair that compares equal to
  any object with matching `row_index` and `col_index`),
  `sort_entries_row_major`, `is_lower_triangle` and `is_square`.
- `blockldl.permutation`: `Permutation` (validated on construction), with
  `Permutation.identity` and `inverse`, plus `factorial`,
  `invert_permutation`, `enumerate_permutations` (all permutations in
  lexicographic order), `permuted_entry` and
  `permuted_entry_lower_triangle`.
- `blockldl.sparsity`: `Sparsity` (entries are checked to lie within the
  dimensions), the row-compressed `SparsityCSR` (`row_view`, `find`,
  `is_nonzero`, `entry_index`) and `BoolMatrix`, with `make_sparsity`,
  `make_empty_sparsity`, `make_sparsity_csr`, `make_empty_sparsity_csr`,
  `get_row_counts`, `get_row_begin_indices`, `get_entries_csr`,
  `get_sparsity_permuted`, `get_nnz_lower_triangle`,
  `get_sparsity_lower_triangle`, `is_sparsity_subset`,
  `is_sparsity_subset_lower_triangle`, `is_sparsity_equal`,
  `sparse_entries_from_bool_matrix` and `get_matrix_value_at`.
- `blockldl.contributions`: which factor entries contribute to an entry
  (`foreach_contributing_entry`, `get_contributions_mixed`,
  `get_contributions_lower_triangle`, `get_contributions_rectangular`) and
  which entries a source block influences in a target block
  (`get_num_influenced`, `get_influenced_list`,
  `get_influenced_list_lower_triangle`).
- `blockldl.matrix`: block containers `MatrixStart`, `MatrixTridiagonal`,
  `MatrixLink`, `MatrixOuter` and `MatrixTridiagonalArrowheadLinked`; the
  entry-free block `EmptyMatrixInput`; `DummyRange`, a fixed-length sequence
  that builds each item from a factory; the helpers `make_empty_matrix_start`,
  `make_empty_matrix_link`, `make_empty_matrix_repeating_outer` and `square`.
- `blockldl.multiply`: `MultiplyKind` (`NORMAL`, `TRANSPOSED`, `SYMMETRIC`)
  and `multiply`, with whole-matrix products
  `multiply_repeating_block_tridiagonal` and
  `multiply_repeating_block_tridiagonal_arrowhead_linked`.
- `blockldl.vector`: `block`, `flatten` and
  `VectorTridiagonalArrowheadLinked`.
- `blockldl.substitution`: `FactorBlock` (a factor block's sparsity, values
  and row/column permutations) and the in-place steps
  `solve_forward_substitution`, `solve_forward_substitution_combined`,
  `solve_forward_substitution_diagonal`, `solve_backward_substitution` and
  `solve_backward_substitution_diagonal`. Vectors are passed in unpermuted
  order; the block's permutations are applied internally.

## Example

A matrix supplies its pattern as `sparsity` and its values through
`value_at(entry_index)`. A symmetric matrix stores only its lower triangle.
`multiply` adds the product to `rhs` in place:

```python
from blockldl.multiply import MultiplyKind, multiply
from blockldl.sparsity import make_sparsity


class Tridiagonal:
    sparsity = make_sparsity(3, 3, [(0, 0), (1, 1), (2, 2), (1, 0), (2, 1)])
    values = [2.0, 2.0, 2.0, -1.0, -1.0]

    def value_at(self, i):
        return self.values[i]


rhs = [0.0, 0.0, 0.0]
multiply(MultiplyKind.SYMMETRIC, Tridiagonal(), [1.0, 1.0, 1.0], rhs)
# rhs == [1.0, 0.0, 1.0]
```

## What it does not do

The package has no factorization routine: it does not compute the values of
L and D. `FactorBlock` takes factor values that the caller already has, and
the substitution functions only apply them. There is no reading of matrix
files and no command-line program.
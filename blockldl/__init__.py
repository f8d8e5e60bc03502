"""Sparsity patterns, permutations, block products and block substitution for sparse LDL^T solvers."""

__version__ = "0.1.0"

__all__ = [
    "entry",
    "permutation",
    "sparsity",
    "contributions",
    "matrix",
    "multiply",
    "vector",
    "substitution",
]
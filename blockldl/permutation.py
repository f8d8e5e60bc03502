"""Permutations of matrix indices."""

from __future__ import annotations

import itertools
from dataclasses import dataclass
from typing import Any, Iterator, Sequence

from blockldl.entry import Entry


@dataclass(frozen=True)
class Permutation:
    """A permutation of ``0, 1, ..., dim - 1`` given by its image indices."""

    indices: tuple[int, ...]

    def __post_init__(self) -> None:
        indices = tuple(int(i) for i in self.indices)
        if sorted(indices) != list(range(len(indices))):
            raise ValueError(f"not a permutation: {indices!r}")
        object.__setattr__(self, "indices", indices)

    @classmethod
    def identity(cls, dim: int) -> Permutation:
        """The identity permutation of the given dimension."""
        return cls(tuple(range(dim)))

    def __getitem__(self, i: int) -> int:
        return self.indices[i]

    def __len__(self) -> int:
        return len(self.indices)

    def __iter__(self) -> Iterator[int]:
        return iter(self.indices)

    def inverse(self) -> Permutation:
        """The permutation that undoes this one."""
        inverse = [0] * len(self.indices)
        for position, index in enumerate(self.indices):
            inverse[index] = position
        return Permutation(tuple(inverse))


def _as_permutation(permutation: Permutation | Sequence[int]) -> Permutation:
    if isinstance(permutation, Permutation):
        return permutation
    return Permutation(tuple(permutation))


def factorial(n: int) -> int:
    """n!, with 0! = 1."""
    value = 1
    for i in range(2, n + 1):
        value *= i
    return value


def invert_permutation(permutation: Permutation | Sequence[int]) -> Permutation:
    """Return the inverse of a permutation given as Permutation or sequence."""
    return _as_permutation(permutation).inverse()


def enumerate_permutations(dim: int) -> Iterator[Permutation]:
    """Yield all permutations of the given dimension in lexicographic order."""
    for indices in itertools.permutations(range(dim)):
        yield Permutation(indices)


def permuted_entry(
    entry: Any,
    permutation_row: Permutation | Sequence[int],
    permutation_col: Permutation | Sequence[int],
) -> Entry:
    """Map an entry's row and column through the given permutations."""
    return Entry(
        permutation_row[entry.row_index], permutation_col[entry.col_index]
    )


def permuted_entry_lower_triangle(
    entry: Any, permutation: Permutation | Sequence[int]
) -> Entry:
    """Map a symmetric entry through a permutation, keeping it in the lower triangle."""
    row = permutation[entry.row_index]
    col = permutation[entry.col_index]
    return Entry(max(row, col), min(row, col))
"""Containers for the blocks of structured sparse matrices."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, Generic, Sequence, TypeVar

from blockldl.sparsity import SparsityCSR, make_empty_sparsity_csr

T = TypeVar("T")


@dataclass(frozen=True)
class EmptyMatrixInput:
    """A matrix block of the given shape with no stored entries."""

    num_rows: int
    num_cols: int
    values: Sequence[Any] = ()
    sparsity: SparsityCSR = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if len(self.values) != 0:
            raise ValueError("an empty matrix takes no values")
        object.__setattr__(
            self, "sparsity", make_empty_sparsity_csr(self.num_rows, self.num_cols)
        )

    def value_at(self, i: int) -> float:
        """Always fails: an empty matrix has no entries to read."""
        raise IndexError(f"empty matrix has no entry {i}")


class DummyRange(Generic[T]):
    """A sequence of given length whose every item is a freshly made default."""

    def __init__(self, item_factory: Callable[[], T], size: int) -> None:
        if size < 0:
            raise ValueError("size must not be negative")
        self._item_factory = item_factory
        self._size = size

    def __getitem__(self, i: int) -> T:
        if not 0 <= i < self._size:
            raise IndexError(f"index {i} out of range for size {self._size}")
        return self._item_factory()

    def __len__(self) -> int:
        return self._size


@dataclass
class MatrixLink:
    """Blocks of the link part: coupling to the last tridiagonal block,
    its own diagonal block, and coupling to the outer part."""

    prev: Any
    diag: Any
    next: Any


@dataclass
class MatrixOuter:
    """Blocks of the outer (arrowhead) part."""

    subdiag: Any
    diag: Any


@dataclass
class MatrixStart:
    """Blocks of the start part."""

    diag: Any
    next: Any
    outer: Any


@dataclass
class MatrixTridiagonal:
    """Repeating diagonal blocks and the subdiagonal blocks between them."""

    diag: Any
    subdiag: Any


@dataclass
class MatrixTridiagonalArrowheadLinked:
    """A block-tridiagonal matrix with start, link and arrowhead parts."""

    start: Any
    tridiag: Any
    link: Any
    outer: Any


def make_empty_matrix_link(dim_prev: int, dim_link: int, dim_next: int) -> MatrixLink:
    """A link part without entries."""
    return MatrixLink(
        EmptyMatrixInput(dim_link, dim_prev),
        EmptyMatrixInput(dim_link, dim_link),
        EmptyMatrixInput(dim_next, dim_link),
    )


def make_empty_matrix_repeating_outer(
    num_rows: int, num_cols: int, num_repetitions: int
) -> MatrixOuter:
    """An outer part without entries for ``num_repetitions + 1`` diagonal blocks."""
    subdiag = DummyRange(lambda: EmptyMatrixInput(num_rows, num_cols), num_repetitions + 1)
    return MatrixOuter(subdiag, EmptyMatrixInput(num_rows, num_rows))


def make_empty_matrix_start(dim_start: int, dim_next: int, dim_outer: int) -> MatrixStart:
    """A start part without entries."""
    return MatrixStart(
        EmptyMatrixInput(dim_start, dim_start),
        EmptyMatrixInput(dim_next, dim_start),
        EmptyMatrixInput(dim_outer, dim_start),
    )


def square(value: Any) -> Any:
    """value * value."""
    return value * value
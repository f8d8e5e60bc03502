"""Vectors split into blocks and the arrowhead vector layout."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Sequence, TypeVar

T = TypeVar("T")


@dataclass
class VectorTridiagonalArrowheadLinked:
    """A vector with start, repeating tridiagonal, link and outer parts."""

    start: Any
    tridiag: Any
    link: Any
    outer: Any


def block(values_flat: Sequence[T], block_dim: int) -> list[list[T]]:
    """Split values into consecutive blocks of ``block_dim``; a trailing
    remainder shorter than a block is dropped."""
    if block_dim <= 0:
        raise ValueError("block_dim must be positive")
    num_blocks = len(values_flat) // block_dim
    return [
        list(values_flat[b * block_dim : (b + 1) * block_dim])
        for b in range(num_blocks)
    ]


def flatten(values_blocked: Iterable[Iterable[T]]) -> list[T]:
    """Concatenate blocks into one list."""
    return [value for part in values_blocked for value in part]
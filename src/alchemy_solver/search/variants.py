"""Deterministic search variants used to diversify multi-path discovery.

A variant is identified by a non-negative index. Index 0 is the plain engine;
every other index reorders the search in a fixed, reproducible way, so the
same index always explores the catalog in the same order.
"""

from dataclasses import dataclass
from typing import List, Sequence, TypeVar

T = TypeVar('T')


def rotate(items: Sequence[T], offset: int) -> List[T]:
    """Rotate ``items`` left by ``offset`` positions (modulo length)."""
    if not items:
        return []
    offset %= len(items)
    return list(items[offset:]) + list(items[:offset])


def permute(items: Sequence[T], index: int) -> List[T]:
    """Index-derived permutation of candidate order.

    With ``n`` items, variant ``index`` rotates left by ``index mod n`` and
    then reverses the rotated list when ``(index // n)`` is odd. Index 0
    keeps the original order. Consecutive indices cycle through every
    rotation, then every reversed rotation.
    """
    n = len(items)
    if n < 2 or index == 0:
        return list(items)
    ordered = rotate(items, index % n)
    if (index // n) % 2 == 1:
        ordered.reverse()
    return ordered


@dataclass(frozen=True)
class SearchVariant:
    """Parameters of one search variant."""

    index: int = 0

    def __post_init__(self) -> None:
        if self.index < 0:
            raise ValueError(f"Variant index must be non-negative, got {self.index}")

    @property
    def is_default(self) -> bool:
        return self.index == 0

    @property
    def depth_offset(self) -> int:
        """Extra depth allowed to the depth-bounded engine."""
        return self.index % 5

    @property
    def reverse_ingredients(self) -> bool:
        """Whether backward expansion visits the second ingredient first."""
        return self.index % 2 == 1

    @property
    def backward_first(self) -> bool:
        """Whether a bidirectional round starts with the backward frontier."""
        return self.index % 2 == 1

    def order_seeds(self, seeds: Sequence[T]) -> List[T]:
        return rotate(seeds, self.index)

    def order_candidates(self, candidates: Sequence[T]) -> List[T]:
        return permute(candidates, self.index)


DEFAULT_VARIANT = SearchVariant()

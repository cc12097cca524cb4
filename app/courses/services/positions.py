"""Dense sibling ordering shared by the editor schemas and the reconciler.

Sibling order is the ascending ``position``; after normalisation the
positions of n siblings are exactly 0..n-1.
"""

from collections.abc import Iterable
from typing import Protocol, TypeVar


class Positioned(Protocol):
    position: int


P = TypeVar("P", bound=Positioned)


def normalize_positions(items: Iterable[P]) -> list[P]:
    """Set each item's position to its index, keeping the given order."""
    ordered = list(items)
    for index, item in enumerate(ordered):
        item.position = index
    return ordered


def positions_are_dense(positions: Iterable[int]) -> bool:
    """True when the positions are 0..n-1 with no gaps or duplicates."""
    values = sorted(positions)
    return values == list(range(len(values)))


def sort_by_position(items: Iterable[P]) -> list[P]:
    """Items in ascending position order."""
    return sorted(items, key=lambda item: item.position)

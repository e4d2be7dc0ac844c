"""Sequence Allocator — monotonic per-category identifier source.

Invariants:
    - The counter never decreases
    - next() always returns a value above every id observed so far
    - Allocation never fails; callers use each returned value exactly once

Design Decisions:
    - Stores the last issued value (not the next one), so a persisted mark of N
      means "N is taken"
"""

from typing import Iterable


class SequenceAllocator:
    """Hands out 1, 2, 3, ... and catches up with ids found in loaded data."""

    def __init__(self, start: int = 0):
        self._last = max(start, 0)

    @property
    def high_water(self) -> int:
        """Highest value issued or observed."""
        return self._last

    def next(self) -> int:
        self._last += 1
        return self._last

    def advance_to(self, value: int) -> None:
        """Raise the counter to at least value. Lower values are ignored."""
        if value > self._last:
            self._last = value

    def recompute_from_data(self, ids: Iterable[int]) -> None:
        """Raise the counter to the largest id present.

        Used once after a bulk load so new entities never collide with
        pre-existing ones.
        """
        for value in ids:
            if value < 0:
                raise ValueError(f"Identifier must be a positive integer, got {value}.")
            self.advance_to(value)

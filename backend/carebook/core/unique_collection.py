"""Unique Person List — insertion-ordered collection that rejects same-person duplicates.

Invariants:
    - No two stored entries satisfy is_same_person
    - Failed add/replace/remove/set_all leaves the collection unchanged
    - Order is insertion order; no implicit sorting (views sort for display)

Design Decisions:
    - Generic over the person variant: one class backs both the senior and
      caregiver collections
    - Targets located by full value equality, duplicates by sameness
"""

from typing import Generic, Iterable, Iterator, TypeVar

from carebook.core.errors import DuplicateEntityError, EntityNotFoundError
from carebook.core.person import Caregiver, Senior, is_same_person

P = TypeVar("P", Senior, Caregiver)


class UniquePersonList(Generic[P]):
    """One category's entries, unique by (name, phone)."""

    def __init__(self, entity_type: str):
        self._entity_type = entity_type
        self._items: list[P] = []

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[P]:
        return iter(tuple(self._items))

    def contains(self, person: P) -> bool:
        return any(is_same_person(person, p) for p in self._items)

    def add(self, person: P) -> None:
        if self.contains(person):
            raise DuplicateEntityError(f"This {self._entity_type} already exists.")
        self._items.append(person)

    def replace(self, target: P, replacement: P) -> None:
        """Swap target for replacement in place, keeping its position."""
        index = self._index_of(target)
        for i, existing in enumerate(self._items):
            if i != index and is_same_person(replacement, existing):
                raise DuplicateEntityError(
                    f"This {self._entity_type} already exists.",
                )
        self._items[index] = replacement

    def remove(self, target: P) -> None:
        self._items.pop(self._index_of(target))

    def set_all(self, persons: Iterable[P]) -> None:
        """Bulk replace. Rejects input containing same-person duplicates."""
        incoming = list(persons)
        for i, person in enumerate(incoming):
            if any(is_same_person(person, other) for other in incoming[i + 1:]):
                raise DuplicateEntityError(
                    f"{self._entity_type.capitalize()} list contains duplicate entries.",
                )
        self._items = incoming

    def as_view(self) -> tuple[P, ...]:
        """Read-only snapshot in insertion order."""
        return tuple(self._items)

    def _index_of(self, target: P) -> int:
        for i, existing in enumerate(self._items):
            if existing == target:
                return i
        raise EntityNotFoundError(self._entity_type)

"""Care Store — the relational aggregate owning both person collections.

Invariants:
    - Sole mutation surface for seniors and caregivers
    - Each public operation validates before mutating: it either fully commits or
      raises one CareBookError with nothing changed
    - remove_caregiver clears every senior reference to the caregiver BEFORE the
      caregiver leaves its collection, so no dangling reference is observable
    - Allocators never fall below the largest id present in either collection
    - One re-entrant lock guards every public operation and every batch()

Design Decisions:
    - Observers notified after each committed mutation (autosave hooks in here);
      batch() defers notification so a multi-step command notifies once
    - Inverse lookup (seniors of a caregiver) by linear scan, no second index
    - Pin state lives only in the entities' own flags, never in a store field
"""

import logging
import threading
from contextlib import contextmanager
from typing import Callable, Iterable, Iterator

from carebook.core.domain_types import CaregiverId, SeniorId
from carebook.core.errors import (
    CorruptStateError, DuplicateEntityError, EntityNotFoundError,
    NoSuchCaregiverError,
)
from carebook.core.person import (
    Caregiver, Person, Senior, is_same_person, with_caregiver,
)
from carebook.core.sequence import SequenceAllocator
from carebook.core.unique_collection import UniquePersonList

logger = logging.getLogger(__name__)

StoreListener = Callable[["CareStore"], None]


class CareStore:
    """Seniors, caregivers, and their id sequences."""

    def __init__(self) -> None:
        self._seniors: UniquePersonList[Senior] = UniquePersonList("senior")
        self._caregivers: UniquePersonList[Caregiver] = UniquePersonList("caregiver")
        self._senior_seq = SequenceAllocator()
        self._caregiver_seq = SequenceAllocator()
        self._lock = threading.RLock()
        self._listeners: list[StoreListener] = []
        self._batch_depth = 0
        self._dirty = False

    # --- Snapshot accessors ---------------------------------------------------

    @property
    def seniors(self) -> tuple[Senior, ...]:
        return self._seniors.as_view()

    @property
    def caregivers(self) -> tuple[Caregiver, ...]:
        return self._caregivers.as_view()

    @property
    def senior_seq(self) -> int:
        return self._senior_seq.high_water

    @property
    def caregiver_seq(self) -> int:
        return self._caregiver_seq.high_water

    # --- Lookups --------------------------------------------------------------

    def senior_with_id(self, senior_id: int) -> Senior | None:
        return next((s for s in self._seniors if s.senior_id == senior_id), None)

    def caregiver_with_id(self, caregiver_id: int) -> Caregiver | None:
        return next(
            (c for c in self._caregivers if c.caregiver_id == caregiver_id), None,
        )

    def phone_in_use(self, phone: str, excluding: Person | None = None) -> bool:
        """Whether any senior or caregiver other than `excluding` has phone."""
        with self._lock:
            persons: list[Person] = [*self._seniors, *self._caregivers]
        return any(
            p.phone == phone for p in persons
            if excluding is None or p != excluding
        )

    def seniors_assigned_to(self, caregiver: Caregiver) -> tuple[Senior, ...]:
        return tuple(
            s for s in self._seniors if s.caregiver_id == caregiver.caregiver_id
        )

    # --- Allocation -----------------------------------------------------------

    def allocate_senior_id(self) -> SeniorId:
        with self._lock:
            return SeniorId(self._senior_seq.next())

    def allocate_caregiver_id(self) -> CaregiverId:
        with self._lock:
            return CaregiverId(self._caregiver_seq.next())

    # --- Mutations ------------------------------------------------------------

    def add_senior(self, senior: Senior) -> None:
        with self._lock:
            self._seniors.add(senior)
            self._senior_seq.advance_to(senior.senior_id)
            self._committed()

    def add_caregiver(self, caregiver: Caregiver) -> None:
        with self._lock:
            self._caregivers.add(caregiver)
            self._caregiver_seq.advance_to(caregiver.caregiver_id)
            self._committed()

    def set_senior(self, target: Senior, edited: Senior) -> None:
        with self._lock:
            self._seniors.replace(target, edited)
            self._committed()

    def set_caregiver(self, target: Caregiver, edited: Caregiver) -> None:
        with self._lock:
            self._caregivers.replace(target, edited)
            self._committed()

    def remove_senior(self, target: Senior) -> None:
        with self._lock:
            self._seniors.remove(target)
            self._committed()

    def remove_caregiver(self, target: Caregiver) -> None:
        """Remove a caregiver, clearing it from every senior first."""
        with self._lock:
            if target not in self._caregivers.as_view():
                raise EntityNotFoundError("caregiver")
            for senior in self._seniors:
                if _refers_to(senior, target):
                    self._seniors.replace(senior, with_caregiver(senior, None))
            self._caregivers.remove(target)
            self._committed()

    def reset_data(
        self,
        seniors: Iterable[Senior],
        caregivers: Iterable[Caregiver],
        senior_seq: int | None = None,
        caregiver_seq: int | None = None,
    ) -> None:
        """Replace the full state. Validates everything before swapping."""
        with self._lock:
            new_seniors: UniquePersonList[Senior] = UniquePersonList("senior")
            new_caregivers: UniquePersonList[Caregiver] = UniquePersonList("caregiver")
            new_seniors.set_all(seniors)
            new_caregivers.set_all(caregivers)
            _check_reset_integrity(new_seniors, new_caregivers)

            self._seniors = new_seniors
            self._caregivers = new_caregivers
            if senior_seq is not None:
                self._senior_seq.advance_to(senior_seq)
            if caregiver_seq is not None:
                self._caregiver_seq.advance_to(caregiver_seq)
            self._senior_seq.recompute_from_data(s.senior_id for s in new_seniors)
            self._caregiver_seq.recompute_from_data(
                c.caregiver_id for c in new_caregivers
            )
            logger.info(
                f"Store reset: {len(new_seniors)} seniors, "
                f"{len(new_caregivers)} caregivers",
            )
            self._committed()

    # --- Observers / batching -------------------------------------------------

    def subscribe(self, listener: StoreListener) -> None:
        self._listeners.append(listener)

    @contextmanager
    def batch(self) -> Iterator["CareStore"]:
        """Hold the store lock and notify observers once, on outermost exit."""
        with self._lock:
            self._batch_depth += 1
            try:
                yield self
            finally:
                self._batch_depth -= 1
                if self._batch_depth == 0 and self._dirty:
                    self._dirty = False
                    self._notify()

    def _committed(self) -> None:
        if self._batch_depth:
            self._dirty = True
        else:
            self._notify()

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener(self)


def _refers_to(senior: Senior, caregiver: Caregiver) -> bool:
    return senior.caregiver is not None and (
        is_same_person(senior.caregiver, caregiver)
        or senior.caregiver_id == caregiver.caregiver_id
    )


def _check_reset_integrity(
    seniors: UniquePersonList[Senior], caregivers: UniquePersonList[Caregiver],
) -> None:
    """Cross-collection invariants for bulk loads: unique ids, phones, references, pins."""
    for label, ids in (
        ("senior", [s.senior_id for s in seniors]),
        ("caregiver", [c.caregiver_id for c in caregivers]),
    ):
        if len(set(ids)) != len(ids):
            raise DuplicateEntityError(f"Two {label}s share the same ID.")

    phones = [p.phone for p in (*seniors, *caregivers)]
    if len(set(phones)) != len(phones):
        raise DuplicateEntityError(
            "This phone number is used by more than one person.",
        )

    caregiver_ids = {c.caregiver_id for c in caregivers}
    for senior in seniors:
        if senior.caregiver_id is not None and senior.caregiver_id not in caregiver_ids:
            raise NoSuchCaregiverError(senior.caregiver_id)

    for label, persons in (("senior", seniors), ("caregiver", caregivers)):
        if sum(1 for p in persons if p.pinned) > 1:
            raise CorruptStateError(f"more than one {label} is pinned")

"""Person Rule Checks — existence, phone exclusivity, and edit preconditions.

Invariants:
    - All functions are PURE with respect to the store: they read, never mutate
    - Raise the matching CareBookError on violation, return the resolved value
      (or None) on success
    - Phone exclusivity spans both categories combined

Design Decisions:
    - Raise instead of returning error dicts: handlers run inside store.batch()
      and an exception is what aborts the operation before any commit
"""

from carebook.core.care_store import CareStore
from carebook.core.errors import (
    DuplicateEntityError, NoSuchCaregiverError, NoSuchSeniorError,
    NothingToEditError,
)
from carebook.core.person import Caregiver, Person, Senior

PHONE_IN_USE_MESSAGE = (
    "This phone number is already used by another person. Please amend your entry."
)


def resolve_senior(store: CareStore, senior_id: int | None) -> Senior:
    """Live senior for senior_id, or NoSuchSeniorError."""
    senior = store.senior_with_id(senior_id) if senior_id is not None else None
    if senior is None:
        raise NoSuchSeniorError(senior_id)
    return senior


def resolve_caregiver(store: CareStore, caregiver_id: int) -> Caregiver:
    """Live caregiver for caregiver_id, or NoSuchCaregiverError."""
    caregiver = store.caregiver_with_id(caregiver_id)
    if caregiver is None:
        raise NoSuchCaregiverError(caregiver_id)
    return caregiver


def resolve_optional_caregiver(
    store: CareStore, caregiver_id: int | None,
) -> Caregiver | None:
    if caregiver_id is None:
        return None
    return resolve_caregiver(store, caregiver_id)


def check_phone_available(
    store: CareStore, phone: str, excluding: Person | None = None,
) -> None:
    """Phone must not belong to anyone except `excluding` (the entry being edited)."""
    if store.phone_in_use(phone, excluding=excluding):
        raise DuplicateEntityError(PHONE_IN_USE_MESSAGE)


def check_any_field_edited(changes: dict) -> None:
    if not changes:
        raise NothingToEditError()

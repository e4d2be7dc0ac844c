"""Assignment Rules — senior → caregiver link preconditions and the rebind plan.

Invariants:
    - A senior links to at most one caregiver; a caregiver may serve many seniors
    - assign fails when the senior already points at the same person
    - unassign fails unless the senior points at exactly the given caregiver id
    - After a caregiver edit every senior carrying that caregiver id must hold
      the new caregiver value (rebind)

Design Decisions:
    - Rebind returned as a plan of (current, replacement) pairs: the handler
      commits it, this module stays free of mutation
    - Matching for rebind is by identifier, since the edit may have changed the
      caregiver's name or phone
"""

from carebook.core.care_store import CareStore
from carebook.core.errors import AlreadyAssignedError, NotAssignedError
from carebook.core.person import Caregiver, Senior, is_same_person, with_caregiver


def check_can_assign(senior: Senior, caregiver: Caregiver) -> None:
    if is_same_person(senior.caregiver, caregiver):
        raise AlreadyAssignedError()


def check_can_unassign(senior: Senior, caregiver: Caregiver) -> None:
    if senior.caregiver_id != caregiver.caregiver_id:
        raise NotAssignedError()


def plan_rebind(
    store: CareStore, caregiver: Caregiver,
) -> list[tuple[Senior, Senior]]:
    """Seniors whose caregiver copy must be refreshed to `caregiver`."""
    return [
        (senior, with_caregiver(senior, caregiver))
        for senior in store.seniors_assigned_to(caregiver)
        if senior.caregiver != caregiver
    ]

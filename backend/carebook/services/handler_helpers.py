"""Handler Helpers — commit replacement plans and build result dicts.

Invariants:
    - commit_plan applies replacements in plan order, routing by category
    - rebind_seniors runs after every caregiver replacement, so no senior keeps a
      stale caregiver copy
    - Result dicts always carry status and message
"""

from carebook.core.care_store import CareStore
from carebook.core.domain_types import PersonCategory
from carebook.core.enforce_assignment import plan_rebind
from carebook.core.person import Caregiver, Person, Senior
from carebook.schemas.person import CaregiverResponse, SeniorResponse


def commit_plan(store: CareStore, plan: list[tuple[Person, Person]]) -> None:
    """Apply (current, replacement) pairs. Caregiver replacements trigger rebind."""
    for current, replacement in plan:
        if current.category == PersonCategory.SENIOR:
            store.set_senior(current, replacement)
        else:
            store.set_caregiver(current, replacement)
            rebind_seniors(store, replacement)


def rebind_seniors(store: CareStore, caregiver: Caregiver) -> int:
    """Refresh every senior's copy of caregiver. Returns how many changed."""
    plan = plan_rebind(store, caregiver)
    for current, rebound in plan:
        store.set_senior(current, rebound)
    return len(plan)


def senior_payload(senior: Senior) -> dict:
    return SeniorResponse.from_domain(senior).model_dump(mode="json")


def caregiver_payload(caregiver: Caregiver) -> dict:
    return CaregiverResponse.from_domain(caregiver).model_dump(mode="json")


def person_payload(person: Person) -> dict:
    if isinstance(person, Senior):
        return senior_payload(person)
    return caregiver_payload(person)


def ok(message: str, **extra: object) -> dict:
    return {"status": "ok", "message": message, **extra}

"""Pin Rules — at most one pinned senior and one pinned caregiver.

Invariants:
    - Pin state is derived from the entities' own `pinned` flags only
    - Pinning a target first unpins every pinned entry of its category
    - Categories are independent: pinning a senior never touches caregivers
    - Unpinning with nothing pinned in scope is an error, not a silent success

Design Decisions:
    - Plans of (current, replacement) pairs, committed by the handler in order
      (unpins first, target last)
"""

from carebook.core.care_store import CareStore
from carebook.core.domain_types import PersonCategory, UnpinScope
from carebook.core.errors import NothingPinnedError
from carebook.core.person import Person, with_pinned


def pinned_in_category(store: CareStore, category: PersonCategory) -> list[Person]:
    persons = store.seniors if category == PersonCategory.SENIOR else store.caregivers
    return [p for p in persons if p.pinned]


def plan_pin(store: CareStore, target: Person) -> list[tuple[Person, Person]]:
    """Replacements that leave `target` as the only pinned entry in its category.

    Empty when the target is already pinned.
    """
    if target.pinned:
        return []
    plan: list[tuple[Person, Person]] = [
        (p, with_pinned(p, False))
        for p in pinned_in_category(store, target.category)
    ]
    plan.append((target, with_pinned(target, True)))
    return plan


def plan_unpin(store: CareStore, scope: UnpinScope) -> list[tuple[Person, Person]]:
    """Replacements clearing every pinned entry in scope. Raises if none."""
    plan: list[tuple[Person, Person]] = [
        (p, with_pinned(p, False))
        for category in PersonCategory
        if scope.includes(category)
        for p in pinned_in_category(store, category)
    ]
    if not plan:
        raise NothingPinnedError(scope.value)
    return plan

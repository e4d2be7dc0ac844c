"""Person Views — read-side helpers: display ordering, risk filter, inverse lookups.

Invariants:
    - Never mutate the store; return new lists
    - Display order: pinned first, then name case-insensitive, then id
    - Risk filter matches ANY of the requested levels

Design Decisions:
    - Ordering applied here, not in the store (the store keeps insertion order)
"""

from typing import Iterable, Sequence, TypeVar

from carebook.core.care_store import CareStore
from carebook.core.domain_types import RiskLevel
from carebook.core.person import Caregiver, Senior

P = TypeVar("P", Senior, Caregiver)


def order_for_display(persons: Iterable[P]) -> list[P]:
    return sorted(persons, key=lambda p: (not p.pinned, p.name.casefold(), p.id))


def filter_by_risk(
    seniors: Iterable[Senior], levels: Sequence[RiskLevel],
) -> list[Senior]:
    """Seniors whose risk is any of levels. Empty levels means no filter."""
    if not levels:
        return list(seniors)
    wanted = set(levels)
    return [s for s in seniors if s.risk in wanted]


def assigned_senior_names(store: CareStore, caregiver: Caregiver) -> list[str]:
    return sorted(
        (s.name for s in store.seniors_assigned_to(caregiver)), key=str.casefold,
    )


def assigned_caregiver_name(senior: Senior) -> str | None:
    return senior.caregiver.name if senior.caregiver else None


def count_by_risk(seniors: Iterable[Senior]) -> dict[str, int]:
    counts = {level.value: 0 for level in RiskLevel}
    for senior in seniors:
        counts[senior.risk.value] += 1
    return counts

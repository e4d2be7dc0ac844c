"""Query Handlers — read-only views over the store (6 methods).

Invariants:
    - Never mutate the store
    - Lists are ordered pinned-first, then by name (case-insensitive)
"""

from typing import Sequence

from carebook.core.care_store import CareStore
from carebook.core.domain_types import RiskLevel
from carebook.core.enforce_persons import resolve_caregiver, resolve_senior
from carebook.core.person_views import (
    assigned_senior_names, count_by_risk, filter_by_risk, order_for_display,
)
from carebook.services.handler_helpers import caregiver_payload, ok, senior_payload

NO_SENIORS_PROMPT = "No seniors yet. Use add-snr to add a senior!"


class QueryHandlers:
    """Listings, lookups and risk filtering."""

    def __init__(self, store: CareStore):
        self.store = store

    def list_seniors(self, levels: Sequence[RiskLevel] = ()) -> list[dict]:
        seniors = filter_by_risk(self.store.seniors, levels)
        return [senior_payload(s) for s in order_for_display(seniors)]

    def list_caregivers(self) -> list[dict]:
        return [caregiver_payload(c) for c in order_for_display(self.store.caregivers)]

    def get_senior(self, senior_id: int) -> dict:
        return senior_payload(resolve_senior(self.store, senior_id))

    def get_caregiver(self, caregiver_id: int) -> dict:
        caregiver = resolve_caregiver(self.store, caregiver_id)
        return {
            **caregiver_payload(caregiver),
            "senior_names": assigned_senior_names(self.store, caregiver),
        }

    def seniors_of_caregiver(self, caregiver_id: int) -> list[dict]:
        caregiver = resolve_caregiver(self.store, caregiver_id)
        seniors = self.store.seniors_assigned_to(caregiver)
        return [senior_payload(s) for s in order_for_display(seniors)]

    def overview(self, levels: Sequence[RiskLevel] = ()) -> dict:
        """Both listings plus risk counts. `list` and `filter` commands render this."""
        seniors = self.list_seniors(levels)
        caregivers = self.list_caregivers()
        if levels:
            message = f"Filtered list: {len(seniors)} person(s) shown."
        elif not seniors:
            message = NO_SENIORS_PROMPT
        else:
            message = "Listed all persons"
        return ok(
            message,
            seniors=seniors,
            caregivers=caregivers,
            risk_counts=count_by_risk(self.store.seniors),
        )

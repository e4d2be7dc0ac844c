"""Pin Handlers — pin one person per category, unpin by scope (2 methods).

Invariants:
    - Pinning a person unpins everyone else in its category in the same commit
    - Pinning an already-pinned person is a success that changes nothing
    - Pin/unpin of a caregiver rebinds the seniors holding its copy
"""

import logging

from carebook.core.care_store import CareStore
from carebook.core.domain_types import UnpinScope
from carebook.core.enforce_persons import resolve_caregiver, resolve_senior
from carebook.core.enforce_pins import plan_pin, plan_unpin
from carebook.core.person import Person
from carebook.schemas.person import PinRequest
from carebook.services.handler_helpers import commit_plan, ok, person_payload

logger = logging.getLogger(__name__)


class PinHandlers:
    """Pinned-first display markers."""

    def __init__(self, store: CareStore):
        self.store = store

    def pin(self, request: PinRequest) -> dict:
        with self.store.batch():
            target = self._resolve_target(request)
            plan = plan_pin(self.store, target)
            if not plan:
                return ok(
                    f"{target.name} is already pinned.",
                    already_pinned=True, person=person_payload(target),
                )
            commit_plan(self.store, plan)
        pinned = plan[-1][1]
        logger.info("Person pinned", extra=request.model_dump())
        return ok(
            f"Pinned: {pinned.name}",
            already_pinned=False, person=person_payload(pinned),
        )

    def unpin(self, scope: UnpinScope) -> dict:
        with self.store.batch():
            plan = plan_unpin(self.store, scope)
            commit_plan(self.store, plan)
        names = [current.name for current, _ in plan]
        logger.info(f"Unpinned {len(plan)} person(s) in scope {scope.value}")
        return ok(f"Unpinned: {', '.join(names)}", unpinned=len(plan))

    def _resolve_target(self, request: PinRequest) -> Person:
        if request.caregiver_id is not None:
            return resolve_caregiver(self.store, request.caregiver_id)
        return resolve_senior(self.store, request.senior_id)

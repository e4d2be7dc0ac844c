"""Assignment Handlers — link and unlink a senior and a caregiver (2 methods).

Invariants:
    - Both ids resolved before any relationship check
    - assign over an existing different caregiver reassigns in one commit
    - unassign only clears a link that carries the given caregiver id
"""

import logging

from carebook.core.care_store import CareStore
from carebook.core.enforce_assignment import check_can_assign, check_can_unassign
from carebook.core.enforce_persons import resolve_caregiver, resolve_senior
from carebook.core.person import with_caregiver
from carebook.schemas.person import AssignmentRequest
from carebook.services.handler_helpers import ok, senior_payload

logger = logging.getLogger(__name__)


class AssignmentHandlers:
    """Senior → caregiver links."""

    def __init__(self, store: CareStore):
        self.store = store

    def assign(self, request: AssignmentRequest) -> dict:
        with self.store.batch():
            senior = resolve_senior(self.store, request.senior_id)
            caregiver = resolve_caregiver(self.store, request.caregiver_id)
            check_can_assign(senior, caregiver)
            previous = senior.caregiver_id
            edited = with_caregiver(senior, caregiver)
            self.store.set_senior(senior, edited)
        if previous is not None:
            logger.info(
                f"Senior reassigned from caregiver {previous}",
                extra=request.model_dump(),
            )
        else:
            logger.info("Senior assigned", extra=request.model_dump())
        return ok(
            f"Senior {senior.name} has been assigned to Caregiver {caregiver.name}",
            senior=senior_payload(edited),
        )

    def unassign(self, request: AssignmentRequest) -> dict:
        with self.store.batch():
            senior = resolve_senior(self.store, request.senior_id)
            caregiver = resolve_caregiver(self.store, request.caregiver_id)
            check_can_unassign(senior, caregiver)
            edited = with_caregiver(senior, None)
            self.store.set_senior(senior, edited)
        logger.info("Senior unassigned", extra=request.model_dump())
        return ok(
            f"Senior {senior.name} has been unassigned from Caregiver {caregiver.name}",
            senior=senior_payload(edited),
        )

"""Person Handlers — add, edit and delete for seniors and caregivers (5 methods).

Invariants:
    - Phone exclusivity checked before the id is allocated, so a rejected add
      never consumes an identifier
    - Edits keep the entity's identifier; a senior edit may re-point its caregiver
    - Caregiver edits rebind every senior holding that caregiver's id
    - Delete skips ids that do not resolve; only a request naming nobody fails
    - Every method runs inside store.batch(): one observer notification per call

Design Decisions:
    - Handlers receive validated pydantic requests; domain checks live in
      core/enforce_persons so the rules stay testable without a store manager
    - Caregiver removal cascade lives in CareStore.remove_caregiver, not here
"""

import logging
from dataclasses import replace

from carebook.core.care_store import CareStore
from carebook.core.enforce_persons import (
    check_any_field_edited, check_phone_available, resolve_caregiver,
    resolve_optional_caregiver, resolve_senior,
)
from carebook.core.errors import NoPersonsSpecifiedError
from carebook.core.person import Caregiver, PersonDetails, Senior, with_details
from carebook.core.person_format import format_caregiver, format_senior
from carebook.schemas.person import (
    CaregiverCreate, CaregiverUpdate, DeleteRequest, SeniorCreate, SeniorUpdate,
)
from carebook.services.handler_helpers import (
    caregiver_payload, ok, rebind_seniors, senior_payload,
)

logger = logging.getLogger(__name__)

NO_PERSONS_DELETED_MESSAGE = "No such senior and caregiver exist."


class PersonHandlers:
    """Create, edit and remove persons."""

    def __init__(self, store: CareStore):
        self.store = store

    def add_senior(self, request: SeniorCreate) -> dict:
        with self.store.batch():
            check_phone_available(self.store, request.phone)
            caregiver = resolve_optional_caregiver(self.store, request.caregiver_id)
            senior = Senior(
                senior_id=self.store.allocate_senior_id(),
                details=PersonDetails(
                    request.name, request.phone, request.address, request.note,
                ),
                risk=request.risk,
                caregiver=caregiver,
            )
            self.store.add_senior(senior)
        logger.info(
            "Senior added",
            extra={"senior_id": senior.senior_id, "caregiver_id": senior.caregiver_id},
        )
        return ok(
            f"New senior added: {format_senior(senior)}",
            senior=senior_payload(senior),
        )

    def add_caregiver(self, request: CaregiverCreate) -> dict:
        with self.store.batch():
            check_phone_available(self.store, request.phone)
            caregiver = Caregiver(
                caregiver_id=self.store.allocate_caregiver_id(),
                details=PersonDetails(
                    request.name, request.phone, request.address, request.note,
                ),
            )
            self.store.add_caregiver(caregiver)
        logger.info("Caregiver added", extra={"caregiver_id": caregiver.caregiver_id})
        return ok(
            f"New caregiver added: {format_caregiver(caregiver)}",
            caregiver=caregiver_payload(caregiver),
        )

    def edit_senior(self, senior_id: int, request: SeniorUpdate) -> dict:
        """Replace the given fields of one senior. caregiver_id re-points the link."""
        changes = request.changes()
        check_any_field_edited(changes)
        with self.store.batch():
            target = resolve_senior(self.store, senior_id)
            risk = changes.pop("risk", target.risk)
            caregiver = target.caregiver
            if "caregiver_id" in changes:
                caregiver = resolve_caregiver(self.store, changes.pop("caregiver_id"))
            if "phone" in changes:
                check_phone_available(self.store, changes["phone"], excluding=target)
            edited = replace(
                with_details(target, **changes), risk=risk, caregiver=caregiver,
            )
            self.store.set_senior(target, edited)
        logger.info("Senior edited", extra={"senior_id": senior_id})
        return ok(
            f"Edited Senior: {format_senior(edited)}", senior=senior_payload(edited),
        )

    def edit_caregiver(self, caregiver_id: int, request: CaregiverUpdate) -> dict:
        """Replace the given fields of one caregiver, then rebind its seniors."""
        changes = request.changes()
        check_any_field_edited(changes)
        with self.store.batch():
            target = resolve_caregiver(self.store, caregiver_id)
            if "phone" in changes:
                check_phone_available(self.store, changes["phone"], excluding=target)
            edited = with_details(target, **changes)
            self.store.set_caregiver(target, edited)
            rebound = rebind_seniors(self.store, edited)
        logger.info(
            f"Caregiver edited, {rebound} senior(s) rebound",
            extra={"caregiver_id": caregiver_id},
        )
        return ok(
            f"Edited Caregiver: {format_caregiver(edited)}",
            caregiver=caregiver_payload(edited),
            seniors_rebound=rebound,
        )

    def delete(self, request: DeleteRequest) -> dict:
        """Remove the named senior and/or caregiver. Unknown ids are skipped."""
        if request.senior_id is None and request.caregiver_id is None:
            raise NoPersonsSpecifiedError()
        messages: list[str] = []
        deleted: dict[str, int] = {}
        with self.store.batch():
            senior = (
                self.store.senior_with_id(request.senior_id)
                if request.senior_id is not None else None
            )
            caregiver = (
                self.store.caregiver_with_id(request.caregiver_id)
                if request.caregiver_id is not None else None
            )
            if senior is not None:
                self.store.remove_senior(senior)
                messages.append(f"Deleted Person: {format_senior(senior)}")
                deleted["senior_id"] = senior.senior_id
            if caregiver is not None:
                self.store.remove_caregiver(caregiver)
                messages.append(f"Deleted Person: {format_caregiver(caregiver)}")
                deleted["caregiver_id"] = caregiver.caregiver_id
        if not messages:
            logger.info("Delete matched nobody", extra=request.model_dump())
            return ok(NO_PERSONS_DELETED_MESSAGE, deleted=deleted)
        logger.info("Persons deleted", extra=deleted)
        return ok(" and ".join(messages), deleted=deleted)

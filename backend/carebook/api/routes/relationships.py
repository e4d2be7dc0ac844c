"""Relationship Routes — assignments, pins, and person deletion.

Invariants:
    - Each endpoint maps to exactly one operation-layer handler call
    - DELETE /assignments carries its ids in the body, like POST
"""

from fastapi import APIRouter, Body, Depends, Query

from carebook.core.domain_types import UnpinScope
from carebook.infrastructure.store_manager import get_dispatch
from carebook.schemas.person import AssignmentRequest, DeleteRequest, PinRequest
from carebook.services.command_dispatch import CommandDispatch

router = APIRouter(prefix="/api/v1", tags=["relationships"])


@router.post("/assignments")
def assign(body: AssignmentRequest, dispatch: CommandDispatch = Depends(get_dispatch)):
    return dispatch.assignment.assign(body)


@router.delete("/assignments")
def unassign(
    body: AssignmentRequest = Body(...),
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    return dispatch.assignment.unassign(body)


@router.post("/pins")
def pin(body: PinRequest, dispatch: CommandDispatch = Depends(get_dispatch)):
    return dispatch.pins.pin(body)


@router.delete("/pins")
def unpin(
    scope: UnpinScope = Query(UnpinScope.ALL),
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    return dispatch.pins.unpin(scope)


@router.post("/persons/delete")
def delete_persons(body: DeleteRequest, dispatch: CommandDispatch = Depends(get_dispatch)):
    return dispatch.persons.delete(body)

"""Caregiver Routes — create, list, fetch and edit caregivers, plus their seniors."""

from fastapi import APIRouter, Depends, status

from carebook.infrastructure.store_manager import get_dispatch
from carebook.schemas.person import CaregiverCreate, CaregiverUpdate
from carebook.services.command_dispatch import CommandDispatch

router = APIRouter(prefix="/api/v1/caregivers", tags=["caregivers"])


@router.get("")
def list_caregivers(dispatch: CommandDispatch = Depends(get_dispatch)):
    return dispatch.queries.list_caregivers()


@router.post("", status_code=status.HTTP_201_CREATED)
def create_caregiver(
    body: CaregiverCreate, dispatch: CommandDispatch = Depends(get_dispatch),
):
    return dispatch.persons.add_caregiver(body)


@router.get("/{caregiver_id}")
def get_caregiver(caregiver_id: int, dispatch: CommandDispatch = Depends(get_dispatch)):
    return dispatch.queries.get_caregiver(caregiver_id)


@router.patch("/{caregiver_id}")
def edit_caregiver(
    caregiver_id: int, body: CaregiverUpdate,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    """Edit a caregiver; every senior assigned to it sees the new details."""
    return dispatch.persons.edit_caregiver(caregiver_id, body)


@router.get("/{caregiver_id}/seniors")
def list_assigned_seniors(
    caregiver_id: int, dispatch: CommandDispatch = Depends(get_dispatch),
):
    return dispatch.queries.seniors_of_caregiver(caregiver_id)

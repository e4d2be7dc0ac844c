"""Senior Routes — create, list, fetch and edit seniors.

Invariants:
    - Listing order is pinned-first, then name (case-insensitive)
    - ?risk= may repeat; values accept the same forms as the t/ command prefix
"""

from fastapi import APIRouter, Depends, Query, status
from fastapi.exceptions import RequestValidationError

from carebook.core.domain_types import RiskLevel
from carebook.infrastructure.store_manager import get_dispatch
from carebook.schemas.person import SeniorCreate, SeniorUpdate
from carebook.services.command_dispatch import CommandDispatch

router = APIRouter(prefix="/api/v1/seniors", tags=["seniors"])


@router.get("")
def list_seniors(
    risk: list[str] = Query(default=[]),
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    return dispatch.queries.list_seniors(_parse_levels(risk))


@router.post("", status_code=status.HTTP_201_CREATED)
def create_senior(
    body: SeniorCreate, dispatch: CommandDispatch = Depends(get_dispatch),
):
    return dispatch.persons.add_senior(body)


@router.get("/{senior_id}")
def get_senior(senior_id: int, dispatch: CommandDispatch = Depends(get_dispatch)):
    return dispatch.queries.get_senior(senior_id)


@router.patch("/{senior_id}")
def edit_senior(
    senior_id: int, body: SeniorUpdate,
    dispatch: CommandDispatch = Depends(get_dispatch),
):
    return dispatch.persons.edit_senior(senior_id, body)


def _parse_levels(raw_levels: list[str]) -> tuple[RiskLevel, ...]:
    try:
        return tuple(dict.fromkeys(RiskLevel.parse(raw) for raw in raw_levels))
    except ValueError as e:
        raise RequestValidationError([{
            "loc": ("query", "risk"), "msg": str(e), "type": "value_error",
        }]) from e

"""Command Route — accepts typed command text and runs it through the dispatch.

Invariants:
    - Parse errors surface as INVALID_COMMAND (400) through the global handler
    - The response is the handler's result dict plus the command word
"""

from fastapi import APIRouter, Depends

from carebook.infrastructure.store_manager import get_dispatch
from carebook.schemas.person import CommandRequest
from carebook.services.command_dispatch import CommandDispatch

router = APIRouter(prefix="/api/v1/commands", tags=["commands"])


@router.post("")
def run_command(body: CommandRequest, dispatch: CommandDispatch = Depends(get_dispatch)):
    return dispatch.run_text(body.command_text)

"""Command Dispatch — explicit routing from command word to handler method.

Invariants:
    - Every word->handler mapping is visible: no getattr magic, no auto-discovery
    - Unknown words return an UNKNOWN_COMMAND error dict (never raises)
    - Domain errors from handlers propagate unchanged to the caller
    - Every executed command is logged with its word and outcome

Design Decisions:
    - Handlers instantiated once per store and shared across requests; they
      hold no state besides the store reference
    - Split handlers by concern: max ~6 methods per class
"""

import logging

from carebook.core.care_store import CareStore
from carebook.core.errors import CareBookError
from carebook.services.command_parser import (
    CaregiverEdit, ParsedCommand, SeniorEdit, parse_command,
)
from carebook.services.handle_assignment import AssignmentHandlers
from carebook.services.handle_persons import PersonHandlers
from carebook.services.handle_pins import PinHandlers
from carebook.services.handle_queries import QueryHandlers

logger = logging.getLogger(__name__)


class CommandDispatch:
    """Routes command word -> handler. Explicit registration, no auto-discovery."""

    def __init__(self, store: CareStore):
        self.persons = PersonHandlers(store)
        self.assignment = AssignmentHandlers(store)
        self.pins = PinHandlers(store)
        self.queries = QueryHandlers(store)

        # Adding a command requires editing this dict and the parser's table
        self._handlers = {
            "add-snr": self.persons.add_senior,
            "add-cgr": self.persons.add_caregiver,
            "edit": self._edit,
            "delete": self.persons.delete,
            "assign": self.assignment.assign,
            "unassign": self.assignment.unassign,
            "pin": self.pins.pin,
            "unpin": self.pins.unpin,
            "filter": self.queries.overview,
            "list": lambda _payload: self.queries.overview(),
        }

    def run_text(self, command_text: str) -> dict:
        """Parse then execute one command line. Parse errors propagate."""
        return self.execute(parse_command(command_text))

    def execute(self, command: ParsedCommand) -> dict:
        handler = self._handlers.get(command.word)
        if handler is None:
            logger.warning(
                f"Unknown command '{command.word}'",
                extra={"command": command.word, "error_code": "UNKNOWN_COMMAND"},
            )
            return {
                "status": "error",
                "error_code": "UNKNOWN_COMMAND",
                "message": f"Command '{command.word}' does not exist.",
            }
        try:
            result = handler(command.payload)
        except CareBookError as e:
            e.context.command = command.word
            logger.info(
                f"Command rejected: {e.message}",
                extra={"command": command.word, "error_code": e.code},
            )
            raise
        logger.info("Command executed", extra={"command": command.word})
        return {"command": command.word, **result}

    def _edit(self, payload: SeniorEdit | CaregiverEdit) -> dict:
        if isinstance(payload, SeniorEdit):
            return self.persons.edit_senior(payload.senior_id, payload.update)
        return self.persons.edit_caregiver(payload.caregiver_id, payload.update)

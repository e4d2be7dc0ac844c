"""Command Parser — turns typed command text into validated request objects.

Invariants:
    - Syntax only: existence, duplicates and pin state are never checked here
    - Every failure raises CommandParseError carrying the command's usage line
    - Single-valued prefixes may appear at most once; `t/` may repeat for filter
    - Field constraints come from the pydantic schemas, not from this module

Design Decisions:
    - Prefix tokens are recognised only at the start of the text or after
      whitespace, so values may contain `/` (addresses like `Blk 10/2`)
    - One parse function per command word, registered in an explicit dict
"""

import re
from dataclasses import dataclass
from typing import Callable

from pydantic import BaseModel, ValidationError

from carebook.core.domain_types import RiskLevel, UnpinScope
from carebook.core.errors import CommandParseError
from carebook.schemas.person import (
    AssignmentRequest, CaregiverCreate, CaregiverUpdate, DeleteRequest,
    PinRequest, SeniorCreate, SeniorUpdate,
)

NAME, PHONE, ADDRESS, NOTE, RISK = "n/", "p/", "a/", "nt/", "t/"
CAREGIVER, SENIOR, CAREGIVER_LINK = "c/", "s/", "cid/"

_PREFIX_RE = re.compile(r"(?:^|(?<=\s))(cid/|nt/|n/|p/|a/|t/|c/|s/)")

UNKNOWN_COMMAND_MESSAGE = "Unknown command"
INVALID_INDEX_MESSAGE = "Index is not a non-zero unsigned integer."
DUPLICATE_FIELDS_MESSAGE = (
    "Multiple values specified for the following single-valued field(s): {}"
)

USAGE = {
    "add-snr": "add-snr n/NAME p/PHONE a/ADDRESS t/RISK [nt/NOTE] [c/CAREGIVER_ID]",
    "add-cgr": "add-cgr n/NAME p/PHONE [a/ADDRESS] [nt/NOTE]",
    "edit": (
        "edit s/SENIOR_ID [n/NAME] [p/PHONE] [a/ADDRESS] [nt/NOTE] [t/RISK] "
        "[cid/CAREGIVER_ID]  |  edit c/CAREGIVER_ID [n/NAME] [p/PHONE] "
        "[a/ADDRESS] [nt/NOTE]"
    ),
    "delete": "delete [s/SENIOR_ID] [c/CAREGIVER_ID]",
    "assign": "assign s/SENIOR_ID c/CAREGIVER_ID",
    "unassign": "unassign s/SENIOR_ID c/CAREGIVER_ID",
    "pin": "pin s/SENIOR_ID  |  pin c/CAREGIVER_ID",
    "unpin": "unpin [s|c|a]",
    "filter": "filter t/RISK [t/RISK]...",
    "list": "list",
}

_UNPIN_SCOPES = {
    "": UnpinScope.ALL, "a": UnpinScope.ALL, "all": UnpinScope.ALL,
    "s": UnpinScope.SENIORS, "sen": UnpinScope.SENIORS,
    "senior": UnpinScope.SENIORS, "seniors": UnpinScope.SENIORS,
    "c": UnpinScope.CAREGIVERS, "cg": UnpinScope.CAREGIVERS,
    "caregiver": UnpinScope.CAREGIVERS, "caregivers": UnpinScope.CAREGIVERS,
}


@dataclass(frozen=True)
class SeniorEdit:
    senior_id: int
    update: SeniorUpdate


@dataclass(frozen=True)
class CaregiverEdit:
    caregiver_id: int
    update: CaregiverUpdate


@dataclass(frozen=True)
class ParsedCommand:
    """Command word plus its validated payload (request model, scope, or levels)."""
    word: str
    payload: object = None


@dataclass
class ArgumentMap:
    """Values found after each prefix, plus any text before the first prefix."""
    preamble: str
    values: dict[str, list[str]]

    def get(self, prefix: str) -> str | None:
        found = self.values.get(prefix)
        return found[-1] if found else None

    def all(self, prefix: str) -> list[str]:
        return list(self.values.get(prefix, []))

    def present(self) -> set[str]:
        return set(self.values)


def tokenize(args: str) -> ArgumentMap:
    matches = list(_PREFIX_RE.finditer(args))
    if not matches:
        return ArgumentMap(preamble=args.strip(), values={})
    values: dict[str, list[str]] = {}
    for i, match in enumerate(matches):
        end = matches[i + 1].start() if i + 1 < len(matches) else len(args)
        values.setdefault(match.group(1), []).append(args[match.end():end].strip())
    return ArgumentMap(preamble=args[:matches[0].start()].strip(), values=values)


def parse_command(text: str) -> ParsedCommand:
    """Parse one line of command text. Raises CommandParseError."""
    word, _, args = text.strip().partition(" ")
    word = word.lower()
    parser = _PARSERS.get(word)
    if parser is None:
        raise CommandParseError(UNKNOWN_COMMAND_MESSAGE)
    return ParsedCommand(word, parser(tokenize(args)))


# --- Per-command parsers ------------------------------------------------------

def _parse_add_senior(args: ArgumentMap) -> SeniorCreate:
    _expect(args, "add-snr", {NAME, PHONE, ADDRESS, RISK, NOTE, CAREGIVER})
    _require(args, "add-snr", (NAME, PHONE, ADDRESS, RISK))
    return _build(SeniorCreate, "add-snr", _fields(args, {
        NAME: "name", PHONE: "phone", ADDRESS: "address", RISK: "risk",
        NOTE: "note", CAREGIVER: "caregiver_id",
    }))


def _parse_add_caregiver(args: ArgumentMap) -> CaregiverCreate:
    _expect(args, "add-cgr", {NAME, PHONE, ADDRESS, NOTE})
    _require(args, "add-cgr", (NAME, PHONE))
    return _build(CaregiverCreate, "add-cgr", _fields(args, {
        NAME: "name", PHONE: "phone", ADDRESS: "address", NOTE: "note",
    }))


def _parse_edit(args: ArgumentMap) -> SeniorEdit | CaregiverEdit:
    senior_raw, caregiver_raw = args.get(SENIOR), args.get(CAREGIVER)
    if (senior_raw is None) == (caregiver_raw is None):
        raise CommandParseError(
            "Specify exactly one of s/SENIOR_ID or c/CAREGIVER_ID.", USAGE["edit"],
        )
    if senior_raw is not None:
        _expect(args, "edit", {SENIOR, NAME, PHONE, ADDRESS, NOTE, RISK, CAREGIVER_LINK})
        update = _build(SeniorUpdate, "edit", _fields(args, {
            NAME: "name", PHONE: "phone", ADDRESS: "address", NOTE: "note",
            RISK: "risk", CAREGIVER_LINK: "caregiver_id",
        }))
        return SeniorEdit(_parse_id(senior_raw, "edit"), update)
    _expect(args, "edit", {CAREGIVER, NAME, PHONE, ADDRESS, NOTE})
    update = _build(CaregiverUpdate, "edit", _fields(args, {
        NAME: "name", PHONE: "phone", ADDRESS: "address", NOTE: "note",
    }))
    return CaregiverEdit(_parse_id(caregiver_raw, "edit"), update)


def _parse_delete(args: ArgumentMap) -> DeleteRequest:
    _expect(args, "delete", {SENIOR, CAREGIVER})
    return DeleteRequest(**_id_fields(args, "delete"))


def _parse_assignment(word: str) -> Callable[[ArgumentMap], AssignmentRequest]:
    def parse(args: ArgumentMap) -> AssignmentRequest:
        _expect(args, word, {SENIOR, CAREGIVER})
        _require(args, word, (SENIOR, CAREGIVER))
        return AssignmentRequest(**_id_fields(args, word))
    return parse


def _parse_pin(args: ArgumentMap) -> PinRequest:
    _expect(args, "pin", {SENIOR, CAREGIVER})
    return _build(PinRequest, "pin", _id_fields(args, "pin"))


def _parse_unpin(args: ArgumentMap) -> UnpinScope:
    _expect(args, "unpin", set())
    scope = _UNPIN_SCOPES.get(args.preamble.lower())
    if scope is None:
        raise CommandParseError(
            f"Unknown unpin scope: {args.preamble}", USAGE["unpin"],
        )
    return scope


def _parse_filter(args: ArgumentMap) -> tuple[RiskLevel, ...]:
    _expect(args, "filter", {RISK}, multi_valued={RISK})
    raw_levels = args.all(RISK)
    if not raw_levels:
        raise CommandParseError("Please provide at least one tag.", USAGE["filter"])
    try:
        return tuple(dict.fromkeys(RiskLevel.parse(raw) for raw in raw_levels))
    except ValueError as e:
        raise CommandParseError(str(e), USAGE["filter"]) from e


def _parse_list(args: ArgumentMap) -> None:
    _expect(args, "list", set())
    return None


# --- Shared checks ------------------------------------------------------------

def _expect(
    args: ArgumentMap, word: str, allowed: set[str],
    multi_valued: frozenset[str] | set[str] = frozenset(),
) -> None:
    """Reject prefixes the command does not take and repeated single-valued ones."""
    unexpected = sorted(args.present() - allowed)
    if unexpected:
        raise CommandParseError(
            f"Unexpected field(s) for {word}: {' '.join(unexpected)}", USAGE[word],
        )
    if args.preamble and word not in ("unpin", "list"):
        raise CommandParseError(f"Invalid command format for {word}!", USAGE[word])
    repeated = sorted(
        p for p, found in args.values.items()
        if len(found) > 1 and p not in multi_valued
    )
    if repeated:
        raise CommandParseError(DUPLICATE_FIELDS_MESSAGE.format(" ".join(repeated)))


def _require(args: ArgumentMap, word: str, prefixes: tuple[str, ...]) -> None:
    missing = [p for p in prefixes if args.get(p) is None]
    if missing:
        raise CommandParseError(
            f"Missing field(s) for {word}: {' '.join(missing)}", USAGE[word],
        )


def _fields(args: ArgumentMap, mapping: dict[str, str]) -> dict[str, str]:
    return {field: args.get(p) for p, field in mapping.items() if args.get(p) is not None}


def _id_fields(args: ArgumentMap, word: str) -> dict[str, int]:
    ids = {}
    for prefix, field in ((SENIOR, "senior_id"), (CAREGIVER, "caregiver_id")):
        raw = args.get(prefix)
        if raw is not None:
            ids[field] = _parse_id(raw, word)
    return ids


def _parse_id(raw: str, word: str) -> int:
    if not raw.isdigit() or int(raw) < 1:
        raise CommandParseError(INVALID_INDEX_MESSAGE, USAGE[word])
    return int(raw)


def _build(model: type[BaseModel], word: str, data: dict) -> BaseModel:
    """Instantiate a request model, turning ValidationError into CommandParseError."""
    try:
        return model(**data)
    except ValidationError as e:
        raise CommandParseError(_describe(e), USAGE[word]) from e


def _describe(error: ValidationError) -> str:
    parts = []
    for err in error.errors():
        msg = err["msg"].removeprefix("Value error, ")
        loc = ".".join(str(x) for x in err["loc"])
        parts.append(f"{loc}: {msg}" if loc else msg)
    return "; ".join(parts)


_PARSERS: dict[str, Callable[[ArgumentMap], object]] = {
    "add-snr": _parse_add_senior,
    "add-cgr": _parse_add_caregiver,
    "edit": _parse_edit,
    "delete": _parse_delete,
    "assign": _parse_assignment("assign"),
    "unassign": _parse_assignment("unassign"),
    "pin": _parse_pin,
    "unpin": _parse_unpin,
    "filter": _parse_filter,
    "list": _parse_list,
}

"""Command Parser — tests for prefix tokenizing and per-command validation.

Tests cover:
    - Every command word produces the expected payload type
    - Values may contain `/` when not preceded by whitespace
    - Repeated prefixes, unexpected prefixes, bad ids and unknown words fail
    - Field constraints come from the schemas (phone digits, risk forms)
"""

import pytest

from carebook.core.domain_types import RiskLevel, UnpinScope
from carebook.core.errors import CommandParseError
from carebook.schemas.person import (
    AssignmentRequest, CaregiverCreate, DeleteRequest, PinRequest, SeniorCreate,
)
from carebook.services.command_parser import (
    CaregiverEdit, SeniorEdit, parse_command, tokenize,
)


# ─── tokenize ────────────────────────────────────────────────────

def test_tokenize_splits_on_prefixes():
    args = tokenize("n/Lim Ah Kow p/91234567 a/Blk 10/2 Bedok")
    assert args.get("n/") == "Lim Ah Kow"
    assert args.get("p/") == "91234567"
    assert args.get("a/") == "Blk 10/2 Bedok"
    assert args.preamble == ""


def test_tokenize_keeps_preamble():
    assert tokenize("seniors").preamble == "seniors"


def test_tokenize_distinguishes_cid_and_c():
    args = tokenize("s/1 cid/2 c/3")
    assert args.get("cid/") == "2"
    assert args.get("c/") == "3"


# ─── add ─────────────────────────────────────────────────────────

def test_parse_add_senior():
    parsed = parse_command(
        "add-snr n/Lim Ah Kow p/91234567 a/Blk 123 Bedok t/High Risk nt/Has dementia c/2",
    )
    assert parsed.word == "add-snr"
    assert isinstance(parsed.payload, SeniorCreate)
    assert parsed.payload.risk == RiskLevel.HIGH
    assert parsed.payload.caregiver_id == 2
    assert parsed.payload.note == "Has dementia"


def test_parse_add_senior_missing_risk():
    with pytest.raises(CommandParseError, match="Missing field"):
        parse_command("add-snr n/Lim p/91234567 a/Blk 1")


def test_parse_add_senior_bad_phone_reports_field():
    with pytest.raises(CommandParseError, match="phone"):
        parse_command("add-snr n/Lim p/12ab a/Blk 1 t/HR")


def test_parse_add_senior_bad_risk():
    with pytest.raises(CommandParseError, match="Risk must be"):
        parse_command("add-snr n/Lim p/91234567 a/Blk 1 t/extreme")


def test_parse_add_caregiver_minimal():
    parsed = parse_command("add-cgr n/Mei Hui p/90000002")
    assert isinstance(parsed.payload, CaregiverCreate)
    assert parsed.payload.address == ""


def test_repeated_prefix_rejected():
    with pytest.raises(CommandParseError, match="Multiple values"):
        parse_command("add-cgr n/A n/B p/90000002")


def test_unexpected_prefix_rejected():
    with pytest.raises(CommandParseError, match="Unexpected field"):
        parse_command("add-cgr n/Mei Hui p/90000002 t/HR")


def test_preamble_rejected_for_add():
    with pytest.raises(CommandParseError, match="Invalid command format"):
        parse_command("add-cgr hello n/Mei Hui p/90000002")


# ─── edit ────────────────────────────────────────────────────────

def test_parse_edit_senior():
    parsed = parse_command("edit s/3 t/lr cid/1")
    assert isinstance(parsed.payload, SeniorEdit)
    assert parsed.payload.senior_id == 3
    assert parsed.payload.update.changes() == {"risk": RiskLevel.LOW, "caregiver_id": 1}


def test_parse_edit_caregiver():
    parsed = parse_command("edit c/2 p/90000022")
    assert isinstance(parsed.payload, CaregiverEdit)
    assert parsed.payload.update.changes() == {"phone": "90000022"}


def test_parse_edit_caregiver_rejects_risk():
    with pytest.raises(CommandParseError, match="Unexpected field"):
        parse_command("edit c/2 t/HR")


def test_parse_edit_needs_exactly_one_target():
    with pytest.raises(CommandParseError, match="exactly one"):
        parse_command("edit n/Someone")
    with pytest.raises(CommandParseError, match="exactly one"):
        parse_command("edit s/1 c/1 n/Someone")


def test_parse_edit_with_no_fields_parses():
    """Empty edits are rejected by the handler, not the parser."""
    assert parse_command("edit s/1").payload.update.changes() == {}


# ─── ids / relationships ─────────────────────────────────────────

@pytest.mark.parametrize("raw", ["0", "-1", "abc", "1.5", ""])
def test_bad_ids_rejected(raw):
    with pytest.raises(CommandParseError, match="non-zero unsigned integer"):
        parse_command(f"assign s/{raw} c/1")


def test_parse_assign_and_unassign():
    assert parse_command("assign s/1 c/2").payload == AssignmentRequest(
        senior_id=1, caregiver_id=2,
    )
    assert parse_command("unassign c/2 s/1").word == "unassign"


def test_parse_assign_requires_both_ids():
    with pytest.raises(CommandParseError, match="Missing field"):
        parse_command("assign s/1")


def test_parse_delete_allows_nobody():
    assert parse_command("delete").payload == DeleteRequest()
    assert parse_command("delete c/2").payload.caregiver_id == 2


def test_parse_pin():
    assert parse_command("pin c/1").payload == PinRequest(caregiver_id=1)


def test_parse_pin_both_rejected():
    with pytest.raises(CommandParseError, match="not both"):
        parse_command("pin s/1 c/1")


@pytest.mark.parametrize("text,scope", [
    ("unpin", UnpinScope.ALL),
    ("unpin a", UnpinScope.ALL),
    ("unpin s", UnpinScope.SENIORS),
    ("unpin Seniors", UnpinScope.SENIORS),
    ("unpin cg", UnpinScope.CAREGIVERS),
])
def test_parse_unpin_scopes(text, scope):
    assert parse_command(text).payload is scope


def test_parse_unpin_unknown_scope():
    with pytest.raises(CommandParseError, match="unpin scope"):
        parse_command("unpin everyone")


# ─── filter / list / unknown ─────────────────────────────────────

def test_parse_filter_allows_repeated_tags():
    parsed = parse_command("filter t/HR t/medium risk t/hr")
    assert parsed.payload == (RiskLevel.HIGH, RiskLevel.MEDIUM)


def test_parse_filter_requires_a_tag():
    with pytest.raises(CommandParseError, match="at least one tag"):
        parse_command("filter")


def test_parse_list():
    parsed = parse_command("LIST")
    assert parsed.word == "list"
    assert parsed.payload is None


def test_unknown_command():
    with pytest.raises(CommandParseError, match="Unknown command") as exc:
        parse_command("launch-rocket now")
    assert exc.value.code == "INVALID_COMMAND"
    assert exc.value.http_status == 400

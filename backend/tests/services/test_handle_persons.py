"""Person Handlers — tests for add, edit and delete through the operation layer.

Tests cover:
    - Adds allocate fresh ids and reject phones used in either category
    - A rejected add never consumes an identifier
    - Edits keep ids, re-point caregivers, and rebind seniors after caregiver edits
    - Delete skips unknown halves, cascades caregiver removal, and fails only
      when nobody is named
"""

import pytest

from carebook.core.domain_types import RiskLevel
from carebook.core.errors import (
    DuplicateEntityError, NoPersonsSpecifiedError, NoSuchCaregiverError,
    NoSuchSeniorError, NothingToEditError,
)
from carebook.schemas.person import (
    CaregiverCreate, CaregiverUpdate, DeleteRequest, SeniorCreate, SeniorUpdate,
)


def _new_senior(**overrides) -> SeniorCreate:
    data = {
        "name": "Goh Bee Lian", "phone": "96660000",
        "address": "Blk 5 Yishun Ring Rd", "risk": "MR",
    }
    data.update(overrides)
    return SeniorCreate(**data)


# ─── add ─────────────────────────────────────────────────────────

def test_add_senior_allocates_next_id(dispatch):
    result = dispatch.persons.add_senior(_new_senior())
    assert result["status"] == "ok"
    assert result["senior"]["id"] == 5
    assert result["message"].startswith("New senior added: Goh Bee Lian; Risk: MR")


def test_add_senior_with_caregiver(dispatch):
    result = dispatch.persons.add_senior(_new_senior(caregiver_id=1))
    assert result["senior"]["caregiver"]["name"] == "John Tan"


def test_add_senior_with_unknown_caregiver_raises(dispatch, sample_store):
    with pytest.raises(NoSuchCaregiverError):
        dispatch.persons.add_senior(_new_senior(caregiver_id=9))
    assert len(sample_store.seniors) == 4


def test_add_senior_with_caregiver_phone_rejected(dispatch):
    with pytest.raises(DuplicateEntityError, match="phone number is already used"):
        dispatch.persons.add_senior(_new_senior(phone="90000001"))


def test_rejected_add_does_not_consume_id(dispatch):
    with pytest.raises(DuplicateEntityError):
        dispatch.persons.add_senior(_new_senior(phone="91234567"))
    assert dispatch.persons.add_senior(_new_senior())["senior"]["id"] == 5


def test_add_caregiver(dispatch, sample_store):
    result = dispatch.persons.add_caregiver(
        CaregiverCreate(name="Raj Kumar", phone="88880000"),
    )
    assert result["caregiver"]["id"] == 3
    assert sample_store.caregiver_with_id(3).details.address == ""


def test_add_caregiver_with_senior_phone_rejected(dispatch):
    with pytest.raises(DuplicateEntityError):
        dispatch.persons.add_caregiver(CaregiverCreate(name="X", phone="98887766"))


# ─── edit ────────────────────────────────────────────────────────

def test_edit_senior_keeps_id_and_unchanged_fields(dispatch, sample_store):
    dispatch.persons.edit_senior(2, SeniorUpdate(risk="High Risk"))
    senior = sample_store.senior_with_id(2)
    assert senior.risk == RiskLevel.HIGH
    assert senior.name == "Mdm Tan"
    assert senior.details.note == "Lives alone"


def test_edit_senior_can_clear_note(dispatch, sample_store):
    dispatch.persons.edit_senior(2, SeniorUpdate(note=""))
    assert sample_store.senior_with_id(2).details.note == ""


def test_edit_senior_repoints_caregiver(dispatch, sample_store):
    dispatch.persons.edit_senior(1, SeniorUpdate(caregiver_id=1))
    assert sample_store.senior_with_id(1).caregiver.name == "John Tan"


def test_edit_senior_to_own_phone_is_allowed(dispatch):
    result = dispatch.persons.edit_senior(1, SeniorUpdate(phone="91234567"))
    assert result["status"] == "ok"


def test_edit_senior_to_taken_phone_raises(dispatch, sample_store):
    with pytest.raises(DuplicateEntityError):
        dispatch.persons.edit_senior(1, SeniorUpdate(phone="90000002"))
    assert sample_store.senior_with_id(1).phone == "91234567"


def test_edit_unknown_senior_raises(dispatch):
    with pytest.raises(NoSuchSeniorError):
        dispatch.persons.edit_senior(42, SeniorUpdate(name="Nobody"))


def test_edit_with_no_fields_raises(dispatch):
    with pytest.raises(NothingToEditError):
        dispatch.persons.edit_senior(1, SeniorUpdate())


def test_edit_caregiver_rebinds_assigned_seniors(dispatch, sample_store):
    """Mei Hui is renamed; Lim Ah Kow's caregiver copy follows."""
    result = dispatch.persons.edit_caregiver(2, CaregiverUpdate(name="Mei Hui Tan"))

    assert result["seniors_rebound"] == 1
    senior = sample_store.senior_with_id(1)
    assert senior.caregiver == sample_store.caregiver_with_id(2)
    assert senior.caregiver.name == "Mei Hui Tan"


def test_edit_caregiver_phone_to_senior_phone_raises(dispatch):
    with pytest.raises(DuplicateEntityError):
        dispatch.persons.edit_caregiver(1, CaregiverUpdate(phone="91234567"))


# ─── delete ──────────────────────────────────────────────────────

def test_delete_requires_someone(dispatch):
    with pytest.raises(NoPersonsSpecifiedError):
        dispatch.persons.delete(DeleteRequest())


def test_delete_senior(dispatch, sample_store):
    result = dispatch.persons.delete(DeleteRequest(senior_id=2))
    assert result["message"].startswith("Deleted Person: Mdm Tan")
    assert sample_store.senior_with_id(2) is None


def test_delete_caregiver_cascades(dispatch, sample_store):
    dispatch.persons.delete(DeleteRequest(caregiver_id=2))
    assert sample_store.caregiver_with_id(2) is None
    assert sample_store.senior_with_id(1).caregiver is None


def test_delete_both_reports_both(dispatch):
    result = dispatch.persons.delete(DeleteRequest(senior_id=3, caregiver_id=1))
    assert " and Deleted Person: John Tan" in result["message"]
    assert result["deleted"] == {"senior_id": 3, "caregiver_id": 1}


def test_delete_skips_unknown_half(dispatch, sample_store):
    result = dispatch.persons.delete(DeleteRequest(senior_id=99, caregiver_id=1))
    assert result["deleted"] == {"caregiver_id": 1}
    assert len(sample_store.seniors) == 4


def test_delete_matching_nobody_is_not_an_error(dispatch):
    result = dispatch.persons.delete(DeleteRequest(senior_id=99, caregiver_id=99))
    assert result["status"] == "ok"
    assert result["message"] == "No such senior and caregiver exist."


def test_deleted_ids_are_not_reused(dispatch):
    dispatch.persons.delete(DeleteRequest(senior_id=4))
    assert dispatch.persons.add_senior(_new_senior())["senior"]["id"] == 5

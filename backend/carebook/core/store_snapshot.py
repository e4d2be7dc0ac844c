"""Store Snapshot — serialization / deserialization of the full CareStore state.

Invariants:
    - store_to_snapshot produces a JSON-safe dict (no Enums, no dataclasses)
    - store_from_snapshot either returns a fully valid store or raises CorruptStateError
    - Missing optional keys fall back to defaults (legacy files load)
    - Missing sequence marks are recomputed from the data before any allocation

Design Decisions:
    - One `persons` list with a `role` discriminator (SENIOR / CAREGIVER)
    - Senior → caregiver reference written as BOTH `caregiverId` and the
      (name, phone) composite key; loading prefers the id and falls back to the
      key for files written before ids were persisted
    - Bulk default mapping keeps legacy-field handling in one place
"""

from carebook.core.care_store import CareStore
from carebook.core.domain_types import CaregiverId, PersonCategory, RiskLevel, SeniorId
from carebook.core.errors import CareBookError, CorruptStateError
from carebook.core.person import Caregiver, PersonDetails, Senior

MISSING_FIELD_MESSAGE = "{role}'s {field} field is missing!"

# Optional detail fields and their legacy defaults
_DETAIL_DEFAULTS: dict[str, object] = {"note": "", "pinned": False}


# --- Encode -------------------------------------------------------------------

def _details_to_dict(details: PersonDetails) -> dict:
    return {
        "name": details.name,
        "phone": details.phone,
        "address": details.address,
        "note": details.note,
        "pinned": details.pinned,
    }


def caregiver_to_dict(caregiver: Caregiver) -> dict:
    return {
        "role": PersonCategory.CAREGIVER.value,
        "caregiverId": caregiver.caregiver_id,
        **_details_to_dict(caregiver.details),
    }


def senior_to_dict(senior: Senior) -> dict:
    data = {
        "role": PersonCategory.SENIOR.value,
        "seniorId": senior.senior_id,
        **_details_to_dict(senior.details),
        "risk": senior.risk.value,
        "caregiverId": senior.caregiver_id,
        "caregiver": None,
    }
    if senior.caregiver is not None:
        data["caregiver"] = {
            "name": senior.caregiver.name, "phone": senior.caregiver.phone,
        }
    return data


def store_to_snapshot(store: CareStore) -> dict:
    """Serialize the store to a JSON-safe dict. Pure, no IO."""
    return {
        "seniorSeq": store.senior_seq,
        "caregiverSeq": store.caregiver_seq,
        "persons": [
            *(caregiver_to_dict(c) for c in store.caregivers),
            *(senior_to_dict(s) for s in store.seniors),
        ],
    }


# --- Decode -------------------------------------------------------------------

def store_from_snapshot(data: dict) -> CareStore:
    """Rebuild a CareStore from a snapshot dict. Pure, no IO.

    Raises CorruptStateError for a non-object top level, missing or mistyped
    fields, an unknown role, an invalid risk, duplicates, a second pinned
    entry in one category, or a senior pointing at no known caregiver.
    """
    if not isinstance(data, dict):
        raise CorruptStateError("top-level value must be an object")
    store = CareStore()
    if not data:
        return store

    raw_persons = data.get("persons", [])
    if not isinstance(raw_persons, list):
        raise CorruptStateError("`persons` must be a list")

    caregiver_rows, senior_rows = _split_by_role(raw_persons)
    caregivers = [_caregiver_from_dict(row) for row in caregiver_rows]
    seniors = [_senior_from_dict(row, caregivers) for row in senior_rows]
    senior_seq = _optional_seq(data, "seniorSeq")
    caregiver_seq = _optional_seq(data, "caregiverSeq")

    try:
        store.reset_data(
            seniors, caregivers,
            senior_seq=senior_seq, caregiver_seq=caregiver_seq,
        )
    except CorruptStateError:
        raise
    except CareBookError as e:
        raise CorruptStateError(e.message) from e
    except ValueError as e:
        raise CorruptStateError(str(e)) from e
    return store


def _split_by_role(rows: list) -> tuple[list[dict], list[dict]]:
    caregivers, seniors = [], []
    for row in rows:
        if not isinstance(row, dict):
            raise CorruptStateError("every person entry must be an object")
        role = str(row.get("role") or "").strip().upper()
        # Legacy entries carry no role; a risk field marks a senior
        if not role and row.get("risk") is not None:
            role = PersonCategory.SENIOR.value
        if role == PersonCategory.SENIOR.value:
            seniors.append(row)
        elif role == PersonCategory.CAREGIVER.value:
            caregivers.append(row)
        else:
            raise CorruptStateError(f"invalid person role: {row.get('role')!r}")
    return caregivers, seniors


def _details_from_dict(row: dict, role: str, address_required: bool) -> PersonDetails:
    values = {}
    for key in ("name", "phone"):
        values[key] = _required_str(row, key, role)
    if address_required:
        values["address"] = _required_str(row, "address", role)
    else:
        values["address"] = _optional_value(row, "address", "", str, role)
    for key, default in _DETAIL_DEFAULTS.items():
        values[key] = _optional_value(row, key, default, type(default), role)
    return PersonDetails(**values)


def _caregiver_from_dict(row: dict) -> Caregiver:
    return Caregiver(
        caregiver_id=CaregiverId(_required_id(row, "caregiverId", "Caregiver")),
        details=_details_from_dict(row, "Caregiver", address_required=False),
    )


def _senior_from_dict(row: dict, caregivers: list[Caregiver]) -> Senior:
    raw_risk = row.get("risk")
    # Older files stored the risk tag as a one-element list
    if isinstance(raw_risk, list) and len(raw_risk) == 1:
        raw_risk = raw_risk[0]
    if raw_risk is None:
        raise CorruptStateError(MISSING_FIELD_MESSAGE.format(role="Senior", field="risk"))
    try:
        risk = RiskLevel.parse(str(raw_risk))
    except ValueError as e:
        raise CorruptStateError(str(e)) from e

    return Senior(
        senior_id=SeniorId(_required_id(row, "seniorId", "Senior")),
        details=_details_from_dict(row, "Senior", address_required=True),
        risk=risk,
        caregiver=_resolve_caregiver_ref(row, caregivers),
    )


def _resolve_caregiver_ref(row: dict, caregivers: list[Caregiver]) -> Caregiver | None:
    caregiver_id = row.get("caregiverId")
    key = row.get("caregiver")
    if caregiver_id is not None:
        match = next((c for c in caregivers if c.caregiver_id == caregiver_id), None)
        if match is None:
            raise CorruptStateError(f"senior refers to unknown caregiver ID {caregiver_id}")
        return match
    if isinstance(key, dict):
        match = next(
            (c for c in caregivers
             if c.name == key.get("name") and c.phone == key.get("phone")),
            None,
        )
        if match is None:
            raise CorruptStateError(
                f"senior refers to unknown caregiver {key.get('name')!r}",
            )
        return match
    return None


def _required_str(row: dict, key: str, role: str) -> str:
    value = row.get(key)
    if value is None:
        raise CorruptStateError(MISSING_FIELD_MESSAGE.format(role=role, field=key))
    if not isinstance(value, str) or not value.strip():
        raise CorruptStateError(f"{role}'s {key} field must be non-blank text")
    return value


def _required_id(row: dict, key: str, role: str) -> int:
    value = row.get(key)
    if value is None:
        raise CorruptStateError(MISSING_FIELD_MESSAGE.format(role=role, field=key))
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise CorruptStateError(f"{role}'s {key} must be a positive integer")
    return value


def _optional_seq(data: dict, key: str) -> int | None:
    value = data.get(key)
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, int) or value < 0:
        raise CorruptStateError(f"{key} must be a non-negative integer")
    return value


def _optional_value(row: dict, key: str, default, kind: type, role: str):
    value = row.get(key)
    if value is None:
        return default
    if not isinstance(value, kind):
        expected = "true or false" if kind is bool else "text"
        raise CorruptStateError(f"{role}'s {key} field must be {expected}")
    return value

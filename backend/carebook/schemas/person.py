"""Person Schemas — Pydantic models with field-level validation for person requests.

Invariants:
    - name: word characters, spaces and . , ' / @ ( ) -, at most 100 chars
    - phone: 3-15 digits
    - Senior address is required and non-blank; caregiver address is optional
    - risk accepts HR/MR/LR and the long forms, case-insensitive
    - Update models report only fields the caller actually sent (changes())

Design Decisions:
    - field_validator(mode="before") strips text so patterns see trimmed input
    - PinRequest rejects naming both categories; naming neither is left to the
      operation layer, which reports it as an unresolved senior
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from carebook.core.domain_types import RiskLevel
from carebook.core.person import Caregiver, Senior

NAME_PATTERN = r"^\w[\w .,'/@()-]*$"
PHONE_PATTERN = r"^\d{3,15}$"


def _parse_risk(v: object) -> object:
    if isinstance(v, str):
        return RiskLevel.parse(v)
    return v


class _PersonText(BaseModel):
    """Shared trimming for the free-text person fields."""

    @field_validator("name", "phone", "address", "note", mode="before", check_fields=False)
    @classmethod
    def strip_text(cls, v: object) -> object:
        return v.strip() if isinstance(v, str) else v


class SeniorCreate(_PersonText):
    """New senior; caregiver_id optional."""
    name: str = Field(min_length=1, max_length=100, pattern=NAME_PATTERN)
    phone: str = Field(pattern=PHONE_PATTERN)
    address: str = Field(min_length=1, max_length=200)
    risk: RiskLevel
    note: str = Field("", max_length=500)
    caregiver_id: int | None = Field(None, ge=1)

    @field_validator("risk", mode="before")
    @classmethod
    def parse_risk(cls, v: object) -> object:
        return _parse_risk(v)


class CaregiverCreate(_PersonText):
    """New caregiver; address and note optional."""
    name: str = Field(min_length=1, max_length=100, pattern=NAME_PATTERN)
    phone: str = Field(pattern=PHONE_PATTERN)
    address: str = Field("", max_length=200)
    note: str = Field("", max_length=500)


class SeniorUpdate(_PersonText):
    """Partial senior edit. Unset fields keep their value."""
    name: str | None = Field(None, min_length=1, max_length=100, pattern=NAME_PATTERN)
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    address: str | None = Field(None, min_length=1, max_length=200)
    note: str | None = Field(None, max_length=500)
    risk: RiskLevel | None = None
    caregiver_id: int | None = Field(None, ge=1)

    @field_validator("risk", mode="before")
    @classmethod
    def parse_risk(cls, v: object) -> object:
        return _parse_risk(v)

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


class CaregiverUpdate(_PersonText):
    """Partial caregiver edit. Unset fields keep their value."""
    name: str | None = Field(None, min_length=1, max_length=100, pattern=NAME_PATTERN)
    phone: str | None = Field(None, pattern=PHONE_PATTERN)
    address: str | None = Field(None, max_length=200)
    note: str | None = Field(None, max_length=500)

    def changes(self) -> dict:
        return self.model_dump(exclude_none=True)


# --- Relationship / pin / delete requests -------------------------------------

class AssignmentRequest(BaseModel):
    """Assign or unassign. Both ids required."""
    senior_id: int = Field(ge=1)
    caregiver_id: int = Field(ge=1)


class PinRequest(BaseModel):
    """Pin exactly one senior or one caregiver."""
    senior_id: int | None = Field(None, ge=1)
    caregiver_id: int | None = Field(None, ge=1)

    @model_validator(mode="after")
    def validate_single_target(self):
        if self.senior_id is not None and self.caregiver_id is not None:
            raise ValueError("pin accepts a senior or a caregiver, not both")
        return self


class DeleteRequest(BaseModel):
    """Delete a senior, a caregiver, or one of each."""
    senior_id: int | None = Field(None, ge=1)
    caregiver_id: int | None = Field(None, ge=1)


class CommandRequest(BaseModel):
    """Raw command text typed by the user."""
    command_text: str = Field(min_length=1, max_length=2_000)

    @field_validator("command_text")
    @classmethod
    def strip_command(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("command_text cannot be empty or whitespace")
        return v


# --- Responses ------------------------------------------------------------------

class CaregiverResponse(BaseModel):
    id: int
    name: str
    phone: str
    address: str
    note: str
    pinned: bool

    @classmethod
    def from_domain(cls, caregiver: Caregiver) -> "CaregiverResponse":
        d = caregiver.details
        return cls(
            id=caregiver.caregiver_id, name=d.name, phone=d.phone,
            address=d.address, note=d.note, pinned=d.pinned,
        )


class SeniorResponse(BaseModel):
    id: int
    name: str
    phone: str
    address: str
    note: str
    pinned: bool
    risk: RiskLevel
    risk_label: str
    caregiver: CaregiverResponse | None = None

    @classmethod
    def from_domain(cls, senior: Senior) -> "SeniorResponse":
        d = senior.details
        return cls(
            id=senior.senior_id, name=d.name, phone=d.phone,
            address=d.address, note=d.note, pinned=d.pinned,
            risk=senior.risk, risk_label=senior.risk.label,
            caregiver=(
                CaregiverResponse.from_domain(senior.caregiver)
                if senior.caregiver else None
            ),
        )

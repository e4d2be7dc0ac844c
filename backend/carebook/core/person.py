"""Person Values — immutable senior/caregiver records and the sameness relation.

Invariants:
    - Every value is frozen; edits produce a new value with the same identifier
    - Sameness (is_same_person) compares name + phone within one category only
    - Full equality (==) compares every field, identifiers and caregiver copy included
    - A Senior holds a value copy of its caregiver (or None), never a live reference

Design Decisions:
    - Tagged union over inheritance: Senior and Caregiver share a PersonDetails
      struct and carry a `category` tag; callers dispatch on the tag
    - dataclasses.replace for edits: identifier preserved by construction
"""

from dataclasses import dataclass, replace
from typing import ClassVar, Union

from carebook.core.domain_types import (
    CaregiverId, PersonCategory, RiskLevel, SeniorId,
)


@dataclass(frozen=True)
class PersonDetails:
    """Fields every person carries."""
    name: str
    phone: str
    address: str = ""
    note: str = ""
    pinned: bool = False


@dataclass(frozen=True)
class Caregiver:
    category: ClassVar[PersonCategory] = PersonCategory.CAREGIVER

    caregiver_id: CaregiverId
    details: PersonDetails

    @property
    def id(self) -> int:
        return self.caregiver_id

    @property
    def name(self) -> str:
        return self.details.name

    @property
    def phone(self) -> str:
        return self.details.phone

    @property
    def pinned(self) -> bool:
        return self.details.pinned


@dataclass(frozen=True)
class Senior:
    category: ClassVar[PersonCategory] = PersonCategory.SENIOR

    senior_id: SeniorId
    details: PersonDetails
    risk: RiskLevel
    caregiver: Caregiver | None = None

    @property
    def id(self) -> int:
        return self.senior_id

    @property
    def name(self) -> str:
        return self.details.name

    @property
    def phone(self) -> str:
        return self.details.phone

    @property
    def pinned(self) -> bool:
        return self.details.pinned

    @property
    def has_caregiver(self) -> bool:
        return self.caregiver is not None

    @property
    def caregiver_id(self) -> CaregiverId | None:
        return self.caregiver.caregiver_id if self.caregiver else None


Person = Union[Senior, Caregiver]


def is_same_person(a: Person | None, b: Person | None) -> bool:
    """Weaker notion of equality used for duplicate detection."""
    if a is None or b is None:
        return False
    if a is b:
        return True
    return (
        a.category == b.category
        and a.details.name == b.details.name
        and a.details.phone == b.details.phone
    )


# --- Edit helpers -------------------------------------------------------------

def with_details(person: Person, **changes: object) -> Person:
    """Copy of person with some PersonDetails fields replaced."""
    return replace(person, details=replace(person.details, **changes))


def with_pinned(person: Person, pinned: bool) -> Person:
    return with_details(person, pinned=pinned)


def with_caregiver(senior: Senior, caregiver: Caregiver | None) -> Senior:
    """Copy of senior pointing at caregiver (None clears the reference)."""
    return replace(senior, caregiver=caregiver)

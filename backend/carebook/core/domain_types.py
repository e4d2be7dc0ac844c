"""Domain Types — identifiers and enums shared across the store.

Invariants:
    - SeniorId and CaregiverId are positive ints, unique per category, never reused
    - RiskLevel canonical values are the two-letter codes HR / MR / LR
    - All valid states encoded as Enums, no raw string matching

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

import re
from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

SeniorId = NewType("SeniorId", int)
CaregiverId = NewType("CaregiverId", int)


# ─── Enums ───────────────────────────────────────────────────────

class PersonCategory(str, Enum):
    """Discriminator for the two person variants, also the persisted `role`."""
    SENIOR = "SENIOR"
    CAREGIVER = "CAREGIVER"


class RiskLevel(str, Enum):
    """Senior risk classification."""
    HIGH = "HR"
    MEDIUM = "MR"
    LOW = "LR"

    @property
    def label(self) -> str:
        return _RISK_LABELS[self]

    @classmethod
    def parse(cls, raw: str) -> "RiskLevel":
        """Accept `HR` / `High Risk` style input, case-insensitive.

        Raises ValueError for anything else.
        """
        key = re.sub(r"\s+", " ", raw.strip()).lower()
        try:
            return _RISK_ALIASES[key]
        except KeyError:
            raise ValueError(
                "Risk must be `High Risk` or `HR`, `Medium Risk` or `MR`, "
                "or `Low Risk` or `LR`."
            ) from None


_RISK_LABELS = {
    RiskLevel.HIGH: "High Risk",
    RiskLevel.MEDIUM: "Medium Risk",
    RiskLevel.LOW: "Low Risk",
}

_RISK_ALIASES = {
    "hr": RiskLevel.HIGH, "high risk": RiskLevel.HIGH,
    "mr": RiskLevel.MEDIUM, "medium risk": RiskLevel.MEDIUM,
    "lr": RiskLevel.LOW, "low risk": RiskLevel.LOW,
}


class UnpinScope(str, Enum):
    """Which categories an unpin request clears."""
    SENIORS = "seniors"
    CAREGIVERS = "caregivers"
    ALL = "all"

    def includes(self, category: PersonCategory) -> bool:
        if self == UnpinScope.ALL:
            return True
        if self == UnpinScope.SENIORS:
            return category == PersonCategory.SENIOR
        return category == PersonCategory.CAREGIVER

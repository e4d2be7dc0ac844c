"""Root conftest — shared test configuration and person/store fixtures."""

import os

import pytest

# Tests never seed sample data or write files unless a fixture asks for it
os.environ.setdefault("SEED_SAMPLE_DATA", "false")
os.environ.setdefault("AUTOSAVE", "false")
os.environ.setdefault("LOG_FORMAT", "text")

from carebook.core.care_store import CareStore  # noqa: E402
from carebook.core.domain_types import CaregiverId, RiskLevel, SeniorId  # noqa: E402
from carebook.core.person import Caregiver, PersonDetails, Senior  # noqa: E402
from carebook.core.sample_data import load_sample_data  # noqa: E402


@pytest.fixture
def store() -> CareStore:
    return CareStore()


@pytest.fixture
def sample_store() -> CareStore:
    """Store holding the four sample seniors and two sample caregivers."""
    store = CareStore()
    load_sample_data(store)
    return store


@pytest.fixture
def make_caregiver():
    """Factory: make_caregiver(id, name=..., phone=..., pinned=False)."""
    def _make(caregiver_id=1, name="Alice Ng", phone="81110000", **details):
        return Caregiver(
            CaregiverId(caregiver_id), PersonDetails(name, phone, **details),
        )
    return _make


@pytest.fixture
def make_senior():
    """Factory: make_senior(id, name=..., phone=..., risk=..., caregiver=None)."""
    def _make(
        senior_id=1, name="Tan Ah Beng", phone="92220000",
        risk=RiskLevel.HIGH, caregiver=None, address="Blk 1 Test Rd", **details,
    ):
        return Senior(
            SeniorId(senior_id), PersonDetails(name, phone, address, **details),
            risk, caregiver,
        )
    return _make

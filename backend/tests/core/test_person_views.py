"""Person Views & Formatting — tests for ordering, filtering, and summaries."""

from carebook.core.domain_types import RiskLevel
from carebook.core.person import with_details, with_pinned
from carebook.core.person_format import format_caregiver, format_person, format_senior
from carebook.core.person_views import (
    assigned_caregiver_name, assigned_senior_names, count_by_risk,
    filter_by_risk, order_for_display,
)
from carebook.core.sample_data import sample_caregivers, sample_seniors


def test_display_order_pinned_first_then_name(sample_store):
    senior = sample_store.senior_with_id(4)
    sample_store.set_senior(senior, with_pinned(senior, True))
    names = [s.name for s in order_for_display(sample_store.seniors)]
    assert names == ["Siti Nurhaliza", "Lim Ah Kow", "Mdm Tan", "Ong Siew Ling"]


def test_display_order_is_case_insensitive(make_caregiver):
    ordered = order_for_display([
        make_caregiver(1, name="bob", phone="1"),
        make_caregiver(2, name="Alice", phone="2"),
    ])
    assert [c.name for c in ordered] == ["Alice", "bob"]


def test_filter_by_risk_matches_any_level(sample_store):
    high = filter_by_risk(sample_store.seniors, [RiskLevel.HIGH])
    assert {s.name for s in high} == {"Lim Ah Kow", "Siti Nurhaliza"}
    mixed = filter_by_risk(sample_store.seniors, [RiskLevel.MEDIUM, RiskLevel.LOW])
    assert {s.name for s in mixed} == {"Mdm Tan", "Ong Siew Ling"}


def test_filter_with_no_levels_returns_all(sample_store):
    assert len(filter_by_risk(sample_store.seniors, [])) == 4


def test_assigned_senior_names(sample_store):
    assert assigned_senior_names(sample_store, sample_store.caregiver_with_id(2)) == [
        "Lim Ah Kow",
    ]


def test_assigned_caregiver_name(sample_store):
    assert assigned_caregiver_name(sample_store.senior_with_id(1)) == "Mei Hui"
    assert assigned_caregiver_name(sample_store.senior_with_id(2)) is None


def test_count_by_risk(sample_store):
    assert count_by_risk(sample_store.seniors) == {"HR": 2, "MR": 1, "LR": 1}


def test_format_senior_includes_caregiver(sample_store):
    text = format_senior(sample_store.senior_with_id(1))
    assert text.startswith("Lim Ah Kow; Risk: HR; Phone: 91234567")
    assert "Notes: Has dementia" in text
    assert text.endswith("Caregiver: Mei Hui")


def test_format_senior_omits_blank_note(sample_store):
    assert "Notes" not in format_senior(sample_store.senior_with_id(3))


def test_format_caregiver_omits_blank_address(make_caregiver):
    assert format_caregiver(make_caregiver(1)) == "Alice Ng; Phone: 81110000"


def test_format_person_dispatches_on_category(sample_store):
    caregiver = sample_store.caregiver_with_id(1)
    assert format_person(caregiver) == format_caregiver(caregiver)


def test_sample_data_links_by_value():
    caregivers = sample_caregivers()
    seniors = sample_seniors(caregivers)
    assert seniors[0].caregiver == caregivers[1]
    assert with_details(caregivers[1], note="x") != seniors[0].caregiver


def test_sample_store_sequences_continue_after_sample_ids(sample_store):
    assert sample_store.allocate_senior_id() == 5
    assert sample_store.allocate_caregiver_id() == 3

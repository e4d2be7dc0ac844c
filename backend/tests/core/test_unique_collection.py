"""Unique Person List — tests for duplicate rejection and value-located edits.

Tests cover:
    - add rejects same-person duplicates, keeps insertion order
    - replace locates by equality, rejects collisions with OTHER entries
    - remove / replace of an absent entry raises EntityNotFoundError
    - set_all rejects duplicated input and leaves contents unchanged
"""

import pytest

from carebook.core.errors import DuplicateEntityError, EntityNotFoundError
from carebook.core.person import with_details
from carebook.core.unique_collection import UniquePersonList


@pytest.fixture
def seniors(make_senior):
    coll = UniquePersonList("senior")
    coll.add(make_senior(1, name="Ann", phone="90000011"))
    coll.add(make_senior(2, name="Ben", phone="90000022"))
    return coll


def test_add_preserves_insertion_order(seniors, make_senior):
    seniors.add(make_senior(3, name="Abe", phone="90000033"))
    assert [s.name for s in seniors] == ["Ann", "Ben", "Abe"]
    assert len(seniors) == 3


def test_add_duplicate_raises(seniors, make_senior):
    with pytest.raises(DuplicateEntityError, match="This senior already exists."):
        seniors.add(make_senior(9, name="Ann", phone="90000011"))
    assert len(seniors) == 2


def test_contains_uses_sameness(seniors, make_senior):
    assert seniors.contains(make_senior(99, name="Ann", phone="90000011", note="x"))
    assert not seniors.contains(make_senior(1, name="Ann", phone="12345"))


def test_replace_keeps_position(seniors):
    ann = seniors.as_view()[0]
    seniors.replace(ann, with_details(ann, name="Anna"))
    assert [s.name for s in seniors] == ["Anna", "Ben"]


def test_replace_with_same_person_as_itself_is_allowed(seniors):
    ann = seniors.as_view()[0]
    seniors.replace(ann, with_details(ann, note="updated"))
    assert seniors.as_view()[0].details.note == "updated"


def test_replace_colliding_with_other_entry_raises(seniors):
    ann, ben = seniors.as_view()
    with pytest.raises(DuplicateEntityError):
        seniors.replace(ann, with_details(ann, name=ben.name, phone=ben.phone))
    assert seniors.as_view()[0] == ann


def test_replace_absent_target_raises(seniors, make_senior):
    with pytest.raises(EntityNotFoundError):
        seniors.replace(make_senior(5, name="Zed"), make_senior(5, name="Zed"))


def test_replace_locates_by_full_equality(seniors):
    ann = seniors.as_view()[0]
    stale = with_details(ann, note="stale copy")
    with pytest.raises(EntityNotFoundError):
        seniors.replace(stale, ann)


def test_remove(seniors):
    ann = seniors.as_view()[0]
    seniors.remove(ann)
    assert [s.name for s in seniors] == ["Ben"]


def test_remove_absent_raises(seniors, make_senior):
    with pytest.raises(EntityNotFoundError, match="senior to modify"):
        seniors.remove(make_senior(42, name="Nobody Here"))


def test_set_all_replaces_contents(seniors, make_senior):
    seniors.set_all([make_senior(7, name="Cat", phone="90000077")])
    assert [s.senior_id for s in seniors] == [7]


def test_set_all_rejects_duplicates_and_keeps_old_contents(seniors, make_senior):
    before = seniors.as_view()
    with pytest.raises(DuplicateEntityError):
        seniors.set_all([
            make_senior(7, name="Cat", phone="90000077"),
            make_senior(8, name="Cat", phone="90000077"),
        ])
    assert seniors.as_view() == before


def test_view_is_a_snapshot(seniors, make_senior):
    view = seniors.as_view()
    seniors.add(make_senior(3, name="Abe", phone="90000033"))
    assert len(view) == 2

"""
Tests for seating summaries, seat numbering and advisory capacity
"""

import pytest

from seatsync.schemas.seating import Guest, Seating, Table
from seatsync.services.seating_service import SeatingService
from seatsync.services.seating_store import SeatingStore

def guests(prefix, count, checked_in=0):
    return tuple(
        Guest(id=f"{prefix}{i}", name=f"{prefix}_Guest_{i}", is_checked_in=i <= checked_in)
        for i in range(1, count + 1)
    )

@pytest.fixture
def seating():
    """Head table full, table A1 over capacity, B1 half full, B2 empty"""
    return Seating(tables=(
        Table(id="main", category="Head Table", guests=guests("M", 12, checked_in=12)),
        Table(id="A1", category="Family", guests=guests("A", 11, checked_in=5)),
        Table(id="B1", category="Friends", guests=guests("B", 5, checked_in=3), note="Kids chair"),
        Table(id="B2", category="Colleagues"),
    ))

def test_table_capacity():
    """The head table seats 12, every other table 10"""
    assert SeatingService.table_capacity("main") == 12
    assert SeatingService.table_capacity("A1") == 10

def test_seating_summary(seating):
    summary = SeatingService.get_seating_summary(seating)

    assert summary["total_guests"] == 28
    assert summary["checked_in_guests"] == 20
    assert summary["total_tables"] == 4
    assert summary["over_capacity_tables"] == ["A1"]

    tables = {table["id"]: table for table in summary["tables"]}

    # Head table exactly full
    assert tables["main"]["available_seats"] == 0
    assert tables["main"]["over_capacity"] is False

    # A1 over capacity, still accepted
    assert tables["A1"]["total_guests"] == 11
    assert tables["A1"]["overflow"] == 1
    assert tables["A1"]["available_seats"] == 0

    assert tables["B1"]["available_seats"] == 5
    assert tables["B1"]["note"] == "Kids chair"
    assert tables["B2"]["total_guests"] == 0
    assert "guests" not in tables["B2"]

def test_table_summary_numbers_seats(seating):
    table = SeatingService.get_table_summary(seating.find_table("A1"))

    labels = [g["seat_label"] for g in table["guests"]]
    assert labels[0] == "Seat 1"
    assert labels[9] == "Seat 10"
    assert labels[10] == "Extra 11"
    assert [g["seat_no"] for g in table["guests"]] == list(range(1, 12))
    assert table["guests"][10]["is_extra_seat"] is True

def test_capacity_warning(seating):
    assert SeatingService.capacity_warning(seating, "B1") is None
    assert SeatingService.capacity_warning(seating, "main") is None
    assert SeatingService.capacity_warning(seating, "A1") == "Table A1 is over capacity: 11/10 (+1)"
    assert SeatingService.capacity_warning(seating, "missing") is None

    # Adding to the full head table only warns
    crowded = SeatingStore.add_guest(seating, "main", "Walk-in")
    assert len(crowded.find_table("main").guests) == 13
    assert "13/12" in SeatingService.capacity_warning(crowded, "main")

def test_plus_one_count(seating):
    seating = SeatingStore.add_plus_one(seating, "B1", "B1")
    seating = SeatingStore.add_plus_one(seating, "B1", "B1")

    table = seating.find_table("B1")
    assert SeatingService.plus_one_count(table, "B1") == 2
    assert SeatingService.plus_one_count(table, "B2") == 0

    summary = SeatingService.get_table_summary(table)
    assert summary["guests"][0]["plus_one_count"] == 2

def test_who_sits_with_whom(seating):
    info = SeatingService.get_guest_seating_info(seating, "A5")

    assert info is not None
    assert info.table_id == "A1"
    assert info.seat_no == 5
    assert info.checked_in is True
    assert len(info.table_mates) == 10

    names = [mate["name"] for mate in info.table_mates]
    assert "A_Guest_1" in names
    assert "A_Guest_5" not in names

    checked_in_mates = [mate for mate in info.table_mates if mate["checked_in"]]
    assert len(checked_in_mates) == 4

def test_guest_info_extra_seat_and_unknown(seating):
    assert SeatingService.get_guest_seating_info(seating, "A11").is_extra_seat is True
    assert SeatingService.get_guest_seating_info(seating, "nobody") is None

def test_table_options(seating):
    options = SeatingService.table_options(seating)

    assert [o.id for o in options] == ["main", "A1", "B1", "B2"]
    assert options[0].capacity == 12
    assert options[1].guest_count == 11

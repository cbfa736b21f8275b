from __future__ import annotations

import uuid
from datetime import date, timedelta

from autoscheduler.domain.value_objects.calendar import TimeOfDay
from autoscheduler.domain.value_objects.scheduling import AvailabilityRule, FixedBooking
from autoscheduler.services.scheduler.availability import AvailabilityResolver, free_intervals
from tests.conftest import MONDAY, FakeSchedulingStorage


def _resolver(storage: FakeSchedulingStorage | None = None) -> AvailabilityResolver:
    return AvailabilityResolver(
        storage or FakeSchedulingStorage(),
        min_slot_minutes=15,
        default_window_start="09:00",
        default_window_end="17:00",
        default_energy_level="medium",
    )


def _windows(slots) -> list[tuple[str, str]]:
    return [(slot.start_time, slot.end_time) for slot in slots]


def test_free_intervals_sweep():
    assert free_intervals(540, 1020, []) == [(540, 1020)]
    assert free_intervals(540, 1020, [(600, 660), (780, 790)]) == [(540, 600), (660, 780), (790, 1020)]


def test_free_intervals_tolerates_overlapping_and_unsorted_bookings():
    assert free_intervals(540, 1020, [(660, 690), (600, 720)]) == [(540, 600), (720, 1020)]


def test_free_intervals_ignores_bookings_outside_window():
    assert free_intervals(540, 720, [(840, 900)]) == [(540, 720)]
    assert free_intervals(540, 720, [(480, 540)]) == [(540, 720)]


def test_default_rule_when_no_rules_declared():
    slots = _resolver().slots_for_day(MONDAY, [], [])

    assert len(slots) == 1
    slot = slots[0]
    assert (slot.start_time, slot.end_time) == ("09:00", "17:00")
    assert slot.duration_minutes == 480
    assert slot.energy_level == "medium"
    assert slot.day_of_week == 1
    assert slot.time_of_day is TimeOfDay.MORNING


def test_bookings_are_excised_from_window():
    bookings = [FixedBooking("10:00", "11:00"), FixedBooking("13:00", "13:10")]
    slots = _resolver().slots_for_day(MONDAY, [], bookings)

    assert _windows(slots) == [("09:00", "10:00"), ("11:00", "13:00"), ("13:10", "17:00")]
    assert [slot.duration_minutes for slot in slots] == [60, 120, 230]
    assert slots[1].time_of_day is TimeOfDay.MORNING
    assert slots[2].time_of_day is TimeOfDay.AFTERNOON


def test_gaps_below_minimum_are_dropped():
    rule = AvailabilityRule(day_of_week=1, start_time="09:00", end_time="10:00")

    too_short = _resolver().slots_for_day(MONDAY, [rule], [FixedBooking("09:14", "10:00")])
    exactly_min = _resolver().slots_for_day(MONDAY, [rule], [FixedBooking("09:15", "10:00")])

    assert too_short == []
    assert _windows(exactly_min) == [("09:00", "09:15")]
    assert exactly_min[0].duration_minutes == 15


def test_booking_covering_the_window_yields_nothing():
    slots = _resolver().slots_for_day(MONDAY, [], [FixedBooking("08:00", "18:00")])
    assert slots == []


def test_booking_after_the_window_does_not_hide_it():
    morning = AvailabilityRule(day_of_week=1, start_time="09:00", end_time="12:00")
    slots = _resolver().slots_for_day(MONDAY, [morning], [FixedBooking("14:00", "15:00")])

    assert _windows(slots) == [("09:00", "12:00")]


def test_rules_for_same_day_are_resolved_independently():
    rules = [
        AvailabilityRule(day_of_week=1, start_time="09:00", end_time="12:00", energy_level="high"),
        AvailabilityRule(day_of_week=1, start_time="18:00", end_time="21:00", energy_level="low"),
        AvailabilityRule(day_of_week=2, start_time="07:00", end_time="08:00"),
    ]
    slots = _resolver().slots_for_day(MONDAY, rules, [FixedBooking("10:00", "11:00")])

    assert _windows(slots) == [("09:00", "10:00"), ("11:00", "12:00"), ("18:00", "21:00")]
    assert [slot.energy_level for slot in slots] == ["high", "high", "low"]
    assert slots[2].time_of_day is TimeOfDay.EVENING


async def test_resolve_walks_every_day_in_range():
    user_id = uuid.uuid4()
    tuesday = MONDAY + timedelta(days=1)
    storage = FakeSchedulingStorage(
        rules=[AvailabilityRule(day_of_week=1, start_time="06:00", end_time="08:00", energy_level="high")],
        bookings={tuesday: [FixedBooking("09:00", "17:00", booking_date=tuesday)]},
    )

    slots = await _resolver(storage).resolve_available_slots(user_id, MONDAY, date(2024, 1, 3))

    assert storage.booking_lookups == [MONDAY, tuesday, date(2024, 1, 3)]
    assert [(slot.date, slot.start_time, slot.end_time) for slot in slots] == [
        (MONDAY, "06:00", "08:00"),
        (date(2024, 1, 3), "09:00", "17:00"),
    ]
    assert slots[0].energy_level == "high"


async def test_resolve_single_day_range():
    slots = await _resolver().resolve_available_slots(uuid.uuid4(), MONDAY, MONDAY)
    assert len(slots) == 1
    assert slots[0].to_dict() == {
        "date": "2024-01-01",
        "start_time": "09:00",
        "end_time": "17:00",
        "duration_minutes": 480,
        "energy_level": "medium",
        "day_of_week": 1,
        "time_of_day": "morning",
    }


def test_fully_booked_day_has_no_slots():
    rule = AvailabilityRule(day_of_week=1, start_time="09:00", end_time="17:00")
    slots = _resolver().slots_for_day(MONDAY, [rule], [FixedBooking("09:00", "17:00")])
    assert slots == []

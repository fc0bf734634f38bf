from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from spp_forecast.domain.entities.time_series import Observation, SlotSource
from spp_forecast.domain.services.seasonal_forecast import (
    SLOTS_PER_DAY,
    build_seasonal_forecast,
    has_observed_slots,
    slot_index,
)
from tests.conftest import CHICAGO, constant_day, day_observations

# Tuesday
TARGET = date(2026, 2, 17)
TARGET_START = datetime(2026, 2, 17, tzinfo=CHICAGO)


def test_forecast_has_96_points_at_15_minute_spacing() -> None:
    points = build_seasonal_forecast(TARGET_START, [])

    assert len(points) == SLOTS_PER_DAY
    assert points[0].timestamp == TARGET_START
    for previous, current in zip(points, points[1:]):
        assert current.timestamp - previous.timestamp == timedelta(minutes=15)
    assert points[-1].timestamp == datetime(2026, 2, 17, 23, 45, tzinfo=CHICAGO)


def test_empty_history_is_all_zero() -> None:
    points = build_seasonal_forecast(TARGET_START, [])

    assert all(point.value == 0.0 for point in points)
    assert all(point.source is SlotSource.ZERO_FILL for point in points)
    assert has_observed_slots(points) is False


def test_slot_value_is_mean_of_same_weekday_history() -> None:
    history = []
    for weeks_back, value in ((1, 10.0), (2, 20.0), (3, 30.0), (4, 40.0)):
        history += constant_day(TARGET - timedelta(days=7 * weeks_back), value)

    points = build_seasonal_forecast(TARGET_START, history)

    assert all(point.value == pytest.approx(25.0) for point in points)
    assert all(point.source is SlotSource.OBSERVED for point in points)


def test_history_outside_lookback_window_is_ignored() -> None:
    history = constant_day(TARGET - timedelta(days=7), 10.0)
    history += constant_day(TARGET - timedelta(days=35), 1000.0)

    points = build_seasonal_forecast(TARGET_START, history, weeks_lookback=4)

    assert points[0].value == pytest.approx(10.0)


def test_history_on_other_weekdays_or_target_day_is_ignored() -> None:
    history = constant_day(TARGET - timedelta(days=7), 10.0)
    history += constant_day(TARGET - timedelta(days=1), 500.0)
    history += constant_day(TARGET, 900.0)

    points = build_seasonal_forecast(TARGET_START, history)

    assert all(point.value == pytest.approx(10.0) for point in points)


def test_one_week_lookback_uses_only_previous_week() -> None:
    history = constant_day(TARGET - timedelta(days=7), 8.0)
    history += constant_day(TARGET - timedelta(days=14), 80.0)

    points = build_seasonal_forecast(TARGET_START, history, weeks_lookback=1)

    assert points[10].value == pytest.approx(8.0)


def test_missing_slots_carry_previous_value_forward() -> None:
    compare_day = TARGET - timedelta(days=7)
    values = [float(slot) for slot in range(SLOTS_PER_DAY)]
    slots = [slot for slot in range(SLOTS_PER_DAY) if slot not in (6, 7, 8)]
    history = day_observations(
        compare_day, [values[slot] for slot in slots], slots=slots
    )

    points = build_seasonal_forecast(TARGET_START, history)

    assert [points[slot].value for slot in (6, 7, 8)] == [5.0, 5.0, 5.0]
    assert points[9].value == 9.0
    assert points[5].source is SlotSource.OBSERVED
    assert {points[slot].source for slot in (6, 7, 8)} == {SlotSource.CARRIED_FORWARD}


def test_leading_empty_slots_take_first_populated_value() -> None:
    compare_day = TARGET - timedelta(days=7)
    history = day_observations(compare_day, [42.0, 43.0], slots=[10, 11])

    points = build_seasonal_forecast(TARGET_START, history)

    assert [point.value for point in points[:10]] == [42.0] * 10
    assert points[10].value == 42.0
    assert points[11].value == 43.0
    assert points[95].value == 43.0
    assert points[0].source is SlotSource.CARRIED_FORWARD


def test_history_in_other_timezone_is_read_on_market_clock() -> None:
    # 06:00 UTC on a winter Tuesday is 00:00 in Chicago
    instant = datetime(2026, 2, 10, 6, 0, tzinfo=timezone.utc)
    history = [Observation(timestamp=instant, value=12.5)]

    points = build_seasonal_forecast(TARGET_START, history)

    assert points[0].value == 12.5
    assert points[0].source is SlotSource.OBSERVED
    assert points[1].source is SlotSource.CARRIED_FORWARD


def test_forecast_on_spring_forward_day_keeps_wall_clock_slots() -> None:
    # 2026-03-08 is the US spring-forward Sunday
    target_start = datetime(2026, 3, 8, tzinfo=CHICAGO)
    history = constant_day(date(2026, 3, 1), 5.0)

    points = build_seasonal_forecast(target_start, history)

    assert len(points) == SLOTS_PER_DAY
    assert points[8].timestamp.hour == 2
    assert points[8].timestamp.minute == 0
    assert [slot_index(point.timestamp) for point in points] == list(
        range(SLOTS_PER_DAY)
    )


def test_forecast_is_deterministic_and_ignores_history_order() -> None:
    history = []
    for weeks_back in range(1, 5):
        history += day_observations(
            TARGET - timedelta(days=7 * weeks_back),
            [float(weeks_back * slot) for slot in range(SLOTS_PER_DAY)],
        )

    first = build_seasonal_forecast(TARGET_START, history)
    second = build_seasonal_forecast(TARGET_START, list(reversed(history)))

    assert [p.value for p in first] == pytest.approx([p.value for p in second])
    assert first[4].value == pytest.approx(2.5 * 4)


@pytest.mark.parametrize("weeks_lookback", [0, -1])
def test_non_positive_lookback_is_rejected(weeks_lookback: int) -> None:
    with pytest.raises(ValueError):
        build_seasonal_forecast(TARGET_START, [], weeks_lookback=weeks_lookback)


def test_slot_index_uses_wall_clock() -> None:
    assert slot_index(datetime(2026, 2, 17, 0, 0, tzinfo=CHICAGO)) == 0
    assert slot_index(datetime(2026, 2, 17, 0, 14, tzinfo=CHICAGO)) == 0
    assert slot_index(datetime(2026, 2, 17, 13, 30, tzinfo=CHICAGO)) == 54
    assert slot_index(datetime(2026, 2, 17, 23, 45, tzinfo=CHICAGO)) == 95


def test_aware_history_with_naive_target_uses_history_wall_clock() -> None:
    history = [Observation(datetime(2026, 2, 10, 6, tzinfo=timezone.utc), 1.0)]

    points = build_seasonal_forecast(datetime(2026, 2, 17), history)

    assert len(points) == SLOTS_PER_DAY
    assert points[24].value == 1.0
    assert points[24].source is SlotSource.OBSERVED
    assert points[0].timestamp.tzinfo is None


def test_naive_history_with_aware_target_is_read_on_market_clock() -> None:
    history = [Observation(datetime(2026, 2, 10, 6, 15), 2.0)]

    points = build_seasonal_forecast(TARGET_START, history)

    assert points[25].value == 2.0
    assert points[25].source is SlotSource.OBSERVED
    assert points[0].value == 2.0

from datetime import date, time

from src.timeclock.timeclock.events.normalizer import normalize_all
from src.timeclock.timeclock.reconciliation.pairing import daily_worked, pair_days, pair_meals

MONDAY = date(2024, 1, 8)
TUESDAY = date(2024, 1, 9)


def test_full_day_with_meal(make_record):
    events = normalize_all(
        [
            make_record(1, MONDAY, "09:00", "Entrada"),
            make_record(1, MONDAY, "13:00", "Salida de comida"),
            make_record(1, MONDAY, "13:30", "Entrada de comida"),
            make_record(1, MONDAY, "18:00", "Salida"),
        ]
    )

    days = pair_days(events)
    worked = daily_worked(days)

    assert len(days) == 1
    assert days[0].meal_seconds == 1800
    assert worked[0].worked_seconds == 30600


def test_earliest_entrance_and_latest_exit_win(make_record):
    events = normalize_all(
        [
            make_record(1, MONDAY, "09:10", "Entrada"),
            make_record(1, MONDAY, "08:55", "Entrada"),
            make_record(1, MONDAY, "17:00", "Salida"),
            make_record(1, MONDAY, "18:05", "Salida"),
        ]
    )

    bounds = pair_days(events)[0].bounds

    assert bounds.entrance_time == time(8, 55)
    assert bounds.exit_time == time(18, 5)


def test_open_day_is_kept_but_not_worked(make_record):
    events = normalize_all(
        [
            make_record(1, MONDAY, "09:00", "Entrada"),
            make_record(1, TUESDAY, "09:00", "Entrada"),
            make_record(1, TUESDAY, "17:00", "Salida"),
        ]
    )

    days = pair_days(events)
    worked = daily_worked(days)

    assert [d.work_date for d in days] == [MONDAY, TUESDAY]
    assert [w.work_date for w in worked] == [TUESDAY]


def test_exit_before_entrance_is_not_complete(make_record):
    events = normalize_all(
        [
            make_record(1, MONDAY, "07:00", "Salida"),
            make_record(1, MONDAY, "09:00", "Entrada"),
        ]
    )

    assert daily_worked(pair_days(events)) == []


def test_unmatched_meal_out_counts_zero():
    meals = pair_meals([time(13, 0)], [])

    assert meals[0].meal_in_time is None
    assert meals[0].seconds == 0


def test_meal_in_before_meal_out_is_not_matched():
    meals = pair_meals([time(13, 0)], [time(12, 0)])

    assert meals[0].meal_in_time is None


def test_matched_meal_in_is_consumed():
    meals = pair_meals([time(12, 10), time(12, 0)], [time(12, 30)])

    assert meals[0].meal_out_time == time(12, 0)
    assert meals[0].meal_in_time == time(12, 30)
    assert meals[1].meal_in_time is None


def test_two_meals_pair_in_order():
    meals = pair_meals([time(12, 0), time(16, 0)], [time(16, 15), time(12, 30)])

    assert [m.seconds for m in meals] == [1800, 900]


def test_meal_longer_than_shift_floors_at_zero(make_record):
    events = normalize_all(
        [
            make_record(1, MONDAY, "09:00", "Entrada"),
            make_record(1, MONDAY, "08:00", "Salida de comida"),
            make_record(1, MONDAY, "20:00", "Entrada de comida"),
            make_record(1, MONDAY, "10:00", "Salida"),
        ]
    )

    assert daily_worked(pair_days(events))[0].worked_seconds == 0


def test_pairing_is_idempotent_and_order_independent(make_record):
    records = [
        make_record(2, TUESDAY, "18:00", "Salida"),
        make_record(1, MONDAY, "13:30", "Entrada de comida"),
        make_record(1, MONDAY, "09:00", "Entrada"),
        make_record(2, TUESDAY, "08:00", "Entrada"),
        make_record(1, MONDAY, "18:00", "Salida"),
        make_record(1, MONDAY, "13:00", "Salida de comida"),
    ]
    events = normalize_all(records)

    first = pair_days(events)
    again = pair_days(list(reversed(events)))

    assert first == again
    assert [(d.user_id, d.work_date) for d in first] == [(1, MONDAY), (2, TUESDAY)]


def test_unclassified_events_do_not_affect_bounds(make_record):
    events = normalize_all(
        [
            make_record(1, MONDAY, "09:00", "Entrada"),
            make_record(1, MONDAY, "11:00", "Capacitación"),
            make_record(1, MONDAY, "17:00", "Salida"),
        ]
    )

    assert daily_worked(pair_days(events))[0].worked_seconds == 8 * 3600

from datetime import date, time

from src.timeclock.timeclock.reconciliation.calculator.base import WorkedTimeCalculator
from src.timeclock.timeclock.reconciliation.calculator.standard_calculator import StandardWorkedTimeCalculator
from src.timeclock.timeclock.reconciliation.model import DayBounds, DayRecord, MealInterval
from src.timeclock.timeclock.reconciliation.pairing import daily_worked


def _day(entrance, exit_, meals=()):
    return DayRecord(
        bounds=DayBounds(user_id=1, work_date=date(2024, 1, 8), entrance_time=entrance, exit_time=exit_),
        meals=tuple(meals),
    )


def test_standard_calculator_subtracts_meals():
    day = _day(time(8, 0), time(17, 0), [MealInterval(time(12, 0), time(13, 0))])

    assert StandardWorkedTimeCalculator().worked_seconds(day) == 8 * 3600


def test_standard_calculator_skips_open_day():
    assert StandardWorkedTimeCalculator().worked_seconds(_day(time(8, 0), None)) is None


def test_zero_length_day_counts_as_zero():
    assert StandardWorkedTimeCalculator().worked_seconds(_day(time(8, 0), time(8, 0))) == 0


class RoundedToQuarterCalculator(WorkedTimeCalculator):
    def worked_seconds(self, day):
        seconds = StandardWorkedTimeCalculator().worked_seconds(day)
        return None if seconds is None else seconds - seconds % 900


def test_daily_worked_accepts_custom_calculator():
    day = _day(time(8, 0), time(16, 10))

    worked = daily_worked([day], RoundedToQuarterCalculator())

    assert worked[0].worked_seconds == 8 * 3600

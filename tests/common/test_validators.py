import pytest

from src.timeclock.timeclock.common.validators import clamp_int


@pytest.mark.parametrize(
    "value, expected",
    [(5, 5), ("7", 7), (0, 1), (-3, 1), (250, 100), (None, 20), ("abc", 20), (3.9, 3)],
)
def test_clamp_int(value, expected):
    assert clamp_int(value, low=1, high=100, default=20) == expected


def test_clamp_int_without_upper_bound():
    assert clamp_int(10**6, low=1, default=1) == 10**6

import pytest

from city_weather.utils.rounding import round_half_up


@pytest.mark.parametrize(
    "value,expected",
    [
        (16.5, 17),
        (17.5, 18),
        (2.4, 2),
        (-2.5, -2),
        (-3.6, -4),
        (0.0, 0),
    ],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected

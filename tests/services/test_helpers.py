"""Tests for shared service helpers."""

import math

import pytest

from cloverville.services._helpers import format_number


@pytest.mark.parametrize(
    ("value", "expected"),
    [(0, "0"), (5000, "5000"), (50.0, "50"), (12.5, "12.5"), (288.0, "288"), (-3, "-3")],
)
def test_format_number(value: float, expected: str) -> None:
    assert format_number(value) == expected


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (1e-05, "0.00001"),
        (1.5e-05, "0.000015"),
        (-2e-06, "-0.000002"),
        (0.0001, "0.0001"),
        (1e-07, "1e-7"),
        (2.5e-10, "2.5e-10"),
        (1e16, "10000000000000000"),
        (1e21, "1e+21"),
        (-0.0, "0"),
    ],
)
def test_format_number_magnitudes(value: float, expected: str) -> None:
    assert format_number(value) == expected


def test_format_number_non_finite() -> None:
    assert format_number(math.nan) == "NaN"
    assert format_number(math.inf) == "Infinity"
    assert format_number(-math.inf) == "-Infinity"

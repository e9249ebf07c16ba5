"""Tests for parsing and formatting display numbers."""

import math

import pytest

from keycalc.numfmt import float_pow, format_number, parse_float


# --- parse_float ---

@pytest.mark.parametrize("text, expected", [
    ("12", 12.0),
    ("-3.5", -3.5),
    (".5", 0.5),
    ("5.", 5.0),
    ("12abc", 12.0),
    ("-1e5", -100000.0),
    ("1e+21", 1e21),
    ("Infinity", math.inf),
    ("-Infinity", -math.inf),
])
def test_parse_float_reads_leading_number(text, expected):
    assert parse_float(text) == expected


@pytest.mark.parametrize("text", ["", "-", ".", "Error", "NaN", "abc"])
def test_parse_float_returns_none_without_number(text):
    assert parse_float(text) is None


# --- format_number ---

@pytest.mark.parametrize("value, expected", [
    (1024.0, "1024"),
    (-7.0, "-7"),
    (0.0, "0"),
    (-0.0, "0"),
    (2.5, "2.5"),
    (0.1 + 0.2, "0.30000000000000004"),
    (0.000015, "0.000015"),
    (0.000001, "0.000001"),
    (1.5e-7, "1.5e-7"),
    (1e16, "10000000000000000"),
    (1.2345678901234568e20, "123456789012345680000"),
    (1e21, "1e+21"),
    (-2.5e22, "-2.5e+22"),
    (math.inf, "Infinity"),
    (-math.inf, "-Infinity"),
    (math.nan, "NaN"),
])
def test_format_number(value, expected):
    assert format_number(value) == expected


# --- float_pow ---

def test_pow_integer_exponents():
    assert float_pow(2.0, 10.0) == 1024.0
    assert float_pow(-2.0, 3.0) == -8.0
    assert float_pow(0.0, 0.0) == 1.0


def test_pow_zero_to_negative_is_infinite():
    assert float_pow(0.0, -1.0) == math.inf


def test_pow_negative_base_fractional_exponent_is_nan():
    assert math.isnan(float_pow(-8.0, 0.5))


def test_pow_overflow_keeps_sign():
    assert float_pow(10.0, 400.0) == math.inf
    assert float_pow(-10.0, 401.0) == -math.inf

"""Tests for confmap.scalars."""

import numpy as np
import pytest

from confmap.errors import CoercionError
from confmap.scalars import (
    parse_boolean,
    parse_char,
    parse_double,
    parse_float,
    parse_integer,
    parse_long,
)


class TestParseBoolean:
    @pytest.mark.parametrize("raw", [True, "true", "T", "YES", "y", "on", "1", 1, 2.5])
    def test_truthy(self, raw):
        assert parse_boolean(raw) is True

    @pytest.mark.parametrize("raw", [False, "false", "F", "no", "N", "off", "0", 0, 0.0])
    def test_falsy(self, raw):
        assert parse_boolean(raw) is False

    def test_numpy_bool(self):
        assert parse_boolean(np.bool_(True)) is True

    def test_garbage(self):
        with pytest.raises(CoercionError):
            parse_boolean("maybe")


class TestParseInteger:
    def test_int(self):
        assert parse_integer(42) == 42

    def test_decimal_text(self):
        assert parse_integer(" -17 ") == -17

    def test_hex(self):
        assert parse_integer("0x1F") == 31
        assert parse_integer("#ff") == 255
        assert parse_integer("-0x10") == -16

    def test_binary(self):
        assert parse_integer("0b101") == 5

    def test_integral_float(self):
        assert parse_integer(3.0) == 3
        assert parse_integer("3.0") == 3

    def test_fractional_float(self):
        with pytest.raises(CoercionError):
            parse_integer(3.5)
        with pytest.raises(CoercionError):
            parse_integer("3.5")

    def test_not_a_number(self):
        with pytest.raises(CoercionError):
            parse_integer("abc")

    def test_bool_rejected(self):
        with pytest.raises(CoercionError):
            parse_integer(True)

    def test_int32_range(self):
        assert parse_integer(2**31 - 1) == 2**31 - 1
        with pytest.raises(CoercionError):
            parse_integer(2**31)

    def test_long_range(self):
        assert parse_long(2**40) == 2**40
        assert parse_long(str(-(2**63))) == -(2**63)
        with pytest.raises(CoercionError):
            parse_long(2**63)


class TestParseChar:
    def test_single_character(self):
        assert parse_char("a") == "a"

    def test_code_point(self):
        assert parse_char(65) == "A"

    def test_long_string(self):
        with pytest.raises(CoercionError):
            parse_char("ab")

    def test_outside_bmp(self):
        with pytest.raises(CoercionError):
            parse_char("\U0001F600")
        with pytest.raises(CoercionError):
            parse_char(0x10000)

    def test_other_type(self):
        with pytest.raises(CoercionError):
            parse_char(1.5)


class TestParseFloating:
    def test_double_text(self):
        assert parse_double("1e3") == 1000.0

    def test_double_int(self):
        assert parse_double(7) == 7.0

    def test_double_garbage(self):
        with pytest.raises(CoercionError):
            parse_double("abc")

    def test_double_bool_rejected(self):
        with pytest.raises(CoercionError):
            parse_double(False)

    def test_float_single_precision(self):
        assert parse_float(0.1) == float(np.float32(0.1))
        assert parse_float(0.1) != 0.1

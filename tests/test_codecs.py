"""Tests for property value parsers."""
import locale
from datetime import datetime, timezone

import pytest

from zfskit.core import codecs


class TestParseSize:
    """Human readable sizes use binary multiples for single letter units."""

    @pytest.mark.parametrize("value,expected", [
        ("239", 239),
        ("0", 0),
        ("42K", 42 * 1024),
        ("383M", 401604608),
        ("84G", 90194313216),
        ("483T", 483 * 1024 ** 4),
        ("1023P", 1023 * 1024 ** 5),
        ("42k", 42 * 1024),
        ("42 K", 42 * 1024),
        (" 42K ", 42 * 1024),
        ("42KiB", 42 * 1024),
    ])
    def test_valid_sizes(self, value, expected):
        assert codecs.parse_size(value) == expected

    def test_each_unit_is_a_power_of_1024(self):
        for power, unit in enumerate("KMGTP", start=1):
            for n in (1, 7, 512, 1023):
                assert codecs.parse_size(f"{n}{unit}") == n * 1024 ** power

    def test_fractional_sizes_use_decimal_units(self):
        assert codecs.parse_size("1.5G") == 1500000000

    @pytest.mark.parametrize("value", [
        "garbage", "", "-", "-5", "5X", "16E0",
        "5 garbage", "10 meters", "3 bananas", "7Gx", "2 kangaroos", "1.5 KiBs",
    ])
    def test_invalid_sizes(self, value):
        with pytest.raises(ValueError):
            codecs.parse_size(value)

    def test_overflow(self):
        with pytest.raises(ValueError):
            codecs.parse_size("16384P")


class TestParseUint64:

    def test_bounds(self):
        assert codecs.parse_uint64("0") == 0
        assert codecs.parse_uint64("18446744073709551615") == 2 ** 64 - 1

    @pytest.mark.parametrize("value", [
        "18446744073709551616", "-1", "+1", " 1", "1 ", "1_000", "1.0", "", "0x10",
    ])
    def test_rejects(self, value):
        with pytest.raises(ValueError):
            codecs.parse_uint64(value)


class TestParsePercentAndRatio:

    def test_percent(self):
        assert codecs.parse_percent("9%") == 9
        assert codecs.parse_percent("42") == 42

    @pytest.mark.parametrize("value", ["%", "9%%", "abc%", "-1%"])
    def test_invalid_percent(self, value):
        with pytest.raises(ValueError):
            codecs.parse_percent(value)

    @pytest.mark.parametrize("value,expected", [
        ("0.01", 0.01), ("0.01x", 0.01), ("1.00x", 1.0), ("18.47x", 18.47),
    ])
    def test_ratio(self, value, expected):
        assert codecs.parse_ratio(value) == pytest.approx(expected)

    @pytest.mark.parametrize("value", ["x", "", "abcx", " 1.0x", "1_0x"])
    def test_invalid_ratio(self, value):
        with pytest.raises(ValueError):
            codecs.parse_ratio(value)


class TestParseBool:

    @pytest.mark.parametrize("value", ["on", "On", "ON", "enabled", "Enabled", "ENABLED"])
    def test_true_spellings(self, value):
        assert codecs.parse_bool(value) is True

    @pytest.mark.parametrize("value", ["off", "disabled", "yes", "1", "true", "active", ""])
    def test_everything_else_is_false(self, value):
        assert codecs.parse_bool(value) is False


class TestParseTime:

    def test_epoch_seconds(self):
        assert codecs.parse_time("1651487819") == datetime(2022, 5, 2, 10, 36, 59, tzinfo=timezone.utc)

    def test_human_readable_layout(self):
        assert codecs.parse_time("Mon May  2 10:36 2022") == datetime(2022, 5, 2, 10, 36, tzinfo=timezone.utc)

    def test_two_digit_day(self):
        assert codecs.parse_time("Fri Dec 16 08:05 2022") == datetime(2022, 12, 16, 8, 5, tzinfo=timezone.utc)

    def test_names_are_english_regardless_of_locale(self):
        previous = locale.setlocale(locale.LC_TIME)
        try:
            locale.setlocale(locale.LC_TIME, "de_DE.UTF-8")
        except locale.Error:
            pytest.skip("de_DE.UTF-8 locale not installed")

        try:
            assert codecs.parse_time("Sun Oct 18 23:59 2026") == datetime(2026, 10, 18, 23, 59, tzinfo=timezone.utc)
            with pytest.raises(ValueError):
                codecs.parse_time("Mo Mai  2 10:36 2022")
        finally:
            locale.setlocale(locale.LC_TIME, previous)

    @pytest.mark.parametrize("value", ["Mon Foo  2 10:36 2022", "Xyz May  2 10:36 2022", "Mon Feb 30 10:36 2022"])
    def test_invalid_names_and_dates(self, value):
        with pytest.raises(ValueError):
            codecs.parse_time(value)

    def test_encodings_agree_to_the_minute(self):
        epoch = codecs.parse_time("1651487819")
        human = codecs.parse_time("Mon May  2 10:36 2022")

        assert epoch.replace(second=0) == human

    def test_result_is_utc(self):
        assert codecs.parse_time("0").tzinfo == timezone.utc

    @pytest.mark.parametrize("value", ["yesterday", "2022-05-02", "Mon May  2 2022", "99999999999999999999"])
    def test_invalid(self, value):
        with pytest.raises(ValueError):
            codecs.parse_time(value)

import pytest

from bwmeter.units import format_units, unit_atof, unit_atof_rate, unit_atoi


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0.5K", 1024.0 * 0.5),
        ("1K", 1024.0),
        ("1M", 1024.0 * 1024.0),
        ("4G", 4.0 * 1024.0 * 1024.0 * 1024.0),
        ("3T", 3.0 * 1024.0 * 1024.0 * 1024.0 * 1024.0),
        ("0.5k", 1024.0 * 0.5),
        ("1k", 1024.0),
        ("1m", 1024.0 * 1024.0),
        ("4g", 4.0 * 1024.0 * 1024.0 * 1024.0),
        ("3t", 3.0 * 1024.0 * 1024.0 * 1024.0 * 1024.0),
    ],
)
def test_unit_atof(text, expected):
    assert unit_atof(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("0.5K", int(1024 * 0.5)),
        ("1K", 1024),
        ("1M", 1024 * 1024),
        ("4G", int(4.0 * 1024 * 1024 * 1024)),
        ("3T", int(3.0 * 1024 * 1024 * 1024 * 1024)),
        ("0.5k", int(1024 * 0.5)),
        ("1k", 1024),
        ("1m", 1024 * 1024),
        ("4g", int(4.0 * 1024 * 1024 * 1024)),
        ("3t", int(3.0 * 1024 * 1024 * 1024 * 1024)),
    ],
)
def test_unit_atoi(text, expected):
    result = unit_atoi(text)
    assert result == expected
    assert isinstance(result, int)


def test_unit_atof_rate_uses_decimal_units():
    assert unit_atof_rate("1k") == 1000.0
    assert unit_atof_rate("1K") == unit_atof_rate("1k")
    assert unit_atof_rate("2M") == 2 * unit_atof_rate("1000k")


def test_rate_and_binary_agree_without_suffix():
    assert unit_atof("100") == 100.0
    assert unit_atof_rate("100") == unit_atof("100")


def test_unknown_suffix_is_ignored():
    assert unit_atof("5X") == 5.0
    assert unit_atof("  7k") == unit_atof("7k")


def test_atoi_truncates_atof():
    assert unit_atoi("1.7") == 1
    assert unit_atoi("1.5K") == int(unit_atof("1.5K"))


@pytest.mark.parametrize("text", ["", "abc", "K", "-"])
def test_invalid_number_raises(text):
    with pytest.raises(ValueError):
        unit_atof(text)
    with pytest.raises(ValueError):
        unit_atoi(text)


@pytest.mark.parametrize(
    "value, fmt, expected",
    [
        (1024.0, "A", "1.00 KByte"),
        (1024.0 * 1024.0, "A", "1.00 MByte"),
        (1000.0, "k", "8.00 Kbit"),
        (1000.0 * 1000.0, "a", "8.00 Mbit"),
        (4.0 * 1024 * 1024 * 1024, "A", "4.00 GByte"),
        (4.0 * 1024 * 1024 * 1024, "a", "34.4 Gbit"),
        (4.0 * 1024 * 1024 * 1024 * 1024, "A", "4.00 TByte"),
        (4.0 * 1024 * 1024 * 1024 * 1024, "a", "35.2 Tbit"),
        (4.0 * 1024 * 1024 * 1024 * 1024 * 1024, "A", "4096 TByte"),
        (4.0 * 1024 * 1024 * 1024 * 1024 * 1024, "a", "36029 Tbit"),
    ],
)
def test_format_units(value, fmt, expected):
    assert format_units(value, fmt) == expected


def test_format_units_fixed_unit_matches_adaptive_choice():
    assert format_units(1024.0, "K") == format_units(1024.0, "A")
    assert format_units(1000.0, "k") == format_units(1000.0, "a")


def test_format_units_rejects_bad_format():
    with pytest.raises(ValueError):
        format_units(1.0, "")
    with pytest.raises(ValueError):
        format_units(1.0, "KB")
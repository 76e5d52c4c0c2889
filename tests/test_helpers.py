import pytest

from aquablynk.helpers import atoll, dtostrf, lltoa, ulltoa


def test_dtostrf_rounds_up():
    assert dtostrf(1.999, 2) == "2.00"


def test_dtostrf_special_values():
    assert dtostrf(float("nan"), 2) == "nan"
    assert dtostrf(float("inf"), 2) == "inf"
    assert dtostrf(float("-inf"), 2) == "inf"
    assert dtostrf(5e9, 2) == "ovf"
    assert dtostrf(-5e9, 2) == "ovf"


def test_dtostrf_zero_precision_has_no_point():
    assert dtostrf(3.0, 0) == "3"


def test_dtostrf_negative():
    assert dtostrf(-1.5, 1) == "-1.5"


@pytest.mark.parametrize("value", [0.0, 0.5, 1.05, 1.25, 3.14159, 123.456, -7.875])
def test_dtostrf_close_to_value(value):
    text = dtostrf(value, 3)
    assert abs(float(text) - value) <= 0.0005 + 1e-9
    assert len(text.split(".")[1]) == 3


def test_dtostrf_negative_precision_raises():
    with pytest.raises(ValueError):
        dtostrf(1.0, -1)


def test_atoll_digits():
    assert atoll("12345") == 12345
    assert atoll("") == 0


def test_atoll_wraps_like_int64():
    assert atoll("9223372036854775808") == -(2**63)


@pytest.mark.parametrize("base", [2, 8, 10, 16])
@pytest.mark.parametrize("value", [0, 1, 7, 255, 123456789, -42, -(2**63)])
def test_lltoa_round_trip(value, base):
    assert int(lltoa(value, base), base) == value


def test_lltoa_lowercase_hex():
    text = lltoa(0xABCDEF, 16)
    assert text == text.lower()
    assert int(text, 16) == 0xABCDEF


def test_ulltoa_treats_negative_as_unsigned():
    assert int(ulltoa(-1, 16), 16) == 2**64 - 1
    assert ulltoa(0, 2) == "0"


@pytest.mark.parametrize("base", [0, 1, 17])
def test_invalid_base_raises(base):
    with pytest.raises(ValueError):
        lltoa(10, base)
    with pytest.raises(ValueError):
        ulltoa(10, base)
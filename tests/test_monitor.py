import math

import pytest

from aquablynk.monitor import (
    AirQuality,
    WaterQuality,
    absolute_humidity_mgm3,
    average_sgp30,
    classify_air,
    classify_water,
    humidity_q16,
    main,
    tds_from_analog,
    valid_dht_reading,
)


def test_absolute_humidity_zero_when_dry():
    assert absolute_humidity_mgm3(25.0, 0.0) == 0


def test_absolute_humidity_grows_with_humidity():
    low = absolute_humidity_mgm3(25.0, 30.0)
    high = absolute_humidity_mgm3(25.0, 60.0)
    assert high > low
    assert abs(high - 2 * low) <= 2


def test_absolute_humidity_grows_with_temperature():
    assert absolute_humidity_mgm3(30.0, 50.0) > absolute_humidity_mgm3(20.0, 50.0)


def test_humidity_q16_shifts_by_sixteen_bits():
    assert humidity_q16(1) == 65536


def test_humidity_q16_wraps_to_32_bits():
    assert humidity_q16(65536) == 0


@pytest.mark.parametrize(
    "temperature, humidity, expected",
    [
        (25.0, 50.0, True),
        (0.0, 50.0, False),
        (25.0, 0.0, False),
        (-3.0, 40.0, False),
        (math.nan, 50.0, False),
        (25.0, math.nan, False),
    ],
)
def test_valid_dht_reading(temperature, humidity, expected):
    assert valid_dht_reading(temperature, humidity) is expected


def test_tds_zero_readings():
    result = tds_from_analog([0] * 20, 25.0)
    assert result.voltage == 0.0
    assert result.tds == 0.0
    assert result.quality is WaterQuality.EXCELLENT


def test_tds_at_reference_temperature_is_half_ec():
    result = tds_from_analog([400] * 20, 25.0)
    assert result.compensated_ec == pytest.approx(result.ec)
    assert result.tds == pytest.approx(result.ec * 0.5)


def test_tds_compensation_lowers_value_when_warm():
    cool = tds_from_analog([400] * 20, 25.0)
    warm = tds_from_analog([400] * 20, 35.0)
    assert warm.tds < cool.tds
    assert warm.ec == pytest.approx(cool.ec)


def test_tds_uses_average_of_readings():
    mixed = tds_from_analog([300, 500], 25.0)
    flat = tds_from_analog([400, 400], 25.0)
    assert mixed.tds == pytest.approx(flat.tds)


def test_tds_needs_readings():
    with pytest.raises(ValueError):
        tds_from_analog([], 25.0)


@pytest.mark.parametrize(
    "tds, expected",
    [
        (0, WaterQuality.EXCELLENT),
        (299.9, WaterQuality.EXCELLENT),
        (300, WaterQuality.GOOD),
        (600, WaterQuality.FAIR),
        (900, WaterQuality.POOR),
        (1200, WaterQuality.UNACCEPTABLE),
    ],
)
def test_classify_water(tds, expected):
    assert classify_water(tds) is expected


@pytest.mark.parametrize(
    "eco2, expected",
    [
        (400, AirQuality.EXCELLENT),
        (600, AirQuality.GOOD),
        (800, AirQuality.FAIR),
        (1000, AirQuality.POOR),
        (1500, AirQuality.UNACCEPTABLE),
    ],
)
def test_classify_air(eco2, expected):
    assert classify_air(eco2) is expected


def test_quality_labels():
    assert classify_water(300).value == "BUENA"
    assert classify_air(600).value == "BUENO"
    assert classify_water(5000).value == "INACEPTABLE"


def test_average_identical_samples():
    assert average_sgp30([(500, 20), (500, 20)], (0, 0)) == (500, 20)


def test_average_skips_invalid_and_failed():
    samples = [(500, 20), (400, 50), (700, 5), None]
    assert average_sgp30(samples, (0, 0)) == (500, 20)


def test_average_falls_back_when_nothing_valid():
    assert average_sgp30([(400, 0), None], (410, 11)) == (410, 11)


def test_main_reports_clean_water_and_air(capsys):
    code = main(
        ["--temperature", "25", "--humidity", "50", "--analog", "0", "0",
         "--air", "450:20", "450:20"]
    )
    out = capsys.readouterr().out
    assert code == 0
    assert "Humedad abs:" in out
    assert "Calidad del Agua: EXCELENTE" in out
    assert "eCO2: 450 ppm | TVOC: 20 ppb" in out
    assert "Calidad del Aire: EXCELENTE" in out


def test_main_reports_bad_dht(capsys):
    main(["--temperature", "0", "--humidity", "50"])
    out = capsys.readouterr().out
    assert "Error al leer del sensor DHT tras reintento" in out
    assert "Calidad del Agua" not in out


def test_main_rejects_bad_air_sample():
    with pytest.raises(SystemExit):
        main(["--temperature", "25", "--humidity", "50", "--air", "bad"])
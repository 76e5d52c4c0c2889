"""Water and air quality monitoring: sensor conversions and classification."""

from __future__ import annotations

import argparse
import math
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, List, Optional, Sequence, Tuple

from aquablynk.helpers import dtostrf

VREF = 3.28
ADC_RES = 1024
TDS_FACTOR = 0.5
K_VALUE = 1.0
DEFAULT_TEMPERATURE = 25.0

# Virtual pins the readings are published on.
PIN_TEMPERATURE = 0
PIN_HUMIDITY = 1
PIN_TDS = 2
PIN_TERMINAL = 3
PIN_EC = 4
PIN_TVOC = 5
PIN_ECO2 = 6
PIN_ABS_HUMIDITY = 7


class WaterQuality(Enum):
    EXCELLENT = "EXCELENTE"
    GOOD = "BUENA"
    FAIR = "REGULAR"
    POOR = "POBRE"
    UNACCEPTABLE = "INACEPTABLE"


class AirQuality(Enum):
    EXCELLENT = "EXCELENTE"
    GOOD = "BUENO"
    FAIR = "REGULAR"
    POOR = "POBRE"
    UNACCEPTABLE = "INACEPTABLE"


@dataclass(frozen=True)
class TdsResult:
    """Conductivity and dissolved solids computed from probe readings."""

    voltage: float
    ec: float
    compensated_ec: float
    tds: float

    @property
    def quality(self) -> WaterQuality:
        return classify_water(self.tds)


def absolute_humidity_mgm3(temperature: float, humidity: float) -> int:
    """Absolute humidity in mg/m³ from temperature (°C) and relative humidity (%)."""
    abs_h = 216.7 * (
        (humidity / 100.0)
        * 6.112
        * math.exp((17.62 * temperature) / (243.12 + temperature))
        / (273.15 + temperature)
    )
    return int(abs_h * 1000.0) & 0xFFFFFFFF


def humidity_q16(abs_mgm3: int) -> int:
    """Humidity compensation value for the gas sensor, as a 32-bit Q16.16 word."""
    return (abs_mgm3 * 65536) & 0xFFFFFFFF


def valid_dht_reading(temperature: float, humidity: float) -> bool:
    """True when both values are numbers greater than zero."""
    return (
        not math.isnan(temperature)
        and not math.isnan(humidity)
        and temperature > 0.0
        and humidity > 0.0
    )


def tds_from_analog(readings: Sequence[int], temperature: float) -> TdsResult:
    """Average ADC readings and convert them to temperature-compensated TDS."""
    values = list(readings)
    if not values:
        raise ValueError("at least one reading is needed")
    avg_analog = sum(values) / len(values)
    voltage = avg_analog * (VREF / ADC_RES)
    ec = (
        133.42 * voltage**3 - 255.86 * voltage**2 + 857.39 * voltage
    ) * K_VALUE
    comp_coeff = 1.0 + 0.02 * (temperature - 25.0)
    comp_ec = ec / comp_coeff
    return TdsResult(
        voltage=voltage, ec=ec, compensated_ec=comp_ec, tds=comp_ec * TDS_FACTOR
    )


def classify_water(tds: float) -> WaterQuality:
    if tds < 300:
        return WaterQuality.EXCELLENT
    if tds < 600:
        return WaterQuality.GOOD
    if tds < 900:
        return WaterQuality.FAIR
    if tds < 1200:
        return WaterQuality.POOR
    return WaterQuality.UNACCEPTABLE


def classify_air(eco2: int) -> AirQuality:
    if eco2 < 600:
        return AirQuality.EXCELLENT
    if eco2 < 800:
        return AirQuality.GOOD
    if eco2 < 1000:
        return AirQuality.FAIR
    if eco2 < 1500:
        return AirQuality.POOR
    return AirQuality.UNACCEPTABLE


def average_sgp30(
    samples: Iterable[Optional[Tuple[int, int]]], fallback: Tuple[int, int]
) -> Tuple[int, int]:
    """Average (eCO2, TVOC) samples, keeping only eCO2 > 400 and TVOC > 10.

    A sample of None stands for a failed measurement. When no sample is
    valid, ``fallback`` is returned.
    """
    valid = [s for s in samples if s is not None and s[0] > 400 and s[1] > 10]
    if not valid:
        return fallback
    return (
        sum(s[0] for s in valid) // len(valid),
        sum(s[1] for s in valid) // len(valid),
    )


def _air_sample(text: str) -> Tuple[int, int]:
    try:
        eco2, tvoc = text.split(":")
        return int(eco2), int(tvoc)
    except ValueError:
        raise argparse.ArgumentTypeError(
            f"expected ECO2:TVOC, got {text!r}"
        ) from None


def _report(
    temperature: float,
    humidity: float,
    analog: List[int],
    air: List[Tuple[int, int]],
) -> List[str]:
    lines: List[str] = []
    if valid_dht_reading(temperature, humidity):
        abs_mgm3 = absolute_humidity_mgm3(temperature, humidity)
        lines.append(f"Humedad abs: {dtostrf(abs_mgm3 / 1000.0, 2)} g/m3")
    else:
        lines.append("Error al leer del sensor DHT tras reintento")
        temperature = DEFAULT_TEMPERATURE

    if analog:
        result = tds_from_analog(analog, temperature)
        lines.append(
            f"EC: {dtostrf(result.compensated_ec, 2)} µS/cm | "
            f"TDS: {dtostrf(result.tds, 0)} ppm"
        )
        lines.append(f"Calidad del Agua: {result.quality.value}")

    if air:
        eco2, tvoc = average_sgp30(air, air[-1])
        lines.append(f"eCO2: {eco2} ppm | TVOC: {tvoc} ppb")
        lines.append(f"Calidad del Aire: {classify_air(eco2).value}")
    return lines


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Print a water and air quality report for the given sensor readings."""
    parser = argparse.ArgumentParser(
        prog="aquablynk", description="Water and air quality report."
    )
    parser.add_argument("--temperature", type=float, required=True, help="°C")
    parser.add_argument("--humidity", type=float, required=True, help="% RH")
    parser.add_argument(
        "--analog", type=int, nargs="+", default=[], help="TDS probe ADC readings"
    )
    parser.add_argument(
        "--air",
        type=_air_sample,
        nargs="+",
        default=[],
        metavar="ECO2:TVOC",
        help="gas sensor samples",
    )
    args = parser.parse_args(argv)
    for line in _report(args.temperature, args.humidity, args.analog, args.air):
        print(line)
    return 0
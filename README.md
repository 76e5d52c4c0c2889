# aquablynk

Water and air quality calculations for small sensor stations, together
with a toolkit of pieces that such a station's software is built from:
interval timers, a ring buffer, calendar conversions, virtual pin
handlers, transports, firmware update checks and an NTP client.

## Modules

- `aquablynk.monitor` turns raw readings into results:
  - `absolute_humidity_mgm3(temperature, humidity)`: absolute humidity in
    mg/m³ from °C and % relative humidity.
  - `humidity_q16(abs_mgm3)`: the 32-bit Q16.16 humidity compensation word
    for an SGP30 gas sensor.
  - `valid_dht_reading(temperature, humidity)`: true when both values are
    numbers above zero.
  - `tds_from_analog(readings, temperature)`: averages TDS probe ADC
    readings and returns a `TdsResult` with voltage, conductivity,
    temperature-compensated conductivity, TDS and its `quality`.
  - `classify_water(tds)` and `classify_air(eco2)`: return `WaterQuality`
    and `AirQuality` members.
  - `average_sgp30(samples, fallback)`: averages (eCO2, TVOC) samples,
    keeping only those with eCO2 > 400 and TVOC > 10; `None` samples count
    as failed measurements.
- `aquablynk.timer.SimpleTimer`: up to 16 timers polled with `run()`,
  each running a fixed number of times or forever (`RUN_FOREVER`).
- `aquablynk.clock`: `Clock` (monotonic, real time) and `ManualClock`
  (moves only with `advance()` or `delay()`).
- `aquablynk.fifo.Fifo`: bounded FIFO holding up to `capacity - 1` items.
- `aquablynk.timeutils`: `gmtime()` and `mk_gmtime()` convert between
  epoch seconds and `BlynkTm` fields; `compute_sun()` estimates sunrise or
  sunset in minutes after UTC midnight, or `None` in polar day or night.
- `aquablynk.helpers`: `dtostrf`, `atoll`, `lltoa`, `ulltoa` format and
  parse numbers with fixed-width integer behaviour.
- `aquablynk.streams`: `MultiStream` writes to all attached streams and
  reads from the first with data; `NullStream` discards all writes.
- `aquablynk.handlers.HandlerRegistry`: decorators `on_read(pin)` and
  `on_write(pin)` map virtual pins (numbers or `InternalPin` members) to
  handlers; pin `None` registers a default for numbered pins.
- `aquablynk.transport`: `ClientTransport` over a socket-like client
  (falling back between ports 80 and 8080) and `StreamTransport` over a
  byte stream with a read timeout.
- `aquablynk.ota`: `OtaUpdater` accepts an update chunk by chunk, checks
  each chunk's CRC-32 and offset, verifies the whole image and then
  applies it through a storage object; failures raise `OtaError`.
  `NullStorage` stands for a device with no room for updates.
- `aquablynk.netutil`: `select_mac_address()` derives a MAC address from a
  token, and `ntp_get_time()` asks an NTP server for Unix time, raising
  `TimeoutError` when no reply comes.

## Installing

```
pip install .
```

With the test tools:

```
pip install ".[test]"
```

## Command line

```
aquablynk --temperature 24.5 --humidity 55 --analog 400 410 405 --air 650:40 700:45
```

prints the absolute humidity, conductivity and TDS with the water quality
class, and the averaged eCO2 and TVOC with the air quality class. Only
`--temperature` and `--humidity` are required; `aquablynk --help` lists
the options. When the temperature and humidity are not both above zero,
the report says so and uses 25 °C for the TDS compensation.

## Using it from Python

```python
from aquablynk.monitor import absolute_humidity_mgm3, tds_from_analog

abs_h = absolute_humidity_mgm3(25.0, 60.0)   # mg/m3
result = tds_from_analog([512] * 20, temperature=25.0)
print(result.tds, result.quality)
```

```python
from aquablynk.clock import ManualClock
from aquablynk.timer import SimpleTimer

clock = ManualClock(0)
timer = SimpleTimer(clock)
timer.setup_timer(1000, print, 3, "tick")
clock.advance(1000)
timer.run()   # prints "tick"
```

## What it does not do

The package does not read sensors or talk to any hardware: readings are
passed in as numbers. It has no client for a cloud service either — the
handler registry and transports do not frame, send or parse protocol
messages, so nothing here connects a station to a dashboard or publishes
its readings.

## Running the tests

```
pytest
```